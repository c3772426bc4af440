# Jenkins services - build trigger and queue polling
from .client import JenkinsClient
from .delay import ConstantDelay
from .resolver import QueueResolver

__all__ = ["ConstantDelay", "JenkinsClient", "QueueResolver"]
