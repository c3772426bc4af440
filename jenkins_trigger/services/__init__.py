# Services module - external API integrations
from .jenkins import JenkinsClient

__all__ = ["JenkinsClient"]
