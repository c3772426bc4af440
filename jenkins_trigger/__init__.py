"""
Client for triggering parameterized Jenkins builds and resolving them to build numbers.
"""

from jenkins_trigger.core.exceptions import (
    JenkinsAPIError,
    JenkinsDecodeError,
    JenkinsError,
    JenkinsNetworkError,
    QueueItemNotExistsError,
    QueueTimeoutError,
)
from jenkins_trigger.models.queue import Executable, QueueItem
from jenkins_trigger.services.jenkins import ConstantDelay, JenkinsClient, QueueResolver

__all__ = [
    "ConstantDelay",
    "Executable",
    "JenkinsAPIError",
    "JenkinsClient",
    "JenkinsDecodeError",
    "JenkinsError",
    "JenkinsNetworkError",
    "QueueItem",
    "QueueItemNotExistsError",
    "QueueResolver",
    "QueueTimeoutError",
]
