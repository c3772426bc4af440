"""
Data model for Jenkins queue items.
"""

from dataclasses import dataclass
from typing import Any

from jenkins_trigger.core.exceptions import JenkinsDecodeError


@dataclass(frozen=True)
class Executable:
    """A build the queue item was promoted to."""

    number: int
    url: str

    @classmethod
    def from_dict(cls, payload: Any, source: str | None = None) -> "Executable":
        """Build from the ``executable`` object of a queue item."""
        if not isinstance(payload, dict):
            raise JenkinsDecodeError("executable is not an object", url=source)

        number = payload.get("number")
        url = payload.get("url")
        # bool is an int subclass
        if not isinstance(number, int) or isinstance(number, bool):
            raise JenkinsDecodeError(f"executable.number is not an integer: {number!r}", url=source)
        if not isinstance(url, str):
            raise JenkinsDecodeError(f"executable.url is not a string: {url!r}", url=source)
        return cls(number=number, url=url)


@dataclass(frozen=True)
class QueueItem:
    """Snapshot of a queued build, as returned by ``{location}api/json``."""

    why: str | None = None
    executable: Executable | None = None

    @property
    def is_resolved(self) -> bool:
        return self.executable is not None

    @classmethod
    def from_dict(cls, payload: Any, source: str | None = None) -> "QueueItem":
        """
        Parse a queue item JSON document.

        Missing ``why`` or ``executable`` keys are treated as null.

        Raises:
            JenkinsDecodeError: If the payload does not have the expected shape
        """
        if not isinstance(payload, dict):
            raise JenkinsDecodeError("queue item payload is not an object", url=source)

        why = payload.get("why")
        if why is not None and not isinstance(why, str):
            raise JenkinsDecodeError(f"why is not a string: {why!r}", url=source)

        raw_executable = payload.get("executable")
        executable = None
        if raw_executable is not None:
            executable = Executable.from_dict(raw_executable, source=source)

        return cls(why=why, executable=executable)
