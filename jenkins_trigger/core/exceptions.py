"""
Errors raised while triggering builds and polling the build queue.
"""


class JenkinsError(Exception):
    """Base exception for Jenkins client errors."""
    pass


class JenkinsAPIError(JenkinsError):
    """Server responded but broke the expected contract."""

    def __init__(self, message: str, status_code: int | None = None, url: str | None = None):
        super().__init__(message)
        self.status_code = status_code
        self.url = url


class JenkinsDecodeError(JenkinsAPIError):
    """Response body is not the expected JSON document."""

    def __init__(self, message: str, url: str | None = None):
        super().__init__(message, url=url)


class QueueItemNotExistsError(JenkinsError):
    """Queue item is gone: already running, finished, cancelled or never existed."""

    def __init__(self, url: str, status_code: int):
        super().__init__(
            f"Queue item not exists, maybe already running or finished: {url} (http status: {status_code})"
        )
        self.url = url
        self.status_code = status_code


class JenkinsNetworkError(JenkinsError):
    """Transport failed before a response was received.

    The underlying ``httpx`` error is chained as ``__cause__``.
    """

    def __init__(self, message: str, url: str):
        super().__init__(message)
        self.url = url


class QueueTimeoutError(JenkinsError):
    """Queue item was still waiting when the polling bound was reached."""

    def __init__(self, url: str, attempts: int, elapsed: float):
        super().__init__(
            f"Queue item {url} not resolved after {attempts} polls ({elapsed:.1f}s)"
        )
        self.url = url
        self.attempts = attempts
        self.elapsed = elapsed
