"""
Jenkins remote access API client.

Reference: https://wiki.jenkins.io/display/JENKINS/Remote+access+API
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import httpx

from jenkins_trigger.core.config import Settings
from jenkins_trigger.core.exceptions import JenkinsAPIError, JenkinsNetworkError
from jenkins_trigger.core.logging import get_logger
from jenkins_trigger.models.queue import Executable

from .delay import DEFAULT_POLL_INTERVAL, ConstantDelay
from .resolver import QueueResolver

logger = get_logger(__name__)


class JenkinsClient:
    """
    Client for triggering parameterized builds on a Jenkins server.

    One ``httpx.AsyncClient`` carrying the basic-auth credentials is shared by
    every request, so a single instance can serve concurrent
    trigger/resolve sequences.
    """

    def __init__(
        self,
        url: str,
        user: str,
        password: str,
        *,
        connect_timeout: float = 3.0,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
        poll_max_attempts: int | None = None,
        poll_timeout: float | None = None,
        delay: ConstantDelay | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Args:
            url: Jenkins base URL
            user: User name for basic auth
            password: Password or API token of the user
            connect_timeout: Transport connect timeout in seconds
            poll_interval: Seconds to wait before each queue poll
            poll_max_attempts: Give up after this many polls (unbounded if None)
            poll_timeout: Give up after this many seconds (unbounded if None)
            delay: Delay strategy, overrides ``poll_interval``
            transport: httpx transport, for tests
        """
        self._url = url.rstrip("/")
        self._user = user
        self._http = httpx.AsyncClient(
            auth=httpx.BasicAuth(user, password),
            timeout=httpx.Timeout(None, connect=connect_timeout),
            transport=transport,
        )
        self._resolver = QueueResolver(
            self,
            delay or ConstantDelay(poll_interval),
            max_attempts=poll_max_attempts,
            timeout=poll_timeout,
        )

    @classmethod
    def from_settings(cls, settings: Settings, **kwargs: Any) -> "JenkinsClient":
        """Create a client from loaded settings."""
        options: dict[str, Any] = {
            "connect_timeout": settings.connect_timeout,
            "poll_interval": settings.poll_interval,
            "poll_max_attempts": settings.poll_max_attempts,
            "poll_timeout": settings.poll_timeout,
        }
        options.update(kwargs)
        return cls(settings.jenkins_url, settings.jenkins_user, settings.jenkins_token, **options)

    @property
    def url(self) -> str:
        return self._url

    @property
    def user(self) -> str:
        return self._user

    async def aclose(self) -> None:
        await self._http.aclose()

    async def __aenter__(self) -> "JenkinsClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        """
        Send an authenticated request.

        Raises:
            JenkinsNetworkError: If no response was received
        """
        try:
            return await self._http.request(method, url, **kwargs)
        except httpx.RequestError as exc:
            logger.error("%s %s: err=%r", method, url, exc)
            raise JenkinsNetworkError(f"Network error: {method} {url}: {exc}", url) from exc

    async def trigger(self, job: str, params: Mapping[str, str]) -> str:
        """
        Start a parameterized build.

        Not idempotent: every successful call queues a new build, so callers
        must not retry it blindly.

        Args:
            job: Job name
            params: Build parameters, sent form-encoded

        Returns:
            Queue item URL from the ``Location`` response header, unmodified

        Raises:
            JenkinsAPIError: If the status is not 2xx or no location is returned
            JenkinsNetworkError: If the request fails at the transport level
        """
        if not job:
            raise ValueError("job name must not be empty")

        url = f"{self._url}/job/{job}/buildWithParameters"
        response = await self.request("POST", url, data=dict(params))

        if not response.is_success:
            logger.warning("buildWithParameters - job=%s, status=%s", job, response.status_code)
            raise JenkinsAPIError(
                f"API error: buildWithParameters job={job}: http status {response.status_code}",
                status_code=response.status_code,
                url=url,
            )

        location = response.headers.get("location")
        if not location:
            logger.warning("buildWithParameters - job=%s: no location header", job)
            raise JenkinsAPIError(
                f"API error: buildWithParameters job={job}: location header not available",
                status_code=response.status_code,
                url=url,
            )

        logger.info("buildWithParameters - job=%s, status=%s, location=%s", job, response.status_code, location)
        return location

    async def resolve(self, location: str) -> Executable:
        """Poll the queue item at ``location`` until it has a build number."""
        return await self._resolver.resolve(location)

    async def build_with_parameters(self, job: str, params: Mapping[str, str]) -> Executable:
        """
        Trigger a build and wait for its build number.

        Reference: https://wiki.jenkins.io/display/JENKINS/Parameterized-Build.html
        """
        location = await self.trigger(job, params)
        return await self.resolve(location)
