"""
Queue item polling until Jenkins assigns a build number.

Reference: https://docs.cloudbees.com/docs/cloudbees-ci-kb/latest/client-and-managed-controllers/get-build-number-with-rest-api
"""

from __future__ import annotations

import asyncio
import time
from collections.abc import Callable
from typing import TYPE_CHECKING

from jenkins_trigger.core.exceptions import (
    JenkinsAPIError,
    JenkinsDecodeError,
    QueueItemNotExistsError,
    QueueTimeoutError,
)
from jenkins_trigger.core.logging import get_logger
from jenkins_trigger.models.queue import Executable, QueueItem

from .delay import ConstantDelay

if TYPE_CHECKING:
    from .client import JenkinsClient

logger = get_logger(__name__)


class QueueResolver:
    """
    Poll a queue item until it is promoted to a build.

    Without ``max_attempts`` or ``timeout`` the resolver polls until the item
    resolves, vanishes or the transport fails.
    """

    def __init__(
        self,
        client: JenkinsClient,
        delay: ConstantDelay | None = None,
        *,
        max_attempts: int | None = None,
        timeout: float | None = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        if max_attempts is not None and max_attempts < 1:
            raise ValueError(f"max_attempts must be at least 1: {max_attempts}")
        if timeout is not None and timeout <= 0:
            raise ValueError(f"timeout must be positive: {timeout}")
        self._client = client
        self._delay = delay or ConstantDelay()
        self._max_attempts = max_attempts
        self._timeout = timeout
        self._clock = clock

    def _exhausted(self, attempts: int, elapsed: float) -> bool:
        if self._max_attempts is not None and attempts >= self._max_attempts:
            return True
        return self._timeout is not None and elapsed >= self._timeout

    def _remaining(self, started: float) -> float | None:
        if self._timeout is None:
            return None
        return max(self._timeout - (self._clock() - started), 0.0)

    async def _poll(self, queue_url: str) -> QueueItem:
        await self._delay.wait()
        return await self._fetch(queue_url)

    async def _fetch(self, queue_url: str) -> QueueItem:
        response = await self._client.request("GET", queue_url)

        if response.is_client_error:
            logger.warning("Get %s: queue item gone, status=%s", queue_url, response.status_code)
            raise QueueItemNotExistsError(queue_url, response.status_code)
        if not response.is_success:
            logger.warning("Get %s: status=%s", queue_url, response.status_code)
            raise JenkinsAPIError(
                f"Queue item poll failed: http status {response.status_code}",
                status_code=response.status_code,
                url=queue_url,
            )

        try:
            payload = response.json()
        except ValueError as exc:
            raise JenkinsDecodeError("parse queue item payload as json", url=queue_url) from exc
        return QueueItem.from_dict(payload, source=queue_url)

    async def resolve(self, location: str) -> Executable:
        """
        Wait for the queue item at ``location`` to get a build number.

        Args:
            location: ``Location`` header of a ``build``/``buildWithParameters`` response

        Returns:
            The executable from the first poll that reports one

        Raises:
            QueueItemNotExistsError: If the queue item returns a 4xx status
            JenkinsNetworkError: If a poll fails at the transport level
            JenkinsAPIError: If a poll returns another non-success status
            JenkinsDecodeError: If a poll body is not a queue item document
            QueueTimeoutError: If a configured bound is reached first; the
                timeout also cuts short a delay or request still in flight
        """
        queue_url = f"{location}api/json"
        started = self._clock()
        attempts = 0

        while True:
            try:
                item = await asyncio.wait_for(self._poll(queue_url), self._remaining(started))
            except asyncio.TimeoutError:
                elapsed = self._clock() - started
                logger.warning("Get %s: no answer within %ss", queue_url, self._timeout)
                raise QueueTimeoutError(queue_url, attempts, elapsed) from None
            attempts += 1

            if item.is_resolved:
                logger.info(
                    "Get %s: build #%s at %s",
                    queue_url,
                    item.executable.number,
                    item.executable.url,
                )
                return item.executable

            logger.debug("Get %s: still queued (attempt %s), why=%s", queue_url, attempts, item.why)

            elapsed = self._clock() - started
            if self._exhausted(attempts, elapsed):
                logger.warning("Get %s: giving up after %s polls", queue_url, attempts)
                raise QueueTimeoutError(queue_url, attempts, elapsed)
