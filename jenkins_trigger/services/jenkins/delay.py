"""
Fixed-interval delay between queue polls.
"""

import asyncio
from collections.abc import Awaitable, Callable

DEFAULT_POLL_INTERVAL = 3.0

Sleep = Callable[[float], Awaitable[None]]


class ConstantDelay:
    """Suspend for the same interval before every poll. No backoff, no jitter."""

    def __init__(self, interval: float = DEFAULT_POLL_INTERVAL, sleep: Sleep | None = None):
        if interval < 0:
            raise ValueError(f"interval must not be negative: {interval}")
        self.interval = interval
        self._sleep = sleep or asyncio.sleep

    async def wait(self) -> None:
        await self._sleep(self.interval)

    def __repr__(self) -> str:
        return f"ConstantDelay(interval={self.interval})"
