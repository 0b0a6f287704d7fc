"""
Pacing policies for spacing out consecutive completion calls.
"""
import asyncio
from typing import Awaitable, Callable

Sleep = Callable[[float], Awaitable[None]]


class FixedIntervalPacer:
    """Waits a fixed interval each time it is asked to."""

    def __init__(self, interval_seconds: float = 0.5, sleep: Sleep = asyncio.sleep):
        if interval_seconds < 0:
            raise ValueError("interval_seconds must not be negative")
        self.interval_seconds = interval_seconds
        self._sleep = sleep

    async def wait(self) -> None:
        if self.interval_seconds > 0:
            await self._sleep(self.interval_seconds)


class NoopPacer:
    """Never waits."""

    interval_seconds = 0.0

    async def wait(self) -> None:
        return None
