"""Start-to-start pacing shared across a batch run."""

import asyncio
import time
from typing import Awaitable, Callable, Optional


class RateLimiter:
    """Spaces ``acquire`` calls at least ``interval`` seconds apart.

    ``drain`` waits out the slot reserved by the last ``acquire`` so a run of
    N items takes at least N * interval seconds. The lock makes the limiter
    safe to share between concurrent workers.
    """

    def __init__(
        self,
        interval: float,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        if interval < 0:
            raise ValueError("interval must be >= 0")
        self.interval = interval
        self._clock = clock
        self._sleep = sleep
        self._lock = asyncio.Lock()
        self._next_at: Optional[float] = None

    async def _wait_for_slot(self) -> float:
        now = self._clock()
        if self._next_at is not None and now < self._next_at:
            await self._sleep(self._next_at - now)
            now = self._clock()
        return now

    async def acquire(self) -> None:
        async with self._lock:
            now = await self._wait_for_slot()
            self._next_at = now + self.interval

    async def drain(self) -> None:
        async with self._lock:
            await self._wait_for_slot()
