import asyncio
import time
from typing import Awaitable, Callable, Optional


class RateLimiter:
    """Leaky bucket with a single slot: at most one acquire per `interval` seconds.

    Callers queue on an asyncio lock, so slots are granted strictly one after
    another. `clock` and `sleep` are injectable so the policy can be tested
    without real waiting.
    """

    def __init__(
        self,
        interval: float,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        if interval < 0:
            raise ValueError("interval must be non-negative")
        self.interval = interval
        self._clock = clock
        self._sleep = sleep
        self._next_slot: Optional[float] = None
        self._lock = asyncio.Lock()

    async def acquire(self) -> float:
        """Wait for the next free slot. Returns the seconds spent waiting."""
        async with self._lock:
            now = self._clock()
            waited = 0.0
            if self._next_slot is not None and now < self._next_slot:
                waited = self._next_slot - now
                await self._sleep(waited)
                now = max(self._clock(), self._next_slot)
            self._next_slot = now + self.interval
            return waited
