"""Client-side throttle for provider calls.

The public name-statistics services enforce daily and burst quotas; the
three lookups for one record run concurrently, so the throttle hands out
start slots instead of serializing whole requests.

Example:
    >>> import asyncio
    >>> from personspine.http import RateLimiter
    >>> limiter = RateLimiter(rate=10.0)  # at most 10 request starts per second
    >>> asyncio.run(limiter.acquire())  # the first caller starts immediately
    0.0
"""

from __future__ import annotations

import asyncio
import time


class RateLimiter:
    """Slot-reserving rate limiter.

    Each ``acquire`` reserves the next free start time, ``1 / rate`` seconds
    after the previous one, and sleeps until it. Reservation happens under
    a lock; the sleep does not, so waiting callers do not block each other
    from taking later slots.

    Attributes:
        rate: Maximum request starts per second
        min_interval: Seconds between consecutive starts
    """

    def __init__(self, rate: float = 10.0):
        if rate <= 0:
            raise ValueError("rate must be positive")
        self.rate = rate
        self.min_interval = 1.0 / rate
        self._next_slot: float | None = None
        self._lock = asyncio.Lock()

    async def _reserve(self) -> float:
        async with self._lock:
            now = time.monotonic()
            slot = now if self._next_slot is None else max(now, self._next_slot)
            self._next_slot = slot + self.min_interval
            return slot - now

    async def acquire(self) -> float:
        """Wait for this caller's slot.

        Returns:
            Seconds waited
        """
        delay = await self._reserve()
        if delay > 0:
            await asyncio.sleep(delay)
        return delay
