"""
commute_planner.engine.throttle

Bounded worker pool with a minimum interval between calls on each worker.

Responsibilities:
- Cap the number of concurrent service calls at `pool_size`.
- Space successive calls issued by the same worker by at least `min_interval` seconds,
  so N workers give at most N calls per interval instead of an unthrottled burst.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import TypeVar

T = TypeVar("T")


@dataclass(slots=True)
class _Worker:
    index: int
    next_start: float = 0.0


class CallThrottle:
    def __init__(self, *, pool_size: int, min_interval: float) -> None:
        if pool_size < 1:
            raise ValueError("pool_size must be >= 1")
        if min_interval < 0:
            raise ValueError("min_interval must be >= 0")
        self.pool_size = pool_size
        self.min_interval = min_interval
        self._idle: asyncio.Queue[_Worker] = asyncio.Queue()
        for i in range(pool_size):
            self._idle.put_nowait(_Worker(index=i))

    async def run(self, fn: Callable[[], Awaitable[T]]) -> T:
        """
        Run `fn` on the next free worker once that worker's interval has elapsed.
        """

        worker = await self._idle.get()
        try:
            loop = asyncio.get_running_loop()
            wait = worker.next_start - loop.time()
            if wait > 0:
                await asyncio.sleep(wait)
            worker.next_start = loop.time() + self.min_interval
            return await fn()
        finally:
            self._idle.put_nowait(worker)


# --- Module Notes -----------------------------------------------------------
# One throttle is shared by every recompute generation, so overlapping runs draw from the
# same rate budget rather than each getting their own.
