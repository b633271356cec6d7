"""
Admission-controlled work queues for the two downstream APIs.

Each queue is an owned object with the lifetime of one sync run.
"""

import asyncio
import logging
import time
from collections import deque
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Awaitable, Callable, Deque, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class WorkQueue:
    """
    Base queue: runs submitted coroutine functions once admitted and
    tracks outstanding work so callers can wait for it to drain.
    """

    def __init__(self, name: str):
        self.name = name
        self._pending = 0
        self._idle = asyncio.Event()
        self._idle.set()

    @property
    def pending(self) -> int:
        """Submitted units that have not completed yet (queued or running)."""
        return self._pending

    @asynccontextmanager
    async def _admit(self) -> AsyncIterator[None]:
        yield

    async def add(
        self,
        func: Callable[..., Awaitable[T]],
        *args: Any,
        **kwargs: Any,
    ) -> T:
        """Submit a unit of work and wait for its result."""
        self._pending += 1
        self._idle.clear()
        try:
            async with self._admit():
                return await func(*args, **kwargs)
        finally:
            self._pending -= 1
            if self._pending == 0:
                self._idle.set()

    async def on_idle(self) -> None:
        """Wait until no work is queued or in flight."""
        await self._idle.wait()


class SlidingWindowQueue(WorkQueue):
    """
    At most max_calls admissions in any rolling window of period seconds.
    Callers beyond the quota wait in submission order.
    """

    def __init__(
        self,
        max_calls: int,
        period: float,
        name: str = "sliding-window",
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ):
        if max_calls < 1:
            raise ValueError("max_calls must be at least 1")
        if period <= 0:
            raise ValueError("period must be positive")
        super().__init__(name)
        self.max_calls = max_calls
        self.period = period
        self._clock = clock
        self._sleep = sleep
        self._admissions: Deque[float] = deque()
        self._lock = asyncio.Lock()

    async def acquire(self) -> None:
        """Wait for a free slot in the window and claim it."""
        async with self._lock:
            while True:
                now = self._clock()
                while self._admissions and now - self._admissions[0] >= self.period:
                    self._admissions.popleft()

                if len(self._admissions) < self.max_calls:
                    self._admissions.append(now)
                    return

                wait_time = self.period - (now - self._admissions[0])
                logger.debug(f"{self.name}: window full, waiting {wait_time:.1f}s")
                await self._sleep(wait_time)

    @asynccontextmanager
    async def _admit(self) -> AsyncIterator[None]:
        await self.acquire()
        yield


class ConcurrencyQueue(WorkQueue):
    """At most `concurrency` units in flight at once."""

    def __init__(self, concurrency: int, name: str = "concurrency"):
        if concurrency < 1:
            raise ValueError("concurrency must be at least 1")
        super().__init__(name)
        self.concurrency = concurrency
        self._semaphore = asyncio.Semaphore(concurrency)

    @asynccontextmanager
    async def _admit(self) -> AsyncIterator[None]:
        async with self._semaphore:
            yield
