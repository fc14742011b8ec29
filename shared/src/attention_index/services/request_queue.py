"""FIFO request queue that spaces out calls to a quota-limited API."""

from __future__ import annotations

import asyncio
import logging
import time
from collections import deque
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RateLimitedQueue:
    """Serializes submitted tasks with a minimum gap between dispatches.

    Tasks run one at a time in submission order. Before each dispatch the
    drain loop waits until ``min_interval`` seconds have passed since the
    previous dispatch. A failing task only fails its own ``submit`` call;
    the queue keeps draining. The backlog is unbounded.
    """

    def __init__(
        self,
        min_interval: float,
        *,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ) -> None:
        self._min_interval = max(0.0, min_interval)
        self._clock = clock
        self._sleep = sleep
        self._pending: deque[tuple[Callable[[], Awaitable[Any]], asyncio.Future]] = deque()
        self._draining = False
        self._last_dispatch: float | None = None
        self._drain_task: asyncio.Task | None = None

    @property
    def min_interval(self) -> float:
        return self._min_interval

    @property
    def pending(self) -> int:
        return len(self._pending)

    @property
    def draining(self) -> bool:
        return self._draining

    async def submit(self, task: Callable[[], Awaitable[T]]) -> T:
        """Queue ``task`` and wait for its result (or its exception)."""
        future: asyncio.Future = asyncio.get_running_loop().create_future()
        self._pending.append((task, future))
        if not self._draining:
            self._draining = True
            self._drain_task = asyncio.create_task(self._drain())
        return await future

    async def _drain(self) -> None:
        try:
            while self._pending:
                task, future = self._pending.popleft()
                if future.done():
                    # caller went away before dispatch
                    continue

                if self._last_dispatch is not None:
                    wait = self._min_interval - (self._clock() - self._last_dispatch)
                    if wait > 0:
                        logger.debug("Request queue waiting %.3fs before next dispatch", wait)
                        await self._sleep(wait)

                self._last_dispatch = self._clock()
                try:
                    result = await task()
                except Exception as exc:
                    if not future.done():
                        future.set_exception(exc)
                else:
                    if not future.done():
                        future.set_result(result)
        finally:
            self._draining = False
