"""Delayed callbacks for driver code: asyncio-backed, or a manual fake clock for tests."""

import asyncio
import heapq
import itertools
import math
from abc import ABC, abstractmethod
from typing import Any, Callable, List, Optional, Tuple

from topicwire.observability import get_logger


class Scheduler(ABC):
    """Runs callbacks after a delay (seconds)."""

    @abstractmethod
    def call_later(self, delay: float, callback: Callable[..., Any], *args: Any) -> None:
        pass

    @property
    @abstractmethod
    def pending(self) -> int:
        """Number of callbacks scheduled but not yet run."""


def _check_delay(delay: float) -> float:
    delay = float(delay)
    if not math.isfinite(delay) or delay < 0:
        raise ValueError(f"delay must be a finite number >= 0, got {delay}")
    return delay


class AsyncioScheduler(Scheduler):
    """Scheduler on an asyncio event loop; wait_idle() resolves once everything scheduled has run."""

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None) -> None:
        self._loop = loop
        self._pending = 0
        self._idle: Optional[asyncio.Event] = None
        self._logger = get_logger("topicwire.scheduling")

    def _get_loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop

    @property
    def pending(self) -> int:
        return self._pending

    def call_later(self, delay: float, callback: Callable[..., Any], *args: Any) -> None:
        delay = _check_delay(delay)
        self._pending += 1
        if self._idle is not None:
            self._idle.clear()
        self._get_loop().call_later(delay, self._run, callback, args)

    def _run(self, callback: Callable[..., Any], args: Tuple[Any, ...]) -> None:
        try:
            callback(*args)
        except Exception as e:
            self._logger.exception("callback_failed", extra={"error": str(e)})
        finally:
            self._pending -= 1
            if self._pending == 0 and self._idle is not None:
                self._idle.set()

    async def wait_idle(self) -> None:
        """Wait until no scheduled callbacks remain."""
        if self._idle is None:
            self._idle = asyncio.Event()
        if self._pending == 0:
            return
        self._idle.clear()
        await self._idle.wait()


class ManualScheduler(Scheduler):
    """Fake clock: nothing runs until advance() or run_all() moves time forward.

    A callback that raises is logged and the clock keeps going, as with AsyncioScheduler.
    """

    def __init__(self) -> None:
        self._logger = get_logger("topicwire.scheduling")
        self._now = 0.0
        self._seq = itertools.count()
        self._queue: List[Tuple[float, int, Callable[..., Any], Tuple[Any, ...]]] = []

    @property
    def now(self) -> float:
        return self._now

    @property
    def pending(self) -> int:
        return len(self._queue)

    def call_later(self, delay: float, callback: Callable[..., Any], *args: Any) -> None:
        due = self._now + _check_delay(delay)
        heapq.heappush(self._queue, (due, next(self._seq), callback, args))

    def advance(self, seconds: float) -> int:
        """Move the clock forward, running callbacks that fall due (earliest first, ties in scheduling order)."""
        target = self._now + _check_delay(seconds)
        ran = 0
        while self._queue and self._queue[0][0] <= target:
            due, _, callback, args = heapq.heappop(self._queue)
            self._now = due
            try:
                callback(*args)
            except Exception as e:
                self._logger.exception("callback_failed", extra={"error": str(e)})
            ran += 1
        self._now = target
        return ran

    def run_all(self) -> int:
        """Run every pending callback, including ones scheduled while running."""
        ran = 0
        while self._queue:
            ran += self.advance(self._queue[0][0] - self._now)
        return ran
