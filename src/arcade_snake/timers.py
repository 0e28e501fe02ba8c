"""Cancellable one-shot timers for the engine.

The engine never sleeps itself. It asks a :class:`Scheduler` to call it
back later and keeps the returned handle so it can cancel the callback.
:class:`AsyncioScheduler` runs on the event loop; :class:`ManualScheduler`
keeps virtual time for headless runs and tests.
"""

from __future__ import annotations

import asyncio
import heapq
import itertools
from collections.abc import Callable
from typing import Protocol


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    def call_later(
        self, delay: float, callback: Callable[[], None],
    ) -> TimerHandle: ...


class AsyncioScheduler:
    """Schedules callbacks on the running asyncio event loop."""

    def call_later(
        self, delay: float, callback: Callable[[], None],
    ) -> asyncio.TimerHandle:
        return asyncio.get_running_loop().call_later(delay, callback)


class ManualTimer:
    """Handle returned by :class:`ManualScheduler`."""

    __slots__ = ("when", "callback", "cancelled")

    def __init__(self, when: float, callback: Callable[[], None]) -> None:
        self.when = when
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """Virtual-time scheduler advanced explicitly by the caller."""

    def __init__(self) -> None:
        self.now = 0.0
        self._queue: list[tuple[float, int, ManualTimer]] = []
        self._counter = itertools.count()

    def call_later(
        self, delay: float, callback: Callable[[], None],
    ) -> ManualTimer:
        timer = ManualTimer(self.now + delay, callback)
        heapq.heappush(self._queue, (timer.when, next(self._counter), timer))
        return timer

    @property
    def pending(self) -> int:
        """Number of scheduled, not yet cancelled callbacks."""
        return sum(1 for _, _, t in self._queue if not t.cancelled)

    def advance(self, seconds: float) -> int:
        """Move virtual time forward, firing due callbacks in order.

        Returns the number of callbacks fired.
        """
        target = self.now + seconds
        fired = 0
        while self._queue and self._queue[0][0] <= target:
            when, _, timer = heapq.heappop(self._queue)
            self.now = when
            if timer.cancelled:
                continue
            timer.callback()
            fired += 1
        self.now = target
        return fired
