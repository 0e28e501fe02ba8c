"""Asyncio tick loop driving a :class:`GameEngine`."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable

from arcade_snake.engine import GameEngine, GamePhase, Snapshot
from arcade_snake.events import GameEvent

logger = logging.getLogger(__name__)

TickCallback = Callable[[Snapshot, list[GameEvent]], Awaitable[None]]


class TickDriver:
    """Calls :meth:`GameEngine.step` at the engine's current interval.

    The engine signals interval changes, such as an acceleration burst
    starting or ending. The current wait is then dropped and a fresh one
    starts at the new interval. Nothing is stepped unless the game
    is running. ``lock`` serializes ticks with input handlers that share
    the engine.
    """

    def __init__(
        self,
        engine: GameEngine,
        on_tick: TickCallback | None = None,
        lock: asyncio.Lock | None = None,
    ) -> None:
        self.engine = engine
        self.lock = lock if lock is not None else asyncio.Lock()
        self._on_tick = on_tick
        self._task: asyncio.Task | None = None
        self._interval_changed = asyncio.Event()
        engine.on_interval_change = self._interval_changed.set

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> asyncio.Task:
        """Spawn the tick loop on the running event loop."""
        if self.running:
            assert self._task is not None  # noqa: S101
            return self._task
        self._task = asyncio.create_task(self._run())
        return self._task

    async def stop(self) -> None:
        """Cancel the tick loop and wait for it to exit."""
        task, self._task = self._task, None
        if task is None or task.done():
            return
        task.cancel()
        await asyncio.gather(task, return_exceptions=True)

    async def tick_once(self) -> Snapshot | None:
        """Run a single tick if the game is running.

        Returns the new snapshot, or ``None`` when no tick happened.
        """
        async with self.lock:
            if self.engine.phase is not GamePhase.RUNNING:
                return None
            snapshot = self.engine.step()
            events = self.engine.drain_events()
        if self._on_tick is not None:
            await self._on_tick(snapshot, events)
        return snapshot

    async def _run(self) -> None:
        try:
            while True:
                self._interval_changed.clear()
                interval = self.engine.tick_interval_ms / 1000.0
                try:
                    await asyncio.wait_for(
                        self._interval_changed.wait(), timeout=interval,
                    )
                except asyncio.TimeoutError:
                    await self.tick_once()
        except asyncio.CancelledError:
            logger.debug("Tick loop cancelled.")
            raise
        except Exception:
            logger.exception("Tick loop stopped on error.")
