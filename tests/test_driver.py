"""Tests for the asyncio tick driver."""

from __future__ import annotations

import asyncio

import pytest

from arcade_snake.difficulty import DifficultyLevel, DifficultyTable
from arcade_snake.driver import TickDriver
from arcade_snake.engine import GameEngine, GamePhase
from arcade_snake.events import EventKind
from arcade_snake.timers import AsyncioScheduler

FAST_LEVELS = DifficultyTable([DifficultyLevel(1, "Fast", "Test", 10)])


@pytest.fixture()
def fast_engine():
    return GameEngine(levels=FAST_LEVELS, seed=0, scheduler=AsyncioScheduler())


class TestTickOnce:
    @pytest.mark.asyncio
    async def test_no_tick_while_idle(self, fast_engine):
        driver = TickDriver(fast_engine)
        assert await driver.tick_once() is None
        assert fast_engine.tick == 0

    @pytest.mark.asyncio
    async def test_callback_receives_snapshot_and_events(self, fast_engine):
        received = []

        async def on_tick(snapshot, events):
            received.append((snapshot, events))

        driver = TickDriver(fast_engine, on_tick=on_tick)
        fast_engine.start()
        snap = await driver.tick_once()
        assert snap is not None and snap.tick == 1
        assert len(received) == 1
        assert received[0][0] == snap
        assert [e.kind for e in received[0][1]] == [EventKind.GAME_STARTED]

        await driver.tick_once()
        assert received[1][1] == []


class TestTickLoop:
    @pytest.mark.asyncio
    async def test_loop_steps_running_game(self, fast_engine):
        driver = TickDriver(fast_engine)
        fast_engine.start()
        driver.start()
        assert driver.running
        await asyncio.sleep(0.15)
        await driver.stop()
        assert not driver.running
        assert fast_engine.tick >= 2
        assert fast_engine.phase is GamePhase.RUNNING

    @pytest.mark.asyncio
    async def test_loop_idles_until_started(self, fast_engine):
        driver = TickDriver(fast_engine)
        driver.start()
        await asyncio.sleep(0.05)
        assert fast_engine.tick == 0
        fast_engine.start()
        await asyncio.sleep(0.08)
        await driver.stop()
        assert fast_engine.tick >= 1

    @pytest.mark.asyncio
    async def test_paused_game_does_not_tick(self, fast_engine):
        driver = TickDriver(fast_engine)
        fast_engine.start()
        fast_engine.pause()
        driver.start()
        await asyncio.sleep(0.05)
        await driver.stop()
        assert fast_engine.tick == 0

    @pytest.mark.asyncio
    async def test_start_is_idempotent_and_stop_safe(self, fast_engine):
        driver = TickDriver(fast_engine)
        first = driver.start()
        assert driver.start() is first
        await driver.stop()
        await driver.stop()
        assert first.done()


SLOW_BASE_LEVELS = DifficultyTable([DifficultyLevel(1, "Slow", "Test", 600)])


class TestAcceleratedLoop:
    @pytest.mark.asyncio
    async def test_grant_mid_sleep_shortens_current_wait(self):
        engine = GameEngine(
            levels=SLOW_BASE_LEVELS, seed=0, scheduler=AsyncioScheduler(),
        )
        driver = TickDriver(engine)
        engine.start()
        driver.start()
        await asyncio.sleep(0.01)

        engine.request_direction("up", accelerate=True)
        assert engine.tick_interval_ms == 200
        await asyncio.sleep(0.29)
        assert engine.tick >= 1

        # The burst is over; the loop is back on the 600 ms base interval.
        await asyncio.sleep(0.2)
        await driver.stop()
        assert not engine.is_accelerating
        assert engine.tick == 1

    @pytest.mark.asyncio
    async def test_engine_wakes_driver_on_interval_change(self, fast_engine):
        driver = TickDriver(fast_engine)
        fast_engine.start()
        fast_engine.request_direction("up", accelerate=True)
        assert fast_engine.is_accelerating
        assert driver._interval_changed.is_set()
        fast_engine.pause()
        assert not fast_engine.is_accelerating
