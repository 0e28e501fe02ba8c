"""Tests for scheduler implementations."""

import asyncio

import pytest

from arcade_snake.timers import AsyncioScheduler, ManualScheduler


class TestManualScheduler:
    def test_fires_when_due(self):
        sched = ManualScheduler()
        fired = []
        sched.call_later(0.3, lambda: fired.append("a"))
        assert sched.advance(0.2) == 0
        assert fired == []
        assert sched.advance(0.1) == 1
        assert fired == ["a"]

    def test_fires_in_order(self):
        sched = ManualScheduler()
        fired = []
        sched.call_later(0.5, lambda: fired.append("late"))
        sched.call_later(0.1, lambda: fired.append("early"))
        sched.advance(1.0)
        assert fired == ["early", "late"]

    def test_cancel(self):
        sched = ManualScheduler()
        fired = []
        handle = sched.call_later(0.1, lambda: fired.append(1))
        assert sched.pending == 1
        handle.cancel()
        assert sched.pending == 0
        assert sched.advance(1.0) == 0
        assert fired == []


class TestAsyncioScheduler:
    @pytest.mark.asyncio
    async def test_fires_on_loop(self):
        fired = asyncio.Event()
        AsyncioScheduler().call_later(0.01, fired.set)
        await asyncio.wait_for(fired.wait(), timeout=1.0)

    @pytest.mark.asyncio
    async def test_cancel(self):
        fired = []
        handle = AsyncioScheduler().call_later(0.01, lambda: fired.append(1))
        handle.cancel()
        await asyncio.sleep(0.05)
        assert fired == []
