"""Shared fixtures for engine and server tests."""

from __future__ import annotations

import pytest

from arcade_snake.difficulty import DifficultyLevel, DifficultyTable
from arcade_snake.engine import GameEngine
from arcade_snake.snake import Direction, Snake
from arcade_snake.timers import ManualScheduler

# Long enough that the tick loop never fires during a request/response test.
SLOW_LEVELS = DifficultyTable([
    DifficultyLevel(1, "Steve the Snake", "Easy", 60_000),
    DifficultyLevel(2, "Ssssamantha", "Medium", 60_000),
    DifficultyLevel(3, "Simon Sssays", "Hard", 60_000),
])


@pytest.fixture()
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture()
def engine(scheduler: ManualScheduler) -> GameEngine:
    return GameEngine(seed=0, scheduler=scheduler)


def arrange(
    engine: GameEngine,
    cells: list[tuple[int, int]],
    direction: Direction,
    food: tuple[int, int] | None = None,
) -> None:
    """Put the engine into a known running position."""
    engine.snake = Snake(cells)
    engine.direction = direction
    if food is not None:
        engine.food = food
    engine.start()
    engine.drain_events()
