"""Arcade Snake: toroidal snake game engine."""

from arcade_snake.difficulty import DEFAULT_LEVELS, DifficultyLevel, DifficultyTable
from arcade_snake.engine import GameEngine, GamePhase, Snapshot
from arcade_snake.events import EventKind, GameEvent
from arcade_snake.grid import GRID_SIZE, Grid
from arcade_snake.obstacles import obstacles_for
from arcade_snake.snake import Direction, Snake

__all__ = [
    "DEFAULT_LEVELS",
    "GRID_SIZE",
    "DifficultyLevel",
    "DifficultyTable",
    "Direction",
    "EventKind",
    "GameEngine",
    "GameEvent",
    "GamePhase",
    "Grid",
    "Snake",
    "Snapshot",
    "obstacles_for",
]
