"""Tick-driven game engine composing grid, snake, food and obstacles."""

from __future__ import annotations

import enum
import logging
from collections.abc import Callable
from dataclasses import dataclass

import numpy as np

from arcade_snake.difficulty import (
    ACCELERATION_WINDOW_MS,
    DEFAULT_LEVELS,
    DifficultyTable,
)
from arcade_snake.events import EventKind, GameEvent
from arcade_snake.food import FoodSpawner
from arcade_snake.grid import Cell, Grid
from arcade_snake.obstacles import obstacles_for
from arcade_snake.snake import Direction, Snake, is_valid_turn
from arcade_snake.timers import ManualScheduler, Scheduler, TimerHandle

logger = logging.getLogger(__name__)

INITIAL_SNAKE: tuple[Cell, ...] = ((12, 12),)
INITIAL_FOOD: Cell = (18, 18)
INITIAL_DIRECTION = Direction.UP
FOOD_POINTS = 10


class GamePhase(str, enum.Enum):
    """Coarse lifecycle of a single game."""

    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    OVER = "over"


@dataclass(frozen=True)
class Snapshot:
    """Read-only view of the engine state between ticks."""

    snake: tuple[Cell, ...]
    food: Cell
    obstacles: frozenset[Cell]
    score: int
    phase: GamePhase
    is_new_record: bool
    session_best: dict[int, int]
    is_accelerating: bool
    difficulty: int
    direction: Direction
    tick_interval_ms: int
    tick: int
    grid_size: int

    @property
    def head(self) -> Cell:
        return self.snake[0]

    def to_dict(self) -> dict:
        """Serialize to JSON-compatible types."""
        cells = Grid(self.grid_size).paint(self.snake, self.food, self.obstacles)
        return {
            "tick": self.tick,
            "phase": self.phase.value,
            "score": self.score,
            "difficulty": self.difficulty,
            "is_new_record": self.is_new_record,
            "session_best": {str(k): v for k, v in self.session_best.items()},
            "is_accelerating": self.is_accelerating,
            "tick_interval_ms": self.tick_interval_ms,
            "direction": self.direction.name.lower(),
            "snake": [list(c) for c in self.snake],
            "food": list(self.food),
            "obstacles": sorted(list(c) for c in self.obstacles),
            "grid": {"size": self.grid_size, "cells": cells.tolist()},
        }


class GameEngine:
    """Single-player snake engine on a wrap-around grid.

    Input methods only validate and buffer a direction; all movement
    happens in :meth:`step`, which the tick driver calls at
    :attr:`tick_interval_ms`. At most one direction is pending at a time
    and the latest valid request wins.

    Every public method is safe to call in any phase. Requests that do
    not apply to the current phase are ignored.
    """

    def __init__(
        self,
        difficulty: int = 1,
        levels: DifficultyTable = DEFAULT_LEVELS,
        seed: int | None = None,
        scheduler: Scheduler | None = None,
    ) -> None:
        if difficulty not in levels:
            raise ValueError(f"Unknown difficulty level {difficulty}.")
        self.levels = levels
        self.grid = Grid()
        self.rng = np.random.default_rng(seed)
        self.food_spawner = FoodSpawner(self.grid, rng=self.rng)
        self.scheduler: Scheduler = (
            scheduler if scheduler is not None else ManualScheduler()
        )

        # Best scores outlive individual games.
        self.session_best: dict[int, int] = {level: 0 for level in levels}
        self.difficulty = difficulty
        self.obstacles = obstacles_for(difficulty, self.grid.size)

        self.is_accelerating = False
        self._accel_timer: TimerHandle | None = None
        # Called whenever tick_interval_ms may have changed.
        self.on_interval_change: Callable[[], None] | None = None
        self._events: list[GameEvent] = []
        self._new_game()

    def _new_game(self) -> None:
        self.snake = Snake(INITIAL_SNAKE)
        self.food = INITIAL_FOOD
        self.direction = INITIAL_DIRECTION
        self._pending: Direction | None = None
        self.score = 0
        self.is_new_record = False
        self.phase = GamePhase.IDLE
        self.tick = 0

    # ------------------------------------------------------------------
    # Inputs
    # ------------------------------------------------------------------

    def request_direction(self, candidate: object, accelerate: bool = False) -> None:
        """Buffer a direction change, or try to accelerate.

        The first direction input starts an idle or paused game. A
        repeat of the current heading with *accelerate* set asks for a
        speed burst instead of a turn.
        """
        direction = Direction.parse(candidate)
        if direction is None:
            logger.debug("Ignoring malformed direction %r.", candidate)
            return
        if self.phase is GamePhase.OVER:
            return

        was_running = self.phase is GamePhase.RUNNING
        if not was_running:
            self._set_running()

        queued = self._pending
        if (
            accelerate
            and was_running
            and direction in (self.direction, queued)
            and self._try_accelerate(direction)
        ):
            return

        if direction is not self.direction:
            self._cancel_acceleration()

        reference = queued if queued is not None else self.direction
        if is_valid_turn(direction, reference):
            self._pending = direction

    def start(self) -> None:
        """Resume or begin play; ignored once the game is over."""
        if self.phase in (GamePhase.IDLE, GamePhase.PAUSED):
            self._set_running()

    def pause(self) -> None:
        if self.phase is not GamePhase.RUNNING:
            return
        self.phase = GamePhase.PAUSED
        self._cancel_acceleration()
        self._emit(EventKind.GAME_PAUSED)

    def toggle_running(self) -> None:
        """Start/pause button: a finished game is reset and restarted."""
        if self.phase is GamePhase.OVER:
            self.reset()
            self._set_running()
        elif self.phase is GamePhase.RUNNING:
            self.pause()
        else:
            self._set_running()

    def reset(self) -> None:
        """Return to a fresh idle game, keeping session bests."""
        self._cancel_acceleration()
        self._new_game()
        self._events.clear()

    def set_difficulty(self, level: int) -> None:
        """Switch level, rebuild obstacles and reset the game."""
        if level not in self.levels:
            logger.warning("Ignoring unknown difficulty level %r.", level)
            return
        self.difficulty = level
        self.obstacles = obstacles_for(level, self.grid.size)
        self.reset()
        self._interval_changed()
        logger.info(
            "Difficulty set to %d (%s).", level, self.levels[level].subtitle,
        )

    # ------------------------------------------------------------------
    # Tick
    # ------------------------------------------------------------------

    @property
    def tick_interval_ms(self) -> int:
        """Interval until the next tick, including any acceleration."""
        level = self.levels[self.difficulty]
        if self.is_accelerating:
            return level.accelerated_interval_ms
        return level.interval_ms

    def step(self) -> Snapshot:
        """Advance the game by one tick and return the new snapshot.

        Collisions end the game with the snake left as it was before
        the fatal move.
        """
        if self.phase is not GamePhase.RUNNING:
            return self.snapshot()

        pending, self._pending = self._pending, None
        if pending is not None and is_valid_turn(pending, self.direction):
            self.direction = pending

        new_head = self.snake.next_head(self.direction, self.grid)
        self.tick += 1

        if new_head in self.obstacles:
            self._game_over("obstacle", new_head)
            return self.snapshot()
        if self.snake.occupies(new_head):
            self._game_over("self", new_head)
            return self.snapshot()

        ate = new_head == self.food
        self.snake.advance(new_head, grow=ate)
        if ate:
            self._consume_food()
        return self.snapshot()

    def snapshot(self) -> Snapshot:
        return Snapshot(
            snake=self.snake.cells(),
            food=self.food,
            obstacles=self.obstacles,
            score=self.score,
            phase=self.phase,
            is_new_record=self.is_new_record,
            session_best=dict(self.session_best),
            is_accelerating=self.is_accelerating,
            difficulty=self.difficulty,
            direction=self.direction,
            tick_interval_ms=self.tick_interval_ms,
            tick=self.tick,
            grid_size=self.grid.size,
        )

    def drain_events(self) -> list[GameEvent]:
        """Return and forget events raised since the last drain."""
        events, self._events = self._events, []
        return events

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _consume_food(self) -> None:
        self.score += FOOD_POINTS
        self._emit(EventKind.FOOD_EATEN)
        if self.score > self.session_best.get(self.difficulty, 0):
            self.session_best[self.difficulty] = self.score
            self.is_new_record = True
            self._emit(EventKind.RECORD_BROKEN)
        self.food = self.food_spawner.place(self.snake.body, self.obstacles)

    def _game_over(self, cause: str, cell: Cell) -> None:
        self.phase = GamePhase.OVER
        self._cancel_acceleration()
        self._emit(EventKind.GAME_OVER)
        logger.info(
            "Snake hit %s at %s on tick %d with score %d.",
            cause, cell, self.tick, self.score,
        )

    def _set_running(self) -> None:
        self.phase = GamePhase.RUNNING
        self._emit(EventKind.GAME_STARTED)

    def _path_clear(self, direction: Direction) -> bool:
        """Check the straight line from the head to the edge.

        Obstacles and food both block; the snake's own body does not.
        """
        dx, dy = direction.value
        x, y = self.snake.head
        x, y = x + dx, y + dy
        while self.grid.in_bounds(x, y):
            if (x, y) in self.obstacles or (x, y) == self.food:
                return False
            x, y = x + dx, y + dy
        return True

    def _try_accelerate(self, direction: Direction) -> bool:
        if not self._path_clear(direction):
            logger.debug("Acceleration refused: path %s blocked.", direction.name)
            return False
        was_accelerating, self.is_accelerating = self.is_accelerating, True
        if self._accel_timer is not None:
            self._accel_timer.cancel()
        self._accel_timer = self.scheduler.call_later(
            ACCELERATION_WINDOW_MS / 1000.0, self._end_acceleration,
        )
        if not was_accelerating:
            self._interval_changed()
        return True

    def _end_acceleration(self) -> None:
        self.is_accelerating = False
        self._accel_timer = None
        self._interval_changed()

    def _cancel_acceleration(self) -> None:
        if self._accel_timer is not None:
            self._accel_timer.cancel()
            self._accel_timer = None
        if self.is_accelerating:
            self.is_accelerating = False
            self._interval_changed()

    def _interval_changed(self) -> None:
        if self.on_interval_change is not None:
            self.on_interval_change()

    def _emit(self, kind: EventKind) -> None:
        self._events.append(
            GameEvent(
                kind=kind,
                score=self.score,
                tick=self.tick,
                difficulty=self.difficulty,
                new_record=self.is_new_record,
            )
        )
