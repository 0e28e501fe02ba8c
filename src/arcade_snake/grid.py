"""Grid geometry for the toroidal playfield."""

from __future__ import annotations

import enum
from collections.abc import Iterable

import numpy as np

GRID_SIZE = 25

Cell = tuple[int, int]


class CellType(enum.IntEnum):
    """Integer codes stored in a painted grid array."""

    EMPTY = 0
    SNAKE = 1
    FOOD = 2
    OBSTACLE = 3
    HEAD = 4


class Grid:
    """Square, wrap-around grid of ``(x, y)`` cells.

    The painted array is indexed ``cells[y, x]`` so that rows are
    horizontal lines, matching how the board is drawn.
    """

    def __init__(self, size: int = GRID_SIZE) -> None:
        if size < 4:
            raise ValueError("Grid size must be at least 4.")
        self.size = size

    def in_bounds(self, x: int, y: int) -> bool:
        """Check whether a coordinate lies within the grid."""
        return 0 <= x < self.size and 0 <= y < self.size

    def wrap(self, x: int, y: int) -> Cell:
        """Wrap coordinates around the grid edges."""
        return x % self.size, y % self.size

    def random_cell(self, rng: np.random.Generator) -> Cell:
        """Draw a uniformly random cell."""
        x, y = rng.integers(0, self.size, size=2)
        return int(x), int(y)

    def paint(
        self,
        snake: Iterable[Cell],
        food: Cell | None,
        obstacles: Iterable[Cell],
    ) -> np.ndarray:
        """Return an ``int8`` array with every occupied cell coded."""
        cells = np.zeros((self.size, self.size), dtype=np.int8)
        for x, y in obstacles:
            cells[y, x] = CellType.OBSTACLE
        if food is not None:
            cells[food[1], food[0]] = CellType.FOOD
        for i, (x, y) in enumerate(snake):
            cells[y, x] = CellType.HEAD if i == 0 else CellType.SNAKE
        return cells
