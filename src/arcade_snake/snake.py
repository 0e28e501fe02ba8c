"""Snake body and direction handling."""

from __future__ import annotations

import enum
from collections import deque
from collections.abc import Iterable

from arcade_snake.grid import Cell, Grid


class Direction(enum.Enum):
    """Cardinal movement directions with (dx, dy) values."""

    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def opposite(self) -> Direction:
        dx, dy = self.value
        return Direction((-dx, -dy))

    @classmethod
    def parse(cls, value: object) -> Direction | None:
        """Coerce a name or ``(dx, dy)`` pair to a direction.

        Returns ``None`` for anything that is not one of the four
        cardinal directions.
        """
        if isinstance(value, Direction):
            return value
        if isinstance(value, str):
            return cls.__members__.get(value.strip().upper())
        if isinstance(value, (tuple, list)) and len(value) == 2:
            try:
                return cls(tuple(value))
            except (TypeError, ValueError):
                return None
        return None


def is_valid_turn(candidate: Direction, reference: Direction) -> bool:
    """A turn is valid unless it repeats or reverses *reference*."""
    return candidate is not reference and candidate is not reference.opposite


class Snake:
    """Ordered deque of ``(x, y)`` segments.

    The head is ``body[0]``; the tail is ``body[-1]``.
    """

    def __init__(self, cells: Iterable[Cell]) -> None:
        self.body: deque[Cell] = deque(cells)
        if not self.body:
            raise ValueError("Snake length must be at least 1.")
        if len(set(self.body)) != len(self.body):
            raise ValueError("Snake cells must be distinct.")

    def __len__(self) -> int:
        return len(self.body)

    @property
    def head(self) -> Cell:
        """Return the head coordinate."""
        return self.body[0]

    def next_head(self, direction: Direction, grid: Grid) -> Cell:
        """Compute the wrapped next head position without moving."""
        dx, dy = direction.value
        x, y = self.head
        return grid.wrap(x + dx, y + dy)

    def occupies(self, cell: Cell) -> bool:
        """Check whether the snake occupies a given cell."""
        return cell in self.body

    def advance(self, new_head: Cell, grow: bool = False) -> Cell | None:
        """Prepend *new_head*, dropping the tail unless growing.

        Returns the vacated tail cell, or ``None`` if the snake grew.
        """
        self.body.appendleft(new_head)
        if grow:
            return None
        return self.body.pop()

    def cells(self) -> tuple[Cell, ...]:
        return tuple(self.body)
