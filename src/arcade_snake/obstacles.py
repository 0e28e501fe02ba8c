"""Obstacle layout per difficulty level."""

from __future__ import annotations

from arcade_snake.grid import GRID_SIZE, Cell

# Levels at which each obstacle group appears.
CORNER_LEVEL = 2
BAR_LEVEL = 3

# Top-left frame; reflected into the other three corners.
_CORNER_SPAN = range(1, 4)
_BAR_HALF_WIDTH = 2


def _corner_frame() -> list[Cell]:
    return [
        (x, y)
        for x in _CORNER_SPAN
        for y in _CORNER_SPAN
        if x <= 2 or y <= 2
    ]


def obstacles_for(difficulty: int, size: int = GRID_SIZE) -> frozenset[Cell]:
    """Return the blocked cells for *difficulty*.

    Level 1 is open. From level 2 each corner carries an L-shaped frame
    two cells thick, leaving a pocket in the innermost corner cell. From
    level 3 a five-cell bar sits on the centre row.
    """
    cells: set[Cell] = set()

    if difficulty >= CORNER_LEVEL:
        far = size - 1
        for x, y in _corner_frame():
            cells.add((x, y))
            cells.add((far - x, y))
            cells.add((x, far - y))
            cells.add((far - x, far - y))

    if difficulty >= BAR_LEVEL:
        center = size // 2
        for x in range(center - _BAR_HALF_WIDTH, center + _BAR_HALF_WIDTH + 1):
            cells.add((x, center))

    return frozenset(cells)
