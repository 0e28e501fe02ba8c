"""Food placement logic."""

from __future__ import annotations

import logging
from collections.abc import Collection

import numpy as np

from arcade_snake.grid import Cell, Grid

logger = logging.getLogger(__name__)


class FoodSpawner:
    """Places food by uniform rejection sampling.

    Uses a seeded NumPy RNG for deterministic, reproducible placement.
    """

    def __init__(
        self,
        grid: Grid,
        rng: np.random.Generator | None = None,
    ) -> None:
        self.grid = grid
        self.rng = rng if rng is not None else np.random.default_rng()

    def place(
        self,
        snake: Collection[Cell],
        obstacles: Collection[Cell],
    ) -> Cell:
        """Draw random cells until one is off the snake and obstacles.

        Raises :class:`ValueError` if every cell is covered, since
        sampling could never terminate.
        """
        blocked = set(snake) | set(obstacles)
        if len(blocked) >= self.grid.size * self.grid.size:
            raise ValueError("No free cell available for food placement.")

        attempts = 0
        while True:
            attempts += 1
            cell = self.grid.random_cell(self.rng)
            if cell not in blocked:
                logger.debug("Food placed at %s after %d draws.", cell, attempts)
                return cell
