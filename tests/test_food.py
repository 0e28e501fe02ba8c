"""Tests for the FoodSpawner module."""

import numpy as np
import pytest

from arcade_snake.food import FoodSpawner
from arcade_snake.grid import Grid
from arcade_snake.obstacles import obstacles_for


class TestFoodPlacement:
    @pytest.mark.parametrize("difficulty", [1, 2, 3])
    def test_never_on_snake_or_obstacle(self, difficulty):
        grid = Grid()
        spawner = FoodSpawner(grid, rng=np.random.default_rng(difficulty))
        obstacles = obstacles_for(difficulty)
        snake = [(x, 12) for x in range(25) if (x, 12) not in obstacles]
        for _ in range(300):
            cell = spawner.place(snake, obstacles)
            assert cell not in snake
            assert cell not in obstacles
            assert grid.in_bounds(*cell)

    def test_deterministic_with_seed(self):
        a = FoodSpawner(Grid(), rng=np.random.default_rng(42))
        b = FoodSpawner(Grid(), rng=np.random.default_rng(42))
        assert [a.place([], []) for _ in range(5)] == [
            b.place([], []) for _ in range(5)
        ]

    def test_finds_single_free_cell(self):
        grid = Grid(size=4)
        spawner = FoodSpawner(grid, rng=np.random.default_rng(0))
        snake = [(x, y) for x in range(4) for y in range(4) if (x, y) != (2, 3)]
        assert spawner.place(snake, []) == (2, 3)

    def test_full_grid_raises(self):
        grid = Grid(size=4)
        spawner = FoodSpawner(grid)
        cells = [(x, y) for x in range(4) for y in range(4)]
        with pytest.raises(ValueError, match="No free cell"):
            spawner.place(cells[:10], cells[10:])
