"""Difficulty levels and their tick timing."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterator, Mapping
from dataclasses import asdict, dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

# Accelerated ticks run at a third of the base interval, never below this.
MIN_ACCELERATED_INTERVAL_MS = 40
ACCELERATION_FACTOR = 3
ACCELERATION_WINDOW_MS = 300


@dataclass(frozen=True)
class DifficultyLevel:
    """Display labels and base tick interval for one level."""

    level: int
    name: str
    subtitle: str
    interval_ms: int = 200

    def __post_init__(self) -> None:
        if self.level < 1:
            raise ValueError("level must be at least 1.")
        if self.interval_ms <= 0:
            raise ValueError("interval_ms must be positive.")

    @property
    def accelerated_interval_ms(self) -> int:
        return accelerated_interval(self.interval_ms)


def accelerated_interval(base_ms: int) -> int:
    """Tick interval while an acceleration window is active."""
    return max(MIN_ACCELERATED_INTERVAL_MS, base_ms // ACCELERATION_FACTOR)


class DifficultyTable(Mapping[int, DifficultyLevel]):
    """Read-only mapping of level number to :class:`DifficultyLevel`.

    Supports JSON serialization so levels can be tuned without code
    changes.
    """

    def __init__(self, levels: list[DifficultyLevel]) -> None:
        if not levels:
            raise ValueError("At least one difficulty level is required.")
        self._levels: dict[int, DifficultyLevel] = {}
        for lvl in levels:
            if lvl.level in self._levels:
                raise ValueError(f"Duplicate difficulty level {lvl.level}.")
            self._levels[lvl.level] = lvl

    def __getitem__(self, level: int) -> DifficultyLevel:
        return self._levels[level]

    def __contains__(self, level: object) -> bool:
        return isinstance(level, int) and level in self._levels

    def __iter__(self) -> Iterator[int]:
        return iter(sorted(self._levels))

    def __len__(self) -> int:
        return len(self._levels)

    @property
    def lowest(self) -> int:
        return min(self._levels)

    def to_dict(self) -> dict:
        return {"levels": [asdict(self._levels[k]) for k in self]}

    def save(self, path: str | Path) -> None:
        """Write the table to a JSON file."""
        p = Path(path)
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(json.dumps(self.to_dict(), indent=2))
        logger.info("Difficulty table saved to %s", p)

    @classmethod
    def load(cls, path: str | Path) -> DifficultyTable:
        """Load a table from a JSON file."""
        raw = json.loads(Path(path).read_text())
        return cls([DifficultyLevel(**d) for d in raw["levels"]])


DEFAULT_LEVELS = DifficultyTable([
    DifficultyLevel(1, "Steve the Snake", "Easy", 200),
    DifficultyLevel(2, "Ssssamantha", "Medium", 200),
    DifficultyLevel(3, "Simon Sssays", "Hard", 200),
])
