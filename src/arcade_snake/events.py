"""One-shot notifications emitted by the engine."""

from __future__ import annotations

import enum
from dataclasses import dataclass


class EventKind(str, enum.Enum):
    """Kinds of state transitions the boundary layer may react to."""

    GAME_STARTED = "game_started"
    GAME_PAUSED = "game_paused"
    FOOD_EATEN = "food_eaten"
    RECORD_BROKEN = "record_broken"
    GAME_OVER = "game_over"


@dataclass(frozen=True)
class GameEvent:
    """A transition with the score it produced."""

    kind: EventKind
    score: int
    tick: int
    difficulty: int
    new_record: bool = False

    def announcement(self) -> str:
        """Short text suitable for assistive-technology output."""
        if self.kind is EventKind.FOOD_EATEN:
            return f"Food eaten! Score is now {self.score}"
        if self.kind is EventKind.RECORD_BROKEN:
            return f"New session record: {self.score} points!"
        if self.kind is EventKind.GAME_OVER:
            if self.new_record:
                return f"Game over! New session record with {self.score} points!"
            return f"Game over! Final score: {self.score} points"
        if self.kind is EventKind.GAME_PAUSED:
            return "Game paused"
        return "Game started"

    def to_dict(self) -> dict:
        return {
            "kind": self.kind.value,
            "score": self.score,
            "tick": self.tick,
            "difficulty": self.difficulty,
            "new_record": self.new_record,
            "message": self.announcement(),
        }
