"""Tests for game events."""

import json

from arcade_snake.events import EventKind, GameEvent


def _event(kind, score=30, new_record=False):
    return GameEvent(kind=kind, score=score, tick=4, difficulty=2, new_record=new_record)


class TestAnnouncements:
    def test_food_eaten(self):
        assert _event(EventKind.FOOD_EATEN).announcement() == (
            "Food eaten! Score is now 30"
        )

    def test_game_over(self):
        assert _event(EventKind.GAME_OVER).announcement() == (
            "Game over! Final score: 30 points"
        )
        assert _event(EventKind.GAME_OVER, new_record=True).announcement() == (
            "Game over! New session record with 30 points!"
        )

    def test_phase_changes(self):
        assert _event(EventKind.GAME_STARTED).announcement() == "Game started"
        assert _event(EventKind.GAME_PAUSED).announcement() == "Game paused"

    def test_to_dict_serializable(self):
        d = _event(EventKind.RECORD_BROKEN, new_record=True).to_dict()
        assert d["kind"] == "record_broken"
        assert d["score"] == 30
        json.dumps(d)
