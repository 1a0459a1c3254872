"""Helpers for building transcripts and seeds in game tests."""

from typing import Any

from game.logic.seeds import derive_seed
from game.logic.types import RunAction

TEST_SECRET = "test-seed-secret"
TEST_DATE = "2025-06-01"
STARTING_COINS = 500


def action(action_type: str, at: float = 0.0, **payload: Any) -> RunAction:
    """Build a transcript entry; keyword arguments become the payload."""
    return RunAction(at=at, type=action_type, payload=payload or None)


def seed_for(game_id: str, date: str = TEST_DATE) -> str:
    return derive_seed(TEST_SECRET, game_id, date)


class Clock:
    """Settable stand-in for the civil-date clock."""

    def __init__(self, today: str = TEST_DATE) -> None:
        self.today = today

    def __call__(self) -> str:
        return self.today
