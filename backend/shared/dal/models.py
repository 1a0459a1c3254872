"""Persistence models for the data access layer."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from game.logic.enums import GameId
from game.logic.types import RunAction


class DailySeedCommitment(BaseModel, frozen=True):
    """Public commitment to one game's secret seed for one civil date."""

    game_id: GameId
    date: str  # YYYY-MM-DD in the configured civil time zone
    seed_hash: str  # sha256 of the secret seed
    revealed_seed: str | None = None  # published only once the day is over
    created_at: datetime


class Run(BaseModel, frozen=True):
    """One play session: empty and unverified until finalized exactly once."""

    run_id: str
    player_id: str
    game_id: GameId
    date: str
    transcript: list[RunAction] = Field(default_factory=list)
    score: float = 0
    coins_awarded: int = 0
    verified: bool = False
    details: dict[str, Any] = Field(default_factory=dict)
    created_at: datetime
    finished_at: datetime | None = None


class LeaderboardAggregate(BaseModel, frozen=True):
    """Best-of-N daily score of one player for one game."""

    game_id: GameId
    date: str
    player_id: str
    daily_score: float


class RankedScore(BaseModel, frozen=True):
    """A player's score as returned by ranking queries, best first."""

    player_id: str
    nickname: str
    score: float
