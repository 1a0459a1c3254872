"""Data access layer: repository interfaces and shared persistence models."""

from shared.dal.leaderboard_repository import LeaderboardRepository
from shared.dal.models import DailySeedCommitment, LeaderboardAggregate, RankedScore, Run
from shared.dal.player_repository import PlayerRepository
from shared.dal.run_repository import RunAlreadyVerifiedError, RunRepository, StorageError
from shared.dal.seed_repository import SeedRepository

__all__ = [
    "DailySeedCommitment",
    "LeaderboardAggregate",
    "LeaderboardRepository",
    "PlayerRepository",
    "RankedScore",
    "Run",
    "RunAlreadyVerifiedError",
    "RunRepository",
    "SeedRepository",
    "StorageError",
]
