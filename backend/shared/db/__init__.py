"""SQLite database layer: connection management and repository implementations."""

from shared.db.connection import Database
from shared.db.leaderboard_repository import SqliteLeaderboardRepository
from shared.db.player_repository import SqlitePlayerRepository
from shared.db.run_repository import SqliteRunRepository
from shared.db.seed_repository import SqliteSeedRepository

__all__ = [
    "Database",
    "SqliteLeaderboardRepository",
    "SqlitePlayerRepository",
    "SqliteRunRepository",
    "SqliteSeedRepository",
]
