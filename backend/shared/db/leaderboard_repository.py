"""SQLite-backed leaderboard repository."""

from __future__ import annotations

import asyncio
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from shared.dal.leaderboard_repository import LeaderboardRepository
from shared.dal.models import LeaderboardAggregate, RankedScore

if TYPE_CHECKING:
    from collections.abc import Collection

    from shared.db.connection import Database

_RANK_ORDER = "ORDER BY score DESC, p.nickname COLLATE NOCASE, a.player_id"


def _player_filter(player_ids: Collection[str] | None) -> tuple[str, list[str]]:
    if player_ids is None:
        return "", []
    ids = sorted(player_ids)
    placeholders = ", ".join("?" for _ in ids)
    return f" AND a.player_id IN ({placeholders})", ids


class SqliteLeaderboardRepository(LeaderboardRepository):
    """One row per (game, date, player); all-time totals are summed at query time."""

    def __init__(self, db: Database) -> None:
        self._db = db
        self._lock = asyncio.Lock()

    async def upsert_aggregate(self, aggregate: LeaderboardAggregate) -> None:
        async with self._lock:
            self._db.connection.execute(
                "INSERT INTO leaderboard_aggregates (game_id, date, player_id, daily_score, updated_at) "
                "VALUES (?, ?, ?, ?, ?) "
                "ON CONFLICT (game_id, date, player_id) DO UPDATE SET "
                "daily_score = excluded.daily_score, updated_at = excluded.updated_at",
                (
                    aggregate.game_id.value,
                    aggregate.date,
                    aggregate.player_id,
                    aggregate.daily_score,
                    datetime.now(UTC).isoformat(),
                ),
            )
            self._db.connection.commit()

    async def get_aggregate(self, game_id: str, date: str, player_id: str) -> LeaderboardAggregate | None:
        row = self._db.connection.execute(
            "SELECT game_id, date, player_id, daily_score FROM leaderboard_aggregates "
            "WHERE game_id = ? AND date = ? AND player_id = ?",
            (game_id, date, player_id),
        ).fetchone()
        if row is None:
            return None
        return LeaderboardAggregate(game_id=row[0], date=row[1], player_id=row[2], daily_score=row[3])

    async def rank_daily(
        self,
        game_id: str,
        date: str,
        player_ids: Collection[str] | None = None,
    ) -> list[RankedScore]:
        where, ids = _player_filter(player_ids)
        rows = self._db.connection.execute(
            "SELECT a.player_id, p.nickname, a.daily_score AS score "
            "FROM leaderboard_aggregates a JOIN players p ON p.id = a.player_id "
            f"WHERE a.game_id = ? AND a.date = ?{where} {_RANK_ORDER}",  # noqa: S608
            (game_id, date, *ids),
        ).fetchall()
        return [RankedScore(player_id=r[0], nickname=r[1], score=r[2]) for r in rows]

    async def rank_alltime(self, game_id: str, player_ids: Collection[str] | None = None) -> list[RankedScore]:
        where, ids = _player_filter(player_ids)
        rows = self._db.connection.execute(
            "SELECT a.player_id, p.nickname, SUM(a.daily_score) AS score "
            "FROM leaderboard_aggregates a JOIN players p ON p.id = a.player_id "
            f"WHERE a.game_id = ?{where} GROUP BY a.player_id, p.nickname {_RANK_ORDER}",  # noqa: S608
            (game_id, *ids),
        ).fetchall()
        return [RankedScore(player_id=r[0], nickname=r[1], score=r[2]) for r in rows]
