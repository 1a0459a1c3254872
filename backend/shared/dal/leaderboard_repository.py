"""Abstract interface for leaderboard aggregate persistence."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Collection

    from shared.dal.models import LeaderboardAggregate, RankedScore


class LeaderboardRepository(ABC):
    """Ranking queries return every matching player, best score first.

    Ties are ordered by nickname (case-insensitive), then player id.
    `player_ids`, when given, restricts the ranking to those players.
    """

    @abstractmethod
    async def upsert_aggregate(self, aggregate: LeaderboardAggregate) -> None:
        """Insert or replace the (game_id, date, player_id) row."""

    @abstractmethod
    async def get_aggregate(self, game_id: str, date: str, player_id: str) -> LeaderboardAggregate | None: ...

    @abstractmethod
    async def rank_daily(
        self,
        game_id: str,
        date: str,
        player_ids: Collection[str] | None = None,
    ) -> list[RankedScore]: ...

    @abstractmethod
    async def rank_alltime(self, game_id: str, player_ids: Collection[str] | None = None) -> list[RankedScore]:
        """Rank players by the sum of their daily aggregates across all dates."""
