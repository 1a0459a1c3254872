"""
Leaderboard Aggregator.

Daily aggregates are recomputed from verified runs on every finish (never
incremented), so a retried or concurrent recompute converges on the same
value. All-time standings are the per-player sum of daily aggregates.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog
from pydantic import BaseModel, ConfigDict

from game.logic.enums import GameId, LeaderboardScope
from game.logic.rules import rules_for
from shared.dal.models import LeaderboardAggregate, RankedScore

if TYPE_CHECKING:
    from collections.abc import Iterable

    from shared.dal.leaderboard_repository import LeaderboardRepository
    from shared.dal.player_repository import PlayerRepository
    from shared.dal.run_repository import RunRepository

logger = structlog.get_logger()

TOP_SIZE = 20


def best_of_sum(scores: Iterable[float], best_of: int) -> float:
    """Sum of the `best_of` highest scores, rounded to 2 decimals."""
    return round(sum(sorted(scores, reverse=True)[:best_of]), 2)


class RankedEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    rank: int
    player_id: str
    nickname: str
    score: float


class LeaderboardView(BaseModel):
    """Top of the board plus the requester's own position, wherever it is."""

    model_config = ConfigDict(frozen=True)

    game_id: GameId
    scope: LeaderboardScope
    date: str
    top: list[RankedEntry]
    my_rank: int | None = None
    my_score: float | None = None


class LeaderboardAggregator:
    def __init__(
        self,
        run_repo: RunRepository,
        leaderboard_repo: LeaderboardRepository,
        player_repo: PlayerRepository,
    ) -> None:
        self._run_repo = run_repo
        self._leaderboard_repo = leaderboard_repo
        self._player_repo = player_repo

    async def recompute(self, player_id: str, game_id: GameId, date: str) -> LeaderboardAggregate:
        scores = await self._run_repo.get_verified_scores(player_id, game_id.value, date)
        aggregate = LeaderboardAggregate(
            game_id=game_id,
            date=date,
            player_id=player_id,
            daily_score=best_of_sum(scores, rules_for(game_id).best_of),
        )
        await self._leaderboard_repo.upsert_aggregate(aggregate)
        logger.debug("leaderboard recomputed", game_id=game_id, date=date, player_id=player_id)
        return aggregate

    async def rank(
        self,
        game_id: GameId,
        scope: LeaderboardScope,
        date: str,
        requester_id: str | None = None,
        *,
        friends_only: bool = False,
    ) -> LeaderboardView:
        player_ids: set[str] | None = None
        if friends_only and requester_id is not None:
            player_ids = await self._player_repo.get_friend_ids(requester_id)
            player_ids.add(requester_id)

        if scope == LeaderboardScope.DAILY:
            ranked = await self._leaderboard_repo.rank_daily(game_id.value, date, player_ids)
        else:
            ranked = await self._leaderboard_repo.rank_alltime(game_id.value, player_ids)

        my_rank, my_score = _locate(ranked, requester_id)
        return LeaderboardView(
            game_id=game_id,
            scope=scope,
            date=date,
            top=[_entry(i, row) for i, row in enumerate(ranked[:TOP_SIZE], start=1)],
            my_rank=my_rank,
            my_score=my_score,
        )


def _entry(rank: int, row: RankedScore) -> RankedEntry:
    return RankedEntry(rank=rank, player_id=row.player_id, nickname=row.nickname, score=round(row.score, 2))


def _locate(ranked: list[RankedScore], player_id: str | None) -> tuple[int | None, float | None]:
    if player_id is None:
        return None, None
    for rank, row in enumerate(ranked, start=1):
        if row.player_id == player_id:
            return rank, round(row.score, 2)
    return None, None
