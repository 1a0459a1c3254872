"""Reward Policy: converts verified scores into coins under a per-game daily cap."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from game.logic.rules import rules_for

if TYPE_CHECKING:
    from game.logic.enums import GameId
    from shared.dal.run_repository import RunRepository

COINS_PER_POINT = 2


def coins_for_score(score: float, cap: int, already: int) -> int:
    """Coins for one run given what the player already earned today.

    Never negative and never lifts the day's total above the cap.
    """
    remaining = max(0, cap - already)
    requested = max(0, math.floor(score * COINS_PER_POINT))
    return min(remaining, requested)


class RewardPolicy:
    def __init__(self, run_repo: RunRepository) -> None:
        self._run_repo = run_repo

    async def award(self, player_id: str, game_id: GameId, score: float, date: str) -> int:
        already = await self._run_repo.get_awarded_coins(player_id, game_id.value, date)
        return coins_for_score(score, rules_for(game_id).max_coins_per_day, already)
