"""Per-game daily rules and catalog metadata."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from game.logic.enums import GameId
from game.logic.exceptions import UnknownGameError


class GameRules(BaseModel):
    """Daily allowances for one game."""

    model_config = ConfigDict(frozen=True)

    tickets: int  # runs a player may start per day
    best_of: int  # verified scores summed into the daily aggregate
    max_coins_per_day: int


class GameInfo(BaseModel):
    """Catalog entry shown to clients."""

    model_config = ConfigDict(frozen=True)

    id: GameId
    title: str
    description: str
    rules: GameRules


GAME_RULES: dict[GameId, GameRules] = {
    GameId.CRASH: GameRules(tickets=10, best_of=3, max_coins_per_day=500),
    GameId.MINES: GameRules(tickets=5, best_of=3, max_coins_per_day=400),
    GameId.PLINKO: GameRules(tickets=3, best_of=1, max_coins_per_day=350),
    GameId.BLACKJACK: GameRules(tickets=3, best_of=1, max_coins_per_day=300),
    GameId.ROULETTE: GameRules(tickets=3, best_of=1, max_coins_per_day=300),
}

GAME_CATALOG: tuple[GameInfo, ...] = (
    GameInfo(
        id=GameId.CRASH,
        title="Daily Crash Run",
        description="Cash out before the inevitable crash. Timing matters!",
        rules=GAME_RULES[GameId.CRASH],
    ),
    GameInfo(
        id=GameId.MINES,
        title="Mines Run",
        description="Navigate a 5x5 grid and bank your winnings before you hit a mine.",
        rules=GAME_RULES[GameId.MINES],
    ),
    GameInfo(
        id=GameId.PLINKO,
        title="Plinko Trials",
        description="Drop 10 balls, aim your slot, and nudge fate at one row.",
        rules=GAME_RULES[GameId.PLINKO],
    ),
    GameInfo(
        id=GameId.BLACKJACK,
        title="Blackjack Challenge",
        description="Play 10 hands against the dealer using the shared daily shoe.",
        rules=GAME_RULES[GameId.BLACKJACK],
    ),
    GameInfo(
        id=GameId.ROULETTE,
        title="Roulette Strategy",
        description="Allocate bets for 10 spins and grow your bankroll efficiently.",
        rules=GAME_RULES[GameId.ROULETTE],
    ),
)


def parse_game_id(value: object) -> GameId:
    """Resolve a client-supplied identifier to a GameId or raise UnknownGameError."""
    if isinstance(value, GameId):
        return value
    if not isinstance(value, str):
        raise UnknownGameError(value)
    try:
        return GameId(value.strip().lower())
    except ValueError:
        raise UnknownGameError(value) from None


def rules_for(game_id: GameId) -> GameRules:
    return GAME_RULES[game_id]
