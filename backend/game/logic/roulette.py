"""
Roulette: allocate bets over 10 spins starting from a bankroll of 100.

Each spin result has its own sub-stream keyed by spin index. Payouts follow
single-zero roulette odds (straight 35:1, dozen 2:1, even-money otherwise,
zero loses every even-money bet). The final score gives back 10% of any
gain above the starting bankroll.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from game.logic.enums import ActionType, BetType
from game.logic.rng import sub_stream
from game.logic.transcript import as_int, as_number, first_indexed, payload_of, round_half_up
from game.logic.types import SimulationResult

if TYPE_CHECKING:
    from collections.abc import Sequence

    from game.logic.types import RunAction

STARTING_BANKROLL = 100
SPINS = 10
POCKETS = 37  # 0-36
GAIN_PENALTY_RATE = 0.1
STRAIGHT_PAYOUT = 35
DOZEN_PAYOUT = 2
DOZENS = 3
DOZEN_SIZE = 12

RED_NUMBERS = frozenset({1, 3, 5, 7, 9, 12, 14, 16, 18, 19, 21, 23, 25, 27, 30, 32, 34, 36})


@dataclass(frozen=True)
class Bet:
    type: BetType
    amount: float
    value: int | None = None


def spin_result(seed: str, spin_index: int) -> int:
    return sub_stream(seed, f"roulette{spin_index}").next_below(POCKETS)


def parse_bet(raw: object) -> Bet | None:
    """Validate one client bet; None when it is malformed or out of range."""
    if not isinstance(raw, dict):
        return None
    try:
        bet_type = BetType(raw.get("type"))
    except ValueError:
        return None
    amount = as_number(raw.get("amount"))
    if amount is None or amount <= 0:
        return None
    value: int | None = None
    if bet_type == BetType.DOZEN:
        value = as_int(raw.get("value"), low=1, high=DOZENS)
        if value is None:
            return None
    elif bet_type == BetType.STRAIGHT:
        value = as_int(raw.get("value"), low=0, high=POCKETS - 1)
        if value is None:
            return None
    return Bet(type=bet_type, amount=amount, value=value)


def payout(bet: Bet, result: int) -> float:
    """Net bankroll change of one bet for a spin result."""
    match bet.type:
        case BetType.RED:
            won = result in RED_NUMBERS
        case BetType.BLACK:
            won = result != 0 and result not in RED_NUMBERS
        case BetType.EVEN:
            won = result != 0 and result % 2 == 0
        case BetType.ODD:
            won = result % 2 == 1
        case BetType.DOZEN:
            start = (bet.value - 1) * DOZEN_SIZE + 1
            return bet.amount * DOZEN_PAYOUT if start <= result < start + DOZEN_SIZE else -bet.amount
        case BetType.STRAIGHT:
            return bet.amount * STRAIGHT_PAYOUT if bet.value == result else -bet.amount
    return bet.amount if won else -bet.amount


def final_score(bankroll: float) -> int:
    penalty = max(0.0, (bankroll - STARTING_BANKROLL) * GAIN_PENALTY_RATE)
    return round_half_up(bankroll - penalty)


def _placed_bets(action: RunAction | None, bankroll: float) -> list[Bet]:
    """Bets accepted for one spin; a bet larger than the unstaked bankroll is dropped."""
    if action is None:
        return []
    raw_bets = payload_of(action).get("bets")
    if not isinstance(raw_bets, list):
        return []
    available = bankroll
    accepted: list[Bet] = []
    for raw in raw_bets:
        bet = parse_bet(raw)
        if bet is None or bet.amount > available:
            continue
        available -= bet.amount
        accepted.append(bet)
    return accepted


def simulate_roulette(seed: str, transcript: Sequence[RunAction]) -> SimulationResult:
    spin_actions = first_indexed(transcript, ActionType.SPIN, "spin", SPINS)
    bankroll = float(STARTING_BANKROLL)
    spins: list[dict] = []

    for spin_index in range(SPINS):
        result = spin_result(seed, spin_index)
        bets = _placed_bets(spin_actions.get(spin_index), bankroll)
        net = sum(payout(bet, result) for bet in bets)
        bankroll += net
        spins.append(
            {
                "spin": spin_index,
                "result": result,
                "bets": [{"type": b.type.value, "amount": b.amount, "value": b.value} for b in bets],
                "net": net,
                "bankroll": bankroll,
            },
        )

    return SimulationResult(
        score=final_score(bankroll),
        details={"results": [s["result"] for s in spins], "spins": spins, "bankroll": bankroll},
    )
