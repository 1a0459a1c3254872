"""
Mines: reveal safe cells of a 5x5 grid and bank before hitting a mine.

The mine layout depends on the seed alone. Each safe reveal raises the
multiplier by 0.25 over a base value of 10; banking locks in the current
value (best bank wins); a mine ends the run at the banked value.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from game.logic.enums import ActionType
from game.logic.rng import sub_stream
from game.logic.transcript import as_int, payload_of, round_half_up
from game.logic.types import SimulationResult

if TYPE_CHECKING:
    from collections.abc import Sequence

    from game.logic.types import RunAction

GRID_SIZE = 25
MINE_COUNT = 5
BASE_VALUE = 10
STEP_PER_REVEAL = 0.25
MAX_REVEALS = GRID_SIZE


def generate_mines(seed: str) -> frozenset[int]:
    """Draw MINE_COUNT distinct cells without replacement."""
    rng = sub_stream(seed, "mines")
    mines: set[int] = set()
    while len(mines) < MINE_COUNT:
        mines.add(rng.next_below(GRID_SIZE))
    return frozenset(mines)


def value_for(safe_reveals: int) -> int:
    return round_half_up(BASE_VALUE * (1 + safe_reveals * STEP_PER_REVEAL))


def simulate_mines(seed: str, transcript: Sequence[RunAction]) -> SimulationResult:
    mines = generate_mines(seed)
    revealed: list[int] = []
    reveals_processed = 0
    banked = 0
    has_banked = False
    mine_hit: int | None = None

    for action in transcript:
        if action.type == ActionType.REVEAL:
            if reveals_processed >= MAX_REVEALS:
                continue
            index = as_int(payload_of(action).get("index"), low=0, high=GRID_SIZE - 1)
            if index is None or index in revealed:
                continue
            reveals_processed += 1
            if index in mines:
                mine_hit = index
                break
            revealed.append(index)
        elif action.type == ActionType.BANK:
            banked = max(banked, value_for(len(revealed)))
            has_banked = True

    busted = mine_hit is not None
    if busted or has_banked:
        score = banked
    else:
        # finishing without a bank or a mine cashes out the current value
        score = value_for(len(revealed))

    return SimulationResult(
        score=score,
        details={
            "reveals": revealed,
            "banked": banked,
            "busted": busted,
            "mine_hit": mine_hit,
            "mines": sorted(mines),
        },
    )
