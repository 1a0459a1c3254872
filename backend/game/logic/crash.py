"""
Crash: cash out before the multiplier curve reaches the day's crash point.

The crash point is drawn once per seed from an exponential-tailed
distribution with a 1.5x floor. The multiplier grows as 1 + 0.6t + 0.08t^2
with elapsed seconds t. A run without a cash-out is a loss.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from game.logic.enums import ActionType
from game.logic.rng import sub_stream
from game.logic.transcript import actions_of_type, as_number
from game.logic.types import SimulationResult

if TYPE_CHECKING:
    from collections.abc import Sequence

    from game.logic.types import RunAction

CRASH_FLOOR = 1.5
CRASH_TAIL_SCALE = 2.5
LINEAR_RATE = 0.6
QUADRATIC_RATE = 0.08


def crash_point(seed: str) -> float:
    """Crash multiplier for this seed: 1.5 - ln(1 - u) * 2.5."""
    u = sub_stream(seed, "crash").next_float()
    return CRASH_FLOOR - math.log(1 - u) * CRASH_TAIL_SCALE


def multiplier_at(elapsed: float) -> float:
    """Curve value after `elapsed` seconds, inf once it leaves the float range."""
    try:
        return 1 + LINEAR_RATE * elapsed + QUADRATIC_RATE * elapsed**2
    except OverflowError:
        return math.inf


def settle_cashout(point: float, multiplier: float | None) -> float:
    """Score a cash-out. Reaching the crash point exactly counts as crashed."""
    if multiplier is None or multiplier >= point:
        return 0.0
    return round(multiplier, 2)


def _cashout_time(transcript: Sequence[RunAction]) -> float | None:
    """Elapsed time of the first usable cash-out; later ones are ignored."""
    for action in actions_of_type(transcript, ActionType.CASHOUT):
        elapsed = as_number(action.at)
        if elapsed is not None and elapsed >= 0:
            return elapsed
    return None


def simulate_crash(seed: str, transcript: Sequence[RunAction]) -> SimulationResult:
    point = crash_point(seed)
    elapsed = _cashout_time(transcript)
    multiplier = multiplier_at(elapsed) if elapsed is not None else None
    score = settle_cashout(point, multiplier)
    return SimulationResult(
        score=score,
        details={
            "crash_point": round(point, 2),
            "cashed_out_at": elapsed,
            "multiplier": round(multiplier, 2) if multiplier is not None and math.isfinite(multiplier) else None,
            "crashed": score == 0.0,
        },
    )
