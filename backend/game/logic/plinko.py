"""
Plinko: drop up to 10 balls through 10 peg rows into 7 payout slots.

All drops of a run share one stream, consumed row by row in drop order. At
each row the draw is biased toward the center column; a drop may nudge one
row, overriding the drawn direction there (the draw is still consumed so the
rest of the run is unaffected).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from game.logic.enums import ActionType
from game.logic.rng import sub_stream
from game.logic.transcript import actions_of_type, as_int, payload_of
from game.logic.types import SimulationResult

if TYPE_CHECKING:
    from collections.abc import Sequence

    from game.logic.rng import DeterministicStream
    from game.logic.types import RunAction

PEG_ROWS = 10
SLOTS = 7
SLOT_PAYOUTS: tuple[float, ...] = (0.2, 0.5, 1, 2, 1, 0.5, 0.2)
MAX_DROPS = 10
CENTER_PULL = 0.3
_NUDGE_DIRECTIONS = (-1, 1)


def _clamp_slot(position: int) -> int:
    return min(max(position, 0), SLOTS - 1)


def drop_ball(
    rng: DeterministicStream,
    slot: int,
    nudge_row: int | None = None,
    nudge_dir: int | None = None,
) -> int:
    """Return the landing column of one ball started above `slot`."""
    position = _clamp_slot(slot)
    for row in range(PEG_ROWS):
        offset = position / (SLOTS - 1) - 0.5  # -0.5 at the left wall, +0.5 at the right
        draw = rng.next_float() - offset * CENTER_PULL
        direction = 1 if draw > 0.5 else -1  # noqa: PLR2004
        if nudge_dir is not None and row == nudge_row:
            direction = nudge_dir
        position = _clamp_slot(position + direction)
    return position


def simulate_plinko(seed: str, transcript: Sequence[RunAction]) -> SimulationResult:
    rng = sub_stream(seed, "plinko")
    landings: list[int] = []
    total = 0.0

    for action in actions_of_type(transcript, ActionType.DROP):
        if len(landings) >= MAX_DROPS:
            break
        payload = payload_of(action)
        slot = as_int(payload.get("slot"))
        if slot is None:
            continue
        nudge_row = as_int(payload.get("nudgeRow"), low=0, high=PEG_ROWS - 1)
        nudge_dir = as_int(payload.get("nudgeDir"))
        if nudge_row is None or nudge_dir not in _NUDGE_DIRECTIONS:
            nudge_row, nudge_dir = None, None

        landed = drop_ball(rng, slot, nudge_row, nudge_dir)
        landings.append(landed)
        total += SLOT_PAYOUTS[landed]

    return SimulationResult(
        score=round(total, 2),
        details={"landings": landings, "drops": len(landings)},
    )
