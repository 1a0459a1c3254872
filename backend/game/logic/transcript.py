"""Lenient readers for untrusted transcript payload values.

Every helper returns None for a value it cannot use, so simulators can skip
the entry instead of failing the run.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from game.logic.types import RunAction


def as_int(value: Any, *, low: int | None = None, high: int | None = None) -> int | None:  # noqa: ANN401
    """Read an integer (integral floats allowed, bools rejected) within [low, high]."""
    if isinstance(value, bool):
        return None
    if isinstance(value, float):
        if not math.isfinite(value) or not value.is_integer():
            return None
        value = int(value)
    if not isinstance(value, int):
        return None
    if low is not None and value < low:
        return None
    if high is not None and value > high:
        return None
    return value


def as_number(value: Any) -> float | None:  # noqa: ANN401
    """Read a finite real number (bools rejected)."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    number = float(value)
    if not math.isfinite(number):
        return None
    return number


def payload_of(action: RunAction) -> dict[str, Any]:
    return action.payload or {}


def actions_of_type(transcript: Iterable[RunAction], action_type: str) -> Iterator[RunAction]:
    return (action for action in transcript if action.type == action_type)


def first_indexed(
    transcript: Iterable[RunAction],
    action_type: str,
    index_key: str,
    count: int,
) -> dict[int, RunAction]:
    """Map index -> first action of the given type whose payload[index_key] is in [0, count).

    Later duplicates for the same index are ignored, as are out-of-range indices.
    """
    found: dict[int, RunAction] = {}
    for action in actions_of_type(transcript, action_type):
        index = as_int(payload_of(action).get(index_key), low=0, high=count - 1)
        if index is not None and index not in found:
            found[index] = action
    return found


def round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 going up (not banker's rounding)."""
    return math.floor(value + 0.5)
