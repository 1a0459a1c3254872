"""
Pydantic models for game logic data structures.

Contains the transcript entry model shared by the simulators, the run
lifecycle and persistence, and the result every simulator returns.
"""

from __future__ import annotations

from typing import Any

import structlog
from pydantic import BaseModel, ConfigDict, Field, ValidationError

logger = structlog.get_logger()


class RunAction(BaseModel):
    """One player decision recorded in a run transcript.

    `at` is a relative timestamp (seconds since the run started) or a sequence
    index; crash reads it as the cash-out time. The payload shape depends on
    the action type and is read leniently by the simulators.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    at: float = 0.0
    type: str = Field(min_length=1, max_length=32)
    payload: dict[str, Any] | None = None


class SimulationResult(BaseModel):
    """Authoritative outcome of replaying a transcript against a daily seed."""

    model_config = ConfigDict(frozen=True)

    score: float
    details: dict[str, Any] = Field(default_factory=dict)


def parse_transcript(raw: object) -> list[RunAction]:
    """Build a transcript from client JSON, dropping entries that are not valid actions.

    A single malformed entry must not invalidate an otherwise-valid run, so
    invalid entries are skipped rather than rejected.
    """
    if not isinstance(raw, list):
        return []
    actions: list[RunAction] = []
    skipped = 0
    for entry in raw:
        if isinstance(entry, RunAction):
            actions.append(entry)
            continue
        try:
            actions.append(RunAction.model_validate(entry))
        except ValidationError:
            skipped += 1
    if skipped:
        logger.debug("dropped malformed transcript entries", skipped=skipped)
    return actions
