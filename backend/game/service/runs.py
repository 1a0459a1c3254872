"""
Run lifecycle: start, append decisions, finish.

A run is bound to the civil date it was started on and is scored against
that date's seed even if it is finished after midnight. Finishing replays
the transcript server-side; client-reported outcomes are never trusted.
"""

from __future__ import annotations

import asyncio
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any
from uuid import uuid4

import structlog
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from game.logic.rules import rules_for
from game.logic.simulator import simulate
from game.logic.types import RunAction, parse_transcript
from game.service.exceptions import (
    InvalidInputError,
    PersistenceError,
    RunAlreadyFinishedError,
    RunNotFoundError,
    TicketsExhaustedError,
)
from shared.dal.models import Run
from shared.dal.run_repository import RunAlreadyVerifiedError, StorageError

if TYPE_CHECKING:
    from collections.abc import Callable

    from game.logic.enums import GameId
    from game.service.leaderboard import LeaderboardAggregator
    from game.service.rewards import RewardPolicy
    from game.service.seed_authority import SeedAuthority
    from shared.dal.run_repository import RunRepository

logger = structlog.get_logger()

DEFAULT_MAX_TRANSCRIPT_ACTIONS = 256


class StartedRun(BaseModel):
    model_config = ConfigDict(frozen=True)

    run_id: str
    seed_hash: str
    date: str


class FinishedRun(BaseModel):
    model_config = ConfigDict(frozen=True)

    score: float
    coins: int
    verified: bool = True
    details: dict[str, Any] = Field(default_factory=dict)


class RunService:
    """Owns the run state machine: created -> appended* -> verified (terminal)."""

    def __init__(
        self,
        seed_authority: SeedAuthority,
        run_repo: RunRepository,
        rewards: RewardPolicy,
        aggregator: LeaderboardAggregator,
        *,
        today: Callable[[], str],
        max_transcript_actions: int = DEFAULT_MAX_TRANSCRIPT_ACTIONS,
    ) -> None:
        self._seeds = seed_authority
        self._run_repo = run_repo
        self._rewards = rewards
        self._aggregator = aggregator
        self._today = today
        self._max_actions = max_transcript_actions
        # ticket count + insert, and award + finalize, must not interleave
        self._start_lock = asyncio.Lock()
        self._finish_lock = asyncio.Lock()

    async def start_run(self, player_id: str, game_id: GameId) -> StartedRun:
        """Open a run for today, committing the day's seed if needed."""
        date = self._today()
        commitment = await self._seeds.commit_seed(game_id, date)
        tickets = rules_for(game_id).tickets

        async with self._start_lock:
            if await self._run_repo.count_runs(player_id, game_id.value, date) >= tickets:
                raise TicketsExhaustedError(game_id.value, tickets)
            run = Run(
                run_id=str(uuid4()),
                player_id=player_id,
                game_id=game_id,
                date=date,
                created_at=datetime.now(UTC),
            )
            await self._run_repo.create_run(run)

        logger.info("run started", run_id=run.run_id, player_id=player_id, game_id=game_id, date=date)
        return StartedRun(run_id=run.run_id, seed_hash=commitment.seed_hash, date=date)

    async def append_action(self, player_id: str, run_id: str, raw_action: object) -> list[RunAction]:
        """Validate and append one decision; returns the transcript so far."""
        try:
            action = RunAction.model_validate(raw_action)
        except ValidationError as e:
            raise InvalidInputError(f"Invalid action: {e.error_count()} validation error(s)") from e

        run = await self._owned_run(player_id, run_id)
        if run.verified:
            raise RunAlreadyFinishedError(run_id)
        if len(run.transcript) >= self._max_actions:
            raise InvalidInputError(f"Transcript is limited to {self._max_actions} actions")

        try:
            return await self._run_repo.append_action(run_id, action)
        except RunAlreadyVerifiedError as e:
            raise RunAlreadyFinishedError(run_id) from e

    async def finish_run(self, player_id: str, run_id: str, transcript: object | None = None) -> FinishedRun:
        """Score the run, credit coins and refresh the player's daily aggregate.

        A client-supplied transcript replaces the stored one; malformed entries
        in it are dropped, not rejected.
        """
        if transcript is not None and not isinstance(transcript, list):
            raise InvalidInputError("transcript must be an array of actions")

        run = await self._owned_run(player_id, run_id)
        if run.verified:
            raise RunAlreadyFinishedError(run_id)

        actions = parse_transcript(transcript) if transcript is not None else list(run.transcript)
        actions = actions[: self._max_actions]

        seed = await self._seeds.seed_for(run.game_id, run.date)
        result = simulate(run.game_id, seed, actions)

        async with self._finish_lock:
            coins = await self._rewards.award(player_id, run.game_id, result.score, run.date)
            try:
                await self._run_repo.finalize_run(
                    run_id,
                    transcript=actions,
                    score=result.score,
                    coins=coins,
                    details=result.details,
                )
            except RunAlreadyVerifiedError as e:
                raise RunAlreadyFinishedError(run_id) from e
            except StorageError as e:
                logger.warning("run finalization failed", run_id=run_id, player_id=player_id)
                raise PersistenceError(str(e)) from e

        await self._aggregator.recompute(player_id, run.game_id, run.date)
        logger.info(
            "run finished",
            run_id=run_id,
            player_id=player_id,
            game_id=run.game_id,
            date=run.date,
            score=result.score,
            coins=coins,
            actions=len(actions),
        )
        return FinishedRun(score=result.score, coins=coins, details=result.details)

    async def runs_today(self, player_id: str) -> list[Run]:
        return await self._run_repo.get_player_runs(player_id, self._today())

    async def _owned_run(self, player_id: str, run_id: str) -> Run:
        run = await self._run_repo.get_run(run_id)
        if run is None or run.player_id != player_id:
            raise RunNotFoundError(run_id)
        return run
