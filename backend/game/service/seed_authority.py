"""
Seed Authority: publishes one commitment per (game, date) and hands the
matching secret seed to the simulators.

Commitments are created lazily on first access. Concurrent first accesses
race on the store's (game_id, date) primary key; the loser re-reads and
returns the winner's row, so every caller sees the same hash.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING

import structlog

from game.logic.seeds import commitment_hash, derive_seed, validate_date, verify_commitment
from game.service.exceptions import InvalidInputError, PersistenceError, SeedIntegrityError, SeedNotFoundError
from shared.dal.models import DailySeedCommitment

if TYPE_CHECKING:
    from game.logic.enums import GameId
    from shared.dal.seed_repository import SeedRepository

logger = structlog.get_logger()


class SeedAuthority:
    def __init__(self, secret: str, repo: SeedRepository) -> None:
        if not secret:
            raise ValueError("Seed secret must not be empty")
        self._secret = secret
        self._repo = repo

    def _derive(self, game_id: GameId, date: str) -> str:
        return derive_seed(self._secret, game_id.value, date)

    async def commit_seed(self, game_id: GameId, date: str) -> DailySeedCommitment:
        """Return the commitment for (game, date), creating it on first access."""
        existing = await self._repo.get_commitment(game_id.value, date)
        if existing is not None:
            return existing

        commitment = DailySeedCommitment(
            game_id=game_id,
            date=date,
            seed_hash=commitment_hash(self._derive(game_id, date)),
            created_at=datetime.now(UTC),
        )
        if await self._repo.create_commitment(commitment):
            logger.info("seed committed", game_id=game_id, date=date, seed_hash=commitment.seed_hash)
            return commitment

        winner = await self._repo.get_commitment(game_id.value, date)
        if winner is None:
            raise PersistenceError(f"Seed commitment for {game_id.value} on {date} vanished after conflict")
        logger.debug("commitment race resolved", game_id=game_id, date=date)
        return winner

    async def seed_for(self, game_id: GameId, date: str) -> str:
        """Secret seed for scoring. Never expose this before the date is over."""
        commitment = await self.commit_seed(game_id, date)
        seed = self._derive(game_id, date)
        if not verify_commitment(seed, commitment.seed_hash):
            logger.error("seed commitment mismatch", game_id=game_id, date=date)
            raise SeedIntegrityError(game_id.value, date)
        return seed

    async def reveal(self, game_id: GameId, date: str, today: str) -> DailySeedCommitment:
        """Publish the seed of a finished day; for today or later only the hash is returned.

        Dates other than today are looked up, never committed, so unplayed days are not found.
        """
        try:
            validate_date(date)
        except (TypeError, ValueError) as e:
            raise InvalidInputError(str(e)) from e

        # Only today may create a row here, other dates are read-only.
        if date == today:
            commitment = await self.commit_seed(game_id, date)
        else:
            commitment = await self._repo.get_commitment(game_id.value, date)
            if commitment is None:
                raise SeedNotFoundError(game_id.value, date)
        if date >= today or commitment.revealed_seed is not None:
            return commitment

        seed = await self.seed_for(game_id, date)
        await self._repo.reveal_seed(game_id.value, date, seed)
        logger.info("seed revealed", game_id=game_id, date=date)
        return commitment.model_copy(update={"revealed_seed": seed})
