"""SQLite-backed daily seed commitment repository."""

from __future__ import annotations

import asyncio
import sqlite3
from datetime import datetime
from typing import TYPE_CHECKING

import structlog

from shared.dal.models import DailySeedCommitment
from shared.dal.seed_repository import SeedRepository

if TYPE_CHECKING:
    from shared.db.connection import Database

logger = structlog.get_logger()


class SqliteSeedRepository(SeedRepository):
    """The (game_id, date) primary key makes the first committed hash win."""

    def __init__(self, db: Database) -> None:
        self._db = db
        self._lock = asyncio.Lock()

    async def get_commitment(self, game_id: str, date: str) -> DailySeedCommitment | None:
        row = self._db.connection.execute(
            "SELECT game_id, date, seed_hash, revealed_seed, created_at FROM daily_seeds WHERE game_id = ? AND date = ?",
            (game_id, date),
        ).fetchone()
        if row is None:
            return None
        return DailySeedCommitment(
            game_id=row[0],
            date=row[1],
            seed_hash=row[2],
            revealed_seed=row[3],
            created_at=datetime.fromisoformat(row[4]),
        )

    async def create_commitment(self, commitment: DailySeedCommitment) -> bool:
        async with self._lock:
            try:
                self._db.connection.execute(
                    "INSERT INTO daily_seeds (game_id, date, seed_hash, revealed_seed, created_at) VALUES (?, ?, ?, ?, ?)",
                    (
                        commitment.game_id.value,
                        commitment.date,
                        commitment.seed_hash,
                        commitment.revealed_seed,
                        commitment.created_at.isoformat(),
                    ),
                )
                self._db.connection.commit()
            except sqlite3.IntegrityError:
                self._db.connection.rollback()
                logger.debug("seed commitment already exists", game_id=commitment.game_id.value, date=commitment.date)
                return False
            return True

    async def reveal_seed(self, game_id: str, date: str, seed: str) -> None:
        async with self._lock:
            self._db.connection.execute(
                "UPDATE daily_seeds SET revealed_seed = ? WHERE game_id = ? AND date = ? AND revealed_seed IS NULL",
                (seed, game_id, date),
            )
            self._db.connection.commit()
