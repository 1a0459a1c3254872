"""SQLite-backed run repository."""

from __future__ import annotations

import asyncio
import json
import sqlite3
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

import structlog
from pydantic import TypeAdapter

from game.logic.types import RunAction
from shared.dal.models import Run
from shared.dal.run_repository import RunAlreadyVerifiedError, RunRepository, StorageError

if TYPE_CHECKING:
    from shared.db.connection import Database

logger = structlog.get_logger()

_TRANSCRIPT_ADAPTER = TypeAdapter(list[RunAction])

_RUN_COLUMNS = (
    "id, player_id, game_id, date, transcript, score, coins_awarded, verified, details, created_at, finished_at"
)


def _row_to_run(row: sqlite3.Row | tuple[Any, ...]) -> Run:
    return Run(
        run_id=row[0],
        player_id=row[1],
        game_id=row[2],
        date=row[3],
        transcript=_TRANSCRIPT_ADAPTER.validate_json(row[4]),
        score=row[5],
        coins_awarded=row[6],
        verified=bool(row[7]),
        details=json.loads(row[8]),
        created_at=datetime.fromisoformat(row[9]),
        finished_at=datetime.fromisoformat(row[10]) if row[10] else None,
    )


class SqliteRunRepository(RunRepository):
    """SQLite implementation of RunRepository.

    Transcripts are stored as a JSON array and grown with json_insert so an
    append never rewrites the whole document from Python. Every write is
    conditioned on verified = 0.
    """

    def __init__(self, db: Database) -> None:
        self._db = db
        self._lock = asyncio.Lock()

    async def create_run(self, run: Run) -> None:
        async with self._lock:
            self._db.connection.execute(
                f"INSERT INTO runs ({_RUN_COLUMNS}) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)",  # noqa: S608
                (
                    run.run_id,
                    run.player_id,
                    run.game_id.value,
                    run.date,
                    _TRANSCRIPT_ADAPTER.dump_json(run.transcript).decode(),
                    run.score,
                    run.coins_awarded,
                    int(run.verified),
                    json.dumps(run.details),
                    run.created_at.isoformat(),
                    run.finished_at.isoformat() if run.finished_at else None,
                ),
            )
            self._db.connection.commit()

    async def get_run(self, run_id: str) -> Run | None:
        row = self._db.connection.execute(
            f"SELECT {_RUN_COLUMNS} FROM runs WHERE id = ?",  # noqa: S608
            (run_id,),
        ).fetchone()
        if row is None:
            return None
        return _row_to_run(row)

    async def append_action(self, run_id: str, action: RunAction) -> list[RunAction]:
        async with self._lock:
            conn = self._db.connection
            cursor = conn.execute(
                "UPDATE runs SET transcript = json_insert(transcript, '$[#]', json(?)) WHERE id = ? AND verified = 0",
                (action.model_dump_json(), run_id),
            )
            conn.commit()
            if cursor.rowcount == 0:
                raise RunAlreadyVerifiedError(run_id)
            row = conn.execute("SELECT transcript FROM runs WHERE id = ?", (run_id,)).fetchone()
        return _TRANSCRIPT_ADAPTER.validate_json(row[0])

    async def finalize_run(
        self,
        run_id: str,
        *,
        transcript: list[RunAction],
        score: float,
        coins: int,
        details: dict[str, Any],
    ) -> None:
        """Verify the run and credit the wallet in a single transaction."""
        async with self._lock:
            conn = self._db.connection
            finished_at = datetime.now(UTC).isoformat()
            try:
                conn.execute("BEGIN")
                cursor = conn.execute(
                    "UPDATE runs SET transcript = ?, score = ?, coins_awarded = ?, verified = 1, "
                    "details = ?, finished_at = ? WHERE id = ? AND verified = 0",
                    (
                        _TRANSCRIPT_ADAPTER.dump_json(transcript).decode(),
                        score,
                        coins,
                        json.dumps(details),
                        finished_at,
                        run_id,
                    ),
                )
                if cursor.rowcount == 0:
                    conn.rollback()
                    raise RunAlreadyVerifiedError(run_id)
                wallet = conn.execute(
                    "UPDATE wallets SET coins = coins + ? "
                    "WHERE player_id = (SELECT player_id FROM runs WHERE id = ?)",
                    (coins, run_id),
                )
                if wallet.rowcount != 1:
                    conn.rollback()
                    logger.error("run finalization rolled back, wallet missing", run_id=run_id)
                    raise StorageError(f"No wallet to credit for run {run_id}")
                conn.commit()
            except sqlite3.Error as exc:
                conn.rollback()
                logger.exception("run finalization rolled back", run_id=run_id)
                raise StorageError(f"Could not finalize run {run_id}") from exc

    async def count_runs(self, player_id: str, game_id: str, date: str) -> int:
        row = self._db.connection.execute(
            "SELECT COUNT(*) FROM runs WHERE player_id = ? AND game_id = ? AND date = ?",
            (player_id, game_id, date),
        ).fetchone()
        return int(row[0])

    async def get_awarded_coins(self, player_id: str, game_id: str, date: str) -> int:
        row = self._db.connection.execute(
            "SELECT COALESCE(SUM(coins_awarded), 0) FROM runs "
            "WHERE player_id = ? AND game_id = ? AND date = ? AND verified = 1",
            (player_id, game_id, date),
        ).fetchone()
        return int(row[0])

    async def get_verified_scores(self, player_id: str, game_id: str, date: str) -> list[float]:
        rows = self._db.connection.execute(
            "SELECT score FROM runs WHERE player_id = ? AND game_id = ? AND date = ? AND verified = 1",
            (player_id, game_id, date),
        ).fetchall()
        return [float(row[0]) for row in rows]

    async def get_player_runs(self, player_id: str, date: str) -> list[Run]:
        """Runs of one player on one date, oldest first."""
        rows = self._db.connection.execute(
            f"SELECT {_RUN_COLUMNS} FROM runs WHERE player_id = ? AND date = ? ORDER BY created_at",  # noqa: S608
            (player_id, date),
        ).fetchall()
        return [_row_to_run(row) for row in rows]
