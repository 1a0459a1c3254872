"""SQLite database connection and schema management."""

import os
import sqlite3
from pathlib import Path

import structlog

logger = structlog.get_logger()

_DB_FILE_PERMISSIONS = 0o600
BUSY_TIMEOUT_MS = 5000

_SCHEMA_SQL = """\
CREATE TABLE IF NOT EXISTS players (
    id TEXT PRIMARY KEY,
    nickname TEXT NOT NULL,
    data TEXT NOT NULL
);

CREATE UNIQUE INDEX IF NOT EXISTS idx_players_nickname
    ON players (nickname COLLATE NOCASE);

CREATE TABLE IF NOT EXISTS wallets (
    player_id TEXT PRIMARY KEY REFERENCES players (id),
    coins INTEGER NOT NULL DEFAULT 0
);

CREATE TABLE IF NOT EXISTS friendships (
    player_id TEXT NOT NULL REFERENCES players (id),
    friend_id TEXT NOT NULL REFERENCES players (id),
    PRIMARY KEY (player_id, friend_id)
);

CREATE TABLE IF NOT EXISTS daily_seeds (
    game_id TEXT NOT NULL,
    date TEXT NOT NULL,
    seed_hash TEXT NOT NULL,
    revealed_seed TEXT,
    created_at TEXT NOT NULL,
    PRIMARY KEY (game_id, date)
);

CREATE TABLE IF NOT EXISTS runs (
    id TEXT PRIMARY KEY,
    player_id TEXT NOT NULL REFERENCES players (id),
    game_id TEXT NOT NULL,
    date TEXT NOT NULL,
    transcript TEXT NOT NULL DEFAULT '[]',
    score REAL NOT NULL DEFAULT 0,
    coins_awarded INTEGER NOT NULL DEFAULT 0,
    verified INTEGER NOT NULL DEFAULT 0,
    details TEXT NOT NULL DEFAULT '{}',
    created_at TEXT NOT NULL,
    finished_at TEXT
);

CREATE INDEX IF NOT EXISTS idx_runs_player_game_date
    ON runs (player_id, game_id, date);

CREATE TABLE IF NOT EXISTS leaderboard_aggregates (
    game_id TEXT NOT NULL,
    date TEXT NOT NULL,
    player_id TEXT NOT NULL REFERENCES players (id),
    daily_score REAL NOT NULL,
    updated_at TEXT NOT NULL,
    PRIMARY KEY (game_id, date, player_id)
);

CREATE INDEX IF NOT EXISTS idx_leaderboard_game_player
    ON leaderboard_aggregates (game_id, player_id);
"""


class Database:
    """SQLite database wrapper with schema management."""

    def __init__(self, path: str | Path) -> None:
        self._path = str(path)
        self._conn: sqlite3.Connection | None = None

    @property
    def connection(self) -> sqlite3.Connection:
        """Return the active connection or raise if disconnected."""
        if self._conn is None:
            raise RuntimeError("Database is not connected")
        return self._conn

    def connect(self) -> None:
        """Open the database, apply pragmas, create schema, and harden file permissions."""
        parent = Path(self._path).parent
        parent.mkdir(parents=True, exist_ok=True)

        self._conn = sqlite3.connect(self._path, check_same_thread=False)
        self._conn.execute("PRAGMA journal_mode=WAL")
        self._conn.execute("PRAGMA foreign_keys=ON")
        self._conn.execute(f"PRAGMA busy_timeout={BUSY_TIMEOUT_MS}")
        self._conn.executescript(_SCHEMA_SQL)

        self._harden_permissions()
        logger.info("database connected", path=self._path)

    def close(self) -> None:
        if self._conn is not None:
            self._conn.close()
            self._conn = None

    def _harden_permissions(self) -> None:
        """Set restrictive file permissions on POSIX systems (best effort).

        Covers the WAL/SHM sibling files too, since they hold database content
        (PIN hashes).
        """
        if os.name != "posix":  # pragma: no cover
            return
        for suffix in ("", "-wal", "-shm"):
            p = Path(self._path + suffix)
            if p.exists():
                try:
                    p.chmod(_DB_FILE_PERMISSIONS)
                except OSError:
                    logger.warning("could not set file permissions", permissions=oct(_DB_FILE_PERMISSIONS), path=str(p))
