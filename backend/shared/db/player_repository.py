"""SQLite-backed player repository."""

from __future__ import annotations

import asyncio
import json
import sqlite3
from typing import TYPE_CHECKING

import structlog

from shared.auth.models import Player
from shared.dal.player_repository import PlayerRepository

if TYPE_CHECKING:
    from shared.db.connection import Database

logger = structlog.get_logger()


class SqlitePlayerRepository(PlayerRepository):
    """SQLite implementation of PlayerRepository.

    The player row and its wallet are inserted in one transaction under an
    asyncio lock. Relies on database uniqueness constraints and maps
    IntegrityError to domain ValueError.
    """

    def __init__(self, db: Database) -> None:
        self._db = db
        self._lock = asyncio.Lock()

    async def create_player(self, player: Player, starting_coins: int) -> None:
        """Insert a player and its wallet. Raises ValueError on duplicate id or nickname."""
        async with self._lock:
            conn = self._db.connection
            try:
                conn.execute("BEGIN")
                conn.execute(
                    "INSERT INTO players (id, nickname, data) VALUES (?, ?, ?)",
                    (player.player_id, player.nickname, player.model_dump_json()),
                )
                conn.execute(
                    "INSERT INTO wallets (player_id, coins) VALUES (?, ?)",
                    (player.player_id, starting_coins),
                )
                conn.commit()
            except sqlite3.IntegrityError as exc:
                conn.rollback()
                error_msg = str(exc).lower()
                if "players.nickname" in error_msg or "idx_players_nickname" in error_msg:
                    raise ValueError(f"Nickname '{player.nickname}' already taken") from exc
                if "players.id" in error_msg:
                    raise ValueError(f"Player with id '{player.player_id}' already exists") from exc
                raise ValueError(str(exc)) from exc  # pragma: no cover

    async def get_by_id(self, player_id: str) -> Player | None:
        row = self._db.connection.execute(
            "SELECT data FROM players WHERE id = ?",
            (player_id,),
        ).fetchone()
        if row is None:
            return None
        return Player.model_validate(json.loads(row[0]))

    async def get_by_nickname(self, nickname: str) -> Player | None:
        """Look up a player by nickname (case-insensitive)."""
        row = self._db.connection.execute(
            "SELECT data FROM players WHERE nickname = ? COLLATE NOCASE",
            (nickname,),
        ).fetchone()
        if row is None:
            return None
        return Player.model_validate(json.loads(row[0]))

    async def get_coins(self, player_id: str) -> int:
        row = self._db.connection.execute(
            "SELECT coins FROM wallets WHERE player_id = ?",
            (player_id,),
        ).fetchone()
        return int(row[0]) if row is not None else 0

    async def add_friend(self, player_id: str, friend_id: str) -> bool:
        async with self._lock:
            try:
                self._db.connection.execute(
                    "INSERT INTO friendships (player_id, friend_id) VALUES (?, ?)",
                    (player_id, friend_id),
                )
                self._db.connection.commit()
            except sqlite3.IntegrityError:
                self._db.connection.rollback()
                logger.debug("friendship already exists", player_id=player_id, friend_id=friend_id)
                return False
            return True

    async def get_friend_ids(self, player_id: str) -> set[str]:
        rows = self._db.connection.execute(
            "SELECT friend_id FROM friendships WHERE player_id = ?",
            (player_id,),
        ).fetchall()
        return {row[0] for row in rows}
