"""Auth service coordinating registration, login, and session management."""

from __future__ import annotations

import re
from datetime import UTC, datetime
from typing import TYPE_CHECKING
from uuid import uuid4

import structlog

from shared.auth.models import Player

if TYPE_CHECKING:
    from shared.auth.models import AuthSession
    from shared.auth.pin import PinHasher
    from shared.auth.session_store import AuthSessionStore
    from shared.dal.player_repository import PlayerRepository

logger = structlog.get_logger()

NICKNAME_MIN_LENGTH = 3
NICKNAME_MAX_LENGTH = 20
NICKNAME_PATTERN = re.compile(r"^[A-Za-z0-9_]+$")

PIN_PATTERN = re.compile(r"^[0-9]{4,12}$")

DEFAULT_STARTING_COINS = 500


class AuthError(Exception):
    """Authentication or authorization failure."""


class AuthService:
    """Coordinate player registration, login, and session validation."""

    def __init__(
        self,
        player_repo: PlayerRepository,
        session_store: AuthSessionStore,
        *,
        pin_hasher: PinHasher,
        starting_coins: int = DEFAULT_STARTING_COINS,
    ) -> None:
        self._player_repo = player_repo
        self._session_store = session_store
        self._hasher = pin_hasher
        self._starting_coins = starting_coins

    async def register(self, nickname: str, pin: str) -> Player:
        """Create an account and its wallet with the starting coin balance."""
        _validate_nickname(nickname)
        _validate_pin(pin)
        if await self._player_repo.get_by_nickname(nickname) is not None:
            raise AuthError(f"Nickname '{nickname}' is already taken")

        player = Player(
            player_id=str(uuid4()),
            nickname=nickname,
            pin_hash=await self._hasher.hash(pin),
            created_at=datetime.now(UTC),
        )
        try:
            await self._player_repo.create_player(player, self._starting_coins)
        except ValueError as e:
            raise AuthError(str(e)) from e
        logger.info("player registered", player_id=player.player_id, nickname=nickname)
        return player

    async def login(self, nickname: str, pin: str) -> AuthSession:
        """Check the PIN and open a session. Unknown nickname and wrong PIN fail identically."""
        player = await self._player_repo.get_by_nickname(nickname)
        if player is None or not await self._hasher.verify(pin, player.pin_hash):
            raise AuthError("Invalid credentials")
        return self._session_store.create_session(player.player_id, player.nickname)

    def validate_session(self, session_id: str | None) -> AuthSession | None:
        """Return the session if valid and not expired, otherwise None."""
        if session_id is None:
            return None
        return self._session_store.get_session(session_id)

    def logout(self, session_id: str) -> None:
        self._session_store.delete_session(session_id)


def _validate_nickname(nickname: str) -> None:
    """Validate nickname: 3-20 chars, letters, digits and underscores."""
    if not NICKNAME_MIN_LENGTH <= len(nickname) <= NICKNAME_MAX_LENGTH:
        raise AuthError(f"Nickname must be between {NICKNAME_MIN_LENGTH} and {NICKNAME_MAX_LENGTH} characters")
    if not NICKNAME_PATTERN.match(nickname):
        raise AuthError("Nickname must contain only letters, numbers, and underscores")


def _validate_pin(pin: str) -> None:
    if not PIN_PATTERN.match(pin):
        raise AuthError("PIN must be 4 to 12 digits")
