"""In-memory session store with periodic expiry cleanup."""

import asyncio
import contextlib
import time
from uuid import uuid4

import structlog

from shared.auth.models import AuthSession

CLEANUP_INTERVAL_SECONDS = 300  # 5 minutes
DEFAULT_SESSION_TTL_SECONDS = 7 * 24 * 3600

logger = structlog.get_logger()


class AuthSessionStore:
    """Sessions keyed by the opaque id stored in the player's cookie.

    Sessions are ephemeral: a server restart means logging in again.
    Call start_cleanup() on app startup and stop_cleanup() on shutdown.
    """

    def __init__(self, ttl_seconds: int = DEFAULT_SESSION_TTL_SECONDS) -> None:
        self._ttl_seconds = ttl_seconds
        self._sessions: dict[str, AuthSession] = {}
        self._cleanup_task: asyncio.Task[None] | None = None

    @property
    def ttl_seconds(self) -> int:
        return self._ttl_seconds

    def create_session(self, player_id: str, nickname: str) -> AuthSession:
        now = time.time()
        session = AuthSession(
            session_id=str(uuid4()),
            player_id=player_id,
            nickname=nickname,
            created_at=now,
            expires_at=now + self._ttl_seconds,
        )
        self._sessions[session.session_id] = session
        return session

    def get_session(self, session_id: str) -> AuthSession | None:
        """Return a live session, dropping it if it has expired."""
        session = self._sessions.get(session_id)
        if session is None:
            return None
        if time.time() > session.expires_at:
            del self._sessions[session_id]
            return None
        return session

    def delete_session(self, session_id: str) -> None:
        self._sessions.pop(session_id, None)

    def cleanup_expired(self) -> int:
        """Remove all expired sessions. Return count of removed sessions."""
        now = time.time()
        expired = [sid for sid, s in self._sessions.items() if now > s.expires_at]
        for sid in expired:
            del self._sessions[sid]
        if expired:
            logger.info("cleaned up expired sessions", count=len(expired))
        return len(expired)

    def start_cleanup(self) -> None:
        if self._cleanup_task is not None and not self._cleanup_task.done():
            return
        self._cleanup_task = asyncio.create_task(self._cleanup_loop())

    async def stop_cleanup(self) -> None:
        if self._cleanup_task is not None:
            self._cleanup_task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._cleanup_task
            self._cleanup_task = None

    async def _cleanup_loop(self) -> None:
        while True:
            await asyncio.sleep(CLEANUP_INTERVAL_SECONDS)
            self.cleanup_expired()
