"""Starlette AuthenticationBackend that validates the session cookie."""

from __future__ import annotations

from typing import TYPE_CHECKING

from starlette.authentication import AuthCredentials, AuthenticationBackend

from arcade.auth.models import AuthenticatedPlayer

if TYPE_CHECKING:
    from starlette.requests import HTTPConnection

    from shared.auth.service import AuthService

SESSION_COOKIE = "session_id"


class SessionCookieBackend(AuthenticationBackend):
    """Resolve the ``session_id`` cookie to a player.

    Requests without a valid session stay anonymous; whether that is allowed
    is decided per route by the auth policy wrappers.
    """

    def __init__(self, auth_service: AuthService) -> None:
        self._auth_service = auth_service

    async def authenticate(
        self,
        conn: HTTPConnection,
    ) -> tuple[AuthCredentials, AuthenticatedPlayer] | None:
        session = self._auth_service.validate_session(conn.cookies.get(SESSION_COOKIE))
        if session is None:
            return None
        return AuthCredentials(["authenticated"]), AuthenticatedPlayer(
            player_id=session.player_id,
            nickname=session.nickname,
        )
