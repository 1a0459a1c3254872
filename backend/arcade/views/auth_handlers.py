"""Auth endpoints: register, login and logout with nickname + PIN."""

from __future__ import annotations

from typing import TYPE_CHECKING

from starlette.responses import JSONResponse

from arcade.auth.backend import SESSION_COOKIE
from arcade.views.common import read_json_object, require_str
from shared.auth.service import AuthError

if TYPE_CHECKING:
    from starlette.requests import Request

    from shared.auth.models import AuthSession
    from shared.auth.service import AuthService
    from shared.auth.settings import AuthSettings


def _session_response(session: AuthSession, auth_settings: AuthSettings, *, status_code: int = 200) -> JSONResponse:
    """Answer with the session's player and set the session cookie."""
    response = JSONResponse(
        {"playerId": session.player_id, "nickname": session.nickname},
        status_code=status_code,
    )
    response.set_cookie(
        key=SESSION_COOKIE,
        value=session.session_id,
        httponly=True,
        samesite="lax",
        secure=auth_settings.cookie_secure,
        max_age=auth_settings.session_ttl_seconds,
        path="/",
    )
    return response


async def register(request: Request) -> JSONResponse:
    """POST /api/auth/register {nickname, pin} - create account and log in."""
    auth_service: AuthService = request.app.state.auth_service
    body = await read_json_object(request)
    nickname = require_str(body, "nickname")
    pin = require_str(body, "pin")

    try:
        await auth_service.register(nickname, pin)
        session = await auth_service.login(nickname, pin)
    except AuthError as e:
        return JSONResponse({"error": str(e)}, status_code=400)
    return _session_response(session, request.app.state.auth_settings, status_code=201)


async def login(request: Request) -> JSONResponse:
    """POST /api/auth/login {nickname, pin}."""
    auth_service: AuthService = request.app.state.auth_service
    body = await read_json_object(request)

    try:
        session = await auth_service.login(require_str(body, "nickname"), require_str(body, "pin"))
    except AuthError as e:
        return JSONResponse({"error": str(e)}, status_code=401)
    return _session_response(session, request.app.state.auth_settings)


async def logout(request: Request) -> JSONResponse:
    auth_service: AuthService = request.app.state.auth_service
    session_id = request.cookies.get(SESSION_COOKIE)
    if session_id:
        auth_service.logout(session_id)
    response = JSONResponse({"ok": True})
    response.delete_cookie(key=SESSION_COOKIE, path="/")
    return response
