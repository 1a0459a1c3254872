from __future__ import annotations

import contextlib
from http import HTTPStatus
from typing import TYPE_CHECKING, cast

import structlog
from starlette.applications import Starlette
from starlette.exceptions import HTTPException
from starlette.middleware.authentication import AuthenticationMiddleware
from starlette.middleware.cors import CORSMiddleware
from starlette.responses import JSONResponse, Response
from starlette.routing import Route

from arcade.auth.backend import SessionCookieBackend
from arcade.auth.policy import (
    collect_protected_api_paths,
    protected_api,
    public_route,
    validate_route_auth_policy,
)
from arcade.server.middleware import SecurityHeadersMiddleware, SlashNormalizationMiddleware
from arcade.server.settings import ArcadeServerSettings
from arcade.views import (
    add_friend,
    append_action,
    finish_run,
    get_leaderboard,
    get_seed,
    login,
    logout,
    me,
    register,
    start_run,
)
from game.logic.exceptions import UnknownGameError
from game.logic.rules import GAME_CATALOG
from game.service.exceptions import (
    ArcadeError,
    InvalidInputError,
    PersistenceError,
    RunAlreadyFinishedError,
    RunNotFoundError,
    SeedIntegrityError,
    SeedNotFoundError,
    TicketsExhaustedError,
)
from game.service.leaderboard import LeaderboardAggregator
from game.service.rewards import RewardPolicy
from game.service.runs import RunService
from game.service.seed_authority import SeedAuthority
from shared.auth import AuthService, AuthSessionStore, get_pin_hasher
from shared.auth.settings import AuthSettings
from shared.build_info import APP_VERSION, GIT_COMMIT
from shared.daily import CivilClock
from shared.db import (
    Database,
    SqliteLeaderboardRepository,
    SqlitePlayerRepository,
    SqliteRunRepository,
    SqliteSeedRepository,
)
from shared.logging import setup_logging

logger = structlog.get_logger()

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator, Awaitable, Callable

    from starlette.requests import Request

PERSISTENCE_RETRY_AFTER_SECONDS = 1

_ERROR_STATUS: tuple[tuple[type[Exception], int], ...] = (
    (InvalidInputError, 422),
    (UnknownGameError, 422),
    (RunNotFoundError, HTTPStatus.NOT_FOUND),
    (SeedNotFoundError, HTTPStatus.NOT_FOUND),
    (RunAlreadyFinishedError, HTTPStatus.CONFLICT),
    (TicketsExhaustedError, HTTPStatus.TOO_MANY_REQUESTS),
    (PersistenceError, HTTPStatus.SERVICE_UNAVAILABLE),
    (SeedIntegrityError, HTTPStatus.INTERNAL_SERVER_ERROR),
)


def _make_auth_error_handler(
    protected_api_paths: set[str],
) -> Callable[[Request, Exception], Awaitable[Response]]:
    """Build an HTTPException handler that answers in JSON."""

    async def _auth_error_handler(request: Request, exc: Exception) -> Response:
        http_exc = cast("HTTPException", exc)
        if http_exc.status_code == HTTPStatus.UNAUTHORIZED and request.url.path in protected_api_paths:
            return JSONResponse({"error": "Authentication required"}, status_code=HTTPStatus.UNAUTHORIZED)
        if http_exc.status_code in {HTTPStatus.NO_CONTENT, HTTPStatus.NOT_MODIFIED}:
            return Response(status_code=http_exc.status_code, headers=http_exc.headers)
        return JSONResponse(
            {"error": http_exc.detail or HTTPStatus(http_exc.status_code).phrase},
            status_code=http_exc.status_code,
            headers=http_exc.headers,
        )

    return _auth_error_handler


async def _domain_error_handler(request: Request, exc: Exception) -> Response:
    """Map domain errors raised by the views to JSON error responses."""
    status = next((code for error_cls, code in _ERROR_STATUS if isinstance(exc, error_cls)), HTTPStatus.BAD_REQUEST)
    headers = None
    if isinstance(exc, PersistenceError):
        headers = {"Retry-After": str(PERSISTENCE_RETRY_AFTER_SECONDS)}
    if status >= HTTPStatus.INTERNAL_SERVER_ERROR:
        logger.error("request failed", path=request.url.path, error=str(exc), error_type=type(exc).__name__)
    else:
        logger.debug("request rejected", path=request.url.path, error=str(exc), status=int(status))
    return JSONResponse({"error": str(exc)}, status_code=status, headers=headers)


async def health(_request: Request) -> JSONResponse:
    return JSONResponse({"status": "ok", "version": APP_VERSION, "commit": GIT_COMMIT})


async def list_games(_request: Request) -> JSONResponse:
    return JSONResponse(
        {
            "games": [
                {
                    "id": game.id.value,
                    "title": game.title,
                    "description": game.description,
                    "tickets": game.rules.tickets,
                    "bestOf": game.rules.best_of,
                    "maxCoinsPerDay": game.rules.max_coins_per_day,
                }
                for game in GAME_CATALOG
            ],
        },
    )


def create_app(
    settings: ArcadeServerSettings | None = None,
    auth_settings: AuthSettings | None = None,
    today: Callable[[], str] | None = None,
) -> Starlette:
    """Build the arcade API. `today` overrides the civil-date clock (tests)."""
    if settings is None:  # pragma: no cover
        settings = ArcadeServerSettings()  # type: ignore[call-arg]
    if auth_settings is None:  # pragma: no cover
        auth_settings = AuthSettings()
    if today is None:
        today = CivilClock(settings.timezone)

    routes = [
        # Protected JSON routes (401 JSON when unauthenticated)
        Route("/api/me", protected_api(me), methods=["GET"], name="me"),
        Route("/api/friends", protected_api(add_friend), methods=["POST"], name="add_friend"),
        Route("/api/run/start", protected_api(start_run), methods=["POST"], name="start_run"),
        Route("/api/run/action", protected_api(append_action), methods=["POST"], name="append_action"),
        Route("/api/run/finish", protected_api(finish_run), methods=["POST"], name="finish_run"),
        # Public routes
        Route("/health", public_route(health), methods=["GET"], name="health"),
        Route("/api/games", public_route(list_games), methods=["GET"], name="list_games"),
        Route("/api/auth/register", public_route(register), methods=["POST"], name="register"),
        Route("/api/auth/login", public_route(login), methods=["POST"], name="login"),
        Route("/api/auth/logout", public_route(logout), methods=["POST"], name="logout"),
        Route("/api/leaderboard", public_route(get_leaderboard), methods=["GET"], name="get_leaderboard"),
        Route("/api/seeds/{gameId}/{date}", public_route(get_seed), methods=["GET"], name="get_seed"),
    ]

    validate_route_auth_policy(routes)
    protected_api_paths = collect_protected_api_paths(routes)

    db = Database(auth_settings.database_path)
    db.connect()
    player_repo = SqlitePlayerRepository(db)
    run_repo = SqliteRunRepository(db)
    leaderboard_repo = SqliteLeaderboardRepository(db)

    session_store = AuthSessionStore(ttl_seconds=auth_settings.session_ttl_seconds)
    hasher = get_pin_hasher(auth_settings.pin_hasher, rounds=auth_settings.bcrypt_rounds)
    auth_service = AuthService(
        player_repo,
        session_store,
        pin_hasher=hasher,
        starting_coins=settings.starting_coins,
    )

    seed_authority = SeedAuthority(settings.seed_secret.get_secret_value(), SqliteSeedRepository(db))
    leaderboard = LeaderboardAggregator(run_repo, leaderboard_repo, player_repo)
    run_service = RunService(
        seed_authority,
        run_repo,
        RewardPolicy(run_repo),
        leaderboard,
        today=today,
        max_transcript_actions=settings.max_transcript_actions,
    )

    @contextlib.asynccontextmanager
    async def lifespan(_app: Starlette) -> AsyncGenerator[None]:  # pragma: no cover
        session_store.start_cleanup()
        yield
        await session_store.stop_cleanup()
        db.close()

    exception_handlers: dict[type[Exception] | int, Callable[[Request, Exception], Awaitable[Response]]] = {
        HTTPException: _make_auth_error_handler(protected_api_paths),
        ArcadeError: _domain_error_handler,
        UnknownGameError: _domain_error_handler,
    }
    app = Starlette(routes=routes, lifespan=lifespan, exception_handlers=exception_handlers)
    app.add_middleware(SlashNormalizationMiddleware)  # type: ignore[arg-type]
    app.add_middleware(AuthenticationMiddleware, backend=SessionCookieBackend(auth_service))  # type: ignore[arg-type]
    app.add_middleware(
        CORSMiddleware,  # type: ignore[arg-type]
        allow_origins=settings.cors_origins,
        allow_methods=["GET", "POST"],
        allow_headers=["Content-Type"],
        allow_credentials=True,
    )
    app.add_middleware(SecurityHeadersMiddleware)  # type: ignore[arg-type]

    app.state.db = db
    app.state.settings = settings
    app.state.auth_settings = auth_settings
    app.state.today = today
    app.state.auth_service = auth_service
    app.state.player_repo = player_repo
    app.state.seed_authority = seed_authority
    app.state.leaderboard = leaderboard
    app.state.run_service = run_service

    logger.info("arcade server ready", timezone=settings.timezone, database=auth_settings.database_path)
    return app


def get_app() -> Starlette:  # pragma: no cover
    """Factory function for uvicorn --factory arcade.server.app:get_app."""
    s = ArcadeServerSettings()  # type: ignore[call-arg]
    auth = AuthSettings()
    setup_logging(log_dir=s.log_dir)
    return create_app(settings=s, auth_settings=auth)
