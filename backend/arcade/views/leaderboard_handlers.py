"""Leaderboard and seed transparency endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from starlette.responses import JSONResponse

from arcade.views.common import parse_flag
from game.logic.enums import LeaderboardScope
from game.logic.rules import parse_game_id
from game.logic.seeds import validate_date
from game.service.exceptions import InvalidInputError

if TYPE_CHECKING:
    from collections.abc import Callable

    from starlette.requests import Request

    from game.service.leaderboard import LeaderboardAggregator
    from game.service.seed_authority import SeedAuthority


def _requester_id(request: Request) -> str | None:
    return request.user.player_id if request.user.is_authenticated else None


def _parse_date(value: str | None, today: str) -> str:
    if value is None or value == "":
        return today
    try:
        return validate_date(value)
    except ValueError as e:
        raise InvalidInputError(str(e)) from e


async def get_leaderboard(request: Request) -> JSONResponse:
    """GET /api/leaderboard?gameId&scope&friendsOnly&date.

    Public; when a session is present the response also carries the caller's
    own rank, and friendsOnly narrows the board to the caller and the players
    they follow.
    """
    aggregator: LeaderboardAggregator = request.app.state.leaderboard
    today: Callable[[], str] = request.app.state.today
    params = request.query_params

    game_id = parse_game_id(params.get("gameId"))
    try:
        scope = LeaderboardScope(params.get("scope", LeaderboardScope.DAILY.value))
    except ValueError as e:
        raise InvalidInputError(f"scope must be one of: {', '.join(s.value for s in LeaderboardScope)}") from e
    date = _parse_date(params.get("date"), today())

    view = await aggregator.rank(
        game_id,
        scope,
        date,
        _requester_id(request),
        friends_only=parse_flag(params.get("friendsOnly")),
    )
    return JSONResponse(
        {
            "gameId": view.game_id.value,
            "scope": view.scope.value,
            "date": view.date,
            "top": [
                {"rank": e.rank, "playerId": e.player_id, "nickname": e.nickname, "score": e.score} for e in view.top
            ],
            "myRank": view.my_rank,
            "myScore": view.my_score,
        },
    )


async def get_seed(request: Request) -> JSONResponse:
    """GET /api/seeds/{gameId}/{date} - the day's commitment, plus the seed once the day is over."""
    seeds: SeedAuthority = request.app.state.seed_authority
    today: Callable[[], str] = request.app.state.today

    game_id = parse_game_id(request.path_params["gameId"])
    commitment = await seeds.reveal(game_id, request.path_params["date"], today())

    payload = {"gameId": commitment.game_id.value, "date": commitment.date, "seedHash": commitment.seed_hash}
    if commitment.revealed_seed is not None:
        payload["revealedSeed"] = commitment.revealed_seed
    return JSONResponse(payload)
