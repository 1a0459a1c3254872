"""Run lifecycle endpoints.

Clients only ever send decisions. Scores and coins come back from the
server-side replay in finish_run.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from starlette.responses import JSONResponse

from arcade.views.common import read_json_object, require_str
from game.logic.rules import parse_game_id
from game.service.exceptions import InvalidInputError

if TYPE_CHECKING:
    from starlette.requests import Request

    from game.service.runs import RunService


async def start_run(request: Request) -> JSONResponse:
    """POST /api/run/start {gameId} -> {runId, seedHash, date}."""
    run_service: RunService = request.app.state.run_service
    body = await read_json_object(request)
    game_id = parse_game_id(body.get("gameId"))

    started = await run_service.start_run(request.user.player_id, game_id)
    return JSONResponse(
        {"runId": started.run_id, "seedHash": started.seed_hash, "date": started.date},
        status_code=201,
    )


async def append_action(request: Request) -> JSONResponse:
    """POST /api/run/action {runId, action} -> {ok, transcript}."""
    run_service: RunService = request.app.state.run_service
    body = await read_json_object(request)
    run_id = require_str(body, "runId")
    if "action" not in body:
        raise InvalidInputError("action is required")

    transcript = await run_service.append_action(request.user.player_id, run_id, body["action"])
    return JSONResponse(
        {"ok": True, "transcript": [action.model_dump(exclude_none=True) for action in transcript]},
    )


async def finish_run(request: Request) -> JSONResponse:
    """POST /api/run/finish {runId, transcript?} -> {score, coins, verified}."""
    run_service: RunService = request.app.state.run_service
    body = await read_json_object(request)
    run_id = require_str(body, "runId")

    finished = await run_service.finish_run(request.user.player_id, run_id, body.get("transcript"))
    # details contain the day's world (mine cells, crash point) and are never returned
    return JSONResponse({"score": finished.score, "coins": finished.coins, "verified": finished.verified})
