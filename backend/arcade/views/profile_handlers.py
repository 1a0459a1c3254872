"""Player profile and friends endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from starlette.responses import JSONResponse

from arcade.views.common import read_json_object, require_str
from game.logic.rules import GAME_RULES
from game.service.exceptions import InvalidInputError

if TYPE_CHECKING:
    from starlette.requests import Request

    from game.service.runs import RunService
    from shared.dal.player_repository import PlayerRepository


async def me(request: Request) -> JSONResponse:
    """GET /api/me - wallet balance, today's runs and tickets left per game."""
    player_repo: PlayerRepository = request.app.state.player_repo
    run_service: RunService = request.app.state.run_service
    player_id = request.user.player_id

    runs = await run_service.runs_today(player_id)
    used: dict[str, int] = {}
    for run in runs:
        used[run.game_id.value] = used.get(run.game_id.value, 0) + 1

    return JSONResponse(
        {
            "playerId": player_id,
            "nickname": request.user.nickname,
            "coins": await player_repo.get_coins(player_id),
            "ticketsLeft": {
                game_id.value: max(0, rules.tickets - used.get(game_id.value, 0))
                for game_id, rules in GAME_RULES.items()
            },
            "runsToday": [
                {
                    "runId": run.run_id,
                    "gameId": run.game_id.value,
                    "date": run.date,
                    "verified": run.verified,
                    "score": run.score,
                    "coinsAwarded": run.coins_awarded,
                }
                for run in runs
            ],
        },
    )


async def add_friend(request: Request) -> JSONResponse:
    """POST /api/friends {nickname} - follow another player."""
    player_repo: PlayerRepository = request.app.state.player_repo
    body = await read_json_object(request)
    nickname = require_str(body, "nickname")

    friend = await player_repo.get_by_nickname(nickname)
    if friend is None:
        return JSONResponse({"error": f"No player named '{nickname}'"}, status_code=404)
    if friend.player_id == request.user.player_id:
        raise InvalidInputError("You cannot follow yourself")

    added = await player_repo.add_friend(request.user.player_id, friend.player_id)
    return JSONResponse({"ok": True, "added": added, "friend": friend.nickname})
