"""Request parsing helpers shared by the JSON handlers."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from game.service.exceptions import InvalidInputError

if TYPE_CHECKING:
    from starlette.requests import Request


async def read_json_object(request: Request) -> dict[str, Any]:
    """Parse the body as a JSON object or raise InvalidInputError."""
    try:
        body = await request.json()
    except ValueError as e:
        raise InvalidInputError("Invalid JSON body") from e
    if not isinstance(body, dict):
        raise InvalidInputError("JSON body must be an object")
    return body


def require_str(body: dict[str, Any], key: str) -> str:
    value = body.get(key)
    if not isinstance(value, str) or not value:
        raise InvalidInputError(f"{key} is required as a non-empty string")
    return value


def parse_flag(value: str | None) -> bool:
    """Query-string boolean: "1", "true", "yes" and "on" are true, anything else false."""
    return value is not None and value.strip().lower() in {"1", "true", "yes", "on"}
