"""Route auth policy helpers for fail-closed authorization.

Each helper wraps a route endpoint and sets the ``AUTH_POLICY_ATTR`` marker
so that startup validation can verify every route has an explicit auth policy.
"""

from __future__ import annotations

import functools
from typing import TYPE_CHECKING

from starlette.authentication import requires
from starlette.routing import Route

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable
    from typing import Any

    from starlette.requests import Request
    from starlette.responses import Response
    from starlette.routing import BaseRoute

AUTH_POLICY_ATTR = "__auth_policy__"

PROTECTED_API = "protected_api"
PUBLIC = "public"


def protected_api(endpoint: Callable[..., Any]) -> Callable[..., Any]:
    """Require a session; unauthenticated requests get a 401."""
    wrapped = requires("authenticated", status_code=401)(endpoint)
    setattr(wrapped, AUTH_POLICY_ATTR, PROTECTED_API)
    return wrapped


def public_route(endpoint: Callable[..., Awaitable[Response]]) -> Callable[..., Awaitable[Response]]:
    """Mark endpoint as explicitly public (a session is optional).

    Returns a thin wrapper so the marker lives on the wrapper, not on the
    original callable. Every arcade endpoint is async.
    """

    @functools.wraps(endpoint)
    async def wrapper(request: Request, **kwargs: str) -> Response:
        return await endpoint(request, **kwargs)

    setattr(wrapper, AUTH_POLICY_ATTR, PUBLIC)
    return wrapper


def collect_protected_api_paths(routes: list[BaseRoute]) -> set[str]:
    paths: set[str] = set()
    for route in routes:
        if isinstance(route, Route) and getattr(route.endpoint, AUTH_POLICY_ATTR, None) == PROTECTED_API:
            paths.add(route.path)
    return paths


def validate_route_auth_policy(routes: list[BaseRoute]) -> None:
    """Verify every Route has an auth policy marker. Mount routes are exempt.

    Raises RuntimeError listing all unclassified routes if any are found.
    """
    unclassified = [
        f"{route.path} ({route.name or getattr(route.endpoint, '__name__', 'unknown')})"
        for route in routes
        if isinstance(route, Route) and not hasattr(route.endpoint, AUTH_POLICY_ATTR)
    ]
    if unclassified:
        msg = f"Unclassified routes missing auth policy: {', '.join(unclassified)}"
        raise RuntimeError(msg)
