"""Arcade authentication: Starlette backend, player model, and route policy."""

from arcade.auth.backend import SessionCookieBackend
from arcade.auth.models import AuthenticatedPlayer
from arcade.auth.policy import protected_api, public_route, validate_route_auth_policy

__all__ = [
    "AuthenticatedPlayer",
    "SessionCookieBackend",
    "protected_api",
    "public_route",
    "validate_route_auth_policy",
]
