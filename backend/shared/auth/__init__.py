"""Nickname + PIN accounts and cookie sessions."""

from shared.auth.models import AuthSession, Player
from shared.auth.pin import BcryptPinHasher, PinHasher, Sha256PinHasher, get_pin_hasher
from shared.auth.service import AuthError, AuthService
from shared.auth.session_store import AuthSessionStore
from shared.auth.settings import AuthSettings

__all__ = [
    "AuthError",
    "AuthService",
    "AuthSession",
    "AuthSessionStore",
    "AuthSettings",
    "BcryptPinHasher",
    "PinHasher",
    "Player",
    "Sha256PinHasher",
    "get_pin_hasher",
]
