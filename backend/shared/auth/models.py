"""Player account and session models for authentication."""

from dataclasses import dataclass
from datetime import datetime

from pydantic import BaseModel


class Player(BaseModel, frozen=True):
    """Player account stored in the player repository."""

    player_id: str
    nickname: str
    pin_hash: str  # bcrypt hash in production, "sha256$" digest in tests
    created_at: datetime


@dataclass
class AuthSession:
    """Server-side session for authenticated players."""

    session_id: str  # UUID, stored in cookie
    player_id: str
    nickname: str
    created_at: float  # time.time()
    expires_at: float  # time.time() + TTL
