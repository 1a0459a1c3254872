"""Auth settings for accounts, sessions and the backing database."""

from pydantic import Field
from pydantic_settings import BaseSettings

from shared.auth.pin import DEFAULT_BCRYPT_ROUNDS

SEVEN_DAYS_SECONDS = 7 * 24 * 3600


class AuthSettings(BaseSettings):
    model_config = {"env_prefix": "AUTH_"}

    # SQLite database file path (players, wallets, runs, seeds, leaderboards)
    database_path: str = "backend/storage.db"

    # Cookie Secure flag -- True in production, False for local dev (HTTP)
    cookie_secure: bool = False

    # "bcrypt" in production; "sha256" only for tests
    pin_hasher: str = Field(default="bcrypt", pattern="^(bcrypt|sha256)$")
    bcrypt_rounds: int = Field(default=DEFAULT_BCRYPT_ROUNDS, ge=4, le=16)

    session_ttl_seconds: int = Field(default=SEVEN_DAYS_SECONDS, gt=0)
