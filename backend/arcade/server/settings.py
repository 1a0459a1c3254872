"""Arcade server configuration via environment variables."""

from typing import TYPE_CHECKING
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings

from game.service.runs import DEFAULT_MAX_TRANSCRIPT_ACTIONS
from shared.auth.service import DEFAULT_STARTING_COINS
from shared.daily import DEFAULT_TIMEZONE
from shared.validators import StringListEnvSettingsSource, parse_string_list

if TYPE_CHECKING:
    from pydantic_settings.sources.base import PydanticBaseSettingsSource


class ArcadeServerSettings(BaseSettings):
    model_config = {"env_prefix": "ARCADE_"}

    # HMAC key for daily seeds. Rotating it mid-day breaks that day's commitments.
    seed_secret: SecretStr
    timezone: str = DEFAULT_TIMEZONE
    log_dir: str = "backend/logs/arcade"
    cors_origins: list[str] = []
    starting_coins: int = Field(default=DEFAULT_STARTING_COINS, ge=0)
    max_transcript_actions: int = Field(default=DEFAULT_MAX_TRANSCRIPT_ACTIONS, ge=1, le=4096)

    @field_validator("seed_secret")
    @classmethod
    def validate_seed_secret(cls, v: SecretStr) -> SecretStr:
        if not v.get_secret_value().strip():
            raise ValueError("seed_secret must not be empty")
        return v

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, v: str) -> str:
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"Unknown time zone: {v!r}") from e
        return v

    @field_validator("cors_origins", mode="before")
    @classmethod
    def validate_cors_origins(cls, v: str | list[str]) -> list[str]:
        return parse_string_list(v, allow_empty=True)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,  # noqa: ARG003
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (init_settings, StringListEnvSettingsSource(settings_cls), dotenv_settings, file_secret_settings)
