"""Player model for Starlette AuthenticationMiddleware integration."""

from starlette.authentication import BaseUser


class AuthenticatedPlayer(BaseUser):
    """The player behind ``request.user`` once the session cookie is validated."""

    def __init__(self, player_id: str, nickname: str) -> None:
        self._player_id = player_id
        self._nickname = nickname

    @property
    def is_authenticated(self) -> bool:  # pragma: no cover
        return True

    @property
    def display_name(self) -> str:  # pragma: no cover
        return self._nickname

    @property
    def identity(self) -> str:  # pragma: no cover
        return self._player_id

    @property
    def nickname(self) -> str:
        return self._nickname

    @property
    def player_id(self) -> str:
        return self._player_id
