"""Abstract interface for player, wallet and friendship persistence."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from shared.auth.models import Player


class PlayerRepository(ABC):
    """Abstract interface for player persistence.

    Implementations can use SQLite, PostgreSQL, etc.
    """

    @abstractmethod
    async def create_player(self, player: Player, starting_coins: int) -> None:
        """Insert the player together with a wallet holding starting_coins."""

    @abstractmethod
    async def get_by_id(self, player_id: str) -> Player | None: ...

    @abstractmethod
    async def get_by_nickname(self, nickname: str) -> Player | None: ...

    @abstractmethod
    async def get_coins(self, player_id: str) -> int: ...

    @abstractmethod
    async def add_friend(self, player_id: str, friend_id: str) -> bool:
        """Record a directed friendship. Return False if it already existed."""

    @abstractmethod
    async def get_friend_ids(self, player_id: str) -> set[str]: ...
