"""Abstract interface for daily seed commitment persistence."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from shared.dal.models import DailySeedCommitment


class SeedRepository(ABC):
    """Stores at most one commitment per (game_id, date)."""

    @abstractmethod
    async def get_commitment(self, game_id: str, date: str) -> DailySeedCommitment | None: ...

    @abstractmethod
    async def create_commitment(self, commitment: DailySeedCommitment) -> bool:
        """Insert the commitment. Return False, without raising, if one already exists."""

    @abstractmethod
    async def reveal_seed(self, game_id: str, date: str, seed: str) -> None: ...
