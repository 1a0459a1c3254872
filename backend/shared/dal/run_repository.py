"""Abstract interface for run persistence."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from game.logic.types import RunAction
    from shared.dal.models import Run


class RunAlreadyVerifiedError(Exception):
    """The run was finalized before this write could apply."""


class StorageError(Exception):
    """The store failed to apply a write; nothing was persisted."""


class RunRepository(ABC):
    """Abstract interface for run persistence.

    finalize_run must apply the run update and the wallet credit as one
    atomic unit.
    """

    @abstractmethod
    async def create_run(self, run: Run) -> None: ...

    @abstractmethod
    async def get_run(self, run_id: str) -> Run | None: ...

    @abstractmethod
    async def append_action(self, run_id: str, action: RunAction) -> list[RunAction]:
        """Append to an unverified run's transcript and return the full transcript.

        Raises RunAlreadyVerifiedError if the run is verified.
        """

    @abstractmethod
    async def finalize_run(
        self,
        run_id: str,
        *,
        transcript: list[RunAction],
        score: float,
        coins: int,
        details: dict[str, Any],
    ) -> None:
        """Mark the run verified with its score and credit coins to the owner's wallet.

        Raises RunAlreadyVerifiedError if the run was already verified and
        StorageError if the transaction could not be committed.
        """

    @abstractmethod
    async def count_runs(self, player_id: str, game_id: str, date: str) -> int: ...

    @abstractmethod
    async def get_awarded_coins(self, player_id: str, game_id: str, date: str) -> int:
        """Sum of coins awarded by verified runs."""

    @abstractmethod
    async def get_verified_scores(self, player_id: str, game_id: str, date: str) -> list[float]: ...

    @abstractmethod
    async def get_player_runs(self, player_id: str, date: str) -> list[Run]: ...
