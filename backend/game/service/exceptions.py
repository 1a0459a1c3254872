"""Domain errors raised by the run lifecycle and mapped to HTTP statuses by the views."""


class ArcadeError(Exception):
    """Base class for errors surfaced to API clients."""


class InvalidInputError(ArcadeError):
    """A request was rejected before any write."""


class RunNotFoundError(ArcadeError):
    """The run does not exist or belongs to another player."""

    def __init__(self, run_id: str) -> None:
        self.run_id = run_id
        super().__init__(f"Run not found: {run_id}")


class RunAlreadyFinishedError(ArcadeError):
    def __init__(self, run_id: str) -> None:
        self.run_id = run_id
        super().__init__(f"Run already finished: {run_id}")


class TicketsExhaustedError(ArcadeError):
    """The player has used every run the game allows today."""

    def __init__(self, game_id: str, tickets: int) -> None:
        self.game_id = game_id
        self.tickets = tickets
        super().__init__(f"No tickets left for {game_id} today ({tickets} per day)")


class PersistenceError(ArcadeError):
    """A write could not be committed. Nothing was persisted, the call may be retried."""


class SeedIntegrityError(ArcadeError):
    """The stored commitment does not match the seed derived from the current secret."""

    def __init__(self, game_id: str, date: str) -> None:
        self.game_id = game_id
        self.date = date
        super().__init__(f"Seed commitment mismatch for {game_id} on {date}")


class SeedNotFoundError(ArcadeError):
    """No commitment exists for the date, so there is nothing to publish."""

    def __init__(self, game_id: str, date: str) -> None:
        self.game_id = game_id
        self.date = date
        super().__init__(f"No seed committed for {game_id} on {date}")
