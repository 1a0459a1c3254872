"""Typed domain exceptions raised by the pure game logic."""


class GameLogicError(Exception):
    """Base exception for the simulation layer."""


class UnknownGameError(GameLogicError, ValueError):
    """Raised when a game identifier has no simulator.

    Fatal to the call that asked for it, never to the process.
    """

    def __init__(self, game_id: object) -> None:
        self.game_id = game_id
        super().__init__(f"Unknown game: {game_id!r}")
