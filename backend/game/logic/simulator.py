"""Dispatch a (seed, transcript) pair to the matching game simulator.

The game set is closed, so dispatch is a match over GameId rather than a
registry. Every simulator is a pure function of its inputs.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from game.logic.blackjack import simulate_blackjack
from game.logic.crash import simulate_crash
from game.logic.enums import GameId
from game.logic.exceptions import UnknownGameError
from game.logic.mines import simulate_mines
from game.logic.plinko import simulate_plinko
from game.logic.roulette import simulate_roulette

if TYPE_CHECKING:
    from collections.abc import Sequence

    from game.logic.types import RunAction, SimulationResult


def simulate(game_id: GameId | str, seed: str, transcript: Sequence[RunAction]) -> SimulationResult:
    """Replay a transcript against the daily seed and return the authoritative score."""
    match game_id:
        case GameId.CRASH:
            return simulate_crash(seed, transcript)
        case GameId.MINES:
            return simulate_mines(seed, transcript)
        case GameId.PLINKO:
            return simulate_plinko(seed, transcript)
        case GameId.BLACKJACK:
            return simulate_blackjack(seed, transcript)
        case GameId.ROULETTE:
            return simulate_roulette(seed, transcript)
        case _:
            raise UnknownGameError(game_id)
