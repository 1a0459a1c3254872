"""
String enum definitions for the daily arcade games.
"""

from enum import Enum


class GameId(str, Enum):
    """The closed set of daily games."""

    CRASH = "crash"
    MINES = "mines"
    PLINKO = "plinko"
    BLACKJACK = "blackjack"
    ROULETTE = "roulette"


class ActionType(str, Enum):
    """Transcript entry tags understood by the simulators."""

    CASHOUT = "cashout"
    REVEAL = "reveal"
    BANK = "bank"
    DROP = "drop"
    HAND = "hand"
    SPIN = "spin"


class HandDecision(str, Enum):
    """Per-hand blackjack decisions."""

    HIT = "hit"
    STAND = "stand"
    DOUBLE = "double"


class BetType(str, Enum):
    """Roulette bet kinds."""

    RED = "red"
    BLACK = "black"
    EVEN = "even"
    ODD = "odd"
    DOZEN = "dozen"
    STRAIGHT = "straight"


class LeaderboardScope(str, Enum):
    """Leaderboard time window."""

    DAILY = "daily"
    ALLTIME = "alltime"
