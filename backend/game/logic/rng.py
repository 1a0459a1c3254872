"""
Deterministic random stream for daily game outcomes.

Every outcome of a day is reproducible from the day's seed string:
1. Initialize a 32-byte rolling state as SHA256(seed)
2. Each draw re-hashes the state: state = SHA256(state)
3. The first 6 bytes of the new state, read big-endian, are divided by 2^48
   to yield a uniform float in [0, 1)

Sub-streams are derived by suffixing the seed with a per-game discriminator
(e.g. "<seed>-crash", "<seed>-roulette3") so games sharing a date never
correlate. Nothing else in the scoring path may consult another source of
randomness.
"""

from __future__ import annotations

import hashlib
from typing import TYPE_CHECKING, TypeVar

if TYPE_CHECKING:
    from collections.abc import Callable

RNG_VERSION = "sha256-chain-v1"
_SLICE_BYTES = 6
_SLICE_SCALE = float(1 << (8 * _SLICE_BYTES))  # 2^48, so a draw never reaches 1.0

T = TypeVar("T")


class DeterministicStream:
    """Unbounded sequence of uniform [0, 1) draws derived from a seed string."""

    def __init__(self, seed: str) -> None:
        self._seed = seed
        self._state = hashlib.sha256(seed.encode("utf-8")).digest()

    @property
    def seed(self) -> str:
        return self._seed

    def next_float(self) -> float:
        """Advance the state and return the next uniform value in [0, 1)."""
        self._state = hashlib.sha256(self._state).digest()
        return int.from_bytes(self._state[:_SLICE_BYTES], byteorder="big") / _SLICE_SCALE

    def next_below(self, bound: int) -> int:
        """Return an integer in [0, bound) as floor(draw * bound)."""
        if bound <= 0:
            raise ValueError("bound must be positive")
        return int(self.next_float() * bound)


def sub_stream(seed: str, discriminator: str) -> DeterministicStream:
    """Return the independent stream for one game (or one spin) of a daily seed."""
    return DeterministicStream(f"{seed}-{discriminator}")


def stream(seed: str) -> Callable[[], float]:
    """Return a draw() callable producing the restartable sequence for this seed."""
    return DeterministicStream(seed).next_float


def fisher_yates_shuffle(items: list[T], rng: DeterministicStream) -> list[T]:
    """
    Shuffle a copy of items with Fisher-Yates (Knuth) driven by the stream.

    For i in 0..n-2: swap items[i] with items[i + next_below(n - i)].
    """
    n = len(items)
    result = list(items)
    for i in range(n - 1):
        j = i + rng.next_below(n - i)
        result[i], result[j] = result[j], result[i]
    return result
