"""PIN hashing for nickname + PIN accounts.

BcryptPinHasher is CPU-bound and runs off the event loop through
anyio.to_thread.run_sync() so concurrent logins do not stall requests.
Its cost factor comes from AuthSettings.bcrypt_rounds.

Sha256PinHasher prefixes a plain SHA-256 digest with "sha256$" and exists so
tests can create accounts instantly. Never configure it in production: PINs
are short and an unsalted digest is trivially brute-forced.
"""

from __future__ import annotations

import hashlib
import hmac
from typing import Protocol, runtime_checkable

import bcrypt
from anyio import to_thread

DEFAULT_BCRYPT_ROUNDS = 12
_SHA256_PREFIX = "sha256$"


@runtime_checkable
class PinHasher(Protocol):
    async def hash(self, pin: str) -> str: ...

    async def verify(self, pin: str, hashed: str) -> bool: ...


class BcryptPinHasher:
    def __init__(self, rounds: int = DEFAULT_BCRYPT_ROUNDS) -> None:
        self._rounds = rounds

    async def hash(self, pin: str) -> str:
        salt = bcrypt.gensalt(rounds=self._rounds)
        return await to_thread.run_sync(lambda: bcrypt.hashpw(pin.encode("utf-8"), salt).decode("utf-8"))

    async def verify(self, pin: str, hashed: str) -> bool:
        """Malformed stored hashes verify as False instead of raising."""
        try:
            return await to_thread.run_sync(lambda: bcrypt.checkpw(pin.encode("utf-8"), hashed.encode("utf-8")))
        except ValueError:
            return False


class Sha256PinHasher:
    async def hash(self, pin: str) -> str:
        return _SHA256_PREFIX + hashlib.sha256(pin.encode("utf-8")).hexdigest()

    async def verify(self, pin: str, hashed: str) -> bool:
        if not hashed.startswith(_SHA256_PREFIX):
            return False
        return hmac.compare_digest(await self.hash(pin), hashed)


def get_pin_hasher(name: str = "bcrypt", *, rounds: int = DEFAULT_BCRYPT_ROUNDS) -> PinHasher:
    """Return a PinHasher by name ("bcrypt" or "sha256")."""
    if name == "bcrypt":
        return BcryptPinHasher(rounds=rounds)
    if name == "sha256":
        return Sha256PinHasher()
    raise ValueError(f"Unknown PIN hasher: {name!r}")
