"""
Daily seed derivation and commitment hashing.

The secret seed for (game, date) is HMAC-SHA256(secret, "<game>:<date>:<variant>"),
so it cannot be predicted without the server secret yet is reproducible from
the same three inputs. Only SHA256(seed) is ever published before the day ends.
"""

import hashlib
import hmac
from datetime import date as date_cls

DEFAULT_VARIANT = "default"


def validate_date(value: str) -> str:
    """Return value if it is an ISO calendar date (YYYY-MM-DD), else raise ValueError."""
    if not isinstance(value, str):
        raise TypeError(f"Date must be a string, got {type(value).__name__}")
    try:
        parsed = date_cls.fromisoformat(value)
    except ValueError:
        raise ValueError(f"Invalid date {value!r}, expected YYYY-MM-DD") from None
    if parsed.isoformat() != value:
        raise ValueError(f"Invalid date {value!r}, expected YYYY-MM-DD")
    return value


def derive_seed(secret: str, game_id: str, date: str, variant: str = DEFAULT_VARIANT) -> str:
    """Derive the secret hex seed for one game on one civil date."""
    if not secret:
        raise ValueError("Seed secret must not be empty")
    message = f"{game_id}:{date}:{variant}".encode()
    return hmac.new(secret.encode(), message, hashlib.sha256).hexdigest()


def commitment_hash(seed: str) -> str:
    """One-way public commitment to a seed."""
    return hashlib.sha256(seed.encode()).hexdigest()


def verify_commitment(seed: str, seed_hash: str) -> bool:
    """Check a revealed seed against its published commitment."""
    return hmac.compare_digest(commitment_hash(seed), seed_hash)
