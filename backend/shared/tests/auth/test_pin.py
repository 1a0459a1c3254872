"""Tests for PIN hashers."""

from __future__ import annotations

import pytest

from shared.auth.pin import BcryptPinHasher, PinHasher, Sha256PinHasher, get_pin_hasher


class TestBcryptPinHasher:
    async def test_hash_and_verify(self):
        hasher = BcryptPinHasher(rounds=4)
        hashed = await hasher.hash("1234")
        assert hashed.startswith("$2")
        assert await hasher.verify("1234", hashed) is True
        assert await hasher.verify("4321", hashed) is False

    async def test_malformed_hash_returns_false(self):
        hasher = BcryptPinHasher(rounds=4)
        assert await hasher.verify("1234", "not-a-bcrypt-hash") is False


class TestSha256PinHasher:
    async def test_hash_is_prefixed_and_deterministic(self):
        hasher = Sha256PinHasher()
        hashed = await hasher.hash("1234")
        assert hashed.startswith("sha256$")
        assert hashed == await hasher.hash("1234")

    async def test_wrong_pin_rejected(self):
        hasher = Sha256PinHasher()
        assert await hasher.verify("0000", await hasher.hash("1234")) is False

    async def test_rejects_foreign_hash(self):
        assert await Sha256PinHasher().verify("1234", "$2b$04$abc") is False


class TestGetPinHasher:
    def test_bcrypt_by_default(self):
        assert isinstance(get_pin_hasher(), BcryptPinHasher)

    def test_sha256(self):
        hasher = get_pin_hasher("sha256")
        assert isinstance(hasher, Sha256PinHasher)
        assert isinstance(hasher, PinHasher)

    def test_unknown_raises(self):
        with pytest.raises(ValueError, match="Unknown PIN hasher"):
            get_pin_hasher("md5")
