"""Tests for AuthService."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from shared.auth.pin import Sha256PinHasher
from shared.auth.service import AuthError, AuthService
from shared.auth.session_store import AuthSessionStore
from shared.db import Database, SqlitePlayerRepository

if TYPE_CHECKING:
    from pathlib import Path


@pytest.fixture
def session_store():
    return AuthSessionStore()


@pytest.fixture
def player_repo(tmp_path: Path):
    db = Database(tmp_path / "test.db")
    db.connect()
    yield SqlitePlayerRepository(db)
    db.close()


@pytest.fixture
def auth_service(player_repo, session_store):
    return AuthService(player_repo, session_store, pin_hasher=Sha256PinHasher(), starting_coins=500)


class TestRegister:
    async def test_creates_player_and_wallet(self, auth_service, player_repo):
        player = await auth_service.register("alice", "1234")

        assert player.nickname == "alice"
        assert player.player_id
        assert player.pin_hash != "1234"
        assert await player_repo.get_coins(player.player_id) == 500

    async def test_custom_starting_coins(self, player_repo, session_store):
        service = AuthService(player_repo, session_store, pin_hasher=Sha256PinHasher(), starting_coins=0)
        player = await service.register("bob_1", "987654")
        assert await player_repo.get_coins(player.player_id) == 0

    async def test_rejects_duplicate_nickname_case_insensitive(self, auth_service):
        await auth_service.register("alice", "1234")

        with pytest.raises(AuthError, match="already taken"):
            await auth_service.register("ALICE", "5678")

    @pytest.mark.parametrize("nickname", ["ab", "a" * 21])
    async def test_rejects_nickname_length(self, auth_service, nickname):
        with pytest.raises(AuthError, match="between"):
            await auth_service.register(nickname, "1234")

    @pytest.mark.parametrize("nickname", ["alice!", "al ice", "élise"])
    async def test_rejects_nickname_characters(self, auth_service, nickname):
        with pytest.raises(AuthError, match="letters, numbers, and underscores"):
            await auth_service.register(nickname, "1234")

    @pytest.mark.parametrize("pin", ["123", "1" * 13, "12a4", "", "12 34"])
    async def test_rejects_bad_pin(self, auth_service, pin):
        with pytest.raises(AuthError, match="PIN"):
            await auth_service.register("alice", pin)


class TestLogin:
    async def test_login_opens_session(self, auth_service):
        player = await auth_service.register("alice", "1234")

        session = await auth_service.login("alice", "1234")

        assert session.player_id == player.player_id
        assert session.nickname == "alice"
        assert auth_service.validate_session(session.session_id) == session

    async def test_login_nickname_case_insensitive(self, auth_service):
        await auth_service.register("Alice", "1234")
        session = await auth_service.login("alice", "1234")
        assert session.nickname == "Alice"

    async def test_wrong_pin_and_unknown_nickname_fail_identically(self, auth_service):
        await auth_service.register("alice", "1234")

        with pytest.raises(AuthError) as wrong_pin:
            await auth_service.login("alice", "0000")
        with pytest.raises(AuthError) as unknown:
            await auth_service.login("nobody", "1234")

        assert str(wrong_pin.value) == str(unknown.value) == "Invalid credentials"


class TestSessions:
    def test_validate_none(self, auth_service):
        assert auth_service.validate_session(None) is None

    def test_validate_unknown(self, auth_service):
        assert auth_service.validate_session("nope") is None

    async def test_logout_invalidates(self, auth_service):
        await auth_service.register("alice", "1234")
        session = await auth_service.login("alice", "1234")

        auth_service.logout(session.session_id)

        assert auth_service.validate_session(session.session_id) is None
