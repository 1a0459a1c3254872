"""Tests for SqlitePlayerRepository."""

import pytest

from shared.tests.db.factories import make_player


class TestCreatePlayer:
    async def test_creates_player_with_wallet(self, player_repo):
        await player_repo.create_player(make_player(), 500)

        player = await player_repo.get_by_id("p1")
        assert player is not None
        assert player.nickname == "alice"
        assert await player_repo.get_coins("p1") == 500

    async def test_duplicate_nickname_case_insensitive(self, player_repo):
        await player_repo.create_player(make_player(), 500)

        with pytest.raises(ValueError, match="already taken"):
            await player_repo.create_player(make_player("p2", "ALICE"), 500)
        assert await player_repo.get_by_id("p2") is None

    async def test_duplicate_id(self, player_repo):
        await player_repo.create_player(make_player(), 500)

        with pytest.raises(ValueError, match="already exists"):
            await player_repo.create_player(make_player("p1", "bob"), 500)
        assert await player_repo.get_by_nickname("bob") is None


class TestLookups:
    async def test_get_by_nickname_case_insensitive(self, player_repo):
        await player_repo.create_player(make_player(nickname="Alice"), 0)

        found = await player_repo.get_by_nickname("aLiCe")
        assert found is not None
        assert found.nickname == "Alice"

    async def test_missing(self, player_repo):
        assert await player_repo.get_by_id("nope") is None
        assert await player_repo.get_by_nickname("nope") is None
        assert await player_repo.get_coins("nope") == 0


class TestFriends:
    async def test_add_friend_is_directional_and_idempotent(self, player_repo):
        await player_repo.create_player(make_player("p1", "alice"), 0)
        await player_repo.create_player(make_player("p2", "bob"), 0)

        assert await player_repo.add_friend("p1", "p2") is True
        assert await player_repo.add_friend("p1", "p2") is False

        assert await player_repo.get_friend_ids("p1") == {"p2"}
        assert await player_repo.get_friend_ids("p2") == set()
