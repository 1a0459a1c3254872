"""Tests for AuthSessionStore."""

from __future__ import annotations

import asyncio
from unittest.mock import patch

from shared.auth.session_store import AuthSessionStore


class TestCreateSession:
    def test_creates_session_with_correct_fields(self):
        store = AuthSessionStore(ttl_seconds=60)
        session = store.create_session("player-1", "alice")

        assert session.player_id == "player-1"
        assert session.nickname == "alice"
        assert session.session_id
        assert session.expires_at == session.created_at + 60

    def test_sessions_have_unique_ids(self):
        store = AuthSessionStore()
        s1 = store.create_session("p1", "alice")
        s2 = store.create_session("p2", "bob")
        assert s1.session_id != s2.session_id


class TestGetSession:
    def test_retrieves_valid_session(self):
        store = AuthSessionStore()
        session = store.create_session("p1", "alice")

        result = store.get_session(session.session_id)
        assert result is not None
        assert result.player_id == "p1"

    def test_returns_none_for_unknown_id(self):
        assert AuthSessionStore().get_session("nonexistent") is None

    def test_returns_none_and_removes_expired_session(self):
        store = AuthSessionStore()
        session = store.create_session("p1", "alice")

        with patch("shared.auth.session_store.time") as mock_time:
            mock_time.time.return_value = session.expires_at + 1
            result = store.get_session(session.session_id)

        assert result is None
        assert session.session_id not in store._sessions


class TestDeleteSession:
    def test_removes_existing_session(self):
        store = AuthSessionStore()
        session = store.create_session("p1", "alice")
        store.delete_session(session.session_id)
        assert store.get_session(session.session_id) is None

    def test_unknown_session_is_noop(self):
        AuthSessionStore().delete_session("nonexistent")


class TestCleanup:
    def test_removes_only_expired(self):
        store = AuthSessionStore(ttl_seconds=10)
        old = store.create_session("p1", "alice")
        fresh = store.create_session("p2", "bob")
        store._sessions[old.session_id].expires_at = 0

        assert store.cleanup_expired() == 1
        assert store.get_session(fresh.session_id) is not None

    async def test_start_and_stop_cleanup_task(self):
        store = AuthSessionStore()
        store.start_cleanup()
        task = store._cleanup_task
        assert task is not None
        store.start_cleanup()
        assert store._cleanup_task is task

        await store.stop_cleanup()
        await asyncio.sleep(0)
        assert task.cancelled()
        assert store._cleanup_task is None
