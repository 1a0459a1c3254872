"""Shared fixtures and helpers for arcade API tests."""

from __future__ import annotations

import pytest
from starlette.testclient import TestClient

from arcade.server.app import create_app
from arcade.server.settings import ArcadeServerSettings
from game.tests.helpers.runs import TEST_SECRET, Clock
from shared.auth.settings import AuthSettings

DEFAULT_PIN = "1234"


@pytest.fixture
def clock():
    return Clock()


@pytest.fixture
def app(tmp_path, clock):
    app = create_app(
        settings=ArcadeServerSettings(seed_secret=TEST_SECRET, cors_origins=["http://localhost:5173"]),
        auth_settings=AuthSettings(database_path=str(tmp_path / "arcade.db"), pin_hasher="sha256"),
        today=clock,
    )
    yield app
    app.state.db.close()


@pytest.fixture
def client(app):
    return TestClient(app)


def register(client: TestClient, nickname: str, pin: str = DEFAULT_PIN) -> str:
    """Register (which also logs in) and return the new player id."""
    response = client.post("/api/auth/register", json={"nickname": nickname, "pin": pin})
    assert response.status_code == 201, response.text
    return response.json()["playerId"]
