"""Integration tests for leaderboards, friends and seed transparency."""

import pytest
from starlette.testclient import TestClient

from arcade.tests.integration.conftest import register
from game.logic.seeds import commitment_hash
from game.tests.helpers.runs import TEST_DATE, seed_for


def _play_crash(client: TestClient, at: float) -> float:
    run_id = client.post("/api/run/start", json={"gameId": "crash"}).json()["runId"]
    response = client.post("/api/run/finish", json={"runId": run_id, "transcript": [{"at": at, "type": "cashout"}]})
    return response.json()["score"]


def _player(app, nickname: str) -> TestClient:
    client = TestClient(app)
    register(client, nickname)
    return client


class TestLeaderboard:
    def test_public_board_without_session(self, app, client):
        alice = _player(app, "alice")
        _play_crash(alice, 0.5)

        board = client.get("/api/leaderboard", params={"gameId": "crash"}).json()

        assert board["gameId"] == "crash"
        assert board["scope"] == "daily"
        assert board["date"] == TEST_DATE
        assert [e["nickname"] for e in board["top"]] == ["alice"]
        assert board["myRank"] is None
        assert board["myScore"] is None

    def test_ranks_and_friends_only(self, app):
        alice = _player(app, "alice")
        bob = _player(app, "bob")
        carol = _player(app, "carol")
        _play_crash(alice, 0.1)
        _play_crash(bob, 0.5)
        _play_crash(carol, 0.3)

        board = alice.get("/api/leaderboard", params={"gameId": "crash"}).json()
        assert [e["nickname"] for e in board["top"]] == ["bob", "carol", "alice"]
        assert [e["rank"] for e in board["top"]] == [1, 2, 3]
        assert board["myRank"] == 3

        assert alice.post("/api/friends", json={"nickname": "BOB"}).json() == {
            "ok": True,
            "added": True,
            "friend": "bob",
        }
        friends = alice.get("/api/leaderboard", params={"gameId": "crash", "friendsOnly": "true"}).json()
        assert [e["nickname"] for e in friends["top"]] == ["bob", "alice"]
        assert friends["myRank"] == 2

    def test_alltime_sums_days(self, app, clock):
        alice = _player(app, "alice")
        first = _play_crash(alice, 0.5)
        clock.today = "2025-06-02"
        second = _play_crash(alice, 0.5)

        board = alice.get("/api/leaderboard", params={"gameId": "crash", "scope": "alltime"}).json()
        assert board["top"][0]["score"] == round(first + second, 2)

    def test_past_date_board(self, app, clock):
        alice = _player(app, "alice")
        _play_crash(alice, 0.5)
        clock.today = "2025-06-02"

        today = alice.get("/api/leaderboard", params={"gameId": "crash"}).json()
        past = alice.get("/api/leaderboard", params={"gameId": "crash", "date": TEST_DATE}).json()
        assert today["top"] == []
        assert len(past["top"]) == 1

    def test_invalid_params(self, client):
        assert client.get("/api/leaderboard", params={"gameId": "nope"}).status_code == 422
        assert client.get("/api/leaderboard", params={"gameId": "crash", "scope": "weekly"}).status_code == 422
        assert client.get("/api/leaderboard", params={"gameId": "crash", "date": "2025-13-01"}).status_code == 422


class TestFriends:
    def test_unknown_nickname(self, client):
        register(client, "alice")
        assert client.post("/api/friends", json={"nickname": "ghost"}).status_code == 404

    def test_cannot_follow_self(self, client):
        register(client, "alice")
        assert client.post("/api/friends", json={"nickname": "Alice"}).status_code == 422

    def test_follow_twice(self, app, client):
        register(client, "alice")
        _player(app, "bob")
        client.post("/api/friends", json={"nickname": "bob"})
        assert client.post("/api/friends", json={"nickname": "bob"}).json()["added"] is False


class TestSeeds:
    def test_today_only_shows_hash(self, client):
        body = client.get(f"/api/seeds/mines/{TEST_DATE}").json()
        assert body == {"gameId": "mines", "date": TEST_DATE, "seedHash": commitment_hash(seed_for("mines"))}

    def test_past_day_reveals_seed(self, client, clock):
        started_hash = client.get(f"/api/seeds/mines/{TEST_DATE}").json()["seedHash"]
        clock.today = "2025-06-02"

        body = client.get(f"/api/seeds/mines/{TEST_DATE}").json()

        assert body["revealedSeed"] == seed_for("mines")
        assert body["seedHash"] == started_hash == commitment_hash(body["revealedSeed"])

    @pytest.mark.parametrize("date", ["2030-01-01", "2025-05-31"])
    def test_uncommitted_day_is_not_found_and_not_stored(self, app, client, date):
        response = client.get(f"/api/seeds/crash/{date}")

        assert response.status_code == 404
        rows = app.state.db.connection.execute("SELECT COUNT(*) FROM daily_seeds").fetchone()[0]
        assert rows == 0

    def test_invalid_date(self, client):
        assert client.get("/api/seeds/crash/yesterday").status_code == 422


class TestPublicEndpoints:
    def test_health(self, client):
        body = client.get("/health").json()
        assert body["status"] == "ok"
        assert "version" in body

    def test_games_catalog(self, client):
        games = client.get("/api/games").json()["games"]
        assert [g["id"] for g in games] == ["crash", "mines", "plinko", "blackjack", "roulette"]
        assert games[1]["tickets"] == 5

    def test_unknown_route_is_json_404(self, client):
        response = client.get("/api/nothing")
        assert response.status_code == 404
        assert response.json() == {"error": "Not Found"}

    def test_api_responses_not_cached(self, client):
        response = client.get("/api/games")
        assert response.headers["cache-control"] == "no-store"
        assert response.headers["x-content-type-options"] == "nosniff"
