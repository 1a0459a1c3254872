from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING

import pytest

from game.service.leaderboard import LeaderboardAggregator
from game.service.rewards import RewardPolicy
from game.service.runs import RunService
from game.service.seed_authority import SeedAuthority
from game.tests.helpers.runs import STARTING_COINS, TEST_SECRET, Clock
from shared.auth.models import Player
from shared.db import (
    Database,
    SqliteLeaderboardRepository,
    SqlitePlayerRepository,
    SqliteRunRepository,
    SqliteSeedRepository,
)

if TYPE_CHECKING:
    from pathlib import Path


@pytest.fixture
def db(tmp_path: Path):
    database = Database(tmp_path / "test.db")
    database.connect()
    yield database
    database.close()


@pytest.fixture
def player_repo(db):
    return SqlitePlayerRepository(db)


@pytest.fixture
def run_repo(db):
    return SqliteRunRepository(db)


@pytest.fixture
def leaderboard_repo(db):
    return SqliteLeaderboardRepository(db)


@pytest.fixture
def seed_authority(db):
    return SeedAuthority(TEST_SECRET, SqliteSeedRepository(db))


@pytest.fixture
def aggregator(run_repo, leaderboard_repo, player_repo):
    return LeaderboardAggregator(run_repo, leaderboard_repo, player_repo)


@pytest.fixture
def clock():
    return Clock()


@pytest.fixture
def run_service(seed_authority, run_repo, aggregator, clock):
    return RunService(seed_authority, run_repo, RewardPolicy(run_repo), aggregator, today=clock)


@pytest.fixture
def make_player(player_repo):
    """Async factory persisting a player with a starting wallet."""

    async def _make(nickname: str) -> Player:
        player = Player(
            player_id=f"id-{nickname.lower()}",
            nickname=nickname,
            pin_hash="sha256$unused",
            created_at=datetime.now(UTC),
        )
        await player_repo.create_player(player, STARTING_COINS)
        return player

    return _make
