from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from shared.db import Database, SqlitePlayerRepository

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
