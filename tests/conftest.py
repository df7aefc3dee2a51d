from pathlib import Path

import pytest

from rpgroster.persistence import PlayerStore
from rpgroster.service import PlayerService


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def store(tmp_path: Path) -> PlayerStore:
    return PlayerStore(tmp_path / "players.sqlite")


@pytest.fixture
def service(store: PlayerStore) -> PlayerService:
    return PlayerService(store)
