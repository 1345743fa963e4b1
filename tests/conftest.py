from __future__ import annotations

import os
from collections.abc import Generator
from pathlib import Path

import fakeredis
import pytest
from fastapi.testclient import TestClient

from helpers import HOUSE, P1, P2
from loddenthinks.game import LoddenGame


@pytest.fixture(scope="session", autouse=True)
def _load_dotenv_for_tests() -> None:
    """Load repo .env for local runs (PyCharm/CLI).

    In CI, we *don't* auto-load `.env` so settings stay at their defaults.
    Opt-in with: LODDEN_LOAD_DOTENV_FOR_TESTS=1
    """

    if os.environ.get("CI") and os.environ.get("LODDEN_LOAD_DOTENV_FOR_TESTS") != "1":
        return

    env_path = Path(__file__).resolve().parents[1] / ".env"
    if env_path.exists():
        from dotenv import load_dotenv

        load_dotenv(dotenv_path=env_path, override=False)


@pytest.fixture()
def game() -> LoddenGame:
    return LoddenGame()


@pytest.fixture()
def seated_game() -> LoddenGame:
    """House set, target 10, both players joined (P1 moves first)."""

    g = LoddenGame()
    g.claim_house(HOUSE)
    g.set_target(HOUSE, 10)
    g.claim_player(P1)
    g.claim_player(P2)
    return g


@pytest.fixture()
def client_and_redis() -> Generator[tuple[TestClient, fakeredis.FakeRedis], None, None]:
    """FastAPI TestClient wired to an in-memory fakeredis."""

    from loddenthinks.api.deps import get_redis
    from loddenthinks.main import app

    r = fakeredis.FakeRedis(decode_responses=True)

    def _override() -> Generator[fakeredis.FakeRedis, None, None]:
        yield r

    app.dependency_overrides[get_redis] = _override
    with TestClient(app) as c:
        yield c, r
    app.dependency_overrides.clear()


@pytest.fixture()
def client(client_and_redis: tuple[TestClient, fakeredis.FakeRedis]) -> TestClient:
    return client_and_redis[0]
