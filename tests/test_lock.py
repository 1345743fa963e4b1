from __future__ import annotations

import fakeredis
import pytest

from loddenthinks.core.errors import GameBusy
from loddenthinks.lock import game_lock, lock_key

GID = "7d5c9a40-0000-4000-8000-000000000001"


@pytest.fixture()
def r() -> fakeredis.FakeRedis:
    return fakeredis.FakeRedis(decode_responses=True)


def test_lock_is_released_on_exit(r: fakeredis.FakeRedis) -> None:
    with game_lock(r=r, game_id=GID, ttl_ms=5000):
        assert r.get(lock_key(GID)) is not None
        assert 0 < r.pttl(lock_key(GID)) <= 5000

    assert r.get(lock_key(GID)) is None


def test_second_acquire_is_busy(r: fakeredis.FakeRedis) -> None:
    with game_lock(r=r, game_id=GID, ttl_ms=5000):
        with pytest.raises(GameBusy):
            with game_lock(r=r, game_id=GID, ttl_ms=5000):
                pass


def test_lock_released_when_body_raises(r: fakeredis.FakeRedis) -> None:
    with pytest.raises(RuntimeError):
        with game_lock(r=r, game_id=GID, ttl_ms=5000):
            raise RuntimeError("boom")

    assert r.get(lock_key(GID)) is None


def test_expired_holder_does_not_release_the_next_holders_lock(r: fakeredis.FakeRedis) -> None:
    with game_lock(r=r, game_id=GID, ttl_ms=5000):
        # Our TTL lapsed and another worker took the lock in the meantime.
        r.set(lock_key(GID), "other-holder", px=5000)

    assert r.get(lock_key(GID)) == "other-holder"
