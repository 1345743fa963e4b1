from __future__ import annotations

import logging
from contextlib import contextmanager

import redis
from redis.exceptions import LockNotOwnedError

from loddenthinks.core.errors import GameBusy
from loddenthinks.settings import settings_from_env

logger = logging.getLogger(__name__)


def lock_key(game_id: str) -> str:
    return f"lock:game:{game_id}"


@contextmanager
def game_lock(*, r: redis.Redis, game_id: str, ttl_ms: int | None = None):
    """Per-game lock covering load, apply, save and publish.

    Every rule spans several fields of the game, so the whole game is locked.
    Contention is rejected, not retried. Each acquire holds its own token, so a
    holder whose TTL lapsed cannot release a lock someone else now owns.
    """

    ttl_ms = ttl_ms or settings_from_env().lock_ttl_ms
    lock = r.lock(lock_key(game_id), timeout=ttl_ms / 1000, blocking=False)
    if not lock.acquire():
        logger.warning("game=%s lock busy", game_id)
        raise GameBusy(game_id)
    try:
        yield
    finally:
        try:
            lock.release()
        except LockNotOwnedError:
            logger.warning("game=%s lock expired before release (ttl_ms=%s)", game_id, ttl_ms)
