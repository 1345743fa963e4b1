from __future__ import annotations

import os
from dataclasses import dataclass

import redis


@dataclass(frozen=True, slots=True)
class Settings:
    redis_url: str
    lock_ttl_ms: int
    log_level: str


def settings_from_env() -> Settings:
    return Settings(
        redis_url=os.environ.get("REDIS_URL", "redis://localhost:6379/0"),
        lock_ttl_ms=int(os.environ.get("LODDEN_LOCK_TTL_MS", "5000")),
        log_level=os.environ.get("LODDEN_LOG_LEVEL", "INFO").upper(),
    )


def create_redis(settings: Settings | None = None) -> redis.Redis:
    s = settings or settings_from_env()
    # decode_responses=True => strings in/out instead of bytes
    return redis.Redis.from_url(s.redis_url, decode_responses=True)
