from __future__ import annotations

from collections.abc import Generator
from functools import lru_cache

import redis
from fastapi import Depends

from loddenthinks.settings import Settings, create_redis, settings_from_env


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return settings_from_env()


def get_redis(settings: Settings = Depends(get_settings)) -> Generator[redis.Redis, None, None]:
    """One client per request, built from the process settings."""

    client = create_redis(settings)
    try:
        yield client
    finally:
        client.close()
