from __future__ import annotations

from datetime import UTC, datetime
from uuid import UUID

import redis

from loddenthinks.api.models import GameState
from loddenthinks.core.errors import GameNotFound
from loddenthinks.game import new_game_state


GAMES_SET_KEY = "lodden:games"
GAME_KEY_PREFIX = "lodden:game:"  # + {uuid}


def _now() -> datetime:
    return datetime.now(tz=UTC)


def _game_key(game_id: UUID) -> str:
    return f"{GAME_KEY_PREFIX}{game_id}"


def save_game(*, r: redis.Redis, state: GameState) -> None:
    state.last_updated_at = _now()
    r.set(_game_key(state.game_id), state.model_dump_json())


def get_game(*, r: redis.Redis, game_id: UUID) -> GameState | None:
    raw = r.get(_game_key(game_id))
    if not raw:
        return None
    return GameState.model_validate_json(raw)


def require_game(*, r: redis.Redis, game_id: UUID) -> GameState:
    state = get_game(r=r, game_id=game_id)
    if state is None:
        raise GameNotFound(game_id)
    return state


def create_game(*, r: redis.Redis) -> GameState:
    """Create an empty game: no house, no players, bid and target at 0."""

    state = new_game_state()
    r.set(_game_key(state.game_id), state.model_dump_json())
    r.sadd(GAMES_SET_KEY, str(state.game_id))
    return state


def list_games(*, r: redis.Redis) -> list[GameState]:
    ids = sorted(r.smembers(GAMES_SET_KEY))
    out: list[GameState] = []
    for sid in ids:
        try:
            gid = UUID(sid)
        except ValueError:
            continue
        state = get_game(r=r, game_id=gid)
        if state is not None:
            out.append(state)
    out.sort(key=lambda s: s.created_at, reverse=True)
    return out
