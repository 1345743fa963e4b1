from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any
from uuid import UUID

import redis

from loddenthinks.api.models import GameState
from loddenthinks.core.errors import GameError
from loddenthinks.core.events import GameEvent
from loddenthinks.game import ActionName, LoddenGame
from loddenthinks.game_store import require_game, save_game
from loddenthinks.lock import game_lock
from loddenthinks.streams import publish_events

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ActionResult:
    state: GameState
    events: list[GameEvent]
    stream_entry_ids: list[str]


def dispatch_action(
    *,
    r: redis.Redis,
    game_id: UUID,
    caller: str,
    action: ActionName,
    payload: dict[str, Any],
) -> ActionResult:
    """Entry point for the HTTP API.

    Applies an action by:
    - acquiring the per-game lock
    - loading game state
    - running legality checks and the rule (rejections leave nothing persisted)
    - persisting state
    - publishing the emitted events to the game's stream
    """

    gid_str = str(game_id)

    with game_lock(r=r, game_id=gid_str):
        state = require_game(r=r, game_id=game_id)
        game = LoddenGame(state)

        try:
            emitted = game.apply(action, caller, payload)
        except GameError as e:
            logger.info("game=%s action=%s caller=%s rejected kind=%s", gid_str, action, caller, e.kind.value)
            raise

        save_game(r=r, state=game.state)
        ids = publish_events(r=r, game_id=gid_str, events=emitted)

    logger.debug("game=%s action=%s published %d events", gid_str, action, len(ids))
    return ActionResult(state=game.state, events=emitted, stream_entry_ids=ids)
