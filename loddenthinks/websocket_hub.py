from __future__ import annotations

import asyncio
import logging
from collections import defaultdict
from collections.abc import Sequence

from fastapi import WebSocket

from loddenthinks.api.models import GameState
from loddenthinks.core.events import GameEvent

logger = logging.getLogger(__name__)


def update_message(*, state: GameState, events: Sequence[GameEvent]) -> dict[str, object]:
    """Observer payload for one accepted action.

    Events carry the same flattened fields as their stream entries, so a
    socket observer and a stream reader see identical notifications.
    """

    gid = str(state.game_id)
    return {
        "type": "game_updated",
        "game_id": gid,
        "phase": state.phase.value,
        "current_bid": state.current_bid,
        "turn": state.turn,
        "events": [ev.as_fields(game_id=gid) for ev in events],
    }


class GameObserverHub:
    """In-process WebSocket observers per game.

    Observers only listen. Sends go out concurrently and any socket that
    fails is detached.
    """

    def __init__(self) -> None:
        self._observers: dict[str, set[WebSocket]] = defaultdict(set)
        self._lock = asyncio.Lock()

    async def attach(self, game_id: str, websocket: WebSocket) -> None:
        await websocket.accept()
        async with self._lock:
            self._observers[game_id].add(websocket)
        logger.debug("game=%s observer attached", game_id)

    async def detach(self, game_id: str, websocket: WebSocket) -> None:
        async with self._lock:
            observers = self._observers.get(game_id)
            if observers is None:
                return
            observers.discard(websocket)
            if not observers:
                del self._observers[game_id]

    async def publish_update(self, *, state: GameState, events: Sequence[GameEvent]) -> int:
        """Send the update to every observer of the game; returns how many received it."""

        if not events:
            return 0

        gid = str(state.game_id)
        async with self._lock:
            observers = list(self._observers.get(gid, ()))
        if not observers:
            return 0

        message = update_message(state=state, events=events)
        results = await asyncio.gather(*(ws.send_json(message) for ws in observers), return_exceptions=True)

        delivered = 0
        for ws, res in zip(observers, results):
            if isinstance(res, Exception):
                logger.debug("game=%s detaching observer: %r", gid, res)
                await self.detach(gid, ws)
            else:
                delivered += 1
        return delivered


hub = GameObserverHub()
