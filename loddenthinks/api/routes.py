from __future__ import annotations

from typing import NoReturn
from uuid import UUID

import redis
from fastapi import APIRouter, Depends, HTTPException, WebSocket, WebSocketDisconnect, status

from loddenthinks.actions import dispatch_action
from loddenthinks.api.deps import get_redis
from loddenthinks.api.models import (
    ActionEnvelope,
    CurrentBidResponse,
    ErrorDetail,
    GameListResponse,
    GameState,
    HouseResponse,
)
from loddenthinks.core.errors import GameBusy, GameError, GameNotFound
from loddenthinks.game_store import create_game, get_game, list_games, require_game
from loddenthinks.streams import EventStream, read_events
from loddenthinks.websocket_hub import hub

router = APIRouter()


def _raise_http(e: ValueError) -> NoReturn:
    if isinstance(e, GameNotFound):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    if isinstance(e, GameBusy):
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e)) from e
    if isinstance(e, GameError):
        detail = ErrorDetail(kind=e.kind, message=e.message).model_dump(mode="json")
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=detail) from e
    raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e)) from e


@router.websocket("/ws/game/{game_id}")
async def game_updates_ws(websocket: WebSocket, game_id: UUID) -> None:
    gid = str(game_id)
    await hub.attach(gid, websocket)

    try:
        # Keep the socket open; client can optionally send pings.
        while True:
            await websocket.receive_text()
    except WebSocketDisconnect:
        await hub.detach(gid, websocket)
    except Exception:
        await hub.detach(gid, websocket)
        raise


@router.get("/healthcheck")
async def healthcheck() -> dict[str, str]:
    return {"status": "ok"}


@router.post("/game", response_model=GameState, status_code=status.HTTP_201_CREATED)
async def create_game_route(r: redis.Redis = Depends(get_redis)) -> GameState:
    state = create_game(r=r)
    return state


@router.get("/game", response_model=GameListResponse)
async def list_games_route(r: redis.Redis = Depends(get_redis)) -> GameListResponse:
    return GameListResponse(games=list_games(r=r))


@router.get("/game/{game_id}", response_model=GameState)
async def get_game_route(game_id: UUID, r: redis.Redis = Depends(get_redis)) -> GameState:
    state = get_game(r=r, game_id=game_id)
    if state is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Game not found")
    return state


@router.get("/game/{game_id}/current_bid", response_model=CurrentBidResponse)
async def current_bid_route(game_id: UUID, r: redis.Redis = Depends(get_redis)) -> CurrentBidResponse:
    try:
        state = require_game(r=r, game_id=game_id)
    except GameNotFound as e:
        _raise_http(e)
    return CurrentBidResponse(game_id=game_id, current_bid=state.current_bid)


@router.get("/game/{game_id}/house", response_model=HouseResponse)
async def house_route(game_id: UUID, r: redis.Redis = Depends(get_redis)) -> HouseResponse:
    try:
        state = require_game(r=r, game_id=game_id)
    except GameNotFound as e:
        _raise_http(e)
    return HouseResponse(game_id=game_id, house=state.house)


@router.post("/games/{game_id}/actions", response_model=GameState)
async def action_route(
    game_id: UUID,
    body: ActionEnvelope,
    r: redis.Redis = Depends(get_redis),
) -> GameState:
    req = body.root
    payload = req.model_dump(exclude={"action", "caller"})
    try:
        result = dispatch_action(r=r, game_id=game_id, caller=req.caller, action=req.action, payload=payload)
    except ValueError as e:
        _raise_http(e)

    await hub.publish_update(state=result.state, events=result.events)
    return result.state


@router.get("/games/{game_id}/events")
async def get_game_events_route(
    game_id: UUID,
    count: int = 50,
    start: str = "-",
    end: str = "+",
    r: redis.Redis = Depends(get_redis),
) -> dict[str, object]:
    """Read a game's event stream (house-assigned, player-joined, bids, result)."""

    if count < 1 or count > 500:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail="count must be between 1 and 500")

    if get_game(r=r, game_id=game_id) is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Game not found")

    try:
        entries = read_events(r=r, game_id=str(game_id), start=start, end=end, count=count)
    except redis.ResponseError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e)) from e

    messages = [{"id": mid, "fields": fields} for mid, fields in entries]
    return {"game_id": str(game_id), "stream": EventStream(game_id=str(game_id)).key, "messages": messages}
