from __future__ import annotations

from datetime import datetime
from enum import StrEnum
from typing import Annotated, Literal, Union
from uuid import UUID

from pydantic import BaseModel, Field, RootModel

from loddenthinks.core.errors import ErrorKind

U64_MAX = 2**64 - 1
QUESTION_MAX_LENGTH = 280

# Opaque principal value; only equality matters to the game.
Identity = Annotated[str, Field(min_length=1, max_length=128)]
U64 = Annotated[int, Field(ge=0, le=U64_MAX)]


class GamePhase(StrEnum):
    lobby = "lobby"
    playing = "playing"
    awaiting_reveal = "awaiting_reveal"
    resolved = "resolved"


class PlayerSeat(BaseModel):
    identity: Identity
    stake: U64 = 0


class BidRecord(BaseModel):
    seq: int
    bidder: Identity
    amount: U64


class GameState(BaseModel):
    game_id: UUID
    created_at: datetime
    last_updated_at: datetime

    house: Identity | None = None

    # Join order matters: the first joiner moves first.
    players: list[PlayerSeat] = Field(default_factory=list, max_length=2)

    turn: Identity | None = None
    current_bid: U64 = 0

    # Stored in plaintext from the moment the house sets it.
    target: U64 = 0

    awaiting_reveal: bool = False
    winner: Identity | None = None

    # What the players are wagering on.
    question: str = ""

    phase: GamePhase = GamePhase.lobby

    bids: list[BidRecord] = Field(default_factory=list)


class GameListResponse(BaseModel):
    games: list[GameState]


class GameIdResponse(BaseModel):
    game_id: UUID


class CurrentBidResponse(BaseModel):
    game_id: UUID
    current_bid: int


class HouseResponse(BaseModel):
    game_id: UUID
    house: str | None


class ErrorDetail(BaseModel):
    kind: ErrorKind
    message: str


class ClaimHouseAction(BaseModel):
    action: Literal["claim_house"]
    caller: Identity


class ClaimPlayerAction(BaseModel):
    action: Literal["claim_player"]
    caller: Identity


class SetTargetAction(BaseModel):
    action: Literal["set_target"]
    caller: Identity
    value: U64


class BetAction(BaseModel):
    action: Literal["bet"]
    caller: Identity
    amount: U64


class StayAction(BaseModel):
    action: Literal["stay"]
    caller: Identity


class RevealAction(BaseModel):
    action: Literal["reveal"]
    caller: Identity


class SetQuestionAction(BaseModel):
    action: Literal["set_question"]
    caller: Identity
    question: str = Field(..., min_length=1, max_length=QUESTION_MAX_LENGTH)


ActionRequest = Annotated[
    Union[
        ClaimHouseAction,
        ClaimPlayerAction,
        SetTargetAction,
        BetAction,
        StayAction,
        RevealAction,
        SetQuestionAction,
    ],
    Field(discriminator="action"),
]


class ActionEnvelope(RootModel[ActionRequest]):
    """Body of the generic actions endpoint, discriminated on `action`."""
