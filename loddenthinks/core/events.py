from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any, Literal

EventType = Literal[
    "HOUSE_ASSIGNED",
    "PLAYER_JOINED",
    "BID_PLACED",
    "RESULT",
    "REVEALED",
]


@dataclass(frozen=True, slots=True)
class GameEvent:
    type: EventType
    payload: dict[str, Any]
    ts: datetime

    @staticmethod
    def now(*, type: EventType, payload: dict[str, Any]) -> "GameEvent":
        return GameEvent(type=type, payload=payload, ts=datetime.now(tz=UTC))

    def as_fields(self, *, game_id: str) -> dict[str, str]:
        """Flatten into string fields for a Redis Stream entry."""

        fields = {"type": self.type, "game_id": game_id, "ts": self.ts.isoformat()}
        fields.update({k: "" if v is None else str(v) for k, v in self.payload.items()})
        return fields


def house_assigned(identity: str) -> GameEvent:
    return GameEvent.now(type="HOUSE_ASSIGNED", payload={"identity": identity})


def player_joined(identity: str) -> GameEvent:
    return GameEvent.now(type="PLAYER_JOINED", payload={"identity": identity})


def bid_placed(*, amount: int, next_turn: str) -> GameEvent:
    return GameEvent.now(type="BID_PLACED", payload={"amount": amount, "next_turn": next_turn})


def result(*, winner: str) -> GameEvent:
    return GameEvent.now(type="RESULT", payload={"winner": winner})


def revealed(*, target: int, winner: str | None) -> GameEvent:
    return GameEvent.now(type="REVEALED", payload={"target": target, "winner": winner})
