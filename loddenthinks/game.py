from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any, Literal
from uuid import UUID, uuid4

from pydantic import TypeAdapter, ValidationError

from loddenthinks import betting, house, roles
from loddenthinks.api.models import U64, GameState
from loddenthinks.core.errors import ErrorKind, GameError, InvalidArgument
from loddenthinks.core.events import GameEvent
from loddenthinks.turn_processing import turns

logger = logging.getLogger(__name__)

ActionName = Literal["claim_house", "claim_player", "set_target", "bet", "stay", "reveal", "set_question"]

_U64_ADAPTER: TypeAdapter[int] = TypeAdapter(U64)
_TEXT_ADAPTER: TypeAdapter[str] = TypeAdapter(str)


def _payload_field(payload: dict[str, Any], name: str, adapter: TypeAdapter) -> Any:
    """Pull one field out of a loose payload; anything missing or mistyped is an InvalidArgument."""

    if name not in payload:
        raise InvalidArgument(f"Missing '{name}' in payload")
    try:
        return adapter.validate_python(payload[name])
    except ValidationError as e:
        raise InvalidArgument(f"Invalid '{name}': {e.errors()[0]['msg']}") from e


@dataclass(frozen=True, slots=True)
class Outcome:
    """Success flag plus diagnosis.

    Truthiness is the plain accepted/rejected answer; `error` says why.
    """

    ok: bool
    events: list[GameEvent] = field(default_factory=list)
    error: ErrorKind | None = None
    message: str | None = None

    def __bool__(self) -> bool:
        return self.ok


def new_game_state(*, game_id: UUID | None = None) -> GameState:
    now = datetime.now(tz=UTC)
    return GameState(game_id=game_id or uuid4(), created_at=now, last_updated_at=now)


class LoddenGame:
    """One game instance: owns its state and applies one operation at a time.

    Every mutating method takes the calling identity explicitly, returns the
    events it emitted and raises a `GameError` subclass on rejection, in which
    case the state is untouched.
    """

    def __init__(self, state: GameState | None = None) -> None:
        self.state = state if state is not None else new_game_state()

    # Role registry.

    def claim_house(self, caller: str) -> list[GameEvent]:
        return roles.claim_house(state=self.state, caller=caller)

    def claim_player(self, caller: str) -> list[GameEvent]:
        return roles.claim_player(state=self.state, caller=caller)

    def is_house(self, caller: str) -> bool:
        return roles.is_house(state=self.state, caller=caller)

    def is_player(self, caller: str) -> bool:
        return roles.is_player(state=self.state, caller=caller)

    # Turns and betting.

    def is_turn(self, caller: str) -> bool:
        return turns.is_turn(state=self.state, caller=caller)

    def bet(self, caller: str, amount: int) -> list[GameEvent]:
        return betting.bet(state=self.state, caller=caller, amount=amount)

    def stay(self, caller: str) -> list[GameEvent]:
        return betting.stay(state=self.state, caller=caller)

    # House-only and player extras.

    def set_target(self, caller: str, value: int) -> list[GameEvent]:
        return house.set_target(state=self.state, caller=caller, value=value)

    def reveal(self, caller: str) -> list[GameEvent]:
        return house.reveal(state=self.state, caller=caller)

    def set_question(self, caller: str, question: str) -> list[GameEvent]:
        return house.set_question(state=self.state, caller=caller, question=question)

    # Read-only.

    def current_bid(self) -> int:
        return self.state.current_bid

    def get_house(self) -> str | None:
        return self.state.house

    def current_turn(self) -> str | None:
        return turns.current_turn(state=self.state)

    def apply(self, action: ActionName, caller: str, payload: dict[str, Any] | None = None) -> list[GameEvent]:
        """Apply an action by name; raises on rejection.

        Payload fields are parsed lazily by the handler, so a malformed payload
        surfaces as `InvalidArgument` like any other rule violation.
        """

        payload = payload or {}
        handlers: dict[str, Callable[[], list[GameEvent]]] = {
            "claim_house": lambda: self.claim_house(caller),
            "claim_player": lambda: self.claim_player(caller),
            "set_target": lambda: self.set_target(caller, _payload_field(payload, "value", _U64_ADAPTER)),
            "bet": lambda: self.bet(caller, _payload_field(payload, "amount", _U64_ADAPTER)),
            "stay": lambda: self.stay(caller),
            "reveal": lambda: self.reveal(caller),
            "set_question": lambda: self.set_question(caller, _payload_field(payload, "question", _TEXT_ADAPTER)),
        }
        handler = handlers.get(action)
        if handler is None:
            raise InvalidArgument(f"Unknown action: {action}")

        emitted = handler()
        logger.info(
            "game=%s action=%s caller=%s accepted phase=%s",
            self.state.game_id,
            action,
            caller,
            self.state.phase.value,
        )
        return emitted

    def attempt(self, action: ActionName, caller: str, payload: dict[str, Any] | None = None) -> Outcome:
        """Like `apply`, but reports rule violations as a falsy `Outcome`."""

        try:
            emitted = self.apply(action, caller, payload)
        except GameError as e:
            logger.info(
                "game=%s action=%s caller=%s rejected kind=%s", self.state.game_id, action, caller, e.kind.value
            )
            return Outcome(ok=False, error=e.kind, message=e.message)
        return Outcome(ok=True, events=emitted)
