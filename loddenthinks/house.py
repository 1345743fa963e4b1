from __future__ import annotations

from loddenthinks.api.models import GameState
from loddenthinks.core import events
from loddenthinks.core.events import GameEvent
from loddenthinks.fsm import mark_revealed
from loddenthinks.turn_processing.validators import validate_action


def set_target(*, state: GameState, caller: str, value: int) -> list[GameEvent]:
    """Store the house's number. Any u64 is accepted, including 0."""

    validate_action(state=state, caller=caller, action="set_target", amount=value)
    state.target = value
    return []


def reveal(*, state: GameState, caller: str) -> list[GameEvent]:
    """Acknowledge the end of the round.

    There is no commitment to open here: the target has been stored in
    plaintext since `set_target`. This only closes the game.
    """

    validate_action(state=state, caller=caller, action="reveal")
    mark_revealed(state)
    return [events.revealed(target=state.target, winner=state.winner)]


def set_question(*, state: GameState, caller: str, question: str) -> list[GameEvent]:
    validate_action(state=state, caller=caller, action="set_question", text=question)
    state.question = question
    return []
