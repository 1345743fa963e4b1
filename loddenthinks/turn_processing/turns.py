from __future__ import annotations

from loddenthinks.api.models import GameState
from loddenthinks.core.errors import InvalidPhase, NotYourTurn


def current_turn(*, state: GameState) -> str | None:
    return state.turn


def is_turn(*, state: GameState, caller: str) -> bool:
    return state.turn is not None and state.turn == caller


def assert_is_players_turn(*, state: GameState, caller: str) -> None:
    if not is_turn(state=state, caller=caller):
        raise NotYourTurn(f"Not your turn (expected caller={state.turn})")


def other_player(*, state: GameState, identity: str) -> str:
    """Return the registered player that is not `identity`.

    Only meaningful once both seats are taken.
    """

    if len(state.players) < 2:
        raise InvalidPhase("Both players must join before the turn can pass")
    return next(p.identity for p in state.players if p.identity != identity)


def advance(*, state: GameState) -> str:
    """Pass the turn to the other player and return the new turn holder."""

    if state.turn is None:
        raise InvalidPhase("No turn holder yet")
    state.turn = other_player(state=state, identity=state.turn)
    return state.turn
