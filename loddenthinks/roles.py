from __future__ import annotations

from enum import Enum

from loddenthinks.api.models import GameState, PlayerSeat
from loddenthinks.core import events
from loddenthinks.core.events import GameEvent
from loddenthinks.core.identity import is_sentinel
from loddenthinks.fsm import open_table_if_ready
from loddenthinks.turn_processing.validators import validate_action


class RoleName(str, Enum):
    house = "house"
    player = "player"


def is_house(*, state: GameState, caller: str) -> bool:
    return state.house is not None and not is_sentinel(caller) and state.house == caller


def is_player(*, state: GameState, caller: str) -> bool:
    return any(p.identity == caller for p in state.players)


def role_of(*, state: GameState, caller: str) -> RoleName | None:
    if is_house(state=state, caller=caller):
        return RoleName.house
    if is_player(state=state, caller=caller):
        return RoleName.player
    return None


def claim_house(*, state: GameState, caller: str) -> list[GameEvent]:
    """Make `caller` the house.

    An already-assigned house is overwritten by any non-player caller.
    """

    validate_action(state=state, caller=caller, action="claim_house")

    state.house = caller
    open_table_if_ready(state)
    return [events.house_assigned(caller)]


def claim_player(*, state: GameState, caller: str) -> list[GameEvent]:
    validate_action(state=state, caller=caller, action="claim_player")

    state.players.append(PlayerSeat(identity=caller, stake=0))
    if state.turn is None:
        # First joiner moves first.
        state.turn = caller
    open_table_if_ready(state)
    return [events.player_joined(caller)]
