from __future__ import annotations

import pytest

from helpers import HOUSE, P1, P2
from loddenthinks.api.models import PlayerSeat
from loddenthinks.core.errors import InvalidPhase
from loddenthinks.game import new_game_state
from loddenthinks.turn_processing import turns


def test_advance_without_turn_holder_is_invalid_phase() -> None:
    state = new_game_state()
    state.players = [PlayerSeat(identity=P1), PlayerSeat(identity=P2)]

    with pytest.raises(InvalidPhase):
        turns.advance(state=state)

    assert state.turn is None


def test_advance_with_one_player_is_invalid_phase() -> None:
    state = new_game_state()
    state.players = [PlayerSeat(identity=P1)]
    state.turn = P1

    with pytest.raises(InvalidPhase):
        turns.advance(state=state)

    assert state.turn == P1


def test_other_player_needs_both_seats() -> None:
    state = new_game_state()
    state.players = [PlayerSeat(identity=P1)]

    with pytest.raises(InvalidPhase):
        turns.other_player(state=state, identity=P1)


def test_advance_alternates_between_the_two_players() -> None:
    state = new_game_state()
    state.players = [PlayerSeat(identity=P1), PlayerSeat(identity=P2)]
    state.turn = P1

    assert turns.advance(state=state) == P2
    assert turns.advance(state=state) == P1
    assert turns.is_turn(state=state, caller=P1)
    assert not turns.is_turn(state=state, caller=HOUSE)


def test_nobody_holds_the_turn_in_an_empty_game() -> None:
    state = new_game_state()

    assert turns.current_turn(state=state) is None
    assert not turns.is_turn(state=state, caller=P1)
