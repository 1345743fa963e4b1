from __future__ import annotations

import pytest
from statemachine.exceptions import TransitionNotAllowed

from helpers import HOUSE, P1, P2
from loddenthinks.api.models import GamePhase
from loddenthinks.fsm import GameFSM, open_table_if_ready
from loddenthinks.game import LoddenGame, new_game_state


def test_fsm_starts_from_persisted_phase() -> None:
    state = new_game_state()
    state.phase = GamePhase.awaiting_reveal

    fsm = GameFSM(state)

    assert fsm.current_state == fsm.awaiting_reveal


def test_open_table_is_a_noop_until_ready() -> None:
    state = new_game_state()
    assert open_table_if_ready(state) is False
    assert state.phase == GamePhase.lobby


def test_fsm_rejects_skipping_phases() -> None:
    fsm = GameFSM(new_game_state())

    with pytest.raises(TransitionNotAllowed):
        fsm.player_stayed()
    with pytest.raises(TransitionNotAllowed):
        fsm.house_revealed()


def test_full_lifecycle_walks_every_phase() -> None:
    g = LoddenGame()
    seen = [g.state.phase]

    g.claim_house(HOUSE)
    g.claim_player(P1)
    g.claim_player(P2)
    seen.append(g.state.phase)
    g.bet(P1, 1)
    g.stay(P2)
    seen.append(g.state.phase)
    g.reveal(HOUSE)
    seen.append(g.state.phase)

    assert seen == [GamePhase.lobby, GamePhase.playing, GamePhase.awaiting_reveal, GamePhase.resolved]
