from __future__ import annotations

import pytest

from helpers import OUTSIDER, P1, P2
from loddenthinks.core.errors import InvalidPhase
from loddenthinks.game import LoddenGame
from loddenthinks.outcome import resolve, resolve_winner


@pytest.mark.parametrize(
    ("current_bid", "target", "expected"),
    [
        (11, 10, P1),
        (10, 10, P1),
        (0, 0, P1),
        (9, 10, P2),
        (0, 1, P2),
    ],
)
def test_turn_holder_wins_iff_bid_reaches_target(current_bid: int, target: int, expected: str) -> None:
    winner = resolve_winner(turn=P1, current_bid=current_bid, target=target, players=[P1, P2])
    assert winner == expected


def test_join_order_does_not_matter() -> None:
    assert resolve_winner(turn=P1, current_bid=1, target=5, players=[P2, P1]) == P2
    assert resolve_winner(turn=P2, current_bid=5, target=5, players=[P1, P2]) == P2


def test_resolve_requires_two_players_and_a_registered_turn_holder() -> None:
    with pytest.raises(InvalidPhase):
        resolve_winner(turn=P1, current_bid=0, target=0, players=[P1])
    with pytest.raises(InvalidPhase):
        resolve_winner(turn=OUTSIDER, current_bid=0, target=0, players=[P1, P2])


def test_resolve_reads_state_without_mutating(seated_game: LoddenGame) -> None:
    seated_game.bet(P1, 10)
    before = seated_game.state.model_dump()

    # P2 holds the turn and the bid meets the target.
    assert resolve(seated_game.state) == P2
    assert resolve(seated_game.state) == P2
    assert seated_game.state.model_dump() == before


def test_resolve_without_turn_holder(game: LoddenGame) -> None:
    with pytest.raises(InvalidPhase):
        resolve(game.state)
