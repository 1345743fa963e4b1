from __future__ import annotations

from collections.abc import Sequence

from loddenthinks.api.models import GameState
from loddenthinks.core.errors import InvalidPhase


def resolve_winner(*, turn: str, current_bid: int, target: int, players: Sequence[str]) -> str:
    """Pick the winner of a finished betting round.

    The turn holder wins when the bid reached the target; otherwise the
    other player does.
    """

    if len(players) != 2 or turn not in players:
        raise InvalidPhase("A round can only be resolved between two registered players")
    if current_bid >= target:
        return turn
    return next(p for p in players if p != turn)


def resolve(state: GameState) -> str:
    if state.turn is None:
        raise InvalidPhase("No turn holder yet")
    return resolve_winner(
        turn=state.turn,
        current_bid=state.current_bid,
        target=state.target,
        players=[p.identity for p in state.players],
    )
