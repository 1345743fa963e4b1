from __future__ import annotations

from loddenthinks.api.models import BidRecord, GameState
from loddenthinks.core import events
from loddenthinks.core.events import GameEvent
from loddenthinks.fsm import close_betting
from loddenthinks.outcome import resolve
from loddenthinks.turn_processing.turns import advance
from loddenthinks.turn_processing.validators import validate_action


def bet(*, state: GameState, caller: str, amount: int) -> list[GameEvent]:
    """Raise (or call, with an equal amount) and pass the turn."""

    validate_action(state=state, caller=caller, action="bet", amount=amount)

    record = BidRecord(seq=len(state.bids) + 1, bidder=caller, amount=amount)
    state.current_bid = amount
    state.bids.append(record)
    next_turn = advance(state=state)
    return [events.bid_placed(amount=amount, next_turn=next_turn)]


def stay(*, state: GameState, caller: str) -> list[GameEvent]:
    """Decline to raise. Ends the betting round and settles the winner.

    The staying player hands the turn back to the last bidder before the
    round is resolved, so the last bidder wins when the bid reached the target.
    """

    validate_action(state=state, caller=caller, action="stay")

    state.awaiting_reveal = True
    advance(state=state)
    winner = resolve(state)
    state.winner = winner
    close_betting(state)
    return [events.result(winner=winner)]
