from __future__ import annotations

from statemachine import State, StateMachine

from loddenthinks.api.models import GamePhase, GameState


class GameFSM(StateMachine):
    """FSM wrapper around GameState.

    - phases: lobby -> playing -> awaiting reveal -> resolved
    - rule functions mutate the state; the FSM only guards phase transitions.
    """

    lobby = State(GamePhase.lobby.value, value=GamePhase.lobby.value, initial=True)
    playing = State(GamePhase.playing.value, value=GamePhase.playing.value)
    awaiting_reveal = State(GamePhase.awaiting_reveal.value, value=GamePhase.awaiting_reveal.value)
    resolved = State(GamePhase.resolved.value, value=GamePhase.resolved.value, final=True)

    table_ready = lobby.to(playing)
    player_stayed = playing.to(awaiting_reveal)
    house_revealed = awaiting_reveal.to(resolved)

    def __init__(self, game: GameState):
        self.game = game
        super().__init__(start_value=game.phase.value)

    def is_table_ready(self) -> bool:
        # Betting needs a house, both seats taken and a turn holder.
        return (
            self.game.house is not None
            and len(self.game.players) == 2
            and self.game.turn is not None
            and not self.game.awaiting_reveal
        )

    def sync_phase_to_model(self) -> None:
        self.game.phase = GamePhase(str(self.current_state.value))


def open_table_if_ready(state: GameState) -> bool:
    """Move lobby -> playing once the table is complete. Returns True if it moved."""

    if state.phase != GamePhase.lobby:
        return False
    fsm = GameFSM(state)
    if not fsm.is_table_ready():
        return False
    fsm.table_ready()
    fsm.sync_phase_to_model()
    return True


def close_betting(state: GameState) -> None:
    fsm = GameFSM(state)
    fsm.player_stayed()
    fsm.sync_phase_to_model()


def mark_revealed(state: GameState) -> None:
    fsm = GameFSM(state)
    fsm.house_revealed()
    fsm.sync_phase_to_model()
