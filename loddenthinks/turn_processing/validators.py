from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from loddenthinks.api.models import QUESTION_MAX_LENGTH, U64_MAX, GamePhase, GameState
from loddenthinks.core.errors import (
    BidTooLow,
    CapacityExceeded,
    InvalidArgument,
    InvalidPhase,
    NotAuthorized,
    RoleConflict,
)
from loddenthinks.core.identity import is_sentinel

MAX_PLAYERS = 2


@dataclass(frozen=True, slots=True)
class ValidationContext:
    """Inputs available to validators.

    Keep this tight and serializable-ish so we can safely log it.
    """

    game_id: str
    caller: str
    action: str
    # Bet amount for `bet`, target value for `set_target`.
    amount: int | None = None
    text: str | None = None


class TurnValidator(ABC):
    """A small, composable validation unit for an incoming action."""

    @abstractmethod
    def validate(self, *, ctx: ValidationContext, state: GameState) -> None:
        raise NotImplementedError


@dataclass(frozen=True, slots=True)
class PhaseValidator(TurnValidator):
    allowed_phases: frozenset[GamePhase]

    def validate(self, *, ctx: ValidationContext, state: GameState) -> None:
        if state.phase not in self.allowed_phases:
            allowed = ",".join(sorted(p.value for p in self.allowed_phases))
            raise InvalidPhase(
                f"Action '{ctx.action}' not allowed in phase '{state.phase.value}' (allowed: {allowed})"
            )


@dataclass(frozen=True, slots=True)
class SentinelCallerValidator(TurnValidator):
    """Reject the zero/empty identity outright."""

    def validate(self, *, ctx: ValidationContext, state: GameState) -> None:
        if is_sentinel(ctx.caller):
            raise NotAuthorized("The zero identity cannot take a role")


@dataclass(frozen=True, slots=True)
class NotHouseValidator(TurnValidator):
    def validate(self, *, ctx: ValidationContext, state: GameState) -> None:
        from loddenthinks.roles import is_house

        if is_house(state=state, caller=ctx.caller):
            raise RoleConflict("The house cannot also be a player")


@dataclass(frozen=True, slots=True)
class NotPlayerValidator(TurnValidator):
    def validate(self, *, ctx: ValidationContext, state: GameState) -> None:
        from loddenthinks.roles import is_player

        if is_player(state=state, caller=ctx.caller):
            if ctx.action == "claim_house":
                raise RoleConflict("A player cannot also be the house")
            raise RoleConflict("Caller already joined as a player")


@dataclass(frozen=True, slots=True)
class SeatAvailableValidator(TurnValidator):
    max_players: int = MAX_PLAYERS

    def validate(self, *, ctx: ValidationContext, state: GameState) -> None:
        if len(state.players) >= self.max_players:
            raise CapacityExceeded(f"At most {self.max_players} players allowed")


@dataclass(frozen=True, slots=True)
class HouseOnlyValidator(TurnValidator):
    def validate(self, *, ctx: ValidationContext, state: GameState) -> None:
        from loddenthinks.roles import is_house

        if not is_house(state=state, caller=ctx.caller):
            raise NotAuthorized(f"Action '{ctx.action}' is reserved for the house")


@dataclass(frozen=True, slots=True)
class PlayerOnlyValidator(TurnValidator):
    def validate(self, *, ctx: ValidationContext, state: GameState) -> None:
        from loddenthinks.roles import is_player

        if not is_player(state=state, caller=ctx.caller):
            raise NotAuthorized(f"Action '{ctx.action}' is reserved for players")


@dataclass(frozen=True, slots=True)
class CurrentTurnValidator(TurnValidator):
    """Only the turn holder may bet or stay."""

    def validate(self, *, ctx: ValidationContext, state: GameState) -> None:
        from loddenthinks.turn_processing.turns import assert_is_players_turn

        assert_is_players_turn(state=state, caller=ctx.caller)


@dataclass(frozen=True, slots=True)
class U64RangeValidator(TurnValidator):
    def validate(self, *, ctx: ValidationContext, state: GameState) -> None:
        amount = ctx.amount
        if isinstance(amount, bool) or not isinstance(amount, int) or not 0 <= amount <= U64_MAX:
            raise InvalidArgument(f"Value must be an integer in 0..{U64_MAX} (got {amount!r})")


@dataclass(frozen=True, slots=True)
class QuestionLengthValidator(TurnValidator):
    max_length: int = QUESTION_MAX_LENGTH

    def validate(self, *, ctx: ValidationContext, state: GameState) -> None:
        if not ctx.text or len(ctx.text) > self.max_length:
            raise InvalidArgument(f"Question must be 1..{self.max_length} characters")


@dataclass(frozen=True, slots=True)
class MinimumBidValidator(TurnValidator):
    """Equal bids are accepted; only strictly lower ones are rejected."""

    def validate(self, *, ctx: ValidationContext, state: GameState) -> None:
        if ctx.amount is None or ctx.amount < state.current_bid:
            raise BidTooLow(f"Bid must be at least {state.current_bid}")


@dataclass(frozen=True, slots=True)
class ValidatorPipeline:
    validators: tuple[TurnValidator, ...]

    def validate(self, *, ctx: ValidationContext, state: GameState) -> None:
        for v in self.validators:
            v.validate(ctx=ctx, state=state)


_PLAYING = frozenset({GamePhase.playing})

DEFAULT_ACTION_PIPELINES: dict[str, ValidatorPipeline] = {
    "claim_house": ValidatorPipeline(
        validators=(
            SentinelCallerValidator(),
            NotPlayerValidator(),
        )
    ),
    "claim_player": ValidatorPipeline(
        validators=(
            SentinelCallerValidator(),
            NotHouseValidator(),
            NotPlayerValidator(),
            SeatAvailableValidator(),
        )
    ),
    "set_target": ValidatorPipeline(
        validators=(
            HouseOnlyValidator(),
            U64RangeValidator(),
        )
    ),
    "bet": ValidatorPipeline(
        validators=(
            PhaseValidator(allowed_phases=_PLAYING),
            CurrentTurnValidator(),
            U64RangeValidator(),
            MinimumBidValidator(),
        )
    ),
    "stay": ValidatorPipeline(
        validators=(
            PhaseValidator(allowed_phases=_PLAYING),
            CurrentTurnValidator(),
        )
    ),
    "reveal": ValidatorPipeline(
        validators=(
            HouseOnlyValidator(),
            PhaseValidator(allowed_phases=frozenset({GamePhase.awaiting_reveal})),
        )
    ),
    "set_question": ValidatorPipeline(
        validators=(
            PlayerOnlyValidator(),
            PhaseValidator(allowed_phases=frozenset({GamePhase.lobby, GamePhase.playing})),
            QuestionLengthValidator(),
        )
    ),
}


def pipeline_for_action(action: str) -> ValidatorPipeline:
    pipe = DEFAULT_ACTION_PIPELINES.get(action)
    if pipe is None:
        raise ValueError(f"Unknown action: {action}")
    return pipe


def validate_action(
    *,
    state: GameState,
    caller: str,
    action: str,
    amount: int | None = None,
    text: str | None = None,
) -> None:
    ctx = ValidationContext(game_id=str(state.game_id), caller=caller, action=action, amount=amount, text=text)
    pipeline_for_action(action).validate(ctx=ctx, state=state)
