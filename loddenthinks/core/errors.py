"""Typed rejections for game operations.

Every rejection happens before any mutation, so callers can treat a raised
`GameError` as "nothing changed".
"""

from __future__ import annotations

from enum import StrEnum


class ErrorKind(StrEnum):
    not_authorized = "not_authorized"
    role_conflict = "role_conflict"
    capacity_exceeded = "capacity_exceeded"
    not_your_turn = "not_your_turn"
    bid_too_low = "bid_too_low"
    invalid_phase = "invalid_phase"
    invalid_argument = "invalid_argument"


class GameError(ValueError):
    """Base class for all rule violations."""

    kind: ErrorKind

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class NotAuthorized(GameError):
    kind = ErrorKind.not_authorized


class RoleConflict(GameError):
    kind = ErrorKind.role_conflict


class CapacityExceeded(GameError):
    kind = ErrorKind.capacity_exceeded


class NotYourTurn(GameError):
    kind = ErrorKind.not_your_turn


class BidTooLow(GameError):
    kind = ErrorKind.bid_too_low


class InvalidPhase(GameError):
    kind = ErrorKind.invalid_phase


class InvalidArgument(GameError):
    """Out-of-range amount, bad question text or a malformed action payload."""

    kind = ErrorKind.invalid_argument


class GameNotFound(ValueError):
    def __init__(self, game_id: object) -> None:
        self.game_id = game_id
        super().__init__("Game not found")


class GameBusy(ValueError):
    def __init__(self, game_id: object) -> None:
        self.game_id = game_id
        super().__init__("Game is busy")
