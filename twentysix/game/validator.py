"""Move validation for scale placements."""

from dataclasses import dataclass
from enum import Enum

from twentysix.models.card import MAX_RANK, MIN_RANK, Card
from twentysix.models.game_state import Scale


class ErrorKind(str, Enum):
    """Reason a move or discard was rejected."""

    OUT_OF_SEQUENCE = "OUT_OF_SEQUENCE"
    WILDCARD_EDGE_FORBIDDEN = "WILDCARD_EDGE_FORBIDDEN"
    CONSECUTIVE_WILDCARDS_FORBIDDEN = "CONSECUTIVE_WILDCARDS_FORBIDDEN"
    NOT_YOUR_TURN = "NOT_YOUR_TURN"
    INVALID_ORIGIN = "INVALID_ORIGIN"
    INVALID_TARGET = "INVALID_TARGET"
    GAME_OVER = "GAME_OVER"


# User-facing messages for the rendering layer
ERROR_MESSAGES: dict[ErrorKind, str] = {
    ErrorKind.OUT_OF_SEQUENCE: "That card does not continue the scale.",
    ErrorKind.WILDCARD_EDGE_FORBIDDEN: "Wildcards cannot be the ace or the queen of a scale.",
    ErrorKind.CONSECUTIVE_WILDCARDS_FORBIDDEN: "Two wildcards cannot be played in a row.",
    ErrorKind.NOT_YOUR_TURN: "It is not your turn.",
    ErrorKind.INVALID_ORIGIN: "That card cannot be played from there.",
    ErrorKind.INVALID_TARGET: "There is no such pile.",
    ErrorKind.GAME_OVER: "The game is over.",
}


@dataclass
class ValidationResult:
    """Result of move validation."""

    is_valid: bool
    reason: ErrorKind | None = None

    @property
    def error_message(self) -> str:
        return ERROR_MESSAGES[self.reason] if self.reason else ""


def validate_move(scale: Scale, card: Card) -> ValidationResult:
    """Check whether ``card`` may be placed on ``scale``.

    The card must represent the next rank of the run. Wildcards stand in
    for any rank except the first and the last, and never follow another
    wildcard.
    """
    next_rank = len(scale) + 1
    if next_rank > MAX_RANK:
        return ValidationResult(is_valid=False, reason=ErrorKind.OUT_OF_SEQUENCE)

    if not card.is_wildcard:
        if card.rank != next_rank:
            return ValidationResult(is_valid=False, reason=ErrorKind.OUT_OF_SEQUENCE)
        return ValidationResult(is_valid=True)

    if next_rank in (MIN_RANK, MAX_RANK):
        return ValidationResult(is_valid=False, reason=ErrorKind.WILDCARD_EDGE_FORBIDDEN)

    top = scale.top
    if top is not None and top.is_wildcard:
        return ValidationResult(
            is_valid=False, reason=ErrorKind.CONSECUTIVE_WILDCARDS_FORBIDDEN
        )

    return ValidationResult(is_valid=True)


def find_target_scale(scales: list[Scale], card: Card) -> int | None:
    """Find the first scale, by ascending index, that accepts ``card``."""
    for index, scale in enumerate(scales):
        if validate_move(scale, card).is_valid:
            return index
    return None
