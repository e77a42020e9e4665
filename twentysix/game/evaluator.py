"""Scale value and completion."""

from twentysix.models.card import MAX_RANK
from twentysix.models.game_state import Scale


def effective_value(scale: Scale) -> int:
    """Rank represented by the top of ``scale`` (0 when empty).

    Every placement is the next sequential rank, so this is the length.
    """
    return len(scale)


def is_complete(scale: Scale) -> bool:
    """Check whether ``scale`` has reached the queen."""
    return effective_value(scale) == MAX_RANK
