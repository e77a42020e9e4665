"""Game models."""

from .card import MAX_RANK, MIN_RANK, Card, Suit, create_full_deck
from .game_state import GameState, Scale
from .move import MoveDescriptor, Origin, OriginKind, TargetType
from .player import OpaquePlayerState, PlayerState, Seat

__all__ = [
    "MAX_RANK",
    "MIN_RANK",
    "Card",
    "Suit",
    "create_full_deck",
    "GameState",
    "Scale",
    "MoveDescriptor",
    "Origin",
    "OriginKind",
    "TargetType",
    "OpaquePlayerState",
    "PlayerState",
    "Seat",
]
