"""Game logic."""

from .controller import (
    GameOver,
    HandRefilled,
    MoveApplied,
    MoveResult,
    ScaleCompleted,
    TurnController,
    TurnEnded,
    TurnLease,
)
from .dealer import build_deck, deal_game
from .engine import GameEngine, GameResult
from .evaluator import effective_value, is_complete
from .opponent import CancellationToken, OpponentPolicy, TurnReport, choose_discard, choose_move
from .refill import refill_hand, refill_player
from .validator import ERROR_MESSAGES, ErrorKind, ValidationResult, find_target_scale, validate_move

__all__ = [
    "GameOver",
    "HandRefilled",
    "MoveApplied",
    "MoveResult",
    "ScaleCompleted",
    "TurnController",
    "TurnEnded",
    "TurnLease",
    "build_deck",
    "deal_game",
    "GameEngine",
    "GameResult",
    "effective_value",
    "is_complete",
    "CancellationToken",
    "OpponentPolicy",
    "TurnReport",
    "choose_discard",
    "choose_move",
    "refill_hand",
    "refill_player",
    "ERROR_MESSAGES",
    "ErrorKind",
    "ValidationResult",
    "find_target_scale",
    "validate_move",
]
