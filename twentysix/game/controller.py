"""Turn controller: the only writer of GameState during play."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Union

from twentysix.config import Config
from twentysix.logging import GameLogger
from twentysix.models.card import Card
from twentysix.models.game_state import GameState
from twentysix.models.move import (
    NUM_DISCARD_PILES,
    NUM_SCALES,
    MoveDescriptor,
    Origin,
    OriginKind,
    TargetType,
)
from twentysix.models.player import PlayerState, Seat

from .evaluator import is_complete
from .refill import refill_player
from .validator import ERROR_MESSAGES, ErrorKind, validate_move

logger = logging.getLogger(__name__)


@dataclass
class MoveApplied:
    seat: Seat
    card: Card
    origin: Origin
    scale_index: int


@dataclass
class ScaleCompleted:
    scale_index: int
    cards: list[Card]


@dataclass
class HandRefilled:
    seat: Seat
    drawn: int
    reason: str  # "hand_empty" or "end_of_turn"


@dataclass
class TurnEnded:
    seat: Seat
    discarded: Card | None
    pile_index: int | None
    next_seat: Seat


@dataclass
class GameOver:
    winner: Seat


GameEvent = Union[MoveApplied, ScaleCompleted, HandRefilled, TurnEnded, GameOver]


@dataclass
class MoveResult:
    """Outcome of a controller transition.

    Rejected transitions carry a reason and no events, and leave the state
    untouched.
    """

    is_valid: bool
    reason: ErrorKind | None = None
    events: list[GameEvent] = field(default_factory=list)

    @classmethod
    def reject(cls, reason: ErrorKind) -> MoveResult:
        return cls(is_valid=False, reason=reason)

    @property
    def error_message(self) -> str:
        return ERROR_MESSAGES[self.reason] if self.reason else ""

    @property
    def game_over(self) -> bool:
        return any(isinstance(e, GameOver) for e in self.events)


@dataclass(eq=False)
class TurnLease:
    """Token held by an automated player while it executes its turn."""

    seat: Seat


class TurnController:
    """Applies moves and discards to a GameState.

    Every mutation during play goes through :meth:`apply_move` or
    :meth:`discard` (or :meth:`submit`, which dispatches to them), so local,
    automated and remote moves share one set of rules.
    """

    def __init__(
        self,
        state: GameState,
        config: Config | None = None,
        game_logger: GameLogger | None = None,
    ):
        """Initialize controller.

        Args:
            state: State to own; callers must not write to it directly
            config: Configuration (uses defaults if not provided)
            game_logger: GameLogger instance for detailed logging
        """
        self._state = state
        self.config = config or Config()
        self.rules = self.config.rules
        self.game_logger = game_logger

        self._lease: TurnLease | None = None
        self._on_event: Callable[[GameEvent], None] | None = None

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def current_turn(self) -> Seat:
        return self._state.current_turn

    @property
    def automated_seat(self) -> Seat | None:
        """Seat currently executing an automated turn, if any."""
        return self._lease.seat if self._lease else None

    def set_callbacks(self, on_event: Callable[[GameEvent], None] | None = None) -> None:
        """Set event callbacks.

        Args:
            on_event: Called with every event of every accepted transition
        """
        self._on_event = on_event

    def begin_automated_turn(self, seat: Seat) -> TurnLease:
        """Flag ``seat`` as executing its turn; other callers are locked out."""
        if self._lease is not None:
            raise RuntimeError(f"{self._lease.seat.value} is already executing its turn")
        self._lease = TurnLease(seat)
        return self._lease

    def end_automated_turn(self, lease: TurnLease) -> None:
        """Release a lease returned by :meth:`begin_automated_turn`."""
        if self._lease is lease:
            self._lease = None

    def submit(
        self,
        seat: Seat,
        move: MoveDescriptor,
        lease: TurnLease | None = None,
    ) -> MoveResult:
        """Apply a move descriptor, whatever its source."""
        if move.target_type == TargetType.DISCARD:
            return self.discard(
                seat, move.target_index, move.card_key, move.origin, lease=lease
            )
        return self.apply_move(seat, move, lease=lease)

    def apply_move(
        self,
        seat: Seat,
        move: MoveDescriptor,
        lease: TurnLease | None = None,
    ) -> MoveResult:
        """Place a card on a central scale.

        The turn does not change; a player may make any number of moves.
        """
        rejection = self._check_actor(seat, lease)
        if rejection:
            return self._rejected(seat, move, rejection)

        if move.target_type != TargetType.SCALE or not 0 <= move.target_index < NUM_SCALES:
            return self._rejected(seat, move, ErrorKind.INVALID_TARGET)

        player = self._state.player(seat)
        card = self._parse_card(move.card_key)
        if card is None or not player.available(move.origin, card):
            return self._rejected(seat, move, ErrorKind.INVALID_ORIGIN)

        scale = self._state.scales[move.target_index]
        validation = validate_move(scale, card)
        if not validation.is_valid:
            return self._rejected(seat, move, validation.reason)

        # Accepted: everything below mutates state
        result = MoveResult(is_valid=True)
        player.take(move.origin, card)
        scale.cards.append(card)
        result.events.append(MoveApplied(seat, card, move.origin, move.target_index))
        logger.debug(f"{seat.value} played {card} from {move.origin} to scale {move.target_index}")

        if self.game_logger:
            self.game_logger.log_move(self._state, seat, card, move.origin, move.target_index)

        if is_complete(scale):
            cards = scale.clear()
            self._state.retired.extend(cards)
            result.events.append(ScaleCompleted(move.target_index, cards))
            logger.info(f"Scale {move.target_index} completed by {seat.value}")

            if self.game_logger:
                self.game_logger.log_special(
                    self._state.game_number,
                    self._state.turn_number,
                    "scale_complete",
                    seat,
                    {"scale": move.target_index},
                )

        if player.hand_size == 0:
            self._refill(seat, "hand_empty", result)

        self._check_winner(seat, result)
        self._emit(result)
        return result

    def discard(
        self,
        seat: Seat,
        pile_index: int,
        card_key: str | None = None,
        origin: Origin | None = None,
        lease: TurnLease | None = None,
    ) -> MoveResult:
        """End the turn by moving a hand card onto a discard pile.

        Without ``card_key`` the last hand card is discarded. With an empty
        hand nothing is discarded but the turn still ends.
        """
        rejection = self._check_actor(seat, lease)
        if rejection:
            return self._rejected_discard(seat, rejection)

        origin = origin or Origin.hand()
        if origin.kind != OriginKind.HAND:
            return self._rejected_discard(seat, ErrorKind.INVALID_ORIGIN)
        if not 0 <= pile_index < NUM_DISCARD_PILES:
            return self._rejected_discard(seat, ErrorKind.INVALID_TARGET)

        player = self._state.player(seat)
        card: Card | None = None
        if player.hand_size > 0:
            if card_key is not None:
                card = self._parse_card(card_key)
            elif isinstance(player, PlayerState):
                card = player.hand[-1]
            if card is None or not player.available(origin, card):
                return self._rejected_discard(seat, ErrorKind.INVALID_ORIGIN)

        # Accepted: everything below mutates state
        result = MoveResult(is_valid=True)
        if card is not None:
            player.discard_from_hand(card, pile_index)

        next_seat = seat.other
        self._state.current_turn = next_seat
        self._state.turn_number += 1
        result.events.append(
            TurnEnded(seat, card, pile_index if card is not None else None, next_seat)
        )
        logger.debug(f"{seat.value} discarded {card} to pile {pile_index}; {next_seat.value} to play")

        if self.game_logger:
            self.game_logger.log_turn_end(self._state, seat, card, pile_index if card is not None else None)

        self._refill(seat, "end_of_turn", result)
        self._check_winner(seat, result)
        self._emit(result)
        return result

    def _check_actor(self, seat: Seat, lease: TurnLease | None) -> ErrorKind | None:
        if self._state.is_over:
            return ErrorKind.GAME_OVER
        if seat != self._state.current_turn:
            return ErrorKind.NOT_YOUR_TURN
        if self._lease is not None and lease is not self._lease:
            return ErrorKind.NOT_YOUR_TURN
        return None

    @staticmethod
    def _parse_card(card_key: str) -> Card | None:
        try:
            return Card.from_key(card_key)
        except ValueError:
            return None

    def _refill(self, seat: Seat, reason: str, result: MoveResult) -> None:
        drawn = refill_player(self._state.player(seat), self.rules.hand_size)
        if drawn:
            result.events.append(HandRefilled(seat, drawn, reason))
            logger.debug(f"{seat.value} drew {drawn} card(s) ({reason})")

    def _check_winner(self, seat: Seat, result: MoveResult) -> None:
        if self._state.is_over or not self._state.player(seat).is_out:
            return
        self._state.winner = seat
        result.events.append(GameOver(seat))
        logger.info(f"Game {self._state.game_number} over: {seat.value} wins")

        if self.game_logger:
            self.game_logger.log_special(
                self._state.game_number,
                self._state.turn_number,
                "game_over",
                seat,
            )

    def _emit(self, result: MoveResult) -> None:
        if self._on_event:
            for event in result.events:
                self._on_event(event)

    def _rejected(self, seat: Seat, move: MoveDescriptor, reason: ErrorKind) -> MoveResult:
        logger.debug(f"Rejected {seat.value} move {move.card_key} from {move.origin}: {reason.value}")
        return MoveResult.reject(reason)

    def _rejected_discard(self, seat: Seat, reason: ErrorKind) -> MoveResult:
        logger.debug(f"Rejected {seat.value} discard: {reason.value}")
        return MoveResult.reject(reason)
