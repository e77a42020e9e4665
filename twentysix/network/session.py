"""Client-side mirror of a networked game."""

import logging
from enum import Enum
from typing import Any

from twentysix.config import Config
from twentysix.game.controller import MoveResult, TurnController
from twentysix.game.validator import ErrorKind
from twentysix.logging import GameLogger
from twentysix.models.game_state import GameState
from twentysix.models.move import MoveDescriptor
from twentysix.models.player import Seat

from .protocol import (
    GameStart,
    GameUpdate,
    JoinGame,
    MoveConfirmed,
    PlayerMove,
    ProtocolError,
    WaitingOpponent,
    decode_message,
    encode_message,
)

logger = logging.getLogger(__name__)


class SessionStatus(str, Enum):
    IDLE = "idle"
    WAITING = "waiting"
    PLAYING = "playing"
    FINISHED = "finished"


class ClientSession:
    """Tracks one networked game from the local player's seat.

    The local player always sits in ``Seat.HUMAN``; the remote player is
    ``Seat.OPPONENT`` and only its public discard piles are known card by
    card. Local moves and remote moves both go through the same
    TurnController. Outbound messages are queued in ``outbox`` as
    (event, payload) pairs for the transport to send.
    """

    def __init__(
        self,
        player_name: str,
        config: Config | None = None,
        game_logger: GameLogger | None = None,
    ):
        self.player_name = player_name
        self.config = config or Config()
        self.game_logger = game_logger

        self.status = SessionStatus.IDLE
        self.role: str | None = None
        self.opponent_name: str | None = None
        self.controller: TurnController | None = None
        self.outbox: list[tuple[str, Any]] = []
        self.pending_confirmations = 0

    @property
    def state(self) -> GameState | None:
        return self.controller.state if self.controller else None

    def join(self) -> tuple[str, Any]:
        """Queue and return the join_game message."""
        message = encode_message(JoinGame(player_name=self.player_name))
        self.outbox.append(message)
        return message

    def drain_outbox(self) -> list[tuple[str, Any]]:
        """Return queued outbound messages and clear the queue."""
        messages, self.outbox = self.outbox, []
        return messages

    def submit(self, move: MoveDescriptor) -> MoveResult:
        """Apply a local move and queue it for the relay if accepted."""
        if self.controller is None:
            return MoveResult.reject(ErrorKind.NOT_YOUR_TURN)

        result = self.controller.submit(Seat.HUMAN, move)
        if result.is_valid:
            self.outbox.append(encode_message(PlayerMove(move=move)))
            self.pending_confirmations += 1
            self._update_status()
        return result

    def handle(self, event: str, payload: Any = None) -> MoveResult | None:
        """Handle an inbound message.

        Returns:
            The result of applying the opponent's move for ``game_update``,
            None for every other event.
        """
        try:
            message = decode_message(event, payload)
        except ProtocolError as e:
            logger.warning(f"Dropping inbound message: {e}")
            if event == GameUpdate.event:
                return MoveResult.reject(ErrorKind.INVALID_ORIGIN)
            return None

        if isinstance(message, WaitingOpponent):
            self.status = SessionStatus.WAITING
            logger.info("Waiting for opponent...")
        elif isinstance(message, GameStart):
            self._start_game(message)
        elif isinstance(message, MoveConfirmed):
            if self.pending_confirmations == 0:
                logger.warning("Received move_confirmed with no move pending")
            else:
                self.pending_confirmations -= 1
        elif isinstance(message, GameUpdate):
            return self._apply_remote(message.move)
        else:
            logger.warning(f"Unexpected inbound event: {event}")
        return None

    def _start_game(self, message: GameStart) -> None:
        try:
            human = message.your_state.to_player_state()
        except ValueError as e:
            logger.warning(f"Ignoring game_start with invalid cards: {e}")
            return

        state = GameState(
            human=human,
            opponent=message.opp_count.to_player_state(),
            current_turn=Seat.HUMAN if message.role == "p1" else Seat.OPPONENT,
        )
        self.controller = TurnController(state, self.config, self.game_logger)
        self.role = message.role
        self.opponent_name = message.opponent_name
        self.pending_confirmations = 0
        self.status = SessionStatus.PLAYING
        logger.info(f"Game started as {message.role} against {message.opponent_name}")

    def _apply_remote(self, move: MoveDescriptor) -> MoveResult:
        if self.controller is None:
            logger.warning("Received game_update before game_start")
            return MoveResult.reject(ErrorKind.NOT_YOUR_TURN)

        result = self.controller.submit(Seat.OPPONENT, move)
        if not result.is_valid:
            logger.warning(
                f"Opponent move {move.card_key} from {move.origin} rejected: "
                f"{result.reason.value}"
            )
        self._update_status()
        return result

    def _update_status(self) -> None:
        if self.controller and self.controller.state.is_over:
            self.status = SessionStatus.FINISHED
