"""Automated player.

Greedy and deterministic: each decision step takes the first legal option
in a fixed priority order (reserve top, hand left to right, top wildcard)
against the scales in ascending index order. There is no lookahead.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Awaitable, Callable

from twentysix.config import Config
from twentysix.models.game_state import GameState
from twentysix.models.move import MoveDescriptor, Origin
from twentysix.models.player import PlayerState, Seat

from .controller import MoveResult, TurnController
from .validator import find_target_scale

logger = logging.getLogger(__name__)


def choose_move(state: GameState, seat: Seat) -> MoveDescriptor | None:
    """Pick the next move for ``seat``, or None when no card can be played.

    Raises:
        ValueError: If the seat's cards are not known.
    """
    player = state.player(seat)
    if not isinstance(player, PlayerState):
        raise ValueError(f"Cannot choose moves for opaque seat {seat.value}")

    # 1. Reserve top (highest priority)
    if player.reserve:
        card = player.reserve[-1]
        target = find_target_scale(state.scales, card)
        if target is not None:
            return MoveDescriptor.to_scale(card.key, target, Origin.reserve())

    # 2. Hand, left to right
    for card in player.hand:
        target = find_target_scale(state.scales, card)
        if target is not None:
            return MoveDescriptor.to_scale(card.key, target, Origin.hand())

    # 3. Top wildcard
    if player.wildcards:
        card = player.wildcards[-1]
        target = find_target_scale(state.scales, card)
        if target is not None:
            return MoveDescriptor.to_scale(card.key, target, Origin.wildcard())

    return None


def choose_discard(state: GameState, seat: Seat) -> int:
    """Pick the discard pile for the turn-ending discard.

    The shortest pile wins; ties go to the lowest index.
    """
    discards = state.player(seat).discards
    return min(range(len(discards)), key=lambda i: (len(discards[i]), i))


class CancellationToken:
    """Stops an automated turn between moves."""

    def __init__(self) -> None:
        self._cancelled = False

    def cancel(self) -> None:
        self._cancelled = True

    @property
    def cancelled(self) -> bool:
        return self._cancelled


@dataclass
class TurnReport:
    """What an automated turn did."""

    seat: Seat
    moves: list[MoveDescriptor] = field(default_factory=list)
    discard: MoveResult | None = None
    cancelled: bool = False


class OpponentPolicy:
    """Plays a whole turn through a TurnController, one paced move at a time."""

    def __init__(
        self,
        move_delay: float = 0.8,
        discard_delay: float = 0.8,
        sleep: Callable[[float], Awaitable[None]] | None = None,
    ):
        """Initialize policy.

        Args:
            move_delay: Pause after each applied move (seconds)
            discard_delay: Pause before the turn-ending discard (seconds)
            sleep: Awaitable sleep function (defaults to asyncio.sleep)
        """
        self.move_delay = move_delay
        self.discard_delay = discard_delay
        self._sleep = sleep or asyncio.sleep

    @classmethod
    def from_config(cls, config: Config) -> OpponentPolicy:
        return cls(
            move_delay=config.opponent.move_delay,
            discard_delay=config.opponent.discard_delay,
        )

    async def play_turn(
        self,
        controller: TurnController,
        seat: Seat = Seat.OPPONENT,
        token: CancellationToken | None = None,
        on_step: Callable[[GameState], None] | None = None,
    ) -> TurnReport:
        """Play moves until none is legal, then discard to end the turn.

        While the turn runs, the controller rejects moves from anyone else. If
        another automated turn is already running, nothing is played.
        Once ``token`` is cancelled or the game ends, no further move is
        issued and no discard is made.

        Args:
            controller: Controller owning the game state
            seat: Seat to play for
            token: Cancellation token
            on_step: Called with a snapshot of the state after each change

        Returns:
            TurnReport describing the turn.
        """
        token = token or CancellationToken()
        report = TurnReport(seat)

        if controller.state.is_over or controller.current_turn != seat:
            logger.debug(f"Not {seat.value}'s turn; nothing to play")
            return report

        if controller.automated_seat is not None:
            logger.warning(f"{controller.automated_seat.value} is already executing its turn")
            return report

        lease = controller.begin_automated_turn(seat)
        try:
            while not token.cancelled and not controller.state.is_over:
                move = choose_move(controller.state, seat)
                if move is None:
                    break

                result = controller.apply_move(seat, move, lease=lease)
                if not result.is_valid:
                    logger.warning(f"Automated move {move.card_key} rejected: {result.reason}")
                    break

                report.moves.append(move)
                self._notify(controller, on_step)
                await self._sleep(self.move_delay)

            if controller.state.is_over:
                return report

            if not token.cancelled:
                await self._sleep(self.discard_delay)

            if token.cancelled:
                report.cancelled = True
                logger.info(f"{seat.value} turn cancelled after {len(report.moves)} move(s)")
                return report

            pile = choose_discard(controller.state, seat)
            report.discard = controller.discard(seat, pile, lease=lease)
            self._notify(controller, on_step)
        finally:
            controller.end_automated_turn(lease)

        return report

    def play_turn_sync(
        self,
        controller: TurnController,
        seat: Seat = Seat.OPPONENT,
        token: CancellationToken | None = None,
        on_step: Callable[[GameState], None] | None = None,
    ) -> TurnReport:
        """Run :meth:`play_turn` to completion outside an event loop."""
        return asyncio.run(self.play_turn(controller, seat, token, on_step))

    @staticmethod
    def _notify(
        controller: TurnController,
        on_step: Callable[[GameState], None] | None,
    ) -> None:
        if on_step:
            on_step(controller.state.model_copy(deep=True))
