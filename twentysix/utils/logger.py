"""Logging utilities and game state display."""

import logging
import sys
from typing import TYPE_CHECKING

from twentysix.game.evaluator import effective_value
from twentysix.models.player import PlayerState, Seat

if TYPE_CHECKING:
    from twentysix.game.engine import GameResult
    from twentysix.game.opponent import TurnReport
    from twentysix.models.game_state import GameState


def setup_logging(level: str = "INFO") -> None:
    """Configure logging for the application.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR)
    """
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stdout,
    )


class GameDisplay:
    """Display game state to stdout."""

    def __init__(self, show_hands: bool = False):
        """Initialize display.

        Args:
            show_hands: Whether to show player hands
        """
        self.show_hands = show_hands

    def print_separator(self) -> None:
        """Print a separator line."""
        print("=" * 60)

    def print_turn(self, state: "GameState", report: "TurnReport") -> None:
        """Print what a turn did and the board after it."""
        played = ", ".join(f"{m.card_key}->S{m.target_index + 1}" for m in report.moves)
        print(f"\n{report.seat.value}: {played or 'no moves'}")
        if report.discard and report.discard.is_valid:
            print("  -> discarded")
        self.print_board(state)

    def print_board(self, state: "GameState") -> None:
        """Print scales and player counts."""
        scales = " | ".join(
            f"S{i + 1}:{effective_value(s):>2}" for i, s in enumerate(state.scales)
        )
        print(f"Scales: {scales}")
        for seat in Seat:
            player = state.player(seat)
            print(f"  {seat.value:>8}: {player}")
            if self.show_hands and isinstance(player, PlayerState):
                print(f"            hand: {player.hand}")

    def print_game_end(self, result: "GameResult") -> None:
        """Print game end results."""
        if result.winner:
            print(f"\nGame {result.game_number} won by {result.winner.value} in {result.turns} turns")
        else:
            print(f"\nGame {result.game_number}: stalemate after {result.turns} turns")

    def print_final_results(self, results: dict[str, int]) -> None:
        """Print final session results."""
        self.print_separator()
        print("FINAL RESULTS")
        self.print_separator()

        for name, count in sorted(results.items(), key=lambda x: x[1], reverse=True):
            print(f"  {name}: {count}")
