"""Game logger for detailed game replay."""

import json
from datetime import datetime
from pathlib import Path
from typing import Any, TextIO

from pydantic import BaseModel

from twentysix.models.card import Card
from twentysix.models.game_state import GameState
from twentysix.models.move import Origin
from twentysix.models.player import Seat

from .formatters import format_card, format_players, format_scales


class GameLogConfig(BaseModel):
    """Configuration for game logging."""

    enabled: bool = False
    output_path: str = "game_log.jsonl"


class GameLogger:
    """Logger for detailed game events in JSONL format.

    Each line in the output file is a JSON object representing one event.
    This allows step-by-step replay of the game.
    """

    def __init__(self, config: GameLogConfig | None = None):
        """Initialize game logger.

        Args:
            config: Logging configuration. If None, logging is disabled.
        """
        self.config = config or GameLogConfig()
        self._file: TextIO | None = None

    def __enter__(self) -> "GameLogger":
        """Context manager entry."""
        if self.config.enabled and self.config.output_path:
            path = Path(self.config.output_path)
            path.parent.mkdir(parents=True, exist_ok=True)
            self._file = open(path, "a", encoding="utf-8")
        return self

    def __exit__(self, *args: Any) -> None:
        """Context manager exit."""
        self.close()

    def close(self) -> None:
        """Close the log file."""
        if self._file:
            self._file.close()
            self._file = None

    def _write(self, event: dict[str, Any]) -> None:
        """Write an event to the log file.

        Args:
            event: Event dictionary to write as JSON.
        """
        if self._file:
            self._file.write(json.dumps(event, ensure_ascii=False) + "\n")
            self._file.flush()

    def log_session_start(self, players: dict[Seat, str]) -> None:
        """Log session start with player names.

        Args:
            players: Player name for each seat.
        """
        self._write({
            "type": "session_start",
            "timestamp": datetime.now().isoformat(),
            "players": {seat.value: name for seat, name in players.items()},
        })

    def log_game_start(self, state: GameState, seed: int | None = None) -> None:
        """Log game start with the dealt containers.

        Args:
            state: Freshly dealt state.
            seed: Shuffle seed, if any.
        """
        self._write({
            "type": "game_start",
            "game": state.game_number,
            "seed": seed,
            "players": format_players(state),
            "first_player": state.current_turn.value,
        })

    def log_move(
        self,
        state: GameState,
        seat: Seat,
        card: Card,
        origin: Origin,
        scale_index: int,
    ) -> None:
        """Log a card placed on a scale.

        Args:
            state: Game state after the card was placed.
            seat: Player who moved.
            card: Card placed.
            origin: Container the card came from.
            scale_index: Target scale.
        """
        self._write({
            "type": "move",
            "game": state.game_number,
            "turn": state.turn_number,
            "player": seat.value,
            "card": format_card(card),
            "origin": str(origin),
            "scale": scale_index,
            "scales": format_scales(state),
        })

    def log_turn_end(
        self,
        state: GameState,
        seat: Seat,
        discarded: Card | None,
        pile_index: int | None,
    ) -> None:
        """Log the discard that ends a turn.

        Args:
            state: Game state after the discard.
            seat: Player whose turn ended.
            discarded: Card discarded (None if the hand was empty).
            pile_index: Discard pile used (None if nothing was discarded).
        """
        self._write({
            "type": "turn_end",
            "game": state.game_number,
            "turn": state.turn_number - 1,
            "player": seat.value,
            "discarded": format_card(discarded) if discarded is not None else "",
            "pile": pile_index,
            "players": format_players(state),
            "scales": format_scales(state),
        })

    def log_special(
        self,
        game_num: int,
        turn_num: int,
        event: str,
        seat: Seat,
        detail: dict[str, Any] | None = None,
    ) -> None:
        """Log a special event.

        Args:
            game_num: Game number.
            turn_num: Turn number when the event occurred.
            event: Event type (e.g., "scale_complete", "game_over").
            seat: Player who triggered the event.
            detail: Additional event details.
        """
        record: dict[str, Any] = {
            "type": "special",
            "game": game_num,
            "turn": turn_num,
            "event": event,
            "player": seat.value,
        }
        if detail:
            record["detail"] = detail
        self._write(record)

    def log_game_end(
        self,
        game_num: int,
        winner: Seat | None,
        turns: int,
        reason: str,
    ) -> None:
        """Log game end with results.

        Args:
            game_num: Game number.
            winner: Winning seat (None for a stalemate).
            turns: Number of turns played.
            reason: "win" or "stalemate".
        """
        self._write({
            "type": "game_end",
            "game": game_num,
            "winner": winner.value if winner else None,
            "turns": turns,
            "reason": reason,
        })

    def log_session_end(self, total_games: int, results: dict[str, int]) -> None:
        """Log session end with final results.

        Args:
            total_games: Total number of games played.
            results: Wins per seat plus draws.
        """
        self._write({
            "type": "session_end",
            "total_games": total_games,
            "results": results,
        })
