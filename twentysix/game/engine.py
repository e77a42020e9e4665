"""Self-play game engine."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Callable

from twentysix.config import Config
from twentysix.logging import GameLogger
from twentysix.models.game_state import GameState
from twentysix.models.player import Seat

from .controller import TurnController
from .dealer import deal_game
from .opponent import OpponentPolicy, TurnReport

logger = logging.getLogger(__name__)

DRAW = "draw"


@dataclass
class GameResult:
    """Outcome of one game."""

    game_number: int
    winner: Seat | None
    turns: int
    reason: str  # "win" or "stalemate"


class GameEngine:
    """Runs games with the automated policy playing both seats."""

    def __init__(
        self,
        config: Config | None = None,
        game_logger: GameLogger | None = None,
        policy: OpponentPolicy | None = None,
    ):
        """Initialize game engine.

        Args:
            config: Configuration (uses defaults if not provided)
            game_logger: GameLogger instance for detailed logging
            policy: Policy for both seats (built from config if not provided)
        """
        self.config = config or Config()
        self.game_logger = game_logger
        self.policy = policy or OpponentPolicy.from_config(self.config)

        self._on_turn_end: Callable[[GameState, TurnReport], None] | None = None
        self._on_game_end: Callable[[GameResult, GameState], None] | None = None

    def set_callbacks(
        self,
        on_turn_end: Callable[[GameState, TurnReport], None] | None = None,
        on_game_end: Callable[[GameResult, GameState], None] | None = None,
    ) -> None:
        """Set event callbacks.

        Args:
            on_turn_end: Called after each turn (state, report)
            on_game_end: Called when a game ends (result, final state)
        """
        self._on_turn_end = on_turn_end
        self._on_game_end = on_game_end

    def run_games(self, num_games: int | None = None) -> dict[str, int]:
        """Run multiple games.

        Args:
            num_games: Number of games (uses config if not specified)

        Returns:
            Wins per seat name plus the number of draws
        """
        if num_games is None:
            num_games = self.config.game.num_games
        results: dict[str, int] = {Seat.HUMAN.value: 0, Seat.OPPONENT.value: 0, DRAW: 0}

        if self.game_logger:
            self.game_logger.log_session_start({seat: seat.value for seat in Seat})

        for game_num in range(1, num_games + 1):
            logger.info(f"Starting game {game_num}/{num_games}")
            seed = None
            if self.config.game.seed is not None:
                seed = self.config.game.seed + game_num

            result = self.run_game(seed=seed, game_number=game_num)
            results[result.winner.value if result.winner else DRAW] += 1

        if self.game_logger:
            self.game_logger.log_session_end(num_games, results)

        return results

    def run_game(self, seed: int | None = None, game_number: int = 1) -> GameResult:
        """Deal and play a single game to the end or to the turn cap."""
        return asyncio.run(self.play_game(seed=seed, game_number=game_number))

    async def play_game(self, seed: int | None = None, game_number: int = 1) -> GameResult:
        """Async version of :meth:`run_game`."""
        state = deal_game(self.config, seed=seed, game_number=game_number)
        controller = TurnController(state, self.config, self.game_logger)

        if self.game_logger:
            self.game_logger.log_game_start(state, seed)

        max_turns = self.config.game.max_turns
        while not state.is_over and state.turn_number <= max_turns:
            report = await self.policy.play_turn(controller, state.current_turn)
            if self._on_turn_end:
                self._on_turn_end(state, report)

        turns = state.turn_number - 1
        if state.is_over:
            result = GameResult(game_number, state.winner, turns, "win")
        else:
            logger.warning(f"Game {game_number} stalemate after {turns} turns")
            result = GameResult(game_number, None, turns, "stalemate")

        if self.game_logger:
            self.game_logger.log_game_end(game_number, result.winner, result.turns, result.reason)

        if self._on_game_end:
            self._on_game_end(result, state)

        return result
