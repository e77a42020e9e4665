"""Shuffle and deal a new game."""

import logging
import random

from twentysix.config import Config
from twentysix.models.card import Card, create_full_deck
from twentysix.models.game_state import GameState
from twentysix.models.player import PlayerState, Seat

logger = logging.getLogger(__name__)


def build_deck(config: Config) -> list[Card]:
    """Create the unshuffled card pool described by ``config.deck``."""
    return create_full_deck(
        num_suits=config.deck.num_suits,
        deck_count=config.deck.deck_count,
        wildcard_count=config.deck.wildcard_count,
    )


def deal_game(
    config: Config | None = None,
    seed: int | None = None,
    game_number: int = 1,
) -> GameState:
    """Shuffle the pool and deal it to both players.

    Numbered cards are dealt alternately, human first: reserves up to
    ``rules.reserve_size``, then hands up to ``rules.hand_size``. The
    wildcards go to the wildcard stacks, also alternating. Numbered cards
    left undealt stay out of play in ``state.stock``.

    Args:
        config: Configuration (uses defaults if not provided)
        seed: Random seed for a reproducible shuffle
        game_number: Game number stored in the state

    Returns:
        Fresh GameState with empty scales and discard piles.

    Raises:
        ValueError: If the numbered cards cannot fill both reserves and hands.
    """
    config = config or Config()
    rules = config.rules

    cards = build_deck(config)
    numbered = [c for c in cards if not c.is_wildcard]
    wildcards = [c for c in cards if c.is_wildcard]

    needed = 2 * (rules.reserve_size + rules.hand_size)
    if len(numbered) < needed:
        raise ValueError(
            f"Deck of {len(numbered)} numbered cards cannot deal {needed} cards "
            f"(reserve {rules.reserve_size} + hand {rules.hand_size} per player)"
        )

    rng = random.Random(seed)
    rng.shuffle(numbered)
    rng.shuffle(wildcards)

    players = [PlayerState(), PlayerState()]
    for i in range(2 * rules.reserve_size):
        players[i % 2].reserve.append(numbered.pop())
    for i in range(2 * rules.hand_size):
        players[i % 2].hand.append(numbered.pop())
    for i, card in enumerate(wildcards):
        players[i % 2].wildcards.append(card)

    state = GameState(
        human=players[0],
        opponent=players[1],
        stock=numbered,
        game_number=game_number,
        current_turn=rules.first_player,
    )

    logger.debug(
        f"Game {game_number} dealt (seed={seed}): "
        f"{Seat.HUMAN.value} {state.human}, {Seat.OPPONENT.value} {state.opponent}, "
        f"stock {len(state.stock)}"
    )
    return state
