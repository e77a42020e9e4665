"""Formatters for game log output."""

from twentysix.models.card import Card
from twentysix.models.game_state import GameState
from twentysix.models.player import OpaquePlayerState, PlayerState, Seat


def format_card(card: Card) -> str:
    """Format a single card to its key (e.g. "HEART-7", "JOKER-1")."""
    return card.key


def format_cards(cards: list[Card]) -> str:
    """Format cards to a comma-separated string of keys.

    Empty string if no cards.
    """
    return ",".join(format_card(c) for c in cards)


def format_player(player: PlayerState | OpaquePlayerState) -> dict[str, object]:
    """Format a player's containers.

    Opaque players only expose counts for their private containers.
    """
    discards = [format_cards(pile) for pile in player.discards]
    if isinstance(player, OpaquePlayerState):
        return {
            "hand": player.hand_count,
            "reserve": player.reserve_count,
            "wildcards": player.wildcard_count,
            "discards": discards,
        }
    return {
        "hand": format_cards(player.hand),
        "reserve": format_cards(player.reserve),
        "wildcards": format_cards(player.wildcards),
        "discards": discards,
    }


def format_players(state: GameState) -> dict[str, dict[str, object]]:
    """Format both players, keyed by seat name."""
    return {seat.value: format_player(state.player(seat)) for seat in Seat}


def format_scales(state: GameState) -> list[str]:
    """Format the four scales, bottom card first."""
    return [format_cards(scale.cards) for scale in state.scales]
