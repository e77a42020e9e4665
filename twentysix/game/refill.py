"""Hand replenishment from the reserve."""

from twentysix.models.card import Card
from twentysix.models.player import OpaquePlayerState, PlayerState


def refill_hand(hand: list[Card], reserve: list[Card], target_size: int) -> int:
    """Draw from the top of ``reserve`` until ``hand`` reaches ``target_size``.

    Running out of reserve stops the refill early; that is progress toward
    winning, not an error.

    Returns:
        Number of cards drawn.
    """
    drawn = 0
    while len(hand) < target_size and reserve:
        hand.append(reserve.pop())
        drawn += 1
    return drawn


def refill_player(player: PlayerState | OpaquePlayerState, target_size: int) -> int:
    """Apply :func:`refill_hand` to a player's containers."""
    if isinstance(player, OpaquePlayerState):
        drawn = max(0, min(target_size - player.hand_count, player.reserve_count))
        player.hand_count += drawn
        player.reserve_count -= drawn
        return drawn
    return refill_hand(player.hand, player.reserve, target_size)
