"""Player containers."""

from enum import Enum

from pydantic import BaseModel, Field

from .card import Card
from .move import NUM_DISCARD_PILES, Origin, OriginKind


class Seat(str, Enum):
    """Seat at the table."""

    HUMAN = "human"
    OPPONENT = "opponent"

    @property
    def other(self) -> "Seat":
        """The seat across the table."""
        return Seat.OPPONENT if self is Seat.HUMAN else Seat.HUMAN


def _empty_discards() -> list[list[Card]]:
    return [[] for _ in range(NUM_DISCARD_PILES)]


class PlayerState(BaseModel):
    """A player's cards, all identities known.

    ``reserve`` and ``wildcards`` are stacks whose top is the last element.
    """

    hand: list[Card] = Field(default_factory=list)
    reserve: list[Card] = Field(default_factory=list)
    wildcards: list[Card] = Field(default_factory=list)
    discards: list[list[Card]] = Field(default_factory=_empty_discards)

    @property
    def hand_size(self) -> int:
        return len(self.hand)

    @property
    def reserve_size(self) -> int:
        return len(self.reserve)

    @property
    def wildcard_count(self) -> int:
        return len(self.wildcards)

    @property
    def is_out(self) -> bool:
        """Check the win condition (reserve, hand and wildcards all empty)."""
        return not self.reserve and not self.hand and not self.wildcards

    def available(self, origin: Origin, card: Card) -> bool:
        """Check that ``card`` can be taken from ``origin`` right now.

        Hand cards can be taken from anywhere in the hand; every other
        container only gives up its top card.
        """
        if origin.kind == OriginKind.HAND:
            return card in self.hand
        stack = self._stack(origin)
        return bool(stack) and stack[-1] == card

    def take(self, origin: Origin, card: Card) -> Card:
        """Remove ``card`` from ``origin``. Call :meth:`available` first."""
        if origin.kind == OriginKind.HAND:
            self.hand.remove(card)
            return card
        return self._stack(origin).pop()

    def discard_from_hand(self, card: Card, pile_index: int) -> None:
        """Move a hand card onto one of the discard piles."""
        self.hand.remove(card)
        self.discards[pile_index].append(card)

    def all_cards(self) -> list[Card]:
        """Every card this player holds, in any container."""
        cards = list(self.hand) + list(self.reserve) + list(self.wildcards)
        for pile in self.discards:
            cards.extend(pile)
        return cards

    def _stack(self, origin: Origin) -> list[Card]:
        if origin.kind == OriginKind.RESERVE:
            return self.reserve
        if origin.kind == OriginKind.WILDCARD:
            return self.wildcards
        return self.discards[origin.index]

    def __str__(self) -> str:
        return (
            f"hand={len(self.hand)} reserve={len(self.reserve)} "
            f"wildcards={len(self.wildcards)} "
            f"discards={[len(p) for p in self.discards]}"
        )


class OpaquePlayerState(BaseModel):
    """A remote player whose private containers are only known as counts.

    Discard piles are public, so they hold real cards. Cards taken from the
    private containers are only identified by the move that reveals them.

    ``wildcard_count`` is None when the relay does not report it. An unknown
    stack gives up any wildcard and does not block the win check.
    """

    hand_count: int = 0
    reserve_count: int = 0
    wildcard_count: int | None = None
    discards: list[list[Card]] = Field(default_factory=_empty_discards)

    @property
    def hand_size(self) -> int:
        return self.hand_count

    @property
    def reserve_size(self) -> int:
        return self.reserve_count

    @property
    def is_out(self) -> bool:
        return self.hand_count == 0 and self.reserve_count == 0 and not self.wildcard_count

    def available(self, origin: Origin, card: Card) -> bool:
        if origin.kind == OriginKind.HAND:
            return self.hand_count > 0
        if origin.kind == OriginKind.RESERVE:
            return self.reserve_count > 0
        if origin.kind == OriginKind.WILDCARD:
            if not card.is_wildcard:
                return False
            return self.wildcard_count is None or self.wildcard_count > 0
        pile = self.discards[origin.index]
        return bool(pile) and pile[-1] == card

    def take(self, origin: Origin, card: Card) -> Card:
        if origin.kind == OriginKind.HAND:
            self.hand_count -= 1
        elif origin.kind == OriginKind.RESERVE:
            self.reserve_count -= 1
        elif origin.kind == OriginKind.WILDCARD:
            if self.wildcard_count is not None:
                self.wildcard_count -= 1
        else:
            return self.discards[origin.index].pop()
        return card

    def discard_from_hand(self, card: Card, pile_index: int) -> None:
        self.hand_count -= 1
        self.discards[pile_index].append(card)

    def __str__(self) -> str:
        wildcards = "?" if self.wildcard_count is None else self.wildcard_count
        return (
            f"hand={self.hand_count} reserve={self.reserve_count} "
            f"wildcards={wildcards} "
            f"discards={[len(p) for p in self.discards]} (opaque)"
        )
