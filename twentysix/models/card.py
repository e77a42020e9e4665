"""Card model and deck construction."""

from enum import IntEnum

from pydantic import BaseModel

# Ranks run from ace (1) to queen (12); a completed scale holds one of each.
MIN_RANK = 1
MAX_RANK = 12


class Suit(IntEnum):
    """Card suit."""

    SPADE = 0
    HEART = 1
    DIAMOND = 2
    CLUB = 3
    JOKER = 4


NUMBERED_SUITS = [Suit.SPADE, Suit.HEART, Suit.DIAMOND, Suit.CLUB]

# Map rank to display string
RANK_NAMES = {
    1: "A",
    2: "2",
    3: "3",
    4: "4",
    5: "5",
    6: "6",
    7: "7",
    8: "8",
    9: "9",
    10: "10",
    11: "J",
    12: "Q",
}

SUIT_SYMBOLS = {
    Suit.SPADE: "♠",
    Suit.HEART: "♥",
    Suit.DIAMOND: "♦",
    Suit.CLUB: "♣",
    Suit.JOKER: "🃏",
}


class Card(BaseModel, frozen=True):
    """Single card representation.

    Numbered cards carry a rank; wildcards have ``suit=JOKER`` and no rank.
    ``serial`` tells apart duplicates: the deck copy (0-based) for numbered
    cards, the wildcard number (1-based) for wildcards.
    """

    suit: Suit
    rank: int | None = None  # None for wildcards
    serial: int = 0

    @property
    def is_wildcard(self) -> bool:
        """Check if this card is a wildcard."""
        return self.suit == Suit.JOKER

    @property
    def key(self) -> str:
        """Stable identity key (e.g. "HEART-7", "HEART-7.1", "JOKER-2")."""
        if self.is_wildcard:
            return f"JOKER-{self.serial}"
        if self.serial:
            return f"{self.suit.name}-{self.rank}.{self.serial}"
        return f"{self.suit.name}-{self.rank}"

    @classmethod
    def wildcard(cls, number: int) -> "Card":
        """Create the wildcard with the given 1-based number."""
        return cls(suit=Suit.JOKER, rank=None, serial=number)

    @classmethod
    def from_key(cls, key: str) -> "Card":
        """Parse a card key.

        Raises:
            ValueError: If the key does not name a card.
        """
        suit_name, sep, rest = key.partition("-")
        if not sep or suit_name not in Suit.__members__:
            raise ValueError(f"Invalid card key: {key!r}")
        suit = Suit[suit_name]

        if suit == Suit.JOKER:
            if not rest.isdigit() or int(rest) < 1:
                raise ValueError(f"Invalid wildcard key: {key!r}")
            return cls.wildcard(int(rest))

        rank_str, _, copy_str = rest.partition(".")
        if not rank_str.isdigit() or (copy_str and not copy_str.isdigit()):
            raise ValueError(f"Invalid card key: {key!r}")
        rank = int(rank_str)
        if not MIN_RANK <= rank <= MAX_RANK:
            raise ValueError(f"Rank out of range in card key: {key!r}")
        return cls(suit=suit, rank=rank, serial=int(copy_str) if copy_str else 0)

    def __str__(self) -> str:
        if self.is_wildcard:
            return f"Joker{self.serial}"
        return f"{SUIT_SYMBOLS[self.suit]}{RANK_NAMES[self.rank]}"

    def __repr__(self) -> str:
        return str(self)


def create_full_deck(
    num_suits: int = 4,
    deck_count: int = 2,
    wildcard_count: int = 4,
) -> list[Card]:
    """Create the full card pool in a fixed order.

    Args:
        num_suits: Number of numbered suits (1-4).
        deck_count: Copies of each numbered card.
        wildcard_count: Number of wildcards.

    Returns:
        List of all cards, numbered cards first.
    """
    if not 1 <= num_suits <= len(NUMBERED_SUITS):
        raise ValueError(f"num_suits must be between 1 and 4, got {num_suits}")

    cards: list[Card] = []
    for serial in range(deck_count):
        for suit in NUMBERED_SUITS[:num_suits]:
            for rank in range(MIN_RANK, MAX_RANK + 1):
                cards.append(Card(suit=suit, rank=rank, serial=serial))

    for number in range(1, wildcard_count + 1):
        cards.append(Card.wildcard(number))

    return cards
