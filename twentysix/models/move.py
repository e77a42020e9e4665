"""Move descriptors and card origins."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

NUM_SCALES = 4
NUM_DISCARD_PILES = 4

# Seat prefixes accepted in legacy origin strings ("human-discard-2")
SEAT_PREFIXES = ("human-", "opponent-")


class OriginKind(str, Enum):
    """Container a played card comes from."""

    HAND = "hand"
    RESERVE = "reserve"
    WILDCARD = "wildcard"
    DISCARD = "discard"


class TargetType(str, Enum):
    """Kind of zone a card is dropped on."""

    SCALE = "scale"
    DISCARD = "discard"


class Origin(BaseModel, frozen=True):
    """Where a card is taken from.

    ``index`` selects one of the four discard piles and is only valid
    (and required) for ``DISCARD``.
    """

    kind: OriginKind
    index: int | None = None

    @model_validator(mode="after")
    def _check_index(self) -> "Origin":
        if self.kind == OriginKind.DISCARD:
            if self.index is None or not 0 <= self.index < NUM_DISCARD_PILES:
                raise ValueError(f"Discard origin needs an index in 0-3, got {self.index}")
        elif self.index is not None:
            raise ValueError(f"Origin {self.kind.value} does not take an index")
        return self

    @classmethod
    def hand(cls) -> "Origin":
        return cls(kind=OriginKind.HAND)

    @classmethod
    def reserve(cls) -> "Origin":
        return cls(kind=OriginKind.RESERVE)

    @classmethod
    def wildcard(cls) -> "Origin":
        return cls(kind=OriginKind.WILDCARD)

    @classmethod
    def discard(cls, index: int) -> "Origin":
        return cls(kind=OriginKind.DISCARD, index=index)

    @classmethod
    def parse(cls, text: str) -> "Origin":
        """Parse an origin string.

        Accepts "hand", "reserve", "wildcard", "discard-N" and the same
        forms prefixed with a seat ("human-discard-2").

        Raises:
            ValueError: If the string does not name an origin.
        """
        name = text.strip().lower()
        for prefix in SEAT_PREFIXES:
            if name.startswith(prefix):
                name = name[len(prefix):]
                break

        if name.startswith("discard-"):
            index_str = name[len("discard-"):]
            if not index_str.isdigit():
                raise ValueError(f"Invalid discard origin: {text!r}")
            return cls.discard(int(index_str))

        try:
            kind = OriginKind(name)
        except ValueError:
            raise ValueError(f"Unknown origin: {text!r}") from None
        return cls(kind=kind)

    def __str__(self) -> str:
        if self.kind == OriginKind.DISCARD:
            return f"discard-{self.index}"
        return self.kind.value


class MoveDescriptor(BaseModel):
    """A single move as exchanged with the rendering layer and the relay.

    Serializes with the relay's camelCase field names.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    card_key: str = Field(alias="cardKey")
    target_type: TargetType = Field(alias="targetType")
    target_index: int = Field(alias="targetIndex")
    origin: Origin

    @field_validator("origin", mode="before")
    @classmethod
    def _coerce_origin(cls, value: Any) -> Any:
        if isinstance(value, str):
            return Origin.parse(value)
        return value

    @classmethod
    def to_scale(cls, card_key: str, scale_index: int, origin: Origin) -> "MoveDescriptor":
        """Build a move onto a central scale."""
        return cls(
            card_key=card_key,
            target_type=TargetType.SCALE,
            target_index=scale_index,
            origin=origin,
        )

    @classmethod
    def to_discard(cls, card_key: str, pile_index: int) -> "MoveDescriptor":
        """Build the turn-ending discard of a hand card."""
        return cls(
            card_key=card_key,
            target_type=TargetType.DISCARD,
            target_index=pile_index,
            origin=Origin.hand(),
        )

    def to_wire(self) -> dict[str, Any]:
        """Dump in the relay's wire shape."""
        return {
            "cardKey": self.card_key,
            "targetType": self.target_type.value,
            "targetIndex": self.target_index,
            "origin": str(self.origin),
        }
