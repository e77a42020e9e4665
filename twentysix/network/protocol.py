"""Message contract of the game relay.

The relay is event based: each message is an event name plus a JSON
payload. Only the message shapes live here; the transport does not.

Flow:
    join_game(playerName)          client -> relay
    waiting_opponent               relay -> client
    game_start(...)                relay -> client
    player_move(descriptor)        client -> relay
    move_confirmed                 relay -> client (ack of player_move)
    game_update({move})            relay -> client (opponent's move)
"""

from typing import Any, ClassVar, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from twentysix.models.card import Card
from twentysix.models.move import NUM_DISCARD_PILES, MoveDescriptor
from twentysix.models.player import OpaquePlayerState, PlayerState

JOIN_GAME = "join_game"
WAITING_OPPONENT = "waiting_opponent"
GAME_START = "game_start"
PLAYER_MOVE = "player_move"
GAME_UPDATE = "game_update"
MOVE_CONFIRMED = "move_confirmed"


class ProtocolError(ValueError):
    """Raised for unknown events or malformed payloads."""


def _parse_keys(keys: list[str]) -> list[Card]:
    return [Card.from_key(k) for k in keys]


class PlayerSnapshot(BaseModel):
    """A player's own containers as card keys (``yourState``)."""

    hand: list[str] = Field(default_factory=list)
    reserve: list[str] = Field(default_factory=list)
    wildcards: list[str] = Field(default_factory=list)
    discards: list[list[str]] = Field(
        default_factory=lambda: [[] for _ in range(NUM_DISCARD_PILES)]
    )

    def to_player_state(self) -> PlayerState:
        """Build the player's containers.

        Raises:
            ValueError: If a key does not name a card.
        """
        discards = [_parse_keys(pile) for pile in self.discards]
        discards += [[] for _ in range(NUM_DISCARD_PILES - len(discards))]
        return PlayerState(
            hand=_parse_keys(self.hand),
            reserve=_parse_keys(self.reserve),
            wildcards=_parse_keys(self.wildcards),
            discards=discards[:NUM_DISCARD_PILES],
        )

    @classmethod
    def from_player_state(cls, player: PlayerState) -> "PlayerSnapshot":
        return cls(
            hand=[c.key for c in player.hand],
            reserve=[c.key for c in player.reserve],
            wildcards=[c.key for c in player.wildcards],
            discards=[[c.key for c in pile] for pile in player.discards],
        )


class OpponentCount(BaseModel):
    """Sizes of the opponent's private containers (``oppCount``).

    The relay may leave out ``wildcards``; the count is then unknown.
    """

    hand: int = 0
    reserve: int = 0
    wildcards: int | None = None

    def to_player_state(self) -> OpaquePlayerState:
        return OpaquePlayerState(
            hand_count=self.hand,
            reserve_count=self.reserve,
            wildcard_count=self.wildcards,
        )


class Message(BaseModel):
    """Base class of relay messages."""

    model_config = ConfigDict(populate_by_name=True)

    event: ClassVar[str]

    def to_payload(self) -> Any:
        return self.model_dump(by_alias=True, mode="json")

    @classmethod
    def from_payload(cls, payload: Any) -> "Message":
        return cls.model_validate(payload or {})


class JoinGame(Message):
    event: ClassVar[str] = JOIN_GAME

    player_name: str = Field(alias="playerName")

    def to_payload(self) -> Any:
        return self.player_name

    @classmethod
    def from_payload(cls, payload: Any) -> "JoinGame":
        if isinstance(payload, str):
            return cls(player_name=payload)
        return cls.model_validate(payload)


class WaitingOpponent(Message):
    event: ClassVar[str] = WAITING_OPPONENT

    def to_payload(self) -> Any:
        return None


class GameStart(Message):
    event: ClassVar[str] = GAME_START

    role: Literal["p1", "p2"]
    opponent_name: str = Field(alias="opponentName")
    your_state: PlayerSnapshot = Field(alias="yourState")
    opp_count: OpponentCount = Field(alias="oppCount")


class PlayerMove(Message):
    event: ClassVar[str] = PLAYER_MOVE

    move: MoveDescriptor

    def to_payload(self) -> Any:
        return self.move.to_wire()

    @classmethod
    def from_payload(cls, payload: Any) -> "PlayerMove":
        return cls(move=MoveDescriptor.model_validate(payload))


class GameUpdate(Message):
    event: ClassVar[str] = GAME_UPDATE

    move: MoveDescriptor

    def to_payload(self) -> Any:
        return {"move": self.move.to_wire()}


class MoveConfirmed(Message):
    event: ClassVar[str] = MOVE_CONFIRMED

    def to_payload(self) -> Any:
        return None


MESSAGE_TYPES: dict[str, type[Message]] = {
    cls.event: cls
    for cls in (JoinGame, WaitingOpponent, GameStart, PlayerMove, GameUpdate, MoveConfirmed)
}


def encode_message(message: Message) -> tuple[str, Any]:
    """Encode a message as (event name, JSON-compatible payload)."""
    return message.event, message.to_payload()


def decode_message(event: str, payload: Any = None) -> Message:
    """Decode an (event name, payload) pair.

    Raises:
        ProtocolError: If the event is unknown or the payload is malformed.
    """
    message_type = MESSAGE_TYPES.get(event)
    if message_type is None:
        raise ProtocolError(f"Unknown event: {event!r}")
    try:
        return message_type.from_payload(payload)
    except (ValidationError, ValueError, TypeError) as e:
        raise ProtocolError(f"Malformed {event} payload: {e}") from e
