"""Game state models."""

from pydantic import BaseModel, Field

from .card import Card
from .move import NUM_SCALES
from .player import OpaquePlayerState, PlayerState, Seat


class Scale(BaseModel):
    """One of the four shared ascending runs."""

    cards: list[Card] = Field(default_factory=list)

    @property
    def top(self) -> Card | None:
        """Last placed card, if any."""
        return self.cards[-1] if self.cards else None

    def clear(self) -> list[Card]:
        """Empty the scale and return the cards it held."""
        cards = self.cards
        self.cards = []
        return cards

    def __len__(self) -> int:
        return len(self.cards)

    def __str__(self) -> str:
        if not self.cards:
            return "[empty]"
        return f"[{len(self.cards)}: {self.cards[-1]}]"


def _empty_scales() -> list[Scale]:
    return [Scale() for _ in range(NUM_SCALES)]


class GameState(BaseModel):
    """Overall game state.

    ``retired`` holds the cards of completed scales, which leave play.
    ``stock`` holds the numbered cards left undealt, also out of play.
    """

    human: PlayerState = Field(default_factory=PlayerState)
    opponent: PlayerState | OpaquePlayerState = Field(default_factory=PlayerState)
    scales: list[Scale] = Field(default_factory=_empty_scales)
    retired: list[Card] = Field(default_factory=list)
    stock: list[Card] = Field(default_factory=list)

    game_number: int = 1
    turn_number: int = 1
    current_turn: Seat = Seat.HUMAN
    winner: Seat | None = None

    def player(self, seat: Seat) -> PlayerState | OpaquePlayerState:
        """Get the containers of ``seat``."""
        return self.human if seat == Seat.HUMAN else self.opponent

    @property
    def is_over(self) -> bool:
        return self.winner is not None

    def all_cards(self) -> list[Card]:
        """Every card in the game, for conservation checks.

        Raises:
            ValueError: If a player's private containers are opaque.
        """
        cards: list[Card] = []
        for seat in Seat:
            player = self.player(seat)
            if not isinstance(player, PlayerState):
                raise ValueError(f"Cards of {seat.value} are not known")
            cards.extend(player.all_cards())
        for scale in self.scales:
            cards.extend(scale.cards)
        cards.extend(self.retired)
        cards.extend(self.stock)
        return cards

    def __str__(self) -> str:
        scales = " ".join(str(s) for s in self.scales)
        parts = [f"Game {self.game_number}, Turn {self.turn_number}"]
        if self.is_over:
            parts.append(f"[WINNER: {self.winner.value}]")
        else:
            parts.append(f"{self.current_turn.value}'s turn")
        parts.append(f"Scales: {scales}")
        return " ".join(parts)
