"""Tests for the turn controller."""

import pytest

from twentysix.game.controller import (
    GameOver,
    HandRefilled,
    MoveApplied,
    ScaleCompleted,
    TurnController,
    TurnEnded,
)
from twentysix.game.evaluator import effective_value
from twentysix.game.validator import ErrorKind
from twentysix.models.card import Card, Suit
from twentysix.models.game_state import GameState, Scale
from twentysix.models.move import MoveDescriptor, Origin
from twentysix.models.player import PlayerState, Seat


def numbered(rank: int, suit: Suit = Suit.HEART, serial: int = 0) -> Card:
    return Card(suit=suit, rank=rank, serial=serial)


def filler(count: int) -> list[Card]:
    """Cards that never fit the scales used in these tests."""
    return [numbered(10, Suit.CLUB, serial=i) for i in range(count)]


def run_of(length: int) -> Scale:
    return Scale(cards=[numbered(r, Suit.SPADE) for r in range(1, length + 1)])


def to_scale(card: Card, index: int = 0, origin: Origin | None = None) -> MoveDescriptor:
    return MoveDescriptor.to_scale(card.key, index, origin or Origin.hand())


@pytest.fixture
def state():
    human = PlayerState(
        hand=[numbered(1), numbered(2), numbered(7), numbered(12), numbered(9)],
        reserve=filler(6),
        wildcards=[Card.wildcard(1)],
    )
    opponent = PlayerState(
        hand=[numbered(1, Suit.DIAMOND), numbered(5, Suit.DIAMOND)],
        reserve=filler(3),
    )
    return GameState(human=human, opponent=opponent)


@pytest.fixture
def controller(state):
    return TurnController(state)


class TestApplyMove:
    """Tests for TurnController.apply_move."""

    def test_valid_move(self, controller, state):
        """Test that a legal card moves from hand to scale."""
        card = numbered(1)
        result = controller.apply_move(Seat.HUMAN, to_scale(card, 2))

        assert result.is_valid
        assert state.scales[2].cards == [card]
        assert card not in state.human.hand
        assert state.current_turn == Seat.HUMAN
        assert result.events == [MoveApplied(Seat.HUMAN, card, Origin.hand(), 2)]

    def test_several_moves_in_one_turn(self, controller, state):
        """Test that a player may keep playing within a turn."""
        assert controller.apply_move(Seat.HUMAN, to_scale(numbered(1))).is_valid
        assert controller.apply_move(Seat.HUMAN, to_scale(numbered(2))).is_valid
        assert controller.apply_move(
            Seat.HUMAN, to_scale(Card.wildcard(1), 0, Origin.wildcard())
        ).is_valid
        assert effective_value(state.scales[0]) == 3
        assert state.current_turn == Seat.HUMAN

    def test_not_your_turn(self, controller, state):
        """Test that the inactive side cannot move."""
        before = state.model_dump()
        result = controller.apply_move(Seat.OPPONENT, to_scale(numbered(1, Suit.DIAMOND)))
        assert result.reason == ErrorKind.NOT_YOUR_TURN
        assert state.model_dump() == before

    def test_rejection_is_idempotent(self, controller, state):
        """Test that repeating an invalid move changes nothing."""
        before = state.model_dump()
        move = to_scale(numbered(7))

        first = controller.apply_move(Seat.HUMAN, move)
        second = controller.apply_move(Seat.HUMAN, move)

        assert first.reason == second.reason == ErrorKind.OUT_OF_SEQUENCE
        assert not first.events
        assert state.model_dump() == before

    def test_card_not_in_hand(self, controller, state):
        """Test that a card missing from the origin is rejected."""
        before = state.model_dump()
        result = controller.apply_move(Seat.HUMAN, to_scale(numbered(1, Suit.CLUB)))
        assert result.reason == ErrorKind.INVALID_ORIGIN
        assert state.model_dump() == before

    def test_unknown_card_key(self, controller):
        """Test that a malformed card key is a rejection, not a crash."""
        move = MoveDescriptor(cardKey="cardBack", targetType="scale", targetIndex=0, origin="hand")
        assert controller.apply_move(Seat.HUMAN, move).reason == ErrorKind.INVALID_ORIGIN

    def test_reserve_only_gives_top(self, controller, state):
        """Test that only the reserve top can be played."""
        buried = state.human.reserve[0]
        move = to_scale(buried, 0, Origin.reserve())
        assert controller.apply_move(Seat.HUMAN, move).reason == ErrorKind.INVALID_ORIGIN

    def test_invalid_scale_index(self, controller):
        """Test that a scale index outside 0-3 is rejected."""
        result = controller.apply_move(Seat.HUMAN, to_scale(numbered(1), 4))
        assert result.reason == ErrorKind.INVALID_TARGET

    def test_play_from_discard_pile(self, controller, state):
        """Test that the top of an own discard pile can be played."""
        state.human.discards[1] = [numbered(8, Suit.CLUB), numbered(1, Suit.CLUB)]
        move = to_scale(numbered(1, Suit.CLUB), 0, Origin.discard(1))

        assert controller.apply_move(Seat.HUMAN, move).is_valid
        assert state.human.discards[1] == [numbered(8, Suit.CLUB)]

    def test_completion_resets_scale(self, controller, state):
        """Test that placing the queen clears the scale into retired."""
        state.scales[3] = run_of(11)
        result = controller.apply_move(Seat.HUMAN, to_scale(numbered(12), 3))

        assert result.is_valid
        assert len(state.scales[3]) == 0
        assert effective_value(state.scales[3]) == 0
        assert len(state.retired) == 12
        assert state.retired[-1] == numbered(12)
        completed = [e for e in result.events if isinstance(e, ScaleCompleted)]
        assert len(completed) == 1
        assert completed[0].scale_index == 3

    def test_empty_hand_refills_immediately(self, controller, state):
        """Test that emptying the hand by playing draws a new hand."""
        state.human.hand = [numbered(1)]
        result = controller.apply_move(Seat.HUMAN, to_scale(numbered(1)))

        assert result.is_valid
        assert state.human.hand_size == 5
        assert state.human.reserve_size == 1
        assert HandRefilled(Seat.HUMAN, 5, "hand_empty") in result.events
        assert state.current_turn == Seat.HUMAN

    def test_win_by_move(self, controller, state):
        """Test that playing the last card wins."""
        state.human.hand = [numbered(1)]
        state.human.reserve = []
        state.human.wildcards = []

        result = controller.apply_move(Seat.HUMAN, to_scale(numbered(1)))

        assert result.game_over
        assert GameOver(Seat.HUMAN) in result.events
        assert state.winner == Seat.HUMAN

        after = controller.apply_move(Seat.HUMAN, to_scale(numbered(2)))
        assert after.reason == ErrorKind.GAME_OVER

    def test_discard_descriptor_rejected(self, controller):
        """Test that apply_move only places on scales."""
        move = MoveDescriptor.to_discard(numbered(9).key, 0)
        assert controller.apply_move(Seat.HUMAN, move).reason == ErrorKind.INVALID_TARGET

    def test_callback(self, controller, state):
        """Test that listeners receive accepted events."""
        seen = []
        controller.set_callbacks(on_event=seen.append)
        state.scales[0] = run_of(11)

        controller.apply_move(Seat.HUMAN, to_scale(numbered(7)))  # rejected
        controller.apply_move(Seat.HUMAN, to_scale(numbered(12)))

        assert [type(e) for e in seen] == [MoveApplied, ScaleCompleted]


class TestDiscard:
    """Tests for TurnController.discard."""

    def test_discard_ends_turn(self, controller, state):
        """Test that a discard flips the turn and refills the hand."""
        last = state.human.hand[-1]
        reserve_before = state.human.reserve_size

        result = controller.discard(Seat.HUMAN, 2)

        assert result.is_valid
        assert state.current_turn == Seat.OPPONENT
        assert state.turn_number == 2
        assert state.human.discards[2] == [last]
        assert TurnEnded(Seat.HUMAN, last, 2, Seat.OPPONENT) in result.events
        # one card lost, then one drawn back at end of turn
        assert state.human.hand_size == 5
        assert state.human.reserve_size == reserve_before - 1

    def test_discard_chosen_card(self, controller, state):
        """Test discarding a specific hand card."""
        card = numbered(7)
        assert controller.discard(Seat.HUMAN, 0, card_key=card.key).is_valid
        assert state.human.discards[0] == [card]
        assert card not in state.human.hand

    def test_discard_with_empty_hand(self, controller, state):
        """Test that an empty hand still ends the turn."""
        state.human.hand = []
        state.human.reserve = []

        result = controller.discard(Seat.HUMAN, 1)

        assert result.is_valid
        assert state.current_turn == Seat.OPPONENT
        assert all(pile == [] for pile in state.human.discards)
        assert TurnEnded(Seat.HUMAN, None, None, Seat.OPPONENT) in result.events

    def test_discard_from_reserve_rejected(self, controller, state):
        """Test that only hand cards can be discarded."""
        before = state.model_dump()
        top = state.human.reserve[-1]
        result = controller.discard(Seat.HUMAN, 0, card_key=top.key, origin=Origin.reserve())
        assert result.reason == ErrorKind.INVALID_ORIGIN
        assert state.model_dump() == before

    def test_discard_card_not_in_hand(self, controller, state):
        """Test that discarding a card not held is rejected."""
        result = controller.discard(Seat.HUMAN, 0, card_key=numbered(3, Suit.CLUB).key)
        assert result.reason == ErrorKind.INVALID_ORIGIN
        assert state.current_turn == Seat.HUMAN

    def test_discard_bad_pile(self, controller):
        """Test that a pile index outside 0-3 is rejected."""
        assert controller.discard(Seat.HUMAN, 4).reason == ErrorKind.INVALID_TARGET

    def test_discard_not_your_turn(self, controller):
        """Test that the inactive side cannot end a turn."""
        assert controller.discard(Seat.OPPONENT, 0).reason == ErrorKind.NOT_YOUR_TURN

    def test_turns_alternate(self, controller, state):
        """Test that each discard hands the turn to the other side."""
        seats = []
        for _ in range(4):
            seat = state.current_turn
            assert controller.discard(seat, 0).is_valid
            seats.append(state.current_turn)
        assert seats == [Seat.OPPONENT, Seat.HUMAN, Seat.OPPONENT, Seat.HUMAN]

    def test_win_by_discard(self, controller, state):
        """Test that discarding the last card wins."""
        state.human.hand = [numbered(9)]
        state.human.reserve = []
        state.human.wildcards = []

        result = controller.discard(Seat.HUMAN, 0)

        assert result.game_over
        assert state.winner == Seat.HUMAN

    def test_submit_dispatches(self, controller, state):
        """Test that submit routes scale and discard descriptors."""
        assert controller.submit(Seat.HUMAN, to_scale(numbered(1))).is_valid
        assert controller.submit(Seat.HUMAN, MoveDescriptor.to_discard(numbered(9).key, 3)).is_valid
        assert state.human.discards[3] == [numbered(9)]
        assert state.current_turn == Seat.OPPONENT


class TestAutomatedTurnLease:
    """Tests for the automated-turn lock."""

    def test_lease_locks_out_other_callers(self, controller, state):
        """Test that only the lease holder may act during an automated turn."""
        state.current_turn = Seat.OPPONENT
        move = to_scale(numbered(1, Suit.DIAMOND))
        lease = controller.begin_automated_turn(Seat.OPPONENT)

        assert controller.automated_seat == Seat.OPPONENT
        assert controller.apply_move(Seat.OPPONENT, move).reason == ErrorKind.NOT_YOUR_TURN
        assert controller.discard(Seat.OPPONENT, 0).reason == ErrorKind.NOT_YOUR_TURN
        assert controller.apply_move(Seat.OPPONENT, move, lease=lease).is_valid

        controller.end_automated_turn(lease)
        assert controller.automated_seat is None
        assert controller.discard(Seat.OPPONENT, 0).is_valid

    def test_single_lease(self, controller):
        """Test that two automated turns cannot overlap."""
        controller.begin_automated_turn(Seat.HUMAN)
        with pytest.raises(RuntimeError):
            controller.begin_automated_turn(Seat.HUMAN)
