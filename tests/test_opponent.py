"""Tests for the automated player."""

import asyncio

import pytest

from twentysix.game.controller import TurnController
from twentysix.game.opponent import (
    CancellationToken,
    OpponentPolicy,
    choose_discard,
    choose_move,
)
from twentysix.game.validator import ErrorKind
from twentysix.models.card import Card, Suit
from twentysix.models.game_state import GameState, Scale
from twentysix.models.move import MoveDescriptor, Origin, OriginKind
from twentysix.models.player import OpaquePlayerState, PlayerState, Seat


def numbered(rank: int, suit: Suit = Suit.HEART, serial: int = 0) -> Card:
    return Card(suit=suit, rank=rank, serial=serial)


def run_of(length: int) -> Scale:
    return Scale(cards=[numbered(r, Suit.SPADE) for r in range(1, length + 1)])


def make_state(hand=(), reserve=(), wildcards=(), scales=None) -> GameState:
    """State with the opponent to move and a passive human."""
    opponent = PlayerState(hand=list(hand), reserve=list(reserve), wildcards=list(wildcards))
    human = PlayerState(hand=[numbered(10, Suit.CLUB, serial=i) for i in range(5)])
    state = GameState(human=human, opponent=opponent, current_turn=Seat.OPPONENT)
    if scales is not None:
        state.scales = scales
    return state


class RecordingSleep:
    """Async sleep stand-in that records requested delays."""

    def __init__(self, on_sleep=None):
        self.delays: list[float] = []
        self.on_sleep = on_sleep

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)
        if self.on_sleep:
            self.on_sleep(len(self.delays))
        await asyncio.sleep(0)


class TestChooseMove:
    """Tests for choose_move function."""

    def test_reserve_first(self):
        """Test that the reserve top beats a playable hand card."""
        state = make_state(hand=[numbered(1)], reserve=[numbered(1, Suit.DIAMOND)])
        move = choose_move(state, Seat.OPPONENT)
        assert move.origin == Origin.reserve()
        assert move.card_key == "DIAMOND-1"

    def test_hand_left_to_right(self):
        """Test that the leftmost playable hand card is chosen."""
        state = make_state(hand=[numbered(5), numbered(2), numbered(1), numbered(2, Suit.CLUB)],
                           scales=[run_of(1), Scale(), Scale(), Scale()])
        move = choose_move(state, Seat.OPPONENT)
        assert move.origin == Origin.hand()
        assert move.card_key == "HEART-2"
        assert move.target_index == 0

    def test_lowest_scale_index(self):
        """Test that the first accepting scale is targeted."""
        state = make_state(hand=[numbered(3)], scales=[Scale(), run_of(4), run_of(2), run_of(2)])
        assert choose_move(state, Seat.OPPONENT).target_index == 2

    def test_unplayable_reserve_falls_through(self):
        """Test that a stuck reserve top does not block the hand."""
        state = make_state(hand=[numbered(1)], reserve=[numbered(9)])
        move = choose_move(state, Seat.OPPONENT)
        assert move.origin == Origin.hand()

    def test_wildcard_last(self):
        """Test that the wildcard is only used when nothing else fits."""
        state = make_state(hand=[numbered(9)], wildcards=[Card.wildcard(1)],
                           scales=[run_of(3), Scale(), Scale(), Scale()])
        move = choose_move(state, Seat.OPPONENT)
        assert move.origin == Origin.wildcard()
        assert move.card_key == "JOKER-1"
        assert move.target_index == 0

    def test_no_move(self):
        """Test that None is returned when nothing can be played."""
        state = make_state(hand=[numbered(9)], reserve=[numbered(8)], wildcards=[Card.wildcard(1)])
        assert choose_move(state, Seat.OPPONENT) is None

    def test_deterministic(self):
        """Test that the same state gives the same move."""
        state = make_state(hand=[numbered(2), numbered(1)], reserve=[numbered(7)])
        assert choose_move(state, Seat.OPPONENT) == choose_move(state.model_copy(deep=True), Seat.OPPONENT)

    def test_opaque_seat(self):
        """Test that an opaque seat cannot be played automatically."""
        state = GameState(opponent=OpaquePlayerState(hand_count=5))
        with pytest.raises(ValueError):
            choose_move(state, Seat.OPPONENT)


class TestChooseDiscard:
    """Tests for choose_discard function."""

    def test_empty_piles(self):
        """Test that the first pile is used when all are empty."""
        assert choose_discard(make_state(), Seat.OPPONENT) == 0

    def test_shortest_pile(self):
        """Test that the shortest pile wins, ties to the lowest index."""
        state = make_state()
        state.opponent.discards = [[numbered(9)], [numbered(8)], [], []]
        assert choose_discard(state, Seat.OPPONENT) == 2


class TestPlayTurn:
    """Tests for OpponentPolicy.play_turn."""

    def test_plays_then_discards(self):
        """Test a full turn with paced moves and a final discard."""
        state = make_state(hand=[numbered(1), numbered(2), numbered(9)])
        controller = TurnController(state)
        sleep = RecordingSleep()
        policy = OpponentPolicy(move_delay=0.5, discard_delay=0.25, sleep=sleep)

        report = policy.play_turn_sync(controller)

        assert [m.card_key for m in report.moves] == ["HEART-1", "HEART-2"]
        assert report.discard.is_valid
        assert not report.cancelled
        assert sleep.delays == [0.5, 0.5, 0.25]
        assert state.opponent.discards[0] == [numbered(9)]
        assert state.current_turn == Seat.HUMAN
        assert controller.automated_seat is None

    def test_no_legal_move_still_discards(self):
        """Test that a stuck turn goes straight to the discard."""
        state = make_state(hand=[numbered(9), numbered(8)])
        sleep = RecordingSleep()
        report = OpponentPolicy(sleep=sleep).play_turn_sync(TurnController(state))

        assert report.moves == []
        assert report.discard.is_valid
        assert sleep.delays == [0.8]
        assert state.current_turn == Seat.HUMAN

    def test_others_locked_out_while_running(self):
        """Test that moves from other callers are rejected mid-turn."""
        state = make_state(hand=[numbered(1), numbered(2), numbered(9)])
        controller = TurnController(state)
        rejections = []

        def intrude(_):
            move = MoveDescriptor.to_scale("HEART-9", 1, Origin.hand())
            rejections.append(controller.apply_move(Seat.OPPONENT, move).reason)

        policy = OpponentPolicy(sleep=RecordingSleep(on_sleep=intrude))
        policy.play_turn_sync(controller)

        assert rejections == [ErrorKind.NOT_YOUR_TURN] * 3

    def test_cancel_stops_before_discard(self):
        """Test that cancelling mid-turn issues no more moves and no discard."""
        state = make_state(hand=[numbered(1), numbered(2), numbered(3), numbered(9)])
        controller = TurnController(state)
        token = CancellationToken()
        sleep = RecordingSleep(on_sleep=lambda count: token.cancel() if count == 1 else None)

        report = OpponentPolicy(sleep=sleep).play_turn_sync(controller, token=token)

        assert report.cancelled
        assert len(report.moves) == 1
        assert report.discard is None
        assert state.current_turn == Seat.OPPONENT
        assert all(pile == [] for pile in state.opponent.discards)
        assert controller.automated_seat is None

    def test_on_step_snapshots(self):
        """Test that each step reports an independent copy of the state."""
        state = make_state(hand=[numbered(1), numbered(9)])
        snapshots = []
        policy = OpponentPolicy(sleep=RecordingSleep())

        policy.play_turn_sync(TurnController(state), on_step=snapshots.append)

        assert len(snapshots) == 2
        assert len(snapshots[0].scales[0]) == 1
        assert snapshots[0].current_turn == Seat.OPPONENT
        assert snapshots[1].current_turn == Seat.HUMAN
        assert snapshots[0] is not state

    def test_stops_when_game_won(self):
        """Test that no discard follows a winning move."""
        state = make_state(hand=[numbered(1)])
        sleep = RecordingSleep()

        report = OpponentPolicy(sleep=sleep).play_turn_sync(TurnController(state))

        assert state.winner == Seat.OPPONENT
        assert report.discard is None
        assert sleep.delays == [0.8]

    def test_not_its_turn(self):
        """Test that the policy does nothing out of turn."""
        state = make_state(hand=[numbered(1)])
        state.current_turn = Seat.HUMAN
        sleep = RecordingSleep()

        report = OpponentPolicy(sleep=sleep).play_turn_sync(TurnController(state))

        assert report.moves == []
        assert report.discard is None
        assert sleep.delays == []
        assert state.opponent.hand_size == 1

    def test_reserve_top_once_playable(self):
        """Test that the reserve top is retried after each move."""
        reserve = [numbered(8, Suit.CLUB, serial=i) for i in range(6)] + [numbered(2, Suit.DIAMOND)]
        state = make_state(hand=[numbered(1), numbered(9)], reserve=reserve)

        report = OpponentPolicy(sleep=RecordingSleep()).play_turn_sync(TurnController(state))

        assert [m.origin.kind for m in report.moves] == [OriginKind.HAND, OriginKind.RESERVE]
        # last hand card discarded, then the hand is drawn back up to five
        assert state.opponent.hand_size == 5
        assert state.opponent.reserve_size == 1

    def test_second_turn_while_running(self):
        """Test that a turn started during another one reports nothing and does not raise."""
        state = make_state(hand=[numbered(1), numbered(9)])
        controller = TurnController(state)
        lease = controller.begin_automated_turn(Seat.OPPONENT)

        report = OpponentPolicy(sleep=RecordingSleep()).play_turn_sync(controller)

        assert report.moves == []
        assert report.discard is None
        assert controller.automated_seat == Seat.OPPONENT
        assert state.opponent.hand_size == 2

        controller.end_automated_turn(lease)
        assert OpponentPolicy(sleep=RecordingSleep()).play_turn_sync(controller).moves
