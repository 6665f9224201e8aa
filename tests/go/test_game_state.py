"""Unit tests for goai/go/game_state.py"""

import logging

import pytest

from goai.core.shared_types import Color, Opponent
from goai.go.game_state import BoardState, end_game, get_komi, make_move, pass_turn


def test_new_game() -> None:
    state = BoardState.new_game(9, Opponent.ILLUMINATI)

    assert state.board.size == 9
    # black moves first
    assert state.previous_player == Color.WHITE
    assert state.pass_count == 0
    assert state.move_count == 0
    assert not state.is_over


def test_from_simple_board_sets_player_to_move() -> None:
    state = BoardState.from_simple_board(
        ["X....", ".....", ".....", ".....", "....."], player_to_move=Color.BLACK
    )
    assert state.previous_player == Color.WHITE
    assert state.ai == Opponent.NETBURNERS


def test_make_move_records_history() -> None:
    state = BoardState.new_game(5, Opponent.NETBURNERS)
    state.pass_count = 1
    empty_snapshot = state.board.snapshot()

    assert make_move(state, 2, 2, Color.BLACK)

    assert state.board.cell(2, 2) == Color.BLACK
    assert state.previous_player == Color.BLACK
    assert state.pass_count == 0
    assert state.previous_boards == [empty_snapshot]
    assert state.move_count == 1


def test_make_move_captures() -> None:
    state = BoardState.from_simple_board(["XO...", ".....", ".....", ".....", "....."])
    assert make_move(state, 1, 0, Color.WHITE)
    assert state.board.cell(0, 0) == Color.EMPTY


def test_rejected_move_leaves_state_untouched(caplog: pytest.LogCaptureFixture) -> None:
    state = BoardState.from_simple_board(["XO...", ".....", ".....", ".....", "....."])

    with caplog.at_level(logging.WARNING):
        assert not make_move(state, 0, 0, Color.WHITE)

    assert state.board.cell(0, 0) == Color.BLACK
    assert state.previous_player == Color.BLACK
    assert state.move_count == 0
    assert "Rejected move" in caplog.text


def test_two_passes_end_the_game() -> None:
    state = BoardState.new_game(5, Opponent.NETBURNERS)

    pass_turn(state, Color.BLACK)
    assert state.pass_count == 1
    assert state.previous_player == Color.BLACK
    assert not state.is_over

    pass_turn(state, Color.WHITE)
    assert state.is_over
    assert state.move_count == 2


def test_move_in_between_resets_pass_count() -> None:
    state = BoardState.new_game(5, Opponent.NETBURNERS)
    pass_turn(state, Color.BLACK)
    assert make_move(state, 2, 2, Color.WHITE)
    pass_turn(state, Color.BLACK)

    assert state.pass_count == 1
    assert not state.is_over


def test_passing_after_game_over_does_nothing() -> None:
    state = BoardState.new_game(5, Opponent.NETBURNERS)
    end_game(state)
    pass_turn(state, Color.BLACK)

    assert state.is_over
    assert state.move_count == 0


@pytest.mark.parametrize(
    "opponent, komi",
    [
        (Opponent.NETBURNERS, 1.5),
        (Opponent.SLUM_SNAKES, 3.5),
        (Opponent.BLACK_HAND, 3.5),
        (Opponent.TETRADS, 5.5),
        (Opponent.DAEDALUS, 5.5),
        (Opponent.ILLUMINATI, 7.5),
        (Opponent.NONE, 5.5),
    ],
)
def test_komi_per_opponent(opponent: Opponent, komi: float) -> None:
    assert get_komi(BoardState.new_game(5, opponent)) == komi


def test_komi_override() -> None:
    assert get_komi(BoardState.new_game(5, Opponent.ILLUMINATI, komi_override=0.5)) == 0.5
