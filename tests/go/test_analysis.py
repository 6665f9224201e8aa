"""Unit tests for goai/go/analysis.py"""

from typing import Callable

import pytest

from goai.core.config import NO_CHAIN_LIBERTIES
from goai.core.models import GAME_OVER, PASS, Play
from goai.core.shared_types import Color, Opponent, PlayType, Validity
from goai.go.analysis import (
    evaluate_if_move_is_valid,
    evaluate_move_result,
    find_disputed_territory,
    find_effective_liberties_of_new_move,
    find_min_liberty_count_of_adjacent_chains,
    find_neighbors,
    get_all_eyes,
    get_all_eyes_by_chain_id,
    get_all_potential_eyes,
    get_previous_move_details,
)
from goai.go.board import Board
from goai.go.game_state import BoardState, end_game, make_move, pass_turn

StateFactory = Callable[..., BoardState]

# Black wall on x=1, with three single point eyes on the x=0 edge: alive
LIVING_BLACK_GROUP = [".X.X.", "XXXXX", ".....", ".....", "....."]


# --- NEIGHBORS & LIBERTIES ---
def test_neighbors_of_corner() -> None:
    board = Board.from_simple_board(["XO...", ".....", ".....", ".....", "....."])
    neighbors = find_neighbors(board, 0, 0)

    assert neighbors.south is None
    assert neighbors.west is None
    assert neighbors.north is not None and neighbors.north.color == Color.WHITE
    assert neighbors.east is not None and neighbors.east.color == Color.EMPTY


def test_effective_liberties_include_joined_chain() -> None:
    """A stone next to a friendly chain shares its liberties, but not the point it was placed on."""
    board = Board.from_simple_board(["X....", ".....", ".....", ".....", "....."])
    liberties = find_effective_liberties_of_new_move(board, 0, 1, Color.BLACK)

    assert set(liberties) == {(0, 2), (1, 1), (1, 0)}


def test_min_liberty_count_without_adjacent_chain() -> None:
    board = Board.empty(5)
    assert find_min_liberty_count_of_adjacent_chains(board, 2, 2, Color.BLACK) == NO_CHAIN_LIBERTIES


def test_min_liberty_count_of_chain_in_atari() -> None:
    board = Board.from_simple_board(["OX...", ".....", ".....", ".....", "....."])
    assert find_min_liberty_count_of_adjacent_chains(board, 1, 0, Color.WHITE) == 1


# --- EYES ---
def test_eyes_of_living_group() -> None:
    board = Board.from_simple_board(LIVING_BLACK_GROUP)
    eyes_by_chain = get_all_eyes_by_chain_id(board, Color.BLACK)

    assert list(eyes_by_chain) == ["0,1"]
    eye_points = {point for eye in eyes_by_chain["0,1"] for point in eye.points}
    assert eye_points == {(0, 0), (0, 2), (0, 4)}
    assert [len(eyes) for eyes in get_all_eyes(board, Color.BLACK)] == [3]


def test_large_open_area_is_no_eye() -> None:
    """The open side of the board is bordered by black only, but too large to be an eye."""
    board = Board.from_simple_board(LIVING_BLACK_GROUP)
    candidates = get_all_potential_eyes(board, Color.BLACK)

    assert all(len(candidate.chain) == 1 for candidate in candidates)
    assert get_all_potential_eyes(board, Color.WHITE) == []


def test_eye_shared_by_two_chains_needs_full_encirclement() -> None:
    """
    Two separate white chains surround the corner point (0, 0).
    Neither wraps around it on its own, so it is no true eye of either.
    """
    board = Board.from_simple_board([".O...", "O....", ".....", ".....", "....."])
    assert get_all_eyes_by_chain_id(board, Color.WHITE) == {}


# --- MOVES ---
def test_move_result_captures() -> None:
    board = Board.from_simple_board(["XO...", ".....", ".....", ".....", "....."])
    result = evaluate_move_result(board, 1, 0, Color.WHITE)

    assert result.cell(0, 0) == Color.EMPTY
    assert result.cell(1, 0) == Color.WHITE
    # original board is unchanged
    assert board.cell(0, 0) == Color.BLACK


def test_valid_move(make_state: StateFactory) -> None:
    state = make_state(["XO...", ".....", ".....", ".....", "....."])
    assert evaluate_if_move_is_valid(state, 1, 0, Color.WHITE) == Validity.VALID


@pytest.mark.parametrize(
    "x, y, color, expected",
    [
        (0, 0, Color.WHITE, Validity.POINT_NOT_EMPTY),
        (5, 0, Color.WHITE, Validity.POINT_BROKEN),
        (2, 2, Color.BLACK, Validity.NOT_YOUR_TURN),
    ],
)
def test_invalid_moves(
    make_state: StateFactory, x: int, y: int, color: Color, expected: Validity
) -> None:
    state = make_state(["XO...", ".....", ".....", ".....", "....."])
    assert evaluate_if_move_is_valid(state, x, y, color) == expected


def test_offline_point_is_broken(make_state: StateFactory) -> None:
    state = make_state(["..#..", ".....", ".....", ".....", "....."])
    assert evaluate_if_move_is_valid(state, 0, 2, Color.WHITE) == Validity.POINT_BROKEN


def test_no_moves_after_game_over(make_state: StateFactory) -> None:
    state = make_state(["XO...", ".....", ".....", ".....", "....."])
    end_game(state)
    assert evaluate_if_move_is_valid(state, 2, 2, Color.WHITE) == Validity.GAME_OVER


def test_suicide_is_illegal(make_state: StateFactory) -> None:
    state = make_state(LIVING_BLACK_GROUP, player_to_move=Color.WHITE)
    assert evaluate_if_move_is_valid(state, 0, 2, Color.WHITE) == Validity.NO_SUICIDE


def test_repeated_board_is_illegal(make_state: StateFactory) -> None:
    """Only detected with the full check: a point with an empty neighbor short-circuits to valid."""
    state = make_state(["....."] * 5, player_to_move=Color.BLACK)
    state.previous_boards.append(
        Board.from_simple_board(["X....", ".....", ".....", ".....", "....."]).snapshot()
    )

    assert (
        evaluate_if_move_is_valid(state, 0, 0, Color.BLACK, short_circuit=False)
        == Validity.BOARD_REPEATED
    )
    assert evaluate_if_move_is_valid(state, 0, 0, Color.BLACK) == Validity.VALID


def test_disputed_territory_excludes_own_eyes_when_smart(make_state: StateFactory) -> None:
    state = make_state(LIVING_BLACK_GROUP, player_to_move=Color.BLACK)

    assert (0, 0) in find_disputed_territory(state, Color.BLACK)
    smart_moves = find_disputed_territory(state, Color.BLACK, exclude_friendly_eyes=True)
    assert (0, 0) not in smart_moves
    assert (0, 2) not in smart_moves
    assert (3, 3) in smart_moves


# --- PREVIOUS MOVE ---
def test_previous_move_of_new_game_is_pass() -> None:
    state = BoardState.new_game(5, Opponent.NETBURNERS)
    assert get_previous_move_details(state) == PASS


def test_previous_move_after_move_and_pass() -> None:
    state = BoardState.new_game(5, Opponent.NETBURNERS)
    assert make_move(state, 2, 3, Color.BLACK)
    assert get_previous_move_details(state) == Play(PlayType.MOVE, 2, 3)

    pass_turn(state, Color.WHITE)
    assert get_previous_move_details(state) == PASS


def test_previous_move_after_game_over() -> None:
    state = BoardState.new_game(5, Opponent.NETBURNERS)
    end_game(state)
    assert get_previous_move_details(state) == GAME_OVER
