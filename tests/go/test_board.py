"""Unit tests for goai/go/board.py"""

import pytest

from goai.core.exceptions import InvalidRequestError
from goai.core.shared_types import Color
from goai.go.board import EDGE, Board

SINGLE_PAIR = ["XO...", ".....", ".....", ".....", "....."]


# --- CONSTRUCTION ---
def test_simple_board_is_indexed_by_column() -> None:
    """Each string is one x column, so the second character of the first string is (0, 1)."""
    board = Board.from_simple_board(SINGLE_PAIR)

    assert board.size == 5
    assert board.cell(0, 0) == Color.BLACK
    assert board.cell(0, 1) == Color.WHITE
    assert board.cell(1, 0) == Color.EMPTY


def test_to_simple_board_gives_back_the_input() -> None:
    rows = ["X.#..", ".O...", ".....", "..#..", "....O"]
    assert Board.from_simple_board(rows).to_simple_board() == rows


def test_empty_board() -> None:
    board = Board.empty(7)
    assert board.to_simple_board() == ["......."] * 7
    assert board.snapshot() == "." * 49


@pytest.mark.parametrize(
    "rows",
    [
        [],
        ["...", "..."],  # not square
        ["....", "....", "....", "..."],  # ragged
    ],
)
def test_board_must_be_square(rows: list[str]) -> None:
    with pytest.raises(InvalidRequestError):
        _ = Board.from_simple_board(rows)


def test_unknown_characters_are_rejected() -> None:
    with pytest.raises(InvalidRequestError):
        _ = Board.from_simple_board(["X?.", "...", "..."])


# --- LOOKUPS ---
@pytest.mark.parametrize("x, y", [(-1, 0), (0, -1), (5, 0), (0, 5)])
def test_off_board_is_edge(x: int, y: int) -> None:
    board = Board.from_simple_board(SINGLE_PAIR)
    assert board.cell(x, y) is EDGE
    assert board.point(x, y) is None


def test_offline_node_is_edge_and_not_a_neighbor() -> None:
    board = Board.from_simple_board([".#.", "...", "..."])

    assert board.cell(0, 1) is EDGE
    assert (0, 1) not in set(board.live_points())
    assert set(board.neighbors(0, 0)) == {(1, 0)}


def test_with_stone_leaves_original_untouched() -> None:
    board = Board.empty(5)
    placed = board.with_stone(2, 2, Color.BLACK)

    assert placed.cell(2, 2) == Color.BLACK
    assert board.cell(2, 2) == Color.EMPTY


def test_without_stones_empties_the_points() -> None:
    board = Board.from_simple_board(SINGLE_PAIR)
    cleared = board.without_stones({(0, 0)})

    assert cleared.cell(0, 0) == Color.EMPTY
    assert cleared.cell(0, 1) == Color.WHITE


# --- CHAINS ---
def test_chain_of_stones_shares_id_and_liberties() -> None:
    board = Board.from_simple_board(["XX...", ".....", ".....", ".....", "....."])
    chain = board.chain_at(0, 0)

    assert chain is not None
    assert chain.id == "0,0"
    assert chain.color == Color.BLACK
    assert chain.points == ((0, 0), (0, 1))
    assert chain.liberties == ((0, 2), (1, 0), (1, 1))

    first, second = board.point(0, 0), board.point(0, 1)
    assert first is not None and second is not None
    assert first.chain == second.chain == "0,0"
    assert first.liberties == second.liberties == chain.liberties


def test_empty_regions_are_chains_without_liberties() -> None:
    board = Board.from_simple_board(["XX...", ".....", ".....", ".....", "....."])

    assert len(board.chains) == 2
    region = board.chain_at(0, 2)
    assert region is not None
    assert region.id == "0,2"
    assert region.color == Color.EMPTY
    assert len(region) == 23
    assert region.liberties == ()


def test_separate_stones_are_separate_chains() -> None:
    board = Board.from_simple_board(["X.X..", ".....", ".....", ".....", "....."])
    assert board.chain_at(0, 0) != board.chain_at(0, 2)
    assert (0, 2) not in board.chain_at(0, 0)


def test_offline_nodes_belong_to_no_chain() -> None:
    board = Board.from_simple_board(["X#...", "#....", ".....", ".....", "....."])

    assert board.chain_at(0, 1) is None
    assert board.chain_at(1, 0) is None
    walled_in = board.chain_at(0, 0)
    assert walled_in is not None
    assert walled_in.points == ((0, 0),)
    assert walled_in.liberties == ()
    assert sum(len(chain) for chain in board.chains) == 23
