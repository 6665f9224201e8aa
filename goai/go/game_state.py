"""
BoardState: the position plus everything needed to run a game around it.

It is created at game start and replaced wholesale on a new game. The functions below are the only
places allowed to change it: placing a stone, passing, and ending the game.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional, Self

from goai.core.config import KOMI
from goai.core.shared_types import Color, Opponent, Validity
from goai.go.analysis import evaluate_if_move_is_valid, evaluate_move_result
from goai.go.board import Board

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class BoardState:
    board: Board
    # None means the game is over
    previous_player: Optional[Color] = Color.WHITE
    pass_count: int = 0
    ai: Opponent = Opponent.NETBURNERS
    komi_override: Optional[float] = None
    previous_boards: list[str] = field(default_factory=list)

    @classmethod
    def new_game(
        cls, size: int, ai: Opponent, komi_override: Optional[float] = None
    ) -> Self:
        """Empty board, black plays first."""
        return cls(
            board=Board.empty(size),
            previous_player=Color.WHITE,
            ai=ai,
            komi_override=komi_override,
        )

    @classmethod
    def from_simple_board(
        cls,
        rows: list[str],
        ai: Opponent = Opponent.NETBURNERS,
        player_to_move: Color = Color.WHITE,
    ) -> Self:
        """Set up an arbitrary position (for analysis tools and tests)"""
        return cls(
            board=Board.from_simple_board(rows),
            previous_player=player_to_move.opposite(),
            ai=ai,
        )

    @property
    def move_count(self) -> int:
        """Number of plays (moves and passes) made so far"""
        return len(self.previous_boards)

    @property
    def is_over(self) -> bool:
        return self.previous_player is None


def make_move(board_state: BoardState, x: int, y: int, color: Color) -> bool:
    """
    Place a stone for the given color, capturing whatever runs out of liberties.
    ----

    Returns False (and leaves the state untouched) if the move is not valid.
    """
    validity = evaluate_if_move_is_valid(board_state, x, y, color, short_circuit=False)
    if validity != Validity.VALID:
        logger.warning("Rejected move %s at (%s, %s): %s", color, x, y, validity)
        return False

    board_state.previous_boards.append(board_state.board.snapshot())
    board_state.board = evaluate_move_result(board_state.board, x, y, color)
    board_state.previous_player = color
    board_state.pass_count = 0
    return True


def pass_turn(board_state: BoardState, color: Color) -> None:
    """Record a pass. The second consecutive pass ends the game."""
    if board_state.previous_player is None:
        return
    board_state.previous_boards.append(board_state.board.snapshot())
    board_state.previous_player = color
    board_state.pass_count += 1
    if board_state.pass_count >= 2:
        end_game(board_state)


def end_game(board_state: BoardState) -> None:
    logger.info("Game over after %s plays", board_state.move_count)
    board_state.previous_player = None


def get_komi(board_state: BoardState) -> float:
    """Starting score for white"""
    if board_state.komi_override is not None:
        return board_state.komi_override
    return KOMI[board_state.ai]
