"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures/variables required for testing multiple layers.
"""

from typing import Callable

import pytest

from goai.ai.pacing import Pacer
from goai.core.config import NO_PACING
from goai.core.shared_types import Color, Opponent
from goai.go.game_state import BoardState

StateFactory = Callable[..., BoardState]


@pytest.fixture
def no_pacing() -> Pacer:
    """A pacer that never actually sleeps (still yields to the event loop)."""
    return Pacer(settings=NO_PACING)


@pytest.fixture
def make_state() -> StateFactory:
    """Call the inner function with a simple board, and optionally the opponent and the color to move."""

    def _create_state(
        rows: list[str],
        ai: Opponent = Opponent.NETBURNERS,
        player_to_move: Color = Color.WHITE,
    ) -> BoardState:
        return BoardState.from_simple_board(rows, ai, player_to_move=player_to_move)

    return _create_state


@pytest.fixture
def empty_rows() -> Callable[[int], list[str]]:
    def _rows(size: int) -> list[str]:
        return ["." * size] * size

    return _rows
