"""
Type definitions used across layers
"""

from enum import StrEnum
from typing import Self


class Color(StrEnum):
    BLACK = "black"
    WHITE = "white"
    EMPTY = "empty"

    def opposite(self) -> Self:
        """Only meaningful for stone colors. EMPTY maps onto itself."""
        if self == Color.BLACK:
            return Color.WHITE
        if self == Color.WHITE:
            return Color.BLACK
        return self


class Opponent(StrEnum):
    NONE = "No AI"
    NETBURNERS = "Netburners"
    SLUM_SNAKES = "Slum Snakes"
    BLACK_HAND = "The Black Hand"
    TETRADS = "Tetrads"
    DAEDALUS = "Daedalus"
    ILLUMINATI = "Illuminati"


class PlayType(StrEnum):
    MOVE = "move"
    PASS = "pass"
    GAME_OVER = "gameOver"


class MoveType(StrEnum):
    """The catalogue of move categories the AI can be offered."""

    CAPTURE = "capture"
    DEFEND_CAPTURE = "defendCapture"
    EYE_MOVE = "eyeMove"
    EYE_BLOCK = "eyeBlock"
    PATTERN = "pattern"
    GROWTH = "growth"
    EXPANSION = "expansion"
    JUMP = "jump"
    DEFEND = "defend"
    SURROUND = "surround"
    CORNER = "corner"
    RANDOM = "random"


class Validity(StrEnum):
    VALID = "Valid"
    POINT_BROKEN = "That node is offline; a piece cannot be placed there"
    POINT_NOT_EMPTY = "That node is already occupied by a piece"
    BOARD_REPEATED = "It is illegal to repeat prior board states"
    NO_SUICIDE = "It is illegal to make a move that leaves your own pieces with no liberties"
    NOT_YOUR_TURN = "It is not your turn to play"
    GAME_OVER = "The game is over"
