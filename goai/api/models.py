"""Requests and Response models"""

from typing import Optional

from pydantic import BaseModel, field_validator

from goai.core.config import SUPPORTED_BOARD_SIZES
from goai.core.exceptions import InvalidRequestError
from goai.core.shared_types import Color, Opponent, PlayType
from goai.go.board import SIMPLE_BOARD_TO_CELL

SimpleBoard = list[str]


def _validate_stone_color(value: Color) -> Color:
    if value == Color.EMPTY:
        raise InvalidRequestError("Only black or white can play.")
    return value


# --- REQUEST MODELS ---
class NewGameRequest(BaseModel):
    board_size: int = 7
    opponent: Opponent = Opponent.NETBURNERS
    komi_override: Optional[float] = None

    @field_validator("board_size")
    @classmethod
    def validate_board_size(cls, value: int) -> int:
        if value not in SUPPORTED_BOARD_SIZES:
            raise InvalidRequestError(
                f"Board size must be one of {SUPPORTED_BOARD_SIZES}, got {value}."
            )
        return value


class MoveRequest(BaseModel):
    color: Color
    x: int
    y: int
    use_offline_cycles: bool = True

    @field_validator("color")
    @classmethod
    def validate_color(cls, value: Color) -> Color:
        return _validate_stone_color(value)

    @field_validator(*["x", "y"])
    @classmethod
    def validate_coordinate(cls, value: int) -> int:
        if value < 0:
            raise InvalidRequestError(f"Coordinates cannot be negative, got {value}.")
        return value


class PassRequest(BaseModel):
    color: Color
    use_offline_cycles: bool = True

    @field_validator("color")
    @classmethod
    def validate_color(cls, value: Color) -> Color:
        return _validate_stone_color(value)


class AIMoveRequest(BaseModel):
    """A standalone question: what would this opponent play here?"""

    board: SimpleBoard
    color: Color = Color.WHITE
    opponent: Opponent = Opponent.ILLUMINATI
    use_offline_cycles: bool = True

    @field_validator("color")
    @classmethod
    def validate_color(cls, value: Color) -> Color:
        return _validate_stone_color(value)

    @field_validator("board")
    @classmethod
    def validate_board(cls, value: SimpleBoard) -> SimpleBoard:
        if not value or any(len(column) != len(value) for column in value):
            raise InvalidRequestError("Board must be a non-empty square list of strings.")

        unknown = {char for column in value for char in column} - set(SIMPLE_BOARD_TO_CELL)
        if unknown:
            raise InvalidRequestError(
                f"Board contains unknown characters: {''.join(sorted(unknown))!r}."
            )
        return value


# --- RESPONSE MODELS ---
class GameResponse(BaseModel):
    board: SimpleBoard
    opponent: Opponent
    previous_player: Optional[Color]
    player_to_move: Optional[Color]
    pass_count: int
    move_count: int
    komi: float
    is_over: bool


class PlayResponse(BaseModel):
    type: PlayType
    x: Optional[int] = None
    y: Optional[int] = None
