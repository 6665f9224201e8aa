"""
Boundary layer data model(s).

A Play is what gets handed to anyone waiting on a turn: the move that was just made, a pass,
or the game over sentinel. Both the service layer and the AI layer produce these.
"""

from dataclasses import dataclass
from typing import Optional

from goai.core.shared_types import PlayType


@dataclass(frozen=True)
class Play:
    """Transport-safe representation of a single turn."""

    type: PlayType
    x: Optional[int] = None
    y: Optional[int] = None

    @property
    def coordinates(self) -> Optional[tuple[int, int]]:
        if self.x is None or self.y is None:
            return None
        return (self.x, self.y)


GAME_OVER = Play(PlayType.GAME_OVER)
PASS = Play(PlayType.PASS)
