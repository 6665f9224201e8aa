"""
Configuration constants used across layers.

Pacing values are in milliseconds. The short delays are used while a budget of
offline (bonus) cycles is available, so a background game can fast-forward.
"""

from dataclasses import dataclass

from goai.core.shared_types import Opponent

SUPPORTED_BOARD_SIZES: tuple[int, ...] = (5, 7, 9, 13, 19)

# Largest empty region that can still count as an eye, as a share of the live nodes on the board
EYE_SIZE_SHARE = 0.4
EYE_SIZE_CAP = 11

# Surround/defend heuristics use this when there is no chain to compare against
NO_CHAIN_LIBERTIES = 99

# Starting score for white, per opponent
KOMI: dict[Opponent, float] = {
    Opponent.NONE: 5.5,
    Opponent.NETBURNERS: 1.5,
    Opponent.SLUM_SNAKES: 3.5,
    Opponent.BLACK_HAND: 3.5,
    Opponent.TETRADS: 5.5,
    Opponent.DAEDALUS: 5.5,
    Opponent.ILLUMINATI: 7.5,
}


@dataclass(frozen=True)
class PacingSettings:
    short_delay_ms: int = 40
    long_delay_ms: int = 200
    scan_delay_ms: int = 10
    cycle_cost: int = 2


DEFAULT_PACING = PacingSettings()
NO_PACING = PacingSettings(short_delay_ms=0, long_delay_ms=0, scan_delay_ms=0)
