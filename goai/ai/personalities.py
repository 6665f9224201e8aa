"""
The opponents' personalities.

Each faction walks the move categories in its own order, with its own probabilistic cut-offs, giving every AI a
different play style (and a different weakness to exploit). They know about chains, liberties and eyes, and some
local shape, but nothing about larger frameworks on the board.

Key idea: strategy pattern. One priority function per opponent, looked up in PRIORITY_MOVES.
"""

from typing import Awaitable, Callable, Optional

from goai.ai.move_options import Move, MoveOptions
from goai.core.shared_types import Opponent
from goai.go.board import Coordinate

PriorityMoveFn = Callable[[MoveOptions, float], Awaitable[Optional[Coordinate]]]

# chance that mistake avoidance (no self-atari etc.) is switched on for a decision
SMART_CHANCE: dict[Opponent, float] = {
    Opponent.NETBURNERS: 0.0,
    Opponent.SLUM_SNAKES: 0.3,
    Opponent.BLACK_HAND: 0.8,
}


def is_smart(opponent: Opponent, rng: float) -> bool:
    return rng < SMART_CHANCE.get(opponent, 1.0)


async def illuminati_priority_move(moves: MoveOptions, rng: float) -> Optional[Coordinate]:
    """
    First capture opponent stones, then prevent capture of their own.
    Then create eyes, threaten capture, block the opponent's eyes, take corners.
    Finally: local patterns, jumps and surrounding moves, each with some chance of being skipped.
    """
    capture = await moves.capture()
    if capture:
        return capture.point

    defend_capture = await moves.defend_capture()
    if defend_capture:
        return defend_capture.point

    eye_move = moves.eye_move()
    if eye_move:
        return eye_move.point

    surround = moves.surround()
    if surround and (surround.new_liberty_count or 0) <= 1:
        return surround.point

    eye_block = moves.eye_block()
    if eye_block:
        return eye_block.point

    corner = moves.corner()
    if corner:
        return corner.point

    has_moves = any([eye_move, eye_block, moves.growth(), moves.defend(), surround])
    use_pattern = rng > 0.25 or not has_moves
    pattern = await moves.pattern()
    if pattern and use_pattern:
        return pattern.point

    if rng > 0.4 and moves.jump():
        return moves.jump().point

    if rng < 0.6 and surround and (surround.new_liberty_count or 0) <= 2:
        return surround.point

    return None


async def daedalus_priority_move(moves: MoveOptions, rng: float) -> Optional[Coordinate]:
    """Almost always plays like the Illuminati, but very occasionally gets distracted"""
    if rng < 0.9:
        return await illuminati_priority_move(moves, rng)
    return None


async def tetrads_priority_move(moves: MoveOptions, rng: float) -> Optional[Coordinate]:
    """Up close and personal: cutting and circling the opponent"""
    capture = await moves.capture()
    if capture:
        return capture.point

    defend_capture = await moves.defend_capture()
    if defend_capture:
        return defend_capture.point

    pattern = await moves.pattern()
    if pattern:
        return pattern.point

    surround = moves.surround()
    if surround and (surround.new_liberty_count or 0) <= 1:
        return surround.point

    if rng < 0.4:
        return await illuminati_priority_move(moves, rng)
    return None


async def black_hand_priority_move(moves: MoveOptions, rng: float) -> Optional[Coordinate]:
    """Always captures or smothers the opponent if at all possible"""
    capture = await moves.capture()
    if capture:
        return capture.point

    surround = moves.surround()
    if surround and (surround.new_liberty_count or 0) <= 1:
        return surround.point

    defend_capture = await moves.defend_capture()
    if defend_capture:
        return defend_capture.point

    if surround and (surround.new_liberty_count or 0) <= 2:
        return surround.point

    if rng < 0.3:
        return await illuminati_priority_move(moves, rng)
    if rng < 0.75 and surround:
        return surround.point
    if rng < 0.8:
        return _point_of(moves.random())
    return None


async def slum_snakes_priority_move(moves: MoveOptions, rng: float) -> Optional[Coordinate]:
    """Defend their stones, and build chains that snake around as much of the board as possible"""
    defend_capture = await moves.defend_capture()
    if defend_capture:
        return defend_capture.point

    if rng < 0.2:
        return await illuminati_priority_move(moves, rng)
    if rng < 0.6 and moves.growth():
        return _point_of(moves.growth())
    if rng < 0.65:
        return _point_of(moves.random())
    return None


async def netburners_priority_move(moves: MoveOptions, rng: float) -> Optional[Coordinate]:
    """Mostly random stones around the board, with the occasional smart move"""
    if rng < 0.2:
        return await illuminati_priority_move(moves, rng)
    if rng < 0.4 and moves.expansion():
        return _point_of(moves.expansion())
    if rng < 0.6 and moves.growth():
        return _point_of(moves.growth())
    if rng < 0.75:
        return _point_of(moves.random())
    return None


def _point_of(move: Optional[Move]) -> Optional[Coordinate]:
    return move.point if move else None


PRIORITY_MOVES: dict[Opponent, PriorityMoveFn] = {
    Opponent.NETBURNERS: netburners_priority_move,
    Opponent.SLUM_SNAKES: slum_snakes_priority_move,
    Opponent.BLACK_HAND: black_hand_priority_move,
    Opponent.TETRADS: tetrads_priority_move,
    Opponent.DAEDALUS: daedalus_priority_move,
    Opponent.ILLUMINATI: illuminati_priority_move,
}


async def get_faction_move(
    moves: MoveOptions, opponent: Opponent, rng: float
) -> Optional[Coordinate]:
    """Pick a point according to the opponent's priorities. Anything without a ladder plays like the Illuminati."""
    priority_move = PRIORITY_MOVES.get(opponent, illuminati_priority_move)
    return await priority_move(moves, rng)
