"""
The standalone move query: one complete AI decision for a given position, color and opponent.

A decision draws four values from the injected random source, in this order:
the smart draw, the move-options draw (shared by every category tie-break), the personality ladder draw,
and the fallback draw.
"""

import logging
import random
from typing import Optional

from goai.ai.move_options import Move, MoveOptions
from goai.ai.pacing import Pacer
from goai.ai.personalities import get_faction_move, is_smart
from goai.core.models import PASS, Play
from goai.core.shared_types import Color, Opponent, PlayType, Validity
from goai.go.analysis import evaluate_if_move_is_valid
from goai.go.game_state import BoardState

logger = logging.getLogger(__name__)


async def get_move(
    board_state: BoardState,
    player: Color,
    opponent: Opponent,
    pacer: Pacer,
    rng: random.Random,
    use_offline_cycles: bool = True,
) -> Play:
    """
    Select a move (or a pass) for the player, in the style of the given opponent.
    ----

    The opponent's priority ladder gets the first say. If it does not come up with anything, a random legal move
    among the remaining categories is played instead. Passes only when nothing is left at all.
    """
    await pacer.wait_cycle(use_offline_cycles)

    smart = is_smart(opponent, rng.random())
    moves = MoveOptions(board_state, player, rng.random(), smart, pacer, use_offline_cycles)

    priority_point = await get_faction_move(moves, opponent, rng.random())
    if priority_point is not None:
        logger.debug("%s (%s) plays priority move %s", opponent, player, priority_point)
        return Play(PlayType.MOVE, *priority_point)

    fallback_moves = await _fallback_moves(board_state, player, moves)
    chosen: Optional[Move] = None
    fallback_rng = rng.random()
    if fallback_moves:
        chosen = fallback_moves[int(fallback_rng * len(fallback_moves))]

    await pacer.wait_cycle(use_offline_cycles)

    if chosen is None:
        logger.debug("%s (%s) found no move and passes", opponent, player)
        return PASS
    logger.debug("%s (%s) plays fallback move %s", opponent, player, chosen.point)
    return Play(PlayType.MOVE, *chosen.point)


async def _fallback_moves(
    board_state: BoardState, player: Color, moves: MoveOptions
) -> list[Move]:
    """The secondary categories, restricted to moves that are still legal right now"""
    candidates = [
        moves.growth(),
        moves.surround(),
        moves.defend(),
        moves.expansion(),
        await moves.pattern(),
        moves.eye_move(),
        moves.eye_block(),
    ]
    return [
        move
        for move in candidates
        if move is not None
        and evaluate_if_move_is_valid(board_state, *move.point, player, short_circuit=False)
        == Validity.VALID
    ]
