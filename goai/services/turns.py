"""
Turn handoff between the AI and whoever plays the other color (a human through a UI, or a script).

Each color owns exactly one pending future: "the next time it is my turn". Advancing the game resolves the
future of the color now to move with the play that was just made, and immediately re-arms a fresh one for it.
If white is AI-controlled, its decision runs as a background task on the event loop.

There is no cancel primitive. A decision computed for a board that has since advanced (or been replaced by a new
game) is simply dropped, and reset() unblocks every waiter without waiting for in-flight decisions.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Coroutine, Optional, Self

from goai.ai.pacing import Pacer
from goai.core.exceptions import InvalidRequestError
from goai.core.models import GAME_OVER, Play
from goai.core.shared_types import Color, Opponent, PlayType
from goai.go.analysis import get_previous_move_details
from goai.go.game_state import BoardState, make_move, pass_turn

logger = logging.getLogger(__name__)

# (board_state, player, opponent, use_offline_cycles) -> the AI's play
MoveSelector = Callable[[BoardState, Color, Opponent, bool], Awaitable[Play]]


@dataclass
class PlayerPromise:
    next_turn: asyncio.Future
    # only set while next_turn is unresolved
    resolver: Optional[Callable[[Play], None]]

    @classmethod
    def armed(cls) -> Self:
        future = asyncio.get_running_loop().create_future()
        return cls(next_turn=future, resolver=future.set_result)

    def resolve(self, play: Play) -> None:
        """Fulfil the pending future, if any. The resolver is consumed."""
        if self.resolver is not None and not self.next_turn.done():
            self.resolver(play)
        self.resolver = None

    @property
    def is_pending(self) -> bool:
        # a waiter giving up (wait_for timeout) cancels the shared future
        return self.resolver is not None and not self.next_turn.done()


def game_over_future() -> asyncio.Future:
    future = asyncio.get_running_loop().create_future()
    future.set_result(GAME_OVER)
    return future


class TurnSynchronizer:
    """
    Two promise slots (black, white) plus the logic to move the turn forward.
    ----

    Must be created inside a running event loop. Only ever touched from that loop, so no locking.
    """

    def __init__(
        self,
        current_game: Callable[[], BoardState],
        move_selector: MoveSelector,
        pacer: Pacer,
    ) -> None:
        self._current_game = current_game
        self._move_selector = move_selector
        self._pacer = pacer

        self.black = PlayerPromise.armed()
        self.white = PlayerPromise.armed()

        # board state and move count of the last handled advance
        self._last_advance: Optional[tuple[BoardState, int]] = None
        self._tasks: set[asyncio.Task] = set()

    # --- SLOTS ---
    def promise_for(self, color: Color) -> PlayerPromise:
        if color == Color.BLACK:
            return self.black
        if color == Color.WHITE:
            return self.white
        raise InvalidRequestError(f"No turns for {color!r}")

    def _resolve_and_rearm(self, color: Color, play: Play) -> None:
        self.promise_for(color).resolve(play)
        if color == Color.BLACK:
            self.black = PlayerPromise.armed()
        else:
            self.white = PlayerPromise.armed()

    def _ensure_armed(self, color: Color) -> None:
        if not self.promise_for(color).is_pending:
            self._resolve_and_rearm(color, GAME_OVER)

    # --- PUBLIC API ---
    def get_next_turn(self, color: Color) -> asyncio.Future:
        """Future resolving the next time it is this color's turn. Already resolved if the game is over."""
        if self._current_game().is_over:
            return game_over_future()
        self._ensure_armed(color)
        return self.promise_for(color).next_turn

    def advance(
        self, board_state: Optional[BoardState] = None, use_offline_cycles: bool = True
    ) -> asyncio.Future:
        """
        Hand the turn over after a play was recorded on the board state.
        ----

        1. Resolve the future of the color now to move with the play that was just made, and re-arm it.
        2. If that color is the AI's seat (white, in a game with an AI), start its decision in the background.
        3. Return the future of the color that just played, i.e. when the reply arrives.

        Calling it again for the same play does nothing and returns the same future.
        """
        board_state = board_state or self._current_game()
        previous_player = board_state.previous_player
        if previous_player is None:
            return game_over_future()

        marker = (board_state, board_state.move_count)
        if self._last_advance == marker:
            return self.promise_for(previous_player).next_turn
        self._last_advance = marker

        current_player = previous_player.opposite()
        self._resolve_and_rearm(current_player, get_previous_move_details(board_state))

        if board_state.ai != Opponent.NONE and current_player == Color.WHITE:
            self._schedule(
                self._play_ai_turn(board_state, current_player, board_state.move_count, use_offline_cycles)
            )

        self._ensure_armed(previous_player)
        return self.promise_for(previous_player).next_turn

    def reset(self, end_of_game: bool = False) -> None:
        """
        Resolve every pending future with the game over sentinel, so nobody stays parked.
        Both colors get fresh futures right away, unless the reset is due to the game ending.
        """
        for color in (Color.BLACK, Color.WHITE):
            if end_of_game:
                self.promise_for(color).resolve(GAME_OVER)
            else:
                self._resolve_and_rearm(color, GAME_OVER)
        self._last_advance = None

    async def wait_for_ai(self) -> None:
        """Wait until no AI decision is running anymore"""
        while self._tasks:
            await asyncio.gather(*list(self._tasks))

    # --- AI TURN ---
    def _schedule(self, coroutine: Coroutine[Any, Any, None]) -> None:
        task = asyncio.get_running_loop().create_task(coroutine)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    def _is_stale(self, board_state: BoardState, move_count: int) -> bool:
        return self._current_game() is not board_state or board_state.move_count != move_count

    async def _play_ai_turn(
        self, board_state: BoardState, color: Color, move_count: int, use_offline_cycles: bool
    ) -> None:
        """move_count is the count when the turn was handed to the AI, not when this task got to run"""
        try:
            play = await self._move_selector(board_state, color, board_state.ai, use_offline_cycles)
            if self._is_stale(board_state, move_count):
                logger.debug("Dropping AI decision for a board that is no longer current")
                return

            if play.type != PlayType.MOVE or play.coordinates is None:
                pass_turn(board_state, color)
                if board_state.is_over:
                    self.reset(end_of_game=True)
                    return
                self.advance(board_state, use_offline_cycles)
                return

            await self._pacer.wait_cycle(use_offline_cycles)
            if self._is_stale(board_state, move_count):
                logger.warning("Board changed while the AI move %s was pending, dropping it", play.coordinates)
                return

            if not make_move(board_state, play.x, play.y, color):
                logger.error("AI (%s) attempted an illegal move at %s", board_state.ai, play.coordinates)
                return
            self.advance(board_state, use_offline_cycles)
        except Exception:
            logger.exception("AI turn for %s failed", color)
