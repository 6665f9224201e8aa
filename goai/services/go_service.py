"""Orchestration of one game session: requests from the external caller, the board state, turn handoff and the AI."""

import asyncio
import logging
import random
from typing import Optional

from goai.ai.engine import get_move
from goai.ai.pacing import Pacer
from goai.api.models import (
    AIMoveRequest,
    GameResponse,
    MoveRequest,
    NewGameRequest,
    PassRequest,
    PlayResponse,
)
from goai.core.exceptions import GameStateError, IllegalMoveError, NotYourTurnError
from goai.core.models import Play
from goai.core.shared_types import Color, Opponent, Validity
from goai.go import game_state
from goai.go.analysis import evaluate_if_move_is_valid
from goai.go.game_state import BoardState, get_komi
from goai.services.turns import TurnSynchronizer, game_over_future

logger = logging.getLogger(__name__)


class GoService:
    """
    Orchestration of layers for a game of Go against an AI opponent.
    ----

    Owns the current BoardState (replaced wholesale on a new game), the pacer, the engine's random source
    and the turn synchronizer. Must be created inside a running event loop.
    """

    def __init__(
        self,
        board_state: Optional[BoardState] = None,
        pacer: Optional[Pacer] = None,
        seed: Optional[int] = None,
    ) -> None:
        self.board_state = board_state or BoardState.new_game(7, Opponent.NETBURNERS)
        self.pacer = pacer or Pacer()
        # only used for AI move selection
        self.rng = random.Random(seed)
        self.turns = TurnSynchronizer(
            current_game=lambda: self.board_state,
            move_selector=self._select_move,
            pacer=self.pacer,
        )

    # -- External caller logic ---
    def new_game(self, request: NewGameRequest) -> GameResponse:
        """Throw away the current game and start over with an empty board. Black moves first."""
        self.turns.reset()
        self.board_state = BoardState.new_game(
            request.board_size, request.opponent, request.komi_override
        )
        logger.info(
            "New %sx%s game against %s", request.board_size, request.board_size, request.opponent
        )
        self.restart()
        return self.get_game_state()

    def make_move(self, request: MoveRequest) -> asyncio.Future:
        """
        Place a stone for the requested color.
        ----
        Returns the future for the mover's next turn: awaiting it yields the opponent's reply.
        """
        self._check_turn(request.color)

        validity = evaluate_if_move_is_valid(
            self.board_state, request.x, request.y, request.color, short_circuit=False
        )
        if validity != Validity.VALID:
            raise IllegalMoveError(f"Cannot play at ({request.x}, {request.y}): {validity}")

        game_state.make_move(self.board_state, request.x, request.y, request.color)
        return self.turns.advance(self.board_state, request.use_offline_cycles)

    def pass_turn(self, request: PassRequest) -> asyncio.Future:
        """Pass for the requested color. A second consecutive pass ends the game."""
        self._check_turn(request.color)

        game_state.pass_turn(self.board_state, request.color)
        if self.board_state.is_over:
            self.turns.reset(end_of_game=True)
            return game_over_future()
        return self.turns.advance(self.board_state, request.use_offline_cycles)

    def get_next_turn(self, color: Color) -> asyncio.Future:
        return self.turns.get_next_turn(color)

    def reset(self, end_of_game: bool = False) -> None:
        """Unblock everyone waiting on a turn"""
        self.turns.reset(end_of_game)

    def restart(self) -> None:
        """
        Re-arm the turn cycle for the current board and hand the turn to whoever is to move.
        ---
        If it is the AI's turn on that board, it starts thinking right away.
        """
        self.turns.reset()
        if not self.board_state.is_over:
            self.turns.advance(self.board_state)

    def end_game(self) -> GameResponse:
        game_state.end_game(self.board_state)
        self.turns.reset(end_of_game=True)
        return self.get_game_state()

    def get_game_state(self) -> GameResponse:
        return self._create_game_response(self.board_state)

    async def compute_move(self, request: AIMoveRequest) -> PlayResponse:
        """
        What would the requested opponent play on the given board?
        ----
        Runs independently of the current game and its turns.
        """
        board_state = BoardState.from_simple_board(
            request.board, request.opponent, player_to_move=request.color
        )
        play = await get_move(
            board_state,
            request.color,
            request.opponent,
            self.pacer,
            self.rng,
            request.use_offline_cycles,
        )
        return self._create_play_response(play)

    async def wait_for_ai(self) -> None:
        await self.turns.wait_for_ai()

    # -- Internal helpers --
    async def _select_move(
        self,
        board_state: BoardState,
        player: Color,
        opponent: Opponent,
        use_offline_cycles: bool,
    ) -> Play:
        return await get_move(board_state, player, opponent, self.pacer, self.rng, use_offline_cycles)

    def _check_turn(self, color: Color) -> None:
        """Raise if the color cannot play right now."""
        if self.board_state.is_over:
            raise GameStateError("The game is already over.")
        if color == self.board_state.previous_player:
            raise NotYourTurnError(f"It is not {color}'s turn to play.")

    def _create_game_response(self, board_state: BoardState) -> GameResponse:
        """Convert the BoardState into a GameResponse."""
        previous_player = board_state.previous_player
        return GameResponse(
            board=board_state.board.to_simple_board(),
            opponent=board_state.ai,
            previous_player=previous_player,
            player_to_move=previous_player.opposite() if previous_player else None,
            pass_count=board_state.pass_count,
            move_count=board_state.move_count,
            komi=get_komi(board_state),
            is_over=board_state.is_over,
        )

    def _create_play_response(self, play: Play) -> PlayResponse:
        return PlayResponse(type=play.type, x=play.x, y=play.y)
