"""
Candidate moves, one per category.

Each category looks at the board from a different angle (capturing, defending, making eyes, claiming open space, ...)
and proposes at most one point. Nothing here changes the board: these are read-only projections of a position.

MoveOptions bundles the categories for a single decision and computes each of them lazily, at most once.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from goai.ai.pacing import Pacer
from goai.ai.patterns import find_any_matched_patterns
from goai.core.config import NO_CHAIN_LIBERTIES
from goai.core.shared_types import Color, MoveType
from goai.go.analysis import (
    evaluate_move_result,
    find_disputed_territory,
    find_effective_liberties_of_new_move,
    find_min_liberty_count_of_adjacent_chains,
    find_neighbor_chain_with_fewest_liberties,
    find_neighbors,
    get_all_eyes,
    get_all_eyes_by_chain_id,
    get_all_neighboring_chains,
)
from goai.go.board import Board, Coordinate
from goai.go.game_state import BoardState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Move:
    """A candidate point. Liberty counts refer to the chain the move is aimed at (or -1 when meaningless)."""

    point: Coordinate
    old_liberty_count: Optional[int] = None
    new_liberty_count: Optional[int] = None
    creates_life: bool = False


def pick(candidates: list[Move], rng: float) -> Optional[Move]:
    """Uniform choice driven by a draw in [0, 1)"""
    if not candidates:
        return None
    return candidates[int(rng * len(candidates))]


# --- OPEN SPACE ---
def get_disputed_territory_moves(
    board: Board, available_spaces: list[Coordinate], max_chain_size: int = 99
) -> list[Coordinate]:
    """Available points whose empty region touches stones of both colors"""
    disputed: list[Coordinate] = []
    for space in available_spaces:
        region = board.chain_at(*space)
        if region is None or len(region) > max_chain_size:
            continue
        neighbor_colors = {chain.color for chain in get_all_neighboring_chains(board, region)}
        if {Color.BLACK, Color.WHITE} <= neighbor_colors:
            disputed.append(space)
    return disputed


def get_expansion_move_array(board: Board, available_spaces: list[Coordinate]) -> list[Move]:
    """
    Moves in open areas, to expand influence and later build on.
    ---
    Looks for empty spaces fully surrounded by empty spaces. Once no such areas exist anymore,
    expands into (single point) disputed territory instead, to gain a few more points in the endgame.
    """
    empty_spaces = [
        (x, y)
        for x, y in available_spaces
        if all(
            neighbor is not None and neighbor.color == Color.EMPTY
            for neighbor in find_neighbors(board, x, y)
        )
    ]
    disputed_spaces = (
        [] if empty_spaces else get_disputed_territory_moves(board, available_spaces, 1)
    )
    return [
        Move(point, old_liberty_count=-1, new_liberty_count=-1)
        for point in [*empty_spaces, *disputed_spaces]
    ]


def get_expansion_move(expansion_moves: list[Move], rng: float) -> Optional[Move]:
    return pick(expansion_moves, rng)


def get_jump_move(
    board: Board, player: Color, expansion_moves: list[Move], rng: float
) -> Optional[Move]:
    """An open-space move two points away from a friendly stone"""
    jumps = [
        move
        for move in expansion_moves
        if any(
            board.cell(move.point[0] + dx, move.point[1] + dy) == player
            for dx, dy in ((0, 2), (2, 0), (0, -2), (-2, 0))
        )
    ]
    return pick(jumps, rng)


def is_corner_available_for_move(board: Board, x1: int, y1: int, x2: int, y2: int) -> bool:
    """A corner region counts if it is largely intact (7+ live nodes) and entirely empty"""
    found_points = [
        (x, y) for x, y in board.live_points() if x1 <= x <= x2 and y1 <= y <= y2
    ]
    if len(found_points) < 7:
        return False
    return all(board.cell(x, y) == Color.EMPTY for x, y in found_points)


def get_corner_move(board: Board) -> Optional[Move]:
    """Take over a corner, checking the four corners in a fixed order"""
    board_edge = board.size - 1
    corner_max = board_edge - 2
    corners = [
        ((corner_max, corner_max, board_edge, board_edge), (corner_max, corner_max)),
        ((0, corner_max, 2, board_edge), (2, corner_max)),
        ((0, 0, 2, 2), (2, 2)),
        ((corner_max, 0, board_edge, 2), (corner_max, 2)),
    ]
    for area, point in corners:
        if is_corner_available_for_move(board, *area) and board.cell(*point) == Color.EMPTY:
            return Move(point)
    return None


# --- LIBERTIES ---
def get_liberty_growth_moves(
    board: Board, player: Color, available_spaces: list[Coordinate]
) -> list[Move]:
    """Liberties of friendly chains where playing increases (or at least keeps) the liberty count of the chain"""
    available = set(available_spaces)
    liberties: dict[Coordinate, None] = {}
    for chain in board.chains:
        if chain.color != player:
            continue
        for liberty in chain.liberties:
            if liberty in available:
                liberties[liberty] = None

    moves: list[Move] = []
    for x, y in liberties:
        new_liberty_count = len(find_effective_liberties_of_new_move(board, x, y, player))
        # the weakest connected chain represents the old state
        old_liberty_count = find_min_liberty_count_of_adjacent_chains(board, x, y, player)
        if new_liberty_count > 1 and new_liberty_count >= old_liberty_count:
            moves.append(Move((x, y), old_liberty_count, new_liberty_count))
    return moves


def _largest_increase(moves: list[Move]) -> list[Move]:
    increases = [move.new_liberty_count - move.old_liberty_count for move in moves]
    best = max(increases)
    return [move for move, increase in zip(moves, increases) if increase == best]


def get_growth_move(
    board: Board, player: Color, available_spaces: list[Coordinate], rng: float
) -> Optional[Move]:
    growth_moves = get_liberty_growth_moves(board, player, available_spaces)
    if not growth_moves:
        return None
    return pick(_largest_increase(growth_moves), rng)


def get_defend_move(
    board: Board, player: Color, available_spaces: list[Coordinate], rng: float
) -> Optional[Move]:
    """Raise a chain in atari to more than one liberty"""
    liberty_increases = [
        move
        for move in get_liberty_growth_moves(board, player, available_spaces)
        if move.old_liberty_count <= 1 and move.new_liberty_count > move.old_liberty_count
    ]
    if not liberty_increases:
        return None
    return pick(_largest_increase(liberty_increases), rng)


def get_surround_move(
    board: Board, player: Color, available_spaces: list[Coordinate], smart: bool = True
) -> Optional[Move]:
    """
    Reduce the opponent's liberties, capturing (or making it easier to capture) their stones.
    ----

    Candidates are ranked: captures first, then ataris, then plain surrounding moves.
    """
    opponent = player.opposite()
    enemy_chains = [chain for chain in board.chains if chain.color == opponent]
    if not enemy_chains or not available_spaces:
        return None

    available = set(available_spaces)
    enemy_liberties = [
        liberty for chain in enemy_chains for liberty in chain.liberties if liberty in available
    ]

    capture_moves: list[Move] = []
    atari_moves: list[Move] = []
    surround_moves: list[Move] = []
    for x, y in enemy_liberties:
        new_liberty_count = len(find_effective_liberties_of_new_move(board, x, y, player))
        weakest_enemy_chain = find_neighbor_chain_with_fewest_liberties(board, x, y, opponent)
        if weakest_enemy_chain is None:
            continue
        enemy_chain_length = len(weakest_enemy_chain)
        enemy_liberty_count = len(weakest_enemy_chain.liberties)
        # the distinct empty regions the enemy's liberties belong to
        enemy_liberty_groups = {
            region.id
            for region in (board.chain_at(*liberty) for liberty in weakest_enemy_chain.liberties)
            if region is not None
        }
        move = Move((x, y), enemy_liberty_count, enemy_liberty_count - 1)

        # Do not suggest moves that do not capture anything and let the opponent capture right back
        if new_liberty_count <= 2 and enemy_liberty_count > 2:
            continue

        if enemy_liberty_count <= 1:
            capture_moves.append(move)
        # Atari forces a response. Only play it if the new stone is safe, or the enemy group is enclosed and
        # vulnerable to losing its only interior space
        elif enemy_liberty_count == 2 and (
            new_liberty_count >= 2
            or (len(enemy_liberty_groups) == 1 and enemy_chain_length > 3)
            or not smart
        ):
            atari_moves.append(move)
        elif new_liberty_count >= 2:
            surround_moves.append(move)

    ranked = [*capture_moves, *atari_moves, *surround_moves]
    return ranked[0] if ranked else None


# --- EYES ---
def get_eye_creation_moves(
    board: Board,
    player: Color,
    available_spaces: list[Coordinate],
    max_liberties: int = NO_CHAIN_LIBERTIES,
) -> list[Move]:
    """
    All moves that would create an eye for the given player.
    ----

    An eye is empty space completely surrounded by one player's connected stones. A chain with two eyes cannot be
    captured, since the opponent can only fill one of them at a time.
    Moves that bring a new group to life are sorted first.
    """
    eyes_by_chain = get_all_eyes_by_chain_id(board, player)
    current_eyes = get_all_eyes(board, player, eyes_by_chain)
    living_group_ids = {chain_id for chain_id, eyes in eyes_by_chain.items() if len(eyes) >= 2}
    living_group_count = len(living_group_ids)
    eye_count = len([eyes for eyes in current_eyes if eyes])

    available = set(available_spaces)
    friendly_liberties: dict[Coordinate, None] = {}
    for chain in board.chains:
        if (
            chain.color != player
            or len(chain) <= 1
            or len(chain.liberties) > max_liberties
            or chain.id in living_group_ids
        ):
            continue
        for liberty in chain.liberties:
            if liberty not in available:
                continue
            neighborhood = find_neighbors(board, *liberty)
            walls = [point for point in neighborhood if point is None or point.color == player]
            has_empty = any(point is not None and point.color == Color.EMPTY for point in neighborhood)
            if len(walls) >= 2 and has_empty:
                friendly_liberties[liberty] = None

    eye_moves: list[Move] = []
    for x, y in friendly_liberties:
        new_eyes = get_all_eyes(evaluate_move_result(board, x, y, player), player)
        new_living_group_count = len([eyes for eyes in new_eyes if len(eyes) >= 2])
        new_eye_count = len([eyes for eyes in new_eyes if eyes])
        creates_life = new_living_group_count > living_group_count
        if creates_life or (
            new_eye_count > eye_count and new_living_group_count == living_group_count
        ):
            eye_moves.append(Move((x, y), creates_life=creates_life))

    return sorted(eye_moves, key=lambda move: not move.creates_life)


def get_eye_creation_move(
    board: Board, player: Color, available_spaces: list[Coordinate]
) -> Optional[Move]:
    moves = get_eye_creation_moves(board, player, available_spaces)
    return moves[0] if moves else None


def get_eye_blocking_move(
    board: Board, player: Color, available_spaces: list[Coordinate]
) -> Optional[Move]:
    """
    If there is exactly one move that would give the opponent life (or, failing that, an eye), take that point first.
    ---
    Several simultaneous threats cannot be stopped with a single move, so none is returned then.
    """
    opponent_eye_moves = get_eye_creation_moves(board, player.opposite(), available_spaces, 5)
    two_eye_moves = [move for move in opponent_eye_moves if move.creates_life]
    one_eye_moves = [move for move in opponent_eye_moves if not move.creates_life]

    if len(two_eye_moves) == 1:
        return two_eye_moves[0]
    if not two_eye_moves and len(one_eye_moves) == 1:
        return one_eye_moves[0]
    return None


# --- ONE DECISION'S WORTH OF OPTIONS ---
class MoveOptions:
    """
    Lazily computed, memoized candidates for a single decision.
    ----

    The endgame check: if the player has already passed and no territory is contested anymore, moves that needlessly
    extend the game (eyes, patterns, growth) are not offered.
    """

    def __init__(
        self,
        board_state: BoardState,
        player: Color,
        rng: float,
        smart: bool,
        pacer: Pacer,
        use_offline_cycles: bool = True,
    ) -> None:
        self.board = board_state.board
        self.player = player
        self.rng = rng
        self.smart = smart
        self.pacer = pacer
        self.use_offline_cycles = use_offline_cycles

        self.available_spaces = find_disputed_territory(board_state, player, smart)
        self.contested_points = get_disputed_territory_moves(self.board, self.available_spaces)
        self.expansion_moves = get_expansion_move_array(self.board, self.available_spaces)
        self.end_game_available = not self.contested_points and board_state.pass_count > 0

        self._cache: dict[MoveType, Optional[Move]] = {}

    def _retrieve(
        self, move_type: MoveType, compute: Callable[[], Optional[Move]]
    ) -> Optional[Move]:
        if move_type not in self._cache:
            self._cache[move_type] = compute()
            logger.debug("%s option for %s: %s", move_type, self.player, self._cache[move_type])
        return self._cache[move_type]

    async def capture(self) -> Optional[Move]:
        """The surround move, if it takes the last liberty"""
        if MoveType.CAPTURE not in self._cache:
            await self.pacer.wait_cycle(self.use_offline_cycles)
        surround = self.surround()
        return self._retrieve(
            MoveType.CAPTURE,
            lambda: surround if surround and surround.new_liberty_count == 0 else None,
        )

    async def defend_capture(self) -> Optional[Move]:
        """The defend move, if it saves a chain in atari"""
        if MoveType.DEFEND_CAPTURE not in self._cache:
            await self.pacer.wait_cycle(self.use_offline_cycles)
        defend = self.defend()
        return self._retrieve(
            MoveType.DEFEND_CAPTURE,
            lambda: (
                defend
                if defend and defend.old_liberty_count == 1 and (defend.new_liberty_count or 0) > 1
                else None
            ),
        )

    def eye_move(self) -> Optional[Move]:
        return self._retrieve(
            MoveType.EYE_MOVE,
            lambda: None
            if self.end_game_available
            else get_eye_creation_move(self.board, self.player, self.available_spaces),
        )

    def eye_block(self) -> Optional[Move]:
        return self._retrieve(
            MoveType.EYE_BLOCK,
            lambda: None
            if self.end_game_available
            else get_eye_blocking_move(self.board, self.player, self.available_spaces),
        )

    async def pattern(self) -> Optional[Move]:
        if MoveType.PATTERN not in self._cache:
            point = None
            if not self.end_game_available:
                point = await find_any_matched_patterns(
                    self.board, self.player, self.available_spaces, self.smart, self.rng, self.pacer
                )
            self._retrieve(MoveType.PATTERN, lambda: Move(point) if point else None)
        return self._cache[MoveType.PATTERN]

    def growth(self) -> Optional[Move]:
        return self._retrieve(
            MoveType.GROWTH,
            lambda: None
            if self.end_game_available
            else get_growth_move(self.board, self.player, self.available_spaces, self.rng),
        )

    def expansion(self) -> Optional[Move]:
        return self._retrieve(
            MoveType.EXPANSION, lambda: get_expansion_move(self.expansion_moves, self.rng)
        )

    def jump(self) -> Optional[Move]:
        return self._retrieve(
            MoveType.JUMP,
            lambda: get_jump_move(self.board, self.player, self.expansion_moves, self.rng),
        )

    def defend(self) -> Optional[Move]:
        return self._retrieve(
            MoveType.DEFEND,
            lambda: get_defend_move(self.board, self.player, self.available_spaces, self.rng),
        )

    def surround(self) -> Optional[Move]:
        return self._retrieve(
            MoveType.SURROUND,
            lambda: get_surround_move(self.board, self.player, self.available_spaces, self.smart),
        )

    def corner(self) -> Optional[Move]:
        return self._retrieve(MoveType.CORNER, lambda: get_corner_move(self.board))

    def random(self) -> Optional[Move]:
        """Only offered while something is contested: a random move should never replace a pass"""

        def _random_move() -> Optional[Move]:
            if not self.contested_points:
                return None
            point = self.available_spaces[int(self.rng * len(self.available_spaces))]
            return Move(point)

        return self._retrieve(MoveType.RANDOM, _random_move)
