"""
Board analysis: everything the AI needs to know about a position.

All functions are pure. They read a Board (or a BoardState for history-aware questions such as move legality)
and return freshly derived structures, never mutating their input.
"""

from typing import TYPE_CHECKING, NamedTuple, Optional

from goai.core.config import EYE_SIZE_CAP, EYE_SIZE_SHARE, NO_CHAIN_LIBERTIES
from goai.core.models import GAME_OVER, PASS, Play
from goai.core.shared_types import Color, PlayType, Validity
from goai.go.board import Board, Chain, Coordinate, Point

if TYPE_CHECKING:
    from goai.go.game_state import BoardState


class Neighbors(NamedTuple):
    north: Optional[Point]
    east: Optional[Point]
    south: Optional[Point]
    west: Optional[Point]


def find_neighbors(board: Board, x: int, y: int) -> Neighbors:
    """The four orthogonal neighbors. Off-board and offline neighbors are None."""
    return Neighbors(
        north=board.point(x, y + 1),
        east=board.point(x + 1, y),
        south=board.point(x, y - 1),
        west=board.point(x - 1, y),
    )


def get_all_chains(board: Board) -> list[Chain]:
    return list(board.chains)


def get_player_neighbors(board: Board, chain: Chain) -> list[Coordinate]:
    """Stones (of either color) touching the chain from the outside"""
    found: dict[Coordinate, None] = {}
    for x, y in chain.points:
        for neighbor in board.neighbors(x, y):
            if neighbor in chain:
                continue
            if board.cell(*neighbor) != Color.EMPTY:
                found[neighbor] = None
    return list(found)


def get_all_neighboring_chains(board: Board, chain: Chain) -> list[Chain]:
    """Distinct stone chains adjacent to the given chain"""
    neighboring: dict[str, Chain] = {}
    for neighbor in get_player_neighbors(board, chain):
        neighbor_chain = board.chain_at(*neighbor)
        if neighbor_chain is not None:
            neighboring[neighbor_chain.id] = neighbor_chain
    return list(neighboring.values())


# --- LIBERTIES ---
def find_effective_liberties_of_new_move(
    board: Board, x: int, y: int, color: Color
) -> list[Coordinate]:
    """
    Liberties the chain would have right after placing a stone on (x, y).
    ----

    Union of the empty neighbors of the point and the liberties of every friendly chain the stone connects to,
    minus the point itself. Captures are not taken into account.
    """
    liberties: dict[Coordinate, None] = {}
    for neighbor in board.neighbors(x, y):
        neighbor_color = board.cell(*neighbor)
        if neighbor_color == Color.EMPTY:
            liberties[neighbor] = None
        elif neighbor_color == color:
            friendly_chain = board.chain_at(*neighbor)
            if friendly_chain is not None:
                liberties.update(dict.fromkeys(friendly_chain.liberties))
    liberties.pop((x, y), None)
    return list(liberties)


def find_neighbor_chain_with_fewest_liberties(
    board: Board, x: int, y: int, color: Color
) -> Optional[Chain]:
    """Among the chains of the given color touching (x, y), the one closest to being captured"""
    adjacent_chains = [
        board.chain_at(*neighbor)
        for neighbor in board.neighbors(x, y)
        if board.cell(*neighbor) == color
    ]
    candidates = [chain for chain in adjacent_chains if chain is not None]
    if not candidates:
        return None
    return min(candidates, key=lambda chain: len(chain.liberties))


def find_min_liberty_count_of_adjacent_chains(
    board: Board, x: int, y: int, color: Color
) -> int:
    chain = find_neighbor_chain_with_fewest_liberties(board, x, y, color)
    return len(chain.liberties) if chain else NO_CHAIN_LIBERTIES


# --- EYES ---
class EyeCandidate(NamedTuple):
    chain: Chain
    neighbors: list[Chain]


def max_eye_size(board: Board) -> float:
    node_count = sum(1 for _ in board.live_points())
    return min(node_count * EYE_SIZE_SHARE, EYE_SIZE_CAP)


def get_all_potential_eyes(
    board: Board, color: Color, max_size: Optional[float] = None
) -> list[EyeCandidate]:
    """Empty regions, small enough to be an eye, whose only stone neighbors are of the given color"""
    size_limit = max_size if max_size is not None else max_eye_size(board)
    candidates: list[EyeCandidate] = []
    for chain in board.chains:
        if chain.color != Color.EMPTY or len(chain) > size_limit:
            continue
        neighboring_chains = get_all_neighboring_chains(board, chain)
        neighbor_colors = {neighbor.color for neighbor in neighboring_chains}
        if neighbor_colors == {color}:
            candidates.append(EyeCandidate(chain, neighboring_chains))
    return candidates


def find_furthest_points_of_chain(chain: Chain) -> dict[str, int]:
    xs = [x for x, _ in chain.points]
    ys = [y for _, y in chain.points]
    return {"north": max(ys), "east": max(xs), "south": min(ys), "west": min(xs)}


def find_neighboring_chains_that_fully_encircle_empty_space(
    board: Board, candidate: Chain, neighbor_chains: list[Chain]
) -> list[Chain]:
    """
    When several chains border an empty region, find those that surround it on their own.
    ----

    For each bordering chain: remove all the other bordering chains from the board. If the (now larger) empty region
    is only bordered by that one chain, it fully encircles the original region.
    """
    board_max = board.size - 1
    candidate_spread = find_furthest_points_of_chain(candidate)
    example_point = candidate.points[0]

    encircling: list[Chain] = []
    for index, neighbor_chain in enumerate(neighbor_chains):
        # cheap bounding box check before building an evaluation board
        spread = find_furthest_points_of_chain(neighbor_chain)
        could_wrap_north = spread["north"] > candidate_spread["north"] or (
            candidate_spread["north"] == board_max and spread["north"] == board_max
        )
        could_wrap_east = spread["east"] > candidate_spread["east"] or (
            candidate_spread["east"] == board_max and spread["east"] == board_max
        )
        could_wrap_south = spread["south"] < candidate_spread["south"] or (
            candidate_spread["south"] == 0 and spread["south"] == 0
        )
        could_wrap_west = spread["west"] < candidate_spread["west"] or (
            candidate_spread["west"] == 0 and spread["west"] == 0
        )
        if not (could_wrap_north and could_wrap_east and could_wrap_south and could_wrap_west):
            continue

        other_points = {
            point
            for other_index, other in enumerate(neighbor_chains)
            if other_index != index
            for point in other.points
        }
        evaluation_board = board.without_stones(other_points)
        grown_region = evaluation_board.chain_at(*example_point)
        if grown_region is None:
            continue
        # neighbors are judged against the original board: the removed stones are part of the region now
        if len(get_all_neighboring_chains(board, grown_region)) == 1:
            encircling.append(neighbor_chain)
    return encircling


def get_all_eyes_by_chain_id(board: Board, color: Color) -> dict[str, list[Chain]]:
    """Map of chain id -> the empty regions that are true eyes of that chain"""
    eyes: dict[str, list[Chain]] = {}
    for candidate in get_all_potential_eyes(board, color):
        if not candidate.neighbors:
            continue

        # If only one chain surrounds the empty space, it is a true eye
        if len(candidate.neighbors) == 1:
            eyes.setdefault(candidate.neighbors[0].id, []).append(candidate.chain)
            continue

        # If any chain fully encircles the empty space (even if there are other chains encircled as well), the eye is true
        for encircling_chain in find_neighboring_chains_that_fully_encircle_empty_space(
            board, candidate.chain, candidate.neighbors
        ):
            eyes.setdefault(encircling_chain.id, []).append(candidate.chain)
    return eyes


def get_all_eyes(
    board: Board, color: Color, eyes_by_chain: Optional[dict[str, list[Chain]]] = None
) -> list[list[Chain]]:
    """Eyes grouped per owning chain. A group with two or more entries is alive."""
    eyes = eyes_by_chain if eyes_by_chain is not None else get_all_eyes_by_chain_id(board, color)
    return list(eyes.values())


# --- MOVES ---
def evaluate_move_result(board: Board, x: int, y: int, color: Color) -> Board:
    """Simulate the placement: put the stone down and remove opponent chains left without liberties"""
    placed = board.with_stone(x, y, color)
    opponent = color.opposite()
    captured = {
        point
        for chain in placed.chains
        if chain.color == opponent and not chain.liberties
        for point in chain.points
    }
    return placed.without_stones(captured)


def evaluate_if_move_is_valid(
    board_state: "BoardState", x: int, y: int, color: Color, short_circuit: bool = True
) -> Validity:
    """
    Check a placement against the rules
    ----

    1. the game must still be going, and it must be this color's turn
    2. the point must be a live, empty node
    3. the stone must end up with at least one liberty (after captures)
    4. the resulting board may not repeat any earlier board of this game

    With short_circuit, a point with an empty neighbor is accepted without simulating it: it can neither be
    suicide nor (since nothing gets captured) repeat an earlier board.
    """
    board = board_state.board
    if board_state.previous_player is None:
        return Validity.GAME_OVER
    if color == board_state.previous_player:
        return Validity.NOT_YOUR_TURN

    cell = board.cell(x, y)
    if cell is None:
        return Validity.POINT_BROKEN
    if cell != Color.EMPTY:
        return Validity.POINT_NOT_EMPTY

    has_empty_neighbor = any(
        board.cell(*neighbor) == Color.EMPTY for neighbor in board.neighbors(x, y)
    )
    if short_circuit and has_empty_neighbor:
        return Validity.VALID

    result = evaluate_move_result(board, x, y, color)
    placed_chain = result.chain_at(x, y)
    if placed_chain is None or not placed_chain.liberties:
        return Validity.NO_SUICIDE
    if result.snapshot() in board_state.previous_boards:
        return Validity.BOARD_REPEATED
    return Validity.VALID


def get_all_valid_moves(board_state: "BoardState", color: Color) -> list[Coordinate]:
    return [
        (x, y)
        for x, y in board_state.board.live_points()
        if evaluate_if_move_is_valid(board_state, x, y, color) == Validity.VALID
    ]


def find_disputed_territory(
    board_state: "BoardState", color: Color, exclude_friendly_eyes: bool = False
) -> list[Coordinate]:
    """
    The points worth considering at all: every valid move for the color.
    ---
    With exclude_friendly_eyes (the "smart" flag), points inside the eyes of the color's living groups are left out,
    as filling your own eyes is how living groups die.
    """
    valid_moves = get_all_valid_moves(board_state, color)
    if not exclude_friendly_eyes:
        return valid_moves

    friendly_eye_points = {
        point
        for eyes in get_all_eyes(board_state.board, color)
        if len(eyes) >= 2
        for eye in eyes
        for point in eye.points
    }
    return [move for move in valid_moves if move not in friendly_eye_points]


def get_previous_move_details(board_state: "BoardState") -> Play:
    """
    Reconstruct the last play by comparing the board against the latest snapshot in the history.
    ---
    A new stone of the previous player means a move, no new stone means a pass.
    """
    previous_player = board_state.previous_player
    if previous_player is None:
        return GAME_OVER
    if not board_state.previous_boards:
        return PASS

    prior = board_state.previous_boards[-1]
    board = board_state.board
    for index, (x, y) in enumerate(
        (x, y) for x in range(board.size) for y in range(board.size)
    ):
        if prior[index] == "." and board.cell(x, y) == previous_player:
            return Play(PlayType.MOVE, x, y)
    return PASS
