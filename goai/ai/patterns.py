"""
Local shape matching on 3x3 neighborhoods.

Templates are written relative to the player to move, not to black/white:
* X: the player's stone
* O: the opponent's stone
* x: anything except an opponent's stone (own stone, empty, or the edge of the board)
* o: anything except the player's stone
* .: empty
* " ": the edge of the board (or an offline node)
* ?: anything
"""

from functools import lru_cache
from typing import Callable, Optional

from goai.ai.pacing import Pacer
from goai.core.shared_types import Color
from goai.go.analysis import find_effective_liberties_of_new_move
from goai.go.board import EDGE, Board, Cell, Coordinate

Pattern = tuple[str, str, str]
Neighborhood = tuple[tuple[Cell, ...], ...]

THREE_BY_THREE_PATTERNS: tuple[Pattern, ...] = (
    # hane pattern - enclosing hane
    ("XOX", "...", "???"),
    # hane pattern - non-cutting hane
    ("XO.", "...", "?.?"),
    # hane pattern - magari
    ("XO?", "X..", "o.?"),
    # generic pattern - katatsuke or diagonal attachment; similar to magari
    (".O.", "X..", "..."),
    # cut1 pattern (kiri) - unprotected cut
    ("XO?", "O.x", "?x?"),
    # cut1 pattern (kiri) - peeped cut
    ("XO?", "O.X", "???"),
    # cut2 pattern (de)
    ("?X?", "O.O", "xxx"),
    # cut keima
    ("OX?", "x.O", "???"),
    # side pattern - chase
    ("X.?", "O.?", "   "),
    # side pattern - block side cut
    ("OX?", "X.O", "   "),
    # side pattern - block side connection
    ("?X?", "o.O", "   "),
    # side pattern - sagari
    ("?XO", "o.o", "   "),
    # side pattern - cut
    ("?OX", "X.O", "   "),
)


# --- SYMMETRIES ---
def rotate_90_degrees(pattern: Pattern) -> Pattern:
    """Rotate a 3x3 pattern 90 degrees clockwise."""
    return (
        f"{pattern[2][0]}{pattern[1][0]}{pattern[0][0]}",
        f"{pattern[2][1]}{pattern[1][1]}{pattern[0][1]}",
        f"{pattern[2][2]}{pattern[1][2]}{pattern[0][2]}",
    )


def vertical_mirror(pattern: Pattern) -> Pattern:
    return (pattern[2], pattern[1], pattern[0])


def horizontal_mirror(pattern: Pattern) -> Pattern:
    return (pattern[0][::-1], pattern[1][::-1], pattern[2][::-1])


@lru_cache(maxsize=1)
def expand_all_patterns() -> tuple[Pattern, ...]:
    """
    Every template under rotation and mirroring. Calculated once.
    ---
    Symmetric templates produce duplicates, which are kept.
    """
    rotated_once = [rotate_90_degrees(p) for p in THREE_BY_THREE_PATTERNS]
    rotated_twice = [rotate_90_degrees(p) for p in rotated_once]
    rotated_thrice = [rotate_90_degrees(p) for p in rotated_twice]
    rotations = [*THREE_BY_THREE_PATTERNS, *rotated_once, *rotated_twice, *rotated_thrice]

    mirrored = [*rotations, *(vertical_mirror(p) for p in rotations)]
    return (*mirrored, *(horizontal_mirror(p) for p in mirrored))


# --- MATCHING ---
def get_neighborhood(board: Board, x: int, y: int) -> Neighborhood:
    """The point and its 8 surrounding cells, EDGE where off the board"""
    return tuple(
        tuple(board.cell(x + dx, y + dy) for dy in (-1, 0, 1)) for dx in (-1, 0, 1)
    )


SymbolRule = Callable[[Cell, Color], bool]

SYMBOL_RULES: dict[str, SymbolRule] = {
    "X": lambda cell, player: cell == player,
    "O": lambda cell, player: cell == player.opposite(),
    "x": lambda cell, player: cell != player.opposite(),
    "o": lambda cell, player: cell != player,
    ".": lambda cell, player: cell == Color.EMPTY,
    " ": lambda cell, player: cell is EDGE,
    "?": lambda cell, player: True,
}


def matches_symbol(symbol: str, cell: Cell, player: Color) -> bool:
    rule = SYMBOL_RULES.get(symbol)
    return rule(cell, player) if rule else False


def check_match(neighborhood: Neighborhood, pattern: Pattern, player: Color) -> bool:
    """True only if every one of the 9 cells fits its template character"""
    return all(
        matches_symbol(pattern[row][col], neighborhood[row][col], player)
        for row in range(3)
        for col in range(3)
    )


def matches_any_pattern(neighborhood: Neighborhood, player: Color) -> bool:
    return any(check_match(neighborhood, pattern, player) for pattern in expand_all_patterns())


async def find_any_matched_patterns(
    board: Board,
    player: Color,
    available_spaces: list[Coordinate],
    smart: bool,
    rng: float,
    pacer: Pacer,
) -> Optional[Coordinate]:
    """
    Scan the whole board for points matching any expanded pattern.
    ----

    Only available spaces qualify. In smart mode, the new stone must also keep more than one liberty.
    Yields to the scheduler after every row.
    """
    available = set(available_spaces)
    moves: list[Coordinate] = []
    for x in range(board.size):
        for y in range(board.size):
            if (x, y) not in available:
                continue
            if not matches_any_pattern(get_neighborhood(board, x, y), player):
                continue
            if smart and len(find_effective_liberties_of_new_move(board, x, y, player)) <= 1:
                continue
            moves.append((x, y))
        await pacer.scan_pause()

    if not moves:
        return None
    return moves[int(rng * len(moves))]
