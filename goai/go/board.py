"""
The Go board: an immutable grid of stones, plus the chains (connected groups) derived from it.

The grid is indexed board[x][y]. A cell is a stone color, Color.EMPTY, or None for an offline node.
Looking up anything off the board or offline gives back the EDGE sentinel, which callers must keep
apart from an empty (playable) cell.
"""

from dataclasses import dataclass, field
from functools import cached_property
from typing import Iterator, Optional, Self

from goai.core.exceptions import InvalidRequestError
from goai.core.shared_types import Color

Coordinate = tuple[int, int]
Cell = Optional[Color]

EDGE: Cell = None

# north, east, south, west
DIRECTIONS: tuple[Coordinate, ...] = ((0, 1), (1, 0), (0, -1), (-1, 0))

SIMPLE_BOARD_TO_CELL: dict[str, Cell] = {
    "X": Color.BLACK,
    "O": Color.WHITE,
    ".": Color.EMPTY,
    "#": None,
}
CELL_TO_SIMPLE_BOARD: dict[Cell, str] = {
    value: key for key, value in SIMPLE_BOARD_TO_CELL.items()
}


@dataclass(frozen=True)
class Chain:
    """A maximal set of same-color, adjacency-connected points. Empty regions are chains too."""

    id: str
    color: Color
    points: tuple[Coordinate, ...]
    liberties: tuple[Coordinate, ...]

    def __len__(self) -> int:
        return len(self.points)

    def __contains__(self, coordinate: object) -> bool:
        return coordinate in self.points


@dataclass(frozen=True)
class Point:
    """What a single cell looks like once chains have been worked out"""

    x: int
    y: int
    color: Color
    chain: str
    liberties: tuple[Coordinate, ...] = field(default=())

    @property
    def coordinates(self) -> Coordinate:
        return (self.x, self.y)


@dataclass(frozen=True)
class Board:
    grid: tuple[tuple[Cell, ...], ...]

    @classmethod
    def empty(cls, size: int) -> Self:
        return cls(tuple(tuple(Color.EMPTY for _ in range(size)) for _ in range(size)))

    @classmethod
    def from_simple_board(cls, rows: list[str]) -> Self:
        """
        Construct a board from a list of strings, one string per x column.
        ---
        ex. ["XO...", ".....", ...] has a black stone on (0,0) and a white stone on (0,1).

        * X: black stone
        * O: white stone
        * .: empty
        * #: offline node (behaves like the edge of the board)
        """
        size = len(rows)
        if size == 0 or any(len(row) != size for row in rows):
            raise InvalidRequestError(
                f"A board must be square. Got {size} columns of lengths {[len(row) for row in rows]}"
            )
        try:
            grid = tuple(
                tuple(SIMPLE_BOARD_TO_CELL[character] for character in row)
                for row in rows
            )
        except KeyError as error:
            raise InvalidRequestError(
                f"Cannot interpret {error.args[0]!r} as a board cell. Use one of {''.join(SIMPLE_BOARD_TO_CELL)}"
            ) from error
        return cls(grid)

    def to_simple_board(self) -> list[str]:
        return ["".join(CELL_TO_SIMPLE_BOARD[cell] for cell in column) for column in self.grid]

    def snapshot(self) -> str:
        """Single string form, used for the board history."""
        return "".join(self.to_simple_board())

    @property
    def size(self) -> int:
        return len(self.grid)

    def is_on_board(self, x: int, y: int) -> bool:
        return 0 <= x < self.size and 0 <= y < self.size

    def cell(self, x: int, y: int) -> Cell:
        """Color at (x, y), or EDGE if off the board / offline"""
        if not self.is_on_board(x, y):
            return EDGE
        return self.grid[x][y]

    def live_points(self) -> Iterator[Coordinate]:
        """All coordinates that are not offline"""
        for x, column in enumerate(self.grid):
            for y, cell in enumerate(column):
                if cell is not None:
                    yield (x, y)

    def neighbors(self, x: int, y: int) -> Iterator[Coordinate]:
        """Orthogonal neighbors that are live nodes"""
        for dx, dy in DIRECTIONS:
            if self.cell(x + dx, y + dy) is not EDGE:
                yield (x + dx, y + dy)

    def with_stone(self, x: int, y: int, color: Color) -> Self:
        """New board with the cell set. No capturing happens here."""
        columns = [list(column) for column in self.grid]
        columns[x][y] = color
        return type(self)(tuple(tuple(column) for column in columns))

    def without_stones(self, coordinates: set[Coordinate]) -> Self:
        if not coordinates:
            return self
        return type(self)(
            tuple(
                tuple(
                    Color.EMPTY if (x, y) in coordinates and cell is not None else cell
                    for y, cell in enumerate(column)
                )
                for x, column in enumerate(self.grid)
            )
        )

    # --- CHAINS ---
    @cached_property
    def chains(self) -> tuple[Chain, ...]:
        """Flood fill every live node into chains (stone groups and empty regions)"""
        found: list[Chain] = []
        visited: set[Coordinate] = set()
        for start in self.live_points():
            if start in visited:
                continue
            color = self.grid[start[0]][start[1]]
            if color is None:
                continue
            members = [start]
            liberties: dict[Coordinate, None] = {}
            visited.add(start)
            frontier = [start]
            while frontier:
                x, y = frontier.pop()
                for neighbor in self.neighbors(x, y):
                    neighbor_color = self.cell(*neighbor)
                    if neighbor_color == color and neighbor not in visited:
                        visited.add(neighbor)
                        members.append(neighbor)
                        frontier.append(neighbor)
                    elif color != Color.EMPTY and neighbor_color == Color.EMPTY:
                        liberties[neighbor] = None
            found.append(
                Chain(
                    id=f"{start[0]},{start[1]}",
                    color=color,
                    points=tuple(sorted(members)),
                    liberties=tuple(sorted(liberties)),
                )
            )
        return tuple(found)

    @cached_property
    def _chain_lookup(self) -> dict[Coordinate, Chain]:
        return {point: chain for chain in self.chains for point in chain.points}

    def chain_at(self, x: int, y: int) -> Optional[Chain]:
        return self._chain_lookup.get((x, y))

    def point(self, x: int, y: int) -> Optional[Point]:
        """Full view of a cell. None (the edge) when off the board or offline."""
        chain = self.chain_at(x, y)
        if chain is None:
            return None
        return Point(x, y, chain.color, chain.id, chain.liberties)
