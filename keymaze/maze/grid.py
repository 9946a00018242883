from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, List, Optional, Sequence, Set, Tuple

import numpy as np

from ..errors import MalformedMazeError

START_SYMBOL = "@"
WALL_SYMBOL = "#"
FREE_SYMBOL = "."
OPENED_SYMBOL = "*"


class CellType(Enum):
    FREE = 0
    WALL = 1
    START = 2
    KEY = 3
    GATE = 4


class Direction(Enum):
    # Declaration order is the neighbour order: up, right, down, left.
    UP = (0, -1)
    RIGHT = (1, 0)
    DOWN = (0, 1)
    LEFT = (-1, 0)

    @property
    def dx(self) -> int:
        return self.value[0]

    @property
    def dy(self) -> int:
        return self.value[1]


def is_key_symbol(symbol: str) -> bool:
    return len(symbol) == 1 and "a" <= symbol <= "z"


def is_gate_symbol(symbol: str) -> bool:
    return len(symbol) == 1 and "A" <= symbol <= "Z"


def cell_type_for(symbol: str) -> CellType:
    if symbol == WALL_SYMBOL:
        return CellType.WALL
    if symbol == FREE_SYMBOL:
        return CellType.FREE
    if symbol == START_SYMBOL:
        return CellType.START
    if is_key_symbol(symbol):
        return CellType.KEY
    if is_gate_symbol(symbol):
        return CellType.GATE
    raise MalformedMazeError(f"Unknown maze character {symbol!r}")


@dataclass(frozen=True)
class PointOfInterest:
    """The start, a key or a gate at a fixed coordinate."""

    symbol: str
    x: int
    y: int
    ordinal: int

    @property
    def position(self) -> Tuple[int, int]:
        return (self.x, self.y)

    @property
    def is_start(self) -> bool:
        return self.symbol == START_SYMBOL

    @property
    def is_key(self) -> bool:
        return is_key_symbol(self.symbol)

    @property
    def is_gate(self) -> bool:
        return is_gate_symbol(self.symbol)


class Grid:
    """Immutable walkable/blocked grid with its points of interest.

    Build one with ``Grid.from_lines``. Coordinates are ``(x, y)``: column
    first, row second, origin at the top-left corner.
    """

    def __init__(self, grid: np.ndarray, points: Dict[str, Tuple[int, int]]):
        self.height, self.width = grid.shape
        self.grid = grid
        self.grid.flags.writeable = False

        # Start first, then keys, then gates, each in symbol order.
        ordered = sorted(
            points,
            key=lambda s: (s != START_SYMBOL, not is_key_symbol(s), s),
        )
        self._points: Dict[str, PointOfInterest] = {
            symbol: PointOfInterest(symbol, *points[symbol], ordinal=i)
            for i, symbol in enumerate(ordered)
        }
        self._by_position: Dict[Tuple[int, int], PointOfInterest] = {
            poi.position: poi for poi in self._points.values()
        }
        self.keys: List[str] = [s for s in ordered if is_key_symbol(s)]
        self.gates: List[str] = [s for s in ordered if is_gate_symbol(s)]
        self.key_bits: Dict[str, int] = {key: i for i, key in enumerate(self.keys)}

    @classmethod
    def from_lines(cls, lines: Sequence[str]) -> "Grid":
        """Validate rows of maze characters and build a grid.

        Raises:
            MalformedMazeError: on ragged rows, a missing or repeated start,
                unknown characters, repeated key/gate letters, or a gate
                whose key is not in the maze.
        """
        rows = [line.rstrip("\r\n") for line in lines]
        if not rows or not rows[0]:
            raise MalformedMazeError("Maze is empty")

        width = len(rows[0])
        for y, row in enumerate(rows):
            if len(row) != width:
                raise MalformedMazeError(
                    f"Row {y} has width {len(row)}, expected {width}"
                )

        grid = np.zeros((len(rows), width), dtype=int)
        points: Dict[str, Tuple[int, int]] = {}
        starts = 0

        for y, row in enumerate(rows):
            for x, symbol in enumerate(row):
                cell_type = cell_type_for(symbol)
                grid[y, x] = cell_type.value
                if cell_type == CellType.START:
                    starts += 1
                if cell_type in (CellType.START, CellType.KEY, CellType.GATE):
                    if symbol in points and cell_type != CellType.START:
                        raise MalformedMazeError(
                            f"Symbol {symbol!r} appears more than once"
                        )
                    points[symbol] = (x, y)

        if starts != 1:
            raise MalformedMazeError(f"Expected exactly one start, found {starts}")

        unmatched = sorted(
            s for s in points if is_gate_symbol(s) and s.lower() not in points
        )
        if unmatched:
            raise MalformedMazeError(
                f"Gates without a matching key: {', '.join(unmatched)}"
            )

        return cls(grid, points)

    def is_valid_position(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def get_cell_type(self, x: int, y: int) -> Optional[CellType]:
        if not self.is_valid_position(x, y):
            return None
        return CellType(self.grid[y, x])

    def is_walkable(self, x: int, y: int) -> bool:
        # Gates count as walkable: locking is enforced by the search.
        cell_type = self.get_cell_type(x, y)
        return cell_type is not None and cell_type != CellType.WALL

    def get_neighbors(self, x: int, y: int) -> List[Tuple[int, int]]:
        neighbors = []
        for direction in Direction:
            nx, ny = x + direction.dx, y + direction.dy
            if self.is_walkable(nx, ny):
                neighbors.append((nx, ny))
        return neighbors

    @property
    def start(self) -> PointOfInterest:
        return self._points[START_SYMBOL]

    def points_of_interest(self) -> List[PointOfInterest]:
        """All points of interest in ordinal order."""
        return sorted(self._points.values(), key=lambda poi: poi.ordinal)

    def point(self, symbol: str) -> PointOfInterest:
        return self._points[symbol]

    def point_at(self, x: int, y: int) -> Optional[PointOfInterest]:
        return self._by_position.get((x, y))

    def symbol_at(self, x: int, y: int) -> str:
        poi = self.point_at(x, y)
        if poi is not None:
            return poi.symbol
        return WALL_SYMBOL if self.grid[y, x] == CellType.WALL.value else FREE_SYMBOL

    def render(
        self,
        position: Optional[Tuple[int, int]] = None,
        collected: Iterable[str] = (),
    ) -> str:
        """Draw the maze as text.

        The current position is drawn as ``@`` (and the original start as
        ``.``), collected keys and the gates they opened as ``*``.
        """
        opened: Set[str] = set()
        for key in collected:
            opened.add(key)
            opened.add(key.upper())

        rows = []
        for y in range(self.height):
            row = []
            for x in range(self.width):
                symbol = self.symbol_at(x, y)
                if position is not None and (x, y) == position:
                    row.append(START_SYMBOL)
                elif position is not None and symbol == START_SYMBOL:
                    row.append(FREE_SYMBOL)
                elif symbol in opened:
                    row.append(OPENED_SYMBOL)
                else:
                    row.append(symbol)
            rows.append("".join(row))
        return "\n".join(rows)

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        return (
            f"Grid({self.width}x{self.height}, keys={''.join(self.keys)}, "
            f"gates={''.join(self.gates)})"
        )
