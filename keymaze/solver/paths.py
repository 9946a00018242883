"""
Shortest paths between every pair of points of interest.

Gates are treated as open while measuring distances; whether a gate can
actually be crossed is decided later by the order search.
"""

from collections import deque
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from tqdm import tqdm

from ..maze.grid import Grid, PointOfInterest, is_gate_symbol, is_key_symbol
from ..util.logger import logger

Position = Tuple[int, int]


@dataclass(frozen=True)
class Path:
    """Shortest route from one point of interest to another.

    ``steps`` excludes the source cell and ends on the target cell, so its
    length is the cost. ``traversed`` lists the symbols passed strictly
    between source and target, in walking order.
    """

    source: str
    target: str
    steps: Tuple[Position, ...]
    traversed: Tuple[str, ...]

    @property
    def cost(self) -> int:
        return len(self.steps)

    @property
    def gates(self) -> List[str]:
        return [s for s in self.traversed if is_gate_symbol(s)]

    @property
    def keys(self) -> List[str]:
        return [s for s in self.traversed if is_key_symbol(s)]


def shortest_paths(grid: Grid, root: PointOfInterest) -> Dict[str, Path]:
    """Breadth-first search from ``root`` over every walkable cell.

    Returns a path to each other reachable point of interest, keyed by
    symbol. Unreachable points are left out.
    """
    parents: Dict[Position, Optional[Position]] = {root.position: None}
    queue = deque([root.position])

    while queue:
        x, y = queue.popleft()
        for neighbor in grid.get_neighbors(x, y):
            if neighbor not in parents:
                parents[neighbor] = (x, y)
                queue.append(neighbor)

    paths: Dict[str, Path] = {}
    for poi in grid.points_of_interest():
        if poi.symbol == root.symbol or poi.position not in parents:
            continue

        steps: List[Position] = []
        traversed: List[str] = []
        current = poi.position
        while current != root.position:
            steps.append(current)
            if current != poi.position:
                passed = grid.point_at(*current)
                if passed is not None:
                    traversed.append(passed.symbol)
            current = parents[current]

        steps.reverse()
        traversed.reverse()
        paths[poi.symbol] = Path(root.symbol, poi.symbol, tuple(steps), tuple(traversed))

    return paths


class PathTable:
    """Shortest paths for every ordered pair of points of interest.

    Paths are stored in a square list indexed by point ordinal; a missing
    route is ``None``.
    """

    def __init__(self, grid: Grid, paths: List[List[Optional[Path]]]):
        self.grid = grid
        self._paths = paths

    @classmethod
    def build(cls, grid: Grid, show_progress: bool = False) -> "PathTable":
        log = logger.bind(component="paths")
        points = grid.points_of_interest()
        paths: List[List[Optional[Path]]] = [[None] * len(points) for _ in points]

        with tqdm(
            total=len(points),
            desc="Shortest paths",
            unit="root",
            leave=False,
            ncols=100,
            disable=not show_progress,
        ) as pbar:
            for root in points:
                for symbol, path in shortest_paths(grid, root).items():
                    paths[root.ordinal][grid.point(symbol).ordinal] = path
                pbar.update(1)

        table = cls(grid, paths)
        log.debug(
            f"Computed {table.route_count()} routes between {len(points)} points"
        )
        return table

    def get(self, source: str, target: str) -> Optional[Path]:
        return self._paths[self.grid.point(source).ordinal][
            self.grid.point(target).ordinal
        ]

    def paths_from(self, source: str) -> Dict[str, Path]:
        row = self._paths[self.grid.point(source).ordinal]
        return {path.target: path for path in row if path is not None}

    def route_count(self) -> int:
        return sum(1 for row in self._paths for path in row if path is not None)

    def dump(self) -> str:
        """Readable listing of every route, grouped by source."""
        lines = []
        for poi in self.grid.points_of_interest():
            lines.append(f"--- Paths from: {poi.symbol} ---")
            for target, path in sorted(self.paths_from(poi.symbol).items()):
                through = "".join(path.traversed) or "-"
                lines.append(f"  {poi.symbol} -> {target}: {path.cost} via {through}")
        return "\n".join(lines)
