"""
Key collection solver: shortest paths, key dependencies, then order search.
"""

import math
import time
from dataclasses import dataclass
from typing import List, Optional, Sequence

from ..maze.grid import Grid
from ..util.logger import logger
from .config import SolverConfig
from .dependencies import derive_dependencies
from .paths import PathTable
from .search import BestSolution, OrderSearch


@dataclass
class SolveResult:
    """Result of solving a maze."""

    min_cost: Optional[int]
    order: List[str]
    nodes_explored: int
    time_taken_ms: float
    success: bool
    complete: bool  # False when the search budget ran out


class KeyCollectionSolver:
    """Finds the fewest steps that collect every key in a maze."""

    def __init__(self, config: Optional[SolverConfig] = None):
        """Initialize solver.

        Args:
            config: Solver configuration, defaults to ``SolverConfig()``
        """
        self.config = config if config is not None else SolverConfig()
        self.logger = logger.bind(component="solver")

    def solve(self, grid: Grid) -> SolveResult:
        """Find the cheapest key collection order.

        Args:
            grid: Validated maze

        Returns:
            SolveResult, with ``success=False`` when no order collects
            every key

        Raises:
            CyclicDependencyError: if keys depend on each other in a loop
        """
        start_time = time.time()

        path_table = PathTable.build(grid, show_progress=self.config.show_progress)
        dependencies = derive_dependencies(
            path_table.paths_from(grid.start.symbol), path_table
        )

        best = BestSolution()
        if self.config.initial_bound is not None:
            best.min_cost = self.config.initial_bound

        search = OrderSearch(
            path_table, dependencies, best=best, timeout_ms=self.config.timeout_ms
        )
        min_cost, order = search.search(workers=self.config.workers)

        elapsed_ms = (time.time() - start_time) * 1000
        success = order is not None and not math.isinf(min_cost)
        result = SolveResult(
            min_cost=int(min_cost) if success else None,
            order=list(order) if success else [],
            nodes_explored=search.stats.nodes_explored,
            time_taken_ms=elapsed_ms,
            success=success,
            complete=not search.stats.timed_out,
        )

        if success:
            self.logger.info(
                f"Collected {len(grid.keys)} keys in {result.min_cost} steps "
                f"({result.nodes_explored} nodes, {elapsed_ms:.1f}ms)"
            )
        else:
            self.logger.info(
                f"No order collects all {len(grid.keys)} keys "
                f"({result.nodes_explored} nodes, {elapsed_ms:.1f}ms)"
            )
        return result


def solve_maze(
    lines: Sequence[str], config: Optional[SolverConfig] = None
) -> SolveResult:
    """Load a maze from rows of characters and solve it."""
    return KeyCollectionSolver(config).solve(Grid.from_lines(lines))
