"""
Solver for collecting every key in a gated grid maze.

Computes shortest paths between all points of interest, derives which
keys each key depends on, then runs a branch-and-bound search over
collection orders.
"""

from .config import SolverConfig
from .dependencies import close_dependencies, derive_dependencies, direct_dependencies
from .paths import Path, PathTable, shortest_paths
from .search import BestSolution, OrderSearch, SearchState, replay_order
from .solver import KeyCollectionSolver, SolveResult, solve_maze

__all__ = [
    "SolverConfig",
    "KeyCollectionSolver",
    "SolveResult",
    "solve_maze",
    "Path",
    "PathTable",
    "shortest_paths",
    "direct_dependencies",
    "close_dependencies",
    "derive_dependencies",
    "BestSolution",
    "OrderSearch",
    "SearchState",
    "replay_order",
]
