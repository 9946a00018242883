#!/usr/bin/env python3
"""
Key Collection Maze Solver

Finds the fewest steps needed to collect every key in a grid maze where
each gate opens only once its matching key has been collected.
"""

import argparse
import sys

from keymaze.errors import MazeError
from keymaze.maze.grid import Grid
from keymaze.maze.loader import load_maze
from keymaze.solver.config import SolverConfig
from keymaze.solver.solver import KeyCollectionSolver, SolveResult
from keymaze.util.logger import logger, set_verbose

DEMO_MAZE = [
    "########################",
    "#f.D.E.e.C.b.A.@.a.B.c.#",
    "######################.#",
    "#d.....................#",
    "########################",
]


def show_walk(grid: Grid, result: SolveResult) -> None:
    """Print the maze after each collected key."""
    collected = []
    print(grid.render(grid.start.position))
    for key in result.order:
        collected.append(key)
        print()
        print(f"after {key}:")
        print(grid.render(grid.point(key).position, collected))


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Key Collection Maze Solver",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py                     # Solve the built-in demo maze
  python main.py maze.txt            # Solve a maze file
  python main.py maze.txt --workers 4 --progress
        """,
    )

    parser.add_argument("maze", nargs="?", help="Maze text file (default: demo maze)")
    parser.add_argument(
        "--workers", type=int, default=1, help="Threads over first-key branches"
    )
    parser.add_argument(
        "--timeout", type=float, default=None, help="Search budget in milliseconds"
    )
    parser.add_argument(
        "--progress", action="store_true", help="Show path table progress bar"
    )
    parser.add_argument(
        "--show", action="store_true", help="Print the maze after each key"
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable verbose logging"
    )

    args = parser.parse_args()

    if args.verbose:
        set_verbose()

    config = SolverConfig(
        workers=args.workers,
        timeout_ms=args.timeout,
        show_progress=args.progress,
    )

    try:
        grid = load_maze(args.maze) if args.maze else Grid.from_lines(DEMO_MAZE)
        result = KeyCollectionSolver(config).solve(grid)
    except MazeError as e:
        logger.bind(component="solver").error(str(e))
        sys.exit(1)

    if not result.success:
        print("No order collects every key")
        sys.exit(1)

    print(f"Fewest steps to collect all keys: {result.min_cost}")
    print(f"Key order: {''.join(result.order)}")
    if not result.complete:
        print("Search budget ran out; the cost may not be minimal")

    if args.show:
        print()
        show_walk(grid, result)


if __name__ == "__main__":
    main()
