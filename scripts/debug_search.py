#!/usr/bin/env python3
"""
Debug script for the key collection solver - dumps every intermediate table.
"""

import argparse
import sys
from pathlib import Path

# Add parent directory to path to import keymaze modules
sys.path.insert(0, str(Path(__file__).parent.parent))

from keymaze.maze.loader import load_maze
from keymaze.solver.dependencies import derive_dependencies
from keymaze.solver.paths import PathTable
from keymaze.solver.search import OrderSearch, replay_order
from keymaze.util.logger import set_verbose


def main():
    """Run the solver stage by stage with verbose output."""
    parser = argparse.ArgumentParser(description="Debug the key collection solver")
    parser.add_argument("maze", help="Maze text file")
    parser.add_argument(
        "--timeout", type=int, default=None, help="Search budget in milliseconds"
    )
    args = parser.parse_args()

    set_verbose()

    grid = load_maze(args.maze)
    print(f"=== Maze {grid.width}x{grid.height} ===")
    print(grid)
    print(f"Keys: {''.join(grid.keys)}")
    print(f"Gates: {''.join(grid.gates)}")
    print()

    table = PathTable.build(grid, show_progress=True)
    print(table.dump())
    print()

    dependencies = derive_dependencies(table.paths_from(grid.start.symbol), table)
    print("=== Dependencies ===")
    for key in grid.keys:
        print(f"  {key}: {''.join(sorted(dependencies[key])) or '-'}")
    print()

    search = OrderSearch(table, dependencies, timeout_ms=args.timeout)
    min_cost, order = search.search()

    print("=== Result ===")
    print(f"Nodes explored: {search.stats.nodes_explored}")
    print(f"Branches pruned: {search.stats.branches_pruned}")
    print(f"Timed out: {search.stats.timed_out}")
    if order is None:
        print("No order collects every key")
        return

    print(f"Min cost: {min_cost} for order {''.join(order)}")
    print(f"Replayed cost: {replay_order(table, order)}")


if __name__ == "__main__":
    main()
