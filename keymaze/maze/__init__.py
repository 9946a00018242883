"""
Grid model for key collection mazes.
"""

from .grid import CellType, Direction, Grid, PointOfInterest
from .loader import load_maze, parse_maze

__all__ = ["CellType", "Direction", "Grid", "PointOfInterest", "load_maze", "parse_maze"]
