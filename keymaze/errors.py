"""
Exceptions raised by the maze loader and solver.
"""

from typing import Iterable


class MazeError(Exception):
    """Base class for all maze errors."""


class MalformedMazeError(MazeError):
    """Structural problem with the maze input."""


class CyclicDependencyError(MazeError):
    """Keys that can only be reached once they are already held."""

    def __init__(self, keys: Iterable[str]):
        self.keys = sorted(keys)
        super().__init__(f"Cyclic key dependency between: {', '.join(self.keys)}")


class InvalidOrderError(MazeError):
    """A key order that crosses a locked gate or an unreachable leg."""
