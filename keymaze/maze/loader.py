"""
Reading maze text into a Grid.
"""

from pathlib import Path
from typing import Union

from .grid import Grid


def parse_maze(text: str) -> Grid:
    """Parse maze text, ignoring blank lines at the end."""
    lines = text.splitlines()
    while lines and not lines[-1].strip():
        lines.pop()
    return Grid.from_lines(lines)


def load_maze(path: Union[str, Path]) -> Grid:
    """Load a maze from a UTF-8 text file."""
    return parse_maze(Path(path).read_text(encoding="utf-8"))
