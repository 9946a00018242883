import numpy as np
import pytest

from keymaze.errors import MalformedMazeError
from keymaze.maze.grid import CellType, Direction, Grid

CORRIDOR = [
    "#########",
    "#b.A.@.a#",
    "#########",
]


class TestGridLoading:
    def test_grid_creation(self):
        grid = Grid.from_lines(CORRIDOR)
        assert grid.width == 9
        assert grid.height == 3
        assert grid.grid.shape == (3, 9)
        assert np.all(grid.grid[0] == CellType.WALL.value)

    def test_cell_types(self):
        grid = Grid.from_lines(CORRIDOR)
        assert grid.get_cell_type(0, 0) == CellType.WALL
        assert grid.get_cell_type(1, 1) == CellType.KEY
        assert grid.get_cell_type(2, 1) == CellType.FREE
        assert grid.get_cell_type(3, 1) == CellType.GATE
        assert grid.get_cell_type(5, 1) == CellType.START
        assert grid.get_cell_type(9, 1) is None

    def test_grid_is_read_only(self):
        grid = Grid.from_lines(CORRIDOR)
        with pytest.raises(ValueError):
            grid.grid[1, 2] = CellType.WALL.value

    def test_trailing_newlines_are_ignored(self):
        grid = Grid.from_lines([line + "\n" for line in CORRIDOR])
        assert grid.width == 9

    def test_key_without_gate_is_allowed(self):
        grid = Grid.from_lines(CORRIDOR)
        assert grid.keys == ["a", "b"]
        assert grid.gates == ["A"]

    @pytest.mark.parametrize(
        "lines",
        [
            [],
            [""],
            ["#####", "#@.a#", "####"],
            ["#####", "#..a#", "#####"],
            ["#####", "#@@a#", "#####"],
            ["#####", "#@?a#", "#####"],
            ["#####", "#@.A#", "#####"],
            ["#####", "#a@a#", "#####"],
            ["######", "#A@aA#", "######"],
        ],
    )
    def test_malformed_mazes(self, lines):
        with pytest.raises(MalformedMazeError):
            Grid.from_lines(lines)


class TestGridQueries:
    def test_walkable_cells(self):
        grid = Grid.from_lines(CORRIDOR)
        assert grid.is_walkable(2, 1)
        assert grid.is_walkable(3, 1)  # gates are walkable for measuring
        assert grid.is_walkable(5, 1)
        assert not grid.is_walkable(0, 1)
        assert not grid.is_walkable(-1, 1)
        assert not grid.is_walkable(4, 5)

    def test_neighbor_order(self):
        grid = Grid.from_lines(["...", ".@.", "..."])
        assert grid.get_neighbors(1, 1) == [(1, 0), (2, 1), (1, 2), (0, 1)]
        assert [d.name for d in Direction] == ["UP", "RIGHT", "DOWN", "LEFT"]

    def test_neighbors_skip_walls(self):
        grid = Grid.from_lines(CORRIDOR)
        assert grid.get_neighbors(5, 1) == [(6, 1), (4, 1)]
        assert grid.get_neighbors(1, 1) == [(2, 1)]

    def test_points_of_interest(self):
        grid = Grid.from_lines(CORRIDOR)
        points = grid.points_of_interest()
        assert [p.symbol for p in points] == ["@", "a", "b", "A"]
        assert [p.ordinal for p in points] == [0, 1, 2, 3]
        assert grid.start.position == (5, 1)
        assert grid.point("A").position == (3, 1)
        assert grid.point("A").is_gate
        assert grid.point("b").is_key
        assert grid.point_at(7, 1).symbol == "a"
        assert grid.point_at(6, 1) is None

    def test_key_bits(self):
        grid = Grid.from_lines(CORRIDOR)
        assert grid.key_bits == {"a": 0, "b": 1}


class TestGridRendering:
    def test_str_round_trips_input(self):
        grid = Grid.from_lines(CORRIDOR)
        assert str(grid) == "\n".join(CORRIDOR)

    def test_render_progress(self):
        grid = Grid.from_lines(CORRIDOR)
        rendered = grid.render(grid.point("a").position, ["a"])
        assert rendered.splitlines()[1] == "#b.*...@#"

    def test_render_start_moves_with_position(self):
        grid = Grid.from_lines(CORRIDOR)
        rendered = grid.render((2, 1))
        assert rendered.splitlines()[1] == "#b@A...a#"
