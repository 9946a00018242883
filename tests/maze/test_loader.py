import pytest

from keymaze.errors import MalformedMazeError
from keymaze.maze.loader import load_maze, parse_maze


class TestLoader:
    def test_parse_drops_trailing_blank_lines(self):
        grid = parse_maze("#####\n#@.a#\n#####\n\n\n")
        assert grid.height == 3
        assert grid.keys == ["a"]

    def test_parse_reports_ragged_rows(self):
        with pytest.raises(MalformedMazeError):
            parse_maze("#####\n#@.a#\n###\n")

    def test_load_from_file(self, tmp_path):
        maze_file = tmp_path / "maze.txt"
        maze_file.write_text("#######\n#a.@.b#\n#######\n", encoding="utf-8")

        grid = load_maze(maze_file)
        assert grid.start.position == (3, 1)
        assert grid.keys == ["a", "b"]

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_maze(tmp_path / "missing.txt")
