from keymaze.maze.grid import Grid
from keymaze.solver.paths import PathTable, shortest_paths

CORRIDOR = [
    "#########",
    "#b.A.@.a#",
    "#########",
]

SPLIT = [
    "#######",
    "#@.a#b#",
    "#######",
]


class TestShortestPaths:
    def test_paths_from_start(self):
        grid = Grid.from_lines(CORRIDOR)
        paths = shortest_paths(grid, grid.start)

        assert set(paths) == {"a", "b", "A"}
        assert paths["a"].cost == 2
        assert paths["a"].steps == ((6, 1), (7, 1))
        assert paths["a"].traversed == ()

        assert paths["b"].cost == 4
        assert paths["b"].steps[0] == (4, 1)
        assert paths["b"].steps[-1] == (1, 1)
        assert paths["b"].traversed == ("A",)
        assert paths["b"].gates == ["A"]

    def test_traversed_excludes_endpoints(self):
        grid = Grid.from_lines(CORRIDOR)
        path = shortest_paths(grid, grid.point("a"))["b"]

        assert path.source == "a"
        assert path.target == "b"
        assert path.cost == 6
        assert path.traversed == ("@", "A")
        assert path.keys == []

    def test_unreachable_points_are_absent(self):
        grid = Grid.from_lines(SPLIT)

        assert set(shortest_paths(grid, grid.start)) == {"a"}
        assert shortest_paths(grid, grid.point("b")) == {}


class TestPathTable:
    def test_build_covers_every_pair(self):
        grid = Grid.from_lines(CORRIDOR)
        table = PathTable.build(grid)

        # 4 points, all mutually reachable
        assert table.route_count() == 12
        assert table.get("@", "a").cost == 2
        assert table.get("b", "a").cost == 6
        assert table.get("a", "a") is None

    def test_paths_from(self):
        grid = Grid.from_lines(CORRIDOR)
        table = PathTable.build(grid)

        assert set(table.paths_from("A")) == {"@", "a", "b"}
        assert table.paths_from("A")["b"].cost == 2

    def test_missing_routes(self):
        grid = Grid.from_lines(SPLIT)
        table = PathTable.build(grid)

        assert table.get("@", "b") is None
        assert table.paths_from("b") == {}
        assert table.route_count() == 2

    def test_costs_are_symmetric(self):
        grid = Grid.from_lines(CORRIDOR)
        table = PathTable.build(grid, show_progress=True)

        for source in ["@", "a", "b", "A"]:
            for target, path in table.paths_from(source).items():
                assert table.get(target, source).cost == path.cost

    def test_dump_lists_routes(self):
        grid = Grid.from_lines(CORRIDOR)
        dump = PathTable.build(grid).dump()

        assert "--- Paths from: @ ---" in dump
        assert "@ -> b: 4 via A" in dump
