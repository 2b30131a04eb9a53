"""Tests for adjacency and visibility neighbor strategies."""

import textwrap

import pytest
from cellevolve.core.cells import CubeState, SeatState
from cellevolve.core.coordinate import Coordinate
from cellevolve.core.neighbors import AdjacencyNeighbors, Direction, NeighborStrategy, VisibilityNeighbors
from cellevolve.core.storage import SparseStorage
from cellevolve.io.text_grid import parse_dense


def seats(text: str):
    return parse_dense(textwrap.dedent(text))


class TestDirection:

    def test_eight_distinct_directions(self):
        deltas = {direction.delta for direction in Direction}
        assert len(deltas) == 8
        assert (0, 0) not in deltas

    def test_opposite(self):
        assert Direction.NORTH.opposite is Direction.SOUTH
        assert Direction.NORTHEAST.opposite is Direction.SOUTHWEST
        for direction in Direction:
            assert direction.opposite.opposite is direction


class TestAdjacencyNeighbors:
    """Test fixed-offset neighbor enumeration."""

    def test_dense_center_cell(self):
        grid = seats("""\
            ###
            #L#
            ###
        """)
        strategy = AdjacencyNeighbors(2)
        assert strategy.count_active(grid, Coordinate.of(1, 1)) == 8

    def test_dense_corner_sees_floor_off_grid(self):
        """Off-grid neighbors read as floor and are never counted."""
        grid = seats("""\
            ##
            ##
        """)
        strategy = AdjacencyNeighbors(2)
        states = list(strategy.neighbors(grid, Coordinate.of(0, 0)))

        assert len(states) == 8
        assert states.count(SeatState.FLOOR) == 5
        assert strategy.count_active(grid, Coordinate.of(0, 0)) == 3

    def test_sparse_neighbors_3d(self):
        lattice = SparseStorage(3, [(1, 2, 3), (0, 2, 3), (1, 2, 4), (5, 5, 5)])
        strategy = AdjacencyNeighbors(3)

        assert strategy.count_active(lattice, Coordinate.of(1, 2, 3)) == 2
        assert strategy.count_active(lattice, Coordinate.of(9, 9, 9)) == 0

    def test_neighbor_coordinates_exclude_self(self):
        coord = Coordinate.of(1, 2, 3)
        neighbors = list(AdjacencyNeighbors(3).neighbor_coordinates(coord))

        assert len(neighbors) == 26
        assert coord not in neighbors
        # Face neighbors
        for face in [(0, 2, 3), (2, 2, 3), (1, 1, 3), (1, 3, 3), (1, 2, 2), (1, 2, 4)]:
            assert face in neighbors

    def test_sparse_states_are_cube_states(self):
        lattice = SparseStorage(4, [(0, 0, 0, 1)])
        states = list(AdjacencyNeighbors(4).neighbors(lattice, Coordinate.of(0, 0, 0, 0)))

        assert len(states) == 80
        assert states.count(CubeState.ACTIVE) == 1


class TestVisibilityNeighbors:
    """Test first-visible-seat ray casting."""

    def setup_method(self):
        self.strategy = VisibilityNeighbors()

    def test_sees_eight_occupied(self):
        grid = seats("""\
            .......#.
            ...#.....
            .#.......
            .........
            ..#L....#
            ....#....
            .........
            #........
            ...#.....
        """)
        states = list(self.strategy.neighbors(grid, Coordinate.of(3, 4)))

        assert len(states) == 8
        assert self.strategy.count_active(grid, Coordinate.of(3, 4)) == 8

    def test_sees_nothing(self):
        grid = seats("""\
            .##.##.
            #.#.#.#
            ##...##
            ...L...
            ##...##
            #.#.#.#
            .##.##.
        """)
        assert list(self.strategy.neighbors(grid, Coordinate.of(3, 3))) == []

    def test_empty_seat_blocks_view(self):
        """An empty seat stops the ray and hides the occupied seat behind it."""
        grid = seats("""\
            .............
            .L.L.#.#.#.#.
            .............
        """)
        states = list(self.strategy.neighbors(grid, Coordinate.of(1, 1)))

        assert states == [SeatState.EMPTY]
        assert self.strategy.count_active(grid, Coordinate.of(1, 1)) == 0

    def test_ray_stops_at_edge(self):
        grid = seats("""\
            ...
            .L.
            ...
        """)
        for direction in Direction:
            assert self.strategy.visible_from(grid, Coordinate.of(1, 1), direction) == ()

    def test_at_most_one_state_per_direction(self):
        grid = seats("""\
            LLL
            LLL
            LLL
        """)
        states = list(self.strategy.neighbors(grid, Coordinate.of(1, 1)))
        assert states == [SeatState.EMPTY] * 8

    @pytest.mark.parametrize("direction", list(Direction))
    def test_visibility_is_symmetric(self, direction):
        """If A sees B across floor, B sees A along the opposite ray."""
        grid = seats("""\
            L...#...L
            .........
            ..L...#..
            .........
            #...L...#
            .........
            ..#...L..
            .........
            L...#...L
        """)
        for a in grid.coordinates():
            if grid.get(a) is SeatState.FLOOR:
                continue
            seen = self.strategy.visible_from(grid, a, direction)
            if not seen:
                continue

            # Walk to the seat that was seen
            b = a.offset(direction.delta)
            while grid.get(b) is SeatState.FLOOR:
                b = b.offset(direction.delta)

            assert seen == (grid.get(b),)
            assert self.strategy.visible_from(grid, b, direction.opposite) == (grid.get(a),)


class TestNeighborStrategyBase:

    def test_base_is_abstract(self):
        with pytest.raises(TypeError):
            NeighborStrategy()

    def test_partial_subclass_is_abstract(self):
        """A strategy must provide both neighbors and neighbor_indices."""
        class StatesOnly(NeighborStrategy):
            def neighbors(self, storage, coord):
                return iter(())

        with pytest.raises(TypeError):
            StatesOnly()


class TestNeighborTable:
    """Test the precomputed dense neighbor tables."""

    def test_adjacency_table_pads_edges(self):
        grid = seats("""\
            LLL
            LLL
        """)
        table = AdjacencyNeighbors(2).neighbor_table(grid)
        size = grid.width * grid.height

        # Edge cells of a two-row grid have at most five in-grid neighbors
        assert table.shape == (size, 5)
        # Corner (0, 0) touches (1, 0), (0, 1), (1, 1); the rest is padding
        corner = sorted(int(idx) for idx in table[0] if idx != size)
        assert corner == [1, 3, 4]
        assert list(table[0]).count(size) == 2

    def test_visibility_table_skips_floor(self):
        grid = seats("""\
            L...L
            .....
            L...L
        """)
        table = VisibilityNeighbors().neighbor_table(grid)
        size = grid.width * grid.height

        seen = sorted(int(idx) for idx in table[grid.index((0, 0))] if idx != size)
        # The diagonal ray leaves the grid at (3, 3) before reaching a seat
        assert seen == [grid.index((4, 0)), grid.index((0, 2))]

    def test_table_reused_for_same_layout(self):
        strategy = VisibilityNeighbors()
        grid = seats("""\
            L.L
            .L.
        """)
        occupied = grid.copy()
        occupied.set((1, 1), SeatState.OCCUPIED)

        assert strategy.neighbor_table(grid) is strategy.neighbor_table(occupied)

    def test_table_rebuilt_for_new_floor(self):
        strategy = VisibilityNeighbors()
        first = strategy.neighbor_table(seats("L.L\n.L."))
        second = strategy.neighbor_table(seats("LLL\n.L."))
        assert first is not second

    def test_indices_match_visible_states(self):
        grid = seats("""\
            #.L.#
            .....
            L.#.L
            .....
            #.L.#
        """)
        strategy = VisibilityNeighbors()
        center = Coordinate.of(2, 2)

        states = [grid.state_type.from_code(grid.cells[idx])
                  for idx in strategy.neighbor_indices(grid, center)]
        assert states == list(strategy.neighbors(grid, center))
