"""Tests for parsing and rendering marker text."""

import pytest
from cellevolve.core.cells import CubeState, SeatState
from cellevolve.core.coordinate import Coordinate
from cellevolve.core.errors import GridParseError
from cellevolve.core.storage import SparseStorage
from cellevolve.io.text_grid import parse_dense, parse_sparse, render_dense, render_sparse


class TestParseDense:
    """Test dense seat grid parsing."""

    def test_dimensions_from_text(self, seat_text):
        grid = parse_dense(seat_text)
        assert (grid.width, grid.height) == (10, 10)

    def test_cell_states(self):
        grid = parse_dense("L.#\n#L.")
        assert grid.get((0, 0)) is SeatState.EMPTY
        assert grid.get((1, 0)) is SeatState.FLOOR
        assert grid.get((2, 0)) is SeatState.OCCUPIED
        assert grid.get((0, 1)) is SeatState.OCCUPIED
        assert grid.count(SeatState.EMPTY) == 2

    def test_round_trip(self, seat_text):
        """Rendering a freshly parsed grid reproduces the input exactly."""
        assert render_dense(parse_dense(seat_text)) == seat_text.strip()

    def test_blank_lines_around_block_ignored(self):
        assert parse_dense("\n\n  \nL#\r\n.L\n\n") == parse_dense("L#\n.L")

    def test_indented_row_rejected(self):
        """Whitespace inside the block is a bad marker, not padding."""
        with pytest.raises(GridParseError, match=r"Unexpected cell marker ' '.*\(line 2, column 1\)"):
            parse_dense("L#\n .")

    def test_trailing_space_rejected(self):
        with pytest.raises(GridParseError, match=r"Row has 2 cells, expected 3 \(line 2\)"):
            parse_dense("L# \n.L")

    def test_line_numbers_count_leading_blank_lines(self):
        with pytest.raises(GridParseError) as excinfo:
            parse_dense("\n\nLL\nLx")
        assert (excinfo.value.line, excinfo.value.column) == (4, 2)

    def test_ragged_rows_rejected(self):
        with pytest.raises(GridParseError, match=r"Row has 2 cells, expected 3 \(line 2\)") as excinfo:
            parse_dense("LLL\nLL\nLLL")
        assert excinfo.value.line == 2

    def test_unknown_marker_rejected(self):
        with pytest.raises(GridParseError, match=r"Unexpected cell marker 'x'.*\(line 2, column 3\)") as excinfo:
            parse_dense("LLL\nLLx")
        assert (excinfo.value.line, excinfo.value.column) == (2, 3)

    def test_empty_text_rejected(self):
        with pytest.raises(GridParseError, match="empty"):
            parse_dense("  \n\n")

    def test_cube_state_dense_grid(self):
        grid = parse_dense(".#.\n..#", state_type=CubeState)
        assert grid.active_count() == 2

        with pytest.raises(GridParseError):
            parse_dense("L#", state_type=CubeState)

    def test_parse_error_is_value_error(self):
        with pytest.raises(ValueError):
            parse_dense("?")


class TestParseSparse:
    """Test embedding a 2-D block into a higher-dimensional lattice."""

    def test_active_positions(self, cube_text):
        lattice = parse_sparse(cube_text)
        expected = {(1, 0, 0), (2, 1, 0), (0, 2, 0), (1, 2, 0), (2, 2, 0)}

        assert lattice.dimensions == 3
        assert lattice.active == expected

    def test_four_dimensions(self, cube_text):
        lattice = parse_sparse(cube_text, dimensions=4)
        assert lattice.active_count() == 5
        assert all(coord[2:] == (0, 0) for coord in lattice.active)

    def test_inactive_cells_not_stored(self):
        lattice = parse_sparse("...\n...")
        assert lattice.active_count() == 0

    def test_invalid_marker(self):
        with pytest.raises(GridParseError, match=r"line 1, column 2"):
            parse_sparse(".L.")

    def test_invalid_dimensions(self):
        with pytest.raises(ValueError, match="at least 2 dimensions"):
            parse_sparse("#", dimensions=1)


class TestRenderSparse:
    """Test the per-slice debug dump."""

    def test_single_plane(self, cube_text):
        assert render_sparse(parse_sparse(cube_text)) == "z=0\n.#.\n..#\n###"

    def test_slices_span_bounding_box(self):
        lattice = SparseStorage(3, [(0, 0, -1), (1, 1, 1)])
        assert render_sparse(lattice) == "z=-1\n#.\n..\n\nz=0\n..\n..\n\nz=1\n..\n.#"

    def test_four_dimensional_headers(self):
        lattice = SparseStorage(4, [(0, 0, 0, 0), (0, 0, 0, 1)])
        assert render_sparse(lattice) == "z=0, w=0\n#\n\nz=0, w=1\n#"

    def test_two_dimensional_has_no_header(self):
        assert render_sparse(SparseStorage(2, [(0, 0), (2, 0)])) == "#.#"

    def test_higher_axes_named_by_position(self):
        lattice = SparseStorage(5, [Coordinate.of(0, 0, 0, 0, 3)])
        assert render_sparse(lattice) == "z=0, w=0, d5=3\n#"

    def test_empty(self):
        assert render_sparse(SparseStorage(3)) == "(empty)"
