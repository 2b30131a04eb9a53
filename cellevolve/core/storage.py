"""Lattice storage for automaton generations.

Two implementations share the same read contract (``get`` never fails):

- DenseStorage: fixed rectangular 2-D bounds, every cell stored in a flat
  numpy array indexed by ``x + width * y``. Reads outside the bounds return
  the state type's default (Floor for seats).
- SparseStorage: unbounded N-dimensional lattice holding only the active
  coordinates. Anything absent is inactive.
"""

import numpy as np
from typing import Dict, FrozenSet, Iterable, Iterator, List, Optional, Sequence, Tuple, Type
import logging

from .cells import CellState, CubeState, SeatState
from .coordinate import Coordinate

logger = logging.getLogger(__name__)


class DenseStorage:
    """Bounded 2-D grid of cell states.

    Attributes:
        width: Grid width in cells
        height: Grid height in cells
        state_type: CellState subclass stored in this grid
        cells: Flat numpy array of state codes, length width * height
    """

    def __init__(self, width: int, height: int,
                 state_type: Type[CellState] = SeatState,
                 cells: Optional[np.ndarray] = None):
        """Initialize grid with given dimensions.

        Args:
            width: Grid width (cells)
            height: Grid height (cells)
            state_type: Cell state enum for this grid
            cells: Optional flat array of state codes to copy in

        Raises:
            ValueError: If dimensions are invalid or cells has the wrong size
        """
        if width < 1 or height < 1:
            raise ValueError("Grid dimensions must be positive")

        self.width = width
        self.height = height
        self.state_type = state_type

        if cells is not None:
            if cells.shape != (width * height,):
                raise ValueError(f"Cell array shape {cells.shape} doesn't match grid size {width}x{height}")
            self.cells = cells.astype(np.int8, copy=True)
        else:
            self.cells = np.full(width * height, state_type.default().value, dtype=np.int8)

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[CellState]],
                  state_type: Type[CellState] = SeatState) -> 'DenseStorage':
        """Create a grid from rows of states (row 0 is y=0).

        Raises:
            ValueError: If there are no rows or the rows differ in length
        """
        if not rows or not rows[0]:
            raise ValueError("Grid needs at least one row and one column")

        width = len(rows[0])
        for y, row in enumerate(rows):
            if len(row) != width:
                raise ValueError(f"Row {y} has {len(row)} cells, expected {width}")

        codes = np.array([state.value for row in rows for state in row], dtype=np.int8)
        return cls(width, len(rows), state_type, codes)

    @property
    def default(self) -> CellState:
        return self.state_type.default()

    def index(self, coord: Tuple[int, ...]) -> Optional[int]:
        """Linear index of coord, or None when it lies outside the grid."""
        x, y = coord
        if 0 <= x < self.width and 0 <= y < self.height:
            return x + self.width * y
        return None

    def contains(self, coord: Tuple[int, ...]) -> bool:
        return self.index(coord) is not None

    def get(self, coord: Tuple[int, ...]) -> CellState:
        """Get cell state at coord.

        Returns:
            Stored state, or the state type's default if coord is off-grid
        """
        idx = self.index(coord)
        if idx is None:
            return self.default
        return self.state_type.from_code(self.cells[idx])

    def set(self, coord: Tuple[int, ...], state: CellState) -> None:
        """Set cell state at coord. Off-grid writes are ignored."""
        idx = self.index(coord)
        if idx is not None:
            self.cells[idx] = state.value

    def count(self, state: CellState) -> int:
        """Count cells currently in the given state."""
        return int(np.count_nonzero(self.cells == state.value))

    def active_count(self) -> int:
        return sum(self.count(state) for state in self.state_type if state.is_active)

    def coordinates(self) -> Iterator[Coordinate]:
        """Iterate every in-bounds coordinate, row by row."""
        for y in range(self.height):
            for x in range(self.width):
                yield Coordinate((x, y))

    def rows(self) -> List[List[CellState]]:
        """Grid contents as nested lists of states, one list per row."""
        grid = self.cells.reshape(self.height, self.width)
        return [[self.state_type.from_code(code) for code in row] for row in grid]

    def copy(self) -> 'DenseStorage':
        """Create a deep copy of the grid."""
        return DenseStorage(self.width, self.height, self.state_type, self.cells)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DenseStorage):
            return NotImplemented
        return (self.width == other.width and
                self.height == other.height and
                self.state_type is other.state_type and
                np.array_equal(self.cells, other.cells))

    def __str__(self) -> str:
        return '\n'.join(''.join(state.symbol for state in row) for row in self.rows())

    def __repr__(self) -> str:
        return (f"DenseStorage({self.width}x{self.height}, "
                f"{self.state_type.__name__}, active={self.active_count()})")


class SparseStorage:
    """Unbounded N-dimensional lattice storing only active coordinates.

    Attributes:
        dimensions: Number of components in every coordinate
        active: Frozen set of active coordinates
    """

    def __init__(self, dimensions: int, active: Iterable[Tuple[int, ...]] = ()):
        """Initialize lattice.

        Args:
            dimensions: Lattice dimensionality D
            active: Coordinates that start active

        Raises:
            ValueError: If dimensions < 1 or a coordinate has the wrong length
        """
        if dimensions < 1:
            raise ValueError("Lattice must have at least 1 dimension")

        self.dimensions = dimensions
        self.active: FrozenSet[Coordinate] = frozenset(Coordinate(coord) for coord in active)

        for coord in self.active:
            if len(coord) != dimensions:
                raise ValueError(f"Coordinate {tuple(coord)} is not {dimensions}-dimensional")

        logger.debug(f"Created {dimensions}-D sparse lattice with {len(self.active)} active cells")

    @property
    def state_type(self) -> Type[CellState]:
        return CubeState

    def get(self, coord: Tuple[int, ...]) -> CubeState:
        """Get cell state at coord. Absent coordinates are inactive."""
        return CubeState.ACTIVE if coord in self.active else CubeState.INACTIVE

    def is_active(self, coord: Tuple[int, ...]) -> bool:
        return coord in self.active

    def active_count(self) -> int:
        return len(self.active)

    def count(self, state: CellState) -> int:
        """Count cells in state. Only ACTIVE is finite on an unbounded lattice.

        Raises:
            ValueError: If asked to count inactive cells
        """
        if state is CubeState.ACTIVE:
            return len(self.active)
        raise ValueError(f"Cannot count {state.name} cells on an unbounded lattice")

    def bounds(self) -> Tuple[Tuple[int, int], ...]:
        """Per-axis (min, max) span of active cells; (0, 0) on every axis if empty."""
        if not self.active:
            return tuple((0, 0) for _ in range(self.dimensions))

        spans: Dict[int, Tuple[int, int]] = {}
        for axis in range(self.dimensions):
            values = [coord[axis] for coord in self.active]
            spans[axis] = (min(values), max(values))
        return tuple(spans[axis] for axis in range(self.dimensions))

    def __iter__(self) -> Iterator[Coordinate]:
        return iter(sorted(self.active))

    def __len__(self) -> int:
        return len(self.active)

    def __contains__(self, coord: object) -> bool:
        return coord in self.active

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SparseStorage):
            return NotImplemented
        return self.dimensions == other.dimensions and self.active == other.active

    def __hash__(self) -> int:
        return hash((self.dimensions, self.active))

    def __repr__(self) -> str:
        return f"SparseStorage({self.dimensions}-D, active={len(self.active)})"
