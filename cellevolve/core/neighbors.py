"""Neighbor discovery strategies.

A strategy answers one question for the evolution driver: which cell states
count as the neighbors of a coordinate. Two are provided:

- AdjacencyNeighbors: the fixed 3^D - 1 lattice offsets around a cell.
- VisibilityNeighbors: the first seat (non-floor cell) seen along each of the
  eight planar compass rays, stopping at the grid edge.

On dense grids a strategy can also precompute a neighbor table: for every
cell, the linear indices of the cells it counts. The table only depends on the
grid shape (and, for visibility, on where the floor is), so the dense driver
builds it once and reuses it every generation.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Hashable, Iterator, List, Optional, Tuple
import logging

import numpy as np

from .cells import CellState, SeatState
from .coordinate import Coordinate, neighbor_offsets
from .storage import DenseStorage, SparseStorage

logger = logging.getLogger(__name__)


class Direction(Enum):
    """The eight planar ray directions as (dx, dy) steps. North is -y."""
    NORTH = (0, -1)
    NORTHEAST = (1, -1)
    EAST = (1, 0)
    SOUTHEAST = (1, 1)
    SOUTH = (0, 1)
    SOUTHWEST = (-1, 1)
    WEST = (-1, 0)
    NORTHWEST = (-1, -1)

    @property
    def delta(self) -> Tuple[int, int]:
        return self.value

    @property
    def opposite(self) -> 'Direction':
        dx, dy = self.value
        return Direction((-dx, -dy))


class NeighborStrategy(ABC):
    """Base class for neighbor strategies.

    Subclasses implement ``neighbors`` and ``neighbor_indices``; counting
    active neighbors and the cached dense neighbor table are shared.
    """

    def __init__(self):
        self._table_key: Optional[Hashable] = None
        self._table: Optional[np.ndarray] = None

    @abstractmethod
    def neighbors(self, storage, coord: Coordinate) -> Iterator[CellState]:
        """Yield the neighbor states of coord in storage."""

    @abstractmethod
    def neighbor_indices(self, storage: DenseStorage, coord: Coordinate) -> List[int]:
        """Linear indices of the in-grid cells counted as neighbors of coord."""

    def count_active(self, storage, coord: Coordinate) -> int:
        """Number of neighbors of coord whose state is active."""
        return sum(1 for state in self.neighbors(storage, coord) if state.is_active)

    def table_key(self, storage: DenseStorage) -> Hashable:
        """Everything the neighbor table of storage depends on."""
        return (storage.width, storage.height)

    def neighbor_table(self, storage: DenseStorage) -> np.ndarray:
        """Neighbor indices of every cell of a dense grid.

        Returns:
            Integer array of shape (width * height, k). Row i lists the
            neighbors of the cell with linear index i; unused slots hold
            width * height, one past the last cell.
        """
        key = self.table_key(storage)
        if key == self._table_key:
            return self._table

        size = storage.width * storage.height
        rows = [self.neighbor_indices(storage, coord) for coord in storage.coordinates()]
        k = max((len(row) for row in rows), default=0)

        table = np.full((size, k), size, dtype=np.intp)
        for idx, row in enumerate(rows):
            table[idx, :len(row)] = row

        logger.debug(f"Built {size}x{k} neighbor table for {storage.width}x{storage.height} grid")
        self._table_key = key
        self._table = table
        return table


class AdjacencyNeighbors(NeighborStrategy):
    """Every lattice point with all components within one step of the cell.

    Works over dense and sparse storage alike since both answer ``get`` for
    any coordinate.
    """

    def __init__(self, dimensions: int = 2):
        """Initialize strategy.

        Args:
            dimensions: Lattice dimensionality D (3^D - 1 neighbors per cell)
        """
        super().__init__()
        self.dimensions = dimensions
        self.offsets = neighbor_offsets(dimensions)

    def neighbor_coordinates(self, coord: Coordinate) -> Iterator[Coordinate]:
        """Lazily yield the coordinates adjacent to coord."""
        return (coord.offset(delta) for delta in self.offsets)

    def neighbors(self, storage, coord: Coordinate) -> Iterator[CellState]:
        return (storage.get(neighbor) for neighbor in self.neighbor_coordinates(coord))

    def neighbor_indices(self, storage: DenseStorage, coord: Coordinate) -> List[int]:
        indices = (storage.index(neighbor) for neighbor in self.neighbor_coordinates(coord))
        return [idx for idx in indices if idx is not None]

    def count_active(self, storage, coord: Coordinate) -> int:
        if isinstance(storage, SparseStorage):
            # Membership test, no state objects
            active = storage.active
            return sum(1 for neighbor in self.neighbor_coordinates(coord) if neighbor in active)
        return super().count_active(storage, coord)

    def __repr__(self) -> str:
        return f"AdjacencyNeighbors(dimensions={self.dimensions}, offsets={len(self.offsets)})"


class VisibilityNeighbors(NeighborStrategy):
    """First visible seat along each of the eight compass rays.

    Only meaningful on bounded dense storage: a ray stops with no contribution
    once it leaves the grid.
    """

    def __init__(self, transparent: CellState = SeatState.FLOOR):
        """Initialize strategy.

        Args:
            transparent: State that rays pass through (floor by default)
        """
        super().__init__()
        self.transparent = transparent

    def visible_index(self, storage: DenseStorage, coord: Coordinate,
                      direction: Direction) -> Optional[int]:
        """Linear index of the first non-transparent cell along one ray, or None."""
        dx, dy = direction.delta
        x, y = coord
        while True:
            x, y = x + dx, y + dy
            idx = storage.index((x, y))
            if idx is None:
                return None
            if storage.cells[idx] != self.transparent.value:
                return idx

    def visible_from(self, storage: DenseStorage, coord: Coordinate,
                     direction: Direction) -> Tuple[CellState, ...]:
        """State of the first non-transparent cell along one ray.

        Returns:
            One-element tuple with the visible state, or an empty tuple if the
            ray leaves the grid first
        """
        idx = self.visible_index(storage, coord, direction)
        if idx is None:
            return ()
        return (storage.state_type.from_code(storage.cells[idx]),)

    def neighbors(self, storage, coord: Coordinate) -> Iterator[CellState]:
        for direction in Direction:
            yield from self.visible_from(storage, coord, direction)

    def neighbor_indices(self, storage: DenseStorage, coord: Coordinate) -> List[int]:
        indices = (self.visible_index(storage, coord, direction) for direction in Direction)
        return [idx for idx in indices if idx is not None]

    def table_key(self, storage: DenseStorage) -> Hashable:
        # Rays pass through transparent cells, so their layout shapes the table
        transparent = storage.cells == self.transparent.value
        return (storage.width, storage.height, transparent.tobytes())

    def __repr__(self) -> str:
        return f"VisibilityNeighbors(transparent={self.transparent.name})"
