"""
cellevolve: Generic Cellular Automaton Evolution Engine

Evolves grids of cells whose next state depends only on the count of active
neighbors. Ships two automata: a bounded seat layout run to a fixed point and
an unbounded N-dimensional Conway cube lattice run for a fixed number of
generations.
"""

from .core import (
    Coordinate, CubeState, SeatState, DenseStorage, SparseStorage,
    AdjacencyNeighbors, VisibilityNeighbors, CubeRule, SeatRule, NeighborMode, SeatAutomatonConfig,
    DenseEvolution, SparseEvolution, EvolutionResult, FixedGenerations, FixedPoint,
    create_cube_automaton, create_seat_automaton, GridParseError, NonConvergenceError
)
from .io import parse_dense, parse_sparse, render_dense, render_sparse

__version__ = "0.1.0"

__all__ = [
    'Coordinate', 'CubeState', 'SeatState', 'DenseStorage', 'SparseStorage',
    'AdjacencyNeighbors', 'VisibilityNeighbors', 'CubeRule', 'SeatRule', 'NeighborMode', 'SeatAutomatonConfig',
    'DenseEvolution', 'SparseEvolution', 'EvolutionResult', 'FixedGenerations', 'FixedPoint',
    'create_cube_automaton', 'create_seat_automaton', 'GridParseError', 'NonConvergenceError',
    'parse_dense', 'parse_sparse', 'render_dense', 'render_sparse',
]
