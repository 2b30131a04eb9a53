"""
Core automaton engine: coordinates, cell states, lattice storage, neighbor
strategies, transition rules and the evolution driver.
"""

from .cells import CellState, CubeState, SeatState
from .coordinate import Coordinate, neighbor_offsets
from .errors import GridParseError, NonConvergenceError
from .evolution import (
    DEFAULT_GENERATIONS, DEFAULT_MAX_GENERATIONS,
    DenseEvolution, EvolutionDriver, EvolutionResult, FixedGenerations, FixedPoint,
    SparseEvolution, TerminationPolicy, create_cube_automaton, create_seat_automaton
)
from .neighbors import AdjacencyNeighbors, Direction, NeighborStrategy, VisibilityNeighbors
from .rules import CubeRule, NeighborMode, SeatAutomatonConfig, SeatRule, cube_rule
from .storage import DenseStorage, SparseStorage

__all__ = [
    'CellState', 'CubeState', 'SeatState',
    'Coordinate', 'neighbor_offsets',
    'GridParseError', 'NonConvergenceError',
    'DEFAULT_GENERATIONS', 'DEFAULT_MAX_GENERATIONS',
    'DenseEvolution', 'EvolutionDriver', 'EvolutionResult', 'FixedGenerations', 'FixedPoint',
    'SparseEvolution', 'TerminationPolicy', 'create_cube_automaton', 'create_seat_automaton',
    'AdjacencyNeighbors', 'Direction', 'NeighborStrategy', 'VisibilityNeighbors',
    'CubeRule', 'NeighborMode', 'SeatAutomatonConfig', 'SeatRule', 'cube_rule',
    'DenseStorage', 'SparseStorage',
]
