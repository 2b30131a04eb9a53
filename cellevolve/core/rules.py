"""
Transition Rules

Pure per-cell functions mapping (current state, active neighbor count) to the
next state, plus the configuration that pairs the seat rule with the neighbor
strategy it was tuned for.
"""

from dataclasses import dataclass
from enum import Enum
from typing import AbstractSet, FrozenSet, Optional

from .cells import CubeState, SeatState
from .neighbors import AdjacencyNeighbors, NeighborStrategy, VisibilityNeighbors


# Crowding thresholds: an occupied seat empties at this many occupied neighbors
ADJACENT_CROWD_THRESHOLD = 4
VISIBLE_CROWD_THRESHOLD = 5

# Conway cube rules
SURVIVAL_SET: FrozenSet[int] = frozenset({2, 3})  # Active cells stay active with 2-3 neighbors
BIRTH_SET: FrozenSet[int] = frozenset({3})        # Inactive cells activate with exactly 3 neighbors


class SeatRule:
    """Seat occupancy rule.

    - Floor never changes
    - An empty seat with no occupied neighbors becomes occupied
    - An occupied seat with at least ``crowd_threshold`` occupied neighbors empties
    """

    def __init__(self, crowd_threshold: int = VISIBLE_CROWD_THRESHOLD):
        if crowd_threshold < 1:
            raise ValueError("crowd_threshold must be >= 1")
        self.crowd_threshold = crowd_threshold

    def __call__(self, state: SeatState, occupied_neighbors: int) -> SeatState:
        """Apply the rule to one cell.

        Args:
            state: Current seat state
            occupied_neighbors: Number of occupied neighbors

        Returns:
            Next seat state
        """
        if state is SeatState.EMPTY:
            return SeatState.OCCUPIED if occupied_neighbors == 0 else SeatState.EMPTY
        if state is SeatState.OCCUPIED:
            return SeatState.EMPTY if occupied_neighbors >= self.crowd_threshold else SeatState.OCCUPIED
        return state

    def __repr__(self) -> str:
        return f"SeatRule(crowd_threshold={self.crowd_threshold})"


class CubeRule:
    """Life-like birth/survival rule for cube lattices.

    Defaults to the Conway sets: birth on 3, survival on 2 or 3.
    """

    def __init__(self,
                 survival_set: Optional[AbstractSet[int]] = None,
                 birth_set: Optional[AbstractSet[int]] = None):
        """Initialize rule parameters.

        Args:
            survival_set: Neighbor counts for active cell survival (default {2,3})
            birth_set: Neighbor counts for inactive cell activation (default {3})
        """
        self.survival_set: FrozenSet[int] = frozenset(survival_set if survival_set is not None else SURVIVAL_SET)
        self.birth_set: FrozenSet[int] = frozenset(birth_set if birth_set is not None else BIRTH_SET)

    def __call__(self, state: CubeState, active_neighbors: int) -> CubeState:
        if state is CubeState.ACTIVE:
            alive = active_neighbors in self.survival_set
        else:
            alive = active_neighbors in self.birth_set
        return CubeState.ACTIVE if alive else CubeState.INACTIVE

    def __repr__(self) -> str:
        return f"CubeRule(survival={set(self.survival_set)}, birth={set(self.birth_set)})"


cube_rule = CubeRule()


class NeighborMode(Enum):
    """Which neighbor strategy the seat automaton counts with."""
    ADJACENCY = "adjacency"
    VISIBILITY = "visibility"


@dataclass(frozen=True)
class SeatAutomatonConfig:
    """Neighbor strategy and crowding threshold for the seat automaton."""

    neighbor_mode: NeighborMode = NeighborMode.VISIBILITY
    crowd_threshold: int = VISIBLE_CROWD_THRESHOLD

    def __post_init__(self) -> None:
        if not isinstance(self.neighbor_mode, NeighborMode):
            raise ValueError(f"Unknown neighbor mode {self.neighbor_mode!r}")
        if self.crowd_threshold < 1:
            raise ValueError("crowd_threshold must be >= 1")

    @classmethod
    def adjacent(cls) -> 'SeatAutomatonConfig':
        """Direct neighbors, empty at 4 occupied."""
        return cls(NeighborMode.ADJACENCY, ADJACENT_CROWD_THRESHOLD)

    @classmethod
    def visible(cls) -> 'SeatAutomatonConfig':
        """First visible seats, empty at 5 occupied."""
        return cls(NeighborMode.VISIBILITY, VISIBLE_CROWD_THRESHOLD)

    def strategy(self) -> NeighborStrategy:
        if self.neighbor_mode is NeighborMode.ADJACENCY:
            return AdjacencyNeighbors(dimensions=2)
        return VisibilityNeighbors()

    def rule(self) -> SeatRule:
        return SeatRule(self.crowd_threshold)
