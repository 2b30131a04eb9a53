"""Evolution driver for cellular automata.

Computes one generation from the previous one and runs the step loop under a
termination policy. Every step allocates a fresh storage; a generation handed
to or returned by the driver is never modified afterwards.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, Dict, Iterator, Set, Tuple, Type, Union
import logging

import numpy as np

from .cells import CellState, CubeState
from .coordinate import Coordinate
from .errors import NonConvergenceError
from .neighbors import AdjacencyNeighbors, NeighborStrategy
from .rules import CubeRule, SeatAutomatonConfig
from .storage import DenseStorage, SparseStorage

logger = logging.getLogger(__name__)

# Generations run by the cube automaton unless told otherwise
DEFAULT_GENERATIONS = 6

# Cap on fixed-point runs before giving up with NonConvergenceError
DEFAULT_MAX_GENERATIONS = 1000

Rule = Callable[[CellState, int], CellState]
Storage = Union[DenseStorage, SparseStorage]


@dataclass(frozen=True)
class TerminationPolicy:
    """When to stop running generations.

    Attributes:
        max_generations: Upper bound on steps taken
        stop_at_fixed_point: Stop as soon as a step returns an equal generation
        fail_on_limit: Raise NonConvergenceError if max_generations is reached
            without stopping at a fixed point
    """

    max_generations: int
    stop_at_fixed_point: bool = False
    fail_on_limit: bool = False

    def __post_init__(self) -> None:
        if self.max_generations < 0:
            raise ValueError("max_generations must be >= 0")


class FixedGenerations(TerminationPolicy):
    """Run exactly ``count`` generations."""

    def __init__(self, count: int = DEFAULT_GENERATIONS):
        super().__init__(max_generations=count)


class FixedPoint(TerminationPolicy):
    """Run until two consecutive generations are equal, at most ``max_generations`` steps."""

    def __init__(self, max_generations: int = DEFAULT_MAX_GENERATIONS):
        if max_generations < 1:
            raise ValueError("max_generations must be >= 1 for fixed-point runs")
        super().__init__(max_generations=max_generations,
                         stop_at_fixed_point=True,
                         fail_on_limit=True)


@dataclass(frozen=True)
class EvolutionResult:
    """Outcome of a run.

    Attributes:
        final: Last generation produced
        generations: Number of steps taken
        converged: True if the run stopped at a fixed point
    """

    final: Storage
    generations: int
    converged: bool

    def active_count(self) -> int:
        return self.final.active_count()


class EvolutionDriver(ABC):
    """Applies a transition rule under a neighbor strategy, one generation at a time."""

    def __init__(self, rule: Rule, strategy: NeighborStrategy):
        """Initialize driver.

        Args:
            rule: Function (state, active neighbor count) -> next state
            strategy: Neighbor strategy used to count active neighbors
        """
        self.rule = rule
        self.strategy = strategy

    @abstractmethod
    def step(self, generation: Storage) -> Storage:
        """Compute the generation following ``generation``."""

    def next_state(self, generation: Storage, coord: Coordinate) -> CellState:
        """Next state of a single cell, reading only ``generation``."""
        return self.rule(generation.get(coord), self.strategy.count_active(generation, coord))

    def generations(self, initial: Storage) -> Iterator[Storage]:
        """Yield ``initial`` and then every successive generation, forever."""
        current = initial
        while True:
            yield current
            current = self.step(current)

    def run(self, initial: Storage, policy: TerminationPolicy) -> EvolutionResult:
        """Step from ``initial`` until ``policy`` says to stop.

        Args:
            initial: Starting generation
            policy: Termination policy

        Returns:
            EvolutionResult with the final generation

        Raises:
            NonConvergenceError: If the policy requires a fixed point and the
                generation cap is reached first
        """
        current = initial
        for generation in range(1, policy.max_generations + 1):
            following = self.step(current)
            logger.debug(f"Generation {generation}: active={following.active_count()}")

            if policy.stop_at_fixed_point and following == current:
                logger.info(f"Reached fixed point after {generation} generations "
                            f"with {following.active_count()} active cells")
                return EvolutionResult(following, generation, converged=True)

            current = following

        if policy.fail_on_limit:
            logger.error(f"No fixed point within {policy.max_generations} generations")
            raise NonConvergenceError(policy.max_generations)

        logger.info(f"Finished {policy.max_generations} generations "
                    f"with {current.active_count()} active cells")
        return EvolutionResult(current, policy.max_generations, converged=False)


class DenseEvolution(EvolutionDriver):
    """Driver for bounded dense grids: every cell is evaluated each step.

    Works on the numpy state codes directly. Neighbor counts come from the
    strategy's cached neighbor table, and the rule is tabulated once per
    (state, count) pair, so a step is two array lookups.
    """

    def __init__(self, rule: Rule, strategy: NeighborStrategy):
        super().__init__(rule, strategy)
        self._transitions: Dict[Tuple[Type[CellState], int], np.ndarray] = {}

    def transition_table(self, state_type: Type[CellState], max_count: int) -> np.ndarray:
        """Next state code for every (state code, active neighbor count) pair."""
        key = (state_type, max_count)
        if key not in self._transitions:
            table = np.zeros((max(state.value for state in state_type) + 1, max_count + 1), dtype=np.int8)
            for state in state_type:
                for count in range(max_count + 1):
                    table[state.value, count] = self.rule(state, count).value
            self._transitions[key] = table
        return self._transitions[key]

    def step(self, generation: DenseStorage) -> DenseStorage:
        neighbors = self.strategy.neighbor_table(generation)

        # Trailing False is the off-grid slot that pads short neighbor rows
        active = np.zeros(len(generation.cells) + 1, dtype=bool)
        active_codes = [state.value for state in generation.state_type if state.is_active]
        active[:-1] = np.isin(generation.cells, active_codes)
        counts = active[neighbors].sum(axis=1)

        transitions = self.transition_table(generation.state_type, neighbors.shape[1])
        cells = transitions[generation.cells, counts]
        return DenseStorage(generation.width, generation.height, generation.state_type, cells)


class SparseEvolution(EvolutionDriver):
    """Driver for unbounded sparse lattices.

    Only active cells and their adjacent coordinates can be active next; every
    other coordinate has no active neighbor and stays inactive.
    """

    def candidates(self, generation: SparseStorage) -> Set[Coordinate]:
        """Coordinates that may be active in the next generation."""
        candidates: Set[Coordinate] = set(generation.active)
        for coord in generation.active:
            candidates.update(self.strategy.neighbor_coordinates(coord))
        return candidates

    def step(self, generation: SparseStorage) -> SparseStorage:
        candidates = self.candidates(generation)
        logger.debug(f"Evaluating {len(candidates)} candidates around "
                     f"{generation.active_count()} active cells")

        active = [
            coord for coord in candidates
            if self.next_state(generation, coord) is CubeState.ACTIVE
        ]
        return SparseStorage(generation.dimensions, active)


def create_seat_automaton(config: SeatAutomatonConfig = SeatAutomatonConfig()) -> DenseEvolution:
    """Factory for the seat automaton with the given neighbor mode and threshold."""
    return DenseEvolution(config.rule(), config.strategy())


def create_cube_automaton(dimensions: int = 3) -> SparseEvolution:
    """Factory for the Conway cube automaton in ``dimensions`` dimensions."""
    return SparseEvolution(CubeRule(), AdjacencyNeighbors(dimensions))
