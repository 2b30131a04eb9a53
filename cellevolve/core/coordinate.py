"""Integer lattice coordinates.

A Coordinate is a plain tuple of signed integers, so equality, hashing and
ordering come for free and it can key a dict or live in a set. The same type
serves the bounded 2-D seat grid and the unbounded N-dimensional cube lattice.
"""

from functools import lru_cache
from itertools import product
from operator import add
from typing import Iterable, Tuple


class Coordinate(tuple):
    """Immutable point in a D-dimensional integer lattice."""

    __slots__ = ()

    def __new__(cls, components: Iterable[int] = ()) -> 'Coordinate':
        return super().__new__(cls, components)

    @classmethod
    def of(cls, *components: int) -> 'Coordinate':
        """Build a coordinate from positional components: Coordinate.of(1, 2, 0)."""
        return cls(components)

    @property
    def dimensions(self) -> int:
        return len(self)

    @property
    def x(self) -> int:
        return self[0]

    @property
    def y(self) -> int:
        return self[1]

    def offset(self, delta: Tuple[int, ...]) -> 'Coordinate':
        """Component-wise sum of this coordinate and delta.

        Args:
            delta: Offset with the same number of components

        Returns:
            New coordinate shifted by delta

        Raises:
            ValueError: If delta has a different dimensionality
        """
        if len(delta) != len(self):
            raise ValueError(f"Cannot offset {len(self)}-D coordinate by {len(delta)}-D delta")
        return tuple.__new__(Coordinate, map(add, self, delta))

    def embed(self, dimensions: int) -> 'Coordinate':
        """Lift this coordinate into a higher-dimensional space, padding with zeros."""
        if dimensions < len(self):
            raise ValueError(f"Cannot embed {len(self)}-D coordinate into {dimensions}-D space")
        return Coordinate(tuple(self) + (0,) * (dimensions - len(self)))

    def __repr__(self) -> str:
        return f"Coordinate{tuple.__repr__(self)}"


@lru_cache(maxsize=None)
def neighbor_offsets(dimensions: int) -> Tuple[Coordinate, ...]:
    """All offsets with every component in {-1, 0, 1}, excluding the zero offset.

    Args:
        dimensions: Lattice dimensionality D

    Returns:
        Tuple of 3^D - 1 offsets (8 for D=2, 26 for D=3, 80 for D=4)

    Raises:
        ValueError: If dimensions is less than 1
    """
    if dimensions < 1:
        raise ValueError("Lattice must have at least 1 dimension")

    zero = (0,) * dimensions
    return tuple(
        Coordinate(delta)
        for delta in product((-1, 0, 1), repeat=dimensions)
        if delta != zero
    )
