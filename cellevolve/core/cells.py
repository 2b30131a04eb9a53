"""Cell state vocabularies for the seat and cube automata.

Each state carries a small integer code (what dense storage keeps in its
numpy array) and the single-character marker used by the text grid format.
"""

from enum import Enum

from .errors import GridParseError


class CellState(Enum):
    """Shared behaviour for closed sets of cell states.

    Members are declared as (code, symbol, is_active) triples.
    """

    def __new__(cls, code: int, symbol: str, is_active: bool):
        member = object.__new__(cls)
        member._value_ = code
        member.symbol = symbol
        member.is_active = is_active
        return member

    @classmethod
    def default(cls) -> 'CellState':
        """State reported for cells outside the stored domain."""
        raise NotImplementedError

    @classmethod
    def from_symbol(cls, symbol: str) -> 'CellState':
        """Decode a single grid marker.

        Raises:
            GridParseError: If symbol is not one of this state set's markers
        """
        for state in cls:
            if state.symbol == symbol:
                return state
        expected = ', '.join(repr(state.symbol) for state in cls)
        raise GridParseError(f"Unexpected cell marker {symbol!r}, expected one of {expected}")

    @classmethod
    def from_code(cls, code: int) -> 'CellState':
        return cls(int(code))

    def __str__(self) -> str:
        return self.symbol


class SeatState(CellState):
    """Seat layout cells. Floor never changes and is never counted."""
    FLOOR = (0, '.', False)
    EMPTY = (1, 'L', False)
    OCCUPIED = (2, '#', True)

    @classmethod
    def default(cls) -> 'SeatState':
        return cls.FLOOR


class CubeState(CellState):
    """Conway cube cells."""
    INACTIVE = (0, '.', False)
    ACTIVE = (1, '#', True)

    @classmethod
    def default(cls) -> 'CubeState':
        return cls.INACTIVE
