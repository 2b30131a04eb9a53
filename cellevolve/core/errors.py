"""Exceptions raised by the evolution engine and its text adapters."""

from typing import Optional


class GridParseError(ValueError):
    """Raised when a block of cell markers cannot be turned into a grid.

    Attributes:
        line: 1-based line number of the offending row, if known
        column: 1-based column of the offending character, if known
    """

    def __init__(self, message: str, line: Optional[int] = None, column: Optional[int] = None):
        if line is not None and column is not None:
            message = f"{message} (line {line}, column {column})"
        elif line is not None:
            message = f"{message} (line {line})"
        super().__init__(message)
        self.line = line
        self.column = column


class NonConvergenceError(RuntimeError):
    """Raised when a fixed-point run hits its generation cap without settling."""

    def __init__(self, generations: int):
        super().__init__(f"Automaton did not stabilize within {generations} generations")
        self.generations = generations
