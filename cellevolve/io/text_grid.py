"""Text grid adapter.

Converts between blocks of single-character cell markers (one row per line)
and lattice storage. Markers: ``.`` floor/inactive, ``L`` empty seat,
``#`` occupied/active.
"""

from itertools import product
from typing import List, Tuple, Type
import logging

from ..core.cells import CellState, CubeState, SeatState
from ..core.coordinate import Coordinate
from ..core.errors import GridParseError
from ..core.storage import DenseStorage, SparseStorage

logger = logging.getLogger(__name__)

# Axis labels used in slice headers of the sparse dump, after x and y
EXTRA_AXIS_NAMES = ('z', 'w')


def _split_rows(text: str) -> List[Tuple[int, str]]:
    """Split text into (line number, row) pairs.

    Blank lines before and after the block are dropped; rows themselves are
    kept verbatim, so stray spaces inside the block are reported as bad markers.
    """
    numbered = list(enumerate(text.splitlines(), start=1))
    while numbered and not numbered[0][1].strip():
        numbered.pop(0)
    while numbered and not numbered[-1][1].strip():
        numbered.pop()
    if not numbered:
        raise GridParseError("Grid text is empty")
    return numbered


def _decode_row(row: str, line: int, state_type: Type[CellState]) -> List[CellState]:
    states = []
    for column, symbol in enumerate(row, start=1):
        try:
            states.append(state_type.from_symbol(symbol))
        except GridParseError as e:
            raise GridParseError(str(e), line=line, column=column) from e
    return states


def parse_dense(text: str, state_type: Type[CellState] = SeatState) -> DenseStorage:
    """Parse a rectangular block of markers into dense storage.

    Args:
        text: Grid text, one row per line
        state_type: Cell state enum the markers decode to

    Returns:
        DenseStorage sized to the block (row length x line count)

    Raises:
        GridParseError: If the block is empty, not rectangular, or contains
            an unknown marker
    """
    rows = _split_rows(text)
    width = len(rows[0][1])

    decoded = []
    for line, row in rows:
        if len(row) != width:
            raise GridParseError(f"Row has {len(row)} cells, expected {width}", line=line)
        decoded.append(_decode_row(row, line, state_type))

    storage = DenseStorage.from_rows(decoded, state_type)
    logger.debug(f"Parsed {storage.width}x{storage.height} {state_type.__name__} grid")
    return storage


def parse_sparse(text: str, dimensions: int = 3) -> SparseStorage:
    """Parse a 2-D block of cube markers into a sparse lattice.

    The block is placed in the plane where every extra component is zero:
    the marker at column x of row y becomes coordinate (x, y, 0, ...).

    Raises:
        ValueError: If dimensions is less than 2
        GridParseError: If the block is empty or contains an unknown marker
    """
    if dimensions < 2:
        raise ValueError("Sparse lattice needs at least 2 dimensions to hold a grid")

    active = []
    for y, (line, row) in enumerate(_split_rows(text)):
        for x, state in enumerate(_decode_row(row, line, CubeState)):
            if state.is_active:
                active.append(Coordinate((x, y)).embed(dimensions))

    return SparseStorage(dimensions, active)


def render_dense(storage: DenseStorage) -> str:
    """Render dense storage back to marker text (inverse of parse_dense)."""
    return str(storage)


def _axis_name(axis: int) -> str:
    offset = axis - 2
    if offset < len(EXTRA_AXIS_NAMES):
        return EXTRA_AXIS_NAMES[offset]
    return f"d{axis + 1}"


def render_sparse(storage: SparseStorage) -> str:
    """Render a sparse lattice as 2-D slices over its active bounding box.

    Each slice is headed by the values of the extra axes, e.g. ``z=-1`` in
    3-D or ``z=0, w=1`` in 4-D. A lattice with no active cells renders as
    ``(empty)``.
    """
    if not storage.active_count():
        return "(empty)"

    spans = storage.bounds()
    (min_x, max_x), (min_y, max_y) = spans[0], spans[1]
    extra_ranges = [range(low, high + 1) for low, high in spans[2:]]

    blocks = []
    for extra in product(*extra_ranges):
        lines = []
        if extra:
            lines.append(', '.join(f"{_axis_name(axis + 2)}={value}"
                                   for axis, value in enumerate(extra)))
        for y in range(min_y, max_y + 1):
            lines.append(''.join(
                storage.get(Coordinate((x, y) + extra)).symbol
                for x in range(min_x, max_x + 1)
            ))
        blocks.append('\n'.join(lines))

    return '\n\n'.join(blocks)
