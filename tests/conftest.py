"""Shared example grids."""

import pytest

SEAT_EXAMPLE = """\
L.LL.LL.LL
LLLLLLL.LL
L.L.L..L..
LLLL.LL.LL
L.LL.LL.LL
L.LLLLL.LL
..L.L.....
LLLLLLLLLL
L.LLLLLL.L
L.LLLLL.LL
"""

CUBE_EXAMPLE = """\
.#.
..#
###
"""


@pytest.fixture
def seat_text() -> str:
    return SEAT_EXAMPLE


@pytest.fixture
def cube_text() -> str:
    return CUBE_EXAMPLE
