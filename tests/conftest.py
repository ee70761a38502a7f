"""Shared boards for the test suite."""

import pytest
from mathgrid.core.board import GameBoard

# Checkerboard board used across tests
#   2 + 2 * 7
#   - 3 + 1 -
#   4 * 5 - 6
#   + 8 / 2 ^
#   9 - 1 + 3
SAMPLE_BOARD = "2 + 2 * 7;- 3 + 1 -;4 * 5 - 6;+ 8 / 2 ^;9 - 1 + 3"

# Authored board with neighbouring number cells
AUTHORED_ROWS = [
    [1, 2, "+", 3, 4],
    ["+", "-", "*", "/", "^"],
    [5, 6, 7, 8, 9],
    [1, "+", 2, "-", 3],
    [9, 9, 9, 9, 9],
]


@pytest.fixture
def sample_board():
    return GameBoard.from_string(SAMPLE_BOARD)


@pytest.fixture
def authored_board():
    return GameBoard.from_2d_list(AUTHORED_ROWS)
