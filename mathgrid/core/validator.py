"""Geometric validation utilities for cell paths."""

from __future__ import annotations
from typing import TYPE_CHECKING, List, Optional, Sequence, Tuple

if TYPE_CHECKING:
    from .board import GameBoard

Coord = Tuple[int, int]

# E, S, W, N, then the diagonals
DIRECTIONS: Tuple[Coord, ...] = (
    (0, 1), (1, 0), (0, -1), (-1, 0),
    (1, 1), (1, -1), (-1, 1), (-1, -1),
)


def is_adjacent(a: Coord, b: Coord) -> bool:
    """True if two cells are Manhattan distance 1 apart."""
    return abs(a[0] - b[0]) + abs(a[1] - b[1]) == 1


def linear_path(start: Coord, end: Coord) -> List[Coord]:
    """
    Recompute a drag selection from its fixed start to the current endpoint.

    The path steps one cell at a time along the axis the endpoint shares
    with the start. An endpoint on neither axis collapses the path to the
    start cell.
    """
    (r0, c0), (r1, c1) = start, end
    if r0 == r1:
        step = 1 if c1 >= c0 else -1
        return [(r0, c) for c in range(c0, c1 + step, step)]
    if c0 == c1:
        step = 1 if r1 >= r0 else -1
        return [(r, c0) for r in range(r0, r1 + step, step)]
    return [start]


def is_valid_path(cells: Sequence[Coord]) -> bool:
    """
    Check that a path is one contiguous horizontal or vertical run.

    Every cell must share the first cell's row (or column) and each step
    must move exactly one cell along that line.
    """
    if len(cells) < 2:
        return True

    same_row = all(r == cells[0][0] for r, _ in cells)
    same_col = all(c == cells[0][1] for _, c in cells)
    if not same_row and not same_col:
        return False

    axis = 1 if same_row else 0
    return all(abs(cells[i][axis] - cells[i - 1][axis]) == 1 for i in range(1, len(cells)))


def alternates(board: GameBoard, cells: Sequence[Coord]) -> bool:
    """True if the path reads number, operator, number, ... from its first cell."""
    for i, (r, c) in enumerate(cells):
        if board.is_number(r, c) != (i % 2 == 0):
            return False
    return True


def can_extend_line(cells: Sequence[Coord], new: Coord) -> bool:
    """
    Check whether a tapped cell may be appended to a straight selection.

    The new cell must touch the last cell and every selected cell must
    share a row (or column) with both the last cell and the new one, so
    the direction can never change once a line is established.
    """
    if not cells:
        return True
    if new in cells:
        return False

    last = cells[-1]
    if not is_adjacent(last, new):
        return False

    return all(
        (r == last[0] and r == new[0]) or (c == last[1] and c == new[1])
        for r, c in cells
    )


def ray(board: GameBoard, start: Coord, direction: Coord, length: int) -> Optional[List[Coord]]:
    """
    Cells visited stepping from start in a fixed direction.

    Returns None if the ray would leave the board.
    """
    dr, dc = direction
    cells = [(start[0] + i * dr, start[1] + i * dc) for i in range(length)]
    if not all(board.in_bounds(r, c) for r, c in cells):
        return None
    return cells
