"""Math grid board representation: an N x N matrix of number and operator cells."""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional, Tuple, Union
import numpy as np

from ..config import BOARD_SIZES
from ..errors import InvalidBoardError

OPERATORS: Tuple[str, ...] = ("+", "-", "*", "/", "^")

CellValue = Union[int, str, None]
Coord = Tuple[int, int]

EMPTY_NUMBER = "."
EMPTY_OPERATOR = "_"


class CellKind(Enum):
    """What a cell holds. Values match the board payload's ``type`` field."""
    NUMBER = "number"
    OPERATOR = "operation"


@dataclass(frozen=True)
class Cell:
    """A single grid position."""
    value: CellValue
    kind: CellKind
    row: int
    col: int

    @property
    def is_number(self) -> bool:
        return self.kind is CellKind.NUMBER

    @property
    def is_operator(self) -> bool:
        return self.kind is CellKind.OPERATOR

    @property
    def is_empty(self) -> bool:
        return self.value is None

    def to_dict(self) -> Dict[str, Any]:
        return {"value": self.value, "type": self.kind.value, "row": self.row, "col": self.col}


def checkerboard_kinds(size: int) -> np.ndarray:
    """Boolean mask that is True where a generated board places numbers."""
    idx = np.arange(size)
    return np.add.outer(idx, idx) % 2 == 0


def _check_value(value: CellValue, kind: CellKind) -> None:
    if value is None:
        return
    if kind is CellKind.NUMBER:
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidBoardError(f"Number cell needs an int, got {value!r}")
    elif value not in OPERATORS:
        raise InvalidBoardError(f"Operator cell needs one of {OPERATORS}, got {value!r}")


class GameBoard:
    """
    Immutable N x N grid of typed cells.

    Generated boards follow the checkerboard rule: a cell holds a number
    when (row + col) is even and an operator otherwise. Authored boards
    choose the kind of every cell independently and may contain empty
    cells until they are filled in.
    """

    def __init__(
        self,
        size: int,
        values: Optional[np.ndarray] = None,
        number_mask: Optional[np.ndarray] = None,
    ):
        """
        Initialize a board.

        Args:
            size: Board size (5, 10 or 15).
            values: Object array of cell values (int, operator symbol or None).
                If None, creates an empty board.
            number_mask: Boolean array, True for number cells. Defaults to
                the checkerboard layout.
        """
        if size not in BOARD_SIZES:
            raise InvalidBoardError(f"Board size must be one of {BOARD_SIZES}, got {size}")

        self.size = size

        if number_mask is None:
            number_mask = checkerboard_kinds(size)
        number_mask = np.asarray(number_mask, dtype=bool)
        if number_mask.shape != (size, size):
            raise InvalidBoardError(f"Kind mask shape must be ({size}, {size})")

        grid = np.empty((size, size), dtype=object)
        if values is not None:
            values = np.asarray(values, dtype=object)
            if values.shape != (size, size):
                raise InvalidBoardError(f"Grid shape must be ({size}, {size})")
            for (i, j), value in np.ndenumerate(values):
                kind = CellKind.NUMBER if number_mask[i, j] else CellKind.OPERATOR
                _check_value(value, kind)
                grid[i, j] = value

        grid.flags.writeable = False
        number_mask = number_mask.copy()
        number_mask.flags.writeable = False
        self._values = grid
        self._numbers = number_mask

    def copy(self) -> GameBoard:
        """Create an independent copy of the board."""
        return GameBoard(self.size, self._values.copy(), self._numbers.copy())

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.size and 0 <= col < self.size

    def _check_bounds(self, row: int, col: int) -> None:
        if not self.in_bounds(row, col):
            raise ValueError(f"Cell ({row}, {col}) is outside a {self.size}x{self.size} board")

    def get(self, row: int, col: int) -> CellValue:
        """Get the value at (row, col). None means the cell is empty."""
        self._check_bounds(row, col)
        return self._values[row, col]

    def kind(self, row: int, col: int) -> CellKind:
        self._check_bounds(row, col)
        return CellKind.NUMBER if self._numbers[row, col] else CellKind.OPERATOR

    def is_number(self, row: int, col: int) -> bool:
        return self.kind(row, col) is CellKind.NUMBER

    def cell(self, row: int, col: int) -> Cell:
        """Get the full cell record at (row, col)."""
        return Cell(self.get(row, col), self.kind(row, col), row, col)

    def cells(self) -> Iterator[Cell]:
        """Iterate over all cells in row-major order."""
        for i in range(self.size):
            for j in range(self.size):
                yield self.cell(i, j)

    def tokens(self, path) -> List[CellValue]:
        """Values along a path of (row, col) pairs."""
        return [self.get(r, c) for r, c in path]

    def get_row(self, row: int) -> List[CellValue]:
        return list(self._values[row, :])

    def get_col(self, col: int) -> List[CellValue]:
        return list(self._values[:, col])

    @property
    def number_mask(self) -> np.ndarray:
        """Read-only boolean mask of number cells."""
        return self._numbers

    def is_checkerboard(self) -> bool:
        """True if every cell's kind follows the (row + col) parity rule."""
        return bool(np.array_equal(self._numbers, checkerboard_kinds(self.size)))

    def count_empty(self) -> int:
        return int(sum(1 for v in self._values.flat if v is None))

    def is_complete(self) -> bool:
        """Check if every cell holds a value."""
        return self.count_empty() == 0

    def with_cell(self, row: int, col: int, value: CellValue, kind: Optional[CellKind] = None) -> GameBoard:
        """
        Return a new board with one cell replaced.

        Args:
            row, col: Cell position.
            value: New value, or None to clear the cell.
            kind: New cell kind. Keeps the current kind if omitted.
        """
        self._check_bounds(row, col)
        kind = kind or self.kind(row, col)
        _check_value(value, kind)

        values = self._values.copy()
        numbers = self._numbers.copy()
        numbers[row, col] = kind is CellKind.NUMBER
        values[row, col] = value
        return GameBoard(self.size, values, numbers)

    def to_string(self) -> str:
        """
        Convert the board to its text form.

        One line per row, tokens separated by single spaces. Empty number
        cells are written as '.', empty operator cells as '_'.
        """
        lines = []
        for i in range(self.size):
            tokens = []
            for j in range(self.size):
                value = self._values[i, j]
                if value is None:
                    tokens.append(EMPTY_NUMBER if self._numbers[i, j] else EMPTY_OPERATOR)
                else:
                    tokens.append(str(value))
            lines.append(" ".join(tokens))
        return "\n".join(lines)

    @classmethod
    def from_string(cls, s: str) -> GameBoard:
        """
        Create a board from its text form.

        Rows are separated by newlines or ';', tokens by whitespace. Digits
        make number cells, operator symbols make operator cells.
        """
        rows = [line.split() for line in s.replace(";", "\n").strip().splitlines() if line.strip()]
        size = len(rows)
        if any(len(r) != size for r in rows):
            raise InvalidBoardError("Board text must describe a square grid")
        if size not in BOARD_SIZES:
            raise InvalidBoardError(f"Board size must be one of {BOARD_SIZES}, got {size}")

        values = np.empty((size, size), dtype=object)
        numbers = np.zeros((size, size), dtype=bool)
        for i, row in enumerate(rows):
            for j, token in enumerate(row):
                if token == EMPTY_NUMBER:
                    numbers[i, j] = True
                elif token == EMPTY_OPERATOR:
                    numbers[i, j] = False
                elif token in OPERATORS:
                    values[i, j] = token
                elif token.isdigit():
                    values[i, j] = int(token)
                    numbers[i, j] = True
                else:
                    raise InvalidBoardError(f"Unknown token {token!r} at ({i}, {j})")
        return cls(size, values, numbers)

    @classmethod
    def from_2d_list(cls, data: List[List[CellValue]]) -> GameBoard:
        """Create a board from nested lists; ints become numbers, symbols operators."""
        size = len(data)
        values = np.empty((size, size), dtype=object)
        numbers = np.zeros((size, size), dtype=bool)
        for i, row in enumerate(data):
            if len(row) != size:
                raise InvalidBoardError("Board rows must all have the board's size")
            for j, value in enumerate(row):
                values[i, j] = value
                numbers[i, j] = not isinstance(value, str)
        return cls(size, values, numbers)

    def to_dicts(self) -> List[List[Dict[str, Any]]]:
        """Serialize to the nested cell payload used by board storage."""
        return [[self.cell(i, j).to_dict() for j in range(self.size)] for i in range(self.size)]

    @classmethod
    def from_dicts(cls, data: List[List[Dict[str, Any]]]) -> GameBoard:
        """Inverse of ``to_dicts``."""
        size = len(data)
        values = np.empty((size, size), dtype=object)
        numbers = np.zeros((size, size), dtype=bool)
        try:
            for i, row in enumerate(data):
                for j, cell in enumerate(row):
                    values[i, j] = cell.get("value")
                    numbers[i, j] = CellKind(cell["type"]) is CellKind.NUMBER
        except (KeyError, ValueError) as e:
            raise InvalidBoardError(f"Malformed cell payload: {e}") from e
        return cls(size, values, numbers)

    def __str__(self) -> str:
        """Pretty-print the board."""
        width = max([len(str(v)) for v in self._values.flat if v is not None] + [1])
        sep = "+" + "-" * ((width + 1) * self.size + 1) + "+"
        lines = [sep]
        for line in self.to_string().splitlines():
            lines.append("| " + " ".join(t.rjust(width) for t in line.split()) + " |")
        lines.append(sep)
        return "\n".join(lines)

    def __repr__(self) -> str:
        return f"GameBoard(size={self.size}, empty={self.count_empty()})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GameBoard):
            return False
        return (
            self.size == other.size
            and np.array_equal(self._numbers, other._numbers)
            and self.to_string() == other.to_string()
        )

    def __hash__(self) -> int:
        return hash(self.to_string())
