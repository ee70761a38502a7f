"""Selection strategies that turn pointer input into a live expression."""

from __future__ import annotations
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional, Tuple

from ..core.board import GameBoard
from ..core.evaluator import Number, Token, evaluate, format_expression, merge_adjacent_numbers
from ..core.validator import alternates, can_extend_line, linear_path

logger = logging.getLogger(__name__)

Coord = Tuple[int, int]


@dataclass(frozen=True)
class SelectionState:
    """What the renderer shows for the current selection."""
    path: Tuple[Coord, ...] = ()
    tokens: Tuple[Token, ...] = ()
    expression_text: str = ""
    result: Optional[Number] = None

    @property
    def is_empty(self) -> bool:
        return not self.path


@dataclass(frozen=True)
class Release:
    """A finalized selection handed to the session for scoring."""
    path: Tuple[Coord, ...]
    tokens: Tuple[Token, ...]
    result: Optional[Number]
    expression_text: str = ""

    @property
    def is_evaluable(self) -> bool:
        return self.result is not None


class SelectionEngine(ABC):
    """
    Base class for selection strategies.

    A strategy owns the current path on one board and republishes
    ``state`` after every accepted input event.
    """

    name: str = "base"

    def __init__(self, board: GameBoard):
        self.board = board
        self.state = SelectionState()
        self.active = False

    def _publish(self, path: List[Coord]) -> None:
        tokens = self.normalize(self.board.tokens(path))
        self.state = SelectionState(
            path=tuple(path),
            tokens=tuple(tokens),
            expression_text=format_expression(tokens),
            result=evaluate(tokens),
        )

    def clear(self) -> None:
        """Drop the current selection."""
        self.state = SelectionState()
        self.active = False

    def release(self) -> Optional[Release]:
        """
        Finalize the selection.

        Returns:
            The released path with its evaluated result, or None if nothing
            was being selected. The path stays visible until ``clear``.
        """
        if not self.active:
            return None
        self.active = False
        return Release(
            path=self.state.path,
            tokens=self.state.tokens,
            result=self.state.result,
            expression_text=self.state.expression_text,
        )

    @abstractmethod
    def start(self, row: int, col: int) -> bool:
        """Begin a selection at (row, col). Returns True if accepted."""

    @abstractmethod
    def extend(self, row: int, col: int) -> bool:
        """Move or add to the selection. Returns True if the path changed."""

    def normalize(self, tokens: List[Token]) -> List[Token]:
        """Turn raw cell values into the expression that gets evaluated."""
        return list(tokens)


class LinearSelection(SelectionEngine):
    """
    Drag selection used in timed play.

    The start cell is fixed on pointer-down. Every move recomputes the
    whole straight path from the start to the pointer, and the path must
    read number, operator, number, ... or the move is ignored.
    """

    name = "linear"

    def __init__(self, board: GameBoard):
        super().__init__(board)
        self.anchor: Optional[Coord] = None

    def start(self, row: int, col: int) -> bool:
        self.clear()
        if not self.board.in_bounds(row, col) or not self.board.is_number(row, col):
            logger.debug("Selection must start on a number cell, got (%d, %d)", row, col)
            return False
        self.anchor = (row, col)
        self.active = True
        self._publish([self.anchor])
        return True

    def extend(self, row: int, col: int) -> bool:
        if not self.active or not self.board.in_bounds(row, col):
            return False

        path = linear_path(self.anchor, (row, col))
        if not alternates(self.board, path):
            logger.debug("Rejected path to (%d, %d): tokens do not alternate", row, col)
            return False
        if tuple(path) == self.state.path:
            return False
        self._publish(path)
        return True

    def clear(self) -> None:
        super().clear()
        self.anchor = None


class ConcatenationSelection(SelectionEngine):
    """
    Tap-by-tap selection used when building and testing custom boards.

    Each tapped cell must touch the previous one and stay on the line the
    selection already follows; anything else starts over. Tokens need not
    alternate: neighbouring numbers are glued into multi-digit numbers
    before evaluation.
    """

    name = "concatenation"

    def start(self, row: int, col: int) -> bool:
        self.clear()
        if not self.board.in_bounds(row, col):
            return False
        cell = self.board.cell(row, col)
        if cell.is_empty or not cell.is_number:
            logger.debug("Selection must start on a filled number cell, got (%d, %d)", row, col)
            return False
        self.active = True
        self._publish([(row, col)])
        return True

    def extend(self, row: int, col: int) -> bool:
        if not self.active:
            return self.start(row, col)

        path = list(self.state.path)
        new = (row, col)
        if (
            not self.board.in_bounds(row, col)
            or self.board.get(row, col) is None
            or not can_extend_line(path, new)
        ):
            logger.debug("Tap on (%d, %d) breaks the line, resetting selection", row, col)
            self.clear()
            return False

        path.append(new)
        self._publish(path)
        return True

    def tap(self, row: int, col: int) -> bool:
        """Start a selection if none is active, otherwise try to extend it."""
        return self.extend(row, col)

    def normalize(self, tokens: List[Token]) -> List[Token]:
        return merge_adjacent_numbers(tokens)


SELECTION_MODES = {
    LinearSelection.name: LinearSelection,
    ConcatenationSelection.name: ConcatenationSelection,
}


def create_selection(mode: str, board: GameBoard) -> SelectionEngine:
    """Build the selection strategy registered under ``mode``."""
    try:
        return SELECTION_MODES[mode](board)
    except KeyError:
        raise ValueError(f"Unknown selection mode: {mode!r}") from None
