"""Authoring of custom boards and the solve-before-publish check."""

from __future__ import annotations
import logging
import random
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple
import numpy as np

from ..config import (
    AUTHORED_NUMBER_RANGE,
    AUTOFILL_NUMBERS,
    DEFAULT_BOARD_SIZE,
    MAX_SOLUTION_LENGTH,
    MIN_EXPRESSION_LENGTH,
    SUGGESTED_TARGET_COUNT,
)
from ..core.board import OPERATORS, CellKind, GameBoard
from ..core.evaluator import Number, evaluate, merge_adjacent_numbers
from ..errors import PublishError
from ..generator import Difficulty
from .session import GameSession, ReleaseOutcome, SessionState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CustomBoard:
    """A published custom board, ready to hand to storage."""
    name: str
    creator_name: str
    difficulty: str
    board: GameBoard
    targets: Tuple[Number, ...]
    is_solved: bool = True

    @property
    def board_size(self) -> int:
        return self.board.size

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "creatorName": self.creator_name,
            "difficulty": self.difficulty,
            "boardSize": self.board_size,
            "boardData": self.board.to_dicts(),
            "targets": list(self.targets),
            "isSolved": self.is_solved,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> CustomBoard:
        return cls(
            name=data["name"],
            creator_name=data["creatorName"],
            difficulty=data["difficulty"],
            board=GameBoard.from_dicts(data["boardData"]),
            targets=tuple(data["targets"]),
            is_solved=data.get("isSolved", False),
        )

    def new_session(self, **kwargs) -> GameSession:
        """Start a regular timed game on this board."""
        session = GameSession(**kwargs)
        session.load(self.board, self.targets, self.difficulty)
        return session


def empty_board(size: int) -> GameBoard:
    """A board of empty number cells, as a fresh constructor shows it."""
    return GameBoard(size, number_mask=np.ones((size, size), dtype=bool))


def parse_cell_value(value) -> Tuple[Any, CellKind]:
    """
    Interpret user input for a cell.

    Accepts an operator symbol or an integer in the authored range
    (given as int or digit string).
    """
    if isinstance(value, str):
        text = value.strip()
        if text in OPERATORS:
            return text, CellKind.OPERATOR
        if not text.isdigit():
            raise ValueError(f"Not a number or operator: {value!r}")
        value = int(text)
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"Not a number or operator: {value!r}")

    low, high = AUTHORED_NUMBER_RANGE
    if not low <= value <= high:
        raise ValueError(f"Numbers must be between {low} and {high}, got {value}")
    return value, CellKind.NUMBER


def autofill_operators(difficulty: Difficulty) -> Tuple[str, ...]:
    if difficulty is Difficulty.EASY:
        return ("+", "-", "*", "/")
    return ("+", "-", "*", "/", "^")


def suggest_targets(
    board: GameBoard, rng: random.Random, count: int = SUGGESTED_TARGET_COUNT
) -> List[Number]:
    """
    Propose targets for an authored board from random straight lines.

    Each attempt picks a horizontal or vertical line of 3 to min(7, size)
    cells, glues neighbouring numbers together and keeps the value if it
    evaluates and is new. Fewer than ``count`` values may come back.
    """
    targets: List[Number] = []
    longest = min(MAX_SOLUTION_LENGTH, board.size)
    for _ in range(count):
        length = rng.randint(MIN_EXPRESSION_LENGTH, longest)
        fixed = rng.randrange(board.size)
        first = rng.randrange(board.size - length + 1)
        if rng.random() > 0.5:
            path = [(fixed, c) for c in range(first, first + length)]
        else:
            path = [(r, fixed) for r in range(first, first + length)]

        tokens = [v for v in board.tokens(path) if v is not None]
        value = evaluate(merge_adjacent_numbers(tokens))
        if value is not None and value not in targets:
            targets.append(value)
    return targets


class BoardConstructor:
    """
    Editor state for building a custom board.

    The author fills cells and declares targets, then proves the board can
    be solved by finding every target in test mode, which plays the board
    with concatenation selection. Any edit to cells or targets after that
    throws the proof away and the board has to be solved again before it
    can be published.
    """

    def __init__(
        self,
        size: int = DEFAULT_BOARD_SIZE,
        difficulty=Difficulty.EASY,
        rng: Optional[random.Random] = None,
    ):
        self.rng = rng or random.Random()
        self.name = ""
        self.creator_name = ""
        self.difficulty = Difficulty.from_name(difficulty)
        self.reset(size)

    def reset(self, size: Optional[int] = None) -> None:
        """Start over with an empty board, optionally of a new size."""
        self.board = empty_board(size or self.board.size)
        self.targets: List[Number] = []
        self.test_session: Optional[GameSession] = None
        self.is_solved = False
        self.is_dirty = False

    def _invalidate(self, reason: str) -> None:
        had_progress = self.is_solved or (
            self.test_session is not None and bool(self.test_session.found_targets)
        )
        if had_progress:
            self.is_dirty = True
            logger.info("%s; the board must be solved again before publishing", reason)
        self.is_solved = False
        self.test_session = None

    def set_cell(self, row: int, col: int, value) -> None:
        """Set a cell from user input; the cell's kind follows the value."""
        parsed, kind = parse_cell_value(value)
        self.board = self.board.with_cell(row, col, parsed, kind)
        self._invalidate("Board changed")

    def set_kind(self, row: int, col: int, kind: CellKind) -> None:
        """Switch a cell between number and operator, clearing its value."""
        self.board = self.board.with_cell(row, col, None, kind)
        self._invalidate("Board changed")

    def clear_cell(self, row: int, col: int) -> None:
        self.board = self.board.with_cell(row, col, None)
        self._invalidate("Board changed")

    def auto_fill(self) -> None:
        """
        Fill every empty cell with a random value of its kind.

        Numbers are drawn from 0-9; operators include '^' above easy. If no
        targets are declared yet, a few are suggested from the new board.
        """
        operators = autofill_operators(self.difficulty)
        board = self.board
        for cell in self.board.cells():
            if not cell.is_empty:
                continue
            if cell.is_number:
                value = self.rng.choice(AUTOFILL_NUMBERS)
            else:
                value = self.rng.choice(operators)
            board = board.with_cell(cell.row, cell.col, value)
        self.board = board
        self._invalidate("Board auto-filled")

        if not self.targets:
            self.targets = suggest_targets(self.board, self.rng)

    def add_target(self, value) -> bool:
        """Declare a target. Returns False if it was already declared."""
        value = float(value)
        if value.is_integer():
            value = int(value)
        if value in self.targets:
            return False
        self.targets.append(value)
        self._invalidate("Targets changed")
        return True

    def remove_target(self, value) -> bool:
        if value not in self.targets:
            return False
        self.targets.remove(value)
        self._invalidate("Targets changed")
        return True

    @property
    def is_testing(self) -> bool:
        return self.test_session is not None

    def start_test(self) -> GameSession:
        """Enter test mode: play the current board with concatenation selection."""
        if not self.board.is_complete():
            raise ValueError("Fill every cell before testing the board")
        if not self.targets:
            raise ValueError("Add at least one target before testing the board")
        self.test_session = GameSession(mode="concatenation")
        self.test_session.load(self.board, self.targets, self.difficulty)
        return self.test_session

    def stop_test(self) -> None:
        """Leave test mode. A partly solved test does not count."""
        if self.test_session is not None and not self.is_solved and self.test_session.found_targets:
            self.is_dirty = True
            logger.info("Test interrupted; the board must be solved again before publishing")
        self.test_session = None

    def tap(self, row: int, col: int) -> bool:
        """Add a cell to the test selection."""
        if self.test_session is None:
            raise ValueError("Not in test mode")
        return self.test_session.selection_extend(row, col)

    def release(self) -> Optional[ReleaseOutcome]:
        """Submit the test selection; solving every target marks the board solved."""
        if self.test_session is None:
            raise ValueError("Not in test mode")
        outcome = self.test_session.selection_release()
        self.test_session.clear_selection()
        if self.test_session.state is SessionState.WON:
            self.is_solved = True
            self.is_dirty = False
        return outcome

    @property
    def found_targets(self):
        if self.test_session is None:
            return frozenset()
        return self.test_session.found_targets

    def validate(self) -> List[str]:
        """Reasons the board cannot be published yet (empty if it can)."""
        reasons = []
        if not self.name.strip():
            reasons.append("Board name is required")
        if not self.creator_name.strip():
            reasons.append("Creator name is required")
        if not self.targets:
            reasons.append("At least one target is required")
        if not self.board.is_complete():
            reasons.append("Every cell must be filled")
        if not self.is_solved or self.is_dirty:
            reasons.append("The board must be solved before publishing")
        return reasons

    def publish(self) -> CustomBoard:
        """
        Freeze the board for storage.

        Raises:
            PublishError: If any validation check fails.
        """
        reasons = self.validate()
        if reasons:
            raise PublishError(reasons)
        published = CustomBoard(
            name=self.name.strip(),
            creator_name=self.creator_name.strip(),
            difficulty=self.difficulty.value,
            board=self.board,
            targets=tuple(self.targets),
        )
        logger.info("Published custom board %r by %s", published.name, published.creator_name)
        return published
