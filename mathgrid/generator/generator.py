"""Math grid board generator with difficulty-gated operator sets."""

from __future__ import annotations
import json
import logging
import os
import random
from enum import Enum
from typing import List, Optional, Tuple
import numpy as np

from ..config import BOARD_SIZES, DEFAULT_BOARD_SIZE, GENERATED_NUMBERS
from ..core.board import GameBoard, checkerboard_kinds
from .targets import generate_targets

logger = logging.getLogger(__name__)


class Difficulty(Enum):
    """Difficulty levels for math grid boards."""
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"

    @property
    def operators(self) -> Tuple[str, ...]:
        """Operator symbols a generated board of this difficulty may contain."""
        sets = {
            Difficulty.EASY: ("+", "-", "*"),
            Difficulty.MEDIUM: ("+", "-", "*", "/"),
            Difficulty.HARD: ("+", "-", "*", "/", "^"),
        }
        return sets[self]

    @classmethod
    def from_name(cls, name) -> Difficulty:
        """Accept a Difficulty or its (case-insensitive) name."""
        if isinstance(name, cls):
            return name
        try:
            return cls(str(name).strip().lower())
        except ValueError:
            raise ValueError(f"Unknown difficulty: {name!r}") from None


class BoardGenerator:
    """
    Generator for math grid boards.

    Cells where (row + col) is even get a random digit 1-9, the others a
    random operator from the difficulty's set. Boards are not reproducible
    unless a seed or random source is supplied.
    """

    def __init__(self, seed: Optional[int] = None, rng: Optional[random.Random] = None):
        """
        Initialize the generator.

        Args:
            seed: Random seed for reproducibility.
            rng: Random source to draw from. Takes precedence over seed.
        """
        self.rng = rng if rng is not None else random.Random(seed)

    def generate(self, difficulty: Difficulty = Difficulty.EASY, size: int = DEFAULT_BOARD_SIZE) -> GameBoard:
        """
        Generate a board.

        Args:
            difficulty: Selects the operator set.
            size: Board size (5, 10 or 15).
        """
        if size not in BOARD_SIZES:
            raise ValueError(f"Board size must be one of {BOARD_SIZES}, got {size}")
        difficulty = Difficulty.from_name(difficulty)

        mask = checkerboard_kinds(size)
        values = np.empty((size, size), dtype=object)
        for (row, col), is_number in np.ndenumerate(mask):
            if is_number:
                values[row, col] = self.rng.choice(GENERATED_NUMBERS)
            else:
                values[row, col] = self.rng.choice(difficulty.operators)

        logger.debug("Generated %dx%d %s board", size, size, difficulty.value)
        return GameBoard(size, values, mask)

    def generate_with_targets(
        self, difficulty: Difficulty = Difficulty.EASY, size: int = DEFAULT_BOARD_SIZE
    ) -> Tuple[GameBoard, List]:
        """Generate a board along with the targets derived from it."""
        board = self.generate(difficulty, size)
        return board, generate_targets(board)

    def generate_batch(
        self, count: int, difficulty: Difficulty = Difficulty.EASY, size: int = DEFAULT_BOARD_SIZE
    ) -> List[GameBoard]:
        """Generate several boards of the same difficulty and size."""
        return [self.generate(difficulty, size) for _ in range(count)]

    @staticmethod
    def save_to_folder(boards: List[GameBoard], folder_path: str, prefix: str = "board") -> None:
        """
        Save boards to a folder as individual JSON files with their targets.

        Args:
            boards: Boards to save.
            folder_path: Directory to save into.
            prefix: Filename prefix (default: "board").
        """
        os.makedirs(folder_path, exist_ok=True)

        for i, board in enumerate(boards, 1):
            file_path = os.path.join(folder_path, f"{prefix}_{i}.json")
            with open(file_path, "w") as f:
                json.dump(
                    {"board": board.to_string(), "targets": generate_targets(board)},
                    f,
                    indent=2,
                )
