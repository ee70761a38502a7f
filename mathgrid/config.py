"""Engine-wide constants and game configuration."""

from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Optional, Tuple

# Board geometry
BOARD_SIZES: Tuple[int, ...] = (5, 10, 15)
DEFAULT_BOARD_SIZE = 5

# Generated boards use single digits; authored boards allow two-digit numbers
GENERATED_NUMBERS: Tuple[int, ...] = tuple(range(1, 10))
AUTHORED_NUMBER_RANGE: Tuple[int, int] = (0, 99)
AUTOFILL_NUMBERS: Tuple[int, ...] = tuple(range(0, 10))

# Targets
MIN_TARGET_COUNT = 4
MAX_TARGET_VALUE = 1000
SUGGESTED_TARGET_COUNT = 3

# Evaluation and search
RESULT_PRECISION = 2
MIN_EXPRESSION_LENGTH = 3
MAX_SOLUTION_LENGTH = 7

# How long a released selection stays visible before the surface clears it
SELECTION_CLEAR_DELAY_MS = 500

EXPRESSION_PLACEHOLDER = ""


def target_count_for(board_size: int) -> int:
    """Number of targets a generated board of this size gets."""
    return max(MIN_TARGET_COUNT, board_size // 2)


@dataclass(frozen=True)
class GameConfig:
    """Settings a surface picks before starting a session."""
    difficulty: str = "easy"
    board_size: int = DEFAULT_BOARD_SIZE
    mode: str = "linear"
    seed: Optional[int] = None

    def __post_init__(self):
        if self.board_size not in BOARD_SIZES:
            raise ValueError(f"Board size must be one of {BOARD_SIZES}, got {self.board_size}")
        if self.mode not in ("linear", "concatenation"):
            raise ValueError(f"Unknown selection mode: {self.mode}")


def configure_logging(verbose: bool = False) -> None:
    """Set up root logging for command-line use. Library code never calls this."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logging.getLogger().setLevel(level)
