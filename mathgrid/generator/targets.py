"""Target derivation from a freshly generated board."""

from __future__ import annotations
import logging
from typing import Iterator, List, Optional, Sequence

from ..config import MAX_TARGET_VALUE, target_count_for
from ..core.board import GameBoard
from ..core.evaluator import Number, evaluate

logger = logging.getLogger(__name__)


def _runs(line: Sequence) -> Iterator[List]:
    """Odd-length slices starting and ending on even indices, shortest first per start."""
    for start in range(0, len(line), 2):
        for end in range(start + 2, len(line), 2):
            yield list(line[start:end + 1])


def is_acceptable_target(value: Optional[Number]) -> bool:
    return value is not None and 0 < value <= MAX_TARGET_VALUE


class TargetGenerator:
    """
    Derives the fixed target set of a generated board.

    For each index i the generator scans row i, then column i, for runs
    that start and end on even offsets and so read number, operator, ...,
    number on a checkerboard board. Each valid, positive, unseen result up
    to MAX_TARGET_VALUE becomes a target until enough are collected. The
    scan order is fixed, so a board always yields the same targets.
    """

    def __init__(self, count: Optional[int] = None):
        """
        Args:
            count: Number of targets wanted. Defaults to max(4, size // 2).
        """
        self.count = count

    def generate(self, board: GameBoard) -> List[Number]:
        count = self.count if self.count is not None else target_count_for(board.size)
        targets: List[Number] = []
        seen = set()

        for i in range(board.size):
            for line in (board.get_row(i), board.get_col(i)):
                for tokens in _runs(line):
                    if len(targets) >= count:
                        return targets
                    value = evaluate(tokens)
                    if is_acceptable_target(value) and value not in seen:
                        targets.append(value)
                        seen.add(value)

        if len(targets) < count:
            logger.debug("Board yielded only %d of %d targets", len(targets), count)
        return targets


def generate_targets(board: GameBoard, count: Optional[int] = None) -> List[Number]:
    """Convenience wrapper around TargetGenerator."""
    return TargetGenerator(count).generate(board)
