"""Exhaustive straight-line search for expressions that hit targets."""

from __future__ import annotations
from dataclasses import dataclass
from typing import Iterator, Optional, Sequence, Tuple

from ..config import MAX_SOLUTION_LENGTH, MIN_EXPRESSION_LENGTH
from ..core.board import GameBoard
from ..core.evaluator import Number, evaluate, format_expression
from ..core.validator import DIRECTIONS, alternates, ray
from .base_solver import BaseSearcher

Coord = Tuple[int, int]


@dataclass(frozen=True)
class Solution:
    """One line on the board whose expression equals a target."""
    path: Tuple[Coord, ...]
    target: Number
    expression_text: str

    def to_dict(self):
        return {
            "cells": [{"row": r, "col": c} for r, c in self.path],
            "target": self.target,
            "expression": self.expression_text,
        }


def max_solution_length(board_size: int) -> int:
    return min(board_size, MAX_SOLUTION_LENGTH)


def iter_solutions(board: GameBoard, targets: Sequence[Number], stats=None) -> Iterator[Solution]:
    """
    Lazily enumerate every straight line that evaluates to one of ``targets``.

    Lines start on a number cell, follow one of the eight directions and
    have odd length from 3 to min(size, 7). Lines that leave the board or
    break the number/operator alternation are skipped. Nothing is
    deduplicated: the same target can be reached by many lines, including
    the same cells read in the opposite direction.

    Each call returns a fresh iterator, so the search can be restarted.
    """
    wanted = set(targets)
    if not wanted:
        return
    longest = max_solution_length(board.size)

    for cell in board.cells():
        if not cell.is_number:
            continue
        for direction in DIRECTIONS:
            for length in range(MIN_EXPRESSION_LENGTH, longest + 1, 2):
                path = ray(board, (cell.row, cell.col), direction, length)
                if path is None:
                    # longer rays in this direction leave the board too
                    break
                if not alternates(board, path):
                    continue
                tokens = board.tokens(path)
                result = evaluate(tokens)
                if stats is not None:
                    stats.evaluations += 1
                if result is not None and result in wanted:
                    yield Solution(tuple(path), result, format_expression(tokens))


def find_all_solutions(board: GameBoard, targets: Sequence[Number]):
    """Eagerly collect every solution."""
    return list(iter_solutions(board, targets))


def first_solution(board: GameBoard, target: Number) -> Optional[Solution]:
    """First solution for a single target, or None if the board has none."""
    return next(iter_solutions(board, [target]), None)


class SolutionSearcher(BaseSearcher):
    """
    Hint searcher run when a player gives up.

    Wraps ``iter_solutions`` with timing and counts, for callers that want
    every solution at once.
    """

    name = "LineSearch"

    def _search(self, board: GameBoard, targets: Sequence[Number]) -> Iterator[Solution]:
        covered = set()
        for solution in iter_solutions(board, targets, stats=self.stats):
            covered.add(solution.target)
            self.stats.targets_covered = len(covered)
            yield solution
