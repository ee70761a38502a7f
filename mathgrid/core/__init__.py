"""Core module for board representation, path validation and evaluation."""

from .board import GameBoard, Cell, CellKind, OPERATORS
from .evaluator import evaluate, merge_adjacent_numbers, format_expression, format_number
from .validator import is_adjacent, is_valid_path, linear_path, alternates, can_extend_line, DIRECTIONS

__all__ = [
    "GameBoard",
    "Cell",
    "CellKind",
    "OPERATORS",
    "evaluate",
    "merge_adjacent_numbers",
    "format_expression",
    "format_number",
    "is_adjacent",
    "is_valid_path",
    "linear_path",
    "alternates",
    "can_extend_line",
    "DIRECTIONS",
]
