"""Left-to-right expression evaluation over cell tokens."""

from __future__ import annotations
import math
from typing import List, Optional, Sequence, Union

from ..config import EXPRESSION_PLACEHOLDER, MIN_EXPRESSION_LENGTH, RESULT_PRECISION
from .board import EMPTY_NUMBER, OPERATORS

Number = Union[int, float]
Token = Union[int, float, str]


def is_number_token(token) -> bool:
    return isinstance(token, (int, float)) and not isinstance(token, bool)


def is_operator_token(token) -> bool:
    return isinstance(token, str) and token in OPERATORS


def is_well_formed(tokens: Sequence[Token]) -> bool:
    """
    Check the shape of an expression without evaluating it.

    Well-formed means odd length of at least 3, numbers at even positions
    and operators at odd positions.
    """
    if len(tokens) < MIN_EXPRESSION_LENGTH or len(tokens) % 2 == 0:
        return False
    for i, token in enumerate(tokens):
        if i % 2 == 0 and not is_number_token(token):
            return False
        if i % 2 == 1 and not is_operator_token(token):
            return False
    return True


def _round_result(value: float) -> Optional[Number]:
    # Half-up rounding, applied once to the final value
    scale = 10 ** RESULT_PRECISION
    scaled = value * scale
    if not math.isfinite(scaled):
        return None
    rounded = math.floor(scaled + 0.5) / scale
    if rounded.is_integer():
        return int(rounded)
    return rounded


def _apply(acc: float, op: str, operand: float) -> Optional[float]:
    if op == "+":
        return acc + operand
    if op == "-":
        return acc - operand
    if op == "*":
        return acc * operand
    if op == "/":
        if operand == 0:
            return None
        return acc / operand
    # "^": a negative base is never allowed, whatever the exponent
    if acc < 0:
        return None
    try:
        return acc ** operand
    except (OverflowError, ZeroDivisionError):
        return None


def evaluate(tokens: Sequence[Token]) -> Optional[Number]:
    """
    Evaluate an expression strictly left to right, with no precedence.

    Args:
        tokens: Alternating numbers and operator symbols, e.g. [5, '-', 3, '*', 2].

    Returns:
        The result rounded to two decimals (an int when it is whole), or
        None when the expression is malformed, divides by zero, raises a
        negative base to a power or overflows.
    """
    if not is_well_formed(tokens):
        return None

    acc = float(tokens[0])
    for op, operand in zip(tokens[1::2], tokens[2::2]):
        acc = _apply(acc, op, float(operand))
        if acc is None or not math.isfinite(acc):
            return None

    return _round_result(acc)


def merge_adjacent_numbers(tokens: Sequence[Token]) -> List[Token]:
    """
    Join runs of neighbouring number tokens into one multi-digit number.

    [1, 2, '+', 3] becomes [12, '+', 3]. Operators are left in place and
    act as boundaries between numbers.
    """
    merged: List[Token] = []
    for token in tokens:
        if merged and is_number_token(token) and is_number_token(merged[-1]):
            merged[-1] = int(f"{format_number(merged[-1])}{format_number(token)}")
        else:
            merged.append(token)
    return merged


def format_number(value: Number) -> str:
    """Render a number the way the board shows it (no trailing .0)."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _token_text(token: Token) -> str:
    if token is None:
        return EMPTY_NUMBER
    return format_number(token) if is_number_token(token) else str(token)


def format_expression(tokens: Sequence[Token], placeholder: str = EXPRESSION_PLACEHOLDER) -> str:
    """
    Render tokens for display.

    Complete expressions longer than three tokens are shown fully
    parenthesized in evaluation order, e.g. ((2 + 2) * 7). Incomplete ones
    end with '...' to show an operand is still expected.
    """
    parts = [_token_text(t) for t in tokens]
    if not parts:
        return placeholder
    if len(parts) == 1:
        return parts[0]
    if len(parts) % 2 == 0:
        return " ".join(parts + ["..."])
    if len(parts) == 3:
        return " ".join(parts)

    text = parts[0]
    for op, operand in zip(parts[1::2], parts[2::2]):
        text = f"({text} {op} {operand})"
    return text
