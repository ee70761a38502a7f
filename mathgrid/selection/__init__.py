"""Selection strategies for building expressions from board input."""

from .engine import (
    SelectionEngine,
    SelectionState,
    Release,
    LinearSelection,
    ConcatenationSelection,
    SELECTION_MODES,
    create_selection,
)

__all__ = [
    "SelectionEngine",
    "SelectionState",
    "Release",
    "LinearSelection",
    "ConcatenationSelection",
    "SELECTION_MODES",
    "create_selection",
]
