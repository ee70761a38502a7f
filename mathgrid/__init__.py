"""Math grid puzzle engine: boards, expressions, targets, hints and sessions."""

from .core import GameBoard, CellKind, evaluate
from .generator import BoardGenerator, Difficulty, generate_targets
from .solvers import SolutionSearcher, iter_solutions
from .game import GameSession, SessionState, BoardConstructor

__version__ = "1.0.0"

__all__ = [
    "GameBoard",
    "CellKind",
    "evaluate",
    "BoardGenerator",
    "Difficulty",
    "generate_targets",
    "SolutionSearcher",
    "iter_solutions",
    "GameSession",
    "SessionState",
    "BoardConstructor",
]
