"""Game orchestration: play sessions and custom board authoring."""

from .session import GameSession, GameResult, ReleaseOutcome, SessionState, Snapshot, format_time
from .constructor import BoardConstructor, CustomBoard, suggest_targets

__all__ = [
    "GameSession",
    "GameResult",
    "ReleaseOutcome",
    "SessionState",
    "Snapshot",
    "format_time",
    "BoardConstructor",
    "CustomBoard",
    "suggest_targets",
]
