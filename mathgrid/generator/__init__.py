"""Generator module for creating boards and their targets."""

from .generator import BoardGenerator, Difficulty
from .targets import TargetGenerator, generate_targets

__all__ = ["BoardGenerator", "Difficulty", "TargetGenerator", "generate_targets"]
