"""Base searcher interface and run statistics."""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Sequence
import time
import tracemalloc

from ..core.board import GameBoard


@dataclass
class SearchStats:
    """Statistics from a search run."""
    # Core metrics
    time_seconds: float = 0.0
    memory_bytes: int = 0
    evaluations: int = 0
    solutions: int = 0

    # Targets with at least one solution
    targets_covered: int = 0

    algorithm: str = ""
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert stats to dictionary."""
        return {
            "time_seconds": self.time_seconds,
            "memory_bytes": self.memory_bytes,
            "evaluations": self.evaluations,
            "solutions": self.solutions,
            "targets_covered": self.targets_covered,
            "algorithm": self.algorithm,
            **self.extra
        }


class BaseSearcher(ABC):
    """Abstract base class for board searchers."""

    name: str = "BaseSearcher"

    def __init__(self, track_memory: bool = False):
        self.track_memory = track_memory
        self.stats = SearchStats(algorithm=self.name)

    def search(self, board: GameBoard, targets: Sequence) -> tuple[List, SearchStats]:
        """
        Run a full search with timing and optional memory tracking.

        Args:
            board: The board to search.
            targets: Values the search is looking for.

        Returns:
            Tuple of (results, stats).
        """
        self.stats = SearchStats(algorithm=self.name)

        if self.track_memory:
            tracemalloc.start()
        start_time = time.perf_counter()

        try:
            results = list(self._search(board, targets))
        finally:
            self.stats.time_seconds = time.perf_counter() - start_time
            if self.track_memory:
                _, peak = tracemalloc.get_traced_memory()
                tracemalloc.stop()
                self.stats.memory_bytes = peak

        self.stats.solutions = len(results)
        return results, self.stats

    @abstractmethod
    def _search(self, board: GameBoard, targets: Sequence):
        """
        Yield results for a board. Implemented by subclasses.

        Subclasses may update ``self.stats`` while iterating.
        """

    def reset_stats(self) -> None:
        """Reset search statistics."""
        self.stats = SearchStats(algorithm=self.name)
