"""Benchmarking framework for board generation and solution search."""

from __future__ import annotations
import json
import logging
import os
import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from tqdm import tqdm

from ..config import BOARD_SIZES, target_count_for
from ..core.board import GameBoard
from ..generator import BoardGenerator, Difficulty, generate_targets
from ..solvers import SolutionSearcher

logger = logging.getLogger(__name__)


@dataclass
class BenchmarkResult:
    """Results from one generated board."""
    board_id: int
    difficulty: str
    board_size: int
    targets_found: int
    targets_expected: int
    target_time_seconds: float
    search_time_seconds: float
    memory_bytes: int
    evaluations: int
    solutions: int
    targets_covered: int
    extra: Dict[str, Any] = field(default_factory=dict)

    @property
    def fully_targeted(self) -> bool:
        """True if the board supplied as many targets as its size asks for."""
        return self.targets_found >= self.targets_expected

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "board_id": self.board_id,
            "difficulty": self.difficulty,
            "board_size": self.board_size,
            "targets_found": self.targets_found,
            "targets_expected": self.targets_expected,
            "target_time_seconds": self.target_time_seconds,
            "search_time_seconds": self.search_time_seconds,
            "memory_bytes": self.memory_bytes,
            "memory_mb": self.memory_bytes / (1024 * 1024),
            "evaluations": self.evaluations,
            "solutions": self.solutions,
            "targets_covered": self.targets_covered,
            **self.extra
        }


class Benchmark:
    """
    Benchmark for the puzzle engine.

    Generates boards for every difficulty and size, derives their targets
    and runs the hint search on each, collecting timings and counts.
    """

    def __init__(
        self,
        boards_per_config: int = 10,
        difficulties: Optional[List[Difficulty]] = None,
        board_sizes: Optional[List[int]] = None,
        track_memory: bool = False,
        seed: Optional[int] = None
    ):
        """
        Initialize the benchmark.

        Args:
            boards_per_config: Boards per (difficulty, size) pair.
            difficulties: Difficulties to test (default: all).
            board_sizes: Board sizes to test (default: all).
            track_memory: Record peak memory of each search (slower).
            seed: Random seed for reproducibility.
        """
        self.boards_per_config = boards_per_config
        self.difficulties = difficulties or list(Difficulty)
        self.board_sizes = board_sizes or list(BOARD_SIZES)
        self.seed = seed
        self.searcher = SolutionSearcher(track_memory=track_memory)

        self.boards: Dict[Tuple[str, int], List[GameBoard]] = {}
        self.results: List[BenchmarkResult] = []

    def generate_boards(self) -> None:
        """Generate all boards for benchmarking."""
        generator = BoardGenerator(seed=self.seed)

        for difficulty in tqdm(self.difficulties, desc="Difficulties"):
            for size in self.board_sizes:
                self.boards[(difficulty.value, size)] = generator.generate_batch(
                    self.boards_per_config, difficulty, size
                )

    def run(self, show_progress: bool = True) -> List[BenchmarkResult]:
        """
        Run the full benchmark suite.

        Returns:
            List of BenchmarkResult objects.
        """
        if not self.boards:
            self.generate_boards()

        self.results = []
        total = sum(len(boards) for boards in self.boards.values())
        pbar = tqdm(total=total, desc="Benchmarking", disable=not show_progress)

        for (difficulty, size), boards in self.boards.items():
            for board_id, board in enumerate(boards):
                self.results.append(self._run_single(board, board_id, difficulty))
                pbar.update(1)

        pbar.close()
        logger.info("Benchmarked %d boards", len(self.results))
        return self.results

    def _run_single(self, board: GameBoard, board_id: int, difficulty: str) -> BenchmarkResult:
        """Derive targets and search one board."""
        start = time.perf_counter()
        targets = generate_targets(board)
        target_time = time.perf_counter() - start

        _, stats = self.searcher.search(board, targets)

        return BenchmarkResult(
            board_id=board_id,
            difficulty=difficulty,
            board_size=board.size,
            targets_found=len(targets),
            targets_expected=target_count_for(board.size),
            target_time_seconds=target_time,
            search_time_seconds=stats.time_seconds,
            memory_bytes=stats.memory_bytes,
            evaluations=stats.evaluations,
            solutions=stats.solutions,
            targets_covered=stats.targets_covered,
            extra={"targets": targets},
        )

    def get_summary(self) -> Dict[str, Any]:
        """Get summary statistics from benchmark results."""
        summary = {
            "total_boards": len(self.results),
            "difficulties": [d.value for d in self.difficulties],
            "board_sizes": list(self.board_sizes),
            "results_by_size": {},
            "results_by_difficulty": {},
        }

        for size in self.board_sizes:
            size_results = [r for r in self.results if r.board_size == size]
            if size_results:
                summary["results_by_size"][str(size)] = self._summarize(size_results)

        for difficulty in self.difficulties:
            diff_results = [r for r in self.results if r.difficulty == difficulty.value]
            if diff_results:
                summary["results_by_difficulty"][difficulty.value] = self._summarize(diff_results)

        return summary

    @staticmethod
    def _summarize(results: List[BenchmarkResult]) -> Dict[str, Any]:
        search_times = [r.search_time_seconds for r in results]
        full = [r for r in results if r.fully_targeted]
        return {
            "boards": len(results),
            "fully_targeted_pct": len(full) / len(results) * 100,
            "avg_target_time_seconds": sum(r.target_time_seconds for r in results) / len(results),
            "avg_search_time_seconds": sum(search_times) / len(search_times),
            "max_search_time_seconds": max(search_times),
            "avg_evaluations": sum(r.evaluations for r in results) / len(results),
            "avg_solutions": sum(r.solutions for r in results) / len(results),
        }

    def save_results(self, output_dir: str) -> None:
        """Save benchmark results and generated boards to files."""
        os.makedirs(output_dir, exist_ok=True)

        results_file = os.path.join(output_dir, "benchmark_results.json")
        with open(results_file, "w") as f:
            json.dump([r.to_dict() for r in self.results], f, indent=2)

        summary_file = os.path.join(output_dir, "benchmark_summary.json")
        with open(summary_file, "w") as f:
            json.dump(self.get_summary(), f, indent=2)

        boards_dir = os.path.join(output_dir, "boards")
        for (difficulty, size), boards in self.boards.items():
            config_dir = os.path.join(boards_dir, f"{difficulty}_{size}")
            BoardGenerator.save_to_folder(boards, config_dir, prefix=f"board_{difficulty}_{size}")

        logger.info("Results and boards saved to %s", output_dir)
