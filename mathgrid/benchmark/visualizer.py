"""Visualization utilities for benchmark results."""

from __future__ import annotations
import os
from typing import List

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import seaborn as sns
import numpy as np

from .benchmark import BenchmarkResult


class Visualizer:
    """
    Chart generator for engine benchmark results.

    Compares search cost and board yield across board sizes and
    difficulties.
    """

    COLORS = {
        "easy": "#2ecc71",    # Green
        "medium": "#f39c12",  # Orange
        "hard": "#e74c3c",    # Red
    }

    def __init__(self, results: List[BenchmarkResult], output_dir: str = "results"):
        """
        Initialize the visualizer.

        Args:
            results: List of benchmark results.
            output_dir: Directory to save generated charts.
        """
        self.results = results
        self.output_dir = output_dir
        os.makedirs(output_dir, exist_ok=True)

        plt.style.use('seaborn-v0_8-whitegrid')
        sns.set_palette("husl")

    def generate_all(self) -> List[str]:
        """
        Generate all charts.

        Returns:
            List of paths to generated chart files.
        """
        return [
            self.plot_search_time_by_size(),
            self.plot_solutions_distribution(),
            self.plot_target_yield(),
        ]

    def _difficulties(self) -> List[str]:
        order = list(self.COLORS)
        found = set(r.difficulty for r in self.results)
        return [d for d in order if d in found] + sorted(found - set(order))

    def _save(self, name: str) -> str:
        plt.tight_layout()
        path = os.path.join(self.output_dir, name)
        plt.savefig(path, dpi=150, bbox_inches='tight')
        plt.close()
        return path

    def plot_search_time_by_size(self) -> str:
        """Grouped bar chart of average hint search time per board size."""
        fig, ax = plt.subplots(figsize=(10, 6))

        sizes = sorted(set(r.board_size for r in self.results))
        difficulties = self._difficulties()
        x = np.arange(len(sizes))
        width = 0.8 / max(len(difficulties), 1)

        for i, diff in enumerate(difficulties):
            times = []
            for size in sizes:
                values = [
                    r.search_time_seconds * 1000 for r in self.results
                    if r.difficulty == diff and r.board_size == size
                ]
                times.append(np.mean(values) if values else 0)

            offset = (i - len(difficulties) / 2 + 0.5) * width
            ax.bar(x + offset, times, width,
                   label=diff.capitalize(),
                   color=self.COLORS.get(diff, "#95a5a6"),
                   edgecolor='black', linewidth=0.5)

        ax.set_xlabel('Board Size', fontsize=12)
        ax.set_ylabel('Average Search Time (ms)', fontsize=12)
        ax.set_title('Hint Search Time by Board Size', fontsize=14, fontweight='bold')
        ax.set_xticks(x)
        ax.set_xticklabels([f"{s}x{s}" for s in sizes])
        ax.legend(title='Difficulty')
        ax.set_ylim(bottom=0)

        return self._save("search_time_by_size.png")

    def plot_solutions_distribution(self) -> str:
        """Box plot of hint lines found per board, by size."""
        fig, ax = plt.subplots(figsize=(10, 6))

        data = [
            {"size": f"{r.board_size}x{r.board_size}", "difficulty": r.difficulty, "solutions": r.solutions}
            for r in self.results
        ]
        sns.boxplot(
            x=[d["size"] for d in data],
            y=[d["solutions"] for d in data],
            hue=[d["difficulty"] for d in data],
            palette=self.COLORS,
            ax=ax,
        )

        ax.set_xlabel('Board Size', fontsize=12)
        ax.set_ylabel('Solutions per Board', fontsize=12)
        ax.set_title('Hint Lines per Board', fontsize=14, fontweight='bold')

        return self._save("solutions_distribution.png")

    def plot_target_yield(self) -> str:
        """Heatmap of the share of boards that supplied their full target count."""
        fig, ax = plt.subplots(figsize=(8, 5))

        sizes = sorted(set(r.board_size for r in self.results))
        difficulties = self._difficulties()
        grid = np.zeros((len(difficulties), len(sizes)))

        for i, diff in enumerate(difficulties):
            for j, size in enumerate(sizes):
                subset = [r for r in self.results if r.difficulty == diff and r.board_size == size]
                if subset:
                    grid[i, j] = sum(r.fully_targeted for r in subset) / len(subset) * 100

        sns.heatmap(
            grid, annot=True, fmt=".0f", cmap="YlGn", vmin=0, vmax=100,
            xticklabels=[f"{s}x{s}" for s in sizes],
            yticklabels=[d.capitalize() for d in difficulties],
            cbar_kws={"label": "% boards"},
            ax=ax,
        )
        ax.set_title('Boards with a Full Target Set', fontsize=14, fontweight='bold')

        return self._save("target_yield.png")
