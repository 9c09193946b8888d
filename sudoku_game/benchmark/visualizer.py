"""Charts for generation and solving benchmark results."""

from __future__ import annotations
import os
from typing import List

import matplotlib.pyplot as plt
import seaborn as sns
import numpy as np

from .benchmark import BenchmarkResult


class Visualizer:
    """
    Chart generator for benchmark results.

    Creates charts comparing generation and solve behaviour across difficulties.
    """

    DIFFICULTY_ORDER = ["easy", "medium", "hard", "expert"]

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

        sns.set_theme(style="whitegrid")
        sns.set_palette("husl")

    def _difficulties(self) -> List[str]:
        present = {r.difficulty for r in self.results}
        ordered = [d for d in self.DIFFICULTY_ORDER if d in present]
        return ordered + sorted(present - set(ordered))

    def generate_all(self) -> List[str]:
        """
        Generate all charts.

        Returns:
            List of paths to generated chart files.
        """
        return [
            self.plot_time_by_difficulty(),
            self.plot_backtracks_vs_hints(),
        ]

    def plot_time_by_difficulty(self) -> str:
        """Grouped bar chart of average generate and solve times per difficulty."""
        fig, ax = plt.subplots(figsize=(10, 6))

        difficulties = self._difficulties()
        x = np.arange(len(difficulties))
        width = 0.4

        gen_times = [np.mean([r.generate_seconds for r in self.results if r.difficulty == d])
                     for d in difficulties]
        solve_times = [np.mean([r.solve_seconds for r in self.results if r.difficulty == d])
                       for d in difficulties]

        ax.bar(x - width / 2, gen_times, width, label="Generate", edgecolor='black', linewidth=0.5)
        ax.bar(x + width / 2, solve_times, width, label="Solve", edgecolor='black', linewidth=0.5)

        ax.set_xticks(x)
        ax.set_xticklabels([d.capitalize() for d in difficulties])
        ax.set_xlabel('Difficulty', fontsize=12)
        ax.set_ylabel('Average Time (seconds)', fontsize=12)
        ax.set_title('Generation and Solve Time by Difficulty', fontsize=14, fontweight='bold')
        ax.set_ylim(bottom=0)
        ax.legend()

        plt.tight_layout()
        path = os.path.join(self.output_dir, "time_by_difficulty.png")
        plt.savefig(path, dpi=150, bbox_inches='tight')
        plt.close(fig)

        return path

    def plot_backtracks_vs_hints(self) -> str:
        """Scatter plot of solver backtracks against the number of hints."""
        fig, ax = plt.subplots(figsize=(10, 6))

        sns.scatterplot(
            x=[r.hints for r in self.results],
            y=[r.backtracks for r in self.results],
            hue=[r.difficulty for r in self.results],
            hue_order=self._difficulties(),
            ax=ax,
        )

        ax.set_xlabel('Hints', fontsize=12)
        ax.set_ylabel('Backtracks', fontsize=12)
        ax.set_title('Solver Backtracks vs. Hint Count', fontsize=14, fontweight='bold')

        plt.tight_layout()
        path = os.path.join(self.output_dir, "backtracks_vs_hints.png")
        plt.savefig(path, dpi=150, bbox_inches='tight')
        plt.close(fig)

        return path
