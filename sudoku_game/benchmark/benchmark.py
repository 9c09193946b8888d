"""Benchmark of puzzle generation and in-place solving."""

from __future__ import annotations
import json
import logging
import os
import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from tqdm import tqdm

from ..core.board import SudokuBoard
from ..generator import Difficulty, SudokuGenerator
from ..solvers import BacktrackingSolver

logger = logging.getLogger(__name__)


@dataclass
class BenchmarkResult:
    """Results from generating and solving a single puzzle."""
    puzzle_id: int
    difficulty: str
    hints: int
    generate_seconds: float
    solved: bool
    solve_seconds: float
    memory_bytes: int
    iterations: int
    backtracks: int
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "puzzle_id": self.puzzle_id,
            "difficulty": self.difficulty,
            "hints": self.hints,
            "generate_seconds": self.generate_seconds,
            "solved": self.solved,
            "solve_seconds": self.solve_seconds,
            "memory_bytes": self.memory_bytes,
            "memory_mb": self.memory_bytes / (1024 * 1024),
            "iterations": self.iterations,
            "backtracks": self.backtracks,
            **self.extra
        }


class Benchmark:
    """
    Times the randomized backtracking engine.

    For every difficulty, generates puzzles (timing the fill and cut) and then
    solves each puzzle in place, collecting the solver statistics.
    """

    def __init__(
        self,
        puzzles_per_difficulty: int = 10,
        difficulties: Optional[List[Difficulty]] = None,
        seed: Optional[int] = None
    ):
        """
        Initialize the benchmark.

        Args:
            puzzles_per_difficulty: Number of puzzles to generate per difficulty.
            difficulties: List of difficulties to test (default: all).
            seed: Random seed for reproducibility.
        """
        self.puzzles_per_difficulty = puzzles_per_difficulty
        self.difficulties = difficulties or list(Difficulty)
        self.seed = seed

        self.generator = SudokuGenerator(seed=seed)
        self.solver = BacktrackingSolver(rng=self.generator.rng)

        self.puzzles: Dict[str, List[SudokuBoard]] = {}
        self.generate_times: Dict[str, List[float]] = {}
        self.results: List[BenchmarkResult] = []

    def generate_puzzles(self, show_progress: bool = True) -> None:
        """Generate all puzzles for benchmarking."""
        for difficulty in tqdm(self.difficulties, desc="Generating", disable=not show_progress):
            puzzles, times = [], []
            for _ in range(self.puzzles_per_difficulty):
                start = time.perf_counter()
                puzzles.append(self.generator.generate(difficulty))
                times.append(time.perf_counter() - start)
            self.puzzles[difficulty.value] = puzzles
            self.generate_times[difficulty.value] = times

    def run(self, show_progress: bool = True) -> List[BenchmarkResult]:
        """
        Run the full benchmark suite.

        Returns:
            List of BenchmarkResult objects.
        """
        if not self.puzzles:
            self.generate_puzzles(show_progress)

        self.results = []
        total_tests = sum(len(p) for p in self.puzzles.values())
        pbar = tqdm(total=total_tests, desc="Solving", disable=not show_progress)

        for difficulty_name, puzzles in self.puzzles.items():
            for puzzle_id, puzzle in enumerate(puzzles):
                _, stats = self.solver.solve(puzzle)
                self.results.append(BenchmarkResult(
                    puzzle_id=puzzle_id,
                    difficulty=difficulty_name,
                    hints=puzzle.count_fixed(),
                    generate_seconds=self.generate_times[difficulty_name][puzzle_id],
                    solved=stats.solved,
                    solve_seconds=stats.time_seconds,
                    memory_bytes=stats.memory_bytes,
                    iterations=stats.iterations,
                    backtracks=stats.backtracks,
                ))
                pbar.update(1)

        pbar.close()
        logger.info("Benchmarked %d puzzles", len(self.results))
        return self.results

    def get_summary(self) -> Dict[str, Any]:
        """Get summary statistics from benchmark results, per difficulty."""
        summary = {
            "total_puzzles": len(self.results),
            "difficulties": [d.value for d in self.difficulties],
            "results_by_difficulty": {}
        }

        for difficulty in self.difficulties:
            diff_results = [r for r in self.results if r.difficulty == difficulty.value]
            if not diff_results:
                continue
            solved = [r for r in diff_results if r.solved]
            solve_times = [r.solve_seconds for r in diff_results]
            gen_times = [r.generate_seconds for r in diff_results]
            summary["results_by_difficulty"][difficulty.value] = {
                "accuracy": len(solved) / len(diff_results) * 100,
                "avg_hints": sum(r.hints for r in diff_results) / len(diff_results),
                "avg_generate_seconds": sum(gen_times) / len(gen_times),
                "avg_solve_seconds": sum(solve_times) / len(solve_times),
                "max_solve_seconds": max(solve_times),
                "avg_backtracks": sum(r.backtracks for r in diff_results) / len(diff_results),
                "solved": len(solved),
                "tested": len(diff_results)
            }

        return summary

    def save_results(self, output_dir: str) -> None:
        """Save benchmark results and generated puzzles to files."""
        os.makedirs(output_dir, exist_ok=True)

        results_file = os.path.join(output_dir, "benchmark_results.json")
        with open(results_file, "w") as f:
            json.dump([r.to_dict() for r in self.results], f, indent=2)

        summary_file = os.path.join(output_dir, "benchmark_summary.json")
        with open(summary_file, "w") as f:
            json.dump(self.get_summary(), f, indent=2)

        puzzles_dir = os.path.join(output_dir, "puzzles")
        for difficulty, puzzles in self.puzzles.items():
            diff_dir = os.path.join(puzzles_dir, difficulty)
            SudokuGenerator.save_to_folder(puzzles, diff_dir, prefix=f"puzzle_{difficulty}")

        logger.info("Results and puzzles saved to %s", output_dir)
