"""Base solver interface and common utilities."""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Optional, Dict, Any
import logging
import time
import tracemalloc

from ..core.board import SudokuBoard
from ..core.validator import board_solved

logger = logging.getLogger(__name__)


@dataclass
class SolverStats:
    """Statistics from a solver run."""
    # Core metrics
    solved: bool = False
    time_seconds: float = 0.0
    memory_bytes: int = 0
    iterations: int = 0

    # Search metrics
    backtracks: int = 0
    nodes_explored: int = 0

    # Additional metadata
    algorithm: str = ""
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert stats to dictionary."""
        return {
            "solved": self.solved,
            "time_seconds": self.time_seconds,
            "memory_bytes": self.memory_bytes,
            "iterations": self.iterations,
            "backtracks": self.backtracks,
            "nodes_explored": self.nodes_explored,
            "algorithm": self.algorithm,
            **self.extra
        }


class BaseSolver(ABC):
    """Abstract base class for Sudoku solvers."""

    name: str = "BaseSolver"

    def __init__(self, track_memory: bool = True):
        self.track_memory = track_memory
        self.stats = SolverStats(algorithm=self.name)

    def solve(self, board: SudokuBoard) -> tuple[Optional[SudokuBoard], SolverStats]:
        """
        Solve a copy of a Sudoku puzzle with timing and memory tracking.

        Args:
            board: The puzzle to solve. It is left untouched.

        Returns:
            Tuple of (solution or None, stats).
        """
        work = board.copy()
        solved = self._timed(work)
        return (work if solved else None), self.stats

    def solve_in_place(self, board: SudokuBoard) -> SolverStats:
        """
        Solve the given board directly.

        On failure every tentative placement is rolled back, so the board is
        left exactly as it was passed in.
        """
        self._timed(board)
        return self.stats

    def _timed(self, board: SudokuBoard) -> bool:
        self.stats = SolverStats(algorithm=self.name)

        # An outer trace is left running; peak memory is only measured by our own.
        own_trace = self.track_memory and not tracemalloc.is_tracing()
        if own_trace:
            tracemalloc.start()
        start_time = time.perf_counter()

        try:
            self.stats.solved = self._solve(board) and board_solved(board)
        finally:
            self.stats.time_seconds = time.perf_counter() - start_time
            if own_trace:
                _, peak = tracemalloc.get_traced_memory()
                tracemalloc.stop()
                self.stats.memory_bytes = peak

        logger.debug(
            "%s finished: solved=%s time=%.4fs backtracks=%d",
            self.name, self.stats.solved, self.stats.time_seconds, self.stats.backtracks,
        )
        return self.stats.solved

    @abstractmethod
    def _solve(self, board: SudokuBoard) -> bool:
        """
        Internal solve method to be implemented by subclasses.

        Args:
            board: The board to fill in place.

        Returns:
            True if the board was completed, False if no completion exists.
        """
        pass
