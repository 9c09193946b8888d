"""Randomized recursive backtracking, used both to generate and to solve boards."""

from __future__ import annotations
import random
from typing import Optional

from .base_solver import BaseSolver
from ..core.board import SIZE, SudokuBoard
from ..core.validator import board_solved, board_valid, placement_valid


class BacktrackingSolver(BaseSolver):
    """
    Depth-first search over the empty cells in row-major order.

    At each empty cell the candidates 1-9 are drawn uniformly at random
    without replacement, which is what makes generated boards vary. Every
    placement is pruned against the units it touches; since the board is
    valid on entry, this keeps the whole board-so-far valid.

    Features:
    - Works in place on a live board, only ever writing empty cells
    - Tentative placements are rolled back on failure, even on error
    - Backtracking counter for performance analysis
    """

    name = "RandomizedBacktracking"

    def __init__(self, rng: Optional[random.Random] = None, seed: Optional[int] = None,
                 track_memory: bool = True):
        """
        Initialize the solver.

        Args:
            rng: Random source to draw candidates from. Takes precedence over seed.
            seed: Seed for a private random source.
            track_memory: Record peak memory with tracemalloc.
        """
        super().__init__(track_memory=track_memory)
        self.rng = rng if rng is not None else random.Random(seed)

    def _solve(self, board: SudokuBoard) -> bool:
        """Fill the board in place; False leaves it unchanged."""
        if not board_valid(board):
            return False
        return self._backtrack(board)

    def _backtrack(self, board: SudokuBoard) -> bool:
        """
        Recursive backtracking algorithm.

        Returns True if the board is now solved, False otherwise.
        """
        self.stats.iterations += 1

        location = board.first_empty()
        if location is None:
            return board_solved(board)

        row, col = location
        candidates = list(range(1, SIZE + 1))
        while candidates:
            value = candidates.pop(self.rng.randrange(len(candidates)))
            board.set(row, col, value)
            self.stats.nodes_explored += 1

            kept = False
            try:
                kept = placement_valid(board, row, col) and self._backtrack(board)
            finally:
                if not kept:
                    board.erase(row, col)
            if kept:
                return True

        self.stats.backtracks += 1
        return False
