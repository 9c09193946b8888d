"""Sudoku puzzle generator driven by a hint count or a difficulty level."""

from __future__ import annotations
import logging
import numbers
import os
import random
from enum import Enum
from typing import List, Optional, Tuple, Union

from ..core.board import SIZE, SudokuBoard
from ..core.codec import serialize_board
from ..core.errors import InvalidHintCount
from ..solvers.backtracking_solver import BacktrackingSolver

logger = logging.getLogger(__name__)

CELL_COUNT = SIZE * SIZE


class Difficulty(Enum):
    """Difficulty levels for Sudoku puzzles."""
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"
    EXPERT = "expert"

    @property
    def clue_range(self) -> Tuple[int, int]:
        """Get the range of clues for this difficulty (min, max)."""
        ranges = {
            Difficulty.EASY: (36, 45),
            Difficulty.MEDIUM: (28, 35),
            Difficulty.HARD: (22, 27),
            Difficulty.EXPERT: (17, 21),
        }
        return ranges[self]


def validate_hint_count(hint_count) -> int:
    """Return hint_count if it is an integer in [0, 81], else raise InvalidHintCount."""
    if isinstance(hint_count, bool) or not isinstance(hint_count, numbers.Integral):
        raise InvalidHintCount(hint_count)
    if hint_count < 0 or hint_count > CELL_COUNT:
        raise InvalidHintCount(hint_count)
    return int(hint_count)


class SudokuGenerator:
    """
    Generator for Sudoku puzzles.

    Algorithm:
    1. Fill an empty board with randomized backtracking
    2. Shuffle all 81 positions (Fisher-Yates) and erase the first 81 - hints
    3. Mark the erased cells modifiable and the remaining ones fixed

    The puzzle is not checked for a unique solution.
    """

    def __init__(self, seed: Optional[int] = None, rng: Optional[random.Random] = None):
        """
        Initialize the generator.

        Args:
            seed: Random seed for reproducibility.
            rng: Shared random source; takes precedence over seed.
        """
        self.rng = rng if rng is not None else random.Random(seed)
        self.solver = BacktrackingSolver(rng=self.rng, track_memory=False)

    def resolve_hint_count(self, hints: Union[int, Difficulty]) -> int:
        """Turn a difficulty into a concrete hint count within its clue range."""
        if isinstance(hints, Difficulty):
            min_clues, max_clues = hints.clue_range
            return self.rng.randint(min_clues, max_clues)
        return validate_hint_count(hints)

    def generate(self, hints: Union[int, Difficulty] = Difficulty.MEDIUM) -> SudokuBoard:
        """
        Generate a Sudoku puzzle.

        Args:
            hints: Number of fixed cells to keep (0-81), or a difficulty level.

        Returns:
            A SudokuBoard whose remaining clues are fixed.
        """
        puzzle, _ = self.generate_with_solution(hints)
        return puzzle

    def generate_batch(self, count: int, hints: Union[int, Difficulty] = Difficulty.MEDIUM) -> List[SudokuBoard]:
        """Generate multiple puzzles with the same hint setting."""
        return [self.generate(hints) for _ in range(count)]

    def generate_with_solution(self, hints: Union[int, Difficulty] = Difficulty.MEDIUM) -> Tuple[SudokuBoard, SudokuBoard]:
        """
        Generate a puzzle along with the full board it was cut from.

        Returns:
            Tuple of (puzzle, solution) SudokuBoards.
        """
        hint_count = self.resolve_hint_count(hints)
        puzzle = SudokuBoard()
        solution = self.populate(puzzle, hint_count)
        return puzzle, solution

    def populate(self, board: SudokuBoard, hint_count: int) -> SudokuBoard:
        """
        Replace the contents of board with a fresh puzzle, in place.

        Args:
            board: Board to overwrite; it is cleared first.
            hint_count: Number of fixed cells to keep (0-81).

        Returns:
            A copy of the full board the puzzle was cut from.
        """
        hint_count = validate_hint_count(hint_count)
        board.clear()
        self.fill(board)
        solution = board.copy()
        self._remove_cells(board, hint_count)
        logger.debug("Generated puzzle with %d hints", hint_count)
        return solution

    def fill(self, board: SudokuBoard) -> None:
        """Complete the board with randomized backtracking."""
        stats = self.solver.solve_in_place(board)
        if not stats.solved:
            raise RuntimeError("Backtracking could not complete the board")
        logger.debug(
            "Filled board in %.4fs (%d backtracks)", stats.time_seconds, stats.backtracks
        )

    def _remove_cells(self, board: SudokuBoard, hint_count: int) -> None:
        """Erase all but hint_count randomly chosen cells and fix the rest."""
        positions = list(range(CELL_COUNT))
        self.rng.shuffle(positions)

        for pos in positions[:CELL_COUNT - hint_count]:
            board.erase(*divmod(pos, SIZE))
        for pos in positions[CELL_COUNT - hint_count:]:
            board.lock(*divmod(pos, SIZE))

    @staticmethod
    def save_to_folder(puzzles: List[SudokuBoard], folder_path: str, prefix: str = "puzzle") -> None:
        """
        Save a list of puzzles to a folder as individual text files.

        Args:
            puzzles: List of SudokuBoard objects.
            folder_path: Directory to save the puzzles.
            prefix: Prefix for the filename (default: "puzzle").
        """
        os.makedirs(folder_path, exist_ok=True)

        for i, puzzle in enumerate(puzzles, 1):
            file_path = os.path.join(folder_path, f"{prefix}_{i}.txt")
            with open(file_path, "w") as f:
                f.write(serialize_board(puzzle))
                f.write("\n\nPretty format:\n")
                f.write(str(puzzle))
