"""Generator module for creating Sudoku puzzles."""

from .generator import SudokuGenerator, Difficulty, validate_hint_count

__all__ = ["SudokuGenerator", "Difficulty", "validate_hint_count"]
