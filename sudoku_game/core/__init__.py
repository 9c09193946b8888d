"""Core module for Sudoku board representation, validation and encoding."""

from .board import Cell, SudokuBoard
from .errors import (
    SudokuError, OutOfRange, CellLocked, InvalidDigit, InvalidHintCount,
    NoSelection, GamePaused, EmptyLog, CorruptSave,
)
from .validator import (
    nearest_box_center, row_valid, col_valid, box_valid,
    board_valid, board_solved, count_conflicts, has_unique_solution,
)
from .codec import serialize_board, deserialize_board, serialize_notes, deserialize_notes

__all__ = [
    "Cell", "SudokuBoard",
    "SudokuError", "OutOfRange", "CellLocked", "InvalidDigit", "InvalidHintCount",
    "NoSelection", "GamePaused", "EmptyLog", "CorruptSave",
    "nearest_box_center", "row_valid", "col_valid", "box_valid",
    "board_valid", "board_solved", "count_conflicts", "has_unique_solution",
    "serialize_board", "deserialize_board", "serialize_notes", "deserialize_notes",
]
