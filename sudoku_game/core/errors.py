"""Exceptions raised by the Sudoku game engine."""


class SudokuError(Exception):
    """Base class for all engine errors."""


class OutOfRange(SudokuError, IndexError):
    """A row or column index lies outside 0-8."""

    def __init__(self, row: int, col: int):
        super().__init__(f"Position ({row}, {col}) is outside the 9x9 grid")
        self.row = row
        self.col = col


class CellLocked(SudokuError):
    """Attempted mutation of a fixed (given) cell."""

    def __init__(self, row: int, col: int):
        super().__init__(f"Cell ({row}, {col}) is fixed and cannot be modified")
        self.row = row
        self.col = col


class InvalidDigit(SudokuError, ValueError):
    """A cell value or note digit outside the allowed range."""


class InvalidHintCount(SudokuError, ValueError):
    """New-game hint count outside [0, 81]."""

    def __init__(self, hint_count):
        super().__init__(f"Hint count must be between 0 and 81, got {hint_count}")
        self.hint_count = hint_count


class NoSelection(SudokuError):
    """A selection-based operation was issued with no cell selected."""


class GamePaused(SudokuError):
    """The game is paused and does not accept moves."""


class EmptyLog(SudokuError):
    """Nothing to undo or redo."""


class CorruptSave(SudokuError, ValueError):
    """A saved board or notes string cannot be decoded."""
