"""Sudoku board representation: a 9x9 value grid with per-cell fixed flags."""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import FrozenSet, Iterator, List, Optional, Tuple

import numpy as np

from .errors import CellLocked, InvalidDigit, OutOfRange

SIZE = 9
BOX_SIZE = 3
EMPTY = 0


@dataclass(frozen=True)
class Cell:
    """Read-only snapshot of a single cell. A value of 0 means empty."""
    row: int
    col: int
    value: int = EMPTY
    fixed: bool = False
    notes: FrozenSet[int] = field(default_factory=frozenset)

    @property
    def is_empty(self) -> bool:
        return self.value == EMPTY


def check_position(row: int, col: int) -> None:
    """Raise OutOfRange unless (row, col) lies on the grid."""
    if not (0 <= row < SIZE and 0 <= col < SIZE):
        raise OutOfRange(row, col)


class SudokuBoard:
    """
    Represents a 9x9 Sudoku board.

    Values live in a numpy grid (0 = empty). A parallel boolean mask marks
    fixed cells: the givens of a puzzle, which gameplay never changes.
    A fixed cell always holds a value.
    """

    def __init__(self, grid: Optional[np.ndarray] = None, fixed: Optional[np.ndarray] = None):
        """
        Initialize a Sudoku board.

        Args:
            grid: Optional initial 9x9 value grid. If None, creates empty board.
            fixed: Optional 9x9 boolean mask of fixed cells. Empty cells are
                never fixed, whatever the mask says.
        """
        self.size = SIZE
        self.box_size = BOX_SIZE

        if grid is not None:
            if grid.shape != (SIZE, SIZE):
                raise ValueError(f"Grid shape must be ({SIZE}, {SIZE})")
            self.grid = grid.copy().astype(np.int32)
        else:
            self.grid = np.zeros((SIZE, SIZE), dtype=np.int32)

        if fixed is not None:
            if fixed.shape != (SIZE, SIZE):
                raise ValueError(f"Fixed mask shape must be ({SIZE}, {SIZE})")
            self.fixed = fixed.astype(bool) & (self.grid != EMPTY)
        else:
            self.fixed = np.zeros((SIZE, SIZE), dtype=bool)

    def copy(self) -> SudokuBoard:
        """Create a deep copy of the board."""
        new_board = SudokuBoard()
        new_board.grid = self.grid.copy()
        new_board.fixed = self.fixed.copy()
        return new_board

    def get(self, row: int, col: int) -> int:
        """Get value at position (row, col). 0 means empty."""
        check_position(row, col)
        return int(self.grid[row, col])

    def set(self, row: int, col: int, value: int) -> None:
        """Set value at position (row, col). Use 0 to clear."""
        check_position(row, col)
        if self.fixed[row, col]:
            raise CellLocked(row, col)
        if value < 0 or value > SIZE:
            raise InvalidDigit(f"Value must be 0-{SIZE}, got {value}")
        self.grid[row, col] = value

    def erase(self, row: int, col: int) -> None:
        """Clear the cell at position (row, col)."""
        self.set(row, col, EMPTY)

    def clear(self) -> None:
        """Reset every cell to empty and modifiable."""
        self.grid[:, :] = EMPTY
        self.fixed[:, :] = False

    def is_fixed(self, row: int, col: int) -> bool:
        check_position(row, col)
        return bool(self.fixed[row, col])

    def can_modify(self, row: int, col: int) -> bool:
        """True if gameplay may change the cell at (row, col)."""
        return not self.is_fixed(row, col)

    def lock(self, row: int, col: int) -> None:
        """Mark a filled cell as fixed. Only generation and loading do this."""
        check_position(row, col)
        if self.grid[row, col] == EMPTY:
            raise ValueError(f"Cannot fix empty cell ({row}, {col})")
        self.fixed[row, col] = True

    def unlock(self, row: int, col: int) -> None:
        check_position(row, col)
        self.fixed[row, col] = False

    def is_empty(self, row: int, col: int) -> bool:
        """Check if cell is empty (value is 0)."""
        check_position(row, col)
        return bool(self.grid[row, col] == EMPTY)

    def cell(self, row: int, col: int, notes: FrozenSet[int] = frozenset()) -> Cell:
        """Snapshot of the cell at (row, col)."""
        check_position(row, col)
        return Cell(row, col, int(self.grid[row, col]), bool(self.fixed[row, col]), notes)

    def cells(self) -> Iterator[Cell]:
        """Iterate over all 81 cells in row-major order."""
        for i in range(SIZE):
            for j in range(SIZE):
                yield self.cell(i, j)

    def get_row(self, row: int) -> np.ndarray:
        """Get all values in a row."""
        return self.grid[row, :]

    def get_col(self, col: int) -> np.ndarray:
        """Get all values in a column."""
        return self.grid[:, col]

    def get_empty_cells(self) -> List[Tuple[int, int]]:
        """Get list of all empty cell positions, row-major."""
        rows, cols = np.nonzero(self.grid == EMPTY)
        return [(int(r), int(c)) for r, c in zip(rows, cols)]

    def first_empty(self) -> Optional[Tuple[int, int]]:
        """First empty cell in row-major scan order, or None."""
        flat = np.flatnonzero(self.grid == EMPTY)
        if flat.size == 0:
            return None
        return divmod(int(flat[0]), SIZE)

    def count_empty(self) -> int:
        """Count the number of empty cells."""
        return int(np.sum(self.grid == EMPTY))

    def count_filled(self) -> int:
        """Count the number of filled cells."""
        return int(np.sum(self.grid != EMPTY))

    def count_fixed(self) -> int:
        return int(np.sum(self.fixed))

    def is_complete(self) -> bool:
        """Check if all cells are filled."""
        return self.count_empty() == 0

    def to_string(self) -> str:
        """Convert board values to an 81-char string, 0 for empty cells."""
        return ''.join(str(int(v)) for v in self.grid.flatten())

    @classmethod
    def from_string(cls, s: str) -> SudokuBoard:
        """
        Create a puzzle from a plain 81-char string.

        '0' or '.' mark empty cells; digits 1-9 are loaded as fixed givens.
        """
        s = s.strip()
        if len(s) != SIZE * SIZE:
            raise ValueError(f"String length must be {SIZE * SIZE}, got {len(s)}")

        grid = np.zeros((SIZE, SIZE), dtype=np.int32)
        for idx, c in enumerate(s):
            if c in '0.':
                continue
            if not c.isdigit():
                raise ValueError(f"Invalid character {c!r} at position {idx}")
            grid[idx // SIZE, idx % SIZE] = int(c)

        return cls(grid, grid != EMPTY)

    @classmethod
    def from_2d_list(cls, data: List[List[int]], fixed: bool = False) -> SudokuBoard:
        """Create a board from a 2D list. Filled cells are fixed if `fixed` is set."""
        arr = np.array(data, dtype=np.int32)
        return cls(arr, (arr != EMPTY) if fixed else None)

    def __str__(self) -> str:
        """Pretty-print the board."""
        lines = []
        horizontal_sep = '+' + (('-' * (BOX_SIZE * 2 + 1)) + '+') * BOX_SIZE

        for i in range(SIZE):
            if i % BOX_SIZE == 0:
                lines.append(horizontal_sep)

            row_str = '|'
            for j in range(SIZE):
                val = self.grid[i, j]
                row_str += ' .' if val == EMPTY else f' {val}'

                if (j + 1) % BOX_SIZE == 0:
                    row_str += ' |'

            lines.append(row_str)

        lines.append(horizontal_sep)
        return '\n'.join(lines)

    def __repr__(self) -> str:
        return f"SudokuBoard(filled={self.count_filled()}, fixed={self.count_fixed()})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SudokuBoard):
            return False
        return np.array_equal(self.grid, other.grid) and np.array_equal(self.fixed, other.fixed)

    def __hash__(self) -> int:
        return hash((self.to_string(), self.fixed.tobytes()))
