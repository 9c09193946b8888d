"""Constraint checks for Sudoku boards.

Units are the 9 rows, the 9 columns and the 9 boxes. Boxes are addressed
through their center cells; a box spans its center +/- 1 on both axes.
"""

from __future__ import annotations
import math
from typing import TYPE_CHECKING, List, Set, Tuple

import numpy as np

from .board import EMPTY, SIZE, check_position

if TYPE_CHECKING:
    from .board import SudokuBoard


BOX_CENTERS: Tuple[Tuple[int, int], ...] = (
    (1, 1), (1, 4), (1, 7),
    (4, 1), (4, 4), (4, 7),
    (7, 1), (7, 4), (7, 7),
)


def nearest_box_center(row: int, col: int) -> Tuple[int, int]:
    """
    Return the center of the box containing (row, col).

    An exact center is returned as is. Otherwise the center with the smallest
    Euclidean distance wins; on a tie the first one in BOX_CENTERS is kept.
    """
    check_position(row, col)
    best = None
    least = math.inf
    for center in BOX_CENTERS:
        if (row, col) == center:
            return center
        dist = math.hypot(center[0] - row, center[1] - col)
        if dist < least:
            least = dist
            best = center
    return best


def box_values(board: SudokuBoard, row: int, col: int) -> np.ndarray:
    """Flattened values of the box containing (row, col)."""
    cr, cc = nearest_box_center(row, col)
    return board.grid[cr - 1:cr + 2, cc - 1:cc + 2].flatten()


def box_positions(row: int, col: int) -> List[Tuple[int, int]]:
    cr, cc = nearest_box_center(row, col)
    return [(i, j) for i in range(cr - 1, cr + 2) for j in range(cc - 1, cc + 2)]


def peer_positions(row: int, col: int) -> Set[Tuple[int, int]]:
    """All positions sharing a row, column or box with (row, col), excluding itself."""
    peers = {(row, i) for i in range(SIZE)} | {(i, col) for i in range(SIZE)}
    peers.update(box_positions(row, col))
    peers.discard((row, col))
    return peers


def _unit_valid(values: np.ndarray) -> bool:
    # A value outside 1-9 makes the whole unit invalid, whatever else it holds.
    if np.any((values < EMPTY) | (values > SIZE)):
        return False
    filled = values[values != EMPTY]
    return len(filled) == len(np.unique(filled))


def row_valid(board: SudokuBoard, row: int) -> bool:
    """True if no two filled cells in the row share a value."""
    check_position(row, 0)
    return _unit_valid(board.get_row(row))


def col_valid(board: SudokuBoard, col: int) -> bool:
    """True if no two filled cells in the column share a value."""
    check_position(0, col)
    return _unit_valid(board.get_col(col))


def box_valid(board: SudokuBoard, row: int, col: int) -> bool:
    """True if no two filled cells in the box around (row, col) share a value."""
    return _unit_valid(box_values(board, row, col))


def placement_valid(board: SudokuBoard, row: int, col: int) -> bool:
    """Validity of the three units through (row, col)."""
    return row_valid(board, row) and col_valid(board, col) and box_valid(board, row, col)


def board_valid(board: SudokuBoard) -> bool:
    """
    Check if the entire board state is valid (no conflicts).

    Evaluates every row, every column and every box (through its center),
    stopping at the first failing unit.
    """
    for i in range(SIZE):
        center_row, center_col = BOX_CENTERS[i]
        if not (row_valid(board, i) and col_valid(board, i)
                and box_valid(board, center_row, center_col)):
            return False
    return True


def board_solved(board: SudokuBoard) -> bool:
    """Check if the board is completely and correctly filled."""
    return board.is_complete() and board_valid(board)


def is_valid_placement(board: SudokuBoard, row: int, col: int, value: int) -> bool:
    """
    Check if placing a value at (row, col) is valid.

    Args:
        board: The Sudoku board.
        row: Row index.
        col: Column index.
        value: Value to check (1 to 9).

    Returns:
        True if the placement is valid.
    """
    if value < 1 or value > SIZE:
        return False

    if value in board.get_row(row):
        return False

    if value in board.get_col(col):
        return False

    if value in box_values(board, row, col):
        return False

    return True


def get_candidates(board: SudokuBoard, row: int, col: int) -> Set[int]:
    """Values that can go into an empty cell; empty set for filled cells."""
    if not board.is_empty(row, col):
        return set()
    return {v for v in range(1, SIZE + 1) if is_valid_placement(board, row, col, v)}


def cell_in_conflict(board: SudokuBoard, row: int, col: int) -> bool:
    """
    True if the filled cell at (row, col) clashes with a peer.

    A peer holding a malformed value (outside 1-9) counts as a clash.
    Empty cells are never in conflict.
    """
    value = board.get(row, col)
    if value == EMPTY:
        return False
    if value < 1 or value > SIZE:
        return True
    for r, c in peer_positions(row, col):
        check = board.grid[r, c]
        if check == value or check < EMPTY or check > SIZE:
            return True
    return False


def count_conflicts(board: SudokuBoard, include_fixed: bool = False) -> int:
    """
    Count cells in conflict with one of their peers.

    Fixed cells still act as peers but are only counted themselves when
    include_fixed is set, so by default only player entries are flagged.
    """
    conflicts = 0
    for row in range(SIZE):
        for col in range(SIZE):
            if board.fixed[row, col] and not include_fixed:
                continue
            if cell_in_conflict(board, row, col):
                conflicts += 1
    return conflicts


def count_solutions(board: SudokuBoard, limit: int = 2) -> int:
    """
    Count the number of solutions for a puzzle (up to limit).

    Uses backtracking with the minimum-remaining-values heuristic and stops
    early once limit is reached.
    """
    if not board_valid(board):
        return 0

    work_board = board.copy()
    count = [0]

    def backtrack() -> bool:
        """Returns True if limit reached."""
        empty_cells = work_board.get_empty_cells()
        if not empty_cells:
            count[0] += 1
            return count[0] >= limit

        best_cell = empty_cells[0]
        best_candidates = None
        for cell in empty_cells:
            candidates = get_candidates(work_board, cell[0], cell[1])
            if best_candidates is None or len(candidates) < len(best_candidates):
                best_cell, best_candidates = cell, candidates
                if not candidates:
                    return False

        row, col = best_cell
        for val in sorted(best_candidates):
            work_board.set(row, col, val)
            if backtrack():
                return True
            work_board.erase(row, col)

        return False

    backtrack()
    return count[0]


def has_unique_solution(board: SudokuBoard) -> bool:
    """Check if a puzzle has exactly one solution."""
    return count_solutions(board, limit=2) == 1
