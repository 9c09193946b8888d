"""Save-format encoding of boards and notes.

A board is stored as 81 characters in row-major order:

* ``1``-``9``: a fixed (given) cell holding that digit,
* ``!@#$%^&*(``: a modifiable cell holding 1-9 (the shifted digit keys),
* ``0``: a modifiable empty cell.

Notes are stored as 81 comma-joined groups of ascending digits, one per cell,
with a single space for a cell without notes.
"""

from __future__ import annotations
from typing import Dict, FrozenSet, List, Tuple

import numpy as np

from .board import EMPTY, SIZE, SudokuBoard
from .errors import CorruptSave

SYMBOLS = "!@#$%^&*("
NO_NOTES = " "

CELL_COUNT = SIZE * SIZE

NotesMap = Dict[Tuple[int, int], FrozenSet[int]]


def number_to_symbol(value: int) -> str:
    """Symbol for a modifiable cell value; '0' for empty."""
    if value == EMPTY:
        return "0"
    return SYMBOLS[value - 1]


def symbol_to_number(symbol: str) -> int:
    return SYMBOLS.index(symbol) + 1


def serialize_board(board: SudokuBoard) -> str:
    """Encode values and fixed flags into a single 81-char string."""
    chars = []
    for cell in board.cells():
        if cell.fixed:
            chars.append(str(cell.value))
        else:
            chars.append(number_to_symbol(cell.value))
    return "".join(chars)


def deserialize_board(data: str) -> SudokuBoard:
    """Rebuild a board, recovering both value and fixed flag from each character."""
    if len(data) != CELL_COUNT:
        raise CorruptSave(f"Saved board must be {CELL_COUNT} characters, got {len(data)}")

    grid = np.zeros((SIZE, SIZE), dtype=np.int32)
    fixed = np.zeros((SIZE, SIZE), dtype=bool)
    for idx, char in enumerate(data):
        row, col = divmod(idx, SIZE)
        if char == "0":
            continue
        if char in SYMBOLS:
            grid[row, col] = symbol_to_number(char)
        elif char in "123456789":
            grid[row, col] = int(char)
            fixed[row, col] = True
        else:
            raise CorruptSave(f"Unexpected character {char!r} at position {idx}")
    return SudokuBoard(grid, fixed)


def serialize_notes(notes: NotesMap) -> str:
    """Encode a position -> digits mapping; positions not present have no notes."""
    groups: List[str] = []
    for idx in range(CELL_COUNT):
        digits = notes.get(divmod(idx, SIZE))
        groups.append("".join(str(d) for d in sorted(digits)) if digits else NO_NOTES)
    return ",".join(groups)


def deserialize_notes(data: str) -> NotesMap:
    """Decode a notes string into a mapping holding only cells with notes."""
    groups = data.split(",")
    # Older saves terminate every group with a comma.
    if len(groups) == CELL_COUNT + 1 and groups[-1] == "":
        groups.pop()
    if len(groups) != CELL_COUNT:
        raise CorruptSave(f"Saved notes must hold {CELL_COUNT} groups, got {len(groups)}")

    notes: NotesMap = {}
    for idx, group in enumerate(groups):
        if group == NO_NOTES:
            continue
        if not group or any(ch not in "123456789" for ch in group):
            raise CorruptSave(f"Malformed notes {group!r} for cell {idx}")
        notes[divmod(idx, SIZE)] = frozenset(int(ch) for ch in group)
    return notes
