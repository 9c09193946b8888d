"""Per-cell candidate notes, kept apart from the value grid."""

from __future__ import annotations
from typing import Dict, FrozenSet, Iterable, List, Set, Tuple

from ..core.board import SIZE, check_position
from ..core.errors import InvalidDigit

Position = Tuple[int, int]


def check_digit(digit: int) -> int:
    if isinstance(digit, bool) or not isinstance(digit, int) or not 1 <= digit <= SIZE:
        raise InvalidDigit(f"Digit must be 1-{SIZE}, got {digit!r}")
    return digit


class NotesStore:
    """
    Candidate digits pencilled into cells.

    Notes survive value changes: a cell that gets a value keeps its notes,
    the UI simply stops showing them until the value is removed again.
    """

    def __init__(self, notes: Dict[Position, Iterable[int]] = None):
        self._notes: Dict[Position, Set[int]] = {}
        for pos, digits in (notes or {}).items():
            self.set(pos[0], pos[1], digits)

    def get(self, row: int, col: int) -> FrozenSet[int]:
        check_position(row, col)
        return frozenset(self._notes.get((row, col), ()))

    def has(self, row: int, col: int, digit: int) -> bool:
        return digit in self._notes.get((row, col), ())

    def set(self, row: int, col: int, digits: Iterable[int]) -> None:
        """Replace the notes of a cell."""
        check_position(row, col)
        digits = {check_digit(d) for d in digits}
        if digits:
            self._notes[(row, col)] = digits
        else:
            self._notes.pop((row, col), None)

    def toggle(self, row: int, col: int, digit: int) -> bool:
        """Flip one note; returns True if the note is now present."""
        check_position(row, col)
        check_digit(digit)
        digits = self._notes.setdefault((row, col), set())
        if digit in digits:
            digits.discard(digit)
            if not digits:
                del self._notes[(row, col)]
            return False
        digits.add(digit)
        return True

    def remove_from(self, positions: Iterable[Position], digit: int) -> List[Position]:
        """Drop digit from each of positions; returns the positions that held it."""
        cleared = []
        for row, col in sorted(positions):
            if self.has(row, col, digit):
                self.toggle(row, col, digit)
                cleared.append((row, col))
        return cleared

    def add_to(self, positions: Iterable[Position], digit: int) -> None:
        for row, col in positions:
            if not self.has(row, col, digit):
                self.toggle(row, col, digit)

    def clear_cell(self, row: int, col: int) -> None:
        check_position(row, col)
        self._notes.pop((row, col), None)

    def clear(self) -> None:
        self._notes.clear()

    def as_dict(self) -> Dict[Position, FrozenSet[int]]:
        """Snapshot of every cell that holds notes."""
        return {pos: frozenset(digits) for pos, digits in self._notes.items()}

    def __len__(self) -> int:
        return len(self._notes)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, NotesStore):
            return False
        return self.as_dict() == other.as_dict()

    def __repr__(self) -> str:
        return f"NotesStore(cells={len(self)})"
