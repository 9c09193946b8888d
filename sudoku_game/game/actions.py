"""Recorded player actions and the undo/redo log."""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import List, Tuple

from ..core.board import EMPTY, SudokuBoard
from ..core.errors import EmptyLog
from .notes import NotesStore

Position = Tuple[int, int]


class ActionKind(Enum):
    SET = "set"
    REMOVE = "remove"
    TOGGLE_NOTE = "toggle-note"


@dataclass(frozen=True)
class Action(ABC):
    """A single recorded mutation of the board or its notes."""
    row: int
    col: int

    kind = None

    @property
    def position(self) -> Position:
        return self.row, self.col

    @abstractmethod
    def apply(self, board: SudokuBoard, notes: NotesStore) -> None:
        """Perform the action (also used to redo it)."""

    @abstractmethod
    def revert(self, board: SudokuBoard, notes: NotesStore) -> None:
        """Undo the action."""


@dataclass(frozen=True)
class SetValue(Action):
    """
    Write value into a cell that held previous (0 if it was empty).

    cleared_notes lists the peer cells whose note for value was removed
    when the value was entered; reverting puts those notes back.
    """
    previous: int = EMPTY
    value: int = EMPTY
    cleared_notes: Tuple[Position, ...] = ()

    kind = ActionKind.SET

    def apply(self, board: SudokuBoard, notes: NotesStore) -> None:
        board.set(self.row, self.col, self.value)
        notes.remove_from(self.cleared_notes, self.value)

    def revert(self, board: SudokuBoard, notes: NotesStore) -> None:
        board.set(self.row, self.col, self.previous)
        notes.add_to(self.cleared_notes, self.value)


@dataclass(frozen=True)
class RemoveValue(Action):
    """Erase a cell that held previous."""
    previous: int = EMPTY

    kind = ActionKind.REMOVE

    def apply(self, board: SudokuBoard, notes: NotesStore) -> None:
        board.erase(self.row, self.col)

    def revert(self, board: SudokuBoard, notes: NotesStore) -> None:
        board.set(self.row, self.col, self.previous)


@dataclass(frozen=True)
class ToggleNote(Action):
    """Flip one note digit; applying it twice is a no-op."""
    digit: int = 0

    kind = ActionKind.TOGGLE_NOTE

    def apply(self, board: SudokuBoard, notes: NotesStore) -> None:
        notes.toggle(self.row, self.col, self.digit)

    def revert(self, board: SudokuBoard, notes: NotesStore) -> None:
        notes.toggle(self.row, self.col, self.digit)


class ActionLog:
    """
    Undo and redo stacks, most recent action last.

    Recording a new action empties the redo stack. The redo stack only grows
    through undo and only shrinks through redo or a new action.
    """

    def __init__(self):
        self.undo_stack: List[Action] = []
        self.redo_stack: List[Action] = []

    def record(self, action: Action) -> None:
        self.undo_stack.append(action)
        self.redo_stack.clear()

    def undo(self, board: SudokuBoard, notes: NotesStore) -> Action:
        """Revert the most recent action. Raises EmptyLog if there is none."""
        if not self.undo_stack:
            raise EmptyLog("Nothing to undo")
        action = self.undo_stack[-1]
        action.revert(board, notes)
        self.undo_stack.pop()
        self.redo_stack.append(action)
        return action

    def redo(self, board: SudokuBoard, notes: NotesStore) -> Action:
        """Re-apply the most recently undone action. Raises EmptyLog if there is none."""
        if not self.redo_stack:
            raise EmptyLog("Nothing to redo")
        action = self.redo_stack[-1]
        action.apply(board, notes)
        self.redo_stack.pop()
        self.undo_stack.append(action)
        return action

    @property
    def can_undo(self) -> bool:
        return bool(self.undo_stack)

    @property
    def can_redo(self) -> bool:
        return bool(self.redo_stack)

    def clear(self) -> None:
        self.undo_stack.clear()
        self.redo_stack.clear()

    def __len__(self) -> int:
        return len(self.undo_stack)
