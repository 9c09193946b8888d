"""Gameplay: engine, action log, notes and timer."""

from .actions import Action, ActionKind, ActionLog, SetValue, RemoveValue, ToggleNote
from .engine import Direction, SudokuGame
from .notes import NotesStore
from .timer import GameTimer, format_elapsed

__all__ = [
    "Action", "ActionKind", "ActionLog", "SetValue", "RemoveValue", "ToggleNote",
    "Direction", "SudokuGame", "NotesStore", "GameTimer", "format_elapsed",
]
