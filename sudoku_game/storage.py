"""Saving and loading games as small JSON documents."""

from __future__ import annotations
import json
import logging
import numbers
import os
from dataclasses import dataclass
from typing import Any, Dict, Optional

from .core.errors import CorruptSave

logger = logging.getLogger(__name__)

BOARD_KEY = "saved-board"
NOTES_KEY = "saved-notes"
TIME_KEY = "saved-time"


def check_seconds(seconds) -> int:
    """Return seconds as an int if it is a whole, non-negative count, else raise CorruptSave."""
    if isinstance(seconds, bool) or not isinstance(seconds, numbers.Integral):
        raise CorruptSave(f"{TIME_KEY!r} must be a whole number of seconds, got {seconds!r}")
    if seconds < 0:
        raise CorruptSave(f"{TIME_KEY!r} cannot be negative, got {seconds}")
    return int(seconds)


@dataclass(frozen=True)
class SavedGame:
    """Encoded board, encoded notes and elapsed seconds."""
    board: str
    notes: str = ""
    seconds: int = 0

    def __post_init__(self):
        if not isinstance(self.board, str):
            raise CorruptSave(f"{BOARD_KEY!r} must be a string")
        if not isinstance(self.notes, str):
            raise CorruptSave(f"{NOTES_KEY!r} must be a string")
        check_seconds(self.seconds)

    def to_dict(self) -> Dict[str, Any]:
        return {BOARD_KEY: self.board, NOTES_KEY: self.notes, TIME_KEY: self.seconds}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> SavedGame:
        try:
            board = data[BOARD_KEY]
        except KeyError:
            raise CorruptSave(f"Save is missing {BOARD_KEY!r}") from None
        notes = data.get(NOTES_KEY) or ""

        try:
            seconds = int(data.get(TIME_KEY) or 0)
        except (TypeError, ValueError):
            raise CorruptSave(f"{TIME_KEY!r} must be a whole number of seconds") from None

        return cls(board=board, notes=notes, seconds=seconds)


def save_game(path: str, saved: SavedGame) -> None:
    """Write a saved game to path, creating parent directories as needed."""
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    with open(path, "w") as f:
        json.dump(saved.to_dict(), f, indent=2)
    logger.debug("Saved game to %s", path)


def load_game(path: str) -> Optional[SavedGame]:
    """Read a saved game; None if no save exists at path."""
    if not os.path.exists(path):
        return None
    with open(path, "r") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise CorruptSave(f"Save file {path} is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise CorruptSave(f"Save file {path} must hold a JSON object")
    return SavedGame.from_dict(data)
