"""Game configuration."""

from __future__ import annotations
from dataclasses import dataclass, asdict, fields
from typing import Any, Dict, Optional


@dataclass
class GameConfig:
    """Settings for a SudokuGame instance."""
    # Fixed cells left visible by new_game() when no hint count is given
    default_hint_count: int = 30

    # Entering a value removes that digit from the notes of its peers
    clear_peer_notes: bool = True

    # Fixed cells are counted by has_conflicts() too, not only player entries
    count_fixed_conflicts: bool = False

    seed: Optional[int] = None
    save_path: str = "sudoku_save.json"

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> GameConfig:
        """Build a config from a dictionary, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})
