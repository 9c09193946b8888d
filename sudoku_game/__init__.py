"""Sudoku puzzle game engine."""

from .config import GameConfig
from .core import SudokuBoard, SudokuError
from .game import SudokuGame, Direction
from .generator import SudokuGenerator, Difficulty
from .storage import SavedGame, save_game, load_game

__version__ = "1.0.0"

__all__ = [
    "GameConfig", "SudokuBoard", "SudokuError", "SudokuGame", "Direction",
    "SudokuGenerator", "Difficulty", "SavedGame", "save_game", "load_game",
]
