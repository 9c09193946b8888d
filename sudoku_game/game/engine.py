"""The game engine: one instance owns the board, selection, notes, action log and clock."""

from __future__ import annotations
import logging
import random
import time
from enum import Enum
from typing import Callable, FrozenSet, Optional, Tuple, Union

from ..config import GameConfig
from ..core.board import EMPTY, Cell, SudokuBoard, check_position
from ..core.codec import deserialize_board, deserialize_notes, serialize_board, serialize_notes
from ..core.errors import CellLocked, EmptyLog, GamePaused, InvalidDigit, NoSelection
from ..core.validator import board_solved, count_conflicts, peer_positions
from ..generator.generator import SudokuGenerator, validate_hint_count
from ..solvers.backtracking_solver import BacktrackingSolver
from ..solvers.base_solver import SolverStats
from ..storage import SavedGame, check_seconds
from .actions import Action, ActionLog, RemoveValue, SetValue, ToggleNote
from .notes import NotesStore, check_digit
from .timer import GameTimer, format_elapsed

logger = logging.getLogger(__name__)

Position = Tuple[int, int]


class Direction(Enum):
    """Selection movement directions as (row delta, col delta)."""
    UP = (-1, 0)
    DOWN = (1, 0)
    LEFT = (0, -1)
    RIGHT = (0, 1)

    @classmethod
    def parse(cls, value: Union[str, Direction]) -> Direction:
        """Accept a Direction, its name ('up') or an arrow key name ('ArrowUp')."""
        if isinstance(value, Direction):
            return value
        name = str(value).strip().upper()
        if name.startswith("ARROW"):
            name = name[len("ARROW"):]
        try:
            return cls[name]
        except KeyError:
            raise ValueError(f"Unknown direction: {value!r}") from None


def parse_digit(value: Union[int, str]) -> int:
    """Turn a key or number into a digit 1-9; anything else raises InvalidDigit."""
    if isinstance(value, str):
        if len(value) != 1 or value not in "123456789":
            raise InvalidDigit(f"Digit must be a single character 1-9, got {value!r}")
        return int(value)
    return check_digit(value)


class SudokuGame:
    """
    Playable Sudoku session.

    Lifecycle: create, then new_game() or load(), then play through the
    selection-based mutators, undo()/redo() and solve(); clear_board() or
    another new_game() replaces the board wholesale.

    Every rejected operation raises before anything is changed, so the board,
    notes and action log stay consistent.
    """

    def __init__(self, config: Optional[GameConfig] = None,
                 clock: Callable[[], float] = time.monotonic):
        """
        Initialize an empty game.

        Args:
            config: Game settings (defaults to GameConfig()).
            clock: Monotonic clock in seconds, injectable for tests.
        """
        self.config = config or GameConfig()
        self.rng = random.Random(self.config.seed)
        self.generator = SudokuGenerator(rng=self.rng)
        self.board = SudokuBoard()
        self.notes = NotesStore()
        self.log = ActionLog()
        self.timer = GameTimer(clock)
        self.selection: Optional[Position] = None
        self.last_solve_stats: Optional[SolverStats] = None
        self._paused = False
        self._won = False

    # Lifecycle

    def new_game(self, hint_count: Optional[int] = None) -> None:
        """
        Generate a new puzzle keeping hint_count fixed cells.

        Resets the action log, notes, selection and timer.
        """
        if hint_count is None:
            hint_count = self.config.default_hint_count
        hint_count = validate_hint_count(hint_count)

        self.generator.populate(self.board, hint_count)
        self._reset_state()
        self.timer.start()
        logger.info("New game started with %d hints", hint_count)

    def clear_board(self) -> None:
        """Empty the whole board and restart the clock."""
        self.board.clear()
        self._reset_state()
        self.timer.start()
        logger.info("Board cleared")

    def _reset_state(self) -> None:
        self.log.clear()
        self.notes.clear()
        self.clear_selection()
        self.last_solve_stats = None
        self._paused = False
        self._won = False

    # Pause handling

    @property
    def paused(self) -> bool:
        return self._paused

    @property
    def won(self) -> bool:
        """True while the board is completely and correctly filled."""
        return self._won

    def pause(self) -> None:
        if not self._paused:
            self.timer.pause()
            self._paused = True

    def resume(self) -> None:
        """Lift a pause. The clock stays stopped on a finished board."""
        if self._paused:
            if not self._won:
                self.timer.resume()
            self._paused = False

    def _update_won(self) -> None:
        """Stop the clock when the board becomes solved, restart it when it stops being so."""
        won = board_solved(self.board)
        if won == self._won:
            return
        self._won = won
        if won:
            self.timer.pause()
            logger.info("Board completed in %s", format_elapsed(self.timer.elapsed))
        elif not self._paused:
            self.timer.resume()

    def _check_playable(self) -> None:
        if self._paused:
            raise GamePaused("The game is paused")

    # Selection

    def select(self, row: int, col: int) -> None:
        self._check_playable()
        check_position(row, col)
        self.selection = (row, col)

    def clear_selection(self) -> None:
        self.selection = None

    def move(self, direction: Union[str, Direction]) -> Position:
        """
        Move the selection one cell; moving off the grid leaves it in place.

        With nothing selected, the top-left cell gets selected.
        """
        self._check_playable()
        direction = Direction.parse(direction)
        if self.selection is None:
            self.selection = (0, 0)
            return self.selection

        row = self.selection[0] + direction.value[0]
        col = self.selection[1] + direction.value[1]
        if 0 <= row < self.board.size and 0 <= col < self.board.size:
            self.selection = (row, col)
        return self.selection

    def _require_selection(self) -> Position:
        if self.selection is None:
            raise NoSelection("No cell is selected")
        return self.selection

    def can_modify(self) -> bool:
        """True if the selected cell accepts player input."""
        row, col = self._require_selection()
        return self.board.can_modify(row, col)

    def _modifiable_selection(self) -> Position:
        self._check_playable()
        row, col = self._require_selection()
        if not self.board.can_modify(row, col):
            raise CellLocked(row, col)
        return row, col

    # Mutators

    def apply_digit(self, digit: Union[int, str]) -> Optional[Action]:
        """
        Enter digit into the selected cell.

        Returns the recorded action, or None when the cell already held digit.
        """
        digit = parse_digit(digit)
        row, col = self._modifiable_selection()
        previous = self.board.get(row, col)
        if previous == digit:
            return None

        cleared: Tuple[Position, ...] = ()
        if self.config.clear_peer_notes:
            cleared = tuple(sorted(
                pos for pos in peer_positions(row, col) if self.notes.has(pos[0], pos[1], digit)
            ))
        return self._perform(SetValue(row, col, previous=previous, value=digit, cleared_notes=cleared))

    def apply_erase(self) -> Optional[Action]:
        """Erase the selected cell. Returns None if it was already empty."""
        row, col = self._modifiable_selection()
        previous = self.board.get(row, col)
        if previous == EMPTY:
            return None
        return self._perform(RemoveValue(row, col, previous=previous))

    def toggle_note(self, digit: Union[int, str]) -> Action:
        """Flip a note on the selected cell."""
        digit = parse_digit(digit)
        row, col = self._modifiable_selection()
        return self._perform(ToggleNote(row, col, digit=digit))

    def _perform(self, action: Action) -> Action:
        action.apply(self.board, self.notes)
        self.log.record(action)
        logger.debug("Applied %s", action)
        self._update_won()
        return action

    def undo(self) -> Optional[Action]:
        """Revert the last action; None if there was nothing to undo."""
        self._check_playable()
        try:
            action = self.log.undo(self.board, self.notes)
        except EmptyLog:
            logger.debug("Undo ignored: log is empty")
            return None
        self._update_won()
        return action

    def redo(self) -> Optional[Action]:
        """Re-apply the last undone action; None if there was nothing to redo."""
        self._check_playable()
        try:
            action = self.log.redo(self.board, self.notes)
        except EmptyLog:
            logger.debug("Redo ignored: nothing was undone")
            return None
        self._update_won()
        return action

    # Queries

    def is_solved(self) -> bool:
        return board_solved(self.board)

    def has_conflicts(self) -> Tuple[bool, int]:
        """Whether any cell clashes with a peer, and how many cells do."""
        count = count_conflicts(self.board, include_fixed=self.config.count_fixed_conflicts)
        return count > 0, count

    def cell(self, row: int, col: int) -> Cell:
        return self.board.cell(row, col, self.notes.get(row, col))

    def visible_notes(self, row: int, col: int) -> FrozenSet[int]:
        """Notes are only shown on empty cells."""
        if not self.board.is_empty(row, col):
            return frozenset()
        return self.notes.get(row, col)

    @property
    def elapsed(self) -> int:
        return self.timer.elapsed

    @property
    def elapsed_text(self) -> str:
        return format_elapsed(self.timer.elapsed)

    # Solver

    def solve(self) -> bool:
        """
        Fill the remaining empty cells of the live board.

        On success notes, selection and the action log are cleared and the
        clock stops. On failure the board is left exactly as it was.
        """
        self._check_playable()
        solver = BacktrackingSolver(rng=self.rng, track_memory=False)
        self.last_solve_stats = solver.solve_in_place(self.board)

        if not self.last_solve_stats.solved:
            logger.warning("No completion exists for the current board")
            return False

        self.log.clear()
        self.notes.clear()
        self.clear_selection()
        self._update_won()
        logger.info("Board solved in %.3fs", self.last_solve_stats.time_seconds)
        return True

    # Persistence

    def save(self) -> SavedGame:
        return SavedGame(
            board=serialize_board(self.board),
            notes=serialize_notes(self.notes.as_dict()),
            seconds=self.timer.elapsed,
        )

    def load(self, saved: SavedGame) -> None:
        """
        Replace the current game with a saved one. Undo history is not restored.

        The save is fully decoded first, so a CorruptSave leaves the current
        game as it was. A completed board is loaded with its clock stopped.
        """
        board = deserialize_board(saved.board)
        notes = deserialize_notes(saved.notes) if saved.notes else {}
        seconds = check_seconds(saved.seconds)

        self.board = board
        self._reset_state()
        self.notes = NotesStore(notes)
        self.timer.start()
        self.timer.load(seconds)
        self._update_won()
        logger.info("Loaded saved game (%s elapsed)", format_elapsed(seconds))
