"""Unit tests for the SudokuGame engine."""

import pytest
from sudoku_game.config import GameConfig
from sudoku_game.core.errors import (
    CellLocked, CorruptSave, GamePaused, InvalidDigit, InvalidHintCount, NoSelection,
)
from sudoku_game.core.validator import board_valid
from sudoku_game.game import Direction, SudokuGame
from sudoku_game.game.actions import RemoveValue, SetValue, ToggleNote
from sudoku_game.storage import SavedGame


TEST_PUZZLE = (
    "530070000"
    "600195000"
    "098000060"
    "800060003"
    "400803001"
    "700020006"
    "060000280"
    "000419005"
    "000080079"
)

TEST_SOLUTION = (
    "534678912"
    "672195348"
    "198342567"
    "859761423"
    "426853791"
    "713924856"
    "961537284"
    "287419635"
    "345286179"
)


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


def make_game(board=TEST_PUZZLE, notes="", seconds=0, **config):
    clock = FakeClock()
    game = SudokuGame(GameConfig(seed=11, **config), clock=clock)
    game.load(SavedGame(board=board, notes=notes, seconds=seconds))
    return game, clock


def snapshot(game):
    return game.board.copy(), game.notes.as_dict()


class TestNewGame:
    """Tests for starting and clearing games."""

    def test_new_game(self):
        game = SudokuGame(GameConfig(seed=3))
        game.new_game(30)

        assert game.board.count_fixed() == 30
        assert game.board.count_filled() == 30
        assert board_valid(game.board)
        assert game.log.undo_stack == [] and game.log.redo_stack == []
        assert len(game.notes) == 0
        assert game.selection is None
        assert game.timer.running

    def test_default_hint_count(self):
        game = SudokuGame(GameConfig(seed=3, default_hint_count=50))
        game.new_game()
        assert game.board.count_fixed() == 50

    @pytest.mark.parametrize("hints", [-5, 82])
    def test_invalid_hint_count_leaves_game_untouched(self, hints):
        game, _ = make_game()
        before = game.board.copy()
        with pytest.raises(InvalidHintCount):
            game.new_game(hints)
        assert game.board == before

    def test_new_game_resets_state(self):
        game, _ = make_game()
        game.select(0, 2)
        game.toggle_note(1)
        game.apply_digit(4)

        game.new_game(30)
        assert len(game.log) == 0
        assert len(game.notes) == 0
        assert game.selection is None

    def test_clear_board(self):
        game, clock = make_game()
        clock.advance(30)
        game.clear_board()
        assert game.board.count_empty() == 81
        assert game.board.count_fixed() == 0
        assert game.elapsed == 0


class TestSelection:
    """Tests for selection and movement."""

    def test_move_without_selection_selects_origin(self):
        game, _ = make_game()
        assert game.move(Direction.DOWN) == (0, 0)

    def test_move(self):
        game, _ = make_game()
        game.select(4, 4)
        assert game.move("up") == (3, 4)
        assert game.move("ArrowRight") == (3, 5)
        assert game.move(Direction.LEFT) == (3, 4)
        assert game.move("Down") == (4, 4)

    def test_move_off_grid_is_noop(self):
        game, _ = make_game()
        game.select(0, 8)
        assert game.move("up") == (0, 8)
        assert game.move("right") == (0, 8)
        game.select(8, 0)
        assert game.move("down") == (8, 0)
        assert game.move("left") == (8, 0)

    def test_unknown_direction(self):
        game, _ = make_game()
        with pytest.raises(ValueError):
            game.move("sideways")

    def test_no_selection(self):
        game, _ = make_game()
        with pytest.raises(NoSelection):
            game.apply_digit(1)
        with pytest.raises(NoSelection):
            game.can_modify()


class TestMutations:
    """Tests for entering digits, erasing and notes."""

    def test_apply_digit_undo_redo(self):
        """Setting 5 on an empty modifiable cell records one action."""
        game, _ = make_game(board="0" + TEST_PUZZLE[1:])
        game.select(0, 0)
        assert game.can_modify()

        action = game.apply_digit("5")
        assert isinstance(action, SetValue)
        assert game.board.get(0, 0) == 5
        assert game.log.undo_stack == [action]

        game.undo()
        assert game.board.is_empty(0, 0)
        game.redo()
        assert game.board.get(0, 0) == 5

    def test_apply_digit_on_fresh_game(self):
        game = SudokuGame(GameConfig(seed=8))
        game.new_game(30)
        row, col = next(
            (c.row, c.col) for c in game.board.cells() if not c.fixed
        )
        game.select(row, col)
        game.apply_digit(5)
        assert game.board.get(row, col) == 5
        assert len(game.log) == 1

    def test_fixed_cells_are_immutable(self):
        game, _ = make_game()
        game.select(0, 0)
        assert not game.can_modify()

        with pytest.raises(CellLocked):
            game.apply_digit(1)
        with pytest.raises(CellLocked):
            game.apply_erase()
        with pytest.raises(CellLocked):
            game.toggle_note(1)

        assert game.board.get(0, 0) == 5
        assert len(game.log) == 0
        assert len(game.notes) == 0

    def test_invalid_digits(self):
        game, _ = make_game()
        game.select(0, 2)
        for bad in (0, 10, "0", "12", "a", ""):
            with pytest.raises(InvalidDigit):
                game.apply_digit(bad)
        assert len(game.log) == 0

    def test_same_digit_is_not_recorded(self):
        game, _ = make_game()
        game.select(0, 2)
        game.apply_digit(4)
        assert game.apply_digit(4) is None
        assert len(game.log) == 1

    def test_replacing_a_digit_remembers_previous(self):
        game, _ = make_game()
        game.select(0, 2)
        game.apply_digit(4)
        action = game.apply_digit(1)
        assert action.previous == 4
        game.undo()
        assert game.board.get(0, 2) == 4

    def test_erase(self):
        game, _ = make_game()
        game.select(0, 2)
        assert game.apply_erase() is None

        game.apply_digit(4)
        action = game.apply_erase()
        assert isinstance(action, RemoveValue)
        assert action.previous == 4
        assert game.board.is_empty(0, 2)

        game.undo()
        assert game.board.get(0, 2) == 4

    def test_toggle_note(self):
        game, _ = make_game()
        game.select(0, 2)
        action = game.toggle_note("7")
        assert isinstance(action, ToggleNote)
        assert game.notes.get(0, 2) == {7}
        game.undo()
        assert game.notes.get(0, 2) == frozenset()
        game.redo()
        assert game.notes.get(0, 2) == {7}

    def test_notes_hidden_while_cell_has_value(self):
        game, _ = make_game()
        game.select(0, 2)
        game.toggle_note(1)
        game.toggle_note(2)
        game.apply_digit(4)
        assert game.visible_notes(0, 2) == frozenset()
        assert game.cell(0, 2).notes == {1, 2}

        game.apply_erase()
        assert game.visible_notes(0, 2) == {1, 2}

    def test_setting_value_clears_peer_notes(self):
        game, _ = make_game()
        for pos in [(0, 3), (1, 1), (5, 2), (8, 0)]:
            game.select(*pos)
            game.toggle_note(4)

        game.select(0, 2)
        action = game.apply_digit(4)
        assert action.cleared_notes == ((0, 3), (1, 1), (5, 2))
        assert game.notes.as_dict() == {(8, 0): frozenset({4})}

        game.undo()
        for pos in [(0, 3), (1, 1), (5, 2), (8, 0)]:
            assert game.notes.get(*pos) == {4}

        game.redo()
        assert game.notes.as_dict() == {(8, 0): frozenset({4})}

    def test_peer_note_cleanup_can_be_disabled(self):
        game, _ = make_game(clear_peer_notes=False)
        game.select(0, 3)
        game.toggle_note(4)
        game.select(0, 2)
        game.apply_digit(4)
        assert game.notes.get(0, 3) == {4}


class TestUndoRedo:
    """Tests for the undo/redo protocol."""

    def play_sequence(self, game):
        game.select(0, 2)
        game.apply_digit(4)
        game.toggle_note(2)
        game.select(0, 3)
        game.toggle_note(6)
        game.toggle_note(4)
        game.select(1, 1)
        game.toggle_note(7)
        game.select(0, 3)
        game.apply_digit(6)
        game.apply_digit(7)
        game.select(0, 2)
        game.apply_erase()
        game.select(2, 0)
        game.apply_digit(1)

    def test_undo_all_then_redo_all(self):
        game, _ = make_game()
        initial = snapshot(game)
        self.play_sequence(game)
        final = snapshot(game)
        n = len(game.log)

        for _ in range(n):
            assert game.undo() is not None
        assert snapshot(game) == initial

        for _ in range(n):
            assert game.redo() is not None
        assert snapshot(game) == final

    def test_partial_undo_redo(self):
        game, _ = make_game()
        self.play_sequence(game)
        final = snapshot(game)
        for _ in range(4):
            game.undo()
        for _ in range(4):
            game.redo()
        assert snapshot(game) == final

    def test_new_action_clears_redo(self):
        game, _ = make_game()
        self.play_sequence(game)
        game.undo()
        game.undo()
        assert len(game.log.redo_stack) == 2

        game.select(8, 0)
        game.toggle_note(3)
        assert game.log.redo_stack == []
        assert game.redo() is None

    def test_empty_log_is_noop(self):
        game, _ = make_game()
        before = snapshot(game)
        assert game.undo() is None
        assert game.redo() is None
        assert snapshot(game) == before


class TestQueries:
    """Tests for win and conflict detection."""

    def test_has_conflicts(self):
        game, _ = make_game()
        assert game.has_conflicts() == (False, 0)

        game.select(0, 2)
        game.apply_digit(3)
        assert game.has_conflicts() == (True, 1)

        game.select(0, 3)
        game.apply_digit(3)
        assert game.has_conflicts() == (True, 2)

    def test_fixed_conflicts_can_be_counted(self):
        game, _ = make_game(count_fixed_conflicts=True)
        game.select(0, 2)
        game.apply_digit(3)
        assert game.has_conflicts() == (True, 2)

    def test_is_solved(self):
        game, _ = make_game()
        assert not game.is_solved()
        last_empty = [c for c in game.board.cells() if c.is_empty]
        for cell in last_empty:
            game.select(cell.row, cell.col)
            game.apply_digit(TEST_SOLUTION[cell.row * 9 + cell.col])
        assert game.is_solved()


class TestSolve:
    """Tests for solving the live board."""

    def test_solve(self):
        game, clock = make_game()
        game.select(0, 2)
        game.toggle_note(1)
        game.apply_digit(4)

        assert game.solve()
        assert game.is_solved()
        assert game.board.to_string() == TEST_SOLUTION
        assert game.board.count_fixed() == 30
        assert len(game.log) == 0
        assert len(game.notes) == 0
        assert game.selection is None
        assert game.last_solve_stats.solved

        elapsed = game.elapsed
        clock.advance(100)
        assert game.elapsed == elapsed

    def test_solve_impossible_board(self):
        game, _ = make_game()
        game.select(0, 2)
        game.apply_digit(3)
        before = snapshot(game)

        assert not game.solve()
        assert snapshot(game) == before
        assert len(game.log) == 1


class TestPauseAndTime:
    """Tests for pausing and the game clock."""

    def test_pause_blocks_play(self):
        game, clock = make_game()
        game.select(0, 2)
        clock.advance(10)
        game.pause()
        clock.advance(50)

        assert game.paused
        assert game.elapsed == 10
        for call in (lambda: game.apply_digit(1), game.undo, game.redo,
                     lambda: game.move("up"), lambda: game.select(1, 1), game.solve):
            with pytest.raises(GamePaused):
                call()

        game.resume()
        clock.advance(5)
        assert game.elapsed == 15
        game.apply_digit(4)
        assert game.elapsed_text == "0:15"


class TestPersistence:
    """Tests for save and load."""

    def test_save_and_load(self):
        game, clock = make_game()
        game.select(0, 2)
        game.apply_digit(4)
        game.select(8, 0)
        game.toggle_note(3)
        game.toggle_note(2)
        clock.advance(75)

        saved = game.save()
        assert saved.board[2] == "$"
        assert saved.notes.split(",")[72] == "23"
        assert saved.seconds == 75

        restored = SudokuGame(clock=FakeClock())
        restored.load(saved)
        assert restored.board == game.board
        assert restored.notes == game.notes
        assert restored.elapsed == 75
        assert len(restored.log) == 0

    def test_load_corrupt_save_keeps_game(self):
        game, _ = make_game()
        before = snapshot(game)
        with pytest.raises(CorruptSave):
            game.load(SavedGame(board="x" * 81))
        with pytest.raises(CorruptSave):
            game.load(SavedGame(board=TEST_PUZZLE, notes="1,2"))
        assert snapshot(game) == before

    def test_load_negative_time_keeps_game(self):
        game = SudokuGame(GameConfig(seed=4), clock=FakeClock())
        game.new_game(30)
        before = snapshot(game)

        with pytest.raises(CorruptSave):
            game.load(SavedGame(board="0" * 81, seconds=-5))

        saved = SavedGame(board="0" * 81)
        object.__setattr__(saved, "seconds", -5)
        with pytest.raises(CorruptSave):
            game.load(saved)

        assert snapshot(game) == before
        assert game.board.count_fixed() == 30


class TestWinDetection:
    """Tests for the clock stopping once the board is completed."""

    def test_completing_the_board_stops_the_clock(self):
        game, clock = make_game(board="0" + TEST_SOLUTION[1:])
        game.select(0, 0)
        clock.advance(10)
        assert not game.won

        game.apply_digit(5)
        assert game.won
        clock.advance(100)
        assert game.elapsed == 10

    def test_undo_out_of_a_win_restarts_the_clock(self):
        game, clock = make_game(board="0" + TEST_SOLUTION[1:])
        game.select(0, 0)
        clock.advance(10)
        game.apply_digit(5)
        clock.advance(100)

        game.undo()
        assert not game.won
        clock.advance(5)
        assert game.elapsed == 15

        game.redo()
        assert game.won
        clock.advance(50)
        assert game.elapsed == 15

    def test_erasing_a_completed_cell_restarts_the_clock(self):
        game, clock = make_game(board="0" + TEST_SOLUTION[1:])
        game.select(0, 0)
        game.apply_digit(5)
        game.apply_erase()
        assert not game.won
        clock.advance(7)
        assert game.elapsed == 7

    def test_wrong_completion_is_not_a_win(self):
        game, clock = make_game(board="00" + TEST_SOLUTION[2:])
        game.select(0, 0)
        game.apply_digit(3)
        game.select(0, 1)
        game.apply_digit(5)
        assert not game.won
        clock.advance(20)
        assert game.elapsed == 20

    def test_resume_after_solve_keeps_clock_stopped(self):
        game, clock = make_game()
        clock.advance(10)
        game.solve()
        assert game.won

        game.pause()
        game.resume()
        assert not game.paused
        clock.advance(50)
        assert game.elapsed == 10

    def test_resume_after_win_keeps_clock_stopped(self):
        game, clock = make_game(board="0" + TEST_SOLUTION[1:])
        game.select(0, 0)
        game.apply_digit(5)
        game.pause()
        game.resume()
        clock.advance(50)
        assert game.elapsed == 0

    def test_loading_a_completed_board(self):
        game, clock = make_game(board=TEST_SOLUTION, seconds=40)
        assert game.won
        clock.advance(30)
        assert game.elapsed == 40

    def test_new_game_clears_win(self):
        game, _ = make_game(board=TEST_SOLUTION)
        game.new_game(30)
        assert not game.won
        assert game.timer.running


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
