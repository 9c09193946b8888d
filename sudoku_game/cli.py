"""Command-line interface for the Sudoku game engine."""

import argparse
import json
import logging
import sys
from typing import Callable, Iterable

from .config import GameConfig
from .core.board import SudokuBoard
from .core.codec import deserialize_board
from .core.errors import SudokuError
from .core.validator import board_valid, count_conflicts, count_solutions
from .game import SudokuGame
from .generator import SudokuGenerator, Difficulty
from .solvers import BacktrackingSolver
from .benchmark import Benchmark
from .benchmark.visualizer import Visualizer
from .storage import load_game, save_game

PLAY_HELP = """Commands:
  new [HINTS]          start a new game
  sel ROW COL          select a cell (0-8)
  up|down|left|right   move the selection
  1-9                  enter a digit in the selected cell
  x | erase            erase the selected cell
  note D               toggle note D on the selected cell
  u | undo, r | redo   undo / redo
  check                report conflicts
  solve                solve the board for me
  pause | resume       pause or resume the clock
  save | load          save or load the game file
  show | time | help   display board / elapsed time / this help
  q | quit             leave (the game is saved first)"""


WIN_CHECK_COMMANDS = {"1", "2", "3", "4", "5", "6", "7", "8", "9", "x", "erase", "u", "undo", "r", "redo", "solve"}


def parse_puzzle(text: str) -> SudokuBoard:
    """Read either a plain 0-for-empty puzzle or a save-format board string."""
    text = text.strip()
    if any(ch in text for ch in "!@#$%^&*("):
        return deserialize_board(text)
    return SudokuBoard.from_string(text)


def main():
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(
        description="Sudoku Puzzle Game Engine",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Generate 5 puzzles keeping 30 hints
  python -m sudoku_game.cli generate --count 5 --hints 30

  # Solve a puzzle
  python -m sudoku_game.cli solve --puzzle "0030206..."

  # Play in the terminal
  python -m sudoku_game.cli play --hints 35
        """
    )
    parser.add_argument(
        "--log-level", default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING)"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Generate command
    gen_parser = subparsers.add_parser("generate", help="Generate Sudoku puzzles")
    gen_parser.add_argument(
        "--count", "-n", type=int, default=5,
        help="Number of puzzles to generate (default: 5)"
    )
    hint_group = gen_parser.add_mutually_exclusive_group()
    hint_group.add_argument(
        "--hints", type=int, default=None,
        help="Number of fixed cells to keep (0-81)"
    )
    hint_group.add_argument(
        "--difficulty", "-d",
        choices=[d.value for d in Difficulty],
        default="medium",
        help="Difficulty level (default: medium)"
    )
    gen_parser.add_argument(
        "--output", "-o", type=str, default=None,
        help="Output file for puzzles (JSON format)"
    )
    gen_parser.add_argument(
        "--seed", "-s", type=int, default=None,
        help="Random seed for reproducibility"
    )

    # Solve command
    solve_parser = subparsers.add_parser("solve", help="Solve a Sudoku puzzle")
    solve_parser.add_argument(
        "--puzzle", "-p", type=str, required=True,
        help="Puzzle string (81 chars, 0 for empty cells, or a saved board)"
    )
    solve_parser.add_argument(
        "--seed", "-s", type=int, default=None,
        help="Random seed for candidate order"
    )
    solve_parser.add_argument(
        "--verbose", "-v", action="store_true",
        help="Show detailed solving statistics"
    )

    # Check command
    check_parser = subparsers.add_parser("check", help="Check a puzzle for conflicts")
    check_parser.add_argument(
        "--puzzle", "-p", type=str, required=True,
        help="Puzzle string (81 chars, 0 for empty cells, or a saved board)"
    )

    # Play command
    play_parser = subparsers.add_parser("play", help="Play in the terminal")
    play_parser.add_argument(
        "--hints", type=int, default=None,
        help="Hints for a new game (default: 30)"
    )
    play_parser.add_argument(
        "--save-file", type=str, default=None,
        help="Save file to resume from and write to (default: sudoku_save.json)"
    )
    play_parser.add_argument(
        "--new", action="store_true",
        help="Start a new game even if a save exists"
    )
    play_parser.add_argument(
        "--seed", "-s", type=int, default=None,
        help="Random seed for reproducibility"
    )

    # Benchmark command
    bench_parser = subparsers.add_parser("benchmark", help="Benchmark generation and solving")
    bench_parser.add_argument(
        "--puzzles", "-n", type=int, default=10,
        help="Puzzles per difficulty (default: 10)"
    )
    bench_parser.add_argument(
        "--difficulty", "-d",
        choices=[d.value for d in Difficulty] + ["all"],
        default="all",
        help="Difficulty to benchmark (default: all)"
    )
    bench_parser.add_argument(
        "--output", "-o", type=str, default="results",
        help="Output directory for results (default: results)"
    )
    bench_parser.add_argument(
        "--seed", "-s", type=int, default=42,
        help="Random seed for reproducibility (default: 42)"
    )
    bench_parser.add_argument(
        "--no-charts", action="store_true",
        help="Skip chart generation"
    )

    args = parser.parse_args()
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    try:
        if args.command == "generate":
            cmd_generate(args)
        elif args.command == "solve":
            cmd_solve(args)
        elif args.command == "check":
            cmd_check(args)
        elif args.command == "play":
            cmd_play(args)
        elif args.command == "benchmark":
            cmd_benchmark(args)
    except (SudokuError, ValueError) as e:
        print(f"Error: {e}")
        sys.exit(1)


def cmd_generate(args):
    """Handle the generate command."""
    generator = SudokuGenerator(seed=args.seed)
    hints = args.hints if args.hints is not None else Difficulty(args.difficulty)

    print(f"\nGenerating {args.count} puzzles...")
    puzzles = generator.generate_batch(args.count, hints)

    all_puzzles = []
    for i, puzzle in enumerate(puzzles, 1):
        all_puzzles.append({
            "index": i,
            "puzzle": puzzle.to_string(),
            "clues": puzzle.count_fixed()
        })
        print(f"\n--- Puzzle {i} ({puzzle.count_fixed()} clues) ---")
        print(puzzle)

    if args.output:
        with open(args.output, "w") as f:
            json.dump(all_puzzles, f, indent=2)
        print(f"\nAll puzzles saved to {args.output}")

    print(f"\nTotal puzzles generated: {len(all_puzzles)}")


def cmd_solve(args):
    """Handle the solve command."""
    board = parse_puzzle(args.puzzle)

    print("Input puzzle:")
    print(board)
    print()

    solver = BacktrackingSolver(seed=args.seed)
    solution, stats = solver.solve(board)

    if stats.solved:
        print(f"✓ Solved in {stats.time_seconds:.4f}s")
        if args.verbose:
            print(f"  Iterations: {stats.iterations:,}")
            print(f"  Backtracks: {stats.backtracks:,}")
            print(f"  Memory: {stats.memory_bytes / 1024:.2f} KB")
        print(solution)
    else:
        print("✗ No solution exists")
        if args.verbose:
            print(f"  Time: {stats.time_seconds:.4f}s")
            print(f"  Iterations: {stats.iterations:,}")
        sys.exit(1)


def cmd_check(args):
    """Handle the check command."""
    board = parse_puzzle(args.puzzle)
    print(board)

    valid = board_valid(board)
    conflicts = count_conflicts(board, include_fixed=True)
    print(f"Valid: {'yes' if valid else 'no'}")
    print(f"Cells in conflict: {conflicts}")
    if valid:
        solutions = count_solutions(board, limit=2)
        label = {0: "none", 1: "unique"}.get(solutions, "multiple")
        print(f"Solutions: {label}")


def cmd_play(args):
    """Handle the play command."""
    config = GameConfig(seed=args.seed)
    if args.hints is not None:
        config.default_hint_count = args.hints
    if args.save_file:
        config.save_path = args.save_file

    game = SudokuGame(config)
    saved = None if args.new else load_game(config.save_path)
    if saved is not None:
        game.load(saved)
        print(f"Resumed game from {config.save_path}")
    else:
        game.new_game()

    print(PLAY_HELP)
    print(render(game))
    play_session(game, _read_lines(), print)
    save_game(config.save_path, game.save())
    print(f"Game saved to {config.save_path}")


def _read_lines() -> Iterable[str]:
    while True:
        try:
            yield input("> ")
        except EOFError:
            return


def render(game: SudokuGame) -> str:
    """Board, selection and clock as text."""
    lines = [str(game.board)]
    status = f"Time {game.elapsed_text}"
    if game.selection is not None:
        row, col = game.selection
        cell = game.cell(row, col)
        status += f" | Selected ({row}, {col})"
        if cell.fixed:
            status += " fixed"
        notes = game.visible_notes(row, col)
        if notes:
            status += " notes " + "".join(str(d) for d in sorted(notes))
    if game.paused:
        status += " | PAUSED"
    lines.append(status)
    return "\n".join(lines)


def play_session(game: SudokuGame, commands: Iterable[str], emit: Callable[[str], None]) -> None:
    """
    Drive a game from text commands until 'quit' or the end of input.

    Engine errors are reported through emit and the session continues.
    """
    for line in commands:
        parts = line.split()
        if not parts:
            continue
        cmd, params = parts[0].lower(), parts[1:]
        if cmd in ("q", "quit", "exit"):
            return
        was_won = game.won
        try:
            message = _dispatch(game, cmd, params)
        except (SudokuError, ValueError) as e:
            emit(f"Error: {e}")
            continue
        if message:
            emit(message)
        if cmd in WIN_CHECK_COMMANDS and game.won and not was_won:
            emit(f"Congratulations! You won! Your time was: {game.elapsed_text}.")


def _dispatch(game: SudokuGame, cmd: str, params: list) -> str:
    if cmd == "help":
        return PLAY_HELP
    if cmd == "new":
        game.new_game(int(params[0]) if params else None)
        return render(game)
    if cmd == "sel":
        if len(params) != 2:
            raise ValueError("usage: sel ROW COL")
        game.select(int(params[0]), int(params[1]))
        return render(game)
    if cmd in ("up", "down", "left", "right"):
        game.move(cmd)
        return render(game)
    if len(cmd) == 1 and cmd in "123456789":
        game.apply_digit(cmd)
        return render(game)
    if cmd in ("x", "erase"):
        game.apply_erase()
        return render(game)
    if cmd == "note":
        if len(params) != 1:
            raise ValueError("usage: note D")
        game.toggle_note(params[0])
        return render(game)
    if cmd in ("u", "undo"):
        return render(game) if game.undo() else "Nothing to undo"
    if cmd in ("r", "redo"):
        return render(game) if game.redo() else "Nothing to redo"
    if cmd == "check":
        conflict, count = game.has_conflicts()
        if not conflict:
            return "No conflicts on the board."
        return "1 conflict exists on the board." if count == 1 else f"{count} conflicts exist on the board."
    if cmd == "solve":
        if not game.solve():
            return "This board cannot be completed."
        return render(game)
    if cmd == "pause":
        game.pause()
        return "Paused"
    if cmd == "resume":
        game.resume()
        return render(game)
    if cmd == "save":
        save_game(game.config.save_path, game.save())
        return f"Saved to {game.config.save_path}"
    if cmd == "load":
        saved = load_game(game.config.save_path)
        if saved is None:
            return f"No save found at {game.config.save_path}"
        game.load(saved)
        return render(game)
    if cmd == "show":
        return render(game)
    if cmd == "time":
        return game.elapsed_text
    raise ValueError(f"Unknown command {cmd!r}; type 'help'")


def cmd_benchmark(args):
    """Handle the benchmark command."""
    if args.difficulty == "all":
        difficulties = list(Difficulty)
    else:
        difficulties = [Difficulty(args.difficulty)]

    print("=" * 60)
    print("SUDOKU ENGINE BENCHMARK")
    print("=" * 60)
    print(f"Puzzles per difficulty: {args.puzzles}")
    print(f"Difficulties: {[d.value for d in difficulties]}")
    print(f"Output directory: {args.output}")
    print("=" * 60)

    benchmark = Benchmark(
        puzzles_per_difficulty=args.puzzles,
        difficulties=difficulties,
        seed=args.seed
    )
    results = benchmark.run()
    summary = benchmark.get_summary()

    print("\n" + "=" * 60)
    print("RESULTS SUMMARY")
    print("=" * 60)
    for diff, stats in summary["results_by_difficulty"].items():
        print(f"\n{diff}:")
        print(f"  Solved: {stats['solved']}/{stats['tested']}")
        print(f"  Avg Hints: {stats['avg_hints']:.1f}")
        print(f"  Avg Generate Time: {stats['avg_generate_seconds']:.4f}s")
        print(f"  Avg Solve Time: {stats['avg_solve_seconds']:.4f}s")
        print(f"  Avg Backtracks: {stats['avg_backtracks']:.1f}")

    benchmark.save_results(args.output)

    if not args.no_charts:
        print("\nGenerating charts...")
        visualizer = Visualizer(results, args.output)
        for chart in visualizer.generate_all():
            print(f"  - {chart}")

    print("\n" + "=" * 60)
    print("Benchmark complete!")


if __name__ == "__main__":
    main()
