"""Command-line interface for the math grid puzzle engine."""

import argparse
import json
import sys
import time

from .config import BOARD_SIZES, DEFAULT_BOARD_SIZE, GameConfig, configure_logging
from .core.board import GameBoard
from .core.evaluator import format_number
from .errors import InvalidBoardError
from .game import GameSession, SessionState, format_time
from .generator import BoardGenerator, Difficulty, generate_targets
from .solvers import SolutionSearcher


def main(argv=None):
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(
        description="Math Grid Puzzle Generator, Hint Solver & Player",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Generate 3 hard 10x10 boards
  python -m mathgrid.cli generate --count 3 --difficulty hard --size 10

  # Show every hint line for a board
  python -m mathgrid.cli solve --seed 7 --size 10 --limit 20

  # Play in the terminal
  python -m mathgrid.cli play --size 5 --seed 7
        """
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true",
        help="Enable debug logging"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Generate command
    gen_parser = subparsers.add_parser("generate", help="Generate boards with targets")
    gen_parser.add_argument(
        "--count", "-n", type=int, default=1,
        help="Number of boards to generate (default: 1)"
    )
    gen_parser.add_argument(
        "--difficulty", "-d",
        choices=["easy", "medium", "hard", "all"],
        default="easy",
        help="Difficulty level (default: easy)"
    )
    gen_parser.add_argument(
        "--size", type=int, choices=BOARD_SIZES, default=DEFAULT_BOARD_SIZE,
        help=f"Board size (default: {DEFAULT_BOARD_SIZE})"
    )
    gen_parser.add_argument(
        "--output", "-o", type=str, default=None,
        help="Output file for boards (JSON format)"
    )
    gen_parser.add_argument(
        "--seed", "-s", type=int, default=None,
        help="Random seed for reproducibility"
    )

    # Solve command
    solve_parser = subparsers.add_parser("solve", help="List hint lines for a board")
    solve_parser.add_argument(
        "--board", "-b", type=str, default=None,
        help="Board text: rows separated by ';', tokens by spaces"
    )
    solve_parser.add_argument(
        "--targets", "-t", type=float, nargs="+", default=None,
        help="Targets to search for (default: derived from the board)"
    )
    solve_parser.add_argument(
        "--difficulty", "-d", choices=["easy", "medium", "hard"], default="easy",
        help="Difficulty when generating a board (default: easy)"
    )
    solve_parser.add_argument(
        "--size", type=int, choices=BOARD_SIZES, default=DEFAULT_BOARD_SIZE,
        help="Size when generating a board"
    )
    solve_parser.add_argument(
        "--seed", "-s", type=int, default=None,
        help="Random seed when generating a board"
    )
    solve_parser.add_argument(
        "--limit", type=int, default=None,
        help="Show at most this many solutions"
    )

    # Play command
    play_parser = subparsers.add_parser("play", help="Play a game in the terminal")
    play_parser.add_argument(
        "--difficulty", "-d", choices=["easy", "medium", "hard"], default="easy",
        help="Difficulty level (default: easy)"
    )
    play_parser.add_argument(
        "--size", type=int, choices=BOARD_SIZES, default=DEFAULT_BOARD_SIZE,
        help=f"Board size (default: {DEFAULT_BOARD_SIZE})"
    )
    play_parser.add_argument(
        "--seed", "-s", type=int, default=None,
        help="Random seed for reproducibility"
    )

    # Benchmark command
    bench_parser = subparsers.add_parser("benchmark", help="Time target generation and hint search")
    bench_parser.add_argument(
        "--boards", "-n", type=int, default=10,
        help="Boards per difficulty and size (default: 10)"
    )
    bench_parser.add_argument(
        "--difficulty", "-d",
        choices=["easy", "medium", "hard", "all"],
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
        "--memory", action="store_true",
        help="Track peak memory of each search"
    )
    bench_parser.add_argument(
        "--no-charts", action="store_true",
        help="Skip chart generation"
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    configure_logging(args.verbose)

    if args.command == "generate":
        cmd_generate(args)
    elif args.command == "solve":
        cmd_solve(args)
    elif args.command == "play":
        cmd_play(args)
    elif args.command == "benchmark":
        cmd_benchmark(args)


def _difficulties(name):
    if name == "all":
        return list(Difficulty)
    return [Difficulty(name)]


def _format_targets(targets):
    return ", ".join(format_number(t) for t in targets)


def cmd_generate(args):
    """Handle the generate command."""
    generator = BoardGenerator(seed=args.seed)
    all_boards = []

    for difficulty in _difficulties(args.difficulty):
        print(f"\nGenerating {args.count} {difficulty.value} {args.size}x{args.size} boards...")
        for i, board in enumerate(generator.generate_batch(args.count, difficulty, args.size), 1):
            targets = generate_targets(board)
            all_boards.append({
                "difficulty": difficulty.value,
                "index": i,
                "size": board.size,
                "board": board.to_string(),
                "targets": targets,
            })

            print(f"\n--- {difficulty.value.capitalize()} Board {i} ---")
            print(board)
            print(f"Targets: {_format_targets(targets)}")

    if args.output:
        with open(args.output, "w") as f:
            json.dump(all_boards, f, indent=2)
        print(f"\nAll boards saved to {args.output}")

    print(f"\nTotal boards generated: {len(all_boards)}")


def cmd_solve(args):
    """Handle the solve command."""
    if args.board:
        try:
            board = GameBoard.from_string(args.board)
        except InvalidBoardError as e:
            print(f"Error parsing board: {e}")
            sys.exit(1)
    else:
        board = BoardGenerator(seed=args.seed).generate(Difficulty(args.difficulty), args.size)

    targets = args.targets if args.targets is not None else generate_targets(board)

    print("Board:")
    print(board)
    print(f"Targets: {_format_targets(targets)}\n")

    solutions, stats = SolutionSearcher().search(board, targets)
    shown = solutions if args.limit is None else solutions[:args.limit]

    for solution in shown:
        cells = " ".join(f"({r},{c})" for r, c in solution.path)
        print(f"{format_number(solution.target):>8}  =  {solution.expression_text:<28} {cells}")

    missing = [t for t in targets if t not in {s.target for s in solutions}]
    print(f"\n{stats.solutions} solutions from {stats.evaluations:,} evaluations "
          f"in {stats.time_seconds * 1000:.2f} ms")
    if missing:
        print(f"No straight line reaches: {_format_targets(missing)}")


PLAY_HELP = """Commands:
  r1 c1 r2 c2   select the line from (r1, c1) to (r2, c2)
  hint          give up and show solutions
  new           start a new board
  quit          leave"""


def cmd_play(args):
    """Handle the play command."""
    config = GameConfig(difficulty=args.difficulty, board_size=args.size, seed=args.seed)
    session = GameSession.from_config(config)
    last_tick = time.monotonic()

    print(PLAY_HELP)
    while True:
        snap = session.snapshot()
        print()
        print(snap.board)
        found = [t for t in snap.targets if t in snap.found_targets]
        print(f"Targets: {_format_targets(snap.targets)}  |  found: {_format_targets(found) or '-'}")
        print(f"Time {format_time(snap.elapsed_time)}  Attempts {snap.attempt_count}")

        if snap.state is not SessionState.PLAYING:
            break

        try:
            line = input("> ").strip().lower()
        except EOFError:
            break

        now = time.monotonic()
        session.tick(int(now - last_tick))
        last_tick = now - (now - last_tick) % 1

        if line in ("quit", "exit", "q"):
            break
        if line == "new":
            session.new_game(config.difficulty, config.board_size)
            last_tick = time.monotonic()
            continue
        if line == "hint":
            for solution in session.abandon():
                print(f"  {format_number(solution.target)} = {solution.expression_text}  at {solution.path[0]}")
            break

        try:
            r1, c1, r2, c2 = (int(p) for p in line.split())
        except ValueError:
            print(PLAY_HELP)
            continue

        session.selection_start(r1, c1)
        session.selection_extend(r2, c2)
        text = session.snapshot().expression_text
        outcome = session.selection_release()
        session.clear_selection()

        if outcome is None or not outcome.counted:
            print(f"Not a complete expression: {text or 'start on a number'}")
        elif outcome.new_target is not None:
            print(f"{text} = {format_number(outcome.release.result)}  Target found!")
        else:
            print(f"{text} = {format_number(outcome.release.result)}")

        if outcome is not None and outcome.game_result is not None:
            result = outcome.game_result
            print(f"\nSolved in {format_time(result.elapsed_time)} with {result.attempt_count} attempts!")


def cmd_benchmark(args):
    """Handle the benchmark command."""
    from .benchmark import Benchmark

    difficulties = _difficulties(args.difficulty)

    print("=" * 60)
    print("MATH GRID ENGINE BENCHMARK")
    print("=" * 60)
    print(f"Boards per configuration: {args.boards}")
    print(f"Difficulties: {[d.value for d in difficulties]}")
    print(f"Board sizes: {list(BOARD_SIZES)}")
    print(f"Output directory: {args.output}")
    print("=" * 60)

    benchmark = Benchmark(
        boards_per_config=args.boards,
        difficulties=difficulties,
        track_memory=args.memory,
        seed=args.seed
    )
    benchmark.run()
    summary = benchmark.get_summary()

    print("\n" + "=" * 60)
    print("RESULTS SUMMARY")
    print("=" * 60)
    for size, stats in summary["results_by_size"].items():
        print(f"\n{size}x{size}:")
        print(f"  Full target sets: {stats['fully_targeted_pct']:.1f}%")
        print(f"  Avg Target Time: {stats['avg_target_time_seconds'] * 1000:.3f} ms")
        print(f"  Avg Search Time: {stats['avg_search_time_seconds'] * 1000:.3f} ms "
              f"(max {stats['max_search_time_seconds'] * 1000:.3f} ms)")
        print(f"  Avg Solutions: {stats['avg_solutions']:.1f}")

    benchmark.save_results(args.output)

    if not args.no_charts:
        from .benchmark.visualizer import Visualizer

        print("\nGenerating charts...")
        charts = Visualizer(benchmark.results, args.output).generate_all()
        print(f"Charts saved to {args.output}/")
        for chart in charts:
            print(f"  - {chart.split('/')[-1]}")

    print("\n" + "=" * 60)
    print("Benchmark complete!")


if __name__ == "__main__":
    main()
