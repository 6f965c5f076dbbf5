"""
Grid Solver - Entry Point

Loads a puzzle definition, enumerates its solutions and reports whether
the puzzle has none, exactly one or several.

Example:
    python main.py puzzles/classic.json
    python main.py puzzles/classic_ambiguous.txt --all
    python main.py puzzles/samurai.json --image solved.png
    python main.py --list-topologies
"""

import sys
import logging
import argparse
from pathlib import Path
from typing import Any, Dict, List, Optional

from gridsolver.engine import Board, SolveState, SolveSummary, summarize
from gridsolver.topology import get_topology_info
from gridsolver.puzzle_file import PuzzleFileError, build_board, load_puzzle
from gridsolver.debug import save_board_image
from gridsolver.settings import load_settings


logger = logging.getLogger(__name__)

# Exit codes by verdict
EXIT_CODES = {
    SolveState.UNIQUE: 0,
    SolveState.UNSOLVABLE: 1,
    SolveState.MULTIPLE: 2,
}
EXIT_BAD_INPUT = 3


def configure_logging(debug: bool, log_file: Optional[str] = None) -> None:
    """Configure logging to console and optionally to a file."""
    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode='w', encoding='utf-8'))

    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        handlers=handlers,
    )


def print_board(board: Board) -> None:
    """Print a board one row per line."""
    for row in board.to_rows():
        print(row)


def print_summary(summary: SolveSummary) -> None:
    """Print every collected solution followed by the verdict and metrics."""
    total = summary.solution_count
    for i, solution in enumerate(summary.solutions, start=1):
        print("-" * 16)
        print(f"Solution {i} / {total}:")
        print_board(solution)

    print("-" * 16)
    if summary.state is SolveState.UNSOLVABLE:
        print("No solution.")
    elif summary.state is SolveState.UNIQUE:
        print("Unique solution." if summary.exhausted else "At least one solution.")
    elif summary.exhausted:
        print(f"{total} solutions.")
    else:
        print(f"Multiple solutions (stopped after {total}).")

    metrics = summary.metrics
    print(f"Time: {metrics.computation_time_ms:.1f}ms, "
          f"states: {metrics.states_explored}, "
          f"guesses: {metrics.guesses}, "
          f"pruned: {metrics.pruned_branches}")


def list_topologies() -> None:
    """Print the registered layouts."""
    for info in get_topology_info():
        options = ", ".join(info["options"]) or "-"
        print(f"{info['name']:<10} {info['description']} (options: {options})")


def run(args: argparse.Namespace, settings: Dict[str, Any]) -> int:
    """
    Solve the requested puzzle.

    Returns:
        Process exit code
    """
    try:
        definition = load_puzzle(args.puzzle)
        topology = args.topology or definition.topology or settings["topology"]
        board = build_board(definition, topology)
    except PuzzleFileError as e:
        logger.error(f"Bad puzzle file: {e}")
        return EXIT_BAD_INPUT
    except ValueError as e:
        logger.error(f"Puzzle does not fit layout: {e}")
        return EXIT_BAD_INPUT

    max_solutions = None if args.all else (args.max_solutions or settings["max_solutions"])

    print(f"Board ({topology}):")
    print_board(board)

    summary = summarize(board, max_solutions=max_solutions, topology_name=topology)
    print_summary(summary)

    if args.image is not None and summary.first is not None:
        if args.image:
            image_path = Path(args.image)
        else:
            image_path = Path(settings["image_dir"]) / f"{definition.name or 'puzzle'}_solution.png"
        save_board_image(summary.first, image_path, givens=board)

    return EXIT_CODES[summary.state]


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Grid Solver - Enumerate solutions of grid placement puzzles"
    )
    parser.add_argument(
        "puzzle",
        nargs="?",
        help="Puzzle file (.json, or plain text with one row per line)"
    )
    parser.add_argument(
        "--topology", "-t",
        help="Layout name, overriding the puzzle file (see --list-topologies)"
    )
    parser.add_argument(
        "--max-solutions", "-n",
        type=int,
        default=None,
        help="Stop after this many solutions (default from config.json, 2)"
    )
    parser.add_argument(
        "--all", "-a",
        action="store_true",
        help="Enumerate every solution"
    )
    parser.add_argument(
        "--image", "-i",
        nargs="?",
        const="",
        default=None,
        help="Save the first solution as PNG (default path under image_dir)"
    )
    parser.add_argument(
        "--debug", "-d",
        action="store_true",
        help="Enable debug logging, including every deduction step"
    )
    parser.add_argument(
        "--list-topologies",
        action="store_true",
        help="List the available layouts and exit"
    )
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """Initialize and run the Grid Solver command line."""
    args = parse_args(argv)
    settings = load_settings()

    configure_logging(args.debug or settings.get("debug_enabled", False),
                      settings.get("log_file"))

    if args.list_topologies:
        list_topologies()
        return 0
    if not args.puzzle:
        logger.error("No puzzle file given")
        return EXIT_BAD_INPUT
    if args.max_solutions is not None and args.max_solutions < 1:
        logger.error("--max-solutions must be at least 1")
        return EXIT_BAD_INPUT

    return run(args, settings)


if __name__ == "__main__":
    sys.exit(main())
