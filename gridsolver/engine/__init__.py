"""
Engine Package - Constraint propagation and search for grid placement puzzles.

This package provides the generic solving core: cells with candidate
domains, all-distinct groups over arbitrary cell sets, and a board that
propagates naked and hidden singles to a fixpoint before branching on the
cell with the fewest candidates.

Public API:
    - Cell: One grid position and its candidate domain
    - Group: All-distinct constraint over a fixed set of cells
    - Progress: Tri-state outcome of a deduction step
    - Board: Grid, groups, propagation and lazy solution enumeration
    - SolutionMetrics: Search statistics
    - SolveSummary / SolveState: Outcome of a bounded solve
    - summarize(): Solve with a solution limit and classify the result

Usage:
    from gridsolver.engine import Board, summarize

    board = Board(4, 4)
    for y in range(4):
        board.register_group(f"Row {y}", [board.cell(x, y) for x in range(4)])
    ...
    board.load_rows(["0003", "0004", "1000", "4000"])

    # Solutions are produced lazily
    for solution in board.solve():
        print(solution)

    # Or check uniqueness by taking at most two
    summary = summarize(board, max_solutions=2)
    print(summary.state)
"""

from .progress import Progress
from .cell import Cell, UNASSIGNED
from .group import Group
from .board import (
    Board,
    BLOCKED_ARRAY_VALUE,
    BLOCKED_MARKER,
    UNASSIGNED_MARKER,
    symbol_for,
    value_for,
)
from .solution import (
    SolutionMetrics,
    SolveState,
    SolveSummary,
    classify,
    summarize,
)

__all__ = [
    # Domain model
    "Progress",
    "Cell",
    "UNASSIGNED",
    "Group",
    # Board
    "Board",
    "BLOCKED_ARRAY_VALUE",
    "BLOCKED_MARKER",
    "UNASSIGNED_MARKER",
    "symbol_for",
    "value_for",
    # Results
    "SolutionMetrics",
    "SolveState",
    "SolveSummary",
    "classify",
    "summarize",
]
