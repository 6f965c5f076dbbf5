"""
Solution Module - Search metrics and the outcome of a bounded solve.
"""

import logging
import time
from dataclasses import dataclass, field
from enum import Enum, auto
from itertools import islice
from typing import List, Optional

from .board import Board

logger = logging.getLogger(__name__)


class SolveState(Enum):
    """
    How many solutions a puzzle has.

    States:
        UNSOLVABLE: No completion exists
        UNIQUE: Exactly one completion exists
        MULTIPLE: More than one completion exists
    """
    UNSOLVABLE = auto()
    UNIQUE = auto()
    MULTIPLE = auto()


@dataclass
class SolutionMetrics:
    """
    Counters collected while a search runs.

    Attributes:
        computation_time_ms: Time taken in milliseconds
        states_explored: Boards run through propagation (one per branch)
        pruned_branches: Branches that ended in a contradiction
        guesses: Branch copies made by trial and error
        solutions_found: Completed boards yielded
        topology_name: Name of the topology the board was built with
    """
    computation_time_ms: float = 0.0
    states_explored: int = 0
    pruned_branches: int = 0
    guesses: int = 0
    solutions_found: int = 0
    topology_name: str = ""


@dataclass
class SolveSummary:
    """
    Result of consuming a bounded number of solutions.

    Attributes:
        solutions: Solutions collected, in enumeration order
        state: Classification by solution count
        metrics: Search statistics
        limit: Maximum number of solutions requested (None = all)
        exhausted: True if the whole search tree was explored
    """
    solutions: List[Board] = field(default_factory=list)
    state: SolveState = SolveState.UNSOLVABLE
    metrics: SolutionMetrics = field(default_factory=SolutionMetrics)
    limit: Optional[int] = None
    exhausted: bool = False

    @property
    def solution_count(self) -> int:
        """Number of solutions collected."""
        return len(self.solutions)

    @property
    def is_unique(self) -> bool:
        return self.state is SolveState.UNIQUE

    @property
    def first(self) -> Optional[Board]:
        """First solution, or None if there is none."""
        return self.solutions[0] if self.solutions else None


def classify(count: int) -> SolveState:
    """Map a solution count to a SolveState."""
    if count == 0:
        return SolveState.UNSOLVABLE
    if count == 1:
        return SolveState.UNIQUE
    return SolveState.MULTIPLE


def summarize(board: Board, max_solutions: Optional[int] = 2,
              topology_name: str = "") -> SolveSummary:
    """
    Solve a board, stopping after max_solutions results.

    With the default limit of 2 this is the cheap uniqueness check: the
    search stops as soon as a second solution shows up.

    Args:
        board: Pre-filled board to solve (left untouched)
        max_solutions: Stop after this many solutions (None for all)
        topology_name: Recorded in the metrics

    Returns:
        SolveSummary with the collected solutions and metrics

    Raises:
        ValueError: If max_solutions is smaller than 1
    """
    if max_solutions is not None and max_solutions < 1:
        raise ValueError(f"max_solutions must be at least 1, got {max_solutions}")

    metrics = SolutionMetrics(topology_name=topology_name)
    start_time = time.perf_counter()

    search = board.solve(metrics)
    solutions = list(islice(search, max_solutions))
    if max_solutions is None or len(solutions) < max_solutions:
        exhausted = True
    else:
        # Stopped at the limit; nothing more is explored
        search.close()
        exhausted = False

    metrics.computation_time_ms = (time.perf_counter() - start_time) * 1000
    summary = SolveSummary(
        solutions=solutions,
        state=classify(len(solutions)),
        metrics=metrics,
        limit=max_solutions,
        exhausted=exhausted,
    )
    logger.info(
        f"Solve finished: {summary.state.name.lower()}, "
        f"{len(solutions)} solution(s) in {metrics.computation_time_ms:.1f}ms, "
        f"{metrics.states_explored} states, {metrics.guesses} guesses"
    )
    return summary
