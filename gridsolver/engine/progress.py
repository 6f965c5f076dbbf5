"""
Progress Module - Tri-state signal reported by every deduction step.
"""

from enum import IntEnum
from typing import Iterable


class Progress(IntEnum):
    """
    Outcome of a deduction step, ordered worst first.

    States:
        CONTRADICTION: A domain emptied or a value has nowhere to go
        PROGRESS: At least one domain shrank or a cell was fixed
        NO_CHANGE: Nothing was learned

    Combining two outcomes keeps the worse one, so a contradiction
    absorbs everything and progress absorbs no-change.
    """
    CONTRADICTION = 0
    PROGRESS = 1
    NO_CHANGE = 2

    @staticmethod
    def combine(a: "Progress", b: "Progress") -> "Progress":
        """Return the worse of two outcomes."""
        return a if a <= b else b

    @staticmethod
    def combine_all(results: Iterable["Progress"]) -> "Progress":
        """
        Fold a sequence of outcomes, stopping at the first contradiction.

        Args:
            results: Outcomes to combine (may be a lazy generator)

        Returns:
            NO_CHANGE for an empty sequence, otherwise the worst outcome
        """
        combined = Progress.NO_CHANGE
        for result in results:
            if result < combined:
                combined = result
                if combined is Progress.CONTRADICTION:
                    break
        return combined
