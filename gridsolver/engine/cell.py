"""
Cell Module - One grid position and its candidate domain.
"""

import logging
from typing import Iterable, Set

from .progress import Progress

logger = logging.getLogger(__name__)

# Value stored in a cell that has not been assigned yet
UNASSIGNED = 0


class Cell:
    """
    A single grid position holding a value in 1..max_value or UNASSIGNED.

    The domain is the set of values still consistent with the groups the
    cell belongs to. It is rebuilt by reset_domain() at the start of every
    solve attempt and shrinks during propagation.

    A blocked cell is a hole in the grid: it never holds a value, takes no
    part in any group and reports a candidate count of 1 so the search
    never branches on it.

    Attributes:
        x: Column index
        y: Row index
        max_value: Largest value the cell may hold
        blocked: True if the cell is excluded from play
    """
    __slots__ = ("x", "y", "max_value", "blocked", "_value", "_candidates")

    def __init__(self, x: int, y: int, max_value: int):
        self.x = x
        self.y = y
        self.max_value = max_value
        self.blocked = False
        self._value = UNASSIGNED
        self._candidates: Set[int] = set()

    @property
    def value(self) -> int:
        """Current value (UNASSIGNED when empty)."""
        return self._value

    @value.setter
    def value(self, value: int) -> None:
        self.set_value(value)

    def set_value(self, value: int) -> None:
        """
        Store a value without touching the domain.

        Args:
            value: New value, UNASSIGNED to clear

        Raises:
            ValueError: If value is outside 0..max_value, or non-zero on a
                blocked cell
        """
        if value > self.max_value:
            raise ValueError(
                f"Cell value cannot be greater than {self.max_value}. Was {value}"
            )
        if value < UNASSIGNED:
            raise ValueError(f"Cell value cannot be smaller than zero. Was {value}")
        if value != UNASSIGNED and self.blocked:
            raise ValueError(f"Cannot assign {value} to blocked cell ({self.x}, {self.y})")
        self._value = value

    def has_value(self) -> bool:
        return self._value != UNASSIGNED

    def block(self) -> None:
        """Turn the cell into a hole. Any value it held is discarded."""
        self.blocked = True
        self._value = UNASSIGNED
        self._candidates = set()

    def reset_domain(self) -> None:
        """Rebuild the domain from the current value."""
        if self.blocked:
            self._candidates = set()
        elif self._value != UNASSIGNED:
            self._candidates = {self._value}
        else:
            self._candidates = set(range(1, self.max_value + 1))

    def fix(self, value: int, reason: str) -> None:
        """
        Assign a value and collapse the domain onto it.

        Args:
            value: Value to assign
            reason: Why the value was chosen (logged only)
        """
        self.set_value(value)
        self.reset_domain()
        logger.debug(f"Fixed ({self.x}, {self.y}) = {value}: {reason}")

    def remove_candidates(self, excluded: Iterable[int]) -> Progress:
        """
        Drop excluded values from the domain.

        A domain left with a single value fixes the cell on the spot.

        Args:
            excluded: Values that can no longer appear in this cell

        Returns:
            NO_CHANGE if the domain kept its size (always for blocked cells),
            CONTRADICTION if it emptied, PROGRESS otherwise
        """
        if self.blocked:
            return Progress.NO_CHANGE

        remaining = self._candidates.difference(excluded)
        if len(remaining) == len(self._candidates):
            return Progress.NO_CHANGE

        self._candidates = remaining
        if not remaining:
            return Progress.CONTRADICTION
        if len(remaining) == 1:
            self.fix(next(iter(remaining)), "only one candidate left")
        return Progress.PROGRESS

    def is_candidate(self, value: int) -> bool:
        return value in self._candidates

    def candidate_count(self) -> int:
        """Size of the domain. Blocked cells report 1."""
        if self.blocked:
            return 1
        return len(self._candidates)

    @property
    def candidates(self) -> Set[int]:
        """Copy of the current domain."""
        return set(self._candidates)

    def copy(self) -> "Cell":
        """Create an independent copy with the same position, value and domain."""
        clone = Cell(self.x, self.y, self.max_value)
        clone.blocked = self.blocked
        clone._value = self._value
        clone._candidates = set(self._candidates)
        return clone

    def __repr__(self) -> str:
        if self.blocked:
            return f"Cell({self.x}, {self.y}, blocked)"
        return f"Cell({self.x}, {self.y}, value={self._value})"
