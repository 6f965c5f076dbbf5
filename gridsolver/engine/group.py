"""
Group Module - All-distinct constraint over a fixed set of cells.
"""

from dataclasses import dataclass
from typing import Dict, List, Sequence, Tuple

from .cell import Cell
from .progress import Progress


@dataclass(frozen=True)
class Group:
    """
    A set of cells that may not contain the same value twice.

    Members are stored as indices into the owning board's cell list rather
    than as Cell references. Groups are immutable, so a copied board can
    share them with the original while every copy resolves the indices
    against its own cells.

    Attributes:
        description: Human-readable label (row, column, box, region...)
        indices: Member positions in the board's cell list, in order
    """
    description: str
    indices: Tuple[int, ...]

    def members(self, cells: Sequence[Cell]) -> List[Cell]:
        """Resolve the non-blocked members against a cell list."""
        return [cells[i] for i in self.indices if not cells[i].blocked]

    def is_consistent(self, cells: Sequence[Cell]) -> bool:
        """
        Check that no assigned value occurs twice in the group.

        Args:
            cells: Cell list of the board being checked

        Returns:
            True if all assigned members hold distinct values
        """
        seen = set()
        for cell in self.members(cells):
            if cell.has_value():
                if cell.value in seen:
                    return False
                seen.add(cell.value)
        return True

    def propagate(self, cells: Sequence[Cell]) -> Progress:
        """
        Apply naked-single elimination, then hidden-single placement.

        Args:
            cells: Cell list of the board being solved

        Returns:
            Worst outcome of the two techniques
        """
        members = self.members(cells)
        eliminated = self._eliminate(members)
        if eliminated is Progress.CONTRADICTION:
            return eliminated
        return Progress.combine(eliminated, self._place_hidden_singles(members))

    def _eliminate(self, members: List[Cell]) -> Progress:
        """Remove values already placed in the group from every empty member."""
        placed = {cell.value for cell in members if cell.has_value()}
        if not placed:
            return Progress.NO_CHANGE

        result = Progress.NO_CHANGE
        for cell in members:
            if not cell.has_value():
                result = Progress.combine(result, cell.remove_candidates(placed))
        return result

    def _place_hidden_singles(self, members: List[Cell]) -> Progress:
        """Fix every value that only one empty member can still take."""
        placed = {cell.value for cell in members if cell.has_value()}

        # value -> empty members still allowing it
        holders: Dict[int, List[Cell]] = {}
        for cell in members:
            if not cell.has_value():
                for value in cell.candidates:
                    holders.setdefault(value, []).append(cell)

        result = Progress.NO_CHANGE
        for value in range(1, len(members) + 1):
            if value in placed:
                continue
            # Cells fixed earlier in this loop no longer count
            possible = [cell for cell in holders.get(value, ()) if not cell.has_value()]
            if not possible:
                return Progress.CONTRADICTION
            if len(possible) == 1:
                possible[0].fix(value, f"only place in {self.description}")
                result = Progress.PROGRESS
        return result

    def __str__(self) -> str:
        return self.description
