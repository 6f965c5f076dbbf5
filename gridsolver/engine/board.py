"""
Board Module - Cell grid, registered groups, propagation and search.
"""

import logging
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple, TYPE_CHECKING

import numpy as np

from .cell import Cell, UNASSIGNED
from .group import Group
from .progress import Progress

if TYPE_CHECKING:
    from .solution import SolutionMetrics

logger = logging.getLogger(__name__)

# Row-definition characters
UNASSIGNED_MARKER = "."
BLOCKED_MARKER = "/"
SYMBOLS = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ"

# Array value used for blocked cells by to_array()/load_array()
BLOCKED_ARRAY_VALUE = -1


def _is_int(number) -> bool:
    """True for Python and numpy integers, excluding bool."""
    return isinstance(number, (int, np.integer)) and not isinstance(number, (bool, np.bool_))


def symbol_for(value: int) -> str:
    """Single-character representation of a cell value (0 for empty)."""
    return SYMBOLS[value]


def value_for(symbol: str) -> int:
    """
    Parse a single row-definition character into a value.

    Args:
        symbol: "." or "0" for empty, "1"-"9" then "A"-"Z" for 1..35

    Returns:
        Parsed value (UNASSIGNED for empty)

    Raises:
        ValueError: If the character is not a known symbol
    """
    if symbol == UNASSIGNED_MARKER:
        return UNASSIGNED
    index = SYMBOLS.find(symbol.upper()) if len(symbol) == 1 else -1
    if index < 0:
        raise ValueError(f"Unknown cell symbol: {symbol!r}")
    return index


class Board:
    """
    Rectangular grid of cells plus the groups constraining them.

    Cells live in a flat list indexed by y * width + x; groups refer to
    cells by index, so copying the cell list is all it takes to get an
    independent board that still has the same group topology.

    Solving never mutates the board it is called on: solve() works on a
    copy and yields each completed board it finds.

    Attributes:
        width: Number of columns
        height: Number of rows
        max_value: Largest value any cell may hold
    """

    def __init__(self, width: int, height: int, max_value: Optional[int] = None):
        """
        Create an empty board with no groups.

        Args:
            width: Number of columns
            height: Number of rows
            max_value: Largest cell value (default max(width, height))

        Raises:
            ValueError: If a dimension or max_value is not a positive integer
        """
        if not (_is_int(width) and _is_int(height)):
            raise ValueError(f"Board dimensions must be integers, got {width!r}x{height!r}")
        if max_value is None:
            max_value = max(width, height)
        elif not _is_int(max_value):
            raise ValueError(f"max_value must be an integer, got {max_value!r}")
        if width <= 0 or height <= 0:
            raise ValueError(f"Board dimensions must be positive, got {width}x{height}")
        if not 0 < max_value < len(SYMBOLS):
            raise ValueError(f"max_value must be in 1..{len(SYMBOLS) - 1}, got {max_value}")

        self._width = width
        self._height = height
        self._max_value = max_value
        self._cells: List[Cell] = [
            Cell(x, y, max_value) for y in range(height) for x in range(width)
        ]
        self._groups: List[Group] = []
        self._branch_order: Optional[Tuple[int, ...]] = None
        self._next_row = 0

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    def register_group(self, description: str, cells: Iterable[Cell]) -> Group:
        """
        Add a group over the given cells.

        Args:
            description: Label used in diagnostics
            cells: Cells of this board, in order

        Returns:
            The registered Group

        Raises:
            ValueError: If a cell belongs to another board or is listed twice
        """
        indices = tuple(self._index_of(cell) for cell in cells)
        if len(set(indices)) != len(indices):
            raise ValueError(f"Group '{description}' lists the same cell twice")

        group = Group(description=description, indices=indices)
        self._groups.append(group)
        self._branch_order = None
        return group

    def block(self, cell: Cell) -> None:
        """
        Exclude a cell from play.

        Raises:
            ValueError: If the cell belongs to another board
        """
        self._index_of(cell)
        cell.block()
        self._branch_order = None

    def add_row(self, row: str) -> None:
        """
        Fill the next unfilled row from a row definition.

        Args:
            row: One character per column ("." or "0" empty, "/" blocked,
                 "1"-"9" then "A"-"Z" for values)

        Raises:
            ValueError: On a wrong length, too many rows, an unknown
                character or an out-of-range value
        """
        if self._next_row >= self._height:
            raise ValueError(f"Board already has all {self._height} rows")
        if len(row) != self._width:
            raise ValueError(
                f"Row {self._next_row} has {len(row)} characters, expected {self._width}"
            )

        y = self._next_row
        for x, symbol in enumerate(row):
            cell = self._cells[y * self._width + x]
            if symbol == BLOCKED_MARKER:
                self.block(cell)
            else:
                cell.value = value_for(symbol)
        self._next_row += 1

    def load_rows(self, rows: Sequence[str]) -> None:
        """
        Fill the whole board from row definitions.

        Args:
            rows: One definition per row, top to bottom

        Raises:
            ValueError: If the row count does not match the board height,
                or any row is invalid (see add_row)
        """
        if len(rows) != self._height:
            raise ValueError(f"Expected {self._height} rows, got {len(rows)}")
        self._next_row = 0
        for row in rows:
            self.add_row(row)

    def load_array(self, grid) -> None:
        """
        Fill the board from a 2-D array of values.

        Args:
            grid: Array-like of shape (height, width); 0 for empty,
                  BLOCKED_ARRAY_VALUE for holes

        Raises:
            ValueError: On a shape mismatch, a non-integer entry or an
                out-of-range value
        """
        array = np.asarray(grid)
        if np.issubdtype(array.dtype, np.floating):
            if not np.all(np.isfinite(array) & (array == np.trunc(array))):
                raise ValueError("Grid values must be whole numbers")
        elif not np.issubdtype(array.dtype, np.integer):
            raise ValueError(f"Grid values must be integers, got dtype {array.dtype}")
        array = array.astype(int)
        if array.shape != (self._height, self._width):
            raise ValueError(
                f"Grid shape must be ({self._height}, {self._width}), got {array.shape}"
            )

        for (y, x), value in np.ndenumerate(array):
            cell = self._cells[y * self._width + x]
            if value == BLOCKED_ARRAY_VALUE:
                self.block(cell)
            else:
                cell.value = int(value)
        self._next_row = self._height

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def max_value(self) -> int:
        return self._max_value

    @property
    def cells(self) -> Tuple[Cell, ...]:
        """All cells in row-major order."""
        return tuple(self._cells)

    @property
    def groups(self) -> Tuple[Group, ...]:
        """Registered groups in registration order."""
        return tuple(self._groups)

    def cell(self, x: int, y: int) -> Cell:
        """
        Get the cell at a position.

        Raises:
            IndexError: If the position is outside the board
        """
        if not (0 <= x < self._width and 0 <= y < self._height):
            raise IndexError(f"Cell ({x}, {y}) outside {self._width}x{self._height} board")
        return self._cells[y * self._width + x]

    def __getitem__(self, position: Tuple[int, int]) -> Cell:
        x, y = position
        return self.cell(x, y)

    def group_cells(self, group: Group) -> List[Cell]:
        """Non-blocked cells of a group on this board."""
        return group.members(self._cells)

    def to_rows(self) -> List[str]:
        """
        Serialize the assignment, one fixed-length string per row.

        Empty and blocked cells are written as "0".
        """
        return [
            "".join(
                symbol_for(cell.value)
                for cell in self._cells[y * self._width:(y + 1) * self._width]
            )
            for y in range(self._height)
        ]

    def to_array(self) -> np.ndarray:
        """
        Export the assignment as an integer array of shape (height, width).

        Empty cells are 0, blocked cells are BLOCKED_ARRAY_VALUE.
        """
        values = [
            BLOCKED_ARRAY_VALUE if cell.blocked else cell.value
            for cell in self._cells
        ]
        return np.array(values, dtype=int).reshape(self._height, self._width)

    def is_consistent(self) -> bool:
        """True if no group holds a duplicate value."""
        return all(group.is_consistent(self._cells) for group in self._groups)

    def is_complete(self) -> bool:
        """True if every non-blocked cell has a value."""
        return all(cell.blocked or cell.has_value() for cell in self._cells)

    def copy(self) -> "Board":
        """
        Create an independent board with copied cells.

        Groups are immutable and shared with the copy.
        """
        clone = Board.__new__(Board)
        clone._width = self._width
        clone._height = self._height
        clone._max_value = self._max_value
        clone._cells = [cell.copy() for cell in self._cells]
        clone._groups = list(self._groups)
        clone._branch_order = self._branch_order
        clone._next_row = self._next_row
        return clone

    def __eq__(self, other):
        if not isinstance(other, Board):
            return NotImplemented
        return (
            self._width == other._width
            and self._height == other._height
            and self._max_value == other._max_value
            and self.to_rows() == other.to_rows()
            and [c.blocked for c in self._cells] == [c.blocked for c in other._cells]
        )

    __hash__ = None

    def __str__(self) -> str:
        return "\n".join(self.to_rows())

    def __repr__(self) -> str:
        return (
            f"Board({self._width}x{self._height}, max_value={self._max_value}, "
            f"groups={len(self._groups)})"
        )

    # ------------------------------------------------------------------
    # Solving
    # ------------------------------------------------------------------

    def solve(self, metrics: Optional["SolutionMetrics"] = None) -> Iterator["Board"]:
        """
        Lazily enumerate every completion of this board.

        Each solution is yielded before the next branch is explored, so a
        caller may stop consuming at any time without paying for the rest
        of the search tree. The board itself is left untouched.

        Args:
            metrics: Optional counters updated as the search runs

        Yields:
            Completed, consistent boards in depth-first, ascending-value order
        """
        yield from self.copy()._search(metrics)

    def _search(self, metrics: Optional["SolutionMetrics"]) -> Iterator["Board"]:
        for cell in self._cells:
            cell.reset_domain()
        if metrics is not None:
            metrics.states_explored += 1

        if self._propagate() is Progress.CONTRADICTION:
            if metrics is not None:
                metrics.pruned_branches += 1
            logger.debug("Dead branch pruned")
            return

        chosen = self._choose_branch_cell()
        if chosen is None:
            self._settle_singletons()
            if metrics is not None:
                metrics.solutions_found += 1
            logger.debug("Board completed")
            yield self
            return

        cell = self._cells[chosen]
        for value in range(1, self._max_value + 1):
            if not cell.is_candidate(value):
                continue
            if metrics is not None:
                metrics.guesses += 1
            logger.debug(
                f"Guessing {value} at ({cell.x}, {cell.y}) "
                f"out of {cell.candidate_count()} candidates"
            )
            branch = self.copy()
            branch._cells[chosen].fix(value, "trial and error")
            yield from branch._search(metrics)

    def _propagate(self) -> Progress:
        """Run every group to a fixpoint or the first contradiction."""
        cells = self._cells
        progress = Progress.PROGRESS
        while progress is Progress.PROGRESS:
            if not self.is_consistent():
                return Progress.CONTRADICTION
            progress = Progress.combine_all(
                group.propagate(cells) for group in self._groups
            )
        return progress

    def _choose_branch_cell(self) -> Optional[int]:
        """
        Index of the first cell with the fewest candidates above one.

        Returns:
            Cell index, or None if no cell is ambiguous
        """
        best_index = None
        best_count = 0
        for index in self._ordered_indices():
            count = self._cells[index].candidate_count()
            if count > 1 and (best_index is None or count < best_count):
                best_index = index
                best_count = count
                if count == 2:
                    break
        return best_index

    def _ordered_indices(self) -> Tuple[int, ...]:
        """Group members in registration order, then ungrouped cells."""
        if self._branch_order is None:
            seen = set()
            order = []
            for group in self._groups:
                for index in group.indices:
                    if index not in seen and not self._cells[index].blocked:
                        seen.add(index)
                        order.append(index)
            for index, cell in enumerate(self._cells):
                if index not in seen and not cell.blocked:
                    order.append(index)
            self._branch_order = tuple(order)
        return self._branch_order

    def _settle_singletons(self) -> None:
        """Assign cells whose domain shrank to one value without being fixed."""
        for cell in self._cells:
            if not cell.blocked and not cell.has_value() and cell.candidate_count() == 1:
                cell.fix(next(iter(cell.candidates)), "single candidate at completion")

    def _index_of(self, cell: Cell) -> int:
        """Arena index of a cell, checking that it belongs to this board."""
        if not (0 <= cell.x < self._width and 0 <= cell.y < self._height):
            raise ValueError(f"{cell!r} does not belong to this board")
        index = cell.y * self._width + cell.x
        if self._cells[index] is not cell:
            raise ValueError(f"{cell!r} does not belong to this board")
        return index
