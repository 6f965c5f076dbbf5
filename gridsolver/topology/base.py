"""
Base Topology Module - Abstract base class for puzzle layout builders.
"""

from abc import ABC, abstractmethod
from typing import Iterable, Iterator, Optional, Sequence, Tuple

from ..engine import Board, Cell


def box(size_x: int, size_y: int) -> Iterator[Tuple[int, int]]:
    """
    Iterate the (x, y) offsets of a size_x by size_y rectangle.

    Offsets are produced column by column, x outermost.
    """
    for x in range(size_x):
        for y in range(size_y):
            yield x, y


class TopologyBuilder(ABC):
    """
    Abstract base class for all puzzle layouts.

    A builder creates an empty board of the right shape, blocks any holes
    and registers the groups of one puzzle family. Subclasses must
    implement build() and define name and description class attributes.

    Attributes:
        name: Short identifier for the layout
        description: Human-readable description for listings
    """
    name: str = "base"
    description: str = "Base topology"

    @abstractmethod
    def build(self) -> Board:
        """
        Create an empty board with this layout's holes and groups.

        Returns:
            Board with every playable cell unassigned
        """
        pass

    def create(self, rows: Optional[Sequence[str]] = None) -> Board:
        """
        Build the board and optionally pre-fill it.

        Args:
            rows: Row definitions to load (see Board.load_rows)

        Returns:
            Board ready to solve
        """
        board = self.build()
        if rows is not None:
            board.load_rows(rows)
        return board

    @staticmethod
    def add_lines(board: Board) -> None:
        """
        Register one group per full row and per full column.

        Rows are only added when their length equals max_value, and the
        same for columns: a line must hold every value exactly once for
        hidden singles to apply to it.
        """
        if board.width == board.max_value:
            for y in range(board.height):
                board.register_group(f"Row {y}", [board.cell(x, y) for x in range(board.width)])
        if board.height == board.max_value:
            for x in range(board.width):
                board.register_group(f"Column {x}", [board.cell(x, y) for y in range(board.height)])

    @staticmethod
    def region(board: Board, left: int, top: int,
               offsets: Iterable[Tuple[int, int]]) -> Iterator[Cell]:
        """Cells at the given offsets from (left, top)."""
        for dx, dy in offsets:
            yield board.cell(left + dx, top + dy)
