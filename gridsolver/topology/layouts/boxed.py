"""
Boxed Layouts - Row, column and rectangular box groups.

Covers the classic 9x9 puzzle as well as any size that divides evenly
into boxes (4x4 with 2x2 boxes, 6x6 with 3x2 boxes, 16x16...).
"""

from typing import Optional

from ...engine import Board
from ..base import TopologyBuilder, box
from ..factory import register_topology


def add_boxes(board: Board, boxes_x: int, boxes_y: int) -> None:
    """
    Register boxes_x * boxes_y equally sized rectangular box groups.

    Args:
        board: Board to add groups to
        boxes_x: Number of boxes across
        boxes_y: Number of boxes down

    Raises:
        ValueError: If the counts are not positive integers or do not
            divide the board evenly
    """
    for count in (boxes_x, boxes_y):
        if not isinstance(count, int) or isinstance(count, bool):
            raise ValueError(f"Box counts must be integers, got {boxes_x!r}x{boxes_y!r}")
    if boxes_x <= 0 or boxes_y <= 0:
        raise ValueError(f"Box counts must be positive, got {boxes_x}x{boxes_y}")
    if board.width % boxes_x or board.height % boxes_y:
        raise ValueError(
            f"{boxes_x}x{boxes_y} boxes do not divide a "
            f"{board.width}x{board.height} board evenly"
        )

    size_x = board.width // boxes_x
    size_y = board.height // boxes_y
    for bx, by in box(boxes_x, boxes_y):
        cells = TopologyBuilder.region(board, bx * size_x, by * size_y, box(size_x, size_y))
        board.register_group(f"Box at ({bx}, {by})", cells)


@register_topology
class BoxesTopology(TopologyBuilder):
    """
    Grid of arbitrary size with rows, columns and rectangular boxes.

    Rows are only constrained when the width equals max_value, and
    columns when the height does.
    """
    name = "boxes"
    description = "Rows, columns and equal rectangular boxes of any size"

    def __init__(self, width: int = 9, height: int = 9, boxes_x: int = 3,
                 boxes_y: int = 3, max_value: Optional[int] = None):
        """
        Initialize boxed layout.

        Args:
            width: Number of columns
            height: Number of rows
            boxes_x: Number of boxes across
            boxes_y: Number of boxes down
            max_value: Largest cell value (default max(width, height))
        """
        self.width = width
        self.height = height
        self.boxes_x = boxes_x
        self.boxes_y = boxes_y
        self.max_value = max_value

    def build(self) -> Board:
        board = Board(self.width, self.height, self.max_value)
        self.add_lines(board)
        add_boxes(board, self.boxes_x, self.boxes_y)
        return board


@register_topology
class ClassicTopology(BoxesTopology):
    """Standard 9x9 puzzle with 3x3 boxes."""
    name = "classic"
    description = "Classic 9x9 with 3x3 boxes"

    def __init__(self):
        super().__init__(width=9, height=9, boxes_x=3, boxes_y=3)
