"""
Hyper Layout - Classic puzzle with four extra overlapping 3x3 regions.
"""

from ...engine import Board
from ..base import box
from ..factory import register_topology
from .boxed import ClassicTopology

# Gap between the board edge / a box edge and a hyper region
HYPER_MARGIN = 1
BOX_SIZE = 3


@register_topology
class HyperTopology(ClassicTopology):
    """
    Classic 9x9 plus four 3x3 regions offset one cell from each box corner.

    The extra regions start at (1, 1), (5, 1), (1, 5) and (5, 5).
    """
    name = "hyper"
    description = "Classic 9x9 with four extra hyper regions"

    def build(self) -> Board:
        board = super().build()
        second = HYPER_MARGIN + BOX_SIZE + HYPER_MARGIN
        corners = {
            "Hyper A": (HYPER_MARGIN, HYPER_MARGIN),
            "Hyper B": (second, HYPER_MARGIN),
            "Hyper C": (HYPER_MARGIN, second),
            "Hyper D": (second, second),
        }
        for label, (left, top) in corners.items():
            board.register_group(label, self.region(board, left, top, box(BOX_SIZE, BOX_SIZE)))
        return board
