"""
Samurai Layout - Five overlapping 9x9 puzzles on a 21x21 grid.

    AAA.BBB      A, B, D, E: corner puzzles
    AAA.BBB      C: middle puzzle, sharing one corner box with each
    AAACBBB
    ..CCC..      "." strips are blocked holes
    DDDCEEE
    DDD.EEE
    DDD.EEE

Each letter above is one 3x3 box.
"""

from typing import Dict, Tuple

from ...engine import Board
from ..base import TopologyBuilder, box
from ..factory import register_topology

GRID_SIZE = 9
BOX_SIZE = 3
AREAS = 7  # boxes per side of the whole layout
SIDE = AREAS * BOX_SIZE

# Top-left corner of each sub-puzzle
SUB_GRIDS: Dict[str, Tuple[int, int]] = {
    "Upper Left": (0, 0),
    "Upper Right": (GRID_SIZE + BOX_SIZE, 0),
    "Middle": (GRID_SIZE - BOX_SIZE, GRID_SIZE - BOX_SIZE),
    "Lower Left": (0, GRID_SIZE + BOX_SIZE),
    "Lower Right": (GRID_SIZE + BOX_SIZE, GRID_SIZE + BOX_SIZE),
}


@register_topology
class SamuraiTopology(TopologyBuilder):
    """
    Composite layout of five classic puzzles sharing their corner boxes.

    The strips between the corner puzzles that do not belong to any
    sub-puzzle are blocked. Every playable 3x3 area gets one box group
    (shared boxes are registered once), and each sub-puzzle gets its own
    nine row and nine column groups.
    """
    name = "samurai"
    description = "Samurai: five overlapping 9x9 puzzles on a 21x21 grid"

    def build(self) -> Board:
        board = Board(SIDE, SIDE, GRID_SIZE)

        # Holes between the corner puzzles: two vertical, two horizontal strips
        holes = [
            (GRID_SIZE, 0, box(BOX_SIZE, BOX_SIZE * 2)),
            (GRID_SIZE, SIDE - BOX_SIZE * 2, box(BOX_SIZE, BOX_SIZE * 2)),
            (0, GRID_SIZE, box(BOX_SIZE * 2, BOX_SIZE)),
            (SIDE - BOX_SIZE * 2, GRID_SIZE, box(BOX_SIZE * 2, BOX_SIZE)),
        ]
        for left, top, offsets in holes:
            for cell in list(self.region(board, left, top, offsets)):
                board.block(cell)

        for ax, ay in box(AREAS, AREAS):
            left, top = ax * BOX_SIZE, ay * BOX_SIZE
            if board.cell(left, top).blocked:
                continue
            board.register_group(
                f"Area {ax}, {ay}",
                self.region(board, left, top, box(BOX_SIZE, BOX_SIZE)),
            )

        for label, (left, top) in SUB_GRIDS.items():
            for i in range(GRID_SIZE):
                board.register_group(
                    f"{label} Row {i}",
                    [board.cell(left + x, top + i) for x in range(GRID_SIZE)],
                )
                board.register_group(
                    f"{label} Column {i}",
                    [board.cell(left + i, top + y) for y in range(GRID_SIZE)],
                )
        return board
