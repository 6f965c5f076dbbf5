"""
Irregular Layout - Regions read from a character-coded area map.

Each distinct character in the map marks one region:

    111233333
    111222333
    144442223
    ...

The map's own row length and row count give the board size.
"""

from typing import Dict, List, Optional, Sequence

from ...engine import Board, Cell
from ..base import TopologyBuilder
from ..factory import register_topology


def parse_area_map(areas: Sequence[str]) -> Dict[str, List[tuple]]:
    """
    Collect the (x, y) positions of every region in an area map.

    Regions are returned in order of first appearance, reading row by row.

    Args:
        areas: One string per row, all the same length

    Returns:
        Region character -> positions in reading order

    Raises:
        ValueError: If the map is not a list of strings, is empty or is ragged
    """
    if not isinstance(areas, (list, tuple)) or not all(isinstance(row, str) for row in areas):
        raise ValueError("Area map must be a list of strings, one per row")
    if not areas or not areas[0]:
        raise ValueError("Area map must have at least one non-empty row")
    width = len(areas[0])
    for y, row in enumerate(areas):
        if len(row) != width:
            raise ValueError(f"Area map row {y} has {len(row)} characters, expected {width}")

    joined = "".join(areas)
    regions: Dict[str, List[tuple]] = {}
    for i, symbol in enumerate(joined):
        regions.setdefault(symbol, []).append((i % width, i // width))
    return regions


@register_topology
class IrregularTopology(TopologyBuilder):
    """
    Rows, columns and free-form regions taken from an area map.

    Rows and columns are constrained when their length equals max_value,
    as for boxed layouts.
    """
    name = "irregular"
    description = "Irregular regions from a character-coded area map"

    def __init__(self, areas: Sequence[str], max_value: Optional[int] = None):
        """
        Initialize irregular layout.

        Args:
            areas: Area map, one string per row
            max_value: Largest cell value (default max(width, height))

        Raises:
            ValueError: If the area map is empty or ragged
        """
        self.regions = parse_area_map(areas)
        self.areas = list(areas)
        self.max_value = max_value

    @property
    def width(self) -> int:
        return len(self.areas[0])

    @property
    def height(self) -> int:
        return len(self.areas)

    def build(self) -> Board:
        board = Board(self.width, self.height, self.max_value)
        self.add_lines(board)
        for symbol, positions in self.regions.items():
            cells: List[Cell] = [board.cell(x, y) for x, y in positions]
            board.register_group(f"Area {symbol}", cells)
        return board
