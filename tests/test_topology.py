"""
Tests for the topology layouts

Covers:
1. Layout registry and factory errors
2. Group and hole counts of every built-in layout
3. Reference puzzles for the hyper, irregular and samurai layouts

Usage:
    python -m pytest tests/test_topology.py
"""

import inspect
import sys
from pathlib import Path

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from gridsolver.engine import Board
from gridsolver.topology import (
    TopologyBuilder,
    box,
    create_topology,
    get_default_topology_name,
    get_topology_info,
    get_topology_names,
    get_topology_options,
    register_topology,
)
from gridsolver.topology.factory import _TOPOLOGIES
from gridsolver.topology.layouts import add_boxes, parse_area_map


HYPER_ROWS = [
    ".......1.",
    "..2....34",
    "....51...",
    ".....65..",
    ".7.3...8.",
    "..3......",
    "....8....",
    "58....9..",
    "69.......",
]

HYPER_SOLUTION = [
    "946832715",
    "152697834",
    "738451296",
    "819726543",
    "475319682",
    "263548179",
    "327985461",
    "584163927",
    "691274358",
]

NONOMINO_AREAS = [
    "111233333",
    "111222333",
    "144442223",
    "114555522",
    "444456666",
    "775555688",
    "977766668",
    "999777888",
    "999997888",
]

NONOMINO_ROWS = [
    "3.......4",
    "..2.6.1..",
    ".1.9.8.2.",
    "..5...6..",
    ".2.....1.",
    "..9...8..",
    ".8.3.4.6.",
    "..4.1.9..",
    "5.......7",
]

NONOMINO_SOLUTION = [
    "358196274",
    "492567138",
    "613978425",
    "175842693",
    "826453719",
    "249731856",
    "987324561",
    "734615982",
    "561289347",
]

SAMURAI_ROWS = [
    "6..8..9..///.....38..",
    "...79....///89..2.3..",
    "..2..64.5///...1...7.",
    ".57.1.2..///..5....3.",
    ".....731.///.1.3..2..",
    "...3...9.///.7..429.5",
    "4..5..1...5....5.....",
    "8.1...7...8.2..768...",
    ".......8.23...4...6..",
    "//////.12.4..9.//////",
    "//////......82.//////",
    "//////.6.....1.//////",
    ".4...1....76...36..9.",
    "2.....9..8..5.34...81",
    ".5.873......9.8..23..",
    "...2....9///.25.4....",
    "..3.64...///31.8.....",
    "..75.8.12///...6.14..",
    ".......2.///.31...9..",
    "..17.....///..7......",
    ".7.6...84///8...7..5.",
]

SAMURAI_SOLUTION = [
    "674825931000142673859",
    "513794862000897425361",
    "982136475000563189472",
    "357619248000425916738",
    "298457316000918357246",
    "146382597000376842915",
    "469578123457689534127",
    "821963754689231768594",
    "735241689231754291683",
    "000000512748396000000",
    "000000497163825000000",
    "000000368592417000000",
    "746921835976142368597",
    "238456971824563497281",
    "159873246315978152346",
    "815237469000625749813",
    "923164758000314825769",
    "467598312000789631425",
    "694385127000431586972",
    "581742693000257914638",
    "372619584000896273154",
]


def group_names(board: Board):
    return [group.description for group in board.groups]


# ----------------------------------------------------------------------
# Registry
# ----------------------------------------------------------------------

def test_builtin_layouts_registered():
    names = get_topology_names()
    for expected in ("boxes", "classic", "hyper", "irregular", "samurai"):
        assert expected in names

    info = {entry["name"]: entry["description"] for entry in get_topology_info()}
    assert info["samurai"]
    assert get_default_topology_name() == "classic"


def test_unknown_layout():
    with pytest.raises(ValueError, match="Unknown topology"):
        create_topology("jigsaw-deluxe")


def test_bad_layout_options():
    with pytest.raises(ValueError, match="Invalid options"):
        create_topology("classic", width=4)
    with pytest.raises(ValueError, match="Invalid options"):
        create_topology("irregular")


def test_register_custom_layout():
    @register_topology
    class DominoTopology(TopologyBuilder):
        name = "test-domino"
        description = "Two cells in one group"

        def build(self) -> Board:
            board = Board(2, 1)
            board.register_group("Pair", board.cells)
            return board

    try:
        board = create_topology("test-domino").create(["1."])
        assert [s.to_rows() for s in board.solve()] == [["12"]]
    finally:
        _TOPOLOGIES.pop("test-domino", None)


def test_layout_options():
    boxes = get_topology_options("boxes")
    assert list(boxes) == ["width", "height", "boxes_x", "boxes_y", "max_value"]
    assert boxes["width"] == 9
    assert boxes["max_value"] is None

    assert list(get_topology_options("irregular")) == ["areas", "max_value"]
    assert get_topology_options("irregular")["areas"] is inspect.Parameter.empty
    assert get_topology_options("classic") == {}
    assert get_topology_options("samurai") == {}

    info = {entry["name"]: entry["options"] for entry in get_topology_info()}
    assert info["hyper"] == []
    with pytest.raises(ValueError):
        get_topology_options("jigsaw-deluxe")


def test_bad_option_message_lists_accepted_options():
    with pytest.raises(ValueError, match="accepted: areas, max_value"):
        create_topology("irregular", area=["AB"])


def test_box_offsets_column_major():
    assert list(box(2, 3)) == [(0, 0), (0, 1), (0, 2), (1, 0), (1, 1), (1, 2)]


# ----------------------------------------------------------------------
# Boxed layouts
# ----------------------------------------------------------------------

def test_classic_groups():
    board = create_topology("classic").build()
    names = group_names(board)

    assert (board.width, board.height, board.max_value) == (9, 9, 9)
    assert len(names) == 27
    assert names[0] == "Row 0"
    assert names[9] == "Column 0"
    assert names[18] == "Box at (0, 0)"
    assert all(len(group.indices) == 9 for group in board.groups)
    assert not any(cell.blocked for cell in board.cells)


def test_small_boxes():
    board = create_topology("boxes", width=4, height=4, boxes_x=2, boxes_y=2).build()
    assert len(board.groups) == 12
    assert board.max_value == 4

    top_right = board.groups[-2]
    assert top_right.description == "Box at (1, 0)"
    assert {(board.cells[i].x, board.cells[i].y) for i in top_right.indices} == {
        (2, 0), (3, 0), (2, 1), (3, 1)
    }


def test_rectangular_boxes():
    """Six by six with boxes three wide and two tall."""
    board = create_topology("boxes", width=6, height=6, boxes_x=2, boxes_y=3).build()
    boxes = [g for g in board.groups if g.description.startswith("Box")]

    assert len(board.groups) == 18
    assert len(boxes) == 6
    first = {(board.cells[i].x, board.cells[i].y) for i in boxes[0].indices}
    assert first == {(0, 0), (1, 0), (2, 0), (0, 1), (1, 1), (2, 1)}


def test_boxes_must_divide_board():
    with pytest.raises(ValueError):
        create_topology("boxes", width=9, height=9, boxes_x=2, boxes_y=3).build()
    with pytest.raises(ValueError):
        add_boxes(Board(4, 4), 0, 2)


def test_lines_only_where_they_hold_every_value():
    board = create_topology("boxes", width=4, height=2, boxes_x=2, boxes_y=1).build()
    names = group_names(board)

    assert board.max_value == 4
    assert "Row 0" in names
    assert not any(name.startswith("Column") for name in names)


# ----------------------------------------------------------------------
# Hyper
# ----------------------------------------------------------------------

def test_hyper_groups():
    board = create_topology("hyper").build()
    names = group_names(board)

    assert len(names) == 31
    assert names[-4:] == ["Hyper A", "Hyper B", "Hyper C", "Hyper D"]
    hyper_d = board.groups[-1]
    corners = {(board.cells[i].x, board.cells[i].y) for i in hyper_d.indices}
    assert (5, 5) in corners and (7, 7) in corners


def test_hyper_solution():
    board = create_topology("hyper").create(HYPER_ROWS)
    solutions = list(board.solve())

    assert len(solutions) == 1
    assert solutions[0].to_rows() == HYPER_SOLUTION


# ----------------------------------------------------------------------
# Irregular
# ----------------------------------------------------------------------

def test_parse_area_map_positions():
    regions = parse_area_map(["AAB", "ABB"])

    assert list(regions) == ["A", "B"]
    assert regions["A"] == [(0, 0), (1, 0), (0, 1)]
    assert regions["B"] == [(2, 0), (1, 1), (2, 1)]


def test_parse_area_map_errors():
    with pytest.raises(ValueError):
        parse_area_map([])
    with pytest.raises(ValueError):
        parse_area_map(["AAB", "AB"])


def test_non_square_area_map():
    builder = create_topology("irregular", areas=["AAB", "ABB"])
    board = builder.build()

    assert (board.width, board.height, board.max_value) == (3, 2, 3)
    assert group_names(board) == ["Row 0", "Row 1", "Area A", "Area B"]

    solutions = [s.to_rows() for s in board.solve()]
    assert len(solutions) == 12
    for top, bottom in solutions:
        assert bottom[0] == top[2]


def test_nonomino_solution():
    board = create_topology("irregular", areas=NONOMINO_AREAS).create(NONOMINO_ROWS)
    assert len(board.groups) == 27

    solutions = list(board.solve())
    assert len(solutions) == 1
    assert solutions[0].to_rows() == NONOMINO_SOLUTION


# ----------------------------------------------------------------------
# Samurai
# ----------------------------------------------------------------------

def test_samurai_shape():
    board = create_topology("samurai").build()
    names = group_names(board)

    assert (board.width, board.height, board.max_value) == (21, 21, 9)
    assert sum(cell.blocked for cell in board.cells) == 72
    assert len(names) == 131
    assert sum(name.startswith("Area") for name in names) == 41
    assert "Middle Row 0" in names
    assert "Area 3, 0" not in names
    assert board.cell(10, 3).blocked
    assert board.cell(3, 10).blocked
    assert not board.cell(10, 10).blocked

    # Holes never appear in any group
    for group in board.groups:
        assert not any(board.cells[i].blocked for i in group.indices)


def test_samurai_rejects_values_in_holes():
    rows = list(SAMURAI_ROWS)
    rows[0] = "6..8..9..1//.....38.."
    with pytest.raises(ValueError):
        create_topology("samurai").create(rows)


def test_samurai_solution():
    board = create_topology("samurai").create(SAMURAI_ROWS)
    solutions = list(board.solve())

    assert len(solutions) == 1
    assert solutions[0].to_rows() == SAMURAI_SOLUTION
    assert solutions[0].is_consistent()


if __name__ == "__main__":
    sys.exit(pytest.main([__file__, "-v"]))
