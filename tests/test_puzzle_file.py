"""
Tests for puzzle definition files

Usage:
    python -m pytest tests/test_puzzle_file.py
"""

import sys
from pathlib import Path

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from gridsolver.puzzle_file import (
    PuzzleDefinition,
    PuzzleFileError,
    build_board,
    load_puzzle,
    parse_puzzle_json,
    parse_puzzle_text,
    save_puzzle,
)

PUZZLES_DIR = Path(__file__).parent.parent / "puzzles"


@pytest.mark.parametrize("filename, topology, size", [
    ("classic.json", "classic", (9, 9)),
    ("classic_ambiguous.txt", "classic", (9, 9)),
    ("small.json", "boxes", (4, 4)),
    ("small_unsolvable.json", "boxes", (4, 4)),
    ("hyper.json", "hyper", (9, 9)),
    ("nonomino.json", "irregular", (9, 9)),
    ("samurai.json", "samurai", (21, 21)),
])
def test_sample_puzzles_load(filename, topology, size):
    definition = load_puzzle(PUZZLES_DIR / filename)
    assert definition.topology == topology

    board = build_board(definition)
    assert (board.width, board.height) == size


def test_json_name_defaults_to_file_stem(tmp_path):
    path = tmp_path / "mine.json"
    path.write_text('{"rows": ["12", "21"], "topology": null}', encoding="utf-8")

    definition = load_puzzle(path)
    assert definition.name == "mine"
    assert definition.topology == ""
    assert definition.options == {}


def test_text_header_and_comments():
    text = "\n".join([
        "# topology: hyper",
        "# a comment",
        "",
        "  .......1.  ",
        "..2....34",
    ])
    definition = parse_puzzle_text(text, name="partial")

    assert definition.topology == "hyper"
    assert definition.rows == [".......1.", "..2....34"]
    assert definition.name == "partial"


def test_text_without_header_has_no_topology():
    definition = parse_puzzle_text("0003\n0004\n1000\n4000\n")
    assert definition.topology == ""
    assert len(definition.rows) == 4


@pytest.mark.parametrize("data", [
    [],
    {"topology": "classic"},
    {"rows": "0003"},
    {"rows": [1, 2, 3]},
    {"rows": ["12"], "options": ["width"]},
])
def test_bad_json_definitions(data):
    with pytest.raises(PuzzleFileError):
        parse_puzzle_json(data)


def test_empty_text_definition():
    with pytest.raises(PuzzleFileError):
        parse_puzzle_text("# topology: classic\n\n")


def test_unreadable_files(tmp_path):
    with pytest.raises(PuzzleFileError):
        load_puzzle(tmp_path / "missing.json")

    broken = tmp_path / "broken.json"
    broken.write_text("{rows: ", encoding="utf-8")
    with pytest.raises(PuzzleFileError):
        load_puzzle(broken)


def test_puzzle_file_error_is_value_error():
    assert issubclass(PuzzleFileError, ValueError)


def test_save_and_load(tmp_path):
    definition = PuzzleDefinition(
        rows=["1..", "..."],
        topology="irregular",
        options={"areas": ["AAB", "ABB"]},
        name="tiny",
    )
    path = tmp_path / "tiny.json"
    save_puzzle(definition, path)

    assert load_puzzle(path) == definition


def test_build_board_topology_override():
    definition = load_puzzle(PUZZLES_DIR / "classic.json")
    board = build_board(definition, topology="hyper")
    assert len(board.groups) == 31


def test_build_board_default_topology():
    definition = parse_puzzle_text("\n".join(["." * 9] * 9))
    board = build_board(definition)
    assert len(board.groups) == 27


def test_build_board_size_mismatch():
    definition = PuzzleDefinition(rows=["0003", "0004", "1000", "4000"])
    with pytest.raises(ValueError):
        build_board(definition, topology="classic")


def test_build_board_bad_options():
    definition = load_puzzle(PUZZLES_DIR / "small.json")
    with pytest.raises(ValueError):
        build_board(definition, topology="samurai")


@pytest.mark.parametrize("topology, options", [
    ("boxes", {"width": "4", "height": 4, "boxes_x": 2, "boxes_y": 2}),
    ("boxes", {"width": 4, "height": 4, "boxes_x": 2, "boxes_y": "2"}),
    ("boxes", {"width": 4, "height": 4, "boxes_x": 2, "boxes_y": 2, "max_value": 4.0}),
    ("irregular", {"areas": "AABB"}),
    ("irregular", {"areas": [["A", "B"], ["A", "B"]]}),
])
def test_build_board_mistyped_options(topology, options):
    definition = PuzzleDefinition(rows=["....", "....", "....", "...."],
                                  topology=topology, options=options)
    with pytest.raises(ValueError):
        build_board(definition)


if __name__ == "__main__":
    sys.exit(pytest.main([__file__, "-v"]))
