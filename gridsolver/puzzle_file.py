"""
Puzzle File Module - Reading and writing puzzle definitions.

Two formats are supported:

JSON (.json):
    {
        "name": "Nonomino",
        "topology": "irregular",
        "options": {"areas": ["111233333", ...]},
        "rows": ["3.......4", ...]
    }

Plain text (any other extension): one row definition per line. Blank
lines and lines starting with "#" are ignored, except for a header line
such as "# topology: hyper" that selects the layout.
"""

import json
import logging
import re
from dataclasses import dataclass, field, asdict
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from .engine import Board
from .topology import create_topology, get_default_topology_name

logger = logging.getLogger(__name__)

_TOPOLOGY_HEADER = re.compile(r"^#\s*topology\s*:\s*(\S+)\s*$", re.IGNORECASE)


class PuzzleFileError(ValueError):
    """Raised when a puzzle file cannot be read or is malformed."""


@dataclass
class PuzzleDefinition:
    """
    A puzzle as stored on disk.

    Attributes:
        rows: Row definitions, top to bottom
        topology: Layout name understood by create_topology()
        options: Keyword arguments for the layout builder
        name: Optional display name
    """
    rows: List[str]
    topology: str = ""
    options: Dict[str, Any] = field(default_factory=dict)
    name: str = ""


def parse_puzzle_json(data: Any, name: str = "") -> PuzzleDefinition:
    """
    Build a definition from decoded JSON.

    Raises:
        PuzzleFileError: If required keys are missing or mistyped
    """
    if not isinstance(data, dict):
        raise PuzzleFileError("Puzzle JSON must be an object")

    rows = data.get("rows")
    if not isinstance(rows, list) or not all(isinstance(r, str) for r in rows):
        raise PuzzleFileError("Puzzle JSON needs a 'rows' list of strings")

    options = data.get("options", {})
    if not isinstance(options, dict):
        raise PuzzleFileError("'options' must be an object")

    return PuzzleDefinition(
        rows=rows,
        topology=data.get("topology") or "",
        options=options,
        name=data.get("name") or name,
    )


def parse_puzzle_text(text: str, name: str = "") -> PuzzleDefinition:
    """
    Build a definition from plain text, one row per line.

    Raises:
        PuzzleFileError: If the text holds no rows
    """
    topology = ""
    rows = []
    for line in text.splitlines():
        stripped = line.strip()
        if not stripped:
            continue
        if stripped.startswith("#"):
            match = _TOPOLOGY_HEADER.match(stripped)
            if match:
                topology = match.group(1)
            continue
        rows.append(stripped)

    if not rows:
        raise PuzzleFileError("Puzzle text contains no rows")
    return PuzzleDefinition(rows=rows, topology=topology, name=name)


def load_puzzle(path: Union[str, Path]) -> PuzzleDefinition:
    """
    Load a puzzle definition from disk.

    Args:
        path: .json file or plain text file

    Returns:
        Parsed PuzzleDefinition

    Raises:
        PuzzleFileError: If the file cannot be read or parsed
    """
    puzzle_path = Path(path)
    try:
        text = puzzle_path.read_text(encoding="utf-8")
    except (IOError, UnicodeDecodeError) as e:
        raise PuzzleFileError(f"Cannot read puzzle file {puzzle_path}: {e}") from e

    if puzzle_path.suffix.lower() == ".json":
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise PuzzleFileError(f"Invalid JSON in {puzzle_path}: {e}") from e
        definition = parse_puzzle_json(data, name=puzzle_path.stem)
    else:
        definition = parse_puzzle_text(text, name=puzzle_path.stem)

    logger.debug(
        f"Loaded puzzle '{definition.name}' ({definition.topology}, {len(definition.rows)} rows)"
    )
    return definition


def save_puzzle(definition: PuzzleDefinition, path: Union[str, Path]) -> None:
    """
    Write a puzzle definition as JSON.

    Args:
        definition: Puzzle to store
        path: Output file path
    """
    with open(path, 'w', encoding='utf-8') as f:
        json.dump(asdict(definition), f, indent=2)
    logger.debug(f"Puzzle saved: {path}")


def build_board(definition: PuzzleDefinition,
                topology: Optional[str] = None) -> Board:
    """
    Create and pre-fill the board for a definition.

    Args:
        definition: Puzzle to build
        topology: Layout name overriding the definition's own

    Returns:
        Pre-filled Board

    Raises:
        ValueError: If the layout is unknown or the rows do not fit it
    """
    name = topology or definition.topology or get_default_topology_name()
    builder = create_topology(name, **definition.options)
    return builder.create(definition.rows)
