"""
Board Image Utilities

Functions for rendering boards to annotated PNG images for inspection.
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Dict, FrozenSet, Optional, Union

from PIL import Image, ImageDraw, ImageFont

from .engine import Board, Group

logger = logging.getLogger(__name__)


# Debug settings
DEBUG_DIR = Path("./debug")
MAX_DEBUG_IMAGES = 10

# Rendering
CELL_SIZE = 32
MARGIN = 8
GIVEN_COLOR = "black"
SOLVED_COLOR = "#1565C0"
BLOCKED_COLOR = "#9E9E9E"
THIN_LINE = 1
HEAVY_LINE = 3


def _is_line(board: Board, group: Group) -> bool:
    """True if every cell of the group sits on one row or one column."""
    cells = board.group_cells(group)
    return len({c.x for c in cells}) <= 1 or len({c.y for c in cells}) <= 1


def _region_map(board: Board) -> Dict[int, FrozenSet[int]]:
    """Cell index -> ids of the non-line groups containing it."""
    regions: Dict[int, set] = {}
    for group_id, group in enumerate(board.groups):
        if _is_line(board, group):
            continue
        for index in group.indices:
            regions.setdefault(index, set()).add(group_id)
    return {index: frozenset(ids) for index, ids in regions.items()}


def render_board(board: Board, givens: Optional[Board] = None) -> Image.Image:
    """
    Draw a board as an image.

    Annotations include:
    - Blocked cells shaded grey
    - Given values in black, solved values in blue
    - Heavy borders between cells that share no region (box, area...)

    Args:
        board: Board to draw
        givens: Original puzzle; values it already holds count as givens

    Returns:
        RGB PIL Image
    """
    width = board.width * CELL_SIZE + 2 * MARGIN
    height = board.height * CELL_SIZE + 2 * MARGIN
    image = Image.new("RGB", (width, height), "white")
    draw = ImageDraw.Draw(image)
    font = ImageFont.load_default()

    regions = _region_map(board)
    empty: FrozenSet[int] = frozenset()

    def origin(x: int, y: int):
        return MARGIN + x * CELL_SIZE, MARGIN + y * CELL_SIZE

    for cell in board.cells:
        left, top = origin(cell.x, cell.y)
        if cell.blocked:
            draw.rectangle([left, top, left + CELL_SIZE, top + CELL_SIZE], fill=BLOCKED_COLOR)
            continue

        draw.rectangle([left, top, left + CELL_SIZE, top + CELL_SIZE], outline="black", width=THIN_LINE)
        if not cell.has_value():
            continue

        is_given = givens is not None and givens.cell(cell.x, cell.y).value == cell.value
        color = GIVEN_COLOR if is_given or givens is None else SOLVED_COLOR
        text = str(cell.value)
        bbox = draw.textbbox((0, 0), text, font=font)
        text_w, text_h = bbox[2] - bbox[0], bbox[3] - bbox[1]
        draw.text(
            (left + (CELL_SIZE - text_w) / 2, top + (CELL_SIZE - text_h) / 2),
            text, fill=color, font=font,
        )

    # Region borders between horizontal and vertical neighbours
    for y in range(board.height):
        for x in range(board.width):
            index = y * board.width + x
            mine = regions.get(index, empty)
            left, top = origin(x, y)
            if x + 1 < board.width:
                theirs = regions.get(index + 1, empty)
                if (mine or theirs) and not (mine & theirs):
                    draw.line([left + CELL_SIZE, top, left + CELL_SIZE, top + CELL_SIZE],
                              fill="black", width=HEAVY_LINE)
            if y + 1 < board.height:
                theirs = regions.get(index + board.width, empty)
                if (mine or theirs) and not (mine & theirs):
                    draw.line([left, top + CELL_SIZE, left + CELL_SIZE, top + CELL_SIZE],
                              fill="black", width=HEAVY_LINE)

    return image


def save_board_image(board: Board, path: Optional[Union[str, Path]] = None,
                     givens: Optional[Board] = None) -> Path:
    """
    Render a board and save it as PNG.

    Args:
        board: Board to draw
        path: Output file; defaults to a timestamped file in DEBUG_DIR
        givens: Original puzzle, to tell givens from solved values

    Returns:
        Path of the written image
    """
    if path is None:
        DEBUG_DIR.mkdir(parents=True, exist_ok=True)
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S_%f")[:-3]
        output = DEBUG_DIR / f"board_{timestamp}.png"
    else:
        output = Path(path)
        output.parent.mkdir(parents=True, exist_ok=True)

    render_board(board, givens).save(output, "PNG")
    logger.info(f"Board image saved: {output}")

    if path is None:
        _cleanup_debug_images()
    return output


def _cleanup_debug_images() -> None:
    """Remove old board images, keeping only the most recent MAX_DEBUG_IMAGES."""
    if not DEBUG_DIR.exists():
        return

    board_files = sorted(
        DEBUG_DIR.glob("board_*.png"),
        key=lambda p: p.stat().st_mtime,
        reverse=True
    )

    for old_file in board_files[MAX_DEBUG_IMAGES:]:
        try:
            old_file.unlink()
        except OSError as e:
            logger.warning(f"Could not remove old image {old_file}: {e}")
