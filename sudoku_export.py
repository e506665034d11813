# sudoku_export.py
import logging
import os
from pathlib import Path

from sudoku_utils import BOX, EMPTY, SIZE

logger = logging.getLogger(__name__)

EXPORT_DIR_ENV = "SUDOKU_EXPORT_DIR"
DEFAULT_FILE_NAME = "sudoku"
SUPPORTED_FORMATS = ("txt",)

# Each 3x3 box is drawn as its own frame
BOX_TOP = "┌───┬───┬───┐" * BOX
BOX_MIDDLE = "├───┼───┼───┤" * BOX
BOX_BOTTOM = "└───┴───┴───┘" * BOX


def _format_row(row):
    frames = []
    for start in range(0, SIZE, BOX):
        cells = [f" {val} " if val != EMPTY else "   " for val in row[start:start + BOX]]
        frames.append("│" + "│".join(cells) + "│")
    return "".join(frames)


def format_sudoku(grid):
    lines = []
    for band_start in range(0, SIZE, BOX):
        lines.append(BOX_TOP)
        for offset, row in enumerate(grid[band_start:band_start + BOX]):
            if offset:
                lines.append(BOX_MIDDLE)
            lines.append(_format_row(row))
        lines.append(BOX_BOTTOM)
    return "\n".join(lines) + "\n"


def get_downloads_folder():
    override = os.environ.get(EXPORT_DIR_ENV)
    if override:
        return Path(override).expanduser()
    return Path.home() / "Downloads"


def unique_export_path(folder, name=DEFAULT_FILE_NAME, ext="txt"):
    """First free path among `name.ext`, `name (1).ext`, `name (2).ext`, ..."""
    folder = Path(folder)
    path = folder / f"{name}.{ext}"
    count = 1
    while path.exists():
        path = folder / f"{name} ({count}).{ext}"
        count += 1
    return path


def save_sudoku(grid, folder=None, name=DEFAULT_FILE_NAME, fmt="txt"):
    if fmt.lower() not in SUPPORTED_FORMATS:
        raise ValueError(f"Unsupported export format {fmt!r}")
    folder = Path(folder) if folder is not None else get_downloads_folder()
    folder.mkdir(parents=True, exist_ok=True)
    path = unique_export_path(folder, name, fmt.lower())
    path.write_text(format_sudoku(grid), encoding="utf-8")
    logger.info("Saved sudoku to %s", path)
    return path
