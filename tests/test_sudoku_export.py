from pathlib import Path

import pytest

from sudoku_export import (
    BOX_BOTTOM,
    BOX_MIDDLE,
    BOX_TOP,
    format_sudoku,
    get_downloads_folder,
    save_sudoku,
    unique_export_path,
)

# ---------- Rendering Tests ----------


def test_format_sudoku_layout(puzzle):
    lines = format_sudoku(puzzle).splitlines()

    assert len(lines) == 21
    assert lines[0] == BOX_TOP
    assert lines[1] == "│ 5 │ 3 │   ││   │ 7 │   ││   │   │   │"
    assert lines[2] == BOX_MIDDLE
    assert lines[6] == BOX_BOTTOM
    assert lines[7] == BOX_TOP
    assert lines[-1] == BOX_BOTTOM


def test_format_sudoku_prints_every_digit(solution):
    text = format_sudoku(solution)
    digits = [ch for ch in text if ch.isdigit()]
    assert digits == [str(v) for row in solution for v in row]


def test_format_sudoku_ends_with_newline(puzzle):
    assert format_sudoku(puzzle).endswith("┘\n")


# ---------- File Export Tests ----------


def test_unique_export_path_counts_up(tmp_path):
    first = unique_export_path(tmp_path)
    assert first == tmp_path / "sudoku.txt"
    first.write_text("x", encoding="utf-8")

    second = unique_export_path(tmp_path)
    assert second == tmp_path / "sudoku (1).txt"
    second.write_text("x", encoding="utf-8")

    assert unique_export_path(tmp_path) == tmp_path / "sudoku (2).txt"


def test_save_sudoku_writes_rendering(tmp_path, puzzle):
    path = save_sudoku(puzzle, folder=tmp_path)

    assert path == tmp_path / "sudoku.txt"
    assert path.read_text(encoding="utf-8") == format_sudoku(puzzle)


def test_save_sudoku_never_overwrites(tmp_path, puzzle, solution):
    first = save_sudoku(puzzle, folder=tmp_path)
    second = save_sudoku(solution, folder=tmp_path)

    assert first != second
    assert first.read_text(encoding="utf-8") == format_sudoku(puzzle)
    assert second.read_text(encoding="utf-8") == format_sudoku(solution)


def test_save_sudoku_creates_missing_folder(tmp_path, puzzle):
    folder = tmp_path / "nested" / "downloads"
    path = save_sudoku(puzzle, folder=folder)
    assert path.parent == folder
    assert path.exists()


def test_save_sudoku_rejects_other_formats(tmp_path, puzzle):
    with pytest.raises(ValueError):
        save_sudoku(puzzle, folder=tmp_path, fmt="pdf")
    assert list(tmp_path.iterdir()) == []


def test_save_sudoku_defaults_to_downloads_folder(tmp_path, monkeypatch, puzzle):
    monkeypatch.setenv("SUDOKU_EXPORT_DIR", str(tmp_path))
    path = save_sudoku(puzzle)
    assert path.parent == tmp_path


def test_downloads_folder_without_override(monkeypatch):
    monkeypatch.delenv("SUDOKU_EXPORT_DIR", raising=False)
    assert get_downloads_folder() == Path.home() / "Downloads"
