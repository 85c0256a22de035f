"""Shared fixtures for neols tests."""

from __future__ import annotations

import re
from collections.abc import Callable
from pathlib import Path

import pytest

from neols.color import ColorMode, Colors, ColorTheme
from neols.icon import Icons, IconTheme
from neols.meta import FileType, Meta, Size, SymLink

ANSI_RE = re.compile(r"\x1b\[[0-9;]*m")


@pytest.fixture(autouse=True)
def _no_ls_colors(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the caller's LS_COLORS out of every test."""
    monkeypatch.delenv("LS_COLORS", raising=False)


@pytest.fixture
def strip_ansi() -> Callable[[str], str]:
    return lambda text: ANSI_RE.sub("", text)


@pytest.fixture
def no_color() -> Colors:
    return Colors(ColorMode.NO_COLOR)


@pytest.fixture
def dark() -> Colors:
    return Colors(ColorMode.THEME, ColorTheme.DARK)


@pytest.fixture
def no_icons() -> Icons:
    return Icons(IconTheme.NONE)


@pytest.fixture
def sample_listing(tmp_path: Path) -> Meta:
    """Build a directory entry with nested content.

    Structure::

        root/
        ├── docs/
        │   └── guide.md
        ├── src/
        │   ├── app.py
        │   └── lib/
        │       └── util.py
        └── README.md
    """
    root = tmp_path / "root"

    def file(path: Path, size: int) -> Meta:
        return Meta(path.name, path, FileType.file(), size=Size(size))

    def directory(path: Path, content: list[Meta]) -> Meta:
        return Meta(path.name, path, FileType.directory(), content=content)

    lib = directory(root / "src" / "lib", [file(root / "src" / "lib" / "util.py", 300)])
    src = directory(root / "src", [file(root / "src" / "app.py", 1200), lib])
    docs = directory(root / "docs", [file(root / "docs" / "guide.md", 42)])
    return directory(root, [docs, src, file(root / "README.md", 7)])


@pytest.fixture
def symlink_to_file(tmp_path: Path) -> Meta:
    return Meta(
        "c",
        tmp_path / "c",
        FileType.symlink(),
        symlink=SymLink("a.txt"),
    )
