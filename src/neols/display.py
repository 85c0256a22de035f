"""Listing layout: recursive grids and box-drawing trees."""

from __future__ import annotations

import os
import sys
from collections.abc import Sequence
from dataclasses import dataclass

from neols.color import Colors
from neols.fields import compute_padding, render_fields
from neols.flags import Flags, Layout
from neols.grid import Cell, Direction, Grid
from neols.icon import Icons
from neols.meta import Kind, Meta


@dataclass(frozen=True, slots=True)
class Glyphs:
    """Tree connector character set."""

    edge: str  # ├──
    corner: str  # └──
    line: str  # │
    blank: str


UNICODE_GLYPHS = Glyphs(
    edge="├──",
    corner="└──",
    line="│  ",
    blank="   ",
)

ASCII_GLYPHS = Glyphs(
    edge="|--",
    corner="\\--",
    line="|  ",
    blank="   ",
)


def terminal_width() -> int | None:
    """Return the column count of stdout, or ``None`` when it is not a terminal."""
    try:
        return os.get_terminal_size(sys.stdout.fileno()).columns
    except (OSError, ValueError):
        return None


def render(
    metas: Sequence[Meta],
    flags: Flags,
    colors: Colors,
    icons: Icons,
    term_width: int | None = None,
) -> str:
    """Render entries with the layout selected by ``flags``.

    Args:
        metas: Top-level entries, directories carrying their content.
        flags: Rendering flags.
        colors: Style resolver.
        icons: Icon resolver.
        term_width: Terminal width for ``GRID``. Detected from stdout when
            omitted.

    Returns:
        str: The listing, one ``\\n``-terminated line per row.
    """
    if flags.layout is Layout.TREE:
        return tree(metas, flags, colors, icons)
    if term_width is None and flags.layout is Layout.GRID:
        term_width = terminal_width()
    return grid(metas, flags, colors, icons, term_width)


def grid(
    metas: Sequence[Meta],
    flags: Flags,
    colors: Colors,
    icons: Icons,
    term_width: int | None = None,
) -> str:
    """Render entries as a grid, then each listed directory's content.

    ``GRID`` fits as many columns as ``term_width`` allows and falls back
    to a single column. ``ONE_LINE`` and ``FIXED_GRID`` show one row per
    entry with one column per block.
    """
    return _inner_display_grid(metas, flags, colors, icons, 0, term_width)


def tree(
    metas: Sequence[Meta],
    flags: Flags,
    colors: Colors,
    icons: Icons,
) -> str:
    """Render entries one per line, children indented under connectors."""
    glyphs = ASCII_GLYPHS if flags.charset == "ascii" else UNICODE_GLYPHS
    return _inner_display_tree(metas, flags, colors, icons, glyphs, 0, "")


def _is_deferred(meta: Meta, flags: Flags) -> bool:
    """Whether a top-level entry is shown through its content instead of a row."""
    if flags.directory_only or meta.content is None:
        return False
    file_type = meta.file_type
    if file_type.kind is Kind.DIRECTORY:
        return True
    return file_type.is_dir_like() and flags.layout is not Layout.ONE_LINE


def _should_display_folder_path(depth: int, metas: Sequence[Meta], flags: Flags) -> bool:
    if depth > 0:
        return True
    folder_count = sum(1 for meta in metas if _is_deferred(meta, flags))
    return folder_count > 1 or folder_count < len(metas)


def _folder_banner(meta: Meta) -> str:
    return f"\n{meta.path}:\n"


def _inner_display_grid(
    metas: Sequence[Meta],
    flags: Flags,
    colors: Colors,
    icons: Icons,
    depth: int,
    term_width: int | None,
) -> str:
    skip_dirs = depth == 0
    shown = [m for m in metas if not (skip_dirs and _is_deferred(m, flags))]

    padding_rules = compute_padding(shown, flags)
    if flags.layout is Layout.ONE_LINE:
        cells = Grid(Direction.LEFT_TO_RIGHT, spacing=1)
    elif flags.layout is Layout.GRID:
        cells = Grid(Direction.TOP_TO_BOTTOM, spacing=2)
    else:
        # FIXED_GRID
        cells = Grid(Direction.LEFT_TO_RIGHT, spacing=2)

    for meta in shown:
        for fragment in render_fields(meta, colors, icons, flags, padding_rules):
            cells.add(Cell.from_text(fragment))

    if flags.layout is Layout.GRID:
        fitted = cells.fit_into_width(term_width) if term_width is not None else None
        if fitted is None:
            fitted = cells.fit_into_columns(1)
    else:
        fitted = cells.fit_into_columns(len(flags.blocks))
    output = str(fitted)

    display_folder_path = _should_display_folder_path(depth, metas, flags)

    for meta in metas:
        if meta.content is None:
            continue
        if display_folder_path:
            output += _folder_banner(meta)
        output += _inner_display_grid(
            meta.content, flags, colors, icons, depth + 1, term_width
        )

    return output


def _inner_display_tree(
    metas: Sequence[Meta],
    flags: Flags,
    colors: Colors,
    icons: Icons,
    glyphs: Glyphs,
    depth: int,
    prefix: str,
) -> str:
    padding_rules = compute_padding(metas, flags)

    cells = Grid(Direction.LEFT_TO_RIGHT, spacing=1)
    for meta in metas:
        for fragment in render_fields(meta, colors, icons, flags, padding_rules):
            cells.add(Cell.from_text(fragment))

    content = str(cells.fit_into_columns(len(flags.blocks)))
    output: list[str] = []

    for idx, (meta, line) in enumerate(zip(metas, content.split("\n"))):
        has_next_sibling = idx + 1 != len(metas)

        if depth > 0:
            output.append(prefix)
            output.append(glyphs.edge if has_next_sibling else glyphs.corner)
            output.append(" ")

        output.append(line)
        output.append("\n")

        if meta.content is not None:
            new_prefix = prefix
            if depth > 0:
                new_prefix += glyphs.line if has_next_sibling else glyphs.blank
            output.append(
                _inner_display_tree(
                    meta.content, flags, colors, icons, glyphs, depth + 1, new_prefix
                )
            )

    return "".join(output)
