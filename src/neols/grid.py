"""Column grid for styled cells, with escape-aware width measurement."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from math import ceil

from rich.cells import cell_len

ESCAPE_START = "\x1b["
ESCAPE_END = "m"


def visible_width(text: str) -> int:
    """Return the terminal display width of ``text``.

    Every ``ESC [ ... m`` sequence is located and its width subtracted from
    the Unicode cell width of the whole string.
    """
    invisible = 0
    start = text.find(ESCAPE_START)
    while start != -1:
        end = text.find(ESCAPE_END, start)
        if end == -1:
            break
        invisible += cell_len(text[start : end + 1])
        start = text.find(ESCAPE_START, end + 1)
    return cell_len(text) - invisible


@dataclass(frozen=True, slots=True)
class Cell:
    contents: str
    width: int

    @classmethod
    def from_text(cls, text: str) -> Cell:
        return cls(contents=text, width=visible_width(text))


class Direction(Enum):
    LEFT_TO_RIGHT = "left-to-right"
    TOP_TO_BOTTOM = "top-to-bottom"


@dataclass(frozen=True, slots=True)
class GridDisplay:
    """A grid arranged into a fixed number of lines and column widths."""

    cells: tuple[Cell, ...]
    direction: Direction
    spacing: int
    num_lines: int
    widths: tuple[int, ...]

    def _index(self, line: int, column: int) -> int:
        if self.direction is Direction.LEFT_TO_RIGHT:
            return line * len(self.widths) + column
        return line + self.num_lines * column

    def __str__(self) -> str:
        gutter = " " * self.spacing
        out: list[str] = []
        for line in range(self.num_lines):
            row = [
                self.cells[i]
                for i in (self._index(line, col) for col in range(len(self.widths)))
                if i < len(self.cells)
            ]
            parts: list[str] = []
            for col, cell in enumerate(row):
                parts.append(cell.contents)
                if col < len(row) - 1:
                    parts.append(" " * (self.widths[col] - cell.width) + gutter)
            out.append("".join(parts) + "\n")
        return "".join(out)


class Grid:
    """Accumulates cells and lays them out into columns.

    Args:
        direction: Fill order of the cells.
        spacing: Number of spaces between columns.
    """

    def __init__(self, direction: Direction, spacing: int) -> None:
        self.direction = direction
        self.spacing = spacing
        self._cells: list[Cell] = []

    def __len__(self) -> int:
        return len(self._cells)

    def add(self, cell: Cell) -> None:
        self._cells.append(cell)

    def _column_widths(self, num_lines: int, num_columns: int) -> tuple[int, ...]:
        widths = [0] * num_columns
        for index, cell in enumerate(self._cells):
            if self.direction is Direction.LEFT_TO_RIGHT:
                column = index % num_columns
            else:
                column = index // num_lines
            widths[column] = max(widths[column], cell.width)
        return tuple(widths)

    def _display(self, num_lines: int, num_columns: int) -> GridDisplay:
        return GridDisplay(
            cells=tuple(self._cells),
            direction=self.direction,
            spacing=self.spacing,
            num_lines=num_lines,
            widths=self._column_widths(num_lines, num_columns),
        )

    def _max_columns(self, maximum_width: int) -> int:
        columns = 0
        total = -self.spacing
        for width in sorted(cell.width for cell in self._cells):
            total += width + self.spacing
            if total > maximum_width:
                break
            columns += 1
        return max(1, columns)

    def fit_into_columns(self, num_columns: int) -> GridDisplay:
        """Arrange the cells into exactly ``num_columns`` columns."""
        num_columns = max(1, num_columns)
        num_lines = ceil(len(self._cells) / num_columns)
        if self.direction is Direction.TOP_TO_BOTTOM and num_lines:
            num_columns = ceil(len(self._cells) / num_lines)
        return self._display(num_lines, num_columns)

    def fit_into_width(self, maximum_width: int) -> GridDisplay | None:
        """Arrange the cells into as many columns as fit ``maximum_width``.

        Returns:
            The layout with the fewest lines that fits, or ``None`` when a
            single cell is wider than ``maximum_width``.
        """
        if not self._cells:
            return self._display(0, 0)
        if max(cell.width for cell in self._cells) > maximum_width:
            return None

        # No layout has more columns than the narrowest cells could fill.
        start = ceil(len(self._cells) / self._max_columns(maximum_width))
        for num_lines in range(start, len(self._cells) + 1):
            num_columns = ceil(len(self._cells) / num_lines)
            widths = self._column_widths(num_lines, num_columns)
            total = sum(widths) + self.spacing * (num_columns - 1)
            if total <= maximum_width:
                if self.direction is Direction.LEFT_TO_RIGHT:
                    num_lines = ceil(len(self._cells) / num_columns)
                return self._display(num_lines, num_columns)
        return None
