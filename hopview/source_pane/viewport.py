"""Logical-line to screen-row layout for the source pane.

Cuts logical lines into cell rows, either soft-wrapped to the pane width or
shifted by a horizontal offset. Each cell keeps the logical column it came
from so positions survive wrap and scroll.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..ansi import char_display_width
from ..jump.occurrences import CONTINUATION_CELL, VisibleRow


def line_cells(text: str) -> tuple[list[str], list[int]]:
    """Expand ``text`` into display cells and their logical columns.

    Tabs become spaces up to the next tab stop; wide characters are followed
    by a continuation cell. Zero-width characters attach to the previous cell.
    """
    cells: list[str] = []
    columns: list[int] = []
    col = 0
    for idx, ch in enumerate(text):
        w = char_display_width(ch, col)
        if w == 0:
            continue
        if ch == "\t":
            cells.extend(" " * w)
            columns.extend([idx] * w)
        else:
            cells.append(ch)
            columns.append(idx)
            if w == 2:
                cells.append(CONTINUATION_CELL)
                columns.append(idx)
        col += w
    return cells, columns


def _wrap_cells(cells: list[str], columns: list[int], width: int) -> list[tuple[list[str], list[int]]]:
    if not cells:
        return [([], [])]
    chunks: list[tuple[list[str], list[int]]] = []
    chunk_cells: list[str] = []
    chunk_columns: list[int] = []
    idx = 0
    while idx < len(cells):
        wide = idx + 1 < len(cells) and cells[idx + 1] == CONTINUATION_CELL and cells[idx] != CONTINUATION_CELL
        needed = 2 if wide else 1
        if len(chunk_cells) + needed > width and chunk_cells:
            # Pad instead of splitting a wide character across rows.
            while len(chunk_cells) < width:
                chunk_cells.append(" ")
                chunk_columns.append(-1)
            chunks.append((chunk_cells, chunk_columns))
            chunk_cells, chunk_columns = [], []
        chunk_cells.extend(cells[idx : idx + needed])
        chunk_columns.extend(columns[idx : idx + needed])
        idx += needed
    chunks.append((chunk_cells, chunk_columns))
    return chunks


@dataclass
class Viewport:
    """Visible window over ``lines`` starting at logical line ``start``."""

    lines: list[str]
    start: int
    text_x: int
    width: int
    height: int
    wrap: bool = False

    def line_rows(self, line: int) -> list[tuple[list[str], list[int]]]:
        """Return the screen rows logical ``line`` occupies, before row numbering."""
        cells, columns = line_cells(self.lines[line])
        width = max(1, self.width)
        if self.wrap:
            return _wrap_cells(cells, columns, width)
        offset = max(0, self.text_x)
        return [(cells[offset : offset + width], columns[offset : offset + width])]

    def visible_rows(self) -> list[VisibleRow]:
        rows: list[VisibleRow] = []
        line = max(0, self.start)
        while line < len(self.lines) and len(rows) < self.height:
            for cells, columns in self.line_rows(line):
                if len(rows) >= self.height:
                    break
                rows.append(
                    VisibleRow(
                        screen_row=len(rows),
                        line=line,
                        text=self.lines[line],
                        cells=tuple(cells),
                        columns=tuple(columns),
                    )
                )
            line += 1
        return rows

    def screen_position(self, line: int, column: int) -> tuple[int, int] | None:
        """Return ``(row, col)`` of the first cell showing ``line:column``, if visible."""
        for row in self.visible_rows():
            if row.line != line:
                continue
            for screen_col, cell_column in enumerate(row.columns):
                if cell_column == column:
                    return row.screen_row, screen_col
        return None

    def max_start(self) -> int:
        if not self.wrap:
            return max(0, len(self.lines) - max(1, self.height))
        rows = 0
        line = len(self.lines) - 1
        while line > 0:
            rows += len(self.line_rows(line))
            if rows >= self.height:
                return line
            line -= 1
        return 0

    def start_showing(self, line: int) -> int:
        """Return the nearest ``start`` that keeps ``line`` fully on screen."""
        line = max(0, min(line, len(self.lines) - 1))
        if line < self.start:
            return line
        if not self.wrap:
            if line >= self.start + self.height:
                return line - self.height + 1
            return self.start
        needed = len(self.line_rows(line))
        start = line
        while start > self.start:
            above = len(self.line_rows(start - 1))
            if needed + above > self.height:
                break
            needed += above
            start -= 1
        return start
