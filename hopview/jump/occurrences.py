"""Word-initial occurrence scanning over the visible viewport.

Rows come from the viewport layer already cut to screen cells; this module
only decides which cells are jump candidates and keeps them in document order.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass

CONTINUATION_CELL = ""


@dataclass(frozen=True)
class Occurrence:
    """One candidate jump target.

    ``screen_row``/``screen_col`` locate the label cell; ``line``/``column``
    are logical 0-based source coordinates and survive re-projection during
    narrowing. ``glyph`` is the character the label covers.
    """

    screen_row: int
    screen_col: int
    line: int
    column: int
    glyph: str


@dataclass(frozen=True)
class VisibleRow:
    """One viewport row cut from logical line ``line``.

    ``cells[i]`` is the glyph painted in screen column ``i`` and
    ``columns[i]`` the logical column it belongs to (``-1`` for padding).
    Wide characters occupy a glyph cell followed by a continuation cell.
    """

    screen_row: int
    line: int
    text: str
    cells: tuple[str, ...]
    columns: tuple[int, ...]


def _starts_word(text: str, column: int) -> bool:
    if column <= 0:
        # Implicit line break before the first character.
        return True
    return text[column - 1].isspace()


def iter_char_cells(row: VisibleRow) -> Iterator[tuple[int, int]]:
    """Yield ``(screen_col, column)`` for each cell that starts a source character."""
    previous = -1
    for screen_col, column in enumerate(row.columns):
        if column < 0 or column == previous:
            previous = column
            continue
        previous = column
        if row.cells[screen_col] == CONTINUATION_CELL:
            # Wide character cut by the left viewport edge.
            continue
        yield screen_col, column


def scan_occurrences(rows: Iterable[VisibleRow], target: str) -> list[Occurrence]:
    """Return word-initial occurrences of ``target`` in top-to-bottom order.

    Matching is case-insensitive. A cell qualifies when the logical character
    before it is whitespace (a line start counts) or when it is the first
    visible character of the viewport. Only the rows handed in are inspected.
    """
    if not target:
        return []
    needle = target.lower()
    found: list[Occurrence] = []
    first_row = True
    for row in rows:
        for cell_index, (screen_col, column) in enumerate(iter_char_cells(row)):
            glyph = row.text[column]
            if glyph.lower() != needle:
                continue
            # A wide character cut by the left edge pushes the origin right.
            viewport_origin = first_row and cell_index == 0
            if not viewport_origin and not _starts_word(row.text, column):
                continue
            found.append(
                Occurrence(
                    screen_row=row.screen_row,
                    screen_col=screen_col,
                    line=row.line,
                    column=column,
                    glyph=glyph,
                )
            )
        first_row = False
    return found
