"""Cell grid for the jump overlay.

The canvas is the restoration ledger for jump labels: it snapshots the glyphs
of the visible rows, drawing a label overwrites one cell and marks it, and
erasing writes the glyph back and drops the mark. The renderer reads only the
marks (``labels()``) and paints everything else from the viewport rows, so the
glyph grid exists to check that every erase inverts its draw.
"""

from __future__ import annotations

from collections.abc import Iterable

from ..jump.occurrences import VisibleRow


class OverlayCanvas:
    def __init__(self) -> None:
        self._cells: list[list[str]] = []
        self._labels: dict[tuple[int, int], str] = {}

    def load(self, rows: Iterable[VisibleRow]) -> None:
        """Snapshot the glyphs of ``rows``; any previous labels are dropped."""
        self._cells = [list(row.cells) for row in rows]
        self._labels.clear()

    def reset(self) -> None:
        self._cells = []
        self._labels.clear()

    def cell(self, row: int, col: int) -> str:
        if 0 <= row < len(self._cells) and 0 <= col < len(self._cells[row]):
            return self._cells[row][col]
        return ""

    def snapshot(self) -> list[list[str]]:
        return [list(cells) for cells in self._cells]

    def labels(self) -> dict[tuple[int, int], str]:
        return dict(self._labels)

    def label_at(self, row: int, col: int) -> str | None:
        return self._labels.get((row, col))

    def is_clear(self) -> bool:
        return not self._labels

    def draw_label(self, row: int, col: int, label: str) -> None:
        if not (0 <= row < len(self._cells) and 0 <= col < len(self._cells[row])):
            raise IndexError(f"label cell out of range: {row}:{col}")
        self._cells[row][col] = label
        self._labels[(row, col)] = label

    def erase_label(self, row: int, col: int, glyph: str) -> None:
        if 0 <= row < len(self._cells) and 0 <= col < len(self._cells[row]):
            self._cells[row][col] = glyph
        self._labels.pop((row, col), None)
