"""Rendering engine for the single-pane source view.

Defines render context data and composes full ANSI frames from viewport
rows, per-column syntax styles, jump labels, and the status row.
"""

from __future__ import annotations

import sys
from collections.abc import Callable
from dataclasses import dataclass, field

from ..ansi import clip_plain, display_width
from ..jump.occurrences import CONTINUATION_CELL, VisibleRow
from ..ui_theme import DEFAULT_THEME, UITheme

RESET = "\033[0m"


@dataclass
class RenderContext:
    rows: list[VisibleRow]
    styles_for_line: Callable[[int], list[str]]
    max_lines: int
    width: int
    path_label: str
    line_count: int
    text_start: int
    cursor_line: int
    cursor_col: int
    theme: UITheme = DEFAULT_THEME
    labels: dict[tuple[int, int], str] = field(default_factory=dict)
    prompt: str = ""
    status_message: str = ""
    show_help: bool = False
    help_text: str = ""


def _scroll_percent(text_start: int, total_lines: int, visible_rows: int) -> float:
    if total_lines <= 0:
        return 0.0
    max_start = max(0, total_lines - max(1, visible_rows))
    if max_start <= 0:
        return 100.0
    return 100.0 * max(0, min(text_start, max_start)) / max_start


def build_status_line(left_text: str, width: int, right_text: str = "│ ? Help") -> str:
    usable = max(1, width - 1)
    if usable <= len(right_text):
        return right_text[-usable:]
    left_limit = max(0, usable - len(right_text) - 1)
    left = clip_plain(left_text, left_limit)
    gap = " " * (usable - display_width(left) - len(right_text))
    return f"{left}{gap}{right_text}"


def render_row(
    row: VisibleRow,
    styles: list[str],
    labels: dict[tuple[int, int], str],
    cursor: tuple[int, int] | None,
    theme: UITheme,
    width: int,
) -> str:
    """Compose one screen row, painting jump labels over their cells."""
    out: list[str] = []
    active = ""
    cursor_drawn = False
    previous_column = -1
    previous_labelled = False

    def set_style(sgr: str) -> None:
        nonlocal active
        if sgr == active:
            return
        if active:
            out.append(RESET)
        if sgr:
            out.append(sgr)
        active = sgr

    for screen_col, (glyph, column) in enumerate(zip(row.cells, row.columns)):
        label = labels.get((row.screen_row, screen_col))
        if label is not None:
            set_style(theme.jump_label)
            out.append(label)
            previous_labelled = True
            previous_column = column
            continue
        if glyph == CONTINUATION_CELL:
            # Second half of a wide character whose first cell was covered or cut off.
            if previous_labelled or screen_col == 0:
                set_style("")
                out.append(" ")
            previous_labelled = False
            previous_column = column
            continue
        previous_labelled = False
        sgr = styles[column] if 0 <= column < len(styles) else ""
        first_cell = column != previous_column
        previous_column = column
        if (
            cursor is not None
            and first_cell
            and column >= 0
            and (row.line, column) == cursor
        ):
            sgr = f"{sgr}{theme.cursor}"
            cursor_drawn = True
        set_style(sgr)
        out.append(glyph)

    if cursor is not None and not cursor_drawn and row.line == cursor[0]:
        line_end = cursor[1] >= len(row.text)
        row_has_tail = not row.columns or max(row.columns) >= len(row.text) - 1
        if line_end and row_has_tail and len(row.cells) < width:
            set_style(theme.cursor)
            out.append(" ")
    set_style("")
    return "".join(out)


def render_frame(context: RenderContext) -> str:
    """Return a complete frame: content rows, optional help row, status row."""
    theme = context.theme
    width = max(1, context.width)
    help_rows = 1 if context.show_help and context.max_lines > 1 else 0
    content_rows = max(1, context.max_lines - help_rows)
    cursor = (context.cursor_line, context.cursor_col)
    styles_cache: dict[int, list[str]] = {}

    out: list[str] = ["\033[H"]
    for screen_row in range(content_rows):
        if screen_row < len(context.rows):
            row = context.rows[screen_row]
            styles = styles_cache.get(row.line)
            if styles is None:
                styles = context.styles_for_line(row.line)
                styles_cache[row.line] = styles
            out.append(render_row(row, styles, context.labels, cursor, theme, width))
        out.append("\033[K\r\n")

    if help_rows:
        out.append(f"{theme.help_row}{clip_plain(context.help_text, width - 1)}{theme.reset if theme.help_row else ''}")
        out.append("\033[K\r\n")

    position = f"{context.cursor_line + 1}:{context.cursor_col + 1}"
    percent = _scroll_percent(context.text_start, context.line_count, content_rows)
    right_text = f"{position} {percent:3.0f}% │ ? Help"
    if context.prompt:
        left_text = context.prompt
        left_style = theme.status_prompt
    elif context.status_message:
        left_text = context.status_message
        left_style = theme.status_message
    else:
        left_text = context.path_label
        left_style = theme.status_bar
    status = build_status_line(left_text, width, right_text)
    if left_style:
        out.append(f"{left_style}{status}{RESET}")
    else:
        out.append(status)
    out.append("\033[K")
    return "".join(out)


def write_frame(context: RenderContext, write: Callable[[str], None] | None = None) -> None:
    frame = render_frame(context)
    if write is not None:
        write(frame)
        return
    sys.stdout.write(frame)
    sys.stdout.flush()
