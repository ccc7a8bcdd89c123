"""Runtime composition layer for hopview.

Builds initial state, wires the source pane, renderer, and jump mode onto
one session object, and starts the loop.
"""

from __future__ import annotations

import logging
import os
import shutil
import sys
import time
from pathlib import Path

from ..input import NormalKeyContext, handle_normal_key, help_text, read_key
from ..jump import JumpConfig, JumpController, JumpPorts, JumpResult, KeyPrompt, Occurrence, scan_occurrences
from ..render import RenderContext, write_frame
from ..source_pane import (
    OverlayCanvas,
    Viewport,
    colorize_source,
    column_styles,
    line_cells,
    sanitize_terminal_text,
    split_source_lines,
    styled_source_lines,
)
from ..ui_theme import UITheme, resolve_theme
from .config import load_wrap_text, save_wrap_text
from .loop import RuntimeLoopCallbacks, run_main_loop
from .state import AppState
from .terminal import TerminalController

logger = logging.getLogger(__name__)

STATUS_MESSAGE_SECONDS = 2.5
WRAP_STATUS_SECONDS = 1.2


class PagerSession:
    """Owns pager state plus the jump-mode collaborators bound to it."""

    def __init__(
        self,
        state: AppState,
        theme: UITheme,
        jump_config: JumpConfig,
        write=None,
    ) -> None:
        self.state = state
        self.theme = theme
        self.jump_config = jump_config
        self.canvas = OverlayCanvas()
        self._write = write
        self._help_text = help_text()

    # geometry

    def visible_content_rows(self) -> int:
        help_rows = 1 if self.state.show_help and self.state.usable > 1 else 0
        return max(1, self.state.usable - help_rows)

    def viewport(self) -> Viewport:
        state = self.state
        return Viewport(
            lines=state.lines,
            start=state.start,
            text_x=state.text_x,
            width=max(1, state.width - 1),
            height=self.visible_content_rows(),
            wrap=state.wrap_text,
        )

    def relayout(self, columns: int, usable: int) -> None:
        self.state.width = max(1, columns)
        self.state.usable = max(1, usable)
        self.ensure_cursor_visible()

    # rendering

    def styles_for_line(self, line: int) -> list[str]:
        cache = self.state.column_style_cache
        styles = cache.get(line)
        if styles is None:
            spans = self.state.styled_lines[line] if line < len(self.state.styled_lines) else []
            styles = column_styles(spans)
            cache[line] = styles
        return styles

    def render(self) -> None:
        state = self.state
        context = RenderContext(
            rows=self.viewport().visible_rows(),
            styles_for_line=self.styles_for_line,
            max_lines=state.usable,
            width=state.width,
            path_label=str(state.current_path),
            line_count=len(state.lines),
            text_start=state.start,
            cursor_line=state.cursor_line,
            cursor_col=state.cursor_col,
            theme=self.theme,
            labels=self.canvas.labels(),
            prompt=state.prompt,
            status_message=state.status_message,
            show_help=state.show_help,
            help_text=self._help_text,
        )
        write_frame(context, self._write)

    def report_status(self, message: str, seconds: float = STATUS_MESSAGE_SECONDS) -> None:
        self.state.status_message = message
        self.state.status_message_until = time.monotonic() + seconds
        self.state.dirty = True

    # cursor

    def _clamp_column(self, line: int, column: int) -> int:
        line_len = len(self.state.lines[line]) if self.state.lines else 0
        return max(0, min(column, max(0, line_len - 1)))

    def set_cursor(self, line: int, column: int) -> None:
        state = self.state
        state.cursor_line = max(0, min(line, len(state.lines) - 1))
        state.cursor_col = self._clamp_column(state.cursor_line, column)
        self.ensure_cursor_visible()
        state.dirty = True

    def move_cursor_to(self, line: int, column: int) -> None:
        """Move to logical ``line`` and 1-based ``column``."""
        self.set_cursor(line, column - 1)

    def move_cursor_lines(self, delta: int) -> None:
        self.set_cursor(self.state.cursor_line + delta, self.state.cursor_col)

    def move_cursor_columns(self, delta: int) -> None:
        self.set_cursor(self.state.cursor_line, self.state.cursor_col + delta)

    def move_cursor_to_line(self, line: int) -> None:
        self.set_cursor(line, self.state.cursor_col)

    def ensure_cursor_visible(self) -> None:
        state = self.state
        viewport = self.viewport()
        state.start = max(0, min(viewport.start_showing(state.cursor_line), viewport.max_start()))
        if state.start > state.cursor_line:
            state.start = state.cursor_line
        if state.wrap_text:
            state.text_x = 0
            return
        _, columns = line_cells(state.lines[state.cursor_line]) if state.lines else ([], [])
        display_col = columns.index(state.cursor_col) if state.cursor_col in columns else 0
        width = viewport.width
        if display_col < state.text_x:
            state.text_x = display_col
        elif display_col >= state.text_x + width:
            state.text_x = display_col - width + 1

    # toggles

    def toggle_wrap_mode(self) -> None:
        state = self.state
        state.wrap_text = not state.wrap_text
        state.text_x = 0
        save_wrap_text(state.wrap_text)
        self.ensure_cursor_visible()
        self.report_status(f"wrap: {'on' if state.wrap_text else 'off'}", WRAP_STATUS_SECONDS)

    def toggle_help_panel(self) -> None:
        self.state.show_help = not self.state.show_help
        self.ensure_cursor_visible()
        self.state.dirty = True

    # jump mode

    def scan_viewport(self, target: str) -> list[Occurrence]:
        rows = self.viewport().visible_rows()
        self.canvas.load(rows)
        return scan_occurrences(rows, target)

    def draw_label(self, row: int, col: int, label: str) -> None:
        self.canvas.draw_label(row, col, label)
        self.state.dirty = True

    def erase_label(self, row: int, col: int, glyph: str) -> None:
        self.canvas.erase_label(row, col, glyph)
        self.state.dirty = True

    def show_prompt(self, message: str) -> None:
        self.state.prompt = message
        self.render()

    def clear_prompt(self) -> None:
        self.state.prompt = ""
        self.state.dirty = True

    def request_refresh(self) -> None:
        self.state.dirty = True

    def jump_ports(self, read_one_key) -> JumpPorts:
        return JumpPorts(
            scan_viewport=self.scan_viewport,
            draw_label=self.draw_label,
            erase_label=self.erase_label,
            read_one_char=KeyPrompt(read_one_key, self.show_prompt, self.clear_prompt),
            move_cursor_to=self.move_cursor_to,
            report_status=self.report_status,
            request_refresh=self.request_refresh,
        )

    def run_jump(self, read_one_key) -> JumpResult | None:
        """Run one jump operation; ignored while another one is in flight."""
        if self.state.jump_active:
            return None
        self.state.jump_active = True
        try:
            result = JumpController(self.jump_ports(read_one_key), self.jump_config).run()
        finally:
            self.state.jump_active = False
            self.canvas.reset()
        logger.info("jump %s target=%r depth=%d", result.outcome.value, result.target, result.depth)
        return result


def build_state(source: str, path: Path, style: str, no_color: bool, wrap_text: bool) -> AppState:
    lines = split_source_lines(sanitize_terminal_text(source))
    term = shutil.get_terminal_size((80, 24))
    return AppState(
        current_path=path,
        lines=lines,
        styled_lines=styled_source_lines(lines, path, style, no_color),
        start=0,
        text_x=0,
        wrap_text=wrap_text,
        width=term.columns,
        usable=max(1, term.lines - 1),
    )


def run_pager(
    content: str,
    path: Path,
    style: str,
    no_color: bool,
    nopager: bool,
    theme_name: str | None = None,
    jump_config: JumpConfig | None = None,
    wrap_text: bool | None = None,
) -> None:
    """Initialize pager runtime state, wire subsystems, and run event loop."""
    if nopager or not os.isatty(sys.stdin.fileno()):
        rendered = content
        if not no_color and os.isatty(sys.stdout.fileno()):
            rendered = colorize_source(content, path, style)
        sys.stdout.write(rendered)
        return

    if wrap_text is None:
        wrap_text = load_wrap_text()
    state = build_state(content, path, style, no_color, wrap_text)
    stdin_fd = sys.stdin.fileno()
    terminal = TerminalController(stdin_fd, sys.stdout.fileno())
    session = PagerSession(
        state,
        resolve_theme(theme_name, no_color=no_color),
        jump_config if jump_config is not None else JumpConfig(),
        write=terminal.write,
    )
    logger.info("opened %s (%d lines)", path, len(state.lines))

    key_context = NormalKeyContext(
        state=state,
        visible_content_rows=session.visible_content_rows,
        move_cursor_lines=session.move_cursor_lines,
        move_cursor_columns=session.move_cursor_columns,
        move_cursor_to_line=session.move_cursor_to_line,
        start_jump=lambda: session.run_jump(lambda: read_key(stdin_fd)),
        toggle_wrap_mode=session.toggle_wrap_mode,
        toggle_help_panel=session.toggle_help_panel,
    )
    callbacks = RuntimeLoopCallbacks(
        render=session.render,
        relayout=session.relayout,
        handle_normal_key=lambda key: handle_normal_key(key, key_context),
    )
    run_main_loop(state, terminal, stdin_fd, callbacks)
