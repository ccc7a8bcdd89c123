"""Main interactive event loop for the terminal UI.

Coordinates resize bookkeeping, status expiry, rendering, and key dispatch.
Feature logic lives in callbacks.
"""

from __future__ import annotations

import shutil
import time
from collections.abc import Callable
from dataclasses import dataclass

from ..input import read_key
from .state import AppState
from .terminal import TerminalController

KEY_POLL_MS = 120


@dataclass(frozen=True)
class RuntimeLoopCallbacks:
    """Injected operations used by ``run_main_loop``."""

    render: Callable[[], None]
    relayout: Callable[[int, int], None]
    handle_normal_key: Callable[[str], bool]


def normalize_enter(state: AppState, key: str) -> str | None:
    """Fold CR/LF pairs into one ``ENTER``; ``None`` means drop the key."""
    if state.skip_next_lf and key == "ENTER_LF":
        state.skip_next_lf = False
        return None
    if key == "ENTER_CR":
        state.skip_next_lf = True
        return "ENTER"
    state.skip_next_lf = False
    if key == "ENTER_LF":
        return "ENTER"
    return key


def run_main_loop(
    state: AppState,
    terminal: TerminalController,
    stdin_fd: int,
    callbacks: RuntimeLoopCallbacks,
) -> None:
    """Run the interactive loop until a quit action occurs."""
    ops = callbacks
    with terminal.raw_mode():
        while True:
            term = shutil.get_terminal_size((80, 24))
            now = time.monotonic()
            if state.status_message and now >= state.status_message_until:
                state.status_message = ""
                state.status_message_until = 0.0
                state.dirty = True
            usable = max(1, term.lines - 1)
            if term.columns != state.width or usable != state.usable:
                ops.relayout(term.columns, usable)
                state.dirty = True

            if state.dirty:
                ops.render()
                state.dirty = False

            try:
                key = read_key(stdin_fd, timeout_ms=KEY_POLL_MS)
            except KeyboardInterrupt:
                continue
            if key == "":
                continue
            normalized = normalize_enter(state, key)
            if normalized is None:
                continue
            if ops.handle_normal_key(normalized):
                break
