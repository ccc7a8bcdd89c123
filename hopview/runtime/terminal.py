"""Terminal control helpers for the TUI session.

Owns raw-mode lifecycle and alternate-screen switching, and writes frames.
"""

from __future__ import annotations

import contextlib
import os
import termios
import tty

ENTER_TUI_SEQUENCE = b"\x1b[?1049h\x1b[?25l"
EXIT_TUI_SEQUENCE = b"\x1b[?25h\x1b[?1049l"


class TerminalController:
    """Manage terminal mode transitions for one pager session."""

    def __init__(self, stdin_fd: int, stdout_fd: int) -> None:
        """Capture tty state and bind stdin/stdout file descriptors."""
        self.stdin_fd = stdin_fd
        self.stdout_fd = stdout_fd
        self._saved_tty_state = termios.tcgetattr(stdin_fd)
        self._tui_enabled = False

    def enable_tui_mode(self) -> None:
        """Enter raw alternate-screen mode with the hardware cursor hidden."""
        tty.setraw(self.stdin_fd, termios.TCSAFLUSH)
        os.write(self.stdout_fd, ENTER_TUI_SEQUENCE)
        self._tui_enabled = True

    def disable_tui_mode(self) -> None:
        """Show the cursor, leave the alternate screen, and restore tty state."""
        os.write(self.stdout_fd, EXIT_TUI_SEQUENCE)
        self._tui_enabled = False
        termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, self._saved_tty_state)

    @property
    def tui_enabled(self) -> bool:
        return self._tui_enabled

    def write(self, frame: str) -> None:
        data = frame.encode("utf-8", errors="replace")
        while data:
            written = os.write(self.stdout_fd, data)
            data = data[written:]

    @contextlib.contextmanager
    def raw_mode(self):
        """Context manager that brackets code with TUI enter/exit calls."""
        try:
            self.enable_tui_mode()
            yield
        finally:
            self.disable_tui_mode()
