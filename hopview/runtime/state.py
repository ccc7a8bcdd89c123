from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from ..source_pane.syntax import StyledLine


@dataclass
class AppState:
    current_path: Path
    lines: list[str]
    styled_lines: list[StyledLine]
    start: int
    text_x: int
    wrap_text: bool
    width: int = 80
    usable: int = 23
    cursor_line: int = 0
    cursor_col: int = 0
    show_help: bool = False
    dirty: bool = True
    skip_next_lf: bool = False
    count_buffer: str = ""
    prompt: str = ""
    status_message: str = ""
    status_message_until: float = 0.0
    jump_active: bool = False
    column_style_cache: dict[int, list[str]] = field(default_factory=dict)
