"""Source-pane building blocks: text loading, highlighting, layout, overlay cells."""

from .canvas import OverlayCanvas
from .syntax import (
    DEFAULT_STYLE,
    colorize_source,
    column_styles,
    read_text,
    sanitize_terminal_text,
    split_source_lines,
    styled_source_lines,
)
from .viewport import Viewport, line_cells

__all__ = [
    "DEFAULT_STYLE",
    "OverlayCanvas",
    "Viewport",
    "colorize_source",
    "column_styles",
    "line_cells",
    "read_text",
    "sanitize_terminal_text",
    "split_source_lines",
    "styled_source_lines",
]
