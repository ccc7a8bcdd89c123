"""Source loading, sanitization, and syntax highlighting.

Pygments provides both the whole-buffer ANSI rendering used by ``--nopager``
and per-line styled spans the interactive viewport paints cell by cell.
Terminal control bytes are neutralized before anything reaches the screen.
"""

from __future__ import annotations

import re
from pathlib import Path

from pygments import highlight
from pygments.formatters import TerminalFormatter
from pygments.lexer import Lexer
from pygments.lexers import TextLexer, get_lexer_for_filename
from pygments.style import StyleMeta
from pygments.styles import get_style_by_name
from pygments.token import Token
from pygments.util import ClassNotFound

DEFAULT_STYLE = "monokai"

TokenType = type(Token)

_CONTROL_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f-\x9f]")
_FORMATTERS: dict[str, TerminalFormatter] = {}
_STYLES: dict[str, StyleMeta] = {}
_INVALID_STYLES: set[str] = set()
_TOKEN_SGR: dict[tuple[str, TokenType], str] = {}

StyledSpan = tuple[str, str]
StyledLine = list[StyledSpan]


def read_text(path: Path) -> str:
    """Read text using tolerant encoding fallback order.

    Attempts UTF-8, UTF-8 with BOM, then latin-1; as a final fallback decodes
    raw bytes with UTF-8 replacement semantics.
    """
    for encoding in ("utf-8", "utf-8-sig", "latin-1"):
        try:
            return path.read_text(encoding=encoding)
        except UnicodeDecodeError:
            continue
    return path.read_bytes().decode("utf-8", errors="replace")


def sanitize_terminal_text(source: str) -> str:
    """Escape terminal control bytes to avoid side effects (bell, cursor moves, etc.)."""
    if _CONTROL_RE.search(source) is None:
        return source

    out: list[str] = []
    for ch in source:
        code = ord(ch)
        if ch in {"\n", "\r", "\t"}:
            out.append(ch)
            continue
        # C0 controls + DEL + C1 controls.
        if code < 32 or code == 127 or 0x80 <= code <= 0x9F:
            out.append(f"\\x{code:02x}")
            continue
        out.append(ch)
    return "".join(out)


def split_source_lines(source: str) -> list[str]:
    """Split ``source`` into logical lines without terminators.

    A trailing newline does not produce an extra empty line; an empty source
    still yields one empty line so the viewport always has a row to show.
    """
    lines = source.replace("\r\n", "\n").replace("\r", "\n").split("\n")
    if len(lines) > 1 and lines[-1] == "":
        lines.pop()
    return lines


def _normalize_style(style: str) -> str:
    if style in _STYLES:
        return style
    if style in _INVALID_STYLES:
        return DEFAULT_STYLE

    try:
        _STYLES[style] = get_style_by_name(style)
        return style
    except ClassNotFound:
        _INVALID_STYLES.add(style)
        return DEFAULT_STYLE


def _style_class(style: str) -> StyleMeta:
    style = _normalize_style(style)
    cached = _STYLES.get(style)
    if cached is None:
        cached = get_style_by_name(style)
        _STYLES[style] = cached
    return cached


def _lexer_for(path: Path, source: str) -> Lexer:
    # Keep leading/trailing blank lines so token lines match source lines.
    try:
        return get_lexer_for_filename(path.name, source, stripnl=False, ensurenl=False)
    except ClassNotFound:
        return TextLexer(stripnl=False, ensurenl=False)


def _formatter_for_style(style: str) -> TerminalFormatter:
    formatter = _FORMATTERS.get(style)
    if formatter is not None:
        return formatter
    formatter = TerminalFormatter(style=style)
    _FORMATTERS[style] = formatter
    return formatter


def colorize_source(source: str, path: Path, style: str = DEFAULT_STYLE) -> str:
    """Return ``source`` rendered with ANSI colors for non-interactive output."""
    style = _normalize_style(style)
    return highlight(source, _lexer_for(path, source), _formatter_for_style(style))


def token_sgr(style: str, token_type: TokenType) -> str:
    """Return the SGR escape for ``token_type`` under pygments ``style``.

    Colors use 24-bit foreground codes; tokens without styling map to ``""``.
    """
    style = _normalize_style(style)
    key = (style, token_type)
    cached = _TOKEN_SGR.get(key)
    if cached is not None:
        return cached

    token_style = _style_class(style).style_for_token(token_type)
    params: list[str] = []
    if token_style.get("bold"):
        params.append("1")
    if token_style.get("italic"):
        params.append("3")
    if token_style.get("underline"):
        params.append("4")
    color = token_style.get("color")
    if color and len(color) == 6:
        red, green, blue = (int(color[idx : idx + 2], 16) for idx in (0, 2, 4))
        params.append(f"38;2;{red};{green};{blue}")
    sgr = f"\033[{';'.join(params)}m" if params else ""
    _TOKEN_SGR[key] = sgr
    return sgr


def styled_source_lines(
    lines: list[str],
    path: Path,
    style: str = DEFAULT_STYLE,
    no_color: bool = False,
) -> list[StyledLine]:
    """Tokenize ``lines`` and return one list of ``(text, sgr)`` spans per line."""
    if no_color:
        return [[(line, "")] if line else [] for line in lines]

    source = "\n".join(lines)
    styled: list[StyledLine] = [[]]
    for token_type, value in _lexer_for(path, source).get_tokens(source):
        sgr = token_sgr(style, token_type)
        parts = value.split("\n")
        for idx, part in enumerate(parts):
            if idx > 0:
                styled.append([])
            if part:
                styled[-1].append((part, sgr))

    if len(styled) < len(lines):
        styled.extend([] for _ in range(len(lines) - len(styled)))
    return styled[: len(lines)]


def column_styles(spans: StyledLine) -> list[str]:
    """Expand spans into one SGR string per character column."""
    out: list[str] = []
    for text, sgr in spans:
        out.extend([sgr] * len(text))
    return out
