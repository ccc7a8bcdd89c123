"""Tests for source loading, sanitization, and per-line styling.

Styled spans must reproduce each source line exactly so the viewport can
paint them cell by cell.
"""

import re
import tempfile
import unittest
from pathlib import Path

from pygments.token import Token

from hopview.source_pane import (
    colorize_source,
    column_styles,
    read_text,
    sanitize_terminal_text,
    split_source_lines,
    styled_source_lines,
)
from hopview.source_pane.syntax import token_sgr

ANSI_RE = re.compile(r"\x1b\[[0-9;?]*[ -/]*[@-~]")


class SourceLoadingTests(unittest.TestCase):
    def test_read_text_falls_back_to_latin1(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "notes.txt"
            path.write_bytes(b"caf\xe9\n")
            self.assertEqual(read_text(path), "café\n")

    def test_sanitize_terminal_text_escapes_control_bytes_but_keeps_common_whitespace(self) -> None:
        sanitized = sanitize_terminal_text("a\tb\nc\rd\x07e\x1bf")
        self.assertEqual(sanitized, "a\tb\nc\rd\\x07e\\x1bf")

    def test_split_source_lines(self) -> None:
        self.assertEqual(split_source_lines("a\r\nb\n"), ["a", "b"])
        self.assertEqual(split_source_lines("a\n\n"), ["a", ""])
        self.assertEqual(split_source_lines(""), [""])


class StyledLineTests(unittest.TestCase):
    def test_no_color_keeps_plain_spans(self) -> None:
        styled = styled_source_lines(["abc", "", "d"], Path("x.py"), no_color=True)
        self.assertEqual(styled, [[("abc", "")], [], [("d", "")]])

    def test_highlighted_spans_reproduce_each_line(self) -> None:
        lines = ["def foo(x):", "", "    return x  # done", ""]

        styled = styled_source_lines(lines, Path("demo.py"))

        self.assertEqual(len(styled), len(lines))
        self.assertEqual(["".join(text for text, _ in spans) for spans in styled], lines)
        self.assertTrue(any(sgr for spans in styled for _, sgr in spans))

    def test_unknown_extension_uses_plain_text_lexer(self) -> None:
        lines = ["Permission  is  hereby granted"]
        styled = styled_source_lines(lines, Path("LICENSE"))
        self.assertEqual("".join(text for text, _ in styled[0]), lines[0])

    def test_column_styles_expands_spans(self) -> None:
        self.assertEqual(column_styles([("ab", "X"), ("c", "")]), ["X", "X", ""])

    def test_token_sgr_uses_truecolor_and_tolerates_unknown_styles(self) -> None:
        sgr = token_sgr("monokai", Token.Keyword)
        self.assertTrue(sgr.startswith("\033["))
        self.assertIn("38;2;", sgr)
        self.assertEqual(token_sgr("no-such-style", Token.Keyword), sgr)

    def test_colorize_source_keeps_text(self) -> None:
        source = "print('hi')\n"
        rendered = colorize_source(source, Path("demo.py"))
        self.assertEqual(ANSI_RE.sub("", rendered), source)


if __name__ == "__main__":
    unittest.main()
