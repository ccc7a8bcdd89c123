from __future__ import annotations

from pathlib import Path
import unittest
from unittest import mock

from hopview.input import KeyComboBinding, KeyComboRegistry, NormalKeyContext, handle_normal_key, help_text
from hopview.runtime.state import AppState


def _make_state(lines: list[str] | None = None) -> AppState:
    lines = lines if lines is not None else [f"line {idx}" for idx in range(100)]
    return AppState(
        current_path=Path("/tmp/demo.txt"),
        lines=lines,
        styled_lines=[[] for _ in lines],
        start=0,
        text_x=0,
        wrap_text=False,
    )


def _make_context(state: AppState) -> NormalKeyContext:
    return NormalKeyContext(
        state=state,
        visible_content_rows=mock.Mock(return_value=20),
        move_cursor_lines=mock.Mock(),
        move_cursor_columns=mock.Mock(),
        move_cursor_to_line=mock.Mock(),
        start_jump=mock.Mock(),
        toggle_wrap_mode=mock.Mock(),
        toggle_help_panel=mock.Mock(),
    )


class KeyRegistryTests(unittest.TestCase):
    def test_dispatch_returns_none_for_unbound_keys(self) -> None:
        registry = KeyComboRegistry().register_bindings(KeyComboBinding(("x", "y"), lambda: True))
        self.assertTrue(registry.dispatch("y"))
        self.assertIsNone(registry.dispatch("z"))


class NormalKeyTests(unittest.TestCase):
    def test_quit(self) -> None:
        state = _make_state()
        self.assertTrue(handle_normal_key("q", _make_context(state)))

    def test_f_and_ctrl_f_start_jump_mode(self) -> None:
        for key in ("f", "CTRL_F"):
            with self.subTest(key=key):
                context = _make_context(_make_state())
                self.assertFalse(handle_normal_key(key, context))
                context.start_jump.assert_called_once_with()

    def test_count_prefix_multiplies_line_moves(self) -> None:
        state = _make_state()
        context = _make_context(state)

        handle_normal_key("1", context)
        handle_normal_key("2", context)
        handle_normal_key("j", context)

        context.move_cursor_lines.assert_called_once_with(12)
        self.assertEqual(state.count_buffer, "")

    def test_zero_without_count_goes_to_line_start(self) -> None:
        state = _make_state()
        state.cursor_col = 4
        context = _make_context(state)

        handle_normal_key("0", context)

        context.move_cursor_columns.assert_called_once_with(-4)

    def test_page_down_moves_by_visible_rows(self) -> None:
        context = _make_context(_make_state())
        handle_normal_key("PAGE_DOWN", context)
        context.move_cursor_lines.assert_called_once_with(19)

    def test_goto_bottom_and_counted_goto(self) -> None:
        state = _make_state()
        context = _make_context(state)

        handle_normal_key("G", context)
        handle_normal_key("7", context)
        handle_normal_key("g", context)

        self.assertEqual(context.move_cursor_to_line.call_args_list, [mock.call(99), mock.call(6)])

    def test_wrap_and_help_toggles(self) -> None:
        context = _make_context(_make_state())
        handle_normal_key("w", context)
        handle_normal_key("?", context)
        context.toggle_wrap_mode.assert_called_once_with()
        context.toggle_help_panel.assert_called_once_with()

    def test_unbound_key_is_ignored(self) -> None:
        context = _make_context(_make_state())
        self.assertFalse(handle_normal_key("z", context))

    def test_help_text_lists_jump_binding(self) -> None:
        self.assertIn("f jump", help_text())
        self.assertIn("q quit", help_text())


if __name__ == "__main__":
    unittest.main()
