"""Normal-mode keyboard dispatch for the pager."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from ..runtime.state import AppState

MAX_COUNT_PREFIX = 10_000


@dataclass(frozen=True)
class KeyComboBinding:
    """Mapping from one or more key tokens to a single action callback."""

    combos: tuple[str, ...]
    handler: Callable[[], bool | None]
    description: str = ""


class KeyComboRegistry:
    """Small key-dispatch table; later registrations win."""

    def __init__(self) -> None:
        self._handlers: dict[str, Callable[[], bool | None]] = {}
        self._bindings: list[KeyComboBinding] = []

    def register_bindings(self, *bindings: KeyComboBinding) -> KeyComboRegistry:
        for binding in bindings:
            for combo in binding.combos:
                self._handlers[combo] = binding.handler
            self._bindings.append(binding)
        return self

    def bindings(self) -> tuple[KeyComboBinding, ...]:
        return tuple(self._bindings)

    def dispatch(self, key: str) -> bool | None:
        """Invoke the handler bound to ``key``; ``None`` when nothing is bound."""
        handler = self._handlers.get(key)
        if handler is None:
            return None
        return handler()


@dataclass(frozen=True)
class NormalKeyContext:
    """State and bound operations required for normal-mode key handling."""

    state: AppState
    visible_content_rows: Callable[[], int]
    move_cursor_lines: Callable[[int], None]
    move_cursor_columns: Callable[[int], None]
    move_cursor_to_line: Callable[[int], None]
    start_jump: Callable[[], None]
    toggle_wrap_mode: Callable[[], None]
    toggle_help_panel: Callable[[], None]


def handle_normal_key(key: str, context: NormalKeyContext) -> bool:
    """Handle one normal-mode key and return ``True`` when the app should quit."""
    state = context.state

    if key.isdigit() and not (key == "0" and not state.count_buffer):
        if len(state.count_buffer) < len(str(MAX_COUNT_PREFIX)):
            state.count_buffer += key
        return False

    count = int(state.count_buffer) if state.count_buffer else None
    state.count_buffer = ""
    steps = 1 if count is None else max(1, min(MAX_COUNT_PREFIX, count))

    def quit_action() -> bool:
        return True

    def move_lines(direction: int) -> Callable[[], bool]:
        def action() -> bool:
            context.move_cursor_lines(direction * steps)
            return False

        return action

    def move_columns(direction: int) -> Callable[[], bool]:
        def action() -> bool:
            context.move_cursor_columns(direction * steps)
            return False

        return action

    def page(direction: int) -> Callable[[], bool]:
        def action() -> bool:
            context.move_cursor_lines(direction * steps * max(1, context.visible_content_rows() - 1))
            return False

        return action

    def goto_top() -> bool:
        context.move_cursor_to_line(0 if count is None else count - 1)
        return False

    def goto_bottom() -> bool:
        target = len(state.lines) - 1 if count is None else count - 1
        context.move_cursor_to_line(target)
        return False

    def line_start() -> bool:
        context.move_cursor_columns(-state.cursor_col)
        return False

    def line_end() -> bool:
        line_len = len(state.lines[state.cursor_line]) if state.lines else 0
        context.move_cursor_columns(max(0, line_len - 1) - state.cursor_col)
        return False

    def start_jump() -> bool:
        context.start_jump()
        return False

    def toggle_wrap() -> bool:
        context.toggle_wrap_mode()
        return False

    def toggle_help() -> bool:
        context.toggle_help_panel()
        return False

    registry = normal_key_registry(
        quit_action=quit_action,
        move_down=move_lines(1),
        move_up=move_lines(-1),
        move_left=move_columns(-1),
        move_right=move_columns(1),
        page_down=page(1),
        page_up=page(-1),
        goto_top=goto_top,
        goto_bottom=goto_bottom,
        line_start=line_start,
        line_end=line_end,
        start_jump=start_jump,
        toggle_wrap=toggle_wrap,
        toggle_help=toggle_help,
    )
    return bool(registry.dispatch(key))


def normal_key_registry(
    *,
    quit_action: Callable[[], bool | None],
    move_down: Callable[[], bool | None],
    move_up: Callable[[], bool | None],
    move_left: Callable[[], bool | None],
    move_right: Callable[[], bool | None],
    page_down: Callable[[], bool | None],
    page_up: Callable[[], bool | None],
    goto_top: Callable[[], bool | None],
    goto_bottom: Callable[[], bool | None],
    line_start: Callable[[], bool | None],
    line_end: Callable[[], bool | None],
    start_jump: Callable[[], bool | None],
    toggle_wrap: Callable[[], bool | None],
    toggle_help: Callable[[], bool | None],
) -> KeyComboRegistry:
    """Build the normal-mode binding table; also the source of the help row."""
    return KeyComboRegistry().register_bindings(
        KeyComboBinding(("q", "Q"), quit_action, "q quit"),
        KeyComboBinding(("f", "CTRL_F"), start_jump, "f jump"),
        KeyComboBinding(("j", "DOWN", "ENTER"), move_down, "j/k line"),
        KeyComboBinding(("k", "UP"), move_up),
        KeyComboBinding(("h", "LEFT"), move_left, "h/l column"),
        KeyComboBinding(("l", "RIGHT"), move_right),
        KeyComboBinding(("PAGE_DOWN", " ", "CTRL_D"), page_down, "space/PgDn page"),
        KeyComboBinding(("PAGE_UP", "b", "CTRL_U"), page_up),
        KeyComboBinding(("g", "HOME"), goto_top, "g/G top/bottom"),
        KeyComboBinding(("G", "END"), goto_bottom),
        KeyComboBinding(("0",), line_start),
        KeyComboBinding(("$",), line_end),
        KeyComboBinding(("w",), toggle_wrap, "w wrap"),
        KeyComboBinding(("?", "CTRL_QUESTION"), toggle_help, "? help"),
    )


def help_text() -> str:
    """Return the one-line key summary shown by the help row."""
    noop: Callable[[], bool | None] = lambda: None
    registry = normal_key_registry(
        quit_action=noop,
        move_down=noop,
        move_up=noop,
        move_left=noop,
        move_right=noop,
        page_down=noop,
        page_up=noop,
        goto_top=noop,
        goto_bottom=noop,
        line_start=noop,
        line_end=noop,
        start_jump=noop,
        toggle_wrap=noop,
        toggle_help=noop,
    )
    return "  ".join(binding.description for binding in registry.bindings() if binding.description)
