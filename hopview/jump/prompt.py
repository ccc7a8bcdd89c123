"""Single-key prompt used by jump mode.

Classifies one decoded key token as cancel, printable, or unprintable.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

CANCEL_KEYS = frozenset({"ESC", "CTRL_C", "CTRL_G"})


class CharKind(Enum):
    CANCEL = "cancel"
    PRINTABLE = "printable"
    UNPRINTABLE = "unprintable"


@dataclass(frozen=True)
class CharInput:
    """Result of reading one key at a prompt."""

    kind: CharKind
    char: str = ""

    @classmethod
    def cancel(cls) -> CharInput:
        return cls(CharKind.CANCEL)

    @classmethod
    def printable(cls, char: str) -> CharInput:
        return cls(CharKind.PRINTABLE, char)

    @classmethod
    def unprintable(cls) -> CharInput:
        return cls(CharKind.UNPRINTABLE)

    @property
    def is_cancel(self) -> bool:
        return self.kind is CharKind.CANCEL

    @property
    def is_printable(self) -> bool:
        return self.kind is CharKind.PRINTABLE


def classify_key(key: str) -> CharInput:
    """Map a key token from ``read_key`` onto a prompt result.

    Only visible ASCII (space through ``~``) is printable; named tokens,
    control bytes and multi-byte characters are unprintable.
    """
    if key in CANCEL_KEYS:
        return CharInput.cancel()
    if len(key) == 1 and " " <= key <= "~":
        return CharInput.printable(key)
    return CharInput.unprintable()


class KeyPrompt:
    """Blocking one-key prompt bound to host display callbacks."""

    def __init__(
        self,
        read_key: Callable[[], str],
        show_prompt: Callable[[str], None],
        clear_prompt: Callable[[], None],
    ) -> None:
        self._read_key = read_key
        self._show_prompt = show_prompt
        self._clear_prompt = clear_prompt

    def __call__(self, message: str) -> CharInput:
        """Show ``message``, wait for one key, and classify it."""
        self._show_prompt(message)
        try:
            key = self._read_key()
        finally:
            self._clear_prompt()
        if key == "":
            # End of input.
            return CharInput.cancel()
        return classify_key(key)
