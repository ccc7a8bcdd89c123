"""Input-layer public API for key decoding and normal-mode dispatch.

Exports are split between low-level terminal decoding (`read_key`) and the
key handler used by the runtime loop.
"""

from .reader import ESC_SEQUENCE_TIMEOUT_MS, _PENDING_BYTES, read_key
from .keys import (
    KeyComboBinding,
    KeyComboRegistry,
    NormalKeyContext,
    handle_normal_key,
    help_text,
)

__all__ = [
    "read_key",
    "_PENDING_BYTES",
    "ESC_SEQUENCE_TIMEOUT_MS",
    "KeyComboBinding",
    "KeyComboRegistry",
    "NormalKeyContext",
    "handle_normal_key",
    "help_text",
]
