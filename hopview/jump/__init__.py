"""Jump mode: label word-initial occurrences and move the cursor to one.

The package is host-agnostic; the pager wires it up through ``JumpPorts``.
"""

from .controller import (
    DEFAULT_MAX_DEPTH,
    JumpConfig,
    JumpController,
    JumpOutcome,
    JumpPorts,
    JumpResult,
    ONE_CANDIDATE_MESSAGE,
    STATUS_MESSAGES,
)
from .occurrences import Occurrence, VisibleRow, scan_occurrences
from .overlay import DEFAULT_LABELS, OverlayStore, assign_labels, restore_overlay
from .prompt import CharInput, CharKind, KeyPrompt, classify_key

__all__ = [
    "DEFAULT_LABELS",
    "DEFAULT_MAX_DEPTH",
    "CharInput",
    "CharKind",
    "JumpConfig",
    "JumpController",
    "JumpOutcome",
    "JumpPorts",
    "JumpResult",
    "ONE_CANDIDATE_MESSAGE",
    "KeyPrompt",
    "Occurrence",
    "OverlayStore",
    "STATUS_MESSAGES",
    "VisibleRow",
    "assign_labels",
    "classify_key",
    "restore_overlay",
    "scan_occurrences",
]
