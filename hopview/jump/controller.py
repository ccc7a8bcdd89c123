"""Jump-mode selection state machine.

Prompts for a target character, labels word-initial occurrences, reads a
label, and narrows recycled label buckets until one occurrence remains.
Every exit path restores the overlay before the result is returned.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from enum import Enum

from .occurrences import Occurrence
from .overlay import DEFAULT_LABELS, OverlayStore, assign_labels, restore_overlay
from .prompt import CharInput

logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 10
TARGET_PROMPT = "Head char: "
SELECT_PROMPT = "Select: "


class JumpOutcome(Enum):
    DONE = "done"
    CANCELLED = "cancelled"
    UNPRINTABLE = "unprintable"
    SPACE_REJECTED = "space_rejected"
    NO_MATCH = "no_match"
    INVALID_SELECTION = "invalid_selection"
    TOO_MANY_CANDIDATES = "too_many_candidates"


STATUS_MESSAGES: dict[JumpOutcome, str] = {
    JumpOutcome.CANCELLED: "Cancelled",
    JumpOutcome.UNPRINTABLE: "jump-mode: Unprintable character",
    JumpOutcome.SPACE_REJECTED: "jump-mode: Don't support jumping to 'space'",
    JumpOutcome.NO_MATCH: "jump-mode: No one found",
    JumpOutcome.INVALID_SELECTION: "jump-mode: No such position candidate",
    JumpOutcome.TOO_MANY_CANDIDATES: "jump-mode: Too many candidates, selection aborted",
}
ONE_CANDIDATE_MESSAGE = "jump-mode: One candidate, move to it directly"


@dataclass(frozen=True)
class JumpConfig:
    """Label alphabet and narrowing bound for one controller."""

    labels: str = DEFAULT_LABELS
    max_depth: int = DEFAULT_MAX_DEPTH

    def __post_init__(self) -> None:
        if not self.labels:
            raise ValueError("label alphabet must not be empty")
        if len(self.labels) < 2:
            raise ValueError("label alphabet needs at least two symbols")
        if len(set(self.labels)) != len(self.labels):
            raise ValueError(f"label alphabet has duplicate symbols: {self.labels!r}")
        if any(not (" " < ch <= "~") for ch in self.labels):
            raise ValueError("labels must be visible ASCII characters other than space")
        if isinstance(self.max_depth, bool) or not isinstance(self.max_depth, int) or self.max_depth < 1:
            raise ValueError("max_depth must be a positive integer")

    @classmethod
    def from_mapping(cls, data: Mapping[str, object]) -> JumpConfig:
        """Build a config from persisted values, ignoring invalid ones field by field."""
        labels = data.get("jump_labels")
        max_depth = data.get("jump_max_depth")
        config = cls()
        if isinstance(labels, str):
            try:
                config = cls(labels=labels, max_depth=config.max_depth)
            except ValueError:
                logger.warning("ignoring invalid jump_labels %r", labels)
        if isinstance(max_depth, int):
            try:
                config = cls(labels=config.labels, max_depth=max_depth)
            except ValueError:
                logger.warning("ignoring invalid jump_max_depth %r", max_depth)
        return config


@dataclass(frozen=True)
class JumpPorts:
    """Host operations the controller drives.

    ``move_cursor_to`` receives a 1-based column.
    """

    scan_viewport: Callable[[str], list[Occurrence]]
    draw_label: Callable[[int, int, str], None]
    erase_label: Callable[[int, int, str], None]
    read_one_char: Callable[[str], CharInput]
    move_cursor_to: Callable[[int, int], None]
    report_status: Callable[[str], None]
    request_refresh: Callable[[], None]


@dataclass(frozen=True)
class JumpResult:
    outcome: JumpOutcome
    target: str = ""
    line: int | None = None
    column: int | None = None
    depth: int = 0

    @property
    def moved(self) -> bool:
        return self.outcome is JumpOutcome.DONE


class JumpController:
    """Run one jump operation against ``ports``.

    A controller owns its overlay store; it is not meant to run concurrently
    with itself. ``run`` may be called again once the previous call returned.
    """

    def __init__(self, ports: JumpPorts, config: JumpConfig | None = None) -> None:
        self.ports = ports
        self.config = config if config is not None else JumpConfig()
        self._store = OverlayStore(len(self.config.labels))

    @property
    def overlay(self) -> OverlayStore:
        return self._store

    def run(self) -> JumpResult:
        try:
            return self._run()
        finally:
            # Empty after every normal exit; only an exception leaves labels here.
            self._restore()

    def _restore(self) -> None:
        restored = restore_overlay(self._store, self.ports.erase_label)
        if restored:
            logger.debug("restored %d overlay cells", restored)

    def _finish(self, outcome: JumpOutcome, target: str = "", depth: int = 0) -> JumpResult:
        self._restore()
        logger.debug("jump ended: %s (target=%r depth=%d)", outcome.value, target, depth)
        self.ports.report_status(STATUS_MESSAGES[outcome])
        self.ports.request_refresh()
        return JumpResult(outcome, target=target, depth=depth)

    def _jump(self, occurrence: Occurrence, target: str, depth: int) -> JumpResult:
        self._restore()
        logger.debug(
            "jumping to line %d column %d (depth=%d)",
            occurrence.line,
            occurrence.column,
            depth,
        )
        self.ports.move_cursor_to(occurrence.line, occurrence.column + 1)
        self.ports.request_refresh()
        return JumpResult(
            JumpOutcome.DONE,
            target=target,
            line=occurrence.line,
            column=occurrence.column,
            depth=depth,
        )

    def _run(self) -> JumpResult:
        labels = self.config.labels
        answer = self.ports.read_one_char(TARGET_PROMPT)
        if answer.is_cancel:
            return self._finish(JumpOutcome.CANCELLED)
        if not answer.is_printable:
            return self._finish(JumpOutcome.UNPRINTABLE)
        if answer.char == " ":
            return self._finish(JumpOutcome.SPACE_REJECTED)
        target = answer.char.lower()

        candidates = self.ports.scan_viewport(target)
        depth = 0
        while True:
            count = assign_labels(candidates, labels, self._store, self.ports.draw_label)
            logger.debug("labelled %d occurrences of %r at depth %d", count, target, depth)
            if count == 0:
                return self._finish(JumpOutcome.NO_MATCH, target, depth)
            if count == 1:
                if depth == 0:
                    self.ports.report_status(ONE_CANDIDATE_MESSAGE)
                return self._jump(self._store.bucket(0)[0], target, depth)

            choice = self.ports.read_one_char(SELECT_PROMPT)
            if choice.is_cancel:
                return self._finish(JumpOutcome.CANCELLED, target, depth)
            index = labels.find(choice.char) if choice.is_printable else -1
            if index < 0 or index >= count:
                return self._finish(JumpOutcome.INVALID_SELECTION, target, depth)

            bucket = self._store.bucket(index)
            if count <= len(labels):
                return self._jump(bucket[0], target, depth)
            if depth >= self.config.max_depth:
                return self._finish(JumpOutcome.TOO_MANY_CANDIDATES, target, depth)

            # Labels were recycled: relabel only the chosen bucket.
            candidates = bucket
            self._restore()
            depth += 1
