"""Label assignment and overlay bookkeeping for jump mode.

Occurrences live in a flat arena; each label owns a bucket of arena indices
in scan order. Restoring walks the arena once and empties it, so a second
restore is a no-op instead of replaying stale glyphs.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable

from .occurrences import Occurrence

DEFAULT_LABELS = "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ"

DrawLabel = Callable[[int, int, str], None]
EraseLabel = Callable[[int, int, str], None]


class OverlayStore:
    """Occurrences currently shown on screen, grouped by label index."""

    def __init__(self, size: int) -> None:
        if size <= 0:
            raise ValueError("overlay store needs at least one label slot")
        self.size = size
        self._records: list[Occurrence] = []
        self._buckets: list[list[int]] = [[] for _ in range(size)]

    def __len__(self) -> int:
        return len(self._records)

    def add(self, label_index: int, occurrence: Occurrence) -> None:
        self._buckets[label_index].append(len(self._records))
        self._records.append(occurrence)

    def bucket(self, label_index: int) -> list[Occurrence]:
        """Return occurrences displayed under ``label_index`` in scan order."""
        if not 0 <= label_index < self.size:
            return []
        return [self._records[idx] for idx in self._buckets[label_index]]

    def bucket_sizes(self) -> list[int]:
        return [len(bucket) for bucket in self._buckets]

    def records(self) -> list[Occurrence]:
        return list(self._records)

    def clear(self) -> None:
        self._records.clear()
        for bucket in self._buckets:
            bucket.clear()


def assign_labels(
    occurrences: Iterable[Occurrence],
    labels: str,
    store: OverlayStore,
    draw_label: DrawLabel,
) -> int:
    """Label occurrences round-robin and record them in ``store``.

    The i-th occurrence is drawn with ``labels[i % len(labels)]`` and appended
    to the bucket with that index. Returns how many occurrences were labelled.
    """
    count = 0
    for occurrence in occurrences:
        label_index = count % len(labels)
        draw_label(occurrence.screen_row, occurrence.screen_col, labels[label_index])
        store.add(label_index, occurrence)
        count += 1
    return count


def restore_overlay(store: OverlayStore, erase_label: EraseLabel) -> int:
    """Write every recorded glyph back and empty ``store``.

    Returns the number of restored cells; ``0`` for an empty store.
    """
    records = store.records()
    store.clear()
    for occurrence in records:
        erase_label(occurrence.screen_row, occurrence.screen_col, occurrence.glyph)
    return len(records)
