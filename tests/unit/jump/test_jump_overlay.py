from __future__ import annotations

import unittest

from hopview.jump import DEFAULT_LABELS, Occurrence, OverlayStore, assign_labels, restore_overlay


def _occ(idx: int, glyph: str = "x") -> Occurrence:
    return Occurrence(screen_row=idx, screen_col=0, line=idx, column=0, glyph=glyph)


class OverlayStoreTests(unittest.TestCase):
    def test_default_alphabet_is_lowercase_then_uppercase(self) -> None:
        self.assertEqual(len(DEFAULT_LABELS), 52)
        self.assertTrue(DEFAULT_LABELS.startswith("abc"))
        self.assertTrue(DEFAULT_LABELS.endswith("XYZ"))

    def test_assign_labels_round_robin_into_buckets(self) -> None:
        store = OverlayStore(3)
        drawn: list[tuple[int, int, str]] = []

        count = assign_labels([_occ(idx) for idx in range(7)], "abc", store, lambda r, c, label: drawn.append((r, c, label)))

        self.assertEqual(count, 7)
        self.assertEqual([label for _, _, label in drawn], list("abcabca"))
        self.assertEqual([occ.line for occ in store.bucket(0)], [0, 3, 6])
        self.assertEqual([occ.line for occ in store.bucket(2)], [2, 5])
        self.assertEqual(store.bucket_sizes(), [3, 2, 2])
        self.assertEqual(len(store), 7)

    def test_bucket_out_of_range_is_empty(self) -> None:
        store = OverlayStore(2)
        self.assertEqual(store.bucket(-1), [])
        self.assertEqual(store.bucket(2), [])

    def test_restore_writes_original_glyphs_once(self) -> None:
        store = OverlayStore(2)
        assign_labels([_occ(0, "p"), _occ(1, "Q"), _occ(2, "r")], "ab", store, lambda *_: None)
        erased: list[tuple[int, int, str]] = []

        restored = restore_overlay(store, lambda r, c, glyph: erased.append((r, c, glyph)))
        again = restore_overlay(store, lambda r, c, glyph: erased.append((r, c, glyph)))

        self.assertEqual(restored, 3)
        self.assertEqual(again, 0)
        self.assertEqual(sorted(erased), [(0, 0, "p"), (1, 0, "Q"), (2, 0, "r")])
        self.assertEqual(len(store), 0)
        self.assertEqual(store.bucket_sizes(), [0, 0])

    def test_restore_on_empty_store_is_noop(self) -> None:
        calls: list[object] = []
        self.assertEqual(restore_overlay(OverlayStore(4), lambda *args: calls.append(args)), 0)
        self.assertEqual(calls, [])

    def test_store_requires_a_slot(self) -> None:
        with self.assertRaises(ValueError):
            OverlayStore(0)


if __name__ == "__main__":
    unittest.main()
