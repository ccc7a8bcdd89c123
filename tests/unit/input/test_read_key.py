"""Regression tests for raw-key decoding.

Covers ESC timing, navigation sequences, control tokens and UTF-8 input.
"""

import os
import time
import unittest

from hopview import input as input_mod


class ReadKeyRegressionTests(unittest.TestCase):
    def setUp(self) -> None:
        input_mod._PENDING_BYTES.clear()

    def tearDown(self) -> None:
        input_mod._PENDING_BYTES.clear()

    def _read_all(self, payload: bytes, count: int) -> list[str]:
        read_fd, write_fd = os.pipe()
        try:
            os.write(write_fd, payload)
            return [input_mod.read_key(read_fd, timeout_ms=20) for _ in range(count)]
        finally:
            os.close(read_fd)
            os.close(write_fd)

    def test_single_escape_returns_esc_without_second_keypress(self) -> None:
        read_fd, write_fd = os.pipe()
        try:
            os.write(write_fd, b"\x1b")
            started = time.monotonic()
            key = input_mod.read_key(read_fd, timeout_ms=20)
            elapsed = time.monotonic() - started
        finally:
            os.close(read_fd)
            os.close(write_fd)

        self.assertEqual(key, "ESC")
        self.assertLess(elapsed, 0.2)

    def test_escape_does_not_swallow_following_printable_key(self) -> None:
        self.assertEqual(self._read_all(b"\x1ba", 2), ["ESC", "a"])

    def test_arrow_and_paging_sequences(self) -> None:
        self.assertEqual(
            self._read_all(b"\x1b[A\x1b[D\x1b[5~\x1b[6~\x1b[H\x1b[F", 6),
            ["UP", "LEFT", "PAGE_UP", "PAGE_DOWN", "HOME", "END"],
        )

    def test_control_tokens(self) -> None:
        self.assertEqual(
            self._read_all(b"\x03\x06\x07\t\r\n", 6),
            ["CTRL_C", "CTRL_F", "CTRL_G", "TAB", "ENTER_CR", "ENTER_LF"],
        )

    def test_multibyte_utf8_character_is_one_key(self) -> None:
        self.assertEqual(self._read_all("é漢".encode("utf-8"), 2), ["é", "漢"])

    def test_timeout_returns_empty_string(self) -> None:
        read_fd, write_fd = os.pipe()
        try:
            self.assertEqual(input_mod.read_key(read_fd, timeout_ms=10), "")
        finally:
            os.close(read_fd)
            os.close(write_fd)


if __name__ == "__main__":
    unittest.main()
