"""Tests for raw key decoding from a byte stream."""

from __future__ import annotations

import os
import unittest

from lazycd import input as key_input
from lazycd.input import drain_keys, read_key


class ReadKeyTests(unittest.TestCase):
    def setUp(self) -> None:
        self.read_fd, self.write_fd = os.pipe()
        key_input._PENDING_BYTES.clear()

    def tearDown(self) -> None:
        os.close(self.read_fd)
        os.close(self.write_fd)
        key_input._PENDING_BYTES.clear()

    def _keys(self, data: bytes, count: int) -> list[str]:
        os.write(self.write_fd, data)
        return [read_key(self.read_fd, timeout_ms=50) for _ in range(count)]

    def test_plain_and_control_characters(self) -> None:
        self.assertEqual(
            self._keys(b"a\r\x7f\x03\x06\x12\t", 7),
            ["a", "ENTER", "BACKSPACE", "CTRL_C", "CTRL_F", "CTRL_R", "TAB"],
        )

    def test_multibyte_utf8_character(self) -> None:
        self.assertEqual(self._keys("é€".encode("utf-8"), 2), ["é", "€"])

    def test_arrow_and_navigation_sequences(self) -> None:
        data = b"\x1b[A\x1b[B\x1b[C\x1b[D\x1b[H\x1b[F\x1b[5~\x1b[6~\x1bOA"
        self.assertEqual(
            self._keys(data, 9),
            ["UP", "DOWN", "RIGHT", "LEFT", "HOME", "END", "PAGE_UP", "PAGE_DOWN", "UP"],
        )

    def test_modified_sequences(self) -> None:
        self.assertEqual(self._keys(b"\x1b[1;3A\x1b[1;5H\x1b[1;3B", 3), ["ALT_UP", "CTRL_HOME", "ALT_DOWN"])

    def test_alt_combinations(self) -> None:
        self.assertEqual(self._keys(b"\x1bj\x1bG\x1b\x08", 3), ["ALT_j", "ALT_G", "CTRL_ALT_H"])

    def test_lone_escape(self) -> None:
        self.assertEqual(self._keys(b"\x1b", 1), ["ESC"])

    def test_escape_followed_by_control_key_keeps_both(self) -> None:
        self.assertEqual(self._keys(b"\x1b\r", 2), ["ESC", "ENTER"])

    def test_unknown_sequence(self) -> None:
        self.assertEqual(self._keys(b"\x1b[99Z", 1), ["UNKNOWN"])

    def test_sgr_mouse_reports(self) -> None:
        data = b"\x1b[<0;5;3M\x1b[<0;5;3m\x1b[<32;6;4M\x1b[<2;1;1m\x1b[<64;2;2M\x1b[<65;2;2M"
        self.assertEqual(
            self._keys(data, 6),
            [
                "MOUSE_LEFT_DOWN:5:3",
                "MOUSE_LEFT_UP:5:3",
                "MOUSE_LEFT_DRAG:6:4",
                "MOUSE_RIGHT_UP:1:1",
                "MOUSE_WHEEL_UP:2:2",
                "MOUSE_WHEEL_DOWN:2:2",
            ],
        )

    def test_timeout_returns_empty_token(self) -> None:
        self.assertEqual(read_key(self.read_fd, timeout_ms=10), "")

    def test_drain_discards_waiting_input(self) -> None:
        os.write(self.write_fd, b"abc")

        self.assertEqual(drain_keys(self.read_fd), 3)
        self.assertEqual(read_key(self.read_fd, timeout_ms=10), "")


if __name__ == "__main__":
    unittest.main()
