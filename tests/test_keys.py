"""Regression tests for raw-key decoding.

Covers escape-sequence tables, bare ESC timing, and control-key mapping.
These tests protect interactive input handling in raw terminal mode.
"""

from __future__ import annotations

import os
import time
import unittest
from unittest import mock

from kilo import keys
from kilo.keys import Char, EditorKey, ctrl_key, decode_escape, read_key


def _read_keys(data: bytes, count: int = 1) -> list[keys.Key]:
    read_fd, write_fd = os.pipe()
    try:
        os.write(write_fd, data)
        return [read_key(read_fd, timeout_ms=20) for _ in range(count)]
    finally:
        os.close(read_fd)
        os.close(write_fd)


class DecodeEscapeTests(unittest.TestCase):
    def test_arrow_letters(self) -> None:
        self.assertEqual(decode_escape(b"[A"), EditorKey.ARROW_UP)
        self.assertEqual(decode_escape(b"[B"), EditorKey.ARROW_DOWN)
        self.assertEqual(decode_escape(b"[C"), EditorKey.ARROW_RIGHT)
        self.assertEqual(decode_escape(b"[D"), EditorKey.ARROW_LEFT)

    def test_home_and_end_have_several_spellings(self) -> None:
        for seq in (b"[1~", b"[7~", b"[H", b"OH"):
            self.assertEqual(decode_escape(seq), EditorKey.HOME_KEY, seq)
        for seq in (b"[4~", b"[8~", b"[F", b"OF"):
            self.assertEqual(decode_escape(seq), EditorKey.END_KEY, seq)

    def test_tilde_sequences(self) -> None:
        self.assertEqual(decode_escape(b"[3~"), EditorKey.DEL_KEY)
        self.assertEqual(decode_escape(b"[5~"), EditorKey.PAGE_UP)
        self.assertEqual(decode_escape(b"[6~"), EditorKey.PAGE_DOWN)

    def test_unknown_or_partial_sequences_degrade_to_escape(self) -> None:
        for seq in (b"", b"[", b"[2~", b"[9~", b"[5", b"[5x", b"[Z", b"OA", b"xy"):
            self.assertEqual(decode_escape(seq), Char(0x1B), seq)


class ReadKeyTests(unittest.TestCase):
    def test_plain_bytes_are_chars(self) -> None:
        self.assertEqual(_read_keys(b"a"), [Char(ord("a"))])
        self.assertEqual(_read_keys(b"\r"), [Char(13)])

    def test_ctrl_q_is_quit_key(self) -> None:
        self.assertEqual(_read_keys(b"\x11"), [keys.QUIT_KEY])
        self.assertEqual(ctrl_key("q"), Char(0x11))

    def test_arrow_sequence_is_recognized(self) -> None:
        self.assertEqual(_read_keys(b"\x1b[A"), [EditorKey.ARROW_UP])

    def test_delete_and_home_sequences_are_recognized(self) -> None:
        self.assertEqual(_read_keys(b"\x1b[3~"), [EditorKey.DEL_KEY])
        self.assertEqual(_read_keys(b"\x1b[1~\x1b[7~", count=2), [EditorKey.HOME_KEY, EditorKey.HOME_KEY])

    def test_consecutive_sequences_decode_independently(self) -> None:
        self.assertEqual(
            _read_keys(b"\x1b[B\x1b[6~x", count=3),
            [EditorKey.ARROW_DOWN, EditorKey.PAGE_DOWN, Char(ord("x"))],
        )

    def test_single_escape_returns_without_second_keypress(self) -> None:
        started = time.monotonic()
        result = _read_keys(b"\x1b")
        elapsed = time.monotonic() - started

        self.assertEqual(result, [Char(0x1B)])
        self.assertLess(elapsed, 0.5)

    def test_truncated_digit_sequence_returns_escape(self) -> None:
        self.assertEqual(_read_keys(b"\x1b[5"), [Char(0x1B)])

    def test_closed_input_raises_eof(self) -> None:
        read_fd, write_fd = os.pipe()
        os.close(write_fd)
        try:
            with self.assertRaises(EOFError):
                read_key(read_fd)
        finally:
            os.close(read_fd)

    def test_interrupted_read_is_retried(self) -> None:
        read_fd, write_fd = os.pipe()
        real_read = os.read
        calls = []

        def flaky_read(fd: int, n: int) -> bytes:
            calls.append(fd)
            if len(calls) == 1:
                raise InterruptedError()
            return real_read(fd, n)

        try:
            os.write(write_fd, b"k")
            with mock.patch("kilo.terminal.os.read", side_effect=flaky_read):
                key = read_key(read_fd)
        finally:
            os.close(read_fd)
            os.close(write_fd)

        self.assertEqual(key, Char(ord("k")))
        self.assertEqual(len(calls), 2)


if __name__ == "__main__":
    unittest.main()
