"""Terminal control helpers for the editor session.

Owns raw-mode lifecycle, screen-size discovery, signal-safe byte reads, and
whole-frame writes. This is the only module that touches terminal attributes.
"""

from __future__ import annotations

import contextlib
import logging
import os
import re
import select
import sys
import termios
import tty

logger = logging.getLogger(__name__)

CLEAR_SCREEN = b"\x1b[2J\x1b[H"
CURSOR_TO_BOTTOM_RIGHT = b"\x1b[999C\x1b[999B"
CURSOR_POSITION_QUERY = b"\x1b[6n"
CURSOR_REPORT_TIMEOUT_SECONDS = 1.0
CURSOR_REPORT_MAX_BYTES = 32

_CURSOR_REPORT_RE = re.compile(rb"\x1b\[(\d+);(\d+)R")


def wait_readable(fd: int, timeout: float | None) -> bool:
    """Wait until ``fd`` has input; ``timeout=None`` blocks. Signals are retried."""
    while True:
        try:
            ready, _, _ = select.select([fd], [], [], timeout)
        except InterruptedError:
            continue
        return bool(ready)


def read_byte(fd: int) -> bytes:
    """Read one raw byte from ``fd``, retrying reads interrupted by a signal."""
    while True:
        try:
            return os.read(fd, 1)
        except InterruptedError:
            continue


class TerminalSizeError(RuntimeError):
    """Raised when neither the size ioctl nor the cursor probe works."""


def parse_cursor_position_report(data: bytes) -> tuple[int, int]:
    """Parse an ``ESC [ rows ; cols R`` reply into ``(rows, cols)``."""
    match = _CURSOR_REPORT_RE.fullmatch(data)
    if match is None:
        raise TerminalSizeError(f"malformed cursor position report: {data!r}")
    rows, cols = int(match.group(1)), int(match.group(2))
    if rows <= 0 or cols <= 0:
        raise TerminalSizeError(f"empty cursor position report: {data!r}")
    return rows, cols


class TerminalController:
    """Manage raw mode and byte I/O for one terminal."""

    def __init__(self, stdin_fd: int, stdout_fd: int) -> None:
        self.stdin_fd = stdin_fd
        self.stdout_fd = stdout_fd
        self._saved_tty_state = termios.tcgetattr(stdin_fd)

    def enable_raw_mode(self) -> None:
        tty.setraw(self.stdin_fd, termios.TCSAFLUSH)
        logger.debug("raw mode enabled on fd %d", self.stdin_fd)

    def disable_raw_mode(self) -> None:
        """Restore the saved tty attributes.

        A failure is reported on stderr and in the log but never raised, so
        the process can still exit.
        """
        try:
            termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, self._saved_tty_state)
        except (termios.error, OSError) as exc:
            logger.error("unable to restore canonical mode: %s", exc)
            print(f"Unable to restore canonical mode: {exc}", file=sys.stderr)
            return
        logger.debug("raw mode disabled on fd %d", self.stdin_fd)

    @contextlib.contextmanager
    def raw_mode(self):
        """Context manager that keeps the terminal raw for its body."""
        try:
            self.enable_raw_mode()
            yield self
        finally:
            self.disable_raw_mode()

    def write(self, data: bytes) -> None:
        """Write ``data`` fully, retrying partial writes."""
        view = memoryview(data)
        while view:
            try:
                written = os.write(self.stdout_fd, view)
            except InterruptedError:
                continue
            view = view[written:]

    def clear_screen(self) -> None:
        self.write(CLEAR_SCREEN)

    def window_size(self) -> tuple[int, int]:
        """Return ``(rows, cols)`` of the terminal.

        Uses the size ioctl first and falls back to moving the cursor to the
        bottom-right corner and asking the terminal where it ended up.
        """
        try:
            size = os.get_terminal_size(self.stdout_fd)
        except OSError as exc:
            logger.debug("size ioctl failed: %s", exc)
        else:
            if size.lines > 0 and size.columns > 0:
                logger.debug("window size from ioctl: %dx%d", size.lines, size.columns)
                return size.lines, size.columns

        rows, cols = self._probe_cursor_position()
        logger.debug("window size from cursor probe: %dx%d", rows, cols)
        return rows, cols

    def _probe_cursor_position(self) -> tuple[int, int]:
        try:
            self.write(CURSOR_TO_BOTTOM_RIGHT + CURSOR_POSITION_QUERY)
            reply = self._read_cursor_report()
        except OSError as exc:
            raise TerminalSizeError(f"cursor position probe failed: {exc}") from exc
        return parse_cursor_position_report(reply)

    def _read_cursor_report(self) -> bytes:
        reply = b""
        while len(reply) < CURSOR_REPORT_MAX_BYTES:
            if not wait_readable(self.stdin_fd, CURSOR_REPORT_TIMEOUT_SECONDS):
                break
            ch = read_byte(self.stdin_fd)
            if not ch:
                break
            reply += ch
            if ch == b"R":
                break
        return reply
