"""Low-level terminal input decoding.

Reads raw bytes from the terminal and translates them into logical keys.
Escape sequences are decoded through one lookup table; anything partial or
unknown degrades to a plain ESC character.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Union

from .terminal import read_byte, wait_readable

logger = logging.getLogger(__name__)

ESC = 0x1B
ESC_SEQUENCE_TIMEOUT_MS = 25


class EditorKey(enum.Enum):
    ARROW_LEFT = "ARROW_LEFT"
    ARROW_RIGHT = "ARROW_RIGHT"
    ARROW_UP = "ARROW_UP"
    ARROW_DOWN = "ARROW_DOWN"
    DEL_KEY = "DEL_KEY"
    HOME_KEY = "HOME_KEY"
    END_KEY = "END_KEY"
    PAGE_UP = "PAGE_UP"
    PAGE_DOWN = "PAGE_DOWN"


@dataclass(frozen=True)
class Char:
    """A single input byte that is not part of a recognized key sequence."""

    byte: int


Key = Union[EditorKey, Char]

ESC_CHAR = Char(ESC)

# ESC [ <digit> ~
_TILDE_SEQUENCES: dict[bytes, EditorKey] = {
    b"1": EditorKey.HOME_KEY,
    b"3": EditorKey.DEL_KEY,
    b"4": EditorKey.END_KEY,
    b"5": EditorKey.PAGE_UP,
    b"6": EditorKey.PAGE_DOWN,
    b"7": EditorKey.HOME_KEY,
    b"8": EditorKey.END_KEY,
}

# ESC [ <letter>
_CSI_SEQUENCES: dict[bytes, EditorKey] = {
    b"A": EditorKey.ARROW_UP,
    b"B": EditorKey.ARROW_DOWN,
    b"C": EditorKey.ARROW_RIGHT,
    b"D": EditorKey.ARROW_LEFT,
    b"H": EditorKey.HOME_KEY,
    b"F": EditorKey.END_KEY,
}

# ESC O <letter>
_SS3_SEQUENCES: dict[bytes, EditorKey] = {
    b"H": EditorKey.HOME_KEY,
    b"F": EditorKey.END_KEY,
}


def ctrl_key(ch: str) -> Char:
    """Return the key produced by holding Ctrl while typing ``ch``."""
    return Char(ord(ch) & 0x1F)


QUIT_KEY = ctrl_key("q")


def decode_escape(seq: bytes) -> Key:
    """Map the bytes that followed an ESC byte to a logical key.

    ``seq`` holds at most three bytes. Short, unknown, or malformed
    sequences return ``Char(0x1B)`` so a bare Escape press stays usable.
    """
    if len(seq) < 2:
        return ESC_CHAR
    introducer, second = seq[0:1], seq[1:2]
    if introducer == b"[":
        if second.isdigit():
            if seq[2:3] != b"~":
                return ESC_CHAR
            return _TILDE_SEQUENCES.get(second, ESC_CHAR)
        return _CSI_SEQUENCES.get(second, ESC_CHAR)
    if introducer == b"O":
        return _SS3_SEQUENCES.get(second, ESC_CHAR)
    return ESC_CHAR


def _read_ready_byte(fd: int, timeout_ms: int) -> bytes | None:
    if not wait_readable(fd, max(0.0, timeout_ms / 1000.0)):
        return None
    ch = read_byte(fd)
    if not ch:
        return None
    return ch


def read_key(fd: int, timeout_ms: int = ESC_SEQUENCE_TIMEOUT_MS) -> Key:
    """Block until one key is available on ``fd`` and return it.

    ``timeout_ms`` bounds the wait for each byte following an ESC.
    Raises ``EOFError`` when the input stream is closed.
    """
    wait_readable(fd, None)
    ch = read_byte(fd)
    if not ch:
        raise EOFError("terminal input closed")
    if ch[0] != ESC:
        return Char(ch[0])

    seq = b""
    while len(seq) < 2:
        nxt = _read_ready_byte(fd, timeout_ms)
        if nxt is None:
            return ESC_CHAR
        seq += nxt
    if seq[0:1] == b"[" and seq[1:2].isdigit():
        nxt = _read_ready_byte(fd, timeout_ms)
        if nxt is None:
            return ESC_CHAR
        seq += nxt

    key = decode_escape(seq)
    if key == ESC_CHAR:
        logger.debug("unrecognized escape sequence: %r", seq)
    return key
