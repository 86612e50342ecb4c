"""Frame composition for the editor screen.

Builds one complete ANSI frame (text rows, status bar, message bar, cursor
placement) as a single string and writes it with one terminal write.
"""

from __future__ import annotations

from typing import Protocol

from . import __version__
from .state import EditorState
from .viewport import scroll

HIDE_CURSOR = "\x1b[?25l"
SHOW_CURSOR = "\x1b[?25h"
CURSOR_HOME = "\x1b[H"
CLEAR_LINE = "\x1b[K"
REVERSE_VIDEO = "\x1b[7m"
RESET_STYLE = "\x1b[m"

WELCOME_MESSAGE = f"Kilo editor -- version {__version__}"
NO_NAME = "[No Name]"
FILENAME_STATUS_CHARS = 20


class FrameWriter(Protocol):
    def write(self, data: bytes) -> None: ...


def _welcome_line(screencols: int) -> str:
    welcome = WELCOME_MESSAGE[:screencols]
    padding = (screencols - len(welcome)) // 2
    out: list[str] = []
    if padding > 0:
        out.append("~")
        padding -= 1
    out.append(" " * padding)
    out.append(welcome)
    return "".join(out)


def draw_rows(state: EditorState) -> str:
    """Render every visible text row, each followed by clear-to-end-of-line."""
    document = state.document
    out: list[str] = []
    for y in range(state.screenrows):
        filerow = y + state.rowoff
        row = document.row(filerow)
        if row is None:
            if len(document) == 0 and y == state.screenrows // 3:
                out.append(_welcome_line(state.screencols))
            else:
                out.append("~")
        else:
            length = max(0, min(state.screencols, len(row.render) - state.coloff))
            out.append(row.render[state.coloff : state.coloff + length])
        out.append(CLEAR_LINE)
        out.append("\r\n")
    return "".join(out)


def build_status_bar(state: EditorState) -> str:
    """Reverse-video line: filename and row count left, cursor row right."""
    total = len(state.document)
    name = state.filename or NO_NAME
    status = f"{name[:FILENAME_STATUS_CHARS]} - {total} lines"[: state.screencols]
    rstatus = f"{state.cy + 1}/{total}"

    remaining = state.screencols - len(status)
    if remaining >= len(rstatus):
        line = status + " " * (remaining - len(rstatus)) + rstatus
    else:
        line = status + " " * remaining
    return f"{REVERSE_VIDEO}{line}{RESET_STYLE}\r\n"


def build_message_bar(state: EditorState, now: float) -> str:
    message = state.status.text[: state.screencols] if state.status.visible(now) else ""
    return f"{CLEAR_LINE}{message}"


def cursor_position(state: EditorState) -> str:
    """Return the 1-based cursor placement sequence for the current viewport."""
    return f"\x1b[{state.cy - state.rowoff + 1};{state.rx - state.coloff + 1}H"


def build_frame(state: EditorState, now: float) -> str:
    """Compose a full frame; ``scroll`` must already have run for ``state``."""
    return "".join(
        (
            HIDE_CURSOR,
            CURSOR_HOME,
            draw_rows(state),
            build_status_bar(state),
            build_message_bar(state, now),
            cursor_position(state),
            SHOW_CURSOR,
        )
    )


def refresh_screen(state: EditorState, terminal: FrameWriter, now: float) -> None:
    """Scroll the viewport to the cursor, then draw one frame."""
    scroll(state)
    terminal.write(build_frame(state, now).encode("utf-8", errors="replace"))
