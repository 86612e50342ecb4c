"""In-memory line buffer.

Each row keeps its raw characters plus a tab-expanded render string.
``row_cx_to_rx`` is the only place that knows how wide a tab is on screen.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

logger = logging.getLogger(__name__)

TAB_STOP = 8


def next_tab_stop(rx: int, tab_stop: int = TAB_STOP) -> int:
    """Return the render column reached by a tab typed at column ``rx``."""
    return (rx // tab_stop + 1) * tab_stop


def render_row(chars: str, tab_stop: int = TAB_STOP) -> str:
    """Expand tabs in ``chars`` to spaces up to the next tab stop."""
    if "\t" not in chars:
        return chars

    out: list[str] = []
    rx = 0
    for ch in chars:
        if ch == "\t":
            stop = next_tab_stop(rx, tab_stop)
            out.append(" " * (stop - rx))
            rx = stop
        else:
            out.append(ch)
            rx += 1
    return "".join(out)


@dataclass
class Row:
    chars: str
    render: str = ""

    @classmethod
    def from_text(cls, chars: str, tab_stop: int = TAB_STOP) -> Row:
        return cls(chars=chars, render=render_row(chars, tab_stop))

    def update(self, tab_stop: int = TAB_STOP) -> None:
        """Re-derive ``render`` after ``chars`` changed."""
        self.render = render_row(self.chars, tab_stop)

    def __len__(self) -> int:
        return len(self.chars)


def row_cx_to_rx(row: Row, cx: int, tab_stop: int = TAB_STOP) -> int:
    """Map logical column ``cx`` in ``row`` to its render column.

    ``cx`` is clamped to ``[0, len(row.chars)]``.
    """
    cx = max(0, min(cx, len(row.chars)))
    rx = 0
    for ch in row.chars[:cx]:
        if ch == "\t":
            rx = next_tab_stop(rx, tab_stop)
        else:
            rx += 1
    return rx


@dataclass
class Document:
    tab_stop: int = TAB_STOP
    rows: list[Row] = field(default_factory=list)

    def append(self, line: str) -> None:
        self.rows.append(Row.from_text(line, self.tab_stop))

    def row(self, cy: int) -> Row | None:
        """Return row ``cy`` or ``None`` when the cursor is past the end."""
        if 0 <= cy < len(self.rows):
            return self.rows[cy]
        return None

    def row_length(self, cy: int) -> int:
        row = self.row(cy)
        return len(row.chars) if row is not None else 0

    def cx_to_rx(self, cy: int, cx: int) -> int:
        row = self.row(cy)
        if row is None:
            return 0
        return row_cx_to_rx(row, cx, self.tab_stop)

    def __len__(self) -> int:
        return len(self.rows)


def read_text(path: Path) -> str:
    """Decode file bytes as UTF-8 (dropping a BOM), falling back to latin-1.

    Bytes are decoded without newline translation so a lone ``\\r`` stays
    inside its line; only ``split_lines`` interprets line endings.
    """
    data = path.read_bytes()
    try:
        return data.decode("utf-8-sig")
    except UnicodeDecodeError:
        return data.decode("latin-1")


def split_lines(text: str) -> list[str]:
    """Split file text into lines without their ``\\n``/``\\r\\n`` endings.

    A final newline terminates the last line rather than starting a new one.
    """
    if not text:
        return []
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def load_document(path: Path, tab_stop: int = TAB_STOP) -> Document:
    """Build a document from the lines of ``path``.

    ``OSError`` from opening the file propagates to the caller.
    """
    document = Document(tab_stop=tab_stop)
    for line in split_lines(read_text(path)):
        document.append(line)
    logger.info("loaded %s (%d rows)", path, len(document))
    return document
