from __future__ import annotations

from dataclasses import dataclass, field

from .document import Document

STATUS_MESSAGE_SECONDS = 5.0


@dataclass
class StatusMessage:
    text: str = ""
    time: float = float("-inf")

    def visible(self, now: float) -> bool:
        return now - self.time < STATUS_MESSAGE_SECONDS


@dataclass
class EditorState:
    document: Document
    screenrows: int
    screencols: int
    filename: str = ""
    cx: int = 0
    cy: int = 0
    rx: int = 0
    rowoff: int = 0
    coloff: int = 0
    status: StatusMessage = field(default_factory=StatusMessage)

    @classmethod
    def for_window(
        cls,
        document: Document,
        window_rows: int,
        window_cols: int,
        filename: str = "",
    ) -> EditorState:
        """Create state for a terminal of ``window_rows`` x ``window_cols``.

        Two rows are reserved for the status bar and the message bar.
        """
        return cls(
            document=document,
            screenrows=max(1, window_rows - 2),
            screencols=max(1, window_cols),
            filename=filename,
        )
