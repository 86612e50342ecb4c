"""Cursor motion and viewport scrolling.

Transitions mutate ``EditorState`` in place. ``scroll`` runs once per frame
and moves the viewport by the minimum amount that keeps the cursor visible.
"""

from __future__ import annotations

from .keys import EditorKey, Key
from .state import EditorState

ARROW_KEYS = frozenset(
    {
        EditorKey.ARROW_LEFT,
        EditorKey.ARROW_RIGHT,
        EditorKey.ARROW_UP,
        EditorKey.ARROW_DOWN,
    }
)


def move_cursor(state: EditorState, key: Key) -> None:
    """Apply one arrow-key step, wrapping across line ends horizontally."""
    document = state.document
    row = document.row(state.cy)

    if key == EditorKey.ARROW_LEFT:
        if state.cx > 0:
            state.cx -= 1
        elif state.cy > 0:
            state.cy -= 1
            state.cx = document.row_length(state.cy)
    elif key == EditorKey.ARROW_RIGHT:
        if row is not None:
            if state.cx < len(row):
                state.cx += 1
            elif state.cx == len(row):
                state.cy += 1
                state.cx = 0
    elif key == EditorKey.ARROW_UP:
        if state.cy > 0:
            state.cy -= 1
    elif key == EditorKey.ARROW_DOWN:
        if state.cy < len(document):
            state.cy += 1

    # Column never exceeds the row now under the cursor.
    state.cx = min(state.cx, document.row_length(state.cy))


def move_home(state: EditorState) -> None:
    state.cx = 0


def move_end(state: EditorState) -> None:
    row = state.document.row(state.cy)
    if row is not None:
        state.cx = len(row)


def page_move(state: EditorState, key: Key) -> None:
    """Move a full screen up or down as repeated single-line steps."""
    if key == EditorKey.PAGE_UP:
        state.cy = state.rowoff
        step = EditorKey.ARROW_UP
    else:
        state.cy = min(state.rowoff + state.screenrows - 1, len(state.document))
        step = EditorKey.ARROW_DOWN
    for _ in range(state.screenrows):
        move_cursor(state, step)


def scroll(state: EditorState) -> None:
    """Recompute ``rx`` and shift offsets so the cursor is on screen."""
    state.rx = state.document.cx_to_rx(state.cy, state.cx)

    if state.cy < state.rowoff:
        state.rowoff = state.cy
    if state.cy >= state.rowoff + state.screenrows:
        state.rowoff = state.cy - state.screenrows + 1
    if state.rx < state.coloff:
        state.coloff = state.rx
    if state.rx >= state.coloff + state.screencols:
        state.coloff = state.rx - state.screencols + 1
