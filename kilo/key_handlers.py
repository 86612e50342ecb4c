"""Keyboard dispatch for the editor.

Maps one decoded key to one state transition. Returns ``False`` only for
the quit key so the loop can stop.
"""

from __future__ import annotations

from .keys import QUIT_KEY, EditorKey, Key
from .state import EditorState, StatusMessage
from .viewport import ARROW_KEYS, move_cursor, move_end, move_home, page_move

HELP_MESSAGE = "HELP: Ctrl-Q = quit"


def set_status_message(state: EditorState, text: str, now: float) -> None:
    state.status = StatusMessage(text=text, time=now)


def process_key(state: EditorState, key: Key) -> bool:
    if key == QUIT_KEY:
        return False
    if key == EditorKey.HOME_KEY:
        move_home(state)
    elif key == EditorKey.END_KEY:
        move_end(state)
    elif key in (EditorKey.PAGE_UP, EditorKey.PAGE_DOWN):
        page_move(state, key)
    elif key in ARROW_KEYS:
        move_cursor(state, key)
    return True
