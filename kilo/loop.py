"""Main interactive event loop.

One turn renders a frame, reads one key, and applies one transition.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from typing import Protocol

from .key_handlers import process_key
from .keys import read_key
from .render import refresh_screen
from .state import EditorState

logger = logging.getLogger(__name__)


class LoopTerminal(Protocol):
    stdin_fd: int

    def write(self, data: bytes) -> None: ...

    def clear_screen(self) -> None: ...


def run_main_loop(
    state: EditorState,
    terminal: LoopTerminal,
    clock: Callable[[], float] = time.monotonic,
) -> None:
    """Run until the quit key is pressed or input reaches end of file.

    The screen is cleared on the way out.
    """
    try:
        while True:
            refresh_screen(state, terminal, clock())
            try:
                key = read_key(terminal.stdin_fd)
            except EOFError:
                logger.info("terminal input closed, leaving editor")
                break
            if not process_key(state, key):
                logger.info("quit requested")
                break
    finally:
        terminal.clear_screen()
