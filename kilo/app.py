"""Editor bootstrap.

Acquires raw mode, sizes the screen, and hands control to the main loop.
Raw mode is released on every exit path by ``TerminalController.raw_mode``.
"""

from __future__ import annotations

import logging
import sys
import time

from .document import Document
from .key_handlers import HELP_MESSAGE, set_status_message
from .loop import run_main_loop
from .state import EditorState
from .terminal import TerminalController

logger = logging.getLogger(__name__)


def run_editor(document: Document, filename: str = "") -> None:
    terminal = TerminalController(sys.stdin.fileno(), sys.stdout.fileno())
    with terminal.raw_mode():
        rows, cols = terminal.window_size()
        state = EditorState.for_window(document, rows, cols, filename=filename)
        logger.info("editing %r: %d rows on a %dx%d screen", filename, len(document), rows, cols)
        set_status_message(state, HELP_MESSAGE, time.monotonic())
        run_main_loop(state, terminal)
