"""Command-line front door for kilo.

Parses the optional file argument, sets up logging from config, loads the
file, and runs the editor. Startup failures exit with a message.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path

from .app import run_editor
from .config import load_log_path, load_tab_stop
from .document import Document, load_document
from .logs import configure_logging, resolve_log_path
from .terminal import TerminalSizeError

logger = logging.getLogger(__name__)


def _stdin_is_terminal() -> bool:
    try:
        return os.isatty(sys.stdin.fileno())
    except (OSError, ValueError):
        return False


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments and launch the editor on an optional file."""
    parser = argparse.ArgumentParser(prog="kilo", description="Minimal terminal text editor.")
    parser.add_argument("path", nargs="?", default=None, help="File to open. Starts empty when omitted.")
    args = parser.parse_args(argv)

    try:
        configure_logging(resolve_log_path(load_log_path()))
    except OSError as exc:
        raise SystemExit(f"kilo: unable to open log file: {exc}") from exc
    tab_stop = load_tab_stop()

    if not _stdin_is_terminal():
        raise SystemExit("kilo: standard input is not a terminal")

    filename = ""
    document = Document(tab_stop=tab_stop)
    if args.path is not None:
        filename = args.path
        try:
            document = load_document(Path(args.path), tab_stop=tab_stop)
        except OSError as exc:
            logger.error("unable to open %s: %s", args.path, exc)
            raise SystemExit(f"kilo: unable to open {args.path}: {exc.strerror or exc}") from exc

    try:
        run_editor(document, filename=filename)
    except TerminalSizeError as exc:
        logger.error("window size unavailable: %s", exc)
        raise SystemExit(f"kilo: unable to determine window size: {exc}") from exc


if __name__ == "__main__":
    main()
