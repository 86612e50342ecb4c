"""Logging setup.

The terminal is owned by the editor while it runs, so log records only
ever go to a file, and only when one is configured.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

LOG_ENV_VAR = "KILO_LOG"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def resolve_log_path(configured: Path | None) -> Path | None:
    """Prefer ``$KILO_LOG`` over the configured path."""
    env_value = os.environ.get(LOG_ENV_VAR, "").strip()
    if env_value:
        return Path(env_value).expanduser()
    return configured


def configure_logging(path: Path | None) -> logging.Logger:
    """Attach a file handler (or a null handler) to the ``kilo`` logger."""
    logger = logging.getLogger("kilo")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = False

    if path is None:
        logger.addHandler(logging.NullHandler())
        return logger

    handler = logging.FileHandler(path, encoding="utf-8")
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    return logger
