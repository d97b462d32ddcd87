"""Logging setup for fdentry: rotating log file, CLI excepthook, and log path."""

from __future__ import annotations

import logging
import sys
import traceback
from pathlib import Path

from fdentry.core import config

LOG_NAME = "fdentry.log"
LOG_MAX_BYTES = 512 * 1024  # 512 KB
LOG_BACKUP_COUNT = 2


def setup_logging(level: str | int = logging.DEBUG) -> None:
    """Attach a rotating file handler to the fdentry logger."""
    root = logging.getLogger("fdentry")
    root.setLevel(level)

    # Avoid duplicate handlers
    if not root.handlers:
        try:
            from logging.handlers import RotatingFileHandler

            config.CACHE_DIR.mkdir(parents=True, exist_ok=True)
            handler = RotatingFileHandler(
                get_log_path(),
                maxBytes=LOG_MAX_BYTES,
                backupCount=LOG_BACKUP_COUNT,
                encoding="utf-8",
            )
        except OSError:
            handler = logging.StreamHandler(sys.stderr)

        handler.setFormatter(
            logging.Formatter(
                "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        root.addHandler(handler)


def install_excepthook() -> None:
    """Route uncaught exceptions through the log. Only the CLI calls this."""
    sys.excepthook = _excepthook


def _excepthook(exc_type: type, exc_value: BaseException, exc_tb) -> None:
    """Log uncaught exceptions to file and stderr."""
    lines = traceback.format_exception(exc_type, exc_value, exc_tb)
    msg = "".join(lines)
    logger = logging.getLogger("fdentry")
    logger.critical("Uncaught exception:\n%s", msg)
    sys.__excepthook__(exc_type, exc_value, exc_tb)


def get_logger(name: str) -> logging.Logger:
    """Return a logger for the given module name."""
    return logging.getLogger(f"fdentry.{name}")


def get_log_path() -> Path:
    """Return the path to the log file."""
    return config.CACHE_DIR / LOG_NAME
