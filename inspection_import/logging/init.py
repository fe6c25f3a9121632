from __future__ import annotations

import logging
import sys
from typing import TextIO

"""Application logger for the importer.

Each emitted line is ``LABEL message`` where LABEL is one of
INFO|WARN|ERROR|SUMMARY (DEBUG once --debug is given). Module loggers named
``inspection_import.*`` hang below the application logger and reuse its
single stdout handler.
"""

__all__ = [
    "APP_LOGGER_NAME",
    "LabeledFormatter",
    "SUMMARY_LEVEL",
    "enable_debug",
    "get_logger",
    "log_summary",
    "reset_logging",
    "setup_logging",
]

APP_LOGGER_NAME = "inspection_import"

# INFO(20) < SUMMARY < WARNING(30)
SUMMARY_LEVEL = 25

_LABELS = {
    logging.DEBUG: "DEBUG",
    logging.INFO: "INFO",
    SUMMARY_LEVEL: "SUMMARY",
    logging.WARNING: "WARN",
    logging.ERROR: "ERROR",
    logging.CRITICAL: "CRITICAL",
}

_configured: logging.Logger | None = None


class LabeledFormatter(logging.Formatter):
    """``LABEL message``; unknown levels fall back to their level name."""

    def format(self, record: logging.LogRecord) -> str:
        label = _LABELS.get(record.levelno, record.levelname)
        return f"{label} {record.getMessage()}"


def setup_logging(level: int = logging.INFO, stream: TextIO | None = None) -> logging.Logger:
    """Attach the labeled stdout handler to the application logger once.

    Later calls return the already configured logger unchanged.
    """
    global _configured
    if _configured is not None:
        return _configured

    logging.addLevelName(SUMMARY_LEVEL, "SUMMARY")
    app = logging.getLogger(APP_LOGGER_NAME)
    app.setLevel(level)
    # handlers left over from an earlier setup (tests) would duplicate lines
    for old in list(app.handlers):
        app.removeHandler(old)

    handler = logging.StreamHandler(stream if stream is not None else sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(LabeledFormatter())
    app.addHandler(handler)
    app.propagate = False

    _configured = app
    return app


def enable_debug() -> None:
    """Lower the application logger and its handlers to DEBUG."""
    app = get_logger()
    app.setLevel(logging.DEBUG)
    for handler in app.handlers:
        handler.setLevel(logging.DEBUG)


def get_logger() -> logging.Logger:
    return _configured if _configured is not None else setup_logging()


def log_summary(message: str) -> None:
    """Emit ``SUMMARY message``."""
    get_logger().log(SUMMARY_LEVEL, message)


def reset_logging() -> None:
    """Forget the configured logger so the next setup_logging() starts fresh (tests)."""
    global _configured
    _configured = None
