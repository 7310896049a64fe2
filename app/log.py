"""
Logging setup — one stdout handler with level-labelled lines.
"""
from __future__ import annotations

import logging
import sys

from app.config import LOG_LEVEL

__all__ = ["setup_logging"]

_configured = False


class LabeledFormatter(logging.Formatter):
    """Format records as ``LABEL logger: message``."""

    LEVEL_LABELS = {
        logging.DEBUG: "DEBUG",
        logging.INFO: "INFO",
        logging.WARNING: "WARN",
        logging.ERROR: "ERROR",
        logging.CRITICAL: "CRITICAL",
    }

    def format(self, record: logging.LogRecord) -> str:
        label = self.LEVEL_LABELS.get(record.levelno, record.levelname)
        line = f"{label} {record.name}: {record.getMessage()}"
        if record.exc_info:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        return line


def setup_logging(level: str | int = LOG_LEVEL) -> logging.Logger:
    """Attach the stdout handler to the ``app`` logger. Safe to call repeatedly."""
    global _configured

    logger = logging.getLogger("app")
    logger.setLevel(level)
    if _configured:
        return logger

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(LabeledFormatter())
    logger.addHandler(handler)

    _configured = True
    return logger
