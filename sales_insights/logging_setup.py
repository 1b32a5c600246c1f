"""Logging initialisation for the dashboard and pipeline."""

from __future__ import annotations

import logging
import sys
from typing import Optional

LOGGER_NAME = "sales_insights"

_configured: Optional[logging.Logger] = None


class LabeledFormatter(logging.Formatter):
    """Prefix records with a short level label and the emitting module."""

    LEVEL_LABELS = {
        logging.DEBUG: "DEBUG",
        logging.INFO: "INFO",
        logging.WARNING: "WARN",
        logging.ERROR: "ERROR",
        logging.CRITICAL: "CRITICAL",
    }

    def format(self, record: logging.LogRecord) -> str:
        label = self.LEVEL_LABELS.get(record.levelno, record.levelname)
        message = f"{label} [{record.name}] {record.getMessage()}"
        if record.exc_info:
            message = f"{message}\n{self.formatException(record.exc_info)}"
        return message


def setup_logging(level: str = "INFO") -> logging.Logger:
    """Attach a single stdout handler to the package logger.

    Calling it again only updates the level, so Streamlit reruns do not stack
    handlers.
    """

    global _configured

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    if _configured is not None:
        return logger

    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(LabeledFormatter())
    logger.addHandler(handler)
    logger.propagate = False

    _configured = logger
    return logger


def reset_logging() -> None:
    """Forget the configured logger. Used by tests."""

    global _configured
    if _configured is not None:
        for handler in _configured.handlers[:]:
            _configured.removeHandler(handler)
        _configured.propagate = True
    _configured = None
