from __future__ import annotations

import logging
import sys

"""Logging initialization with labeled prefixes.

Every line written by the application logger carries a level label:
INFO | WARN | ERROR | DEBUG | SUMMARY.

SUMMARY is a custom level used for exactly one line at the end of a successful
resolve run. Its shape is fixed so scripts can grep it:

    SUMMARY groups=<sheet names> base_rows=<n> rows=<n> matched=<n> unmatched=<n>

The key=value body comes from :func:`services.summary.render_summary_line`;
:func:`log_summary` only adds the level label.
"""

__all__ = [
    "setup_logging",
    "get_logger",
    "log_summary",
    "reset_logging",
    "set_debug",
]

# Custom SUMMARY level (between INFO=20 and WARNING=30)
SUMMARY_LEVEL = 25

LOGGER_NAME = "manifest_resolver"

_logger: logging.Logger | None = None


class LabeledFormatter(logging.Formatter):
    """Formatter producing ``LABEL message`` lines."""

    LEVEL_LABELS = {
        logging.DEBUG: "DEBUG",
        logging.INFO: "INFO",
        logging.WARNING: "WARN",
        logging.ERROR: "ERROR",
        logging.CRITICAL: "CRITICAL",
        SUMMARY_LEVEL: "SUMMARY",
    }

    def format(self, record: logging.LogRecord) -> str:
        level_label = self.LEVEL_LABELS.get(record.levelno, record.levelname)
        return f"{level_label} {record.getMessage()}"


def setup_logging() -> logging.Logger:
    """Configure the ``manifest_resolver`` logger (idempotent).

    Module loggers (``manifest_resolver.services.*`` etc.) are children of this
    logger, so their records go through the same labeled stdout handler.
    """
    global _logger

    if _logger is not None:
        return _logger

    logging.addLevelName(SUMMARY_LEVEL, "SUMMARY")

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.INFO)

    # Avoid duplicated handlers when re-configured after reset_logging()
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(logging.INFO)
    handler.setFormatter(LabeledFormatter())
    logger.addHandler(handler)

    logger.propagate = False

    _logger = logger
    return logger


def get_logger() -> logging.Logger:
    if _logger is None:
        return setup_logging()
    return _logger


def log_summary(message: str) -> None:
    """Log ``message`` at SUMMARY level.

    ``message`` is the key=value body without the ``SUMMARY`` prefix; the
    formatter supplies the label, giving ``SUMMARY groups=2 base_rows=3 ...``.
    """
    get_logger().log(SUMMARY_LEVEL, message)


def set_debug(logger: logging.Logger) -> None:
    """Lower the logger and its handlers to DEBUG (``--debug``); shows per-cell fallbacks."""
    for h in logger.handlers:
        h.setLevel(logging.DEBUG)
    logger.setLevel(logging.DEBUG)


def reset_logging() -> None:
    """Reset the global logger state. Mainly for testing purposes."""
    global _logger
    _logger = None
