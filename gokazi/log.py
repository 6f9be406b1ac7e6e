"""Console logging with symbolic level prefixes."""

from __future__ import annotations

import logging
import os
import sys
from typing import IO

SCOPE_ENV = "GOKAZI_SCOPE"
LOGGER_NAME = "gokazi"

PREFIXES = {
    logging.DEBUG: "⛏︎",
    logging.INFO: "⎈",
    logging.WARNING: "⚠",
    logging.ERROR: "⛌",
    logging.CRITICAL: "⛔︎",
}
SUCCESS_PREFIX = "✓"


class PrefixHandler(logging.Handler):
    """Write each record as one line: level symbol, optional scope, message and attributes.

    Attributes are taken from a mapping passed as ``extra={"attrs": {...}}``.
    """

    def __init__(self, stream: IO | None = None, scope: str | None = None):
        super().__init__()
        self.stream = stream
        self.scope = os.environ.get(SCOPE_ENV, "") if scope is None else scope

    def format_message(self, record: logging.LogRecord) -> str:
        prefix = PREFIXES.get(record.levelno, PREFIXES[logging.INFO])
        message = record.getMessage()
        attrs = getattr(record, "attrs", None) or {}
        for key, value in attrs.items():
            message += f" {key}: {value}"
        head = f"{prefix} ({self.scope}) " if self.scope else f"{prefix} "
        return head + message

    def emit(self, record: logging.LogRecord) -> None:
        try:
            stream = self.stream if self.stream is not None else sys.stderr
            stream.write(self.format_message(record) + "\n")
            stream.flush()
        except Exception:
            self.handleError(record)


def set_debug(logger: logging.Logger, enabled: bool) -> None:
    """Turn debug messages on or off for *logger*."""
    logger.setLevel(logging.DEBUG if enabled else logging.INFO)


def new_logger(debug: bool = False, stream: IO | None = None) -> logging.Logger:
    """Return the application logger, writing to *stream* (standard error by default)."""
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        if isinstance(handler, PrefixHandler):
            logger.removeHandler(handler)
    logger.addHandler(PrefixHandler(stream))
    logger.propagate = False
    set_debug(logger, debug)
    return logger