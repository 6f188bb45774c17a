"""Structured JSON logging for termask.

The library only logs at DEBUG level (raw-mode toggles, failed
validations, editor resolution) and never logs typed answers. Nothing is
printed unless an application calls setup_logging().
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any

LOGGER_NAME = "termask"


class JSONFormatter(logging.Formatter):
    """Formats log records as single-line JSON."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "ts": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        if record.exc_info and record.exc_info[1]:
            entry["error"] = str(record.exc_info[1])
        return json.dumps(entry, ensure_ascii=False, default=str)


def setup_logging(
    log_file: Path | None = None,
    level: int | str | None = None,
) -> logging.Logger:
    """Configure the 'termask' logger.

    Args:
        log_file: File to append JSON lines to. Defaults to
            $TERMASK_LOG_FILE, or stderr when unset. Prefer a file while
            prompting, since stderr usually shares the terminal.
        level: Logging level. Defaults to $TERMASK_LOG_LEVEL, then INFO.

    Returns:
        The 'termask' logger.
    """
    logger = logging.getLogger(LOGGER_NAME)
    if level is None:
        level = os.environ.get("TERMASK_LOG_LEVEL", "INFO").upper()
    logger.setLevel(level)

    # Avoid duplicate handlers on repeated calls
    if any(not isinstance(h, logging.NullHandler) for h in logger.handlers):
        return logger

    if log_file is None and os.environ.get("TERMASK_LOG_FILE"):
        log_file = Path(os.environ["TERMASK_LOG_FILE"])

    handler: logging.Handler
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(log_file, encoding="utf-8")
    else:
        handler = logging.StreamHandler()
    handler.setFormatter(JSONFormatter())
    logger.addHandler(handler)
    return logger
