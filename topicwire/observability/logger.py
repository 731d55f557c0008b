"""Logging for publisher/subscriber events (subscribe, unsubscribe, notify)."""

import logging
import os
import sys
from typing import Any, Dict, Optional

DEFAULT_LOG_LEVEL = "INFO"

# Attributes every LogRecord carries; anything else came in through extra=.
_RECORD_ATTRS = set(vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None))) | {
    "message",
    "asctime",
    "taskName",
}


class ExtraFormatter(logging.Formatter):
    """Formatter that appends extra= fields as key=value pairs."""

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        extras = extra_fields(record)
        if extras:
            line += " | " + " ".join(f"{k}={v}" for k, v in extras.items())
        return line


def extra_fields(record: logging.LogRecord) -> Dict[str, Any]:
    """Return the structured fields attached to a record via extra=."""
    return {k: v for k, v in vars(record).items() if k not in _RECORD_ATTRS}


def _level_from_env() -> int:
    name = (os.environ.get("TOPICWIRE_LOG_LEVEL") or DEFAULT_LOG_LEVEL).strip().upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.INFO


def get_logger(name: str, level: Optional[int] = None) -> logging.Logger:
    """Return a configured logger for observability."""
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(
            ExtraFormatter(
                "%(asctime)s | %(name)s | %(levelname)s | %(message)s"
            )
        )
        logger.addHandler(handler)
        logger.setLevel(level if level is not None else _level_from_env())
    return logger
