"""Logging set-up with sensible defaults."""

import json
import logging
import os
from datetime import datetime, timezone

LOG_ENV_VAR = "LEDGERKIT_LOG"

_LEVELS = {
    "trace": logging.DEBUG,
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "off": logging.CRITICAL + 10,
}

_TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class _JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "target": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry)


def _level_from_env() -> int:
    raw = os.environ.get(LOG_ENV_VAR, "").strip().lower()
    return _LEVELS.get(raw, logging.INFO)


def _install(formatter: logging.Formatter) -> logging.Handler:
    handler = logging.StreamHandler()
    handler.setFormatter(formatter)
    root = logging.getLogger()
    for existing in list(root.handlers):
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(_level_from_env())
    return handler


def init_logging() -> logging.Handler:
    """Log human-readable lines to stderr; level from LEDGERKIT_LOG, default info."""
    return _install(logging.Formatter(_TEXT_FORMAT))


def init_logging_json() -> logging.Handler:
    """Log one JSON object per line to stderr; level from LEDGERKIT_LOG, default info."""
    return _install(_JsonFormatter())