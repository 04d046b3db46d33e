"""Structured Logging — sync-aware formatters and one-shot logging setup.

Invariants:
    - Every line carries timestamp, level, logger name, and message
    - Sync context (store, key, row position, error code, retry attempt, pass counts)
      is attached through `extra=` and rendered by BOTH formatters, never lost in text mode
    - The timestamp is the record's creation time, not the time it was formatted
    - setup_logging is idempotent: calling it again replaces its own handler, so
      repeated app lifespans (tests, reloads) never duplicate log lines

Design Decisions:
    - stdlib logging with a JSON formatter, no third-party logging lib
    - Chatty dependency loggers (sqlalchemy.engine, httpx) held at WARNING unless
      the service itself runs at DEBUG
"""

import json
import logging
from datetime import datetime, timezone

SYNC_CONTEXT_FIELDS = (
    "store_name", "key_value", "row_position", "error_code", "attempt",
    "updated", "added", "total", "path",
)
_QUIET_LOGGERS = ("sqlalchemy.engine", "httpx")
_HANDLER_NAME = "inventory_sync"


def sync_context(record: logging.LogRecord) -> dict:
    """Sync context fields present on a record, in a stable order."""
    context = {}
    for key in SYNC_CONTEXT_FIELDS:
        val = record.__dict__.get(key)
        if val is not None:
            context[key] = val
    return context


class JSONFormatter(logging.Formatter):
    """One JSON object per line, for production log shipping."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.fromtimestamp(
                record.created, timezone.utc,
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            **sync_context(record),
        }
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False, default=str)


class KeyValueFormatter(logging.Formatter):
    """Human-readable line with sync context appended as key=value pairs."""

    def __init__(self):
        super().__init__("%(asctime)s %(levelname)s %(name)s - %(message)s")

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        context = sync_context(record)
        if not context:
            return line
        pairs = " ".join(f"{k}={v}" for k, v in context.items())
        head, sep, tail = line.partition("\n")
        return f"{head} [{pairs}]{sep}{tail}"


def setup_logging(level: str = "INFO", fmt: str = "json") -> logging.Handler:
    """Install the service's root handler, replacing one from an earlier call."""
    root = logging.getLogger()
    for existing in list(root.handlers):
        if existing.get_name() == _HANDLER_NAME:
            root.removeHandler(existing)

    handler = logging.StreamHandler()
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(JSONFormatter() if fmt == "json" else KeyValueFormatter())
    root.addHandler(handler)

    numeric_level = getattr(logging, level.upper(), logging.INFO)
    root.setLevel(numeric_level)
    quiet_level = (
        numeric_level if numeric_level <= logging.DEBUG
        else max(numeric_level, logging.WARNING)
    )
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(quiet_level)
    return handler
