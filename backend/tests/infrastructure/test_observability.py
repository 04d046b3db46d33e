"""Structured Logging — JSONFormatter output."""

import json
import logging

from inventory_sync.infrastructure.observability import (
    JSONFormatter, KeyValueFormatter, setup_logging,
)


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        "inventory_sync.test", logging.WARNING, __file__, 1,
        "Row write failed", None, None,
    )
    record.__dict__.update(extra)
    return record


def test_base_fields_present():
    log = json.loads(JSONFormatter().format(_record()))
    assert log["level"] == "WARNING"
    assert log["logger"] == "inventory_sync.test"
    assert log["message"] == "Row write failed"
    assert "timestamp" in log


def test_sync_extras_surfaced():
    log = json.loads(JSONFormatter().format(
        _record(store_name="Inventory", key_value="PC1", row_position=3, attempt=2),
    ))
    assert log["store_name"] == "Inventory"
    assert log["key_value"] == "PC1"
    assert log["row_position"] == 3
    assert log["attempt"] == 2
    assert "updated" not in log


def test_timestamp_is_record_creation_time():
    record = _record()
    record.created = 0.0
    log = json.loads(JSONFormatter().format(record))
    assert log["timestamp"].startswith("1970-01-01T00:00:00")


def test_text_format_keeps_sync_context():
    line = KeyValueFormatter().format(_record(store_name="Inventory", key_value="PC1"))
    assert line.endswith("Row write failed [store_name=Inventory key_value=PC1]")


def test_text_format_without_context_is_plain():
    line = KeyValueFormatter().format(_record())
    assert line.endswith(" - Row write failed")


def test_setup_logging_replaces_its_own_handler():
    root = logging.getLogger()
    before = list(root.handlers)
    level = root.level
    try:
        first = setup_logging("INFO", "json")
        assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING
        second = setup_logging("DEBUG", "text")
        assert first not in root.handlers
        assert second in root.handlers
        assert isinstance(second.formatter, KeyValueFormatter)
        assert logging.getLogger("sqlalchemy.engine").level == logging.DEBUG
    finally:
        for name in ("sqlalchemy.engine", "httpx"):
            logging.getLogger(name).setLevel(logging.NOTSET)
        root.handlers[:] = before
        root.setLevel(level)
