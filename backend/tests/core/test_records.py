"""Record Ingestion — tests for value coercion and field-name union.

Tests cover:
    - None, lists, numbers and bools coerced to str
    - Key value stripped, other values kept verbatim
    - Empty field names dropped
    - batch_field_names keeps first-appearance order across records
"""

from inventory_sync.core.domain_types import MULTI_VALUE_SEPARATOR
from inventory_sync.core.records import (
    batch_field_names, coerce_value, ingest_records, to_record,
)

KEY = "ComputerName"


def test_coerce_none_to_empty_string():
    assert coerce_value(None) == ""


def test_coerce_list_joins_with_line_break():
    assert coerce_value(["10.0.0.1", "10.0.0.2"]) == "10.0.0.1\n10.0.0.2"
    assert MULTI_VALUE_SEPARATOR == "\n"


def test_coerce_scalars_to_str():
    assert coerce_value(16) == "16"
    assert coerce_value(2.5) == "2.5"
    assert coerce_value(True) == "True"


def test_coerce_keeps_strings_verbatim():
    assert coerce_value("  padded  ") == "  padded  "


def test_to_record_strips_key_only():
    record = to_record({KEY: "  PC1 ", "Owner": " alice "}, KEY)
    assert record.key == "PC1"
    assert record.value("Owner") == " alice "


def test_to_record_drops_empty_field_names():
    record = to_record({KEY: "PC1", "": "x", "   ": "y"}, KEY)
    assert record.field_names == (KEY,)


def test_to_record_without_key_has_no_key():
    record = to_record({"CPU": "X"}, KEY)
    assert not record.has_key
    assert record.key == ""


def test_ingest_assigns_batch_indexes():
    batch = ingest_records([{KEY: "A"}, {KEY: "B"}], KEY)
    assert [r.batch_index for r in batch.records] == [0, 1]


def test_ingest_none_is_empty():
    assert ingest_records(None, KEY).is_empty
    assert ingest_records([], KEY).is_empty


def test_batch_field_names_union_in_first_appearance_order():
    batch = ingest_records(
        [
            {KEY: "A", "CPU": "X"},
            {"RAM": "8", KEY: "B"},
            {KEY: "C", "CPU": "Y", "Disk": "1TB"},
        ],
        KEY,
    )
    assert batch.field_names == [KEY, "CPU", "RAM", "Disk"]
    assert batch_field_names([]) == []
