"""Upsert Planner — tests for classification, projection and de-duplication.

Tests cover:
    - Known key → UPDATE at indexed position, unknown → INSERT
    - Projection follows header order, "" for missing fields
    - Duplicate keys in one batch: last record wins, one operation
    - Missing key → MISSING_KEY failure, batch continues
"""

from inventory_sync.core.domain_types import OperationKind
from inventory_sync.core.errors import FailureCode
from inventory_sync.core.key_index import build_key_index
from inventory_sync.core.records import ingest_records
from inventory_sync.core.upsert_planner import (
    deduplicate_by_key, plan_upserts, project_record,
)

KEY = "ComputerName"
HEADER = (KEY, "CPU", "RAM")


def _records(*raw):
    return ingest_records(list(raw), KEY).records


def test_project_record_follows_header_order():
    (record,) = _records({"RAM": "16", KEY: "PC1"})
    assert project_record(record, HEADER) == ("PC1", "", "16")


def test_project_record_ignores_fields_outside_header():
    (record,) = _records({KEY: "PC1", "GPU": "Z"})
    assert project_record(record, (KEY,)) == ("PC1",)


def test_known_key_is_update_unknown_is_insert():
    index = build_key_index([(1, ["PC1", "X", "8"])], 0)
    plan = plan_upserts(
        _records({KEY: "PC1", "CPU": "Y"}, {KEY: "PC2", "CPU": "Z"}),
        HEADER, index,
    )
    assert [op.kind for op in plan.operations] == [
        OperationKind.UPDATE, OperationKind.INSERT,
    ]
    update, insert = plan.operations
    assert update.position == 1
    assert update.values == ("PC1", "Y", "")
    assert insert.position is None
    assert insert.values == ("PC2", "Z", "")


def test_updates_ordered_by_position_before_inserts():
    index = build_key_index([(1, ["A"]), (2, ["B"])], 0)
    plan = plan_upserts(
        _records({KEY: "NEW"}, {KEY: "B"}, {KEY: "A"}), HEADER, index,
    )
    assert [op.key for op in plan.operations] == ["A", "B", "NEW"]
    assert len(plan.updates) == 2
    assert len(plan.inserts) == 1


def test_duplicate_keys_last_one_wins():
    plan = plan_upserts(
        _records(
            {KEY: "PC1", "CPU": "first"},
            {KEY: "PC1", "CPU": "second"},
        ),
        HEADER, build_key_index([], 0),
    )
    assert len(plan.operations) == 1
    assert plan.operations[0].values == ("PC1", "second", "")
    assert plan.superseded == 1


def test_duplicate_of_existing_key_yields_single_update():
    index = build_key_index([(1, ["PC1", "X", ""])], 0)
    plan = plan_upserts(
        _records({KEY: "PC1", "CPU": "Y"}, {KEY: "PC1", "CPU": "Z"}),
        HEADER, index,
    )
    assert len(plan.updates) == 1
    assert plan.updates[0].values[1] == "Z"


def test_deduplicate_keeps_last_occurrence_order():
    unique, superseded = deduplicate_by_key(
        _records({KEY: "A"}, {KEY: "B"}, {KEY: "A", "CPU": "late"}),
    )
    assert [r.key for r in unique] == ["B", "A"]
    assert unique[1].value("CPU") == "late"
    assert superseded == 1


def test_missing_key_is_per_record_failure():
    plan = plan_upserts(
        _records({KEY: "", "CPU": "X"}, {"CPU": "Y"}, {KEY: "PC3"}),
        HEADER, build_key_index([], 0),
    )
    assert len(plan.operations) == 1
    assert plan.operations[0].key == "PC3"
    assert [f.batch_index for f in plan.failures] == [0, 1]
    assert all(f.code is FailureCode.MISSING_KEY for f in plan.failures)


def test_keyless_records_are_not_collapsed_together():
    unique, superseded = deduplicate_by_key(_records({"CPU": "X"}, {"CPU": "Y"}))
    assert len(unique) == 2
    assert superseded == 0
