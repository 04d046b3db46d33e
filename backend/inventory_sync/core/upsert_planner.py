"""Upsert Planner — classifies each record as Update(position) or Insert and projects it.

Invariants:
    - Records are de-duplicated by key BEFORE planning; the last occurrence wins
    - Every projected row has exactly len(header) cells, in header order
    - Fields absent on a record project to ""; fields absent from the header are not
      projected (the Schema Synchronizer has already grown the header to include them)
    - A record with an empty key is a MISSING_KEY failure for that record only
    - plan_upserts is PURE: returns a plan descriptor, the shell applies it

Design Decisions:
    - Updates ordered by position, inserts in batch order: deterministic write sequence
      that makes per-row logs and retries easy to follow
    - Duplicate keys collapse to ONE operation so counts reflect rows, not records
"""

from dataclasses import dataclass, field
from typing import Iterable, Sequence

from inventory_sync.core.domain_types import (
    KeyValue, OperationKind, Record, RowPosition,
)
from inventory_sync.core.errors import FailureCode
from inventory_sync.core.key_index import KeyIndex


@dataclass(frozen=True)
class PlannedOperation:
    """One row mutation: full projected row, target position for updates."""
    kind: OperationKind
    key: KeyValue
    values: tuple[str, ...]
    position: RowPosition | None = None


@dataclass(frozen=True)
class RecordFailure:
    """A record that could not be planned (skipped, batch continues)."""
    batch_index: int
    code: FailureCode
    message: str


@dataclass
class UpsertPlan:
    operations: list[PlannedOperation] = field(default_factory=list)
    failures: list[RecordFailure] = field(default_factory=list)
    superseded: int = 0

    @property
    def updates(self) -> list[PlannedOperation]:
        return [op for op in self.operations if op.kind is OperationKind.UPDATE]

    @property
    def inserts(self) -> list[PlannedOperation]:
        return [op for op in self.operations if op.kind is OperationKind.INSERT]


def project_record(record: Record, header: Sequence[str]) -> tuple[str, ...]:
    """Project record fields onto header order, "" for missing fields."""
    return tuple(record.value(name) for name in header)


def deduplicate_by_key(records: Iterable[Record]) -> tuple[list[Record], int]:
    """Keep the last record per key. Returns (unique records, superseded count).

    Survivors keep the batch order of their LAST occurrence. Records without a
    key are passed through untouched so the planner can report them.
    """
    latest: dict[KeyValue, Record] = {}
    keyless: list[Record] = []
    superseded = 0
    for record in records:
        if not record.has_key:
            keyless.append(record)
            continue
        if record.key in latest:
            superseded += 1
            del latest[record.key]  # re-insert to move to last-seen order
        latest[record.key] = record
    ordered = sorted(
        [*latest.values(), *keyless], key=lambda r: r.batch_index,
    )
    return ordered, superseded


def plan_upserts(
    records: Iterable[Record], header: Sequence[str], key_index: KeyIndex,
) -> UpsertPlan:
    """Build the Update/Insert plan for a batch. Pure — no store access."""
    unique, superseded = deduplicate_by_key(records)
    plan = UpsertPlan(superseded=superseded)
    updates: list[PlannedOperation] = []
    inserts: list[PlannedOperation] = []

    for record in unique:
        if not record.has_key:
            plan.failures.append(RecordFailure(
                batch_index=record.batch_index,
                code=FailureCode.MISSING_KEY,
                message=(
                    f"Record #{record.batch_index} has no value for "
                    f"key field '{record.key_field}'"
                ),
            ))
            continue

        values = project_record(record, header)
        position = key_index.get(record.key)
        if position is not None:
            updates.append(PlannedOperation(
                OperationKind.UPDATE, record.key, values, position,
            ))
        else:
            inserts.append(PlannedOperation(
                OperationKind.INSERT, record.key, values,
            ))

    updates.sort(key=lambda op: op.position)
    plan.operations = updates + inserts
    return plan
