"""Record Ingestion — validates untyped batch mappings into typed Records.

Invariants:
    - Every Record value is a str: None -> "", list/tuple -> joined by MULTI_VALUE_SEPARATOR
    - The key field value is stripped so stored keys and lookup keys compare equal
    - Field names are stripped; empty names are dropped
    - Records missing a key are kept here — the planner reports them as MISSING_KEY

Design Decisions:
    - Ingestion never raises per record: one malformed snapshot must not sink the batch
    - batch_field_names scans every record, not only the first, so a field that appears
      late in the batch still drives schema growth
"""

from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping

from inventory_sync.core.domain_types import MULTI_VALUE_SEPARATOR, Record


@dataclass
class IngestedBatch:
    """Typed records plus the union of their field names (first-appearance order)."""
    records: list[Record] = field(default_factory=list)
    field_names: list[str] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.records


def coerce_value(value: Any) -> str:
    """Coerce one raw field value to the opaque string stored in a cell."""
    if value is None:
        return ""
    if isinstance(value, (list, tuple)):
        return MULTI_VALUE_SEPARATOR.join(coerce_value(v) for v in value)
    if isinstance(value, bool):
        return "True" if value else "False"
    return value if isinstance(value, str) else str(value)


def to_record(raw: Mapping[str, Any], key_field: str, batch_index: int = 0) -> Record:
    """Build a Record from one raw mapping."""
    fields: dict[str, str] = {}
    for name, value in raw.items():
        name = str(name).strip()
        if not name:
            continue
        fields[name] = coerce_value(value)
    if key_field in fields:
        fields[key_field] = fields[key_field].strip()
    return Record(fields=fields, key_field=key_field, batch_index=batch_index)


def batch_field_names(records: Iterable[Record]) -> list[str]:
    """Union of field names across records, first-appearance order."""
    seen: dict[str, None] = {}
    for record in records:
        for name in record.field_names:
            seen.setdefault(name, None)
    return list(seen)


def ingest_records(
    raw_batch: Iterable[Mapping[str, Any]] | None, key_field: str,
) -> IngestedBatch:
    """Validate a raw batch into typed Records. Pure, no IO."""
    records = [
        to_record(raw, key_field, batch_index=i)
        for i, raw in enumerate(raw_batch or [])
    ]
    return IngestedBatch(records=records, field_names=batch_field_names(records))
