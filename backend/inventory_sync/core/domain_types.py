"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - Record values are always str (coerced at ingestion)
    - HeaderSet is an ordered tuple of unique field names
    - Row positions are 1-based data-row offsets (physical row = position + 1 header row)
    - All valid states encoded as Enums — no raw string matching

Design Decisions:
    - NewType for positions/keys: zero runtime cost, full type-checker support
    - Frozen dataclasses for Record/HeaderStyle: values flow through pure functions unchanged
    - str Enums: serialize to JSON without custom encoders
"""

from dataclasses import dataclass
from enum import Enum
from typing import Mapping, NewType


# ─── Identity / Value Types ──────────────────────────────────────

KeyValue = NewType("KeyValue", str)
RowPosition = NewType("RowPosition", int)       # 1-based data-row offset
HeaderSet = tuple[str, ...]

MULTI_VALUE_SEPARATOR = "\n"


@dataclass(frozen=True)
class Record:
    """One machine snapshot: named string fields plus the designated key field."""
    fields: Mapping[str, str]
    key_field: str
    batch_index: int = 0

    @property
    def key(self) -> KeyValue:
        return KeyValue(self.fields.get(self.key_field, ""))

    @property
    def has_key(self) -> bool:
        return bool(self.key)

    @property
    def field_names(self) -> tuple[str, ...]:
        return tuple(self.fields)

    def value(self, field_name: str) -> str:
        return self.fields.get(field_name, "")


@dataclass(frozen=True)
class HeaderStyle:
    """Visual formatting applied to the header row on first write."""
    bold: bool = True
    background_color: str = "#1F4E78"
    font_color: str = "#FFFFFF"

    def to_dict(self) -> dict:
        return {
            "bold": self.bold,
            "background_color": self.background_color,
            "font_color": self.font_color,
        }


# ─── Enums ───────────────────────────────────────────────────────

class OperationKind(str, Enum):
    """Planned mutation for one projected row."""
    UPDATE = "update"
    INSERT = "insert"


class SyncStatus(str, Enum):
    """Outcome of one sync invocation."""
    SUCCESS = "success"
    PARTIAL = "partial"
    FAILED = "failed"


class StoreBackend(str, Enum):
    """Configured store adapter."""
    SQL = "sql"
    MEMORY = "memory"
