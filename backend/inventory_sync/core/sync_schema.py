"""Schema Synchronizer — computes the canonical HeaderSet for one sync pass.

Invariants:
    - Uninitialized store (no header, no data): canonical header == batch field order
    - Initialized store: canonical header == store header + unseen batch fields, appended
      in stable first-appearance order
    - The batch's own field order NEVER reorders an existing header
    - The key field must be present in the canonical header, else SchemaConflictError

Design Decisions:
    - Schema policy is GROW, never DROP: unknown fields extend the header so no captured
      attribute is silently lost
    - Returns a HeaderPlan descriptor; the shell decides whether to write it
"""

from dataclasses import dataclass, field
from typing import Sequence

from inventory_sync.core.domain_types import HeaderSet
from inventory_sync.core.errors import SchemaConflictError


@dataclass(frozen=True)
class HeaderPlan:
    """Canonical header for this pass and what changed versus the store."""
    header: HeaderSet
    added_fields: tuple[str, ...] = field(default_factory=tuple)
    is_new_store: bool = False

    @property
    def changed(self) -> bool:
        return self.is_new_store or bool(self.added_fields)

    def column_of(self, field_name: str) -> int | None:
        try:
            return self.header.index(field_name)
        except ValueError:
            return None


def normalize_header(store_header: Sequence[str]) -> list[str]:
    """Strip header cells and drop trailing blanks left by the store."""
    cells = [str(c).strip() for c in store_header]
    while cells and not cells[-1]:
        cells.pop()
    return cells


def synchronize_header(
    store_header: Sequence[str],
    batch_fields: Sequence[str],
    key_field: str,
    store_has_data: bool = False,
) -> HeaderPlan:
    """Compute the canonical HeaderSet. Pure — does not touch the store."""
    existing = normalize_header(store_header)

    if not existing and not store_has_data:
        header = tuple(dict.fromkeys(batch_fields))
        if key_field not in header:
            raise SchemaConflictError(key_field)
        return HeaderPlan(header=header, added_fields=header, is_new_store=True)

    if key_field not in existing and key_field not in batch_fields:
        raise SchemaConflictError(key_field)

    known = set(existing)
    added: list[str] = []
    for name in batch_fields:
        if name not in known:
            known.add(name)
            added.append(name)

    return HeaderPlan(
        header=tuple(existing) + tuple(added), added_fields=tuple(added),
    )
