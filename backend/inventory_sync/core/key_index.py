"""Key Index Builder — maps key values to existing data-row positions.

Invariants:
    - Single pass over existing rows; the only place stored data is read
    - Rows with an empty/whitespace key cell are orphaned: never matched, never overwritten
    - Stored key cells are stripped before matching, like incoming keys
    - A key already duplicated in the store maps to its FIRST position only
    - key_column None (key not in header) yields an empty index: every record inserts

Design Decisions:
    - Orphans and duplicates are reported, not repaired: this engine never deletes rows
"""

from dataclasses import dataclass, field
from typing import Iterable, Sequence

from inventory_sync.core.domain_types import KeyValue, RowPosition


@dataclass
class KeyIndex:
    """key -> 1-based data-row position, plus rows that can never be matched."""
    positions: dict[KeyValue, RowPosition] = field(default_factory=dict)
    orphaned_positions: list[RowPosition] = field(default_factory=list)
    duplicate_positions: list[RowPosition] = field(default_factory=list)

    def __contains__(self, key: object) -> bool:
        return key in self.positions

    def __len__(self) -> int:
        return len(self.positions)

    def get(self, key: str) -> RowPosition | None:
        return self.positions.get(KeyValue(key))


def build_key_index(
    data_rows: Iterable[tuple[int, Sequence[str]]], key_column: int | None,
) -> KeyIndex:
    """Build the key index from (position, values) pairs. Pure, no IO."""
    index = KeyIndex()
    if key_column is None:
        return index

    for position, values in data_rows:
        cell = values[key_column] if key_column < len(values) else ""
        key = KeyValue(str(cell).strip() if cell is not None else "")
        if not key:
            index.orphaned_positions.append(RowPosition(position))
        elif key in index.positions:
            index.duplicate_positions.append(RowPosition(position))
        else:
            index.positions[key] = RowPosition(position)
    return index
