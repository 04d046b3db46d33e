"""In-Memory Table Store — list-backed TableStore for tests and local runs.

Invariants:
    - rows[0] is the header row once written; rows[1..N] are data rows
    - write_row replaces the whole row (never merges cells)
    - sort_data_rows is stable and leaves the header in place
    - header_style recorded only on the first header write

Design Decisions:
    - Shares order_rows with the SQL adapter: one definition of key ordering
    - Kept deliberately dumb: no locking, mirrors an unlocked shared spreadsheet
"""

from typing import Sequence

from inventory_sync.core.domain_types import HeaderStyle, RowPosition
from inventory_sync.core.sort_rows import order_rows


class InMemoryTableStore:
    """TableStore backed by a list of lists."""

    def __init__(
        self, name: str = "Inventory",
        header: Sequence[str] | None = None,
        data_rows: Sequence[Sequence[str]] | None = None,
    ):
        self.name = name
        self.rows: list[list[str]] = []
        self.header_style: HeaderStyle | None = None
        if header is not None or data_rows:
            self.rows.append(list(header or []))
            self.rows.extend(list(r) for r in (data_rows or []))

    # ─── Read ──────────────────────────────────────────────────

    async def get_header_row(self) -> list[str]:
        return list(self.rows[0]) if self.rows else []

    async def get_data_rows(self) -> list[tuple[RowPosition, list[str]]]:
        return [
            (RowPosition(i), list(row))
            for i, row in enumerate(self.rows[1:], start=1)
        ]

    # ─── Write ─────────────────────────────────────────────────

    async def write_header_row(
        self, header: Sequence[str], style: HeaderStyle | None = None,
    ) -> None:
        if not self.rows:
            self.rows.append([])
        self.rows[0] = list(header)
        if style is not None and self.header_style is None:
            self.header_style = style

    async def write_row(self, position: RowPosition, values: Sequence[str]) -> None:
        if position < 1 or position >= len(self.rows):
            raise IndexError(f"Row position {position} is out of range")
        self.rows[position] = list(values)

    async def append_row(self, values: Sequence[str]) -> RowPosition:
        if not self.rows:
            self.rows.append([])
        self.rows.append(list(values))
        return RowPosition(len(self.rows) - 1)

    async def sort_data_rows(self, key_column: int, ascending: bool = True) -> None:
        if len(self.rows) < 2:
            return
        self.rows[1:] = order_rows(self.rows[1:], key_column, ascending)

    # ─── Views ─────────────────────────────────────────────────

    def data_as_dicts(self) -> list[dict[str, str]]:
        """Data rows keyed by header, "" for cells the row does not reach."""
        if not self.rows:
            return []
        header = self.rows[0]
        return [
            {name: (row[i] if i < len(row) else "") for i, name in enumerate(header)}
            for row in self.rows[1:]
        ]
