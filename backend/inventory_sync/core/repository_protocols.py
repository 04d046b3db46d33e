"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - Store IO accessed only through the TableStore Protocol
    - Implementations provided by shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, adapters need no common base class
    - Async in Protocol: boundary methods are async because implementations do IO,
      but core pure functions that consume their results are never async — the
      shell orchestrates the async calls around the pure logic
"""

from typing import Protocol, Sequence

from inventory_sync.core.domain_types import HeaderStyle, RowPosition


class TableStore(Protocol):
    """Contract for a tabular store: row 0 is the header, rows 1..N are data."""

    name: str

    async def get_header_row(self) -> list[str]: ...

    async def get_data_rows(self) -> list[tuple[RowPosition, list[str]]]: ...

    async def write_header_row(
        self, header: Sequence[str], style: HeaderStyle | None = None,
    ) -> None: ...

    async def write_row(
        self, position: RowPosition, values: Sequence[str],
    ) -> None: ...

    async def append_row(self, values: Sequence[str]) -> RowPosition: ...

    async def sort_data_rows(
        self, key_column: int, ascending: bool = True,
    ) -> None: ...
