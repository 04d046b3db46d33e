"""SQL Table Store — TableStore backed by SQLAlchemy (stored_tables + store_rows).

Invariants:
    - Row 0 is the header; data rows occupy positions 1..N with no gaps
    - Every write commits on its own: row writes are independent, individually retryable
    - Any SQLAlchemyError rolls the session back and surfaces as DatabaseError
    - sort_data_rows rewrites cells in place at positions 1..N (positions never move,
      so the (table_id, position) unique constraint is never transiently violated)
    - header_style is recorded only on the first header write

Design Decisions:
    - Store created lazily on first header write or append, like a worksheet that
      appears with its first row
    - Cells assigned as new lists, never mutated in place: JSON columns only track
      reassignment
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Sequence

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from inventory_sync.core.domain_types import HeaderStyle, RowPosition
from inventory_sync.core.errors import DatabaseError, ErrorContext, ResourceNotFoundError
from inventory_sync.core.sort_rows import order_rows
from inventory_sync.models.store_row import HEADER_POSITION, StoreRow
from inventory_sync.models.stored_table import StoredTable

logger = logging.getLogger(__name__)


class SqlTableStore:
    """TableStore over one named StoredTable."""

    def __init__(self, db: AsyncSession, name: str):
        self.db = db
        self.name = name
        self._table: StoredTable | None = None

    @asynccontextmanager
    async def _guard(self, operation: str) -> AsyncGenerator[None, None]:
        """Map SQLAlchemy failures to DatabaseError, rolling back first."""
        try:
            yield
        except SQLAlchemyError as e:
            await self.db.rollback()
            self._table = None
            logger.error(
                f"Store '{self.name}' {operation} failed: {e}",
                extra={"store_name": self.name},
            )
            raise DatabaseError(
                "Store operation failed", operation,
                ErrorContext(store_name=self.name),
            ) from e

    # ─── Read ──────────────────────────────────────────────────

    async def get_header_row(self) -> list[str]:
        async with self._guard("header read"):
            table = await self._find_table()
            if table is None:
                return []
            row = await self._row_at(table, HEADER_POSITION)
            return list(row.cells) if row else []

    async def get_data_rows(self) -> list[tuple[RowPosition, list[str]]]:
        async with self._guard("row read"):
            table = await self._find_table()
            if table is None:
                return []
            rows = await self._data_rows(table)
            return [(RowPosition(r.position), list(r.cells)) for r in rows]

    # ─── Write ─────────────────────────────────────────────────

    async def write_header_row(
        self, header: Sequence[str], style: HeaderStyle | None = None,
    ) -> None:
        async with self._guard("header write"):
            table = await self._get_or_create_table()
            if style is not None and table.header_style is None:
                table.header_style = style.to_dict()
            row = await self._row_at(table, HEADER_POSITION)
            if row is None:
                self.db.add(StoreRow(
                    table_id=table.id, position=HEADER_POSITION, cells=list(header),
                ))
            else:
                row.cells = list(header)
            await self.db.commit()

    async def write_row(self, position: RowPosition, values: Sequence[str]) -> None:
        async with self._guard("row write"):
            table = await self._find_table()
            row = await self._row_at(table, position) if table else None
            if row is None or position == HEADER_POSITION:
                raise ResourceNotFoundError(
                    "Row", f"{self.name}:{position}",
                    ErrorContext(store_name=self.name, row_position=position),
                )
            row.cells = list(values)
            await self.db.commit()

    async def append_row(self, values: Sequence[str]) -> RowPosition:
        async with self._guard("row append"):
            table = await self._get_or_create_table()
            result = await self.db.execute(
                select(func.max(StoreRow.position))
                .where(StoreRow.table_id == table.id),
            )
            last = result.scalar_one_or_none()
            position = (last if last is not None else HEADER_POSITION) + 1
            self.db.add(StoreRow(
                table_id=table.id, position=position, cells=list(values),
            ))
            await self.db.commit()
            return RowPosition(position)

    async def sort_data_rows(self, key_column: int, ascending: bool = True) -> None:
        async with self._guard("sort"):
            table = await self._find_table()
            if table is None:
                return
            rows = await self._data_rows(table)
            ordered = order_rows([r.cells for r in rows], key_column, ascending)
            for row, cells in zip(rows, ordered):
                if row.cells != cells:
                    row.cells = cells
            await self.db.commit()

    # ─── Helpers ───────────────────────────────────────────────

    async def header_style(self) -> dict | None:
        table = await self._find_table()
        return table.header_style if table else None

    async def _find_table(self) -> StoredTable | None:
        if self._table is None:
            result = await self.db.execute(
                select(StoredTable).where(StoredTable.name == self.name),
            )
            self._table = result.scalar_one_or_none()
        return self._table

    async def _get_or_create_table(self) -> StoredTable:
        table = await self._find_table()
        if table is None:
            table = StoredTable(name=self.name)
            self.db.add(table)
            await self.db.flush()
            self._table = table
            logger.info(
                f"Created store '{self.name}'", extra={"store_name": self.name},
            )
        return table

    async def _row_at(self, table: StoredTable, position: int) -> StoreRow | None:
        result = await self.db.execute(
            select(StoreRow)
            .where(StoreRow.table_id == table.id)
            .where(StoreRow.position == position),
        )
        return result.scalar_one_or_none()

    async def _data_rows(self, table: StoredTable) -> list[StoreRow]:
        result = await self.db.execute(
            select(StoreRow)
            .where(StoreRow.table_id == table.id)
            .where(StoreRow.position > HEADER_POSITION)
            .order_by(StoreRow.position),
        )
        return list(result.scalars().all())
