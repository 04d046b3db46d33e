"""Sync Engine — one reconciliation pass: ingest, schema, index, plan, mutate, sort.

Invariants:
    - Never raises: every path returns a SyncResult (FAILED carries the error)
    - EmptyBatch / SchemaConflict / store read failure abort BEFORE any row mutation
    - The store is read exactly once (header + data rows) per pass
    - Header written only when the canonical header differs from the store's;
      formatting applied only on the store's first-ever write
    - total = existing data rows + successful inserts

Design Decisions:
    - Impureim sandwich: async store reads -> pure core planning -> async store writes
    - At most one pass in flight per store is the CALLER's responsibility (see the
      per-store lock in api/routes/sync.py); the engine holds no lock itself
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping

from inventory_sync.core.domain_types import HeaderStyle
from inventory_sync.core.errors import (
    EmptyBatchError, ErrorContext, InventorySyncError, StoreUnavailableError,
)
from inventory_sync.core.key_index import build_key_index
from inventory_sync.core.records import ingest_records
from inventory_sync.core.repository_protocols import TableStore
from inventory_sync.core.sync_result import SyncResult, failed_pass, summarize_pass
from inventory_sync.core.sync_schema import HeaderPlan, synchronize_header
from inventory_sync.core.upsert_planner import plan_upserts
from inventory_sync.services.apply_mutations import StoreMutator, WritePolicy
from inventory_sync.services.sort_store import sort_store

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SyncOptions:
    key_field: str = "ComputerName"
    header_style: HeaderStyle | None = field(default_factory=HeaderStyle)
    write_policy: WritePolicy = field(default_factory=WritePolicy)


class SyncEngine:
    """Reconciles machine snapshots into one TableStore."""

    def __init__(self, store: TableStore, options: SyncOptions | None = None):
        self.store = store
        self.options = options or SyncOptions()

    async def sync(self, raw_batch: Iterable[Mapping[str, Any]] | None) -> SyncResult:
        """Run one pass. Returns a structured result, never raises."""
        try:
            result = await self._run(raw_batch)
        except InventorySyncError as e:
            e.context.store_name = e.context.store_name or self.store.name
            logger.error(
                f"Sync aborted: {e.message}",
                extra={"store_name": self.store.name, "error_code": e.code},
            )
            return failed_pass(e)
        except Exception as e:
            logger.error(
                f"Unexpected failure syncing '{self.store.name}': {e}",
                exc_info=True,
            )
            return failed_pass(StoreUnavailableError(
                "unexpected store error", "sync",
                ErrorContext(store_name=self.store.name),
            ))

        logger.info(
            f"Sync complete for '{self.store.name}': {result.message}",
            extra={
                "store_name": self.store.name,
                "updated": result.updated,
                "added": result.added,
                "total": result.total,
            },
        )
        return result

    async def _run(self, raw_batch) -> SyncResult:
        key_field = self.options.key_field
        batch = ingest_records(raw_batch, key_field)
        if batch.is_empty:
            raise EmptyBatchError(ErrorContext(store_name=self.store.name))

        store_header, data_rows = await self._read_store()
        header_plan = synchronize_header(
            store_header, batch.field_names, key_field,
            store_has_data=bool(data_rows),
        )
        await self._write_header(header_plan)

        key_column = header_plan.column_of(key_field)
        key_index = build_key_index(data_rows, key_column)
        plan = plan_upserts(batch.records, header_plan.header, key_index)

        report = await StoreMutator(
            self.store, self.options.write_policy, key_column,
        ).apply(
            plan.operations,
        )
        total = len(data_rows) + report.added

        warnings = _index_warnings(key_index.orphaned_positions, key_index.duplicate_positions)
        if plan.superseded:
            warnings.append(
                f"{plan.superseded} duplicate record(s) superseded by a later "
                f"record with the same key",
            )
        sort_warning = await sort_store(self.store, key_column, total)
        if sort_warning:
            warnings.append(sort_warning)

        return summarize_pass(report, plan.failures, total, warnings)

    async def _read_store(self) -> tuple[list[str], list]:
        try:
            header = await self.store.get_header_row()
            rows = await self.store.get_data_rows()
        except InventorySyncError:
            raise
        except Exception as e:
            raise StoreUnavailableError(
                str(e), "read", ErrorContext(store_name=self.store.name),
            ) from e
        return list(header or []), list(rows or [])

    async def _write_header(self, plan: HeaderPlan) -> None:
        if not plan.changed:
            return
        style = self.options.header_style if plan.is_new_store else None
        try:
            await self.store.write_header_row(plan.header, style)
        except InventorySyncError:
            raise
        except Exception as e:
            raise StoreUnavailableError(
                str(e), "header write", ErrorContext(store_name=self.store.name),
            ) from e
        if plan.is_new_store:
            logger.info(
                f"Initialized store '{self.store.name}' with "
                f"{len(plan.header)} column(s)",
                extra={"store_name": self.store.name},
            )
        else:
            logger.info(
                f"Extended store '{self.store.name}' header with "
                f"{', '.join(plan.added_fields)}",
                extra={"store_name": self.store.name},
            )


def _index_warnings(orphaned: list, duplicates: list) -> list[str]:
    warnings = []
    if orphaned:
        warnings.append(
            f"{len(orphaned)} stored row(s) have an empty key and were left untouched",
        )
    if duplicates:
        warnings.append(
            f"{len(duplicates)} stored row(s) repeat an earlier key and were not matched",
        )
    return warnings
