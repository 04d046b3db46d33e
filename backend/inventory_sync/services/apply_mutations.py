"""Store Mutator — applies a planned batch of Update/Insert operations row by row.

Invariants:
    - Update overwrites the FULL projected row (all header columns), never a partial patch
    - Insert appends at the end of the store; ordering is restored later by the sorter
    - A failed row write never prevents attempting the remaining rows
    - Each row write is retried up to max_retries times, then recorded as failed
    - An Insert is never appended twice: before a retry the key column is re-read, and
      an append that already landed is completed as an overwrite of that row
    - Without a key column an Insert cannot be checked, so it is attempted once
    - Only successful writes count toward updated/added

Design Decisions:
    - Row-at-a-time with per-row outcome: the backing stores offer no multi-row
      transaction, so every operation is independent and individually retryable
    - Exponential backoff with ±25% jitter between retries
    - Optional pacing delay between writes to respect external rate limits
"""

import asyncio
import logging
import random
from dataclasses import dataclass

from inventory_sync.core.domain_types import OperationKind, RowPosition
from inventory_sync.core.errors import FailureCode
from inventory_sync.core.key_index import build_key_index
from inventory_sync.core.repository_protocols import TableStore
from inventory_sync.core.sync_result import MutationReport, OperationOutcome
from inventory_sync.core.upsert_planner import PlannedOperation

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WritePolicy:
    """Pacing and retry knobs for row writes."""
    delay_ms: int = 0
    max_retries: int = 2
    base_delay_ms: int = 200
    max_delay_ms: int = 5_000

    def backoff(self, attempt: int) -> int:
        """Exponential backoff with ±25% jitter."""
        delay = min(self.max_delay_ms, (2 ** attempt) * self.base_delay_ms)
        return int(delay * random.uniform(0.75, 1.25))  # nosec B311


class StoreMutator:
    """Applies PlannedOperations against a TableStore, one row at a time."""

    def __init__(
        self, store: TableStore, policy: WritePolicy | None = None,
        key_column: int | None = None,
    ):
        self.store = store
        self.policy = policy or WritePolicy()
        self.key_column = key_column

    async def apply(self, operations: list[PlannedOperation]) -> MutationReport:
        """Apply every operation, continuing past failures."""
        report = MutationReport()
        for i, operation in enumerate(operations):
            if i and self.policy.delay_ms:
                await asyncio.sleep(self.policy.delay_ms / 1000)
            report.outcomes.append(await self._apply_with_retry(operation))
        return report

    def _retries_for(self, operation: PlannedOperation) -> int:
        if operation.kind is OperationKind.INSERT and self.key_column is None:
            return 0
        return self.policy.max_retries

    async def _apply_with_retry(self, operation: PlannedOperation) -> OperationOutcome:
        retries = self._retries_for(operation)
        last_error: Exception | None = None
        for attempt in range(retries + 1):
            try:
                if attempt and operation.kind is OperationKind.INSERT:
                    landed = await self._landed_position(operation)
                    if landed is not None:
                        await self.store.write_row(landed, operation.values)
                        logger.info(
                            f"Insert for '{operation.key}' had already landed at "
                            f"row {landed}; completed as overwrite",
                            extra={"key_value": operation.key, "row_position": landed},
                        )
                        return OperationOutcome(operation, True, attempts=attempt + 1)
                await self._apply_one(operation)
                return OperationOutcome(operation, True, attempts=attempt + 1)
            except Exception as e:
                last_error = e
                if attempt < retries:
                    delay = self.policy.backoff(attempt)
                    logger.warning(
                        f"Row write failed for '{operation.key}', "
                        f"retry after {delay}ms: {e}",
                        extra={"key_value": operation.key, "attempt": attempt + 1},
                    )
                    await asyncio.sleep(delay / 1000)

        logger.error(
            f"Row write for '{operation.key}' failed after "
            f"{retries + 1} attempt(s): {last_error}",
            extra={
                "store_name": self.store.name,
                "key_value": operation.key,
                "row_position": operation.position,
                "error_code": FailureCode.STORE_WRITE_FAILURE.value,
            },
        )
        return OperationOutcome(
            operation, False, attempts=retries + 1, error=str(last_error),
        )

    async def _landed_position(self, operation: PlannedOperation) -> RowPosition | None:
        """Position of a row already carrying this Insert's key, if any."""
        rows = await self.store.get_data_rows()
        return build_key_index(rows, self.key_column).get(operation.key)

    async def _apply_one(self, operation: PlannedOperation) -> None:
        if operation.kind is OperationKind.UPDATE:
            await self.store.write_row(operation.position, operation.values)
        else:
            await self.store.append_row(operation.values)
