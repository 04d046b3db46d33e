"""Store Sorter — reorders data rows by key after mutation.

Invariants:
    - Header row is never moved
    - No-op (not an error) when the store has no data rows or the key column is unknown
    - A sort failure is a WARNING: data integrity does not depend on row order

Design Decisions:
    - Returns a warning string instead of raising so the engine keeps its mutation counts
"""

import logging

from inventory_sync.core.errors import FailureCode
from inventory_sync.core.repository_protocols import TableStore

logger = logging.getLogger(__name__)


async def sort_store(
    store: TableStore, key_column: int | None, data_row_count: int,
) -> str | None:
    """Sort data rows ascending by key column. Returns a warning on failure."""
    if key_column is None or data_row_count < 1:
        return None
    try:
        await store.sort_data_rows(key_column, ascending=True)
    except Exception as e:
        logger.warning(
            f"Sorting store '{store.name}' failed: {e}",
            extra={
                "store_name": store.name,
                "error_code": FailureCode.SORT_FAILURE.value,
            },
        )
        return f"{FailureCode.SORT_FAILURE.value}: rows left unsorted ({e})"
    return None
