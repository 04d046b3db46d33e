"""Store Registry — resolves a store name to a TableStore adapter for the configured backend.

Invariants:
    - SQL backend: a fresh SqlTableStore per request, bound to that request's DB session
    - Memory backend: one InMemoryTableStore per name for the life of the process

Design Decisions:
    - _memory_stores as module-level dict: deliberate exception to the no-global-state
      rule (single-process uvicorn; memory backend is for local runs and demos only)
"""

from sqlalchemy.ext.asyncio import AsyncSession

from inventory_sync.core.domain_types import StoreBackend
from inventory_sync.core.repository_protocols import TableStore
from inventory_sync.infrastructure.memory_table_store import InMemoryTableStore
from inventory_sync.infrastructure.sql_table_store import SqlTableStore

_memory_stores: dict[str, InMemoryTableStore] = {}


def open_store(
    backend: StoreBackend, name: str, db: AsyncSession | None = None,
) -> TableStore:
    """Return the adapter for store `name` on `backend`."""
    if backend is StoreBackend.MEMORY:
        return _memory_stores.setdefault(name, InMemoryTableStore(name))
    if db is None:
        raise RuntimeError("SQL store backend requires a database session")
    return SqlTableStore(db, name)


def reset_memory_stores() -> None:
    _memory_stores.clear()
