"""Store Sync Routes — reconcile a snapshot batch into a named store, and read it back.

Invariants:
    - POST always answers with the SyncResponse shape; failed passes use the error's
      HTTP status (400 EmptyBatch, 409 SchemaConflict, 503 store unavailable)
    - At most one sync pass per store name in flight within this process
    - GET returns 404 for a store that was never written

Design Decisions:
    - _store_locks as module-level dict: single-process uvicorn; multi-process
      deployments must serialize writers externally
    - Store resolved through a dependency so tests can swap the DB session
"""

import asyncio
import logging
from typing import AsyncGenerator

from fastapi import APIRouter, Depends, Path, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

import inventory_sync.infrastructure.database as database
from inventory_sync.config import Settings, get_settings
from inventory_sync.core.domain_types import StoreBackend, SyncStatus
from inventory_sync.core.errors import ResourceNotFoundError
from inventory_sync.core.repository_protocols import TableStore
from inventory_sync.infrastructure.store_registry import open_store
from inventory_sync.schemas.sync import StoreView, SyncRequest, SyncResponse
from inventory_sync.services.apply_mutations import WritePolicy
from inventory_sync.services.sync_engine import SyncEngine, SyncOptions

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/stores", tags=["stores"])

_store_locks: dict[str, asyncio.Lock] = {}

STORE_NAME = Path(
    ..., min_length=1, max_length=100, pattern=r"^[A-Za-z0-9_.\- ]+$",
)


async def get_store_session() -> AsyncGenerator[AsyncSession | None, None]:
    """DB session for the SQL backend, None for the memory backend."""
    if get_settings().store_backend is StoreBackend.MEMORY:
        yield None
        return
    if not database.db_manager:
        raise RuntimeError("Database not initialized")
    async with database.db_manager.session() as session:
        yield session


async def get_store(
    store_name: str = STORE_NAME,
    db: AsyncSession | None = Depends(get_store_session),
) -> TableStore:
    return open_store(get_settings().store_backend, store_name, db)


def build_sync_options(settings: Settings) -> SyncOptions:
    return SyncOptions(
        key_field=settings.key_field,
        header_style=settings.header_style,
        write_policy=WritePolicy(
            delay_ms=settings.row_write_delay_ms,
            max_retries=settings.row_write_max_retries,
            base_delay_ms=settings.row_write_base_delay_ms,
            max_delay_ms=settings.row_write_max_delay_ms,
        ),
    )


@router.post(
    "/{store_name}/sync",
    response_model=SyncResponse,
    responses={400: {}, 409: {}, 503: {}},
)
async def sync_store(body: SyncRequest, store: TableStore = Depends(get_store)):
    """Reconcile a batch of machine snapshots into the store."""
    lock = _store_locks.setdefault(store.name, asyncio.Lock())
    async with lock:
        engine = SyncEngine(store, build_sync_options(get_settings()))
        result = await engine.sync(body.records)

    status_code = status.HTTP_200_OK
    if result.status is SyncStatus.FAILED and result.error is not None:
        status_code = result.error.http_status
    return JSONResponse(status_code=status_code, content=result.to_response())


@router.get("/{store_name}", response_model=StoreView)
async def read_store(store: TableStore = Depends(get_store)):
    """Header plus data rows in stored order."""
    header = await store.get_header_row()
    rows = await store.get_data_rows()
    if not header and not rows:
        raise ResourceNotFoundError("Store", store.name)
    return StoreView(
        name=store.name,
        header=header,
        rows=[values for _, values in rows],
        total=len(rows),
    )
