"""Service test fixtures — async DB + FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_store_session dependency overridden to use the test DB session
    - db_manager patched so readiness probes see the test engine
    - Per-store locks and memory stores cleared between tests

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for route tests
      (PostgreSQL-specific features not exercised here)
"""

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from httpx import ASGITransport, AsyncClient

from inventory_sync.db.base import Base
import inventory_sync.models  # noqa: F401
import inventory_sync.infrastructure.database as db_module
from inventory_sync.api.routes import sync as sync_routes
from inventory_sync.infrastructure.database import DatabaseSessionManager
from inventory_sync.infrastructure.memory_table_store import InMemoryTableStore
from inventory_sync.infrastructure.store_registry import reset_memory_stores
from inventory_sync.main import app


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
def memory_store():
    return InMemoryTableStore("Inventory")


@pytest.fixture
async def client(test_engine, test_session_factory):
    """FastAPI test client with the store session overridden."""
    async def override_store_session():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[sync_routes.get_store_session] = override_store_session

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager
    sync_routes._store_locks.clear()
    reset_memory_stores()
