"""Infrastructure test fixtures — fresh in-memory SQLite per test."""

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)

from inventory_sync.db.base import Base
import inventory_sync.models  # noqa: F401


@pytest.fixture
async def sqlite_engine():
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
async def sqlite_session(sqlite_engine):
    factory = async_sessionmaker(
        sqlite_engine, class_=AsyncSession, expire_on_commit=False,
    )
    async with factory() as session:
        yield session
