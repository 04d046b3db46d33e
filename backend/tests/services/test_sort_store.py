"""Store Sorter — tests for no-op conditions and warning-on-failure."""

from unittest.mock import AsyncMock

from inventory_sync.infrastructure.memory_table_store import InMemoryTableStore
from inventory_sync.services.sort_store import sort_store


async def test_sorts_data_rows_keeping_header():
    store = InMemoryTableStore("S", header=["K"], data_rows=[["b"], ["a"]])
    warning = await sort_store(store, 0, 2)
    assert warning is None
    assert store.rows == [["K"], ["a"], ["b"]]


async def test_noop_without_rows_or_key_column():
    store = InMemoryTableStore("S")
    store.sort_data_rows = AsyncMock()
    assert await sort_store(store, 0, 0) is None
    assert await sort_store(store, None, 5) is None
    store.sort_data_rows.assert_not_awaited()


async def test_failure_returns_warning():
    store = InMemoryTableStore("S", header=["K"], data_rows=[["a"]])
    store.sort_data_rows = AsyncMock(side_effect=RuntimeError("quota"))
    warning = await sort_store(store, 0, 1)
    assert warning.startswith("SORT_FAILURE")
    assert "quota" in warning
