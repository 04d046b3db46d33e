"""Sync Routes — HTTP contract of the sync and store-view endpoints (SQL backend).

Tests cover:
    - POST creates the store, returns counts
    - Second POST updates in place; GET shows sorted rows and grown header
    - EmptyBatch → 400, SchemaConflict → 409, both with the result shape
    - Invalid body → 400 VALIDATION_ERROR
    - GET unknown store → 404
    - Memory backend routes through the same engine
    - Health and readiness probes
"""

from inventory_sync.api.routes import sync as sync_routes
from inventory_sync.config import Settings

KEY = "ComputerName"


async def test_first_sync_creates_store(client):
    res = await client.post(
        "/api/v1/stores/Inventory/sync",
        json={"records": [{KEY: "PC1", "CPU": "X"}]},
    )
    assert res.status_code == 200
    body = res.json()
    assert body["status"] == "success"
    assert (body["updated"], body["added"], body["total"]) == (0, 1, 1)


async def test_second_sync_updates_and_sorts(client):
    await client.post(
        "/api/v1/stores/Inventory/sync",
        json={"records": [{KEY: "PC2", "CPU": "X"}, {KEY: "PC1", "CPU": "X"}]},
    )
    res = await client.post(
        "/api/v1/stores/Inventory/sync",
        json={"records": [
            {KEY: "PC1", "CPU": "Y", "IPAddresses": ["10.0.0.1", "10.0.0.2"]},
            {KEY: "PC0", "CPU": "Z"},
        ]},
    )
    body = res.json()
    assert (body["updated"], body["added"], body["total"]) == (1, 1, 3)

    view = (await client.get("/api/v1/stores/Inventory")).json()
    assert view["header"] == [KEY, "CPU", "IPAddresses"]
    assert [row[0] for row in view["rows"]] == ["PC0", "PC1", "PC2"]
    assert view["rows"][1] == ["PC1", "Y", "10.0.0.1\n10.0.0.2"]
    assert view["rows"][2] == ["PC2", "X"]
    assert view["total"] == 3


async def test_missing_key_record_reported_as_partial(client):
    res = await client.post(
        "/api/v1/stores/Inventory/sync",
        json={"records": [{KEY: "", "CPU": "X"}, {KEY: "PC1"}]},
    )
    body = res.json()
    assert res.status_code == 200
    assert body["status"] == "partial"
    assert body["skipped"] == 1
    assert body["added"] == 1


async def test_empty_batch_is_400_with_result_shape(client):
    res = await client.post("/api/v1/stores/Inventory/sync", json={"records": []})
    assert res.status_code == 400
    body = res.json()
    assert body["status"] == "failed"
    assert body["error"]["code"] == "EMPTY_BATCH"
    assert body["total"] == 0


async def test_schema_conflict_is_409(client):
    res = await client.post(
        "/api/v1/stores/Inventory/sync", json={"records": [{"CPU": "X"}]},
    )
    assert res.status_code == 409
    assert res.json()["error"]["code"] == "SCHEMA_CONFLICT"


async def test_invalid_body_is_validation_error(client):
    res = await client.post(
        "/api/v1/stores/Inventory/sync", json={"records": "not-a-list"},
    )
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"


async def test_read_unknown_store_is_404(client):
    res = await client.get("/api/v1/stores/Nowhere")
    assert res.status_code == 404
    assert res.json()["error"]["code"] == "RESOURCE_NOT_FOUND"


async def test_memory_backend_serves_same_contract(client, monkeypatch):
    settings = Settings(store_backend="memory")
    monkeypatch.setattr(sync_routes, "get_settings", lambda: settings)

    res = await client.post(
        "/api/v1/stores/Scratch/sync", json={"records": [{KEY: "PC1"}]},
    )
    assert res.json()["added"] == 1
    view = (await client.get("/api/v1/stores/Scratch")).json()
    assert view["rows"] == [["PC1"]]


async def test_health_endpoints(client):
    live = await client.get("/api/v1/health/")
    assert live.status_code == 200
    assert live.json()["status"] == "healthy"

    ready = await client.get("/api/v1/health/ready")
    assert ready.status_code == 200
    assert ready.json()["checks"]["database"] == "healthy"


async def test_blank_field_name_dropped_rest_of_record_written(client):
    res = await client.post(
        "/api/v1/stores/Inventory/sync",
        json={"records": [{KEY: "PC1", "  ": "lost", "CPU": "X"}]},
    )
    assert res.status_code == 200
    assert res.json()["status"] == "success"

    view = (await client.get("/api/v1/stores/Inventory")).json()
    assert view["header"] == [KEY, "CPU"]
    assert view["rows"] == [["PC1", "X"]]
