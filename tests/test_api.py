"""Tests API / API tests."""

import pytest

from tripcapture.exceptions import StorageError


@pytest.mark.asyncio
async def test_root(client):
    resp = await client.get("/api/")
    assert resp.status_code == 200
    assert resp.json()["status"] == "running"


@pytest.mark.asyncio
async def test_acquisition_on_entry(client, connectivity):
    resp = await client.get("/api/acquisition/")
    assert resp.status_code == 200
    data = resp.json()
    assert data["network_status"] == "Connected"
    assert data["location"]["latitude"] == "12.345600"
    assert data["retry_enabled"] is True

    # pas de nouvelle acquisition / no re-acquisition on re-entry
    await client.get("/api/acquisition/")
    assert connectivity.calls == 1

    await client.post("/api/acquisition/refresh")
    assert connectivity.calls == 2


@pytest.mark.asyncio
async def test_validate_trip_id(client):
    resp = await client.post("/api/trip-ids/validate", json={"candidate": "1abc"})
    assert resp.status_code == 200
    data = resp.json()
    assert data["is_valid"] is False
    assert data["message"] == "Trip ID must start with a letter"
    assert data["can_save"] is False

    resp = await client.post("/api/trip-ids/validate", json={"candidate": ""})
    data = resp.json()
    assert data["message"] is None
    assert {r["state"] for r in data["rule_results"]} == {"pending"}


@pytest.mark.asyncio
async def test_save_and_list(client):
    await client.get("/api/acquisition/")
    resp = await client.post("/api/trips/", json={"trip_id": "abc-1"})
    assert resp.status_code == 201
    data = resp.json()
    assert data["record"]["trip_id"] == "abc-1"
    assert data["record"]["coordinates"] == "12.345600, 98.765400"
    assert data["record_count"] == 1
    assert data["message"] == "Trip 'abc-1' saved to local database"

    resp = await client.get("/api/trips/")
    assert [r["trip_id"] for r in resp.json()] == ["abc-1"]

    resp = await client.get("/api/trips/count")
    assert resp.json() == {"count": 1}

    record_id = data["record"]["id"]
    resp = await client.get(f"/api/trips/{record_id}")
    assert resp.status_code == 200
    assert resp.json()["network_status"] == "Connected"


@pytest.mark.asyncio
async def test_save_invalid_trip_id(client):
    await client.get("/api/acquisition/")
    resp = await client.post("/api/trips/", json={"trip_id": "ab"})
    assert resp.status_code == 422
    assert resp.json()["detail"] == "Please enter a valid Trip ID"


@pytest.mark.asyncio
async def test_save_without_location(client, location_provider):
    location_provider.location = None
    await client.get("/api/acquisition/")
    resp = await client.post("/api/trips/", json={"trip_id": "abc-1"})
    assert resp.status_code == 422
    assert resp.json()["detail"] == "Please wait for location to be acquired"


@pytest.mark.asyncio
async def test_get_missing_record(client):
    resp = await client.get("/api/trips/999")
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_update_and_delete(client):
    await client.get("/api/acquisition/")
    record_id = (await client.post("/api/trips/", json={"trip_id": "abc-1"})).json()["record"]["id"]

    resp = await client.put(f"/api/trips/{record_id}", json={"trip_id": "abc-2"})
    assert resp.status_code == 200
    assert resp.json()["trip_id"] == "abc-2"

    resp = await client.delete(f"/api/trips/{record_id}")
    assert resp.status_code == 204
    resp = await client.delete(f"/api/trips/{record_id}")
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_summary(client):
    await client.get("/api/acquisition/")
    for n in range(3):
        await client.post("/api/trips/", json={"trip_id": f"trip-{n}"})
    resp = await client.get("/api/trips/summary", params={"limit": 2})
    data = resp.json()
    assert data["total"] == 3
    assert [r["trip_id"] for r in data["records"]] == ["trip-1", "trip-2"]


@pytest.mark.asyncio
async def test_storage_error_is_503(client, store, monkeypatch):
    async def broken_count():
        raise StorageError("Unable to open local database: disk gone")

    monkeypatch.setattr(store, "count", broken_count)
    resp = await client.get("/api/trips/count")
    assert resp.status_code == 503
    assert resp.json()["detail"] == "Unable to open local database: disk gone"


@pytest.mark.asyncio
async def test_report_location(client):
    resp = await client.post("/api/sensors/location", json={"latitude": 48.8566, "longitude": 2.3522, "accuracy": 8})
    assert resp.status_code == 202
    resp = await client.post("/api/sensors/location", json={"latitude": 120, "longitude": 2.3522})
    assert resp.status_code == 422


async def _saved_record_id(client) -> int:
    await client.get("/api/acquisition/")
    resp = await client.post("/api/trips/", json={"trip_id": "abc-1"})
    return resp.json()["record"]["id"]


@pytest.mark.asyncio
async def test_update_rejects_null_fields(client):
    record_id = await _saved_record_id(client)
    resp = await client.put(f"/api/trips/{record_id}", json={"trip_id": None})
    assert resp.status_code == 422
    assert "trip_id" in resp.json()["detail"]
    assert (await client.get(f"/api/trips/{record_id}")).json()["trip_id"] == "abc-1"


@pytest.mark.asyncio
async def test_update_rejects_invalid_trip_id(client):
    record_id = await _saved_record_id(client)
    resp = await client.put(f"/api/trips/{record_id}", json={"trip_id": "1$ bad"})
    assert resp.status_code == 422
    assert resp.json()["detail"] == "Please enter a valid Trip ID"
    assert (await client.get(f"/api/trips/{record_id}")).json()["trip_id"] == "abc-1"


@pytest.mark.asyncio
async def test_update_network_status_must_be_known(client):
    record_id = await _saved_record_id(client)
    resp = await client.put(f"/api/trips/{record_id}", json={"network_status": "Banana"})
    assert resp.status_code == 422

    resp = await client.put(f"/api/trips/{record_id}", json={"network_status": "Offline"})
    assert resp.status_code == 200
    assert resp.json()["network_status"] == "Offline"


@pytest.mark.asyncio
async def test_storage_error_body_hides_sql(client, store, monkeypatch):
    async def broken_save(record):
        raise StorageError(
            "Database operation failed (IntegrityError)",
            detail="NOT NULL constraint failed: trip_records.trip_id [SQL: INSERT INTO trip_records ...]",
        )

    monkeypatch.setattr(store, "save", broken_save)
    await client.get("/api/acquisition/")
    resp = await client.post("/api/trips/", json={"trip_id": "abc-1"})
    assert resp.status_code == 503
    assert resp.json()["detail"] == "Database operation failed (IntegrityError)"
    assert "INSERT" not in resp.text


def test_module_loggers_hang_under_app_logger():
    import logging

    from tripcapture.main import logger

    assert logger.name == "tripcapture"
    assert logging.getLogger("tripcapture.services.record_store").parent is logger


@pytest.mark.asyncio
async def test_cors_preflight_and_request_id(client):
    resp = await client.options("/api/trips/1", headers={
        "Origin": "http://localhost:5173",
        "Access-Control-Request-Method": "PUT",
        "Access-Control-Request-Headers": "Content-Type",
    })
    assert resp.status_code == 200
    assert "PUT" in resp.headers["access-control-allow-methods"]

    resp = await client.get("/api/", headers={"X-Request-ID": "req-42"})
    assert resp.headers["X-Request-ID"] == "req-42"
