from __future__ import annotations

import pytest
from httpx import ASGITransport, AsyncClient

from src.infrastructure.db.session import create_schema
from src.interfaces.http.main import create_app

LOT_PAYLOAD = {
    "LotID": "L-7",
    "PropagationMethod": "Seed",
    "PropagationDate": "2024-05-01",
    "PropagationQuantity": "5 grams",
}


@pytest.mark.asyncio
async def test_lot_lifecycle(client):
    create_response = await client.post("/api/v1/lots/", json=LOT_PAYLOAD)
    assert create_response.status_code == 201
    assert create_response.json() == {**LOT_PAYLOAD, "docType": "lot"}

    exists_response = await client.get("/api/v1/lots/L-7/exists")
    assert exists_response.json() == {"exists": True}

    transfer_response = await client.post(
        "/api/v1/lots/L-7/transfer", json={"new_owner": "Valley Growers"}
    )
    assert transfer_response.status_code == 204
    read_response = await client.get("/api/v1/lots/L-7")
    assert read_response.status_code == 200
    assert read_response.json()["Owner"] == "Valley Growers"

    update_response = await client.put(
        "/api/v1/lots/L-7",
        json={
            "PropagationMethod": "Propagated Cuttings",
            "PropagationDate": "2024-06-01",
            "PropagationQuantity": "30 plants",
        },
    )
    assert update_response.status_code == 204
    updated = (await client.get("/api/v1/lots/L-7")).json()
    assert updated["PropagationQuantity"] == "30 plants"
    assert "Owner" not in updated

    delete_response = await client.delete("/api/v1/lots/L-7")
    assert delete_response.status_code == 204
    missing = await client.get("/api/v1/lots/L-7")
    assert missing.status_code == 404
    assert missing.json()["code"] == "not_found"
    assert (await client.get("/api/v1/lots/L-7/exists")).json() == {"exists": False}


@pytest.mark.asyncio
async def test_operations_on_missing_lot_return_404(client):
    update_response = await client.put(
        "/api/v1/lots/none",
        json={
            "PropagationMethod": "Seed",
            "PropagationDate": "2024-01-01",
            "PropagationQuantity": "1 gram",
        },
    )
    assert update_response.status_code == 404
    assert update_response.json() == {
        "code": "not_found",
        "message": "Lot none does not exist",
        "details": {"lot_id": "none"},
    }
    assert (await client.delete("/api/v1/lots/none")).status_code == 404
    transfer_response = await client.post(
        "/api/v1/lots/none/transfer", json={"new_owner": "x"}
    )
    assert transfer_response.status_code == 404


@pytest.mark.asyncio
async def test_init_ledger_and_list_all(client, memory_store):
    assert (await client.get("/api/v1/lots/")).json() == []

    init_response = await client.post("/api/v1/ledger/init")
    assert init_response.status_code == 204
    await memory_store.put("legacy", b"plain text")

    entries = (await client.get("/api/v1/lots/")).json()
    assert [entry["Key"] for entry in entries] == ["001", "002", "003", "004", "005", "legacy"]
    assert entries[0]["Record"] == {
        "LotID": "001",
        "PropagationMethod": "Seed",
        "PropagationDate": "2021-03-05",
        "PropagationQuantity": "1 gram",
        "docType": "lot",
    }
    assert entries[-1]["Record"] == "plain text"


@pytest.mark.asyncio
async def test_empty_lot_id_is_rejected(client):
    response = await client.post("/api/v1/lots/", json={**LOT_PAYLOAD, "LotID": ""})
    assert response.status_code == 422
    assert response.json()["code"] == "validation_error"


@pytest.mark.asyncio
async def test_unavailable_store_returns_503(client, memory_store):
    memory_store.available = False
    response = await client.get("/api/v1/lots/001")
    assert response.status_code == 503
    assert response.json()["code"] == "store_unavailable"


@pytest.mark.asyncio
async def test_health(client):
    response = await client.get("/api/v1/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


@pytest.mark.asyncio
async def test_sqlalchemy_backed_app(test_settings):
    app = create_app(settings=test_settings)
    await create_schema(app.state.engine)
    try:
        async with AsyncClient(
            transport=ASGITransport(app=app), base_url="http://testserver"
        ) as client:
            assert (await client.post("/api/v1/ledger/init")).status_code == 204
            assert (await client.post("/api/v1/lots/", json=LOT_PAYLOAD)).status_code == 201

            entries = (await client.get("/api/v1/lots/")).json()
            assert [entry["Key"] for entry in entries] == [
                "001",
                "002",
                "003",
                "004",
                "005",
                "L-7",
            ]
            read_response = await client.get("/api/v1/lots/003")
            assert read_response.json()["PropagationQuantity"] == "2 grams"
    finally:
        await app.state.engine.dispose()
