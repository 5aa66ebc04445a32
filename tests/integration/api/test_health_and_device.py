import pytest
from httpx import AsyncClient

from tests.fixtures.http import device_headers


@pytest.mark.asyncio
async def test_health(client: AsyncClient):
    response = await client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


@pytest.mark.asyncio
async def test_each_client_gets_its_own_fingerprint(client: AsyncClient):
    first = await client.get("/device/fingerprint")
    second = await client.get("/device/fingerprint")

    assert first.status_code == 200
    assert first.headers["cache-control"] == "no-store"
    assert len(first.json()["fingerprint"]) == 32
    assert first.json()["fingerprint"] != second.json()["fingerprint"]


@pytest.mark.asyncio
async def test_issued_fingerprints_keep_token_on_one_device(client: AsyncClient, admin_headers):
    """Two clients using issued fingerprints cannot share one token"""
    device_a = (await client.get("/device/fingerprint")).json()["fingerprint"]
    device_b = (await client.get("/device/fingerprint")).json()["fingerprint"]
    value = (await client.post("/admin/tokens", json={}, headers=admin_headers)).json()["value"]

    response = await client.post(
        "/tokens/login", json={"token": value}, headers=device_headers(device_a)
    )
    assert response.status_code == 200

    response = await client.post(
        "/tokens/login", json={"token": value}, headers=device_headers(device_b)
    )
    assert response.status_code == 409
    assert response.json()["error"]["code"] == "TOKEN_BOUND_TO_OTHER_DEVICE"
