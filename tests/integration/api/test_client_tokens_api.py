import pytest
from httpx import AsyncClient

from tests.fixtures.http import device_headers
from tokenvault.app.services.token_store import TokenStore

DEVICE_A = "A" * 32
DEVICE_B = "B" * 32


async def issue(client: AsyncClient, admin_headers, **body) -> str:
    response = await client.post("/admin/tokens", json=body, headers=admin_headers)
    return response.json()["value"]


@pytest.mark.asyncio
async def test_token_session_flow(client: AsyncClient, admin_headers, clock):
    """Validate, log in, block a second device, heartbeat, log out"""
    value = await issue(client, admin_headers, expiry_days=7)

    response = await client.post(
        "/tokens/validate", json={"token": value}, headers=device_headers(DEVICE_A)
    )
    assert response.json() == {"usable": True, "reason": None}

    response = await client.post(
        "/tokens/login", json={"token": value}, headers=device_headers(DEVICE_A)
    )
    assert response.status_code == 200
    assert response.json()["status"] == "active"
    assert response.json()["session_id"]

    response = await client.post(
        "/tokens/login", json={"token": value}, headers=device_headers(DEVICE_B)
    )
    assert response.status_code == 409
    assert response.json()["error"]["code"] == "TOKEN_BOUND_TO_OTHER_DEVICE"

    response = await client.post(
        "/tokens/validate", json={"token": value}, headers=device_headers(DEVICE_B)
    )
    assert response.json() == {"usable": False, "reason": "bound_to_other_device"}

    clock.advance(minutes=10)
    response = await client.post(
        "/tokens/heartbeat", json={"token": value}, headers=device_headers(DEVICE_A)
    )
    assert response.json() == {"refreshed": True}

    response = await client.post("/tokens/logout", json={"token": value})
    assert response.status_code == 200
    assert response.json()["released"] is True

    response = await client.post(
        "/tokens/validate", json={"token": value}, headers=device_headers(DEVICE_A)
    )
    assert response.json() == {"usable": False, "reason": "used"}


@pytest.mark.asyncio
async def test_login_unknown_token(client: AsyncClient):
    response = await client.post(
        "/tokens/login", json={"token": "missing"}, headers=device_headers(DEVICE_A)
    )
    assert response.status_code == 404
    assert response.json()["error"]["code"] == "TOKEN_NOT_FOUND"


@pytest.mark.asyncio
async def test_login_expired_token(client: AsyncClient, admin_headers, clock):
    value = await issue(client, admin_headers, expiry_days=1)
    clock.advance(days=2)

    response = await client.post(
        "/tokens/login", json={"token": value}, headers=device_headers(DEVICE_A)
    )
    assert response.status_code == 403
    assert response.json()["error"]["code"] == "TOKEN_EXPIRED"


@pytest.mark.asyncio
async def test_fingerprint_header_required(client: AsyncClient):
    response = await client.post("/tokens/login", json={"token": "anything"})
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "DEVICE_FINGERPRINT_REQUIRED"


@pytest.mark.asyncio
async def test_heartbeat_for_unknown_token_is_ignored(client: AsyncClient):
    response = await client.post(
        "/tokens/heartbeat", json={"token": "missing"}, headers=device_headers(DEVICE_A)
    )
    assert response.status_code == 200
    assert response.json() == {"refreshed": False}


@pytest.mark.asyncio
async def test_sessions_survive_restart(client: AsyncClient, admin_headers, uow_factory, codec):
    """A new store loading the same database sees the active binding"""
    value = await issue(client, admin_headers)
    await client.post("/tokens/login", json={"token": value}, headers=device_headers(DEVICE_A))

    reloaded = TokenStore(uow_factory, codec)
    assert await reloaded.load() == 1
    assert reloaded.get(value).device_fingerprint == DEVICE_A
