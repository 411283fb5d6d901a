"""Tests for health probe endpoints."""

import pytest
from httpx import AsyncClient

from usermgmt.config import settings


@pytest.mark.asyncio
async def test_health(client: AsyncClient):
    response = await client.get("/health")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "UP"
    assert data["service"] == settings.app_name
    assert data["version"] == settings.app_version
    assert data["timestamp"]


@pytest.mark.asyncio
async def test_readiness(client: AsyncClient):
    response = await client.get("/health/ready")

    assert response.status_code == 200
    assert response.json() == {"status": "READY"}


@pytest.mark.asyncio
async def test_liveness(client: AsyncClient):
    response = await client.get("/health/live")

    assert response.status_code == 200
    assert response.json() == {"status": "ALIVE"}


@pytest.mark.asyncio
async def test_health_public_when_users_api_locked(client: AsyncClient, monkeypatch):
    """Probes stay reachable without credentials even when the users API is not."""
    monkeypatch.setattr(settings, "users_api_public", False)

    response = await client.get("/health")

    assert response.status_code == 200


@pytest.mark.asyncio
async def test_probe_ignores_malformed_authorization(client: AsyncClient):
    """A garbled Authorization header never fails a public probe."""
    response = await client.get("/health/live", headers={"Authorization": "Basic !!!notbase64"})

    assert response.status_code == 200
    assert response.json() == {"status": "ALIVE"}
