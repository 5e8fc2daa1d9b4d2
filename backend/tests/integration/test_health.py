"""Tests for the health check endpoint."""

import pytest
from httpx import ASGITransport, AsyncClient

from records_api.config import Settings
from records_api.infrastructure.database import Database
from records_api.main import app, create_app


@pytest.mark.asyncio
async def test_health_check_returns_200():
    """Health endpoint should return 200 with status, version, and environment."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get("/api/v1/health")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert "version" in data
    assert "environment" in data
    assert data["database"] == "closed"


@pytest.mark.asyncio
async def test_health_check_reports_open_database(database: Database):
    health_app = create_app(settings=Settings(database_url=database.url), database=database)
    transport = ASGITransport(app=health_app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get("/api/v1/health")

    assert response.json()["database"] == "open"


@pytest.mark.asyncio
async def test_health_check_reports_the_app_settings():
    settings = Settings(app_version="9.9.9", app_env="staging")
    health_app = create_app(settings=settings)
    transport = ASGITransport(app=health_app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get("/api/v1/health")

    data = response.json()
    assert data["version"] == "9.9.9"
    assert data["environment"] == "staging"
