"""
Tests for health check endpoints.
"""

from unittest.mock import AsyncMock

import pytest
from httpx import AsyncClient
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from inventory.api.dependencies import get_db_session
from inventory.main import app

pytestmark = pytest.mark.asyncio


def override_session(session: AsyncMock):
    async def override():
        yield session

    app.dependency_overrides[get_db_session] = override


async def test_basic_health_check(client: AsyncClient) -> None:
    """
    Test the basic health check endpoint.
    """
    response = await client.get("/api/health")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"
    assert "version" in response.json()
    assert "environment" in response.json()


async def test_readiness_check(client: AsyncClient) -> None:
    """
    Test the readiness check endpoint with a responsive database.
    """
    session = AsyncMock(spec=AsyncSession)
    override_session(session)

    response = await client.get("/api/health/ready")

    assert response.status_code == 200
    components = {c["name"]: c["status"] for c in response.json()["components"]}
    assert components == {"database": "healthy"}
    session.execute.assert_awaited_once()


async def test_readiness_check_database_down(client: AsyncClient) -> None:
    """
    Test the readiness check endpoint when the database is unreachable.
    """
    session = AsyncMock(spec=AsyncSession)
    session.execute.side_effect = OperationalError("SELECT 1", {}, Exception("refused"))
    override_session(session)

    response = await client.get("/api/health/ready")

    assert response.status_code == 503
    assert response.json()["status"] == "degraded"
