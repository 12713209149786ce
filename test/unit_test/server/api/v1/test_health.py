"""Unit tests for the health endpoints."""

from unittest.mock import AsyncMock

import pytest
from sqlalchemy.exc import OperationalError

from docvault.core.database import get_legacy_session
from docvault.server.core import constant
from docvault.server.main import app

pytestmark = pytest.mark.asyncio


class TestHealthEndpoints:
    async def test_health_check(self, client):
        response = await client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "ok", "databases": {"primary": "ok", "legacy": "ok"}}
        assert "x-process-time" in response.headers

    async def test_legacy_database_down(self, client):
        broken = AsyncMock()
        broken.execute.side_effect = OperationalError("SELECT 1", {}, Exception("connection refused"))

        async def broken_legacy_session():
            yield broken

        app.dependency_overrides[get_legacy_session] = broken_legacy_session

        response = await client.get("/health")

        assert response.status_code == 503
        assert response.json() == {"status": "degraded", "databases": {"primary": "ok", "legacy": "unavailable"}}

    async def test_version(self, client):
        response = await client.get("/version")

        assert response.status_code == 200
        assert response.json() == {"version": constant.VERSION, "schema_version": constant.SCHEMA_VERSION}
