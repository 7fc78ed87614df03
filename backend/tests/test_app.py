"""
Postboard Backend — Application Wiring Tests
==============================================

What:  Health check, request-id propagation, error body shape and the
       configuration guard in create_app.
"""

import logging
from unittest.mock import AsyncMock, patch

import pytest

from postboard.config import Settings
from postboard.main import create_app
from postboard.middleware.logging import level_for_status


class TestHealth:

    @pytest.mark.asyncio
    async def test_healthy(self, client):
        with patch("postboard.routes.health.check_database_connection", new=AsyncMock()):
            response = await client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["database"] == "connected"
        assert "uptimeSeconds" in body

    @pytest.mark.asyncio
    async def test_database_down(self, client):
        failing = AsyncMock(side_effect=ConnectionError("refused"))
        with patch("postboard.routes.health.check_database_connection", new=failing):
            response = await client.get("/health")

        assert response.status_code == 503
        assert response.json()["status"] == "unhealthy"
        assert response.json()["database"] == "disconnected"


class TestRequestId:

    @pytest.mark.asyncio
    async def test_generated(self, client):
        response = await client.get("/posts")
        assert len(response.headers["X-Request-ID"]) == 8

    @pytest.mark.asyncio
    async def test_client_supplied_id_echoed(self, client):
        response = await client.get("/posts", headers={"X-Request-ID": "trace-123"})
        assert response.headers["X-Request-ID"] == "trace-123"

    @pytest.mark.asyncio
    async def test_error_body_carries_request_id(self, client):
        response = await client.get("/posts/missing", headers={"X-Request-ID": "trace-404"})

        assert response.status_code == 404
        assert response.json() == {
            "error": "Post not found",
            "code": "not_found",
            "requestId": "trace-404",
        }


class TestCreateAppGuard:

    @pytest.mark.parametrize("secret", ["", "change-me"])
    def test_refuses_to_start_without_secret(self, secret):
        with pytest.raises(ValueError):
            create_app(Settings(jwt_secret=secret))

    def test_services_built_from_settings(self):
        app = create_app(Settings(jwt_secret="abc", jwt_expiry_seconds=60, bcrypt_rounds=5))

        assert app.state.token_service.expiry_seconds == 60
        assert app.state.password_hasher.rounds == 5


class TestAccessLog:

    @pytest.mark.asyncio
    async def test_client_error_logged_as_warning(self, client, caplog):
        caplog.set_level(logging.INFO, logger="postboard.access")

        await client.get("/posts/missing", headers={"X-Request-ID": "trace-log"})

        records = [r for r in caplog.records if r.name == "postboard.access"]
        assert len(records) == 1
        assert records[0].levelno == logging.WARNING
        assert records[0].status == 404
        assert records[0].request_id == "trace-log"
        assert "Authorization" not in records[0].getMessage()

    @pytest.mark.asyncio
    async def test_health_not_logged(self, client, caplog):
        caplog.set_level(logging.INFO, logger="postboard.access")
        with patch("postboard.routes.health.check_database_connection", new=AsyncMock()):
            await client.get("/health")

        assert not [r for r in caplog.records if r.name == "postboard.access"]

    @pytest.mark.parametrize(
        "status,level",
        [(200, logging.INFO), (401, logging.WARNING), (503, logging.ERROR)],
    )
    def test_level_for_status(self, status, level):
        assert level_for_status(status) == level
