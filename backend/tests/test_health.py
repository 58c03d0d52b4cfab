# tests/test_health.py

from __future__ import annotations

import httpx
import pytest


@pytest.mark.asyncio
async def test_health(client: httpx.AsyncClient) -> None:
    resp = await client.get("/health")

    assert resp.status_code == 200
    assert resp.json()["status"] == "healthy"


@pytest.mark.asyncio
async def test_ready_reports_database_and_ai(client: httpx.AsyncClient) -> None:
    resp = await client.get("/health/ready")

    assert resp.status_code == 200
    body = resp.json()
    assert body["status"] == "healthy"
    assert body["checks"] == {"database": "healthy", "ai": "configured"}


@pytest.mark.asyncio
async def test_ready_without_ai_key_is_still_healthy(
    client_without_ai: httpx.AsyncClient,
) -> None:
    body = (await client_without_ai.get("/health/ready")).json()

    assert body["status"] == "healthy"
    assert body["checks"]["ai"] == "not configured"


@pytest.mark.asyncio
async def test_request_id_is_echoed_or_generated(client: httpx.AsyncClient) -> None:
    resp = await client.get("/health", headers={"X-Request-ID": "trace-123"})
    assert resp.headers["X-Request-ID"] == "trace-123"

    resp = await client.get("/health", headers={"X-Request-ID": "bad id with spaces"})
    generated = resp.headers["X-Request-ID"]
    assert generated != "bad id with spaces"
    assert len(generated) == 32


@pytest.mark.asyncio
async def test_cors_preflight_from_local_origin(client: httpx.AsyncClient) -> None:
    resp = await client.options(
        "/tasks",
        headers={
            "Origin": "http://localhost:5173",
            "Access-Control-Request-Method": "PUT",
            "Access-Control-Request-Headers": "Content-Type",
        },
    )

    assert resp.status_code == 200
    assert resp.headers["access-control-allow-origin"] == "http://localhost:5173"
    assert "PUT" in resp.headers["access-control-allow-methods"]


@pytest.mark.asyncio
async def test_cors_rejects_remote_origin(client: httpx.AsyncClient) -> None:
    resp = await client.get("/tasks", headers={"Origin": "https://example.com"})

    assert resp.status_code == 200
    assert "access-control-allow-origin" not in resp.headers
