"""Tests for the health/status HTTP endpoints."""

import math
from types import SimpleNamespace

import pytest
import pytest_asyncio
from aiohttp import test_utils

from health_server import create_health_app


def fake_bot(ready=True, latency=0.05):
    return SimpleNamespace(
        is_ready=lambda: ready,
        guilds=[object(), object()],
        latency=latency,
        settings=SimpleNamespace(worker_url="https://tracker.example.workers.dev/base"),
    )


@pytest_asyncio.fixture
async def make_client():
    clients = []

    async def _make(bot):
        client = test_utils.TestClient(test_utils.TestServer(create_health_app(bot)))
        await client.start_server()
        clients.append(client)
        return client

    yield _make
    for client in clients:
        await client.close()


@pytest.mark.asyncio
async def test_root(make_client):
    client = await make_client(fake_bot())
    resp = await client.get("/")
    assert resp.status == 200
    assert await resp.text() == "OK"


@pytest.mark.asyncio
async def test_health(make_client):
    client = await make_client(fake_bot())
    resp = await client.get("/health")
    data = await resp.json()
    assert data["status"] == "healthy"
    assert data["uptime_seconds"] >= 0


@pytest.mark.asyncio
async def test_status_ready(make_client):
    client = await make_client(fake_bot())
    data = await (await client.get("/status")).json()
    assert data["status"] == "ok"
    assert data["discord_ready"] is True
    assert data["guild_count"] == 2
    assert data["latency_ms"] == 50
    assert data["tracker_host"] == "tracker.example.workers.dev"


@pytest.mark.asyncio
async def test_status_starting(make_client):
    client = await make_client(fake_bot(ready=False, latency=math.nan))
    data = await (await client.get("/status")).json()
    assert data["status"] == "starting"
    assert data["guild_count"] == 0
    assert data["latency_ms"] is None
