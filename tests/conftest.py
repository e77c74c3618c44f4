"""Shared fixtures: a fake tracker endpoint and roster payloads."""

import json

import aiohttp
import pytest
import pytest_asyncio
from aiohttp import web
from aiohttp.test_utils import TestServer

from tracker_api import TrackerClient


class FakeTracker:
    """Serves whatever body the test configures at ``/?action=list``."""

    def __init__(self):
        self.status = 200
        self.body = json.dumps({"success": True, "players": []})
        self.queries = []

    def respond_json(self, payload, status=200):
        self.body = json.dumps(payload)
        self.status = status

    def respond_text(self, text, status=200):
        self.body = text
        self.status = status

    async def handle(self, request):
        self.queries.append(dict(request.query))
        return web.Response(text=self.body, status=self.status, content_type="application/json")


def make_player(real_name="Trinity", in_game_name="Tri", status="online", score=1500,
                server_name="S1", team_name="Red"):
    return {
        "realName": real_name,
        "inGameName": in_game_name,
        "serverName": server_name,
        "teamName": team_name,
        "score": score,
        "status": status,
    }


@pytest.fixture
def roster_payload():
    return {
        "success": True,
        "players": [
            make_player(),
            make_player("Neo", "TheOne", "offline", 999, "S2", "Blue"),
            make_player("Morpheus", "Captain", "online", 2500, "S1", "Blue"),
        ],
    }


@pytest_asyncio.fixture
async def fake_tracker():
    tracker = FakeTracker()
    app = web.Application()
    app.router.add_get("/", tracker.handle)
    server = TestServer(app)
    await server.start_server()
    tracker.base_url = f"http://{server.host}:{server.port}"
    try:
        yield tracker
    finally:
        await server.close()


@pytest_asyncio.fixture
async def http_session():
    session = aiohttp.ClientSession()
    try:
        yield session
    finally:
        await session.close()


@pytest_asyncio.fixture
async def tracker_client(fake_tracker, http_session):
    return TrackerClient(http_session, fake_tracker.base_url, timeout=5)
