# File: backend/tests/test_api_async.py
# Version: v0.1.0
"""
Round trip through the ASGI app with httpx.AsyncClient (in-memory).
"""
import pytest
from httpx import ASGITransport, AsyncClient

from backend.app.main import app

pytestmark = pytest.mark.asyncio


async def test_create_then_search(client, make_payload):
    # `client` installs the in-memory DB override for the app
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        resp = await ac.post("/api/pathogens", json=make_payload("Pseudomonas aeruginosa", "PAO1"))
        assert resp.status_code == 201

        resp = await ac.get("/api/pathogens/search", params={"name": "AERUG"})
        assert resp.status_code == 200
        data = resp.json()
        assert [p["strain"] for p in data] == ["PAO1"]
        assert data[0]["targets"][0]["gc_content"] == 50.0
