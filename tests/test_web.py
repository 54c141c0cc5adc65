"""Tests for the web panel endpoints."""

import asyncio

import pytest
from fastapi.testclient import TestClient

from branches.suggestions.models import MessageRef, SuggestionStatus
from branches.suggestions.store import SuggestionStore
from web import create_app

REF = MessageRef(channel_id="10", message_id="20")


async def _seed(store: SuggestionStore) -> None:
    await store.initialize()
    for content in ("Add dark mode", "Add light mode", "Add a music bot"):
        await store.create("42", "member#0001", content, REF)
    await store.set_status(1, SuggestionStatus.APPROVED)
    await store.set_status(2, SuggestionStatus.DENIED)


@pytest.fixture
def client(db_path):
    app = create_app(SuggestionStore(db_path), site_title="Test Panel", brand_color="#123456", logo_url="")
    with TestClient(app) as test_client:
        yield test_client


def test_stats_on_empty_store(client):
    response = client.get("/api/stats")

    assert response.status_code == 200
    assert response.json() == {"total": 0, "pending": 0, "approved": 0}


def test_stats_counts(db_path):
    store = SuggestionStore(db_path)
    asyncio.run(_seed(store))

    with TestClient(create_app(store)) as client:
        response = client.get("/api/stats")

    assert response.json() == {"total": 3, "pending": 1, "approved": 1}


def test_stats_store_failure(tmp_path):
    app = create_app(SuggestionStore(str(tmp_path)), static_dir=None)

    # No lifespan: the database would fail to initialize
    client = TestClient(app)
    response = client.get("/api/stats")

    assert response.status_code == 503


def test_site_info(client):
    response = client.get("/site-info")

    assert response.json() == {"siteTitle": "Test Panel", "brandColor": "#123456", "logoUrl": ""}


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_panel_is_served(client):
    response = client.get("/")

    assert response.status_code == 200
    assert "total" in response.text

    script = client.get("/app.js")
    assert script.status_code == 200
    assert "/api/stats" in script.text
