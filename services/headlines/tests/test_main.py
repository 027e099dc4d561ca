"""Tests for the headlines HTTP surface."""
import httpx
import pytest
from fastapi.testclient import TestClient

from services.headlines.app.client import FeedClient
from services.headlines.app.controller import FeedStateController
from services.headlines.app.main import create_app
from shared.config.settings import FeedSettings, Settings
from shared.schemas.feed_state import DataState, feed_state_adapter

DOC = {
    "status": "ok",
    "articles": [
        {
            "title": "Monsoon brings dengue warning",
            "author": "Health Desk",
            "url": "https://news.test/dengue",
            "urlToImage": "http://img.test/dengue.jpg",
            "publishedAt": "2024-07-01T08:00:00Z",
        },
        {"title": "No picture here", "publishedAt": "2024-07-01T09:00:00Z"},
    ],
}


def make_app(handler):
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    controller = FeedStateController(
        FeedClient(url="https://feed.test/h.json", http_client=http_client)
    )
    settings = Settings(feed=FeedSettings(feed_url="https://feed.test/h.json"))
    return create_app(controller=controller, settings=settings, check_endpoint=False)


def test_app_creation():
    """Module-level app can be imported."""
    from services.headlines.app.main import app

    assert app is not None
    assert app.title == "Health Headlines Service"


def test_liveness():
    with TestClient(make_app(lambda r: httpx.Response(200, json=DOC))) as client:
        resp = client.get("/headlines/health/live")

    assert resp.status_code == 200
    assert resp.json() == {"status": "alive", "service": "headlines"}


def test_refresh_returns_data_snapshot():
    with TestClient(make_app(lambda r: httpx.Response(200, json=DOC))) as client:
        resp = client.post("/headlines/refresh")
        current = client.get("/headlines").json()
        ready = client.get("/headlines/health/ready").json()
        health = client.get("/headlines/health").json()

    body = resp.json()
    assert resp.status_code == 200
    assert body["kind"] == "data"
    assert len(body["articles"]) == 1
    article = body["articles"][0]
    assert article["image_url"] == "https://img.test/dengue.jpg"
    assert article["author"] == "Health Desk"
    assert article["description"] == ""
    assert current == body
    assert isinstance(feed_state_adapter.validate_python(body), DataState)
    assert ready["status"] == "ready"
    assert health["status"] == "healthy"
    assert [c["name"] for c in health["checks"]] == ["feed_state"]


def test_refresh_reports_upstream_error():
    with TestClient(make_app(lambda r: httpx.Response(404))) as client:
        body = client.post("/headlines/refresh").json()
        ready = client.get("/headlines/health/ready").json()
        health = client.get("/headlines/health").json()

    assert body["kind"] == "error"
    assert body["error_type"] == "FetchError"
    assert "404" in body["message"]
    assert ready["status"] == "not_ready"
    assert health["status"] == "unhealthy"


@pytest.mark.parametrize("path", ["/headlines", "/headlines/health/ready"])
def test_read_endpoints_respond_before_first_refresh(path):
    with TestClient(make_app(lambda r: httpx.Response(200, json=DOC))) as client:
        resp = client.get(path)

    assert resp.status_code == 200
