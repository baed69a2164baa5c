import httpx
import pytest
from fastapi.testclient import TestClient

from content_gateway.main import app, get_http_client, get_settings

from tests.conftest import make_settings, unreachable

PNG = b"\x89PNG\r\n\x1a\n" + b"\x00" * 8


@pytest.fixture
def api():
    handlers = {"current": unreachable}

    async def override_client():
        async with httpx.AsyncClient(transport=httpx.MockTransport(lambda r: handlers["current"](r))) as client:
            yield client

    app.dependency_overrides[get_settings] = lambda: make_settings()
    app.dependency_overrides[get_http_client] = override_client
    with TestClient(app) as client:
        yield client, handlers
    app.dependency_overrides.clear()


def test_health(api):
    client, _ = api
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"status": "healthy", "service": "content-gateway"}


def test_root_lists_endpoints(api):
    client, _ = api
    assert "/api/quiz" in client.get("/").json()["endpoints"]


def test_quiz_fallback_over_http(api):
    client, _ = api
    r = client.post("/api/quiz", json={"topic": "sorting", "current_score": 0.5})
    assert r.status_code == 200
    data = r.json()
    assert data["origin"] == "fallback"
    assert len(data["questions"]) == 3
    assert set(data["questions"][0]) == {"id", "prompt", "options", "correct_index"}


def test_quiz_missing_topic_is_400(api):
    client, _ = api
    r = client.post("/api/quiz", json={"current_score": 0.5})
    assert r.status_code == 400
    assert r.json() == {"detail": "Missing required parameter: topic"}


def test_learning_path_post_returns_steps(api):
    client, handlers = api
    handlers["current"] = lambda request: httpx.Response(200, json=[{"title": "Intro", "resources": []}])
    r = client.post("/api/learning-path", json={"topic": "Graphs"})
    assert r.status_code == 200
    data = r.json()
    assert data["kind"] == "steps"
    assert data["origin"] == "remote"
    assert data["topic"] == "Graphs"


def test_learning_path_get_streams_image(api):
    client, handlers = api
    handlers["current"] = lambda request: httpx.Response(200, content=PNG, headers={"content-type": "image/png"})
    r = client.get("/api/learning-path", params={"topic": "quantum computing"})
    assert r.status_code == 200
    assert r.headers["content-type"] == "image/png"
    assert r.headers["content-disposition"] == "inline"
    assert r.content == PNG


def test_learning_path_get_without_topic_is_400(api):
    client, _ = api
    assert client.get("/api/learning-path").status_code == 400
