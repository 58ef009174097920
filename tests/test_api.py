import pytest
from fastapi.testclient import TestClient

from cli.api import create_app
from core.runtime.graph_info import build_and_validate
from core.session_manager import SessionManager


@pytest.fixture
def client(sample_config):
    manager = SessionManager(build_and_validate(sample_config), seed=0)
    return TestClient(create_app(manager))


def test_health(client):
    assert client.get("/health").json() == {"ok": True}


def test_conversation_over_http(client):
    res = client.post("/sessions", json={"session_id": "s1"})
    assert res.status_code == 200
    data = res.json()["data"]
    assert data["message"]["text"] == "Hello!"
    assert data["session"]["id"] == "s1"

    res = client.post("/sessions/s1/messages", json={"message": "rain"})
    assert res.status_code == 200
    data = res.json()["data"]
    assert data["node"]["current"] == "weather"
    assert data["message"]["text"] == "It is sunny."
    assert data["match"] == {"keyword": "rain", "distance": 0, "fallback": False}

    res = client.get("/sessions/s1")
    assert res.status_code == 200
    assert len(res.json()["data"]["history"]) == 3


def test_session_id_mismatch(client):
    client.post("/sessions", json={"session_id": "s1"})
    res = client.post("/sessions/s1/messages", json={"session_id": "other", "message": "hi"})
    assert res.status_code == 400


def test_unknown_session_is_404(client):
    assert client.post("/sessions/nope/messages", json={"message": "hi"}).status_code == 404
    assert client.get("/sessions/nope").status_code == 404
    assert client.post("/sessions/nope/reset").status_code == 404
    assert client.delete("/sessions/nope").status_code == 404


def test_reset_and_delete(client):
    client.post("/sessions", json={"session_id": "s2"})
    client.post("/sessions/s2/messages", json={"message": "weather"})

    res = client.post("/sessions/s2/reset")
    assert res.json()["data"]["node"]["current"] == "welcome"

    assert client.get("/sessions").json() == ["s2"]
    assert client.delete("/sessions/s2").json() == {"ok": True}
    assert client.get("/sessions").json() == []


def test_graph_summary(client):
    res = client.get("/graph")
    assert res.status_code == 200
    stats = res.json()["graph_stats"]
    assert stats["nodes"] == 3
    assert stats["root"] == "welcome"
    assert stats["valid"] is True


def test_duplicate_session_id_is_409(client):
    assert client.post("/sessions", json={"session_id": "s3"}).status_code == 200
    assert client.post("/sessions", json={"session_id": "s3"}).status_code == 409
