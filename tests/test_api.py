# tests/test_api.py
"""FastAPI endpoints against an in-memory store."""

import threading

import pytest
from fastapi.testclient import TestClient

from backend.dependencies import get_sessions, get_store
from backend.main import app
from backend.sessions import SessionRegistry, UnknownSession


@pytest.fixture
def client(store):
    sessions = SessionRegistry(store)
    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_sessions] = lambda: sessions
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def offline_client():
    sessions = SessionRegistry(None)
    app.dependency_overrides[get_store] = lambda: None
    app.dependency_overrides[get_sessions] = lambda: sessions
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


def _texts(view):
    return [e["text"] for e in view["entries"] if e["kind"] != "header"]


def test_root_and_health(client):
    assert client.get("/").json()["status"] == "ok"
    health = client.get("/health").json()
    assert health["status"] == "ok"
    assert health["store_backend"] == "SQL"
    assert health["store_connected"] is True


def test_content(client):
    data = client.get("/content").json()
    assert data["persistent"] is True
    assert data["content"]["projects"]


def test_content_without_store(offline_client):
    data = offline_client.get("/content").json()
    assert data["persistent"] is False
    assert data["content"]["about"]


def test_terminal_session_flow(client):
    res = client.post("/terminal/sessions")
    assert res.status_code == 201
    view = res.json()
    sid = view["session_id"]
    assert view["state"] == "idle"
    assert "Connecting to database..." in _texts(view)

    last = view["entries"][-1]["id"]
    view = client.post(f"/terminal/sessions/{sid}/commands", json={"command": "  FOO "}, params={"after": last}).json()
    assert _texts(view) == ["foo", "bash: command not found: foo"]

    assert client.get(f"/terminal/sessions/{sid}/history/previous").json() == {"command": "foo"}
    assert client.get(f"/terminal/sessions/{sid}/history/next").json() == {"command": ""}


def test_terminal_prompt_flow(client):
    sid = client.post("/terminal/sessions").json()["session_id"]
    view = client.post(f"/terminal/sessions/{sid}/commands", json={"command": "sudo update about set"}).json()
    assert view["pending_prompt"]["secret"] is True
    assert view["state"] == "processing"

    view = client.post(f"/terminal/sessions/{sid}/prompt", json={"answer": None}).json()
    assert view["pending_prompt"] is None
    assert view["state"] == "idle"

    res = client.post(f"/terminal/sessions/{sid}/prompt", json={"answer": "x"})
    assert res.status_code == 409


def test_unknown_and_closed_sessions(client):
    assert client.get("/terminal/sessions/nope").status_code == 404
    sid = client.post("/terminal/sessions").json()["session_id"]
    assert client.delete(f"/terminal/sessions/{sid}").status_code == 204
    assert client.get(f"/terminal/sessions/{sid}").status_code == 404
    assert client.delete(f"/terminal/sessions/{sid}").status_code == 404


def test_session_limit_evicts_oldest(store):
    sessions = SessionRegistry(store, limit=2)
    first = sessions.create()
    sessions.create()
    sessions.create()
    assert len(sessions) == 2
    with pytest.raises(UnknownSession):
        sessions.get(first.id)


def test_view_waits_for_a_running_command(store):
    session = SessionRegistry(store).create()
    views = []
    reader = threading.Thread(target=lambda: views.append(session.view()))
    with session.lock:
        reader.start()
        reader.join(timeout=0.1)
        assert reader.is_alive() and views == []
    reader.join(timeout=2)
    assert views and views[0]["session_id"] == session.id


def test_engagement(client):
    assert client.get("/engagement/stats").json() == {"likes": 0, "views": 0}
    client.post("/engagement/views")
    client.post("/engagement/likes")
    assert client.post("/engagement/likes").json() == {"likes": 2, "views": 1}


def test_persistence_routes_need_a_store(offline_client):
    assert offline_client.get("/engagement/stats").status_code == 503
    assert offline_client.post("/comments", json={"message": "hi"}).status_code == 503
    # terminal still works on defaults
    view = offline_client.post("/terminal/sessions").json()
    assert view["persistent"] is False


def test_comments(client):
    assert client.post("/comments", json={"name": "", "message": "  "}).status_code == 422
    res = client.post("/comments", json={"message": "first"})
    assert res.status_code == 201
    assert res.json()["name"] == "Anonymous"
    client.post("/comments", json={"name": "Bo", "message": "second"})

    comments = client.get("/comments").json()
    assert [c["message"] for c in comments] == ["second", "first"]
    assert len(client.get("/comments", params={"limit": 1}).json()) == 1


def test_arcade(client):
    games = client.get("/arcade/games").json()
    assert [g["id"] for g in games][:2] == ["tic-tac-toe", "Hit-Road"]
    assert all(g["play_count"] == 0 for g in games)
    assert games[0]["state_machine"] == "State Machine 1"

    assert client.post("/arcade/games/Hit-Road/plays").json() == {"game_id": "Hit-Road", "play_count": 1}
    assert client.post("/arcade/games/pong/plays").status_code == 404
    counts = {g["id"]: g["play_count"] for g in client.get("/arcade/games").json()}
    assert counts["Hit-Road"] == 1
