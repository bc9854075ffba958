import pytest
from fastapi.testclient import TestClient

from wayfarer.backend.app import create_app
from wayfarer.backend.script_source import ScriptSource


@pytest.fixture
def client(registry, config, world_data):
    app = create_app(ScriptSource.from_dict(world_data, registry=registry), config)
    with TestClient(app) as c:
        yield c


def new_session(client):
    response = client.post("/api/sessions")
    assert response.status_code == 200
    return response.json()


def test_create_session_runs_entry(client):
    data = new_session(client)
    assert data["state"] == {"site": "camp", "days": 0, "hp": 20, "money": 50, "honor": 0}
    assert data["log"] == [{"text": "You wake up in camp.", "types": ["normal"]}]
    assert data["options"] == [{"index": 0, "text": "go to village"}, {"index": 1, "text": "Into the woods"}]
    assert data["cursor"] == 1


def test_choose_returns_new_log_entries(client):
    session_id = new_session(client)["session_id"]
    response = client.post(f"/api/sessions/{session_id}/choose", json={"index": 0})
    assert response.status_code == 200
    data = response.json()
    assert data["state"]["site"] == "village"
    assert [entry["text"] for entry in data["log"]] == ["travel: Money -10", "village awaits"]

    history = client.get(f"/api/sessions/{session_id}", params={"since": 0}).json()
    assert len(history["log"]) == 3


def test_bad_option_index(client):
    session_id = new_session(client)["session_id"]
    response = client.post(f"/api/sessions/{session_id}/choose", json={"index": 9})
    assert response.status_code == 400


def test_unknown_session(client):
    assert client.get("/api/sessions/nope").status_code == 404
    assert client.post("/api/sessions/nope/choose", json={"index": 0}).status_code == 404


def test_sessions_are_independent(client):
    first = new_session(client)["session_id"]
    second = new_session(client)["session_id"]
    client.post(f"/api/sessions/{first}/choose", json={"index": 1})
    assert client.get(f"/api/sessions/{first}").json()["state"]["site"] == "forest"
    assert client.get(f"/api/sessions/{second}").json()["state"]["site"] == "camp"


def test_end_session(client):
    session_id = new_session(client)["session_id"]
    assert client.delete(f"/api/sessions/{session_id}").json() == {"session_id": session_id, "ended": True}
    assert client.get(f"/api/sessions/{session_id}").status_code == 404


def test_script_errors_become_500(registry, config, world_data):
    world_data["sites"][0]["ports"].append({"name": "Broken", "action": "no_such_action"})
    app = create_app(ScriptSource.from_dict(world_data, registry=registry), config)
    with TestClient(app) as client:
        session_id = new_session(client)["session_id"]
        response = client.post(f"/api/sessions/{session_id}/choose", json={"index": 2})
    assert response.status_code == 500
    assert response.json()["error"] == "UnknownActionError"


def test_failed_start_leaves_no_session(registry, config, world_data):
    world_data["sites"][0]["events"] = [{"id": "boom", "weight": 1, "action": "no_such_action"}]
    app = create_app(ScriptSource.from_dict(world_data, registry=registry), config)
    with TestClient(app) as client:
        response = client.post("/api/sessions")
    assert response.status_code == 500
    assert response.json()["error"] == "UnknownActionError"
    assert app.state.sessions == {}
