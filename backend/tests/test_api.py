"""Tests for the HTTP and WebSocket surface using FastAPI's TestClient."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from agentoffice.config import settings
from agentoffice.main import app


@pytest.fixture
def client(tmp_path, monkeypatch):
    monkeypatch.setattr(settings, "DB_PATH", tmp_path / "api.db")
    monkeypatch.setattr(settings, "THINK_DELAY_SECONDS", 0.0)
    monkeypatch.setattr(settings, "TOOL_DELAY_SCALE", 0.0)
    with TestClient(app) as c:
        yield c


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok", "service": settings.APP_NAME}


def test_list_agents(client):
    agents = client.get("/agents").json()
    assert [a["id"] for a in agents] == ["raj", "sheldon", "penny", "howard"]
    assert agents[0]["tools"] == ["web_search", "read_url", "summarize"]
    assert agents[0]["is_running"] is False
    assert agents[0]["current_task"] is None
    assert "conversation" not in agents[0]


def test_get_agent_detail(client):
    detail = client.get("/agents/sheldon").json()
    assert detail["role"] == "code-review"
    assert detail["conversation"] == []
    assert detail["step_count"] == 0
    names = [t["function"]["name"] for t in detail["tool_schema"]]
    assert names == ["list_files", "read_file", "analyze_code", "suggest_fix"]
    assert client.get("/agents/leonard").status_code == 404


def test_assign_and_wait(client):
    resp = client.post("/agents/raj/tasks?wait=true", json={"description": "solar"})
    assert resp.status_code == 200
    task = resp.json()
    assert task["status"] == "completed"
    assert len(task["steps"]) == 4

    stored = client.get(f"/tasks/{task['id']}").json()
    assert stored["result"] == task["result"]
    assert [t["id"] for t in client.get("/tasks?agent_id=raj").json()] == [task["id"]]


def test_assign_in_background(client):
    resp = client.post("/agents/howard/tasks", json={"description": "slack"})
    assert resp.status_code == 202
    assert resp.json()["assigned_agent_id"] == "howard"


def test_assign_validation_and_unknown_agent(client):
    assert client.post("/agents/raj/tasks", json={"description": ""}).status_code == 422
    resp = client.post("/agents/leonard/tasks", json={"description": "x"})
    assert resp.status_code == 404


def test_stop_idle_agent(client):
    resp = client.post("/agents/penny/stop")
    assert resp.status_code == 200
    assert resp.json() == {"ok": True, "task": None}


def test_tasks_missing_and_clear(client):
    assert client.get("/tasks/task-missing").status_code == 404
    client.post("/agents/sheldon/tasks?wait=true", json={"description": "review"})
    assert client.delete("/tasks").json() == {"ok": True, "removed": 1}
    assert client.get("/tasks").json() == []


def test_events_buffer(client):
    client.post("/agents/penny/tasks?wait=true", json={"description": "inbox"})
    events = client.get("/events?limit=2").json()
    assert len(events) == 2
    assert events[-1]["type"] == "task_complete"
    assert events[-1]["agent_id"] == "penny"

    assert client.delete("/events").json() == {"ok": True}
    assert client.get("/events").json() == []


def test_event_stream(client):
    with client.websocket_connect("/ws/events") as ws:
        client.post("/agents/raj/tasks?wait=true", json={"description": "stream"})
        first = ws.receive_json()
        assert first["type"] == "thinking"
        assert first["agent_id"] == "raj"
        assert first["data"] == {"step": 1}
