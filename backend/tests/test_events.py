"""Tests for the EventBus fan-out."""

from __future__ import annotations

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from agentoffice.agent.events import AgentEvent, EventBus, EventType


def make_event(event_type=EventType.THINKING, **data) -> AgentEvent:
    return AgentEvent(type=event_type, agent_id="raj", agent_name="Raj", data=data)


def test_listeners_called_in_registration_order():
    bus = EventBus()
    seen = []
    bus.subscribe(lambda e: seen.append(("a", e.type)))
    bus.subscribe(lambda e: seen.append(("b", e.type)))

    bus.emit(make_event(step=1))

    assert seen == [("a", EventType.THINKING), ("b", EventType.THINKING)]


def test_failing_listener_does_not_block_others(caplog):
    bus = EventBus()
    seen = []

    def broken(event):
        raise RuntimeError("listener bug")

    bus.subscribe(broken)
    bus.subscribe(seen.append)

    bus.emit(make_event())

    assert len(seen) == 1
    assert "event listener failed" in caplog.text


def test_unsubscribe_during_emit_is_safe():
    bus = EventBus()
    seen = []
    holder = {}

    def once(event):
        seen.append(event)
        holder["unsub"]()

    holder["unsub"] = bus.subscribe(once)
    bus.subscribe(seen.append)

    bus.emit(make_event())
    bus.emit(make_event())

    assert len(seen) == 3
    assert len(bus) == 1


def test_unsubscribe_is_idempotent():
    bus = EventBus()
    unsubscribe = bus.subscribe(lambda e: None)
    unsubscribe()
    unsubscribe()
    assert len(bus) == 0


def test_no_replay_for_late_subscribers():
    bus = EventBus()
    bus.emit(make_event())
    late = []
    bus.subscribe(late.append)
    assert late == []


def test_clear_removes_everyone():
    bus = EventBus()
    seen = []
    bus.subscribe(seen.append)
    bus.clear()
    bus.emit(make_event())
    assert seen == []


def test_event_to_dict():
    event = make_event(EventType.TOOL_CALL, tool="web_search", input={"query": "x"})
    data = event.to_dict()
    assert data["type"] == "tool_call"
    assert data["agent_id"] == "raj"
    assert data["agent_name"] == "Raj"
    assert data["data"] == {"tool": "web_search", "input": {"query": "x"}}
    assert isinstance(data["timestamp"], str)
