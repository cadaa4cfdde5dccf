"""Tests for AgentTeam and the default office line-up."""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from agentoffice.agent.agents import create_research_agent
from agentoffice.agent.events import EventType
from agentoffice.agent.team import AgentTeam, create_agent_team, get_agent_by_id


def test_default_team_lineup():
    team = create_agent_team(think_delay=0, delay_scale=0)
    assert team.ids() == ["raj", "sheldon", "penny", "howard"]
    assert len(team) == 4
    assert "penny" in team
    assert [a.name for a in team] == ["Raj", "Sheldon", "Penny", "Howard"]


def test_get_agent_by_id():
    team = create_agent_team(think_delay=0, delay_scale=0)
    assert get_agent_by_id(team, "howard").get_config().role == "slack-monitor"
    assert get_agent_by_id(team, "leonard") is None


def test_duplicate_ids_rejected():
    with pytest.raises(ValueError):
        AgentTeam([create_research_agent(0, 0), create_research_agent(0, 0)])


def test_team_listener_sees_every_agent_until_unsubscribed():
    team = create_agent_team(think_delay=0, delay_scale=0)
    seen = []
    unsubscribe = team.on_event(seen.append)

    asyncio.run(team.get("raj").run_task("topic"))
    asyncio.run(team.get("sheldon").run_task("review"))
    assert {e.agent_id for e in seen} == {"raj", "sheldon"}

    count = len(seen)
    unsubscribe()
    asyncio.run(team.get("raj").run_task("topic again"))
    assert len(seen) == count


def test_stop_all_fails_running_tasks():
    async def scenario():
        team = create_agent_team(think_delay=0.05, delay_scale=0)
        raj = team.get("raj")
        running = asyncio.create_task(raj.run_task("slow topic"))
        await asyncio.sleep(0.01)
        team.stop_all()
        return await running

    task = asyncio.run(scenario())
    assert task.result == "Agent stopped by user"


def test_agents_emit_task_complete():
    team = create_agent_team(think_delay=0, delay_scale=0)
    seen = []
    team.on_event(seen.append)
    asyncio.run(team.get("penny").run_task("inbox"))
    assert seen[-1].type is EventType.TASK_COMPLETE
    assert seen[-1].agent_name == "Penny"
