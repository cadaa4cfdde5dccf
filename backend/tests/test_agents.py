"""End-to-end runs of the four office agents with all delays disabled."""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from agentoffice.agent.agents import (
    create_code_review_agent,
    create_intern_agent,
    create_research_agent,
    create_slack_agent,
)
from agentoffice.agent.agents.code_review import CodeReviewStrategy
from agentoffice.agent.events import EventType
from agentoffice.agent.state import TaskStatus
from agentoffice.agent.tools import Mailbox, SlackWorkspace, TodoList


def run(agent, description: str):
    return asyncio.run(agent.run_task(description))


def tools_used(task) -> list:
    return [s.tool_used for s in task.steps]


# ── Raj ─────────────────────────────────────────────────────────


def test_research_agent_config():
    config = create_research_agent(0, 0).get_config()
    assert (config.id, config.name, config.role, config.max_steps) == (
        "raj",
        "Raj",
        "research",
        10,
    )
    assert config.tool_names == ["web_search", "read_url", "summarize"]


def test_research_agent_end_to_end():
    agent = create_research_agent(think_delay=0, delay_scale=0)
    task = run(agent, "electric bike market")

    assert task.status is TaskStatus.COMPLETED
    assert tools_used(task) == ["web_search", "read_url", "summarize", None]
    assert task.result.startswith("## Research Report: electric bike market")
    assert "https://example.com/result1" in task.result
    assert "https://example.com/result3" not in task.result
    assert "Consider early market entry" in task.result
    assert "Research conducted by Raj" in task.result


def test_research_agent_reads_top_search_hit():
    agent = create_research_agent(think_delay=0, delay_scale=0)
    task = run(agent, "tea")
    assert task.steps[1].tool_input == {"url": "https://example.com/result1"}


# ── Sheldon ─────────────────────────────────────────────────────


def test_code_review_agent_end_to_end():
    agent = create_code_review_agent(think_delay=0, delay_scale=0)
    events = []
    agent.on_event(events.append)

    task = run(agent, "Review the frontend")

    assert task.status is TaskStatus.COMPLETED
    assert tools_used(task) == [
        "list_files",
        "read_file",
        "analyze_code",
        "suggest_fix",
        None,
    ]
    assert "Reviewed **2 files**" in task.result
    assert "Found **4 issues**" in task.result
    assert "HIGH: Missing key prop in list rendering" in task.result
    assert "key={item.id ?? index}" in task.result
    assert "**Maintainability Grade:** B" in task.result
    tool_results = [e for e in events if e.type is EventType.TOOL_RESULT]
    assert len(tool_results) == 4


def test_code_review_script_repeats_last_stage():
    strategy = CodeReviewStrategy(think_delay=0)
    assert strategy.stage_for(1).value == "list_files"
    assert strategy.stage_for(5).value == "report"
    assert strategy.stage_for(9).value == "report"


# ── Penny ───────────────────────────────────────────────────────


def test_intern_agent_end_to_end():
    mailbox, todos = Mailbox(), TodoList()
    agent = create_intern_agent(
        think_delay=0, delay_scale=0, mailbox=mailbox, todos=todos
    )

    task = run(agent, "Process my inbox")

    assert task.status is TaskStatus.COMPLETED
    assert tools_used(task) == [
        "read_emails",
        "get_email",
        "manage_todo",
        "complete_task",
        "draft_response",
        "manage_todo",
        "manage_todo",
        None,
    ]
    assert task.steps[1].tool_input == {"email_id": "email-1"}
    assert [d.email_id for d in mailbox.drafts] == ["email-1"]
    assert [t.title for t in todos.items] == [
        "Send project status update to client",
        "Add agenda items for Thursday team sync",
    ]
    assert "**Processed:** 2 unread emails" in task.result
    assert "Draft response ready for your review" in task.result
    assert "**Re: Project Status Update Request**" in task.result
    assert "| High | Send project status update to client | Pending |" in task.result


def test_intern_agent_rerun_does_not_duplicate_todos():
    todos = TodoList()
    agent = create_intern_agent(think_delay=0, delay_scale=0, todos=todos)

    run(agent, "first pass")
    second = run(agent, "second pass")

    assert second.status is TaskStatus.COMPLETED
    assert len(todos.items) == 2


def test_intern_agent_replies_to_the_email_it_opened_on_every_run():
    mailbox = Mailbox()
    agent = create_intern_agent(think_delay=0, delay_scale=0, mailbox=mailbox)

    for description in ("first pass", "second pass"):
        task = run(agent, description)
        opened = next(s for s in task.steps if s.tool_used == "get_email")
        drafted = next(s for s in task.steps if s.tool_used == "draft_response")
        assert opened.tool_input["email_id"] == "email-1"
        assert drafted.tool_input["email_id"] == opened.tool_input["email_id"]

    assert [d.email_id for d in mailbox.drafts] == ["email-1", "email-1"]
    assert {d.subject for d in mailbox.drafts} == {"Re: Project Status Update Request"}


# ── Howard ──────────────────────────────────────────────────────


def test_slack_agent_end_to_end():
    workspace = SlackWorkspace()
    agent = create_slack_agent(think_delay=0, delay_scale=0, workspace=workspace)

    task = run(agent, "What needs my attention on Slack?")

    assert task.status is TaskStatus.COMPLETED
    assert tools_used(task) == [
        "list_channels",
        "get_messages",
        "find_action_items",
        "add_todo",
        "add_todo",
        "add_todo",
        "add_todo",
        "get_todos",
        None,
    ]
    assert len(task.steps) <= agent.get_config().max_steps
    assert [t.priority for t in workspace.todos] == ["urgent", "urgent", "high", "high"]
    assert len({t.text for t in workspace.todos}) == 4
    assert "You have **3 direct mentions**" in task.result
    assert "Review PR for auth refactor" in task.result
    assert "| #engineering | 12 | Has mentions |" in task.result


def test_agents_do_not_share_default_stores():
    first = create_slack_agent(think_delay=0, delay_scale=0)
    second = create_slack_agent(think_delay=0, delay_scale=0)

    run(first, "scan")
    task = run(second, "scan")

    final = task.steps[-2].tool_output["data"]
    assert final["total_count"] == 4
