"""Tests for the mock tool families and their instance-owned stores."""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from agentoffice.agent.tools import (
    Mailbox,
    SlackWorkspace,
    TodoList,
    build_code_tools,
    build_mail_tools,
    build_search_tools,
    build_slack_tools,
)


def by_name(tools) -> dict:
    return {t.name: t for t in tools}


def call(tools: dict, name: str, **params):
    return asyncio.run(tools[name].execute(params))


# ── Research ────────────────────────────────────────────────────


def test_web_search_respects_max_results():
    tools = by_name(build_search_tools(delay_scale=0))
    result = call(tools, "web_search", query="solar panels", max_results=2)
    assert result.success
    assert len(result.data["results"]) == 2
    assert "solar panels" in result.data["results"][0]["title"]


def test_web_search_requires_query():
    tools = by_name(build_search_tools(delay_scale=0))
    result = call(tools, "web_search")
    assert not result.success
    assert "query" in result.error


def test_read_url_rejects_non_http():
    tools = by_name(build_search_tools(delay_scale=0))
    assert not call(tools, "read_url", url="ftp://example.com").success
    page = call(tools, "read_url", url="https://example.com/a")
    assert page.data["word_count"] > 0


def test_summarize_formats():
    tools = by_name(build_search_tools(delay_scale=0))
    bullets = call(tools, "summarize", content="abc")
    assert bullets.data["format"] == "bullet_points"
    assert "Recommendation:" in bullets.data["summary"]
    assert not call(tools, "summarize", content="abc", format="haiku").success


def test_non_mapping_params_fail_cleanly():
    tools = by_name(build_search_tools(delay_scale=0))
    result = asyncio.run(tools["web_search"].execute(["not", "a", "dict"]))
    assert not result.success


# ── Code review ─────────────────────────────────────────────────


def test_list_files_filters_by_pattern():
    tools = by_name(build_code_tools(delay_scale=0))
    result = call(tools, "list_files", path="src", pattern="*.tsx")
    assert result.data["total_files"] == 2
    assert call(tools, "list_files", path="src").data["total_files"] == 5


def test_analyze_code_reports_issues_and_metrics():
    tools = by_name(build_code_tools(delay_scale=0))
    result = call(tools, "analyze_code", code="x", focus_areas=["bugs"])
    severities = [i["severity"] for i in result.data["issues"]]
    assert severities.count("high") == 1
    assert severities.count("medium") == 2
    assert result.data["metrics"]["maintainability"] == "B"


def test_analyze_code_rejects_unknown_focus():
    tools = by_name(build_code_tools(delay_scale=0))
    result = call(tools, "analyze_code", code="x", focus_areas=["vibes"])
    assert not result.success
    assert "vibes" in result.error


def test_suggest_fix_requires_context():
    tools = by_name(build_code_tools(delay_scale=0))
    assert not call(tools, "suggest_fix", issue="Missing key").success
    fix = call(tools, "suggest_fix", issue="Missing key", context="map()")
    assert "key=" in fix.data["suggested_fix"]


# ── Mail and todos ──────────────────────────────────────────────


def test_read_emails_filters():
    tools = by_name(build_mail_tools(delay_scale=0))
    unread = call(tools, "read_emails", unread_only=True)
    assert [e["id"] for e in unread.data["emails"]] == ["email-1", "email-2"]
    high = call(tools, "read_emails", priority="high")
    assert high.data["total_count"] == 1


def test_get_email_marks_read():
    mailbox = Mailbox()
    tools = by_name(build_mail_tools(mailbox, delay_scale=0))
    result = call(tools, "get_email", email_id="email-1")
    assert result.data["sender"] == "client@company.com"
    assert mailbox.find("email-1").is_read
    assert not call(tools, "get_email", email_id="email-99").success


def test_draft_response_stored_in_mailbox():
    mailbox = Mailbox()
    tools = by_name(build_mail_tools(mailbox, delay_scale=0))
    result = call(tools, "draft_response", email_id="email-2", response_body="Will do")
    assert result.data["draft"]["subject"] == "Re: Weekly Team Sync - Agenda Items"
    assert len(mailbox.drafts) == 1


def test_manage_todo_add_dedupes_and_completes():
    todos = TodoList()
    tools = by_name(build_mail_tools(todos=todos, delay_scale=0))

    added = call(tools, "manage_todo", action="add", title="Call Bob", priority="high")
    again = call(tools, "manage_todo", action="add", title="Call Bob")
    assert again.data["todo"]["id"] == added.data["todo"]["id"]
    assert len(todos.items) == 1

    done = call(tools, "manage_todo", action="complete", todo_id=added.data["todo"]["id"])
    assert done.data["todo"]["status"] == "completed"
    listing = call(tools, "manage_todo", action="list")
    assert listing.data["pending_count"] == 0
    assert not call(tools, "manage_todo", action="archive").success


def test_separate_builders_do_not_share_stores():
    first = by_name(build_mail_tools(delay_scale=0))
    second = by_name(build_mail_tools(delay_scale=0))
    call(first, "manage_todo", action="add", title="Only here")
    assert call(second, "manage_todo", action="list").data["total_count"] == 0


def test_complete_task_types():
    tools = by_name(build_mail_tools(delay_scale=0))
    summary = call(tools, "complete_task", task_type="summarize", input="status")
    assert "Deadline" in summary.data["result"]
    assert not call(tools, "complete_task", task_type="dance", input="x").success


# ── Slack ───────────────────────────────────────────────────────


def test_list_channels_hides_archived():
    tools = by_name(build_slack_tools(delay_scale=0))
    result = call(tools, "list_channels")
    names = [c["name"] for c in result.data["channels"]]
    assert "#old-launch" not in names
    assert result.data["channels_with_mentions"] == 2
    archived = call(tools, "list_channels", include_archived=True)
    assert len(archived.data["channels"]) == 6


def test_get_messages_mentions_only():
    tools = by_name(build_slack_tools(delay_scale=0))
    result = call(tools, "get_messages", channel_id="all", mentions_only=True)
    assert result.data["total_count"] == 3
    assert result.data["urgent_count"] == 2
    assert not call(tools, "get_messages", channel_id="C999").success


def test_find_action_items_today():
    tools = by_name(build_slack_tools(delay_scale=0))
    result = call(tools, "find_action_items", timeframe="today")
    assert result.data["total_count"] == 4
    assert result.data["urgent_count"] == 2


def test_add_todo_dedupes_by_text_and_source():
    workspace = SlackWorkspace()
    tools = by_name(build_slack_tools(workspace, delay_scale=0))
    call(tools, "add_todo", text="Fix build", source="#engineering", priority="urgent")
    call(tools, "add_todo", text="Fix build", source="#engineering", priority="urgent")
    assert len(workspace.todos) == 1

    todos = call(tools, "get_todos")
    assert todos.data["by_priority"]["urgent"] == 1
    assert not call(tools, "add_todo", text="x", source="y", priority="asap").success
