"""Slack monitor tools over an in-memory SlackWorkspace."""

from __future__ import annotations

import functools
from dataclasses import dataclass, field
from datetime import datetime, timedelta

from agentoffice.agent.constants import (
    ADD_TODO_LATENCY,
    FIND_ACTION_ITEMS_LATENCY,
    GET_MESSAGES_LATENCY,
    GET_TODOS_LATENCY,
    LIST_CHANNELS_LATENCY,
)
from agentoffice.agent.state import utcnow
from agentoffice.agent.tool_registry import ToolDefinition, ToolParameter, ToolResult
from agentoffice.agent.tools.common import (
    SLACK_PRIORITIES,
    ToolInputError,
    get_bool,
    get_choice,
    get_int,
    get_str,
    resolve_scale,
    simulate_latency,
    validated,
)

TIMEFRAMES = ("today", "week", "all")
ME = "you"


@dataclass
class SlackMessage:
    id: str
    channel: str
    channel_name: str
    author: str
    text: str
    timestamp: datetime
    mentions: list[str] = field(default_factory=list)
    reactions: list[str] = field(default_factory=list)
    priority: str = "normal"  # urgent, high, normal, low
    thread_id: str | None = None

    @property
    def mentions_me(self) -> bool:
        return ME in self.mentions


@dataclass
class SlackChannel:
    id: str
    name: str
    unread_count: int = 0
    archived: bool = False


@dataclass
class SlackTodo:
    text: str
    source: str
    priority: str = "normal"
    created_at: datetime = field(default_factory=utcnow)

    def to_dict(self) -> dict:
        return {
            "text": self.text,
            "source": self.source,
            "priority": self.priority,
            "created_at": self.created_at.isoformat(),
        }


def default_messages(now: datetime | None = None) -> list[SlackMessage]:
    now = now or utcnow()
    return [
        SlackMessage(
            id="msg-1",
            channel="C001",
            channel_name="#engineering",
            author="Sarah Chen",
            text=(
                "@you Can you review the PR for the auth refactor? "
                "Need it merged before EOD if possible."
            ),
            timestamp=now - timedelta(minutes=30),
            mentions=[ME],
            priority="urgent",
        ),
        SlackMessage(
            id="msg-2",
            channel="C002",
            channel_name="#general",
            author="Mike Johnson",
            text=(
                "Team standup moving to 10am starting next week. "
                "Please update your calendars."
            ),
            timestamp=now - timedelta(hours=1),
            reactions=["thumbsup"],
        ),
        SlackMessage(
            id="msg-3",
            channel="D001",
            channel_name="DM: Lisa Park",
            author="Lisa Park",
            text=(
                "Hey! Quick question - do you have the API docs for the new "
                "endpoints? Client is asking."
            ),
            timestamp=now - timedelta(minutes=15),
            priority="high",
        ),
        SlackMessage(
            id="msg-4",
            channel="C003",
            channel_name="#project-alpha",
            author="David Kim",
            text=(
                "Sprint planning tomorrow at 2pm. @you @sarah @mike please come "
                "prepared with your capacity estimates."
            ),
            timestamp=now - timedelta(hours=2),
            mentions=[ME, "sarah", "mike"],
            priority="high",
        ),
        SlackMessage(
            id="msg-5",
            channel="C001",
            channel_name="#engineering",
            author="Bot: CI/CD",
            text="Build failed on main branch. Last commit by @you - please investigate.",
            timestamp=now - timedelta(minutes=10),
            mentions=[ME],
            priority="urgent",
        ),
        SlackMessage(
            id="msg-6",
            channel="C004",
            channel_name="#random",
            author="Amy Wong",
            text="Anyone want to grab lunch today? Thinking Thai food.",
            timestamp=now - timedelta(minutes=90),
            reactions=["raised_hands", "yum"],
            priority="low",
        ),
    ]


def default_channels() -> list[SlackChannel]:
    return [
        SlackChannel(id="C001", name="#engineering", unread_count=12),
        SlackChannel(id="C002", name="#general", unread_count=5),
        SlackChannel(id="C003", name="#project-alpha", unread_count=8),
        SlackChannel(id="C004", name="#random", unread_count=23),
        SlackChannel(id="D001", name="DM: Lisa Park", unread_count=1),
        SlackChannel(id="C005", name="#old-launch", archived=True),
    ]


# Requests directed at "you", keyed by the message they came from
ACTION_ITEMS = [
    ("msg-1", "Review PR for auth refactor", "EOD today"),
    ("msg-3", "Send API docs for new endpoints", "ASAP"),
    ("msg-4", "Prepare capacity estimates for sprint planning", "Tomorrow 2pm"),
    ("msg-5", "Investigate and fix build failure on main", "ASAP"),
]


@dataclass
class SlackWorkspace:
    messages: list[SlackMessage] = field(default_factory=default_messages)
    channels: list[SlackChannel] = field(default_factory=default_channels)
    todos: list[SlackTodo] = field(default_factory=list)

    def find_message(self, message_id: str) -> SlackMessage | None:
        for message in self.messages:
            if message.id == message_id:
                return message
        return None

    def has_mention(self, channel_id: str) -> bool:
        return any(
            m.channel == channel_id and m.mentions_me for m in self.messages
        )


def format_time_ago(moment: datetime, now: datetime | None = None) -> str:
    minutes = int(((now or utcnow()) - moment).total_seconds() // 60)
    if minutes < 60:
        return f"{minutes}m ago"
    hours = minutes // 60
    if hours < 24:
        return f"{hours}h ago"
    return f"{hours // 24}d ago"


# ── Handlers ────────────────────────────────────────────────────


async def list_channels(
    params: dict, scale: float, workspace: SlackWorkspace
) -> ToolResult:
    include_archived = get_bool(params, "include_archived")
    await simulate_latency(LIST_CHANNELS_LATENCY, scale)

    channels = [
        c for c in workspace.channels if include_archived or not c.archived
    ]
    listed = [
        {
            "id": c.id,
            "name": c.name,
            "unread_count": c.unread_count,
            "has_mention": workspace.has_mention(c.id),
        }
        for c in channels
    ]
    return ToolResult.ok(
        {
            "channels": listed,
            "total_unread": sum(c["unread_count"] for c in listed),
            "channels_with_mentions": sum(1 for c in listed if c["has_mention"]),
        }
    )


async def get_messages(
    params: dict, scale: float, workspace: SlackWorkspace
) -> ToolResult:
    channel_id = get_str(params, "channel_id", required=True)
    limit = get_int(params, "limit")
    mentions_only = get_bool(params, "mentions_only")
    if limit is not None and limit < 1:
        raise ToolInputError("Parameter 'limit' must be at least 1")
    await simulate_latency(GET_MESSAGES_LATENCY, scale)

    messages = list(workspace.messages)
    if channel_id != "all":
        if not any(c.id == channel_id for c in workspace.channels):
            return ToolResult.fail(f"Channel not found: {channel_id}")
        messages = [m for m in messages if m.channel == channel_id]
    if mentions_only:
        messages = [m for m in messages if m.mentions_me]
    messages.sort(key=lambda m: m.timestamp, reverse=True)
    if limit is not None:
        messages = messages[:limit]

    return ToolResult.ok(
        {
            "messages": [
                {
                    "id": m.id,
                    "channel": m.channel_name,
                    "author": m.author,
                    "text": m.text,
                    "time": format_time_ago(m.timestamp),
                    "priority": m.priority,
                    "mentions_you": m.mentions_me,
                }
                for m in messages
            ],
            "total_count": len(messages),
            "urgent_count": sum(1 for m in messages if m.priority == "urgent"),
        }
    )


async def find_action_items(
    params: dict, scale: float, workspace: SlackWorkspace
) -> ToolResult:
    timeframe = get_choice(params, "timeframe", TIMEFRAMES, default="all")
    await simulate_latency(FIND_ACTION_ITEMS_LATENCY, scale)

    now = utcnow()
    window = {"today": timedelta(days=1), "week": timedelta(days=7)}.get(timeframe)

    items = []
    for message_id, text, deadline in ACTION_ITEMS:
        message = workspace.find_message(message_id)
        if message is None:
            continue
        if window is not None and now - message.timestamp > window:
            continue
        items.append(
            {
                "id": f"action-{len(items) + 1}",
                "source": f"{message.channel_name} - {message.author}",
                "text": text,
                "deadline": deadline,
                "priority": message.priority,
                "message_id": message.id,
            }
        )

    return ToolResult.ok(
        {
            "action_items": items,
            "total_count": len(items),
            "urgent_count": sum(1 for i in items if i["priority"] == "urgent"),
            "summary": f"Found {len(items)} action items requiring your attention",
        }
    )


async def add_todo(params: dict, scale: float, workspace: SlackWorkspace) -> ToolResult:
    text = get_str(params, "text", required=True)
    source = get_str(params, "source", required=True)
    priority = get_choice(params, "priority", SLACK_PRIORITIES, default="normal")
    await simulate_latency(ADD_TODO_LATENCY, scale)

    for todo in workspace.todos:
        if todo.text == text and todo.source == source:
            return ToolResult.ok(
                {
                    "todo": todo.to_dict(),
                    "message": "Todo already on your list",
                    "total_todos": len(workspace.todos),
                }
            )

    todo = SlackTodo(text=text, source=source, priority=priority)
    workspace.todos.append(todo)
    return ToolResult.ok(
        {
            "todo": todo.to_dict(),
            "message": "Todo added to your list",
            "total_todos": len(workspace.todos),
        }
    )


async def get_todos(params: dict, scale: float, workspace: SlackWorkspace) -> ToolResult:
    await simulate_latency(GET_TODOS_LATENCY, scale)

    todos = [t.to_dict() for t in workspace.todos]
    return ToolResult.ok(
        {
            "todos": todos,
            "total_count": len(todos),
            "by_priority": {
                level: sum(1 for t in todos if t["priority"] == level)
                for level in SLACK_PRIORITIES
            },
        }
    )


def build_slack_tools(
    workspace: SlackWorkspace | None = None, delay_scale: float | None = None
) -> list[ToolDefinition]:
    """Tools for the Slack monitor agent, bound to ``workspace``."""
    scale = resolve_scale(delay_scale)
    workspace = workspace if workspace is not None else SlackWorkspace()

    def bind(handler):
        return validated(functools.partial(handler, scale=scale, workspace=workspace))

    return [
        ToolDefinition(
            name="list_channels",
            description="List Slack channels you are a member of",
            parameters={
                "include_archived": ToolParameter(
                    "boolean", "Include archived channels"
                ),
            },
            handler=bind(list_channels),
        ),
        ToolDefinition(
            name="get_messages",
            description="Get recent messages from a channel or all channels",
            parameters={
                "channel_id": ToolParameter(
                    "string", 'Channel ID (or "all" for all channels)', required=True
                ),
                "limit": ToolParameter("number", "Number of messages to retrieve"),
                "mentions_only": ToolParameter(
                    "boolean", "Only get messages that mention you"
                ),
            },
            handler=bind(get_messages),
        ),
        ToolDefinition(
            name="find_action_items",
            description=(
                "Scan messages for action items, requests, and todos directed at you"
            ),
            parameters={
                "timeframe": ToolParameter("string", "Timeframe: today, week, all"),
            },
            handler=bind(find_action_items),
        ),
        ToolDefinition(
            name="add_todo",
            description="Add an item to your todo list based on Slack messages",
            parameters={
                "text": ToolParameter("string", "Todo item text", required=True),
                "source": ToolParameter(
                    "string", "Source (channel/person)", required=True
                ),
                "priority": ToolParameter(
                    "string", "Priority: urgent, high, normal, low"
                ),
            },
            handler=bind(add_todo),
        ),
        ToolDefinition(
            name="get_todos",
            description="Get your current todo list extracted from Slack",
            parameters={},
            handler=bind(get_todos),
        ),
    ]
