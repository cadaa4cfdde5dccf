"""Intern tools: a mock inbox, reply drafts, a todo list and quick tasks.

The inbox and todo list are plain objects owned by whoever builds the tools.
Pass the same Mailbox or TodoList to several builders to share them.
"""

from __future__ import annotations

import functools
from dataclasses import asdict, dataclass, field
from datetime import datetime, timedelta

from agentoffice.agent.constants import (
    COMPLETE_TASK_LATENCY,
    DRAFT_RESPONSE_LATENCY,
    GET_EMAIL_LATENCY,
    MANAGE_TODO_LATENCY,
    PREVIEW_CHARS,
    READ_EMAILS_LATENCY,
)
from agentoffice.agent.state import new_id, utcnow
from agentoffice.agent.tool_registry import ToolDefinition, ToolParameter, ToolResult
from agentoffice.agent.tools.common import (
    PRIORITIES,
    ToolInputError,
    get_bool,
    get_choice,
    get_str,
    resolve_scale,
    simulate_latency,
    validated,
)

TODO_ACTIONS = ("add", "complete", "list")
QUICK_TASK_TYPES = ("summarize", "schedule", "research_quick")


# ── Stores ──────────────────────────────────────────────────────


@dataclass
class Email:
    id: str
    sender: str
    subject: str
    body: str
    received_at: datetime
    is_read: bool = False
    priority: str = "medium"

    def to_dict(self) -> dict:
        data = asdict(self)
        data["received_at"] = self.received_at.isoformat()
        return data

    def summary(self) -> dict:
        preview = self.body[:PREVIEW_CHARS]
        if len(self.body) > PREVIEW_CHARS:
            preview += "..."
        return {
            "id": self.id,
            "from": self.sender,
            "subject": self.subject,
            "preview": preview,
            "priority": self.priority,
            "is_read": self.is_read,
            "received_at": self.received_at.isoformat(),
        }


@dataclass
class DraftResponse:
    email_id: str
    to: str
    subject: str
    body: str
    status: str = "draft"  # draft, approved, sent


def default_emails(now: datetime | None = None) -> list[Email]:
    now = now or utcnow()
    return [
        Email(
            id="email-1",
            sender="client@company.com",
            subject="Project Status Update Request",
            body=(
                "Hi, could you please send me an update on the current project "
                "status? I need it for the board meeting tomorrow. Thanks!"
            ),
            received_at=now - timedelta(hours=1),
            priority="high",
        ),
        Email(
            id="email-2",
            sender="team@internal.com",
            subject="Weekly Team Sync - Agenda Items",
            body=(
                "Please add any agenda items for this week's team sync. "
                "Meeting is Thursday at 2pm."
            ),
            received_at=now - timedelta(hours=2),
            priority="medium",
        ),
        Email(
            id="email-3",
            sender="newsletter@techsite.com",
            subject="This Week in Tech: AI Advances",
            body="Check out the latest developments in AI technology...",
            received_at=now - timedelta(days=1),
            is_read=True,
            priority="low",
        ),
    ]


@dataclass
class Mailbox:
    emails: list[Email] = field(default_factory=default_emails)
    drafts: list[DraftResponse] = field(default_factory=list)

    def find(self, email_id: str) -> Email | None:
        for email in self.emails:
            if email.id == email_id:
                return email
        return None


@dataclass
class TodoItem:
    id: str
    title: str
    priority: str = "medium"
    status: str = "pending"  # pending, in_progress, completed
    source: str = "agent"  # email, manual, agent
    description: str | None = None
    created_at: datetime = field(default_factory=utcnow)

    def to_dict(self) -> dict:
        data = asdict(self)
        data["created_at"] = self.created_at.isoformat()
        return data


@dataclass
class TodoList:
    items: list[TodoItem] = field(default_factory=list)

    def find(self, todo_id: str) -> TodoItem | None:
        for item in self.items:
            if item.id == todo_id:
                return item
        return None

    def find_by_title(self, title: str) -> TodoItem | None:
        for item in self.items:
            if item.title == title and item.status != "completed":
                return item
        return None

    @property
    def pending(self) -> list[TodoItem]:
        return [t for t in self.items if t.status == "pending"]


# ── Handlers ────────────────────────────────────────────────────


async def read_emails(params: dict, scale: float, mailbox: Mailbox) -> ToolResult:
    unread_only = get_bool(params, "unread_only")
    priority = get_choice(params, "priority", PRIORITIES)
    await simulate_latency(READ_EMAILS_LATENCY, scale)

    emails = list(mailbox.emails)
    if unread_only:
        emails = [e for e in emails if not e.is_read]
    if priority:
        emails = [e for e in emails if e.priority == priority]

    return ToolResult.ok(
        {
            "emails": [e.summary() for e in emails],
            "total_count": len(emails),
            "unread_count": sum(1 for e in emails if not e.is_read),
        }
    )


async def get_email(params: dict, scale: float, mailbox: Mailbox) -> ToolResult:
    email_id = get_str(params, "email_id", required=True)
    await simulate_latency(GET_EMAIL_LATENCY, scale)

    email = mailbox.find(email_id)
    if email is None:
        return ToolResult.fail(f"Email not found: {email_id}")
    email.is_read = True
    return ToolResult.ok(email.to_dict())


async def draft_response(params: dict, scale: float, mailbox: Mailbox) -> ToolResult:
    email_id = get_str(params, "email_id", required=True)
    body = get_str(params, "response_body", required=True)
    await simulate_latency(DRAFT_RESPONSE_LATENCY, scale)

    email = mailbox.find(email_id)
    if email is None:
        return ToolResult.fail(f"Email not found: {email_id}")

    draft = DraftResponse(
        email_id=email_id,
        to=email.sender,
        subject=f"Re: {email.subject}",
        body=body,
    )
    mailbox.drafts.append(draft)
    return ToolResult.ok(
        {"draft": asdict(draft), "message": "Draft created and ready for your review"}
    )


async def manage_todo(params: dict, scale: float, todos: TodoList) -> ToolResult:
    action = get_choice(params, "action", TODO_ACTIONS)
    if action is None:
        raise ToolInputError("Missing required parameter 'action'")
    await simulate_latency(MANAGE_TODO_LATENCY, scale)

    if action == "list":
        return ToolResult.ok(
            {
                "todos": [t.to_dict() for t in todos.items],
                "total_count": len(todos.items),
                "pending_count": len(todos.pending),
            }
        )

    if action == "add":
        title = get_str(params, "title", required=True)
        priority = get_choice(params, "priority", PRIORITIES, default="medium")
        existing = todos.find_by_title(title)
        if existing is not None:
            return ToolResult.ok(
                {"todo": existing.to_dict(), "message": "Todo already on the list"}
            )
        todo = TodoItem(id=new_id("todo"), title=title, priority=priority)
        todos.items.append(todo)
        return ToolResult.ok(
            {"todo": todo.to_dict(), "message": "Todo added successfully"}
        )

    todo_id = get_str(params, "todo_id", required=True)
    todo = todos.find(todo_id)
    if todo is None:
        return ToolResult.fail(f"Todo not found: {todo_id}")
    todo.status = "completed"
    return ToolResult.ok({"todo": todo.to_dict(), "message": "Todo marked as complete"})


async def complete_task(params: dict, scale: float) -> ToolResult:
    task_type = get_choice(params, "task_type", QUICK_TASK_TYPES)
    if task_type is None:
        raise ToolInputError("Missing required parameter 'task_type'")
    text = get_str(params, "input", required=True)
    await simulate_latency(COMPLETE_TASK_LATENCY, scale)

    if task_type == "summarize":
        result = (
            f'Summary of "{text[:50]}...":\n\n'
            "• Main point: Request for project status update\n"
            "• Deadline: Tomorrow (board meeting)\n"
            "• Action needed: Prepare and send status report\n"
            "• Priority: High"
        )
    elif task_type == "schedule":
        result = (
            f'Scheduling suggestion for "{text}":\n\n'
            "Recommended time slots:\n"
            "• Tomorrow 9:00 AM - 10:00 AM (high focus time)\n"
            "• Tomorrow 2:00 PM - 3:00 PM (after lunch)\n\n"
            "I've prepared a calendar invite draft for your approval."
        )
    else:
        result = f'Task "{task_type}" completed with input: {text}'

    return ToolResult.ok({"task_type": task_type, "result": result})


def build_mail_tools(
    mailbox: Mailbox | None = None,
    todos: TodoList | None = None,
    delay_scale: float | None = None,
) -> list[ToolDefinition]:
    """Tools for the intern agent, bound to ``mailbox`` and ``todos``."""
    scale = resolve_scale(delay_scale)
    mailbox = mailbox if mailbox is not None else Mailbox()
    todos = todos if todos is not None else TodoList()
    return [
        ToolDefinition(
            name="read_emails",
            description=(
                "Read emails from the inbox, optionally filtered by read status "
                "or priority"
            ),
            parameters={
                "unread_only": ToolParameter("boolean", "Only show unread emails"),
                "priority": ToolParameter(
                    "string", "Filter by priority: high, medium, low"
                ),
            },
            handler=validated(
                functools.partial(read_emails, scale=scale, mailbox=mailbox)
            ),
        ),
        ToolDefinition(
            name="get_email",
            description="Get the full content of a specific email",
            parameters={
                "email_id": ToolParameter("string", "The email ID", required=True),
            },
            handler=validated(
                functools.partial(get_email, scale=scale, mailbox=mailbox)
            ),
        ),
        ToolDefinition(
            name="draft_response",
            description="Create a draft response to an email",
            parameters={
                "email_id": ToolParameter(
                    "string", "The email ID to respond to", required=True
                ),
                "response_body": ToolParameter(
                    "string", "The response content", required=True
                ),
            },
            handler=validated(
                functools.partial(draft_response, scale=scale, mailbox=mailbox)
            ),
        ),
        ToolDefinition(
            name="manage_todo",
            description="Add, update, or list todo items",
            parameters={
                "action": ToolParameter(
                    "string", "Action: add, complete, list", required=True
                ),
                "title": ToolParameter("string", "Todo title (for add)"),
                "priority": ToolParameter("string", "Priority: low, medium, high"),
                "todo_id": ToolParameter("string", "Todo ID (for complete)"),
            },
            handler=validated(
                functools.partial(manage_todo, scale=scale, todos=todos)
            ),
        ),
        ToolDefinition(
            name="complete_task",
            description="Attempt to complete a simple task autonomously",
            parameters={
                "task_type": ToolParameter(
                    "string", "Type: summarize, schedule, research_quick", required=True
                ),
                "input": ToolParameter("string", "Input for the task", required=True),
            },
            handler=validated(functools.partial(complete_task, scale=scale)),
        ),
    ]
