from __future__ import annotations

import enum
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from agentoffice.agent.tool_registry import ToolDefinition


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def new_id(prefix: str) -> str:
    return f"{prefix}-{uuid.uuid4().hex[:12]}"


def _iso(value: datetime | None) -> str | None:
    return value.isoformat() if value else None


def _parse_dt(value: str | None) -> datetime | None:
    return datetime.fromisoformat(value) if value else None


# ── Enumerations ────────────────────────────────────────────────


class TaskStatus(str, enum.Enum):
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    FAILED = "failed"
    NEEDS_APPROVAL = "needs_approval"


TERMINAL_STATUSES = frozenset({TaskStatus.COMPLETED, TaskStatus.FAILED})


class MessageRole(str, enum.Enum):
    USER = "user"
    ASSISTANT = "assistant"
    TOOL = "tool"


# ── AgentConfig, fixed at construction ─────────────────────────


@dataclass(frozen=True)
class AgentConfig:
    id: str
    name: str
    role: str
    system_prompt: str
    max_steps: int
    tools: tuple[ToolDefinition, ...] = ()
    personality: str = ""

    def __post_init__(self) -> None:
        if self.max_steps < 1:
            raise ValueError(f"max_steps must be >= 1, got {self.max_steps}")
        # Accept any iterable of tools but always store a tuple
        object.__setattr__(self, "tools", tuple(self.tools))

    @property
    def tool_names(self) -> list[str]:
        return [t.name for t in self.tools]

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "role": self.role,
            "max_steps": self.max_steps,
            "personality": self.personality,
            "tools": self.tool_names,
        }


# ── Conversation ────────────────────────────────────────────────


@dataclass
class Message:
    role: MessageRole
    content: str
    tool_name: str | None = None

    def to_dict(self) -> dict:
        msg: dict = {"role": self.role.value, "content": self.content}
        if self.tool_name:
            msg["tool_name"] = self.tool_name
        return msg


# ── Step and Task ───────────────────────────────────────────────


@dataclass
class Step:
    id: str
    action: str = ""
    thought: str = ""
    tool_used: str | None = None
    tool_input: dict | None = None
    tool_output: Any = None
    timestamp: datetime = field(default_factory=utcnow)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "action": self.action,
            "thought": self.thought,
            "tool_used": self.tool_used,
            "tool_input": self.tool_input,
            "tool_output": self.tool_output,
            "timestamp": _iso(self.timestamp),
        }

    @classmethod
    def from_dict(cls, data: dict) -> Step:
        return cls(
            id=data["id"],
            action=data.get("action", ""),
            thought=data.get("thought", ""),
            tool_used=data.get("tool_used"),
            tool_input=data.get("tool_input"),
            tool_output=data.get("tool_output"),
            timestamp=_parse_dt(data.get("timestamp")) or utcnow(),
        )


@dataclass
class Task:
    id: str
    description: str
    assigned_agent_id: str
    status: TaskStatus = TaskStatus.PENDING
    steps: list[Step] = field(default_factory=list)
    result: str | None = None
    approval_question: str | None = None
    created_at: datetime = field(default_factory=utcnow)
    completed_at: datetime | None = None

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_STATUSES

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "description": self.description,
            "assigned_agent_id": self.assigned_agent_id,
            "status": self.status.value,
            "steps": [s.to_dict() for s in self.steps],
            "result": self.result,
            "approval_question": self.approval_question,
            "created_at": _iso(self.created_at),
            "completed_at": _iso(self.completed_at),
        }

    @classmethod
    def from_dict(cls, data: dict) -> Task:
        return cls(
            id=data["id"],
            description=data["description"],
            assigned_agent_id=data["assigned_agent_id"],
            status=TaskStatus(data.get("status", "pending")),
            steps=[Step.from_dict(s) for s in data.get("steps", [])],
            result=data.get("result"),
            approval_question=data.get("approval_question"),
            created_at=_parse_dt(data.get("created_at")) or utcnow(),
            completed_at=_parse_dt(data.get("completed_at")),
        )


# ── AgentRuntimeState, owned by one runtime ────────────────────


@dataclass
class AgentRuntimeState:
    current_task: Task | None = None
    conversation_history: list[Message] = field(default_factory=list)
    step_count: int = 0
    is_running: bool = False
    last_error: str | None = None

    def to_dict(self) -> dict:
        return {
            "current_task": (
                self.current_task.to_dict() if self.current_task else None
            ),
            "conversation_history": [
                m.to_dict() for m in self.conversation_history
            ],
            "step_count": self.step_count,
            "is_running": self.is_running,
            "last_error": self.last_error,
        }
