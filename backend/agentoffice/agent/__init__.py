"""Agent execution core: tools, strategies, the run loop and events."""

from agentoffice.agent.events import AgentEvent, EventBus, EventType
from agentoffice.agent.runtime import AgentBusyError, AgentRuntime
from agentoffice.agent.state import AgentConfig, Task, TaskStatus
from agentoffice.agent.strategy import DecisionStrategy, ScriptedStrategy, Thought
from agentoffice.agent.tool_registry import (
    DuplicateToolError,
    ToolDefinition,
    ToolParameter,
    ToolRegistry,
    ToolResult,
)

__all__ = [
    "AgentBusyError",
    "AgentConfig",
    "AgentEvent",
    "AgentRuntime",
    "DecisionStrategy",
    "DuplicateToolError",
    "EventBus",
    "EventType",
    "ScriptedStrategy",
    "Task",
    "TaskStatus",
    "Thought",
    "ToolDefinition",
    "ToolParameter",
    "ToolRegistry",
    "ToolResult",
]
