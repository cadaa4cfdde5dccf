"""AgentEvent and the EventBus that fans them out to observers.

Events are fire-and-forget notifications: they are delivered synchronously
to whoever is subscribed at emit time and are never stored or replayed.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable

from agentoffice.agent.state import utcnow

logger = logging.getLogger(__name__)


class EventType(str, enum.Enum):
    THINKING = "thinking"
    TOOL_CALL = "tool_call"
    TOOL_RESULT = "tool_result"
    STEP_COMPLETE = "step_complete"
    TASK_COMPLETE = "task_complete"
    ERROR = "error"
    NEEDS_APPROVAL = "needs_approval"


@dataclass
class AgentEvent:
    """Known types and payloads:
        thinking        — data={"step": int}
        tool_call       — data={"tool": str, "input": dict}
        tool_result     — data={"tool": str, "result": dict}
        step_complete   — data={"step": dict}
        task_complete   — data={"result": str}
        needs_approval  — data={"question": str}
        error           — data={"message": str}
    """

    type: EventType
    agent_id: str
    agent_name: str
    data: dict = field(default_factory=dict)
    timestamp: datetime = field(default_factory=utcnow)

    def to_dict(self) -> dict:
        return {
            "type": self.type.value,
            "agent_id": self.agent_id,
            "agent_name": self.agent_name,
            "data": self.data,
            "timestamp": self.timestamp.isoformat(),
        }


EventListener = Callable[[AgentEvent], Any]


class EventBus:
    def __init__(self) -> None:
        self._listeners: list[EventListener] = []

    def subscribe(self, listener: EventListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            try:
                self._listeners.remove(listener)
            except ValueError:
                pass  # already removed

        return unsubscribe

    def emit(self, event: AgentEvent) -> None:
        # Snapshot so listeners may unsubscribe while being notified
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception:
                logger.exception(
                    "%s: event listener failed on %s",
                    event.agent_name,
                    event.type.value,
                )

    def clear(self) -> None:
        self._listeners.clear()

    def __len__(self) -> int:
        return len(self._listeners)
