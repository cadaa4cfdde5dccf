"""Decision strategies — the pluggable "think" half of the agent loop.

A strategy looks at the runtime state and returns exactly one Thought per
call: use a tool, finish the task, or ask a human for approval. The runtime
honours completion first, then approval, then tool use.

ScriptedStrategy is the stand-in used by the office agents: a fixed sequence
of named stages, one per loop step. A reasoning backend can replace it by
implementing DecisionStrategy.think with the same return contract.
"""

from __future__ import annotations

import asyncio
import enum
import json
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, ClassVar, Sequence

from agentoffice.agent.state import AgentConfig, AgentRuntimeState, MessageRole
from agentoffice.config import settings


@dataclass
class Thought:
    reasoning: str
    action: str
    is_complete: bool = False
    final_answer: str | None = None
    needs_approval: bool = False
    approval_question: str | None = None
    tool_name: str | None = None
    tool_input: dict = field(default_factory=dict)

    @classmethod
    def use_tool(
        cls, reasoning: str, action: str, tool_name: str, tool_input: dict | None = None
    ) -> Thought:
        return cls(
            reasoning=reasoning,
            action=action,
            tool_name=tool_name,
            tool_input=tool_input or {},
        )

    @classmethod
    def complete(cls, reasoning: str, action: str, final_answer: str) -> Thought:
        return cls(
            reasoning=reasoning,
            action=action,
            is_complete=True,
            final_answer=final_answer,
        )

    @classmethod
    def ask_approval(cls, reasoning: str, action: str, question: str) -> Thought:
        return cls(
            reasoning=reasoning,
            action=action,
            needs_approval=True,
            approval_question=question,
        )


class DecisionStrategy(ABC):
    @abstractmethod
    async def think(
        self, state: AgentRuntimeState, config: AgentConfig
    ) -> Thought:
        """Return the next action for the task in ``state``."""
        ...


class ScriptedStrategy(DecisionStrategy):
    """Deterministic state machine over an ordered list of stages.

    Subclasses must define:
        stages: Sequence[enum.Enum] — run in order, one per loop step

    and one handler per stage, named ``_<stage value>``:
        def _search(self, state, config) -> Thought

    The stage is derived from the runtime's step counter, so a new task
    always starts from the first stage. Past the end of the script the
    last stage repeats.
    """

    stages: ClassVar[Sequence[enum.Enum]] = ()

    def __init__(self, think_delay: float | None = None) -> None:
        self.think_delay = (
            settings.THINK_DELAY_SECONDS if think_delay is None else think_delay
        )

    def stage_for(self, step_count: int) -> enum.Enum:
        if not self.stages:
            raise RuntimeError(f"{type(self).__name__} declares no stages")
        index = min(max(step_count, 1), len(self.stages)) - 1
        return self.stages[index]

    async def think(
        self, state: AgentRuntimeState, config: AgentConfig
    ) -> Thought:
        if self.think_delay > 0:
            await asyncio.sleep(self.think_delay)

        stage = self.stage_for(state.step_count)
        handler = getattr(self, f"_{stage.value}", None)
        if handler is None:
            raise NotImplementedError(
                f"{type(self).__name__} has no handler for stage '{stage.value}'"
            )
        return handler(state, config)


# ── Conversation helpers for scripted stages ────────────────────


def task_description(state: AgentRuntimeState) -> str:
    return state.current_task.description if state.current_task else ""


def last_tool_output(state: AgentRuntimeState, tool_name: str) -> dict | None:
    """Most recent result dict recorded for ``tool_name``, if any."""
    for message in reversed(state.conversation_history):
        if message.role is MessageRole.TOOL and message.tool_name == tool_name:
            try:
                return json.loads(message.content)
            except json.JSONDecodeError:
                return None
    return None


def last_tool_data(state: AgentRuntimeState, tool_name: str) -> Any:
    """Data payload of the most recent successful ``tool_name`` call."""
    output = last_tool_output(state, tool_name)
    if output and output.get("success"):
        return output.get("data")
    return None
