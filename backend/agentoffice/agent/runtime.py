"""AgentRuntime — the task-driven step loop shared by every office agent.

The loop:
    1. Receive a task and seed the conversation with it
    2. Ask the decision strategy what to do next
    3. Finish, request approval, or run the chosen tool
    4. Record the step and notify observers
    5. Repeat until the task leaves in_progress or the step budget runs out

run_task never raises for failures inside the loop; every exit path hands
back a fully populated Task.
"""

from __future__ import annotations

import asyncio
import json
import logging
from dataclasses import replace
from typing import Callable

from agentoffice.agent.constants import (
    CANCELLED_RESULT,
    EVENT_PREVIEW_MAX_CHARS,
    MAX_STEPS_EVENT_MESSAGE,
    MAX_STEPS_RESULT_TEMPLATE,
    STOPPED_RESULT,
    TASK_INSTRUCTION_TEMPLATE,
    UNKNOWN_TOOL_ERROR_TEMPLATE,
)
from agentoffice.agent.events import AgentEvent, EventBus, EventListener, EventType
from agentoffice.agent.state import (
    AgentConfig,
    AgentRuntimeState,
    Message,
    MessageRole,
    Step,
    Task,
    TaskStatus,
    new_id,
    utcnow,
)
from agentoffice.agent.strategy import DecisionStrategy, Thought
from agentoffice.agent.tool_registry import ToolRegistry

logger = logging.getLogger(__name__)


def _preview(output: dict) -> dict:
    """Event copy of a tool result with long text payloads clipped."""
    data = output.get("data")
    if isinstance(data, str) and len(data) > EVENT_PREVIEW_MAX_CHARS:
        return {**output, "data": data[:EVENT_PREVIEW_MAX_CHARS] + "..."}
    return output


class AgentBusyError(RuntimeError):
    """Raised when run_task is called while a task is still running."""

    def __init__(self, agent_id: str, task_id: str | None = None):
        self.agent_id = agent_id
        self.task_id = task_id
        super().__init__(
            f"Agent '{agent_id}' is already running task {task_id or '(unknown)'}"
        )


class AgentRuntime:
    """One agent: a fixed configuration, a decision strategy and its state.

    The runtime exclusively owns its AgentRuntimeState and the Task it is
    running. Tools are shared by reference and never owned.
    """

    def __init__(self, config: AgentConfig, strategy: DecisionStrategy) -> None:
        self._config = config
        self._strategy = strategy
        self._tools = ToolRegistry(config.tools)
        self._events = EventBus()
        self._state = AgentRuntimeState()
        # True from run_task entry until its finally block, even after stop()
        self._busy = False

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    @property
    def id(self) -> str:
        return self._config.id

    @property
    def name(self) -> str:
        return self._config.name

    @property
    def is_running(self) -> bool:
        return self._state.is_running

    @property
    def is_busy(self) -> bool:
        return self._busy

    @property
    def tools(self) -> ToolRegistry:
        return self._tools

    def get_state(self) -> AgentRuntimeState:
        """Snapshot of the runtime state; mutating it never reaches the agent."""
        task = self._state.current_task
        return replace(
            self._state,
            current_task=replace(task, steps=list(task.steps)) if task else None,
            conversation_history=list(self._state.conversation_history),
        )

    def get_config(self) -> AgentConfig:
        return replace(self._config)

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------

    def on_event(self, listener: EventListener) -> Callable[[], None]:
        return self._events.subscribe(listener)

    def _emit(self, event_type: EventType, data: dict) -> None:
        self._events.emit(
            AgentEvent(
                type=event_type,
                agent_id=self._config.id,
                agent_name=self._config.name,
                data=data,
            )
        )

    # ------------------------------------------------------------------
    # Main loop
    # ------------------------------------------------------------------

    async def run_task(self, description: str) -> Task:
        """Run ``description`` to a terminal status or needs_approval."""
        if self._busy:
            current = self._state.current_task
            raise AgentBusyError(self._config.id, current.id if current else None)
        self._busy = True

        task = Task(
            id=new_id("task"),
            description=description,
            assigned_agent_id=self._config.id,
            status=TaskStatus.IN_PROGRESS,
        )
        self._state.current_task = task
        self._state.conversation_history = []
        self._state.step_count = 0
        self._state.last_error = None
        self._state.is_running = True

        logger.info("%s: starting %s: %s", self.name, task.id, description)

        try:
            self._state.conversation_history.append(
                Message(
                    role=MessageRole.USER,
                    content=TASK_INSTRUCTION_TEMPLATE.format(description=description),
                )
            )

            while (
                self._state.is_running
                and self._state.step_count < self._config.max_steps
            ):
                await self._execute_step(task)
                if task.status is not TaskStatus.IN_PROGRESS:
                    break

            if (
                self._state.step_count >= self._config.max_steps
                and task.status is TaskStatus.IN_PROGRESS
            ):
                task.status = TaskStatus.FAILED
                task.result = MAX_STEPS_RESULT_TEMPLATE.format(
                    max_steps=self._config.max_steps
                )
                logger.warning(
                    "%s: %s exhausted %d steps",
                    self.name,
                    task.id,
                    self._config.max_steps,
                )
                self._emit(EventType.ERROR, {"message": MAX_STEPS_EVENT_MESSAGE})

        except asyncio.CancelledError:
            if task.status is TaskStatus.IN_PROGRESS:
                task.status = TaskStatus.FAILED
                task.result = CANCELLED_RESULT
            self._state.last_error = task.result
            logger.warning("%s: %s cancelled", self.name, task.id)
            self._emit(EventType.ERROR, {"message": task.result})
            raise

        except Exception as exc:
            task.status = TaskStatus.FAILED
            task.result = f"Error: {str(exc) or type(exc).__name__}"
            self._state.last_error = task.result
            logger.exception("%s: %s failed", self.name, task.id)
            self._emit(EventType.ERROR, {"message": task.result})

        finally:
            self._state.is_running = False
            self._busy = False
            if task.completed_at is None:
                task.completed_at = utcnow()

        if task.is_terminal:
            logger.info(
                "%s: %s finished as %s after %d step(s)",
                self.name,
                task.id,
                task.status.value,
                len(task.steps),
            )
        else:
            logger.info(
                "%s: %s paused for approval: %s",
                self.name,
                task.id,
                task.approval_question,
            )
        return task

    async def _execute_step(self, task: Task) -> None:
        self._state.step_count += 1
        step = Step(id=f"step-{self._state.step_count}")

        self._emit(EventType.THINKING, {"step": self._state.step_count})

        thought = await self._strategy.think(self.get_state(), self.get_config())
        step.thought = thought.reasoning
        step.action = thought.action

        # stop() landed while the strategy was thinking
        if not self._state.is_running:
            self._record_step(task, step)
            return

        if thought.is_complete:
            task.status = TaskStatus.COMPLETED
            task.result = thought.final_answer
            self._remember(thought)
            task.steps.append(step)
            self._emit(EventType.TASK_COMPLETE, {"result": thought.final_answer})
            return

        if thought.needs_approval:
            task.status = TaskStatus.NEEDS_APPROVAL
            task.approval_question = thought.approval_question
            self._remember(thought)
            task.steps.append(step)
            self._emit(
                EventType.NEEDS_APPROVAL, {"question": thought.approval_question}
            )
            return

        if thought.tool_name:
            await self._dispatch_tool(step, thought)

        self._record_step(task, step)

    async def _dispatch_tool(self, step: Step, thought: Thought) -> None:
        tool_name = thought.tool_name
        tool_input = dict(thought.tool_input or {})
        step.tool_used = tool_name
        step.tool_input = tool_input

        self._emit(EventType.TOOL_CALL, {"tool": tool_name, "input": tool_input})

        tool = self._tools.get(tool_name)
        if tool is None:
            output = {
                "success": False,
                "data": None,
                "error": UNKNOWN_TOOL_ERROR_TEMPLATE.format(tool=tool_name),
            }
            logger.warning(
                "%s: strategy asked for unknown tool '%s'", self.name, tool_name
            )
        else:
            # Executor exceptions propagate to run_task and fail the task
            result = await tool.execute(tool_input)
            output = result.to_dict()
            self._emit(
                EventType.TOOL_RESULT, {"tool": tool_name, "result": _preview(output)}
            )

        step.tool_output = output
        self._state.conversation_history.append(
            Message(
                role=MessageRole.TOOL,
                content=json.dumps(output, default=str),
                tool_name=tool_name,
            )
        )

    def _record_step(self, task: Task, step: Step) -> None:
        task.steps.append(step)
        self._emit(EventType.STEP_COMPLETE, {"step": step.to_dict()})

    def _remember(self, thought: Thought) -> None:
        content = thought.final_answer or thought.approval_question or thought.reasoning
        self._state.conversation_history.append(
            Message(role=MessageRole.ASSISTANT, content=content or "")
        )

    # ------------------------------------------------------------------
    # Cancellation
    # ------------------------------------------------------------------

    def stop(self) -> None:
        """Cooperatively stop; takes effect at the next loop boundary."""
        self._state.is_running = False
        task = self._state.current_task
        if task is not None and task.status is TaskStatus.IN_PROGRESS:
            task.status = TaskStatus.FAILED
            task.result = STOPPED_RESULT
            logger.warning("%s: %s stopped by user", self.name, task.id)
