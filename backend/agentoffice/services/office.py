"""OfficeSession — hosts the agent team for the API.

Owns the team for the lifetime of the app: assigns and stops tasks, keeps a
short buffer of recent events for late observers, fans events out to
WebSocket subscribers and records every finished task in the task store.
"""

from __future__ import annotations

import asyncio
import logging
from collections import deque

from agentoffice.agent.events import AgentEvent
from agentoffice.agent.runtime import AgentBusyError, AgentRuntime
from agentoffice.agent.state import Task
from agentoffice.agent.team import AgentTeam
from agentoffice.config import settings
from agentoffice.services import task_store

logger = logging.getLogger(__name__)


class UnknownAgentError(LookupError):
    def __init__(self, agent_id: str):
        self.agent_id = agent_id
        super().__init__(f"Unknown agent: {agent_id}")


class OfficeSession:
    def __init__(self, team: AgentTeam, buffer_size: int | None = None) -> None:
        self.team = team
        self._events: deque[AgentEvent] = deque(
            maxlen=buffer_size or settings.EVENT_BUFFER_SIZE
        )
        self._subscribers: set[asyncio.Queue] = set()
        # Background runs keyed by agent id
        self._runs: dict[str, asyncio.Task] = {}
        self._unsubscribe = team.on_event(self._on_event)

    # ── Events ──────────────────────────────────────────────────

    def _on_event(self, event: AgentEvent) -> None:
        self._events.append(event)
        for queue in list(self._subscribers):
            queue.put_nowait(event)

    def recent_events(self, limit: int | None = None) -> list[AgentEvent]:
        events = list(self._events)
        if limit is not None:
            events = events[-limit:] if limit > 0 else []
        return events

    def clear_events(self) -> None:
        self._events.clear()

    def subscribe(self) -> asyncio.Queue:
        queue: asyncio.Queue = asyncio.Queue()
        self._subscribers.add(queue)
        return queue

    def unsubscribe(self, queue: asyncio.Queue) -> None:
        self._subscribers.discard(queue)

    # ── Agents and tasks ────────────────────────────────────────

    def get_agent(self, agent_id: str) -> AgentRuntime:
        agent = self.team.get(agent_id)
        if agent is None:
            raise UnknownAgentError(agent_id)
        return agent

    def _check_idle(self, agent: AgentRuntime) -> None:
        run = self._runs.get(agent.id)
        if agent.is_busy or (run is not None and not run.done()):
            current = agent.get_state().current_task
            raise AgentBusyError(agent.id, current.id if current else None)

    async def assign_task(self, agent_id: str, description: str) -> Task:
        """Run ``description`` on ``agent_id`` and record the outcome."""
        agent = self.get_agent(agent_id)
        if agent.is_busy:
            current = agent.get_state().current_task
            raise AgentBusyError(agent.id, current.id if current else None)

        task = await agent.run_task(description)
        await task_store.save_task(task)
        return task

    async def start_task(self, agent_id: str, description: str) -> Task | None:
        """Start ``description`` in the background.

        Returns the task as soon as the agent has picked it up.
        """
        agent = self.get_agent(agent_id)
        self._check_idle(agent)

        run = asyncio.create_task(self.assign_task(agent_id, description))
        self._runs[agent_id] = run
        run.add_done_callback(lambda t: self._run_finished(agent_id, t))

        # Let the run reach its first suspension point so the task exists
        await asyncio.sleep(0)
        return agent.get_state().current_task

    async def wait(self, agent_id: str) -> Task | None:
        """Wait for the background run on ``agent_id``, if one is active."""
        run = self._runs.get(agent_id)
        if run is None:
            return None
        return await run

    def _run_finished(self, agent_id: str, run: asyncio.Task) -> None:
        if self._runs.get(agent_id) is run:
            del self._runs[agent_id]
        if run.cancelled():
            return
        exc = run.exception()
        if exc is not None:
            logger.error(
                "%s: background run failed", agent_id, exc_info=exc
            )

    def stop(self, agent_id: str) -> Task | None:
        agent = self.get_agent(agent_id)
        agent.stop()
        return agent.get_state().current_task

    async def shutdown(self, timeout: float = 5.0) -> None:
        """Stop every agent and wait for background runs to record their tasks.

        Runs still going after ``timeout`` seconds are cancelled.
        """
        self._unsubscribe()
        self.team.stop_all()
        runs = list(self._runs.values())
        pending: set[asyncio.Task] = set()
        if runs:
            _, pending = await asyncio.wait(runs, timeout=timeout)
            for run in pending:
                run.cancel()
            if pending:
                await asyncio.gather(*pending, return_exceptions=True)
        self._runs.clear()
        self._subscribers.clear()
        logger.info(
            "Office shut down: %d background run(s), %d cancelled",
            len(runs),
            len(pending),
        )
