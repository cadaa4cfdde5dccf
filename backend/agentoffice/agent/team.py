"""AgentTeam — the set of office agents, addressable by id."""

from __future__ import annotations

import logging
from typing import Callable, Iterable, Iterator

from agentoffice.agent.agents import (
    create_code_review_agent,
    create_intern_agent,
    create_research_agent,
    create_slack_agent,
)
from agentoffice.agent.events import EventListener
from agentoffice.agent.runtime import AgentRuntime

logger = logging.getLogger(__name__)


class AgentTeam:
    def __init__(self, agents: Iterable[AgentRuntime]) -> None:
        self._agents: dict[str, AgentRuntime] = {}
        for agent in agents:
            if agent.id in self._agents:
                raise ValueError(f"Duplicate agent id: {agent.id}")
            self._agents[agent.id] = agent

    def get(self, agent_id: str) -> AgentRuntime | None:
        return self._agents.get(agent_id)

    def ids(self) -> list[str]:
        return list(self._agents)

    def __iter__(self) -> Iterator[AgentRuntime]:
        return iter(self._agents.values())

    def __len__(self) -> int:
        return len(self._agents)

    def __contains__(self, agent_id: object) -> bool:
        return agent_id in self._agents

    def on_event(self, listener: EventListener) -> Callable[[], None]:
        """Subscribe ``listener`` to every member; returns one unsubscribe."""
        unsubscribers = [agent.on_event(listener) for agent in self._agents.values()]

        def unsubscribe() -> None:
            for unsub in unsubscribers:
                unsub()

        return unsubscribe

    def stop_all(self) -> None:
        for agent in self._agents.values():
            if agent.is_running:
                logger.info("%s: stopping", agent.name)
                agent.stop()


def create_agent_team(
    think_delay: float | None = None, delay_scale: float | None = None
) -> AgentTeam:
    """Raj, Sheldon, Penny and Howard, each with its own tool stores."""
    return AgentTeam(
        [
            create_research_agent(think_delay, delay_scale),
            create_code_review_agent(think_delay, delay_scale),
            create_intern_agent(think_delay, delay_scale),
            create_slack_agent(think_delay, delay_scale),
        ]
    )


def get_agent_by_id(team: AgentTeam, agent_id: str) -> AgentRuntime | None:
    return team.get(agent_id)
