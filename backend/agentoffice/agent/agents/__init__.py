"""The four scripted office agents."""

from agentoffice.agent.agents.code_review import create_code_review_agent
from agentoffice.agent.agents.intern import create_intern_agent
from agentoffice.agent.agents.research import create_research_agent
from agentoffice.agent.agents.slack import create_slack_agent

__all__ = [
    "create_code_review_agent",
    "create_intern_agent",
    "create_research_agent",
    "create_slack_agent",
]
