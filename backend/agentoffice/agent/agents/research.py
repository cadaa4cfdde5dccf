"""Raj — the research agent.

Searches for the task topic, reads the top hit, summarises and reports.

Tools used: web_search, read_url, summarize
"""

from __future__ import annotations

import enum
import json

from agentoffice.agent.constants import RESEARCH_MAX_STEPS
from agentoffice.agent.reports import render_report
from agentoffice.agent.runtime import AgentRuntime
from agentoffice.agent.state import AgentConfig, AgentRuntimeState
from agentoffice.agent.strategy import (
    ScriptedStrategy,
    Thought,
    last_tool_data,
    task_description,
)
from agentoffice.agent.tools.search_tools import build_search_tools


RESEARCH_SYSTEM_PROMPT = """\
You are Raj, a skilled research agent. Your personality is thorough, \
detail-oriented, and you excel at finding patterns in data.

## Tools
- web_search: Search the internet for information
- read_url: Read and extract content from web pages
- summarize: Compile findings into clear summaries

## Instructions
1. Break down what you need to find
2. Search for relevant information
3. Read promising sources
4. Synthesize findings
5. Present a clear summary

## Rules
- Be thorough but efficient
- Cite your sources
- Distinguish facts from opinions
- If you can't find reliable information, say so
- Say "TASK COMPLETE" when you have a final answer
"""

DEFAULT_RECOMMENDATION = (
    "Based on my research, I recommend considering early market entry with a "
    "differentiated offering that addresses emerging trends."
)


class Stage(enum.Enum):
    SEARCH = "search"
    READ_TOP_RESULT = "read_top_result"
    SUMMARIZE = "summarize"
    REPORT = "report"


class ResearchStrategy(ScriptedStrategy):
    stages = (Stage.SEARCH, Stage.READ_TOP_RESULT, Stage.SUMMARIZE, Stage.REPORT)

    def _search(self, state: AgentRuntimeState, config: AgentConfig) -> Thought:
        topic = task_description(state)
        return Thought.use_tool(
            reasoning=(
                f'I need to research "{topic}". Let me start by searching '
                f"for relevant information."
            ),
            action="Searching the web for information",
            tool_name="web_search",
            tool_input={"query": topic, "max_results": 5},
        )

    def _read_top_result(
        self, state: AgentRuntimeState, config: AgentConfig
    ) -> Thought:
        search = last_tool_data(state, "web_search") or {}
        results = search.get("results") or []
        url = results[0]["url"] if results else "https://example.com/result1"
        return Thought.use_tool(
            reasoning=(
                "Found some promising results. Let me read the top result "
                "for more details."
            ),
            action="Reading detailed content from source",
            tool_name="read_url",
            tool_input={"url": url},
        )

    def _summarize(self, state: AgentRuntimeState, config: AgentConfig) -> Thought:
        page = last_tool_data(state, "read_url") or {}
        content = page.get("content") or json.dumps(
            state.conversation_history[-1].content
            if state.conversation_history
            else ""
        )
        return Thought.use_tool(
            reasoning=(
                "I have gathered enough information. Let me compile a summary "
                "of my findings."
            ),
            action="Summarizing research findings",
            tool_name="summarize",
            tool_input={"content": content, "format": "bullet_points"},
        )

    def _report(self, state: AgentRuntimeState, config: AgentConfig) -> Thought:
        search = last_tool_data(state, "web_search") or {}
        summary = last_tool_data(state, "summarize") or {}

        findings = []
        recommendation = DEFAULT_RECOMMENDATION
        for line in (summary.get("summary") or "").splitlines():
            line = line.lstrip("• ").strip()
            if not line:
                continue
            if line.startswith("Recommendation:"):
                recommendation = line.removeprefix("Recommendation:").strip()
            else:
                findings.append(line)

        report = render_report(
            "research_report",
            agent_name=config.name,
            description=task_description(state),
            findings=findings,
            sources=(search.get("results") or [])[:2],
            recommendation=recommendation,
        )
        return Thought.complete(
            reasoning="I have completed my research and compiled the findings.",
            action="Presenting final research report",
            final_answer=report,
        )


def create_research_agent(
    think_delay: float | None = None, delay_scale: float | None = None
) -> AgentRuntime:
    config = AgentConfig(
        id="raj",
        name="Raj",
        role="research",
        system_prompt=RESEARCH_SYSTEM_PROMPT,
        max_steps=RESEARCH_MAX_STEPS,
        tools=build_search_tools(delay_scale),
        personality="Thorough, analytical, pattern-recognition expert",
    )
    return AgentRuntime(config, ResearchStrategy(think_delay))
