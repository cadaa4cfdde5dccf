"""Howard — the Slack monitor agent.

Tools used: list_channels, get_messages, find_action_items, add_todo, get_todos
"""

from __future__ import annotations

import enum

from agentoffice.agent.constants import SLACK_MAX_STEPS
from agentoffice.agent.reports import render_report
from agentoffice.agent.runtime import AgentRuntime
from agentoffice.agent.state import AgentConfig, AgentRuntimeState, MessageRole
from agentoffice.agent.strategy import ScriptedStrategy, Thought, last_tool_data
from agentoffice.agent.tools.common import SLACK_PRIORITIES
from agentoffice.agent.tools.slack_tools import SlackWorkspace, build_slack_tools


SLACK_SYSTEM_PROMPT = """\
You are Howard, a Slack monitoring agent. You're smooth, efficient, and \
great at keeping track of communications.

## Tools
- list_channels: See all your Slack channels and unread counts
- get_messages: Read messages from channels (can filter for mentions)
- find_action_items: Automatically detect requests and todos in messages
- add_todo: Add items to your todo list
- get_todos: View your current todo list

## Instructions
1. Check which channels have unread messages or mentions
2. Read messages that mention the user
3. Identify action items and requests
4. Add important items to the todo list
5. Summarize what needs attention

## Rules
- Prioritize urgent items and direct mentions
- Be concise in your summaries
- Group related items together
- Flag anything time-sensitive
- Say "TASK COMPLETE" when you've processed everything
"""

# Used when no action items could be extracted from the workspace
FALLBACK_TODOS = [
    {
        "text": "Investigate build failure on main branch",
        "source": "#engineering - CI/CD Bot",
        "priority": "urgent",
    },
    {
        "text": "Review PR for auth refactor (before EOD)",
        "source": "#engineering - Sarah Chen",
        "priority": "urgent",
    },
    {
        "text": "Send API docs for new endpoints to Lisa",
        "source": "DM: Lisa Park",
        "priority": "high",
    },
    {
        "text": "Prepare capacity estimates for sprint planning",
        "source": "#project-alpha - David Kim",
        "priority": "high",
    },
]


class Stage(enum.Enum):
    LIST_CHANNELS = "list_channels"
    READ_MENTIONS = "read_mentions"
    FIND_ACTION_ITEMS = "find_action_items"
    ADD_TODO = "add_todo"
    GET_TODOS = "get_todos"
    SUMMARY = "summary"


def _todos_filed(state: AgentRuntimeState) -> int:
    return sum(
        1
        for m in state.conversation_history
        if m.role is MessageRole.TOOL and m.tool_name == "add_todo"
    )


def _planned_todos(state: AgentRuntimeState) -> list[dict]:
    found = last_tool_data(state, "find_action_items") or {}
    items = found.get("action_items") or []
    if not items:
        return FALLBACK_TODOS
    ranked = sorted(items, key=lambda i: SLACK_PRIORITIES.index(i["priority"]))
    return [
        {"text": i["text"], "source": i["source"], "priority": i["priority"]}
        for i in ranked
    ]


class SlackStrategy(ScriptedStrategy):
    stages = (
        Stage.LIST_CHANNELS,
        Stage.READ_MENTIONS,
        Stage.FIND_ACTION_ITEMS,
        Stage.ADD_TODO,
        Stage.ADD_TODO,
        Stage.ADD_TODO,
        Stage.ADD_TODO,
        Stage.GET_TODOS,
        Stage.SUMMARY,
    )

    def _list_channels(self, state: AgentRuntimeState, config: AgentConfig) -> Thought:
        return Thought.use_tool(
            reasoning=(
                "Let me check your Slack channels to see where there's activity."
            ),
            action="Checking Slack channels",
            tool_name="list_channels",
            tool_input={},
        )

    def _read_mentions(self, state: AgentRuntimeState, config: AgentConfig) -> Thought:
        return Thought.use_tool(
            reasoning=(
                "I see some channels have mentions. Let me check messages "
                "that need your attention."
            ),
            action="Reading messages with mentions",
            tool_name="get_messages",
            tool_input={"channel_id": "all", "mentions_only": True},
        )

    def _find_action_items(
        self, state: AgentRuntimeState, config: AgentConfig
    ) -> Thought:
        return Thought.use_tool(
            reasoning=(
                "Now let me scan all messages for action items and requests "
                "directed at you."
            ),
            action="Finding action items",
            tool_name="find_action_items",
            tool_input={"timeframe": "today"},
        )

    def _add_todo(self, state: AgentRuntimeState, config: AgentConfig) -> Thought:
        planned = _planned_todos(state)
        filed = _todos_filed(state)
        todo = planned[filed % len(planned)]
        return Thought.use_tool(
            reasoning=f"Adding a {todo['priority']} item to the todo list.",
            action=f"Adding todo: {todo['text']}",
            tool_name="add_todo",
            tool_input=dict(todo),
        )

    def _get_todos(self, state: AgentRuntimeState, config: AgentConfig) -> Thought:
        return Thought.use_tool(
            reasoning="Let me get the full todo list to present a summary.",
            action="Getting todo list",
            tool_name="get_todos",
            tool_input={},
        )

    def _summary(self, state: AgentRuntimeState, config: AgentConfig) -> Thought:
        channels = last_tool_data(state, "list_channels") or {}
        mentions = last_tool_data(state, "get_messages") or {}
        todos = last_tool_data(state, "get_todos") or {}

        report = render_report(
            "slack_summary",
            agent_name=config.name,
            mention_count=mentions.get("total_count", 0),
            todos=todos.get("todos") or [],
            channels=channels.get("channels") or [],
        )
        return Thought.complete(
            reasoning=(
                "I've processed all Slack messages and organized your action items."
            ),
            action="Presenting Slack summary",
            final_answer=report,
        )


def create_slack_agent(
    think_delay: float | None = None,
    delay_scale: float | None = None,
    workspace: SlackWorkspace | None = None,
) -> AgentRuntime:
    config = AgentConfig(
        id="howard",
        name="Howard",
        role="slack-monitor",
        system_prompt=SLACK_SYSTEM_PROMPT,
        max_steps=SLACK_MAX_STEPS,
        tools=build_slack_tools(workspace, delay_scale),
        personality="Smooth, efficient, great communicator, organized",
    )
    return AgentRuntime(config, SlackStrategy(think_delay))
