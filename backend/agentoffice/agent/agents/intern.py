"""Penny — the intern agent.

Works through the inbox: opens the client's status request, files todos, drafts a
reply for approval and presents a daily brief.

Tools used: read_emails, get_email, draft_response, manage_todo, complete_task
"""

from __future__ import annotations

import enum

from agentoffice.agent.constants import INTERN_MAX_STEPS
from agentoffice.agent.reports import render_report
from agentoffice.agent.runtime import AgentRuntime
from agentoffice.agent.state import AgentConfig, AgentRuntimeState
from agentoffice.agent.strategy import ScriptedStrategy, Thought, last_tool_data
from agentoffice.agent.tools.mail_tools import Mailbox, TodoList, build_mail_tools


INTERN_SYSTEM_PROMPT = """\
You are Penny, a capable and efficient intern agent. You're practical, good \
with people, and excellent at cutting through complexity to get things done.

## Tools
- read_emails: Check inbox for new messages
- get_email: Read full email content
- draft_response: Create email response drafts
- manage_todo: Add, complete, or list todo items
- complete_task: Handle simple tasks autonomously

## Workflow
1. Check for new/important emails
2. Identify action items and add to todo list
3. Draft responses for emails that need replies
4. Complete tasks you can handle autonomously
5. Present everything for human approval

## Rules
- Always ask approval before sending emails
- Flag urgent items clearly
- Be concise but friendly in communications
- Don't overcommit - flag tasks that need human expertise
- Say "TASK COMPLETE" when you've processed everything
"""

STATUS_REPLY = """\
Hi,

Thank you for reaching out. I'd be happy to provide the project status update for tomorrow's board meeting.

Here's a summary of our current progress:

**Project Status: On Track**

• Completed: Core functionality (100%)
• In Progress: Testing and QA (75%)
• Upcoming: Final review and deployment

**Key Highlights:**
- All major milestones met on schedule
- No blocking issues identified
- Team morale is high

I can provide more detailed metrics if needed. Let me know if you'd like me to join the meeting to answer any questions.

Best regards"""

# The status request the reply, todo and summary below are written for
STATUS_REQUEST_EMAIL_ID = "email-1"


class Stage(enum.Enum):
    READ_INBOX = "read_inbox"
    OPEN_STATUS_REQUEST = "open_status_request"
    ADD_REPLY_TODO = "add_reply_todo"
    SUMMARIZE_REQUEST = "summarize_request"
    DRAFT_REPLY = "draft_reply"
    ADD_SYNC_TODO = "add_sync_todo"
    LIST_TODOS = "list_todos"
    BRIEF = "brief"


class InternStrategy(ScriptedStrategy):
    stages = tuple(Stage)

    def _read_inbox(self, state: AgentRuntimeState, config: AgentConfig) -> Thought:
        return Thought.use_tool(
            reasoning="Let me check the inbox for any unread or high-priority emails.",
            action="Checking email inbox",
            tool_name="read_emails",
            tool_input={"unread_only": True},
        )

    def _open_status_request(
        self, state: AgentRuntimeState, config: AgentConfig
    ) -> Thought:
        return Thought.use_tool(
            reasoning="The client is asking for a status update. Let me read the full request.",
            action="Reading status request email",
            tool_name="get_email",
            tool_input={"email_id": STATUS_REQUEST_EMAIL_ID},
        )

    def _add_reply_todo(self, state: AgentRuntimeState, config: AgentConfig) -> Thought:
        return Thought.use_tool(
            reasoning=(
                "This email needs a response. Let me add it to the todo list first."
            ),
            action="Adding to todo list",
            tool_name="manage_todo",
            tool_input={
                "action": "add",
                "title": "Send project status update to client",
                "priority": "high",
            },
        )

    def _summarize_request(
        self, state: AgentRuntimeState, config: AgentConfig
    ) -> Thought:
        return Thought.use_tool(
            reasoning="Let me summarize what needs to be done for this email.",
            action="Summarizing requirements",
            tool_name="complete_task",
            tool_input={
                "task_type": "summarize",
                "input": "Project status update request for board meeting",
            },
        )

    def _draft_reply(self, state: AgentRuntimeState, config: AgentConfig) -> Thought:
        email = last_tool_data(state, "get_email") or {}
        return Thought.use_tool(
            reasoning="I'll draft a professional response for your review.",
            action="Drafting email response",
            tool_name="draft_response",
            tool_input={
                "email_id": email.get("id") or STATUS_REQUEST_EMAIL_ID,
                "response_body": STATUS_REPLY,
            },
        )

    def _add_sync_todo(self, state: AgentRuntimeState, config: AgentConfig) -> Thought:
        return Thought.use_tool(
            reasoning="Let me also add an item to follow up on the team sync email.",
            action="Adding team sync todo",
            tool_name="manage_todo",
            tool_input={
                "action": "add",
                "title": "Add agenda items for Thursday team sync",
                "priority": "medium",
            },
        )

    def _list_todos(self, state: AgentRuntimeState, config: AgentConfig) -> Thought:
        return Thought.use_tool(
            reasoning="Let me get the full todo list to present everything together.",
            action="Getting complete todo list",
            tool_name="manage_todo",
            tool_input={"action": "list"},
        )

    def _brief(self, state: AgentRuntimeState, config: AgentConfig) -> Thought:
        inbox = last_tool_data(state, "read_emails") or {}
        todo_list = last_tool_data(state, "manage_todo") or {}
        draft = (last_tool_data(state, "draft_response") or {}).get("draft")

        drafts = [draft] if draft else []
        report = render_report(
            "intern_brief",
            agent_name=config.name,
            emails=inbox.get("emails") or [],
            drafted={d["email_id"] for d in drafts},
            todos=todo_list.get("todos") or [],
            drafts=drafts,
        )
        return Thought.complete(
            reasoning=(
                "I've processed all emails and organized the action items. "
                "Time to present for approval."
            ),
            action="Presenting daily brief",
            final_answer=report,
        )


def create_intern_agent(
    think_delay: float | None = None,
    delay_scale: float | None = None,
    mailbox: Mailbox | None = None,
    todos: TodoList | None = None,
) -> AgentRuntime:
    config = AgentConfig(
        id="penny",
        name="Penny",
        role="intern",
        system_prompt=INTERN_SYSTEM_PROMPT,
        max_steps=INTERN_MAX_STEPS,
        tools=build_mail_tools(mailbox, todos, delay_scale),
        personality="Practical, efficient, friendly, action-oriented",
    )
    return AgentRuntime(config, InternStrategy(think_delay))
