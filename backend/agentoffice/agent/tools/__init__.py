from agentoffice.agent.tools.code_tools import build_code_tools
from agentoffice.agent.tools.mail_tools import Mailbox, TodoList, build_mail_tools
from agentoffice.agent.tools.search_tools import build_search_tools
from agentoffice.agent.tools.slack_tools import SlackWorkspace, build_slack_tools

__all__ = [
    "build_code_tools",
    "build_mail_tools",
    "build_search_tools",
    "build_slack_tools",
    "Mailbox",
    "SlackWorkspace",
    "TodoList",
]
