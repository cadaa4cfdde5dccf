"""Constants for the agent runtime and the scripted office agents.

Single source of truth for the loop's fixed messages and limits.
"""

# ---------------------------------------------------------------------------
# Task seeding
# ---------------------------------------------------------------------------
TASK_INSTRUCTION_TEMPLATE = (
    "Task: {description}\n\n"
    "Please complete this task. Think step by step and use your available "
    'tools. Say "TASK COMPLETE" when finished.'
)

# ---------------------------------------------------------------------------
# Terminal messages
# ---------------------------------------------------------------------------
MAX_STEPS_RESULT_TEMPLATE = (
    "Max steps ({max_steps}) reached without completion. Partial progress saved."
)
MAX_STEPS_EVENT_MESSAGE = "Max steps reached"
STOPPED_RESULT = "Agent stopped by user"
CANCELLED_RESULT = "Task cancelled"
UNKNOWN_TOOL_ERROR_TEMPLATE = "Unknown tool: {tool}"

# ---------------------------------------------------------------------------
# Role step budgets
# ---------------------------------------------------------------------------
RESEARCH_MAX_STEPS = 10
CODE_REVIEW_MAX_STEPS = 12
INTERN_MAX_STEPS = 15
SLACK_MAX_STEPS = 12

# ---------------------------------------------------------------------------
# Simulated latency (seconds, before settings.TOOL_DELAY_SCALE is applied)
# ---------------------------------------------------------------------------
SEARCH_LATENCY = 1.0
READ_URL_LATENCY = 0.8
SUMMARIZE_LATENCY = 0.6
LIST_FILES_LATENCY = 0.5
READ_FILE_LATENCY = 0.6
ANALYZE_CODE_LATENCY = 1.0
SUGGEST_FIX_LATENCY = 0.7
READ_EMAILS_LATENCY = 0.8
GET_EMAIL_LATENCY = 0.4
DRAFT_RESPONSE_LATENCY = 0.6
MANAGE_TODO_LATENCY = 0.4
COMPLETE_TASK_LATENCY = 1.0
LIST_CHANNELS_LATENCY = 0.4
GET_MESSAGES_LATENCY = 0.6
FIND_ACTION_ITEMS_LATENCY = 0.8
ADD_TODO_LATENCY = 0.3
GET_TODOS_LATENCY = 0.2

# ---------------------------------------------------------------------------
# Output truncation
# ---------------------------------------------------------------------------
EVENT_PREVIEW_MAX_CHARS = 2000
PREVIEW_CHARS = 100
