"""Code review tools backed by a canned snapshot of a small frontend repo."""

from __future__ import annotations

import fnmatch
import functools

from agentoffice.agent.constants import (
    ANALYZE_CODE_LATENCY,
    LIST_FILES_LATENCY,
    READ_FILE_LATENCY,
    SUGGEST_FIX_LATENCY,
)
from agentoffice.agent.tool_registry import ToolDefinition, ToolParameter, ToolResult
from agentoffice.agent.tools.common import (
    ToolInputError,
    get_list,
    get_str,
    resolve_scale,
    simulate_latency,
    validated,
)

FOCUS_AREAS = ("bugs", "performance", "security", "style", "type-safety", "react-hooks")

MOCK_FILES = [
    {"name": "App.tsx", "size": 3200, "modified": "2026-01-22"},
    {"name": "hooks/useAgentSimulation.ts", "size": 8500, "modified": "2026-01-22"},
    {"name": "components/GameWorld.tsx", "size": 5600, "modified": "2026-01-22"},
    {"name": "agents/BaseAgent.ts", "size": 4200, "modified": "2026-01-22"},
    {"name": "types/agent.ts", "size": 2100, "modified": "2026-01-22"},
]

MOCK_SOURCE = """\
import { useState, useEffect } from 'react';

interface Props {
  data: any; // TODO: Add proper typing
  onUpdate: (value: string) => void;
}

export function Component({ data, onUpdate }: Props) {
  const [state, setState] = useState(null);

  useEffect(() => {
    fetchData();
  }, []); // eslint-disable-line

  const handleClick = () => {
    console.log('clicked');
    onUpdate(state);
  };

  return (
    <div onClick={handleClick}>
      {data.items.map(item => (
        <span>{item.name}</span>
      ))}
    </div>
  );
}"""

MOCK_ISSUES = [
    {
        "severity": "high",
        "type": "bug",
        "line": 15,
        "message": "Missing key prop in list rendering",
        "suggestion": "Add a unique key prop to mapped elements",
    },
    {
        "severity": "medium",
        "type": "type-safety",
        "line": 5,
        "message": 'Using "any" type defeats TypeScript benefits',
        "suggestion": "Define a proper interface for the data prop",
    },
    {
        "severity": "low",
        "type": "code-quality",
        "line": 18,
        "message": "Console.log left in production code",
        "suggestion": "Remove debug statements before committing",
    },
    {
        "severity": "medium",
        "type": "react-hooks",
        "line": 12,
        "message": "useEffect with empty dependency array may cause stale closures",
        "suggestion": "Review dependencies or document the intentional empty array",
    },
]

KEY_PROP_FIX = """\
// Before:
{data.items.map(item => (
  <span>{item.name}</span>
))}

// After:
{data.items.map((item, index) => (
  <span key={item.id ?? index}>{item.name}</span>
))}"""


def _language_for(path: str) -> str:
    if path.endswith(".tsx"):
        return "tsx"
    if path.endswith(".ts"):
        return "typescript"
    return "unknown"


async def list_files(params: dict, scale: float) -> ToolResult:
    path = get_str(params, "path", required=True)
    pattern = get_str(params, "pattern", default="*")
    await simulate_latency(LIST_FILES_LATENCY, scale)

    files = [
        f for f in MOCK_FILES
        if fnmatch.fnmatch(f["name"].rsplit("/", 1)[-1], pattern)
    ]
    return ToolResult.ok(
        {"path": path, "pattern": pattern, "files": files, "total_files": len(files)}
    )


async def read_file(params: dict, scale: float) -> ToolResult:
    path = get_str(params, "path", required=True)
    await simulate_latency(READ_FILE_LATENCY, scale)

    content = f"// File: {path}\n{MOCK_SOURCE}"
    return ToolResult.ok(
        {
            "path": path,
            "language": _language_for(path),
            "line_count": content.count("\n") + 1,
            "content": content,
        }
    )


async def analyze_code(params: dict, scale: float) -> ToolResult:
    get_str(params, "code", required=True)
    focus_areas = get_list(params, "focus_areas")
    unknown = [a for a in focus_areas if a not in FOCUS_AREAS]
    if unknown:
        raise ToolInputError(f"Unknown focus area(s): {', '.join(map(str, unknown))}")
    await simulate_latency(ANALYZE_CODE_LATENCY, scale)

    issues = [dict(i) for i in MOCK_ISSUES]
    counts = {
        level: sum(1 for i in issues if i["severity"] == level)
        for level in ("high", "medium", "low")
    }
    return ToolResult.ok(
        {
            "issues": issues,
            "metrics": {
                "complexity": "low",
                "maintainability": "B",
                "test_coverage": "unknown",
            },
            "summary": (
                f"{len(issues)} issues found: {counts['high']} high, "
                f"{counts['medium']} medium, {counts['low']} low severity"
            ),
        }
    )


async def suggest_fix(params: dict, scale: float) -> ToolResult:
    issue = get_str(params, "issue", required=True)
    get_str(params, "context", required=True)
    await simulate_latency(SUGGEST_FIX_LATENCY, scale)

    return ToolResult.ok(
        {
            "issue": issue,
            "suggested_fix": f"// Suggested fix for: {issue}\n\n{KEY_PROP_FIX}",
            "confidence": "high",
        }
    )


def build_code_tools(delay_scale: float | None = None) -> list[ToolDefinition]:
    """Tools for the code review agent."""
    scale = resolve_scale(delay_scale)
    return [
        ToolDefinition(
            name="list_files",
            description="List files in a directory matching a pattern",
            parameters={
                "path": ToolParameter(
                    "string", "Directory path to search", required=True
                ),
                "pattern": ToolParameter(
                    "string", 'File pattern (e.g., "*.ts", "*.tsx")'
                ),
            },
            handler=validated(functools.partial(list_files, scale=scale)),
        ),
        ToolDefinition(
            name="read_file",
            description="Read the contents of a source file",
            parameters={
                "path": ToolParameter("string", "Path to the file", required=True),
            },
            handler=validated(functools.partial(read_file, scale=scale)),
        ),
        ToolDefinition(
            name="analyze_code",
            description="Analyze code for bugs, issues, and improvement opportunities",
            parameters={
                "code": ToolParameter("string", "Code to analyze", required=True),
                "focus_areas": ToolParameter(
                    "array", "Areas to focus on: bugs, performance, security, style"
                ),
            },
            handler=validated(functools.partial(analyze_code, scale=scale)),
        ),
        ToolDefinition(
            name="suggest_fix",
            description="Generate a suggested fix for a specific issue",
            parameters={
                "issue": ToolParameter(
                    "string", "Description of the issue", required=True
                ),
                "context": ToolParameter(
                    "string", "Code context around the issue", required=True
                ),
            },
            handler=validated(functools.partial(suggest_fix, scale=scale)),
        ),
    ]
