"""Tests for the tool contract: parameters, results, definitions, registry."""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from agentoffice.agent.tool_registry import (
    DuplicateToolError,
    ToolDefinition,
    ToolParameter,
    ToolRegistry,
    ToolResult,
)


async def _ok(params: dict) -> ToolResult:
    return ToolResult.ok({"echo": params})


def make_tool(name: str = "echo") -> ToolDefinition:
    return ToolDefinition(
        name=name,
        description="Echo the input back",
        parameters={
            "text": ToolParameter("string", "Text to echo", required=True),
            "loud": ToolParameter("boolean", "Shout it"),
        },
        handler=_ok,
    )


# ── ToolParameter / ToolResult ──────────────────────────────────


def test_parameter_type_is_checked():
    with pytest.raises(ValueError):
        ToolParameter("integer", "not a JSON-schema primitive here")


def test_failed_result_requires_error():
    with pytest.raises(ValueError):
        ToolResult(success=False)
    assert ToolResult.fail("nope").to_dict() == {
        "success": False,
        "data": None,
        "error": "nope",
    }


def test_ok_result_omits_error_key():
    assert ToolResult.ok([1, 2]).to_dict() == {"success": True, "data": [1, 2]}


# ── ToolDefinition ──────────────────────────────────────────────


def test_execute_awaits_handler():
    result = asyncio.run(make_tool().execute({"text": "hi"}))
    assert result.success
    assert result.data == {"echo": {"text": "hi"}}


def test_execute_rejects_non_result():
    async def bad(params: dict):
        return "plain string"

    tool = ToolDefinition(name="bad", description="", handler=bad)
    with pytest.raises(TypeError):
        asyncio.run(tool.execute({}))


def test_execute_without_handler():
    with pytest.raises(RuntimeError):
        asyncio.run(ToolDefinition(name="empty", description="").execute({}))


def test_json_schema():
    schema = make_tool().get_json_schema()
    assert schema["type"] == "object"
    assert schema["properties"]["text"] == {
        "type": "string",
        "description": "Text to echo",
    }
    assert schema["required"] == ["text"]


# ── ToolRegistry ────────────────────────────────────────────────


def test_registry_lookup():
    registry = ToolRegistry([make_tool("a"), make_tool("b")])
    assert len(registry) == 2
    assert "a" in registry
    assert registry.get("b").name == "b"
    assert registry.get("missing") is None
    assert registry.names() == ["a", "b"]
    assert [t.name for t in registry] == ["a", "b"]


def test_registry_rejects_duplicates():
    registry = ToolRegistry([make_tool("a")])
    with pytest.raises(DuplicateToolError) as exc_info:
        registry.register(make_tool("a"))
    assert exc_info.value.name == "a"


def test_openai_schema_shape():
    (entry,) = ToolRegistry([make_tool()]).get_openai_schema()
    assert entry["type"] == "function"
    assert entry["function"]["name"] == "echo"
    assert entry["function"]["parameters"]["required"] == ["text"]
