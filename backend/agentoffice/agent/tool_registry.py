from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Iterator

PARAMETER_TYPES = ("string", "number", "boolean", "array", "object")


class DuplicateToolError(ValueError):
    """Raised when two tools with the same name are registered together."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Tool '{name}' is already registered")


@dataclass(frozen=True)
class ToolParameter:
    type: str
    description: str
    required: bool = False

    def __post_init__(self) -> None:
        if self.type not in PARAMETER_TYPES:
            raise ValueError(
                f"Unsupported parameter type '{self.type}', "
                f"expected one of {', '.join(PARAMETER_TYPES)}"
            )


@dataclass
class ToolResult:
    """Uniform envelope returned by every tool executor.

    A failed result always carries an error message; its data is
    meaningless to callers.
    """

    success: bool
    data: Any = None
    error: str | None = None

    def __post_init__(self) -> None:
        if not self.success and not self.error:
            raise ValueError("A failed ToolResult must carry an error message")

    @classmethod
    def ok(cls, data: Any = None) -> ToolResult:
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, error: str) -> ToolResult:
        return cls(success=False, data=None, error=error)

    def to_dict(self) -> dict:
        result: dict = {"success": self.success, "data": self.data}
        if self.error is not None:
            result["error"] = self.error
        return result


ToolHandler = Callable[[dict], Awaitable[ToolResult]]


@dataclass(frozen=True)
class ToolDefinition:
    name: str
    description: str
    parameters: dict[str, ToolParameter] = field(default_factory=dict)
    handler: ToolHandler | None = None

    async def execute(self, params: dict) -> ToolResult:
        """Run the executor. Whatever it raises propagates to the caller."""
        if self.handler is None:
            raise RuntimeError(f"Tool '{self.name}' has no executor")
        result = await self.handler(params)
        if not isinstance(result, ToolResult):
            raise TypeError(
                f"Tool '{self.name}' returned {type(result).__name__}, "
                f"expected ToolResult"
            )
        return result

    def get_json_schema(self) -> dict:
        return {
            "type": "object",
            "properties": {
                name: {"type": p.type, "description": p.description}
                for name, p in self.parameters.items()
            },
            "required": [
                name for name, p in self.parameters.items() if p.required
            ],
        }


class ToolRegistry:
    """Name-indexed set of tools bound to one agent."""

    def __init__(self, tools: list[ToolDefinition] | tuple = ()):
        self._tools: dict[str, ToolDefinition] = {}
        for tool in tools:
            self.register(tool)

    def register(self, tool: ToolDefinition) -> None:
        if tool.name in self._tools:
            raise DuplicateToolError(tool.name)
        self._tools[tool.name] = tool

    def get(self, name: str) -> ToolDefinition | None:
        return self._tools.get(name)

    def names(self) -> list[str]:
        return list(self._tools.keys())

    def get_openai_schema(self) -> list[dict]:
        """Return tools in OpenAI function-calling format."""
        return [
            {
                "type": "function",
                "function": {
                    "name": t.name,
                    "description": t.description,
                    "parameters": t.get_json_schema(),
                },
            }
            for t in self._tools.values()
        ]

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __len__(self) -> int:
        return len(self._tools)

    def __iter__(self) -> Iterator[ToolDefinition]:
        return iter(self._tools.values())
