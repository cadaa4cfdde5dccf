"""Shared plumbing for the mock tool families."""

from __future__ import annotations

import asyncio
import functools
from typing import Any

from agentoffice.agent.tool_registry import ToolHandler, ToolResult
from agentoffice.config import settings

PRIORITIES = ("low", "medium", "high")
SLACK_PRIORITIES = ("urgent", "high", "normal", "low")


class ToolInputError(ValueError):
    """Malformed tool input; turned into a failed ToolResult."""


def resolve_scale(delay_scale: float | None) -> float:
    return settings.TOOL_DELAY_SCALE if delay_scale is None else delay_scale


async def simulate_latency(base_seconds: float, scale: float) -> None:
    if base_seconds > 0 and scale > 0:
        await asyncio.sleep(base_seconds * scale)


def validated(handler: ToolHandler) -> ToolHandler:
    """Report ToolInputError as a failed result instead of raising."""

    @functools.wraps(handler)
    async def wrapper(params: dict) -> ToolResult:
        if not isinstance(params, dict):
            return ToolResult.fail(
                f"Expected a mapping of parameters, got {type(params).__name__}"
            )
        try:
            return await handler(params)
        except ToolInputError as e:
            return ToolResult.fail(str(e))

    return wrapper


def get_str(
    params: dict, key: str, required: bool = False, default: str | None = None
) -> str | None:
    value = params.get(key)
    if value is None or value == "":
        if required:
            raise ToolInputError(f"Missing required parameter '{key}'")
        return default
    if not isinstance(value, str):
        raise ToolInputError(
            f"Parameter '{key}' must be a string, got {type(value).__name__}"
        )
    return value


def get_bool(params: dict, key: str, default: bool = False) -> bool:
    value = params.get(key)
    if value is None:
        return default
    if not isinstance(value, bool):
        raise ToolInputError(
            f"Parameter '{key}' must be a boolean, got {type(value).__name__}"
        )
    return value


def get_int(params: dict, key: str, default: int | None = None) -> int | None:
    value = params.get(key)
    if value is None:
        return default
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ToolInputError(
            f"Parameter '{key}' must be a number, got {type(value).__name__}"
        )
    return int(value)


def get_list(params: dict, key: str) -> list[Any]:
    value = params.get(key)
    if value is None:
        return []
    if not isinstance(value, (list, tuple)):
        raise ToolInputError(
            f"Parameter '{key}' must be an array, got {type(value).__name__}"
        )
    return list(value)


def get_choice(
    params: dict, key: str, choices: tuple[str, ...], default: str | None = None
) -> str | None:
    value = get_str(params, key, default=default)
    if value is not None and value not in choices:
        raise ToolInputError(
            f"Parameter '{key}' must be one of {', '.join(choices)}, got '{value}'"
        )
    return value
