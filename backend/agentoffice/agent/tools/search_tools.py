"""Research tools: mock web search, page reader and summariser.

In production these would sit in front of a real search API; here they
return canned results shaped like one.
"""

from __future__ import annotations

import functools

from agentoffice.agent.constants import (
    READ_URL_LATENCY,
    SEARCH_LATENCY,
    SUMMARIZE_LATENCY,
)
from agentoffice.agent.tool_registry import ToolDefinition, ToolParameter, ToolResult
from agentoffice.agent.tools.common import (
    ToolInputError,
    get_choice,
    get_int,
    get_str,
    resolve_scale,
    simulate_latency,
    validated,
)

SUMMARY_FORMATS = ("bullet_points", "paragraph", "executive_summary")

BULLET_SUMMARY = """\
• Key finding #1: Market showing strong growth signals
• Key finding #2: Competition is increasing but opportunities exist
• Key finding #3: Technology adoption is accelerating
• Recommendation: Consider early market entry with differentiated offering"""

PARAGRAPH_SUMMARY = (
    "Research indicates a favorable market environment with strong growth "
    "potential. Key trends suggest increasing adoption rates and expanding "
    "market size. Competition exists but differentiation opportunities are "
    "available. Recommended approach involves strategic positioning and "
    "early action."
)

PAGE_CONTENT = """\
This is the extracted content from the webpage. It contains detailed information about the topic including:

1. **Overview**: A comprehensive introduction to the subject matter.
2. **Key Points**:
   - First important finding with supporting data
   - Second critical insight backed by research
   - Third notable trend in the industry
3. **Analysis**: Expert opinions and market analysis suggest positive growth trajectory.
4. **Conclusion**: Summary of main takeaways and recommended next steps.

Data last updated: January 2026."""


def _search_results(query: str) -> list[dict]:
    return [
        {
            "title": f'Top result for "{query}"',
            "url": "https://example.com/result1",
            "snippet": (
                f"This is a comprehensive overview of {query}. Key findings "
                f"include market trends, best practices, and industry insights."
            ),
        },
        {
            "title": f"{query} - Industry Analysis",
            "url": "https://example.com/result2",
            "snippet": (
                f"Recent studies show that {query} has grown 25% year over "
                f"year. Major players include..."
            ),
        },
        {
            "title": f"How to understand {query}",
            "url": "https://example.com/result3",
            "snippet": (
                f"A beginner's guide to {query}. This article covers the "
                f"fundamentals and advanced concepts."
            ),
        },
    ]


async def web_search(params: dict, scale: float) -> ToolResult:
    query = get_str(params, "query", required=True)
    max_results = get_int(params, "max_results", default=3)
    if max_results < 1:
        raise ToolInputError("Parameter 'max_results' must be at least 1")
    await simulate_latency(SEARCH_LATENCY, scale)

    results = _search_results(query)[:max_results]
    return ToolResult.ok({"query": query, "results": results})


async def read_url(params: dict, scale: float) -> ToolResult:
    url = get_str(params, "url", required=True)
    if not url.startswith(("http://", "https://")):
        raise ToolInputError(f"Not an http(s) URL: {url}")
    await simulate_latency(READ_URL_LATENCY, scale)

    return ToolResult.ok(
        {
            "url": url,
            "title": f"Content from {url}",
            "content": PAGE_CONTENT,
            "word_count": len(PAGE_CONTENT.split()),
        }
    )


async def summarize(params: dict, scale: float) -> ToolResult:
    content = get_str(params, "content", required=True)
    fmt = get_choice(params, "format", SUMMARY_FORMATS, default="bullet_points")
    await simulate_latency(SUMMARIZE_LATENCY, scale)

    summary = BULLET_SUMMARY if fmt == "bullet_points" else PARAGRAPH_SUMMARY
    return ToolResult.ok(
        {
            "format": fmt,
            "summary": summary,
            "original_length": len(content),
            "summary_length": len(summary),
        }
    )


def build_search_tools(delay_scale: float | None = None) -> list[ToolDefinition]:
    """Tools for the research agent."""
    scale = resolve_scale(delay_scale)
    return [
        ToolDefinition(
            name="web_search",
            description="Search the web for information on a topic",
            parameters={
                "query": ToolParameter("string", "The search query", required=True),
                "max_results": ToolParameter(
                    "number", "Maximum results to return"
                ),
            },
            handler=validated(functools.partial(web_search, scale=scale)),
        ),
        ToolDefinition(
            name="read_url",
            description="Read and extract content from a URL",
            parameters={
                "url": ToolParameter("string", "The URL to read", required=True),
            },
            handler=validated(functools.partial(read_url, scale=scale)),
        ),
        ToolDefinition(
            name="summarize",
            description="Summarize collected research into a concise report",
            parameters={
                "content": ToolParameter(
                    "string", "Content to summarize", required=True
                ),
                "format": ToolParameter(
                    "string",
                    "Output format: bullet_points, paragraph, or executive_summary",
                ),
            },
            handler=validated(functools.partial(summarize, scale=scale)),
        ),
    ]
