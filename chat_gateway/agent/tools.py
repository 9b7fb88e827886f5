"""
Agent tools: web search for the search-augmented pipeline.

web_search calls the Tavily search API and returns a plain-text summary for the LLM.
Failures are reported as text so the model can answer without the tool result.
"""

import logging

import httpx
from langchain_core.tools import StructuredTool
from pydantic import BaseModel, Field

from chat_gateway.core.config import (
    SEARCH_MAX_RESULTS,
    TAVILY_API_KEY,
    TAVILY_SEARCH_URL,
    TOOLS_HTTP_TIMEOUT,
)

logger = logging.getLogger(__name__)


class WebSearchInput(BaseModel):
    query: str = Field(..., min_length=1, description="Search query for the web")


def _format_results(data: dict) -> str:
    lines = []
    answer = (data.get("answer") or "").strip()
    if answer:
        lines.append(answer)
    for i, r in enumerate(data.get("results") or [], 1):
        title = (r.get("title") or "").strip()
        content = (r.get("content") or "").strip()
        url = (r.get("url") or "").strip()
        lines.append(f"{i}. {title}\n{content}\nURL: {url}")
    return "\n\n".join(lines)


def web_search(query: str, api_key: str | None = None, max_results: int = SEARCH_MAX_RESULTS) -> str:
    """Search the web via Tavily. Returns formatted results or an error description."""
    q = (query or "").strip()
    if not q:
        return "Error: empty query"
    key = TAVILY_API_KEY if api_key is None else api_key
    logger.info("[tools:web_search] IN  query=%r max_results=%d", q, max_results)
    try:
        with httpx.Client(timeout=TOOLS_HTTP_TIMEOUT) as client:
            response = client.post(
                TAVILY_SEARCH_URL,
                json={"query": q, "max_results": max_results},
                headers={"Authorization": f"Bearer {key}"},
            )
        if response.status_code != 200:
            logger.warning("[tools:web_search] Tavily error %s: %s", response.status_code, response.text[:200])
            return f"Web search error: Tavily returned {response.status_code}."
        data = response.json()
    except httpx.TimeoutException:
        return "Web search request timed out."
    except (httpx.HTTPError, ValueError) as e:
        logger.warning("[tools:web_search] failed: %s", e)
        return f"Web search failed: {e}"
    out = _format_results(data)
    logger.info("[tools:web_search] OUT results=%d len=%d", len(data.get("results") or []), len(out))
    return out or "No results found."


def build_search_tool() -> StructuredTool:
    return StructuredTool.from_function(
        func=web_search,
        name="web_search",
        description=(
            "Search the web for current or external information: news, prices, weather, "
            "recent events, product or company facts. Input is a search query."
        ),
        args_schema=WebSearchInput,
    )
