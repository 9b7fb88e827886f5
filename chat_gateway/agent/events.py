"""
Upstream events: the backend-neutral shape of one item of a pipeline's message stream.

to_upstream_event adapts langchain message objects; nothing downstream inspects
langchain types.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any

from langchain_core.messages import AIMessage, AIMessageChunk, ToolMessage


class Role(str, Enum):
    ASSISTANT = "assistant"
    TOOL = "tool"
    OTHER = "other"


@dataclass(frozen=True)
class UpstreamEvent:
    role: Role
    is_final_chunk: bool
    has_tool_calls: bool
    content: str


def content_text(content: Any) -> str:
    """Flatten message content (str or list of content blocks) to its text."""
    if content is None:
        return ""
    if isinstance(content, str):
        return content
    parts = []
    for block in content:
        if isinstance(block, str):
            parts.append(block)
        elif isinstance(block, dict) and block.get("type") == "text":
            parts.append(block.get("text") or "")
    return "".join(parts)


def to_upstream_event(message: Any) -> UpstreamEvent:
    text = content_text(getattr(message, "content", None))
    if isinstance(message, AIMessageChunk):
        has_tools = bool(message.tool_calls or message.tool_call_chunks)
        finish = (message.response_metadata or {}).get("finish_reason")
        return UpstreamEvent(Role.ASSISTANT, finish is not None, has_tools, text)
    if isinstance(message, AIMessage):
        return UpstreamEvent(Role.ASSISTANT, True, bool(message.tool_calls), text)
    if isinstance(message, ToolMessage):
        return UpstreamEvent(Role.TOOL, True, False, text)
    return UpstreamEvent(Role.OTHER, True, False, text)
