"""
Outward event protocol for POST /api/chat/stream.

Each event is one frame: "data: <JSON>\\n\\n". Order per request: start, at most one
thinking, exactly one content (empty when the agent produced no answer text), then
end. error replaces end when the stream fails outside the agent call.
"""

import json
from datetime import datetime, timezone
from typing import Any

START_MESSAGE = "开始处理请求..."
FALLBACK_THINKING_MESSAGE = "检测到API密钥未配置，返回测试响应..."
THINKING_MESSAGE = "思考完成，开始回答..."
END_MESSAGE = "响应完成"
SERVER_ERROR = "服务器内部错误"
UPSTREAM_ERROR_TEMPLATE = "处理请求时发生错误: {detail}"


def now_iso() -> str:
    """UTC timestamp in ISO-8601 with milliseconds, e.g. 2026-01-01T12:00:00.000Z."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def encode(payload: dict[str, Any]) -> str:
    return f"data: {json.dumps(payload, ensure_ascii=False)}\n\n"


def start_event() -> dict[str, Any]:
    return {"type": "start", "message": START_MESSAGE}


def thinking_event(message: str = THINKING_MESSAGE) -> dict[str, Any]:
    return {"type": "thinking", "message": message}


def content_event(text: str) -> dict[str, Any]:
    return {"type": "content", "content": text, "timestamp": now_iso()}


def end_event(thread_id: str) -> dict[str, Any]:
    return {"type": "end", "message": END_MESSAGE, "threadId": thread_id}


def error_event(message: str, error: str = SERVER_ERROR) -> dict[str, Any]:
    return {"type": "error", "error": error, "message": message}
