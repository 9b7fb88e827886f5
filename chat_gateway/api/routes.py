"""
API route aggregator: register endpoints; no logic, only delegate to handlers.
"""

import logging

from fastapi import APIRouter
from fastapi.responses import JSONResponse, StreamingResponse

from chat_gateway.api import sse
from chat_gateway.api.handlers import run_chat, stream_chat
from chat_gateway.schemas.chat import (
    ChatRequest,
    ChatResponse,
    HealthResponse,
    HistoryData,
    HistoryResponse,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api")

EMPTY_MESSAGE_ERROR = "消息内容不能为空"


def _missing_message() -> JSONResponse:
    return JSONResponse(status_code=400, content={"error": EMPTY_MESSAGE_ERROR})


# --- System ---

@router.get("/health", response_model=HealthResponse, tags=["system"])
def health() -> HealthResponse:
    return HealthResponse(message="AI Agent API服务运行正常", timestamp=sse.now_iso())


# --- Chat ---

@router.post(
    "/chat",
    response_model=ChatResponse,
    tags=["chat"],
    summary="Chat with the agent (single response)",
    description="Send a message; receive the full answer. 400 when message is missing, 500 on agent failure.",
)
async def post_chat(body: ChatRequest | None = None):
    if body is None or not body.message:
        return _missing_message()
    logger.info("[api:post_chat] IN  message=%r thread_id=%s", body.message, body.threadId)
    try:
        data = await run_chat(body.message, body.threadId)
    except Exception as e:
        logger.exception("[api:post_chat] agent failed")
        return JSONResponse(
            status_code=500,
            content={"success": False, "error": sse.SERVER_ERROR, "message": str(e)},
        )
    return ChatResponse(data=data)


@router.post(
    "/chat/stream",
    tags=["chat"],
    summary="Chat with the agent (SSE stream)",
    description="Server-Sent Events, data-only frames of type start, thinking, content, end, or error.",
)
async def post_chat_stream(body: ChatRequest | None = None):
    if body is None or not body.message:
        return _missing_message()
    return StreamingResponse(
        stream_chat(body.message, body.threadId),
        media_type="text/event-stream",
        headers={
            "Cache-Control": "no-cache",
            "Connection": "keep-alive",
            "X-Accel-Buffering": "no",
        },
    )


@router.get(
    "/chat/history/{thread_id}",
    response_model=HistoryResponse,
    tags=["chat"],
    summary="Conversation history (not implemented)",
)
def get_chat_history(thread_id: str) -> HistoryResponse:
    return HistoryResponse(data=HistoryData(threadId=thread_id, message="历史记录功能待实现"))
