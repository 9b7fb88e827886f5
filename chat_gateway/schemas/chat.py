"""Schemas for the chat, health, and history endpoints."""

from typing import Any

from pydantic import BaseModel, Field, field_validator

from chat_gateway.core.config import DEFAULT_THREAD_ID


class ChatRequest(BaseModel):
    """Request body for POST /api/chat and POST /api/chat/stream. History is kept server-side per threadId."""

    message: str | None = Field(None, description="User message. Missing or empty → 400.")
    threadId: str = Field(DEFAULT_THREAD_ID, description="Conversation id; history is stored on the server for this thread.")

    @field_validator("message", mode="before")
    @classmethod
    def _non_text_is_missing(cls, value: Any) -> str | None:
        # the route answers 400 for anything that is not text
        return value if isinstance(value, str) else None


class ChatData(BaseModel):
    response: str = Field(..., description="Final assistant answer.")
    threadId: str
    timestamp: str = Field(..., description="ISO-8601 UTC time the answer was produced.")


class ChatResponse(BaseModel):
    """Response for POST /api/chat."""

    success: bool = True
    data: ChatData


class HealthResponse(BaseModel):
    success: bool = True
    message: str
    timestamp: str


class HistoryData(BaseModel):
    threadId: str
    message: str


class HistoryResponse(BaseModel):
    success: bool = True
    data: HistoryData
