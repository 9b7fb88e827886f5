"""
Agent LLM: DeepSeek chat model through its OpenAI-compatible endpoint.
"""

import logging

from langchain_openai import ChatOpenAI

from chat_gateway.core.config import (
    DEEPSEEK_API_KEY,
    DEEPSEEK_BASE_URL,
    DEEPSEEK_MODEL,
    LLM_MAX_TOKENS,
    LLM_TEMPERATURE,
    LLM_TIMEOUT,
)

logger = logging.getLogger(__name__)


def build_chat_model(api_key: str | None = None) -> ChatOpenAI:
    """
    Build the chat model shared by both pipelines.
    Timeout and token limits are fixed here; callers never override them per request.
    """
    key = DEEPSEEK_API_KEY if api_key is None else api_key
    logger.info("[llm:build_chat_model] model=%s base_url=%s", DEEPSEEK_MODEL, DEEPSEEK_BASE_URL)
    return ChatOpenAI(
        model=DEEPSEEK_MODEL,
        base_url=DEEPSEEK_BASE_URL,
        api_key=key,
        temperature=LLM_TEMPERATURE,
        max_tokens=LLM_MAX_TOKENS,
        timeout=LLM_TIMEOUT,
    )
