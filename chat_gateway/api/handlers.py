"""
API handlers: run the selected agent pipeline and shape its output for HTTP.

Responsibility: Bridge HTTP and the agent layer. Credential guard, pipeline
selection, aggregation, and the outward event sequence for streaming.
"""

import asyncio
import logging
from typing import AsyncIterator

from chat_gateway.agent.registry import get_registry
from chat_gateway.api import sse
from chat_gateway.core import config
from chat_gateway.core.errors import UpstreamError
from chat_gateway.schemas.chat import ChatData
from chat_gateway.services.aggregator import StreamAggregator
from chat_gateway.services.credentials import credentials_configured, fallback_response

logger = logging.getLogger(__name__)


async def run_chat(message: str, thread_id: str) -> ChatData:
    """Non-streaming chat: full answer in one envelope. UpstreamError propagates to the route."""
    registry = get_registry()
    pipeline = registry.select(message)
    async with registry.store.lock(thread_id):
        answer = await StreamAggregator().aggregate(pipeline.events(message, registry.store.config(thread_id)))
    logger.info("[handlers:run_chat] OUT thread_id=%s answer_len=%d", thread_id[:16], len(answer))
    return ChatData(response=answer, threadId=thread_id, timestamp=sse.now_iso())


async def _fallback_events(message: str, thread_id: str) -> AsyncIterator[str]:
    logger.info("[handlers:stream_chat] credentials missing; canned response for thread_id=%s", thread_id[:16])
    yield sse.encode(sse.thinking_event(sse.FALLBACK_THINKING_MESSAGE))
    await asyncio.sleep(config.FALLBACK_DELAY)
    yield sse.encode(sse.content_event(fallback_response(message)))
    yield sse.encode(sse.end_event(thread_id))


async def _agent_events(message: str, thread_id: str) -> AsyncIterator[str]:
    try:
        registry = get_registry()
        pipeline = registry.select(message)
        aggregator = StreamAggregator()
        async with registry.store.lock(thread_id):
            async for event in pipeline.events(message, registry.store.config(thread_id)):
                if aggregator.feed(event):
                    yield sse.encode(sse.thinking_event())
        # one content frame per run, empty when the agent produced no answer text
        yield sse.encode(sse.content_event(aggregator.finish()))
    except UpstreamError as e:
        logger.exception("[handlers:stream_chat] agent failed")
        yield sse.encode(sse.content_event(sse.UPSTREAM_ERROR_TEMPLATE.format(detail=e.message)))
    yield sse.encode(sse.end_event(thread_id))


async def stream_chat(message: str, thread_id: str) -> AsyncIterator[str]:
    """
    Yield SSE frames for one request: start, thinking, content, end.
    Agent failures become a content frame followed by end; any other failure
    ends the stream with a single error frame instead of end.
    """
    logger.info("[handlers:stream_chat] IN  message=%r thread_id=%s", message, thread_id[:16])
    try:
        yield sse.encode(sse.start_event())
        events = (
            _agent_events(message, thread_id)
            if credentials_configured()
            else _fallback_events(message, thread_id)
        )
        async for frame in events:
            yield frame
    except Exception as e:
        logger.exception("[handlers:stream_chat] stream failed")
        yield sse.encode(sse.error_event(str(e)))
