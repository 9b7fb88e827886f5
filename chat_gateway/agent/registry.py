"""
Agent registry: the two prebuilt ReAct pipelines and intent-based selection.

chat   → no tools, fastest response.
search → web_search tool for time-sensitive or factual questions.
Both share one chat model and one conversation store (keyed by thread_id).
"""

import logging
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Any, AsyncIterator

from langchain_core.messages import HumanMessage
from langgraph.prebuilt import create_react_agent

from chat_gateway.agent.events import UpstreamEvent, to_upstream_event
from chat_gateway.agent.intent import Intent, classify
from chat_gateway.agent.llm import build_chat_model
from chat_gateway.agent.tools import build_search_tool
from chat_gateway.core.errors import UpstreamError
from chat_gateway.core.memory_store import ConversationStore

logger = logging.getLogger(__name__)

_MODE_LABELS = {Intent.CHAT: "fast chat", Intent.SEARCH: "search-augmented"}


@dataclass(frozen=True)
class AgentPipeline:
    intent: Intent
    graph: Any
    tools: tuple = field(default_factory=tuple)

    async def events(self, text: str, config: dict[str, Any]) -> AsyncIterator[UpstreamEvent]:
        """
        Run the pipeline on one user message and yield its message stream as UpstreamEvents.
        Pulled lazily, one item at a time. Failures surface as UpstreamError.
        """
        stream = self.graph.astream(
            {"messages": [HumanMessage(content=text)]},
            config,
            stream_mode="messages",
        )
        try:
            async for item in stream:
                # stream_mode="messages" yields (message, metadata) pairs
                message = item[0] if isinstance(item, tuple) else item
                if message is None:
                    continue
                yield to_upstream_event(message)
        except UpstreamError:
            raise
        except Exception as e:
            raise UpstreamError(str(e) or type(e).__name__) from e


class AgentRegistry:
    def __init__(self, model: Any, search_tool: Any, store: ConversationStore) -> None:
        self.store = store
        self._pipelines: dict[Intent, AgentPipeline] = {
            Intent.CHAT: self._build(Intent.CHAT, model, ()),
            Intent.SEARCH: self._build(Intent.SEARCH, model, (search_tool,)),
        }

    def _build(self, intent: Intent, model: Any, tools: tuple) -> AgentPipeline:
        graph = create_react_agent(model, list(tools), checkpointer=self.store.checkpointer)
        return AgentPipeline(intent=intent, graph=graph, tools=tools)

    def pipeline(self, intent: Intent) -> AgentPipeline:
        return self._pipelines[intent]

    def select(self, text: str) -> AgentPipeline:
        intent = classify(text)
        logger.info("[registry:select] agent=%s (%s)", intent.value, _MODE_LABELS[intent])
        return self._pipelines[intent]


@lru_cache(maxsize=1)
def get_registry() -> AgentRegistry:
    """Process-wide registry, built on first use so the app can start without credentials."""
    logger.info("[registry:get_registry] building pipelines")
    return AgentRegistry(build_chat_model(), build_search_tool(), ConversationStore())
