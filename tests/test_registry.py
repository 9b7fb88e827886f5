"""
Unit tests for pipeline construction, selection, and upstream event streaming.
"""

import asyncio
from unittest.mock import MagicMock, patch

import pytest
from langchain_core.messages import AIMessage, AIMessageChunk, HumanMessage, ToolMessage

from chat_gateway.agent import registry as registry_module
from chat_gateway.agent.events import Role
from chat_gateway.agent.intent import Intent
from chat_gateway.agent.registry import AgentPipeline, AgentRegistry
from chat_gateway.core.errors import UpstreamError
from chat_gateway.core.memory_store import ConversationStore

from conftest import FakeGraph


async def _collect(pipeline: AgentPipeline, text: str, config: dict) -> list:
    return [e async for e in pipeline.events(text, config)]


def test_builds_chat_without_tools_and_search_with_tool() -> None:
    model, tool, store = object(), object(), ConversationStore(ttl_seconds=0)
    with patch("chat_gateway.agent.registry.create_react_agent") as create:
        create.side_effect = ["chat-graph", "search-graph"]
        reg = AgentRegistry(model, tool, store)
    first, second = create.call_args_list
    assert first.args == (model, [])
    assert second.args == (model, [tool])
    assert first.kwargs["checkpointer"] is store.checkpointer
    assert second.kwargs["checkpointer"] is store.checkpointer
    assert reg.pipeline(Intent.CHAT).graph == "chat-graph"
    assert reg.pipeline(Intent.SEARCH).tools == (tool,)


def test_select_follows_classifier(registry, graphs) -> None:
    chat_graph, search_graph = graphs
    assert registry.select("你好").graph is chat_graph
    assert registry.select("今天天气").graph is search_graph
    assert registry.select("你好，今天天气怎么样").graph is chat_graph
    assert registry.select("random words").intent is Intent.CHAT


def test_pipelines_are_immutable(registry) -> None:
    with pytest.raises(AttributeError):
        registry.pipeline(Intent.CHAT).graph = None


def test_events_stream_messages_for_thread() -> None:
    graph = FakeGraph(
        [
            AIMessageChunk(content="", tool_call_chunks=[{"name": "web_search", "args": "{}", "id": "c1", "index": 0}]),
            ToolMessage(content="result", tool_call_id="c1"),
            AIMessageChunk(content="Hi"),
            AIMessage(content="Hi there"),
        ]
    )
    pipeline = AgentPipeline(intent=Intent.SEARCH, graph=graph)
    config = {"configurable": {"thread_id": "t1"}}
    events = asyncio.run(_collect(pipeline, "question", config))

    assert [e.role for e in events] == [Role.ASSISTANT, Role.TOOL, Role.ASSISTANT, Role.ASSISTANT]
    assert events[0].has_tool_calls is True
    inputs, passed_config, mode = graph.calls[0]
    assert isinstance(inputs["messages"][0], HumanMessage)
    assert inputs["messages"][0].content == "question"
    assert passed_config == config
    assert mode == "messages"


def test_graph_failure_becomes_upstream_error() -> None:
    graph = FakeGraph([AIMessageChunk(content="partial")], error=TimeoutError("request timed out"))
    pipeline = AgentPipeline(intent=Intent.CHAT, graph=graph)
    with pytest.raises(UpstreamError) as exc_info:
        asyncio.run(_collect(pipeline, "hi", {}))
    assert exc_info.value.message == "request timed out"
    assert isinstance(exc_info.value.__cause__, TimeoutError)


def test_get_registry_builds_once() -> None:
    registry_module.get_registry.cache_clear()
    try:
        with patch.object(registry_module, "build_chat_model", return_value=MagicMock()) as build_model, \
                patch.object(registry_module, "build_search_tool", return_value=MagicMock()), \
                patch.object(registry_module, "create_react_agent", return_value=MagicMock()):
            first = registry_module.get_registry()
            second = registry_module.get_registry()
        assert first is second
        build_model.assert_called_once()
    finally:
        registry_module.get_registry.cache_clear()
