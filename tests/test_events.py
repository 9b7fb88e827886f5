"""
Unit tests for adapting langchain messages to UpstreamEvents.
"""

from langchain_core.messages import AIMessage, AIMessageChunk, HumanMessage, ToolMessage

from chat_gateway.agent.events import Role, UpstreamEvent, content_text, to_upstream_event


def test_ai_message_without_tools_is_assistant_answer() -> None:
    evt = to_upstream_event(AIMessage(content="final answer"))
    assert evt == UpstreamEvent(Role.ASSISTANT, True, False, "final answer")


def test_ai_message_with_tool_calls_is_flagged() -> None:
    msg = AIMessage(content="", tool_calls=[{"name": "web_search", "args": {"query": "q"}, "id": "call_1"}])
    evt = to_upstream_event(msg)
    assert evt.role is Role.ASSISTANT
    assert evt.has_tool_calls is True


def test_ai_chunk_text_is_not_final_until_finish_reason() -> None:
    evt = to_upstream_event(AIMessageChunk(content="Hel"))
    assert evt.role is Role.ASSISTANT
    assert evt.is_final_chunk is False
    assert evt.has_tool_calls is False
    assert evt.content == "Hel"

    last = to_upstream_event(AIMessageChunk(content="", response_metadata={"finish_reason": "stop"}))
    assert last.is_final_chunk is True


def test_ai_chunk_with_tool_call_chunks_is_flagged() -> None:
    chunk = AIMessageChunk(
        content="",
        tool_call_chunks=[{"name": "web_search", "args": '{"query": "news"}', "id": "call_1", "index": 0}],
    )
    assert to_upstream_event(chunk).has_tool_calls is True


def test_tool_message_is_tool_role() -> None:
    evt = to_upstream_event(ToolMessage(content="1. result", tool_call_id="call_1"))
    assert evt.role is Role.TOOL
    assert evt.content == "1. result"


def test_human_message_is_other_role() -> None:
    assert to_upstream_event(HumanMessage(content="hi")).role is Role.OTHER


def test_content_text_flattens_blocks() -> None:
    assert content_text(None) == ""
    assert content_text("plain") == "plain"
    blocks = ["a", {"type": "text", "text": "b"}, {"type": "image_url", "image_url": "x"}]
    assert content_text(blocks) == "ab"
