"""
Shared fixtures: fake agent graphs so tests never call DeepSeek or Tavily.
"""

import json
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from chat_gateway.agent.registry import AgentRegistry
from chat_gateway.core import config
from chat_gateway.core.memory_store import ConversationStore
from chat_gateway.main import app


class FakeGraph:
    """Stands in for a compiled langgraph agent: astream yields (message, metadata) pairs."""

    def __init__(self, items=None, error: Exception | None = None) -> None:
        self.items = list(items or [])
        self.error = error
        self.calls: list[tuple] = []

    async def astream(self, inputs, config=None, stream_mode=None):
        self.calls.append((inputs, config, stream_mode))
        for message in self.items:
            yield message, {"langgraph_node": "agent"}
        if self.error is not None:
            raise self.error


def parse_sse(body: str) -> list[dict]:
    """Split a text/event-stream body into its JSON payloads."""
    events = []
    for frame in body.split("\n\n"):
        if frame.startswith("data: "):
            events.append(json.loads(frame[len("data: "):]))
    return events


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


@pytest.fixture
def missing_credentials(monkeypatch):
    monkeypatch.setattr(config, "DEEPSEEK_API_KEY", "")
    monkeypatch.setattr(config, "TAVILY_API_KEY", "")
    monkeypatch.setattr(config, "FALLBACK_DELAY", 0)


@pytest.fixture
def configured_credentials(monkeypatch):
    monkeypatch.setattr(config, "DEEPSEEK_API_KEY", "sk-test-deepseek")
    monkeypatch.setattr(config, "TAVILY_API_KEY", "tvly-test")


@pytest.fixture
def graphs():
    """(chat_graph, search_graph) returned by the patched create_react_agent, in build order."""
    return FakeGraph(), FakeGraph()


@pytest.fixture
def registry(graphs, monkeypatch) -> AgentRegistry:
    with patch("chat_gateway.agent.registry.create_react_agent", side_effect=list(graphs)):
        reg = AgentRegistry(model=object(), search_tool=object(), store=ConversationStore())
    monkeypatch.setattr("chat_gateway.api.handlers.get_registry", lambda: reg)
    return reg
