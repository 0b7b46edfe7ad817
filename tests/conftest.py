"""Shared fixtures: a proxy wired to a fake completion model."""

from typing import List

import pytest
from fastapi.testclient import TestClient
from langchain_core.messages import AIMessage, BaseMessage

from agent.agent import ChatProxy
from agent.core.memory import SessionStore
from app.main import app, get_chat_proxy
from config.settings import Settings


class FakeChatModel:
    """Stands in for the Gemini chat model; records every call."""

    def __init__(self, replies=None):
        self.replies = list(replies or [])
        self.calls: List[List[BaseMessage]] = []
        self.error = None

    def invoke(self, messages):
        self.calls.append(list(messages))
        if self.error is not None:
            raise self.error
        if self.replies:
            return AIMessage(content=self.replies.pop(0))
        return AIMessage(content=f"reply {len(self.calls)}")


@pytest.fixture
def settings():
    return Settings()


@pytest.fixture
def store():
    return SessionStore()


@pytest.fixture
def llm():
    return FakeChatModel()


@pytest.fixture
def proxy(store, llm, settings):
    return ChatProxy(store, llm_factory=lambda: llm, settings=settings)


@pytest.fixture
def client(proxy):
    app.dependency_overrides[get_chat_proxy] = lambda: proxy
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
