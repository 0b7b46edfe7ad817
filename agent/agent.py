from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Any, Callable, List, Optional

from langchain_core.language_models.chat_models import BaseChatModel
from langchain_core.messages import AIMessage, BaseMessage, HumanMessage, SystemMessage
from langchain_google_genai import ChatGoogleGenerativeAI

from agent.core.memory import ASSISTANT, SYSTEM, USER, Message, SessionStore
from agent.core.prompt import AgentConfig, build_system_prompt
from config.settings import Settings, get_settings


logger = logging.getLogger(__name__)


class ChatProxyError(Exception):
    """Base error for a chat turn that could not be completed."""


class ValidationError(ChatProxyError):
    """The request is missing required input; nothing was changed."""


class UpstreamError(ChatProxyError):
    """The completion model call failed. The user turn stays in the transcript."""

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


@dataclass
class ChatResult:
    message: str
    session_id: str


def build_llm(settings: Optional[Settings] = None) -> BaseChatModel:
    settings = settings or get_settings()
    if not settings.google_api_key:
        raise RuntimeError(
            "GOOGLE_API_KEY not set. Please configure it in environment or .env"
        )

    return ChatGoogleGenerativeAI(
        model=settings.gemini_model,
        google_api_key=settings.google_api_key,
        temperature=settings.temperature,
    )


def to_lc_messages(transcript: List[Message]) -> List[BaseMessage]:
    messages: List[BaseMessage] = []
    for item in transcript:
        if item.role == SYSTEM:
            messages.append(SystemMessage(content=item.content))
        elif item.role == ASSISTANT:
            messages.append(AIMessage(content=item.content))
        else:
            messages.append(HumanMessage(content=item.content))
    return messages


def _reply_text(reply: Any) -> str:
    content = getattr(reply, "content", None)
    if isinstance(content, str):
        return content
    # Some providers return a list of content blocks
    if isinstance(content, list):
        parts = []
        for block in content:
            if isinstance(block, str):
                parts.append(block)
            elif isinstance(block, dict) and block.get("type") == "text":
                parts.append(block.get("text") or "")
        if parts:
            return "".join(parts)
    raise ValueError(f"Completion response has no text content: {reply!r}")


class ChatProxy:
    """Runs one chat turn against a session's transcript.

    The completion model is created lazily through ``llm_factory`` so a
    missing credential surfaces as an upstream failure of the chat call
    rather than at startup.
    """

    def __init__(
        self,
        store: SessionStore,
        llm_factory: Optional[Callable[[], BaseChatModel]] = None,
        settings: Optional[Settings] = None,
    ):
        self.store = store
        self.settings = settings or get_settings()
        self._llm_factory = llm_factory or (lambda: build_llm(self.settings))
        self._llm: Optional[BaseChatModel] = None
        self._llm_guard = threading.Lock()

    @property
    def llm(self) -> BaseChatModel:
        with self._llm_guard:
            if self._llm is None:
                self._llm = self._llm_factory()
        return self._llm

    def resolve_session_id(self, session_id: Optional[str]) -> str:
        # An empty id falls back to the default session, same as a missing one
        return session_id or self.settings.default_session_id

    def chat(
        self,
        message: Optional[str],
        session_id: Optional[str] = None,
        agent_config: Optional[AgentConfig] = None,
    ) -> ChatResult:
        if not message:
            raise ValidationError("A message is required")

        session_id = self.resolve_session_id(session_id)
        if not self.store.exists(session_id):
            logger.info("Starting new conversation for session %s", session_id)
        with self.store.lock(session_id):
            if agent_config is not None and self.store.apply_config(session_id, agent_config):
                logger.info("Agent config changed for session %s: %s", session_id, agent_config)
                system_prompt = build_system_prompt(agent_config)
                if system_prompt:
                    self.store.append(session_id, Message(role=SYSTEM, content=system_prompt))

            self.store.append(session_id, Message(role=USER, content=message))
            transcript = self.store.transcript(session_id)

            try:
                reply = self.llm.invoke(to_lc_messages(transcript))
                reply_text = _reply_text(reply)
            except Exception as exc:
                raise UpstreamError(str(exc)) from exc

            self.store.append(session_id, Message(role=ASSISTANT, content=reply_text))

        logger.info(
            "Session %s: %s messages in transcript, reply %s chars",
            session_id,
            len(transcript) + 1,
            len(reply_text),
        )
        return ChatResult(message=reply_text, session_id=session_id)

    def reset(self, session_id: Optional[str] = None) -> str:
        session_id = self.resolve_session_id(session_id)
        with self.store.lock(session_id):
            self.store.reset(session_id)
        logger.info("Session %s reset", session_id)
        return session_id
