from __future__ import annotations

"""In-process conversation memory.

Sessions live for the lifetime of the process: there is no persistence and
no eviction, so the map grows with every new session id. Swap
``SessionStore`` for an external store (e.g. a keyed cache with a TTL) if
that becomes a problem; the proxy only talks to the methods below.
"""

import logging
import threading
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from agent.core.prompt import AgentConfig


logger = logging.getLogger(__name__)

SYSTEM = "system"
USER = "user"
ASSISTANT = "assistant"


@dataclass(frozen=True)
class Message:
    role: str
    content: str


@dataclass
class Session:
    session_id: str
    transcript: List[Message] = field(default_factory=list)
    agent_config: Optional[AgentConfig] = None
    lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)


class SessionStore:
    """Maps session ids to their transcript and applied agent config.

    Single operations are safe to call from several threads, but a whole
    chat turn is a read-modify-write sequence: callers that need it to be
    atomic hold ``lock(session_id)`` around it.
    """

    def __init__(self) -> None:
        self._sessions: Dict[str, Session] = {}
        self._guard = threading.Lock()

    def get(self, session_id: str) -> Session:
        with self._guard:
            session = self._sessions.get(session_id)
            if session is None:
                session = Session(session_id=session_id)
                self._sessions[session_id] = session
                logger.debug("Created session %s", session_id)
            return session

    def exists(self, session_id: str) -> bool:
        with self._guard:
            return session_id in self._sessions

    def lock(self, session_id: str) -> threading.Lock:
        return self.get(session_id).lock

    def append(self, session_id: str, message: Message) -> None:
        self.get(session_id).transcript.append(message)

    def reset(self, session_id: str) -> None:
        # The applied config survives a reset; only the transcript goes.
        self.get(session_id).transcript = []

    def apply_config(self, session_id: str, config: AgentConfig) -> bool:
        session = self.get(session_id)
        if session.agent_config == config:
            return False
        session.agent_config = config
        session.transcript = []
        return True

    def transcript(self, session_id: str) -> List[Message]:
        return list(self.get(session_id).transcript)
