"""Session registry for the HTTP+SSE bridge.

The registry is the only routing source of truth: a POST reaches a session
only through ``SessionRegistry.get``. Ids are server generated and never
reissued while the process lives, even after the session is gone.
"""

from __future__ import annotations

import enum
import logging
import threading
import uuid
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Set

LOGGER = logging.getLogger("ghe.bridge")


class SessionState(str, enum.Enum):
    OPENING = "opening"
    CONNECTED = "connected"
    CLOSED = "closed"


@dataclass
class Session:
    session_id: str
    channel: Any = None
    state: SessionState = SessionState.OPENING
    request_ids: Set[Any] = field(default_factory=set)

    @property
    def connected(self) -> bool:
        return self.state is SessionState.CONNECTED


def _new_session_id() -> str:
    return uuid.uuid4().hex


class SessionRegistry:
    def __init__(self, id_factory: Callable[[], str] | None = None) -> None:
        self._lock = threading.Lock()
        self._sessions: Dict[str, Session] = {}
        # Grows by one id per session for the life of the process; closed ids
        # stay here so they are never handed out again.
        self._issued: Set[str] = set()
        self._id_factory = id_factory or _new_session_id

    def open(self, channel_factory: Callable[[str], Any]) -> Session:
        """Issue an id, build its channel and register it in one step.

        ``channel_factory`` runs under the registry lock; if it raises, nothing
        is registered and the id stays burned.
        """

        with self._lock:
            session_id = self._issue_id()
            session = Session(session_id)
            session.channel = channel_factory(session_id)
            session.state = SessionState.CONNECTED
            self._sessions[session_id] = session
        LOGGER.debug("session %s opened", session_id)
        return session

    def get(self, session_id: str) -> Session | None:
        with self._lock:
            return self._sessions.get(session_id)

    def mark_closed(self, session_id: str) -> None:
        with self._lock:
            session = self._sessions.get(session_id)
            if session is not None:
                session.state = SessionState.CLOSED

    def remove(self, session_id: str) -> Session | None:
        with self._lock:
            session = self._sessions.pop(session_id, None)
        if session is not None:
            session.state = SessionState.CLOSED
            LOGGER.debug("session %s removed", session_id)
        return session

    def live_count(self) -> int:
        with self._lock:
            return sum(1 for session in self._sessions.values() if session.connected)

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)

    def __contains__(self, session_id: object) -> bool:
        with self._lock:
            return session_id in self._sessions

    def _issue_id(self) -> str:
        while True:
            candidate = self._id_factory()
            if candidate not in self._issued:
                self._issued.add(candidate)
                return candidate
            LOGGER.warning("session id collision on %s; drawing again", candidate)
