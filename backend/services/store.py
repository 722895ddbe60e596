"""In-memory session store. Keyed by session name, bounded by max_sessions."""

from __future__ import annotations

import logging

from models.session import DEFAULT_TOPIC, Session
from services.errors import (
    CapacityExceededError,
    DuplicateSessionError,
    SessionNotFoundError,
)
from services.locking import ReadWriteLock

logger = logging.getLogger(__name__)


class SessionStore:
    """
    Registry of scrum poker sessions and their votes.

    Mutations (add_session, vote, new_topic) hold the write side of one
    registry-wide lock; reads (list_sessions, get_results, get_topic) hold the
    read side. Callers only get copies back, never the stored Session objects.
    """

    def __init__(self, max_sessions: int) -> None:
        if max_sessions < 0:
            raise ValueError(f"max_sessions must be >= 0, got {max_sessions}")
        self._max_sessions = max_sessions
        self._sessions: dict[str, Session] = {}
        self._lock = ReadWriteLock()

    @property
    def max_sessions(self) -> int:
        return self._max_sessions

    def __len__(self) -> int:
        with self._lock.read():
            return len(self._sessions)

    def _get(self, session_name: str) -> Session:
        session = self._sessions.get(session_name)
        if session is None:
            raise SessionNotFoundError(session_name)
        return session

    def add_session(self, name: str) -> None:
        """Add a session with the default topic. Name must be unique."""
        with self._lock.write():
            if len(self._sessions) >= self._max_sessions:
                logger.warning(
                    "[store] Rejected session %r: capacity %d reached", name, self._max_sessions
                )
                raise CapacityExceededError(self._max_sessions)
            if name in self._sessions:
                logger.warning("[store] Rejected session %r: name already taken", name)
                raise DuplicateSessionError(name)
            self._sessions[name] = Session(topic=DEFAULT_TOPIC)
            count = len(self._sessions)
        logger.info("[store] Session created: name=%r (%d/%d)", name, count, self._max_sessions)

    def list_sessions(self) -> list[str]:
        with self._lock.read():
            return sorted(self._sessions)

    def vote(self, session_name: str, voter_name: str, value: int) -> None:
        """Send in a vote for a session. Only the last vote of each voter is counted."""
        if value < 0:
            raise ValueError(f"vote must be a non-negative integer, got {value}")
        with self._lock.write():
            self._get(session_name).add_vote(voter_name, value)
        logger.info(
            "[store] Vote recorded: session=%r voter=%r value=%d", session_name, voter_name, value
        )

    def get_results(self, session_name: str) -> list[tuple[str, int]]:
        """Voting results of the current topic as (voter, value) pairs."""
        with self._lock.read():
            return sorted(self._get(session_name).votes.items())

    def get_topic(self, session_name: str) -> str:
        with self._lock.read():
            return self._get(session_name).topic

    def new_topic(self, session_name: str, topic: str) -> None:
        """Set the topic and clear all votes of the session."""
        with self._lock.write():
            self._get(session_name)
            self._sessions[session_name] = Session(topic=topic)
        logger.info("[store] New topic: session=%r topic=%r (votes cleared)", session_name, topic)
