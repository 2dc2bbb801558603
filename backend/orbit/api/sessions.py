"""In-memory registry of open rating sessions for the HTTP rating flow.

Each session is a ``RankingSession`` waiting on a human's answers, one
request at a time. Sessions disappear when resolved or cancelled; the
oldest is evicted once ``max_rating_sessions`` are open.
"""

from __future__ import annotations

import logging
import uuid
from collections import OrderedDict
from dataclasses import dataclass

from orbit.config import settings
from orbit.engine.ranking import RankingSession

logger = logging.getLogger(__name__)


@dataclass
class OpenSession:
    id: str
    session: RankingSession
    smoothing_factor: float | None


class SessionStore:
    """Open rating sessions keyed by id, oldest first."""

    def __init__(self, max_sessions: int | None = None) -> None:
        self.max_sessions = max_sessions or settings.max_rating_sessions
        self._sessions: OrderedDict[str, OpenSession] = OrderedDict()

    def open(self, session: RankingSession, smoothing_factor: float | None) -> OpenSession:
        while len(self._sessions) >= self.max_sessions:
            evicted_id, evicted = self._sessions.popitem(last=False)
            evicted.session.cancel()
            logger.warning("Evicted rating session %s (limit %d)", evicted_id, self.max_sessions)
        entry = OpenSession(id=uuid.uuid4().hex, session=session, smoothing_factor=smoothing_factor)
        self._sessions[entry.id] = entry
        logger.debug("Opened rating session %s for %r", entry.id, session.candidate.id)
        return entry

    def get(self, session_id: str) -> OpenSession | None:
        return self._sessions.get(session_id)

    def close(self, session_id: str) -> OpenSession | None:
        return self._sessions.pop(session_id, None)

    def clear(self) -> None:
        self._sessions.clear()

    def __len__(self) -> int:
        return len(self._sessions)


_store: SessionStore | None = None


def get_session_store() -> SessionStore:
    """Get or create the global SessionStore singleton."""
    global _store
    if _store is None:
        _store = SessionStore()
    return _store
