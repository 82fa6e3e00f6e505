"""
In-memory implementation of the session repository.

Suitable for development and single-instance deployments.

Note: Sessions are lost when the server restarts.
"""

from collections import OrderedDict
from threading import Lock
from typing import List, Optional

from medoids.logging_config import get_logger
from medoids.services.clustering_service import ClusteringSession
from .session_repository import SessionRepository

logger = get_logger("api.sessions")


class MemorySessionRepository(SessionRepository):
    """
    Thread-safe in-memory session storage.

    Keeps at most ``max_sessions`` sessions; saving beyond that evicts the
    oldest one.
    """

    def __init__(self, max_sessions: int = 100) -> None:
        self._sessions: "OrderedDict[str, ClusteringSession]" = OrderedDict()
        self._max_sessions = max_sessions
        self._lock = Lock()

    def save(self, session: ClusteringSession) -> None:
        with self._lock:
            self._sessions[session.session_id] = session
            self._sessions.move_to_end(session.session_id)
            while len(self._sessions) > self._max_sessions:
                evicted_id, _ = self._sessions.popitem(last=False)
                logger.info(f"Evicted session {evicted_id} (limit {self._max_sessions})")

    def get(self, session_id: str) -> Optional[ClusteringSession]:
        with self._lock:
            return self._sessions.get(session_id)

    def delete(self, session_id: str) -> bool:
        with self._lock:
            if session_id in self._sessions:
                del self._sessions[session_id]
                return True
            return False

    def list_all(self) -> List[ClusteringSession]:
        with self._lock:
            return list(self._sessions.values())

    def count(self) -> int:
        with self._lock:
            return len(self._sessions)

    def clear(self) -> int:
        """
        Clear all sessions (for testing).

        Returns:
            Number of sessions cleared
        """
        with self._lock:
            count = len(self._sessions)
            self._sessions.clear()
            return count
