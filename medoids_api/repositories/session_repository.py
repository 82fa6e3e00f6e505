"""
Abstract repository interface for clustering session storage.

This interface defines the contract for session storage, allowing
different implementations (in-memory, shared cache, etc.).
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from medoids.services.clustering_service import ClusteringSession


class SessionRepository(ABC):
    """
    Abstract interface for session storage.

    Implementations must provide thread-safe storage and retrieval
    of ClusteringSession objects.
    """

    @abstractmethod
    def save(self, session: ClusteringSession) -> None:
        """
        Store or replace a session.

        Args:
            session: The session to store
        """
        pass

    @abstractmethod
    def get(self, session_id: str) -> Optional[ClusteringSession]:
        """
        Retrieve a session by ID.

        Args:
            session_id: The session's unique identifier

        Returns:
            The session if found, None otherwise
        """
        pass

    @abstractmethod
    def delete(self, session_id: str) -> bool:
        """
        Delete a session.

        Args:
            session_id: The session's unique identifier

        Returns:
            True if deleted, False if not found
        """
        pass

    @abstractmethod
    def list_all(self) -> List[ClusteringSession]:
        pass

    @abstractmethod
    def count(self) -> int:
        pass
