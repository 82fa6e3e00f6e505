"""
Repositories package for the Medoid Lab API.

Contains repository interfaces and implementations for session storage.
"""

from .session_repository import SessionRepository
from .memory_session_repository import MemorySessionRepository

__all__ = ["SessionRepository", "MemorySessionRepository"]
