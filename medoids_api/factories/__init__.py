"""
Factories package for the Medoid Lab API.

Contains factory classes for creating and configuring sessions.
"""

from .session_factory import SessionFactory

__all__ = ["SessionFactory"]
