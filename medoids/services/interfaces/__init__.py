# medoids/services/interfaces/__init__.py
"""
Service interfaces for dependency injection and testability.

The clustering core depends on these protocols rather than on concrete
metrics, so alternative distances can be swapped in and mocked in tests.
"""

from .distance_interface import DistanceMetric

__all__ = [
    "DistanceMetric",
]
