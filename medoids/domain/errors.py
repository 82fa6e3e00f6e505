# medoids/domain/errors.py
"""
Exceptions raised by the clustering core.

Only conditions the caller must act on are exceptions. Assignment or steps
attempted without points or medoids are logged no-ops instead.
"""
from typing import Optional


class ClusteringError(Exception):
    """Base class for clustering errors."""
    pass


class EmptyPointPoolError(ClusteringError):
    """Seeding was attempted with no points in the pool."""

    def __init__(self, message: str = "No data: add at least one dataset before clustering"):
        super().__init__(message)


class InvalidClusterCountError(ClusteringError):
    """The requested number of medoids is below 1 or above the configured maximum."""

    def __init__(self, k: int, max_k: Optional[int] = None):
        self.k = k
        self.max_k = max_k
        if max_k is None:
            message = f"Cluster count must be at least 1, got {k}"
        else:
            message = f"Cluster count must be between 1 and {max_k}, got {k}"
        super().__init__(message)


class InvalidPointError(ClusteringError):
    """A coordinate pair could not be turned into a point."""

    def __init__(self, message: str, row: Optional[int] = None):
        self.row = row
        if row is not None:
            message = f"Row {row}: {message}"
        super().__init__(message)


class ConvergenceTimeoutError(ClusteringError):
    """The medoid set still changed after the configured iteration limit."""

    def __init__(self, max_iterations: int):
        self.max_iterations = max_iterations
        super().__init__(f"No convergence after {max_iterations} iterations")
