# medoids/services/interfaces/distance_interface.py
"""
Protocol interface for point distance metrics.

Example usage:
    def spread(metric: DistanceMetric, points: List[Point]) -> float:
        return max(metric.distance(points[0], p) for p in points)
"""

from typing import Protocol, runtime_checkable

from ...domain.point import Point


@runtime_checkable
class DistanceMetric(Protocol):
    """
    Protocol defining a dissimilarity between two points.

    Implementations must be symmetric, never negative, and return zero
    for points with equal coordinates.

    Implementations:
    - ManhattanDistance: L1 distance (default)
    """

    name: str

    def distance(self, a: Point, b: Point) -> float:
        """
        Compute the dissimilarity between two points.

        Args:
            a: First point
            b: Second point

        Returns:
            Non-negative distance
        """
        ...
