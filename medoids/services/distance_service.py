# medoids/services/distance_service.py
"""
Distance metrics between 2D points.
"""
from ..domain.point import Point


def manhattan_distance(a: Point, b: Point) -> float:
    """L1 distance: |ax - bx| + |ay - by|."""
    return abs(a.x - b.x) + abs(a.y - b.y)


class ManhattanDistance:
    """
    L1 (taxicab) distance metric.

    Integer coordinates yield integer distances, so totals compare exactly
    and ranking ties stay ties.
    """

    name = "manhattan"

    def distance(self, a: Point, b: Point) -> float:
        return manhattan_distance(a, b)

    def __repr__(self) -> str:
        return "ManhattanDistance()"
