"""
Unit tests for the Manhattan distance metric.
"""

import pytest
from medoids.domain.point import Point
from medoids.services.distance_service import ManhattanDistance, manhattan_distance
from medoids.services.interfaces import DistanceMetric


class TestManhattanDistance:
    """Tests for manhattan_distance and ManhattanDistance."""

    def test_sum_of_absolute_differences(self):
        assert manhattan_distance(Point(1, 2), Point(4, -2)) == 7

    def test_distance_to_self_is_zero(self):
        p = Point(3.5, -7.25)
        assert manhattan_distance(p, p) == 0

    @pytest.mark.parametrize("a,b", [
        (Point(0, 0), Point(5, 5)),
        (Point(-3, 2), Point(4, -9)),
        (Point(1.5, 2.5), Point(-0.5, 0)),
    ])
    def test_distance_is_symmetric(self, a, b):
        assert manhattan_distance(a, b) == manhattan_distance(b, a)

    def test_distance_is_positive_for_different_points(self):
        assert manhattan_distance(Point(0, 0), Point(0, 1)) > 0

    def test_integer_points_give_integer_distance(self):
        assert isinstance(manhattan_distance(Point(0, 0), Point(2, 3)), int)

    def test_metric_class_matches_function(self):
        metric = ManhattanDistance()
        assert metric.distance(Point(1, 1), Point(4, 5)) == manhattan_distance(Point(1, 1), Point(4, 5))
        assert metric.name == "manhattan"

    def test_metric_satisfies_protocol(self):
        assert isinstance(ManhattanDistance(), DistanceMetric)
