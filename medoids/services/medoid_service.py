# medoids/services/medoid_service.py
"""
Medoid selection primitives: total-distance ranking, nearest-medoid lookup
and random seeding.

All tie-breaks are first-wins in input order, which keeps results
reproducible for a fixed pool order and random seed.
"""
from typing import List, Optional, Sequence, Tuple

import numpy as np

from ..domain.errors import EmptyPointPoolError, InvalidClusterCountError
from ..domain.point import Point
from ..logging_config import get_logger
from .distance_service import ManhattanDistance
from .interfaces import DistanceMetric

logger = get_logger('medoid_service')


class MedoidService:
    """
    Stateless medoid operations parameterised by a distance metric.
    """

    def __init__(self, distance_metric: Optional[DistanceMetric] = None):
        """
        Initialize the medoid service.

        Args:
            distance_metric: Metric used for all comparisons (default: Manhattan)
        """
        self.metric = distance_metric if distance_metric is not None else ManhattanDistance()

    def distance(self, a: Point, b: Point) -> float:
        return self.metric.distance(a, b)

    def rank_positions(self, points: Sequence[Point]) -> List[Tuple[int, float]]:
        """
        Rank positions of ``points`` by their total distance to the whole set.

        Args:
            points: Candidate points (typically the members of one cluster)

        Returns:
            List of (position, total_distance) sorted ascending by total.
            The sort is stable, so the earliest position wins on ties.
        """
        totals = []
        for i, point in enumerate(points):
            total = sum(self.metric.distance(point, other) for other in points)
            totals.append((i, total))
        return sorted(totals, key=lambda entry: entry[1])

    def rank_by_total_distance(self, points: Sequence[Point]) -> List[Tuple[Point, float]]:
        """
        Rank points by their total distance to every point in the set.

        Args:
            points: Points to rank

        Returns:
            List of (point, total_distance), lowest total first. Empty input
            yields an empty list.
        """
        return [(points[i], total) for i, total in self.rank_positions(points)]

    def nearest_medoid(self, point: Point, medoids: Sequence[Point]) -> Optional[int]:
        """
        Find the medoid closest to a point.

        Args:
            point: Point to place
            medoids: Current medoid points, in slot order

        Returns:
            Slot index of the nearest medoid (first slot wins on ties), or
            None if there are no medoids.
        """
        best_slot = None
        best_distance = None
        for slot, medoid in enumerate(medoids):
            d = self.metric.distance(point, medoid)
            if best_distance is None or d < best_distance:
                best_slot = slot
                best_distance = d
        return best_slot

    def choose_seed_indices(
        self,
        pool_size: int,
        k: int,
        rng: np.random.Generator
    ) -> List[int]:
        """
        Draw initial medoid indices uniformly without replacement.

        Args:
            pool_size: Number of points in the pool
            k: Requested number of medoids
            rng: Random generator (anything with a numpy-style ``choice``)

        Returns:
            min(k, pool_size) distinct pool indices

        Raises:
            InvalidClusterCountError: If k < 1
            EmptyPointPoolError: If the pool is empty
        """
        if k < 1:
            raise InvalidClusterCountError(k)
        if pool_size == 0:
            raise EmptyPointPoolError()

        size = min(k, pool_size)
        if size < k:
            logger.info(f"Requested {k} medoids but pool has {pool_size} points - capping at {size}")

        indices = rng.choice(pool_size, size=size, replace=False)
        return [int(i) for i in indices]
