# medoids/services/clustering_service.py
"""
Clustering session for Partitioning Around Medoids (PAM).

A session owns the point pool, the current medoid set and the cluster
mapping for one clustering workflow:

1. Points are contributed by one or more datasets (flattened into one pool)
2. Medoids are seeded by sampling distinct pool points at random
3. Every point is assigned to its nearest medoid
4. Each cluster's medoid is replaced by its lowest total-distance member and
   points are reassigned, until the medoid set stops changing

Medoids and cluster members are stored as pool indices, so a medoid is always
a real point from the pool.
"""
import threading
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple, Union

import numpy as np

from ..config import AppConfig
from ..domain.cluster import Cluster, ClusterSnapshot, ConvergenceReport, StepResult
from ..domain.errors import ConvergenceTimeoutError, EmptyPointPoolError
from ..domain.point import Dataset, Point
from ..logging_config import get_logger
from ..utils.timing import Timer
from .interfaces import DistanceMetric
from .medoid_service import MedoidService

logger = get_logger('clustering_service')

SessionListener = Callable[['ClusteringSession'], None]
PointLike = Union[Point, Sequence[float]]


class ClusteringSession:
    """
    Stateful k-medoids clustering over a pool of 2D points.

    All public operations are synchronous. A re-entrant lock makes one full
    run (seed, assign, converge) a single critical section when a session is
    shared between threads, e.g. behind the HTTP API.
    """

    def __init__(
        self,
        config: AppConfig,
        distance_metric: Optional[DistanceMetric] = None,
        rng: Optional[np.random.Generator] = None,
        session_id: Optional[str] = None
    ):
        """
        Initialize an empty clustering session.

        Args:
            config: Application configuration
            distance_metric: Metric for all comparisons (default: Manhattan)
            rng: Random generator for seeding (default: seeded from config)
            session_id: Optional identifier used in log messages
        """
        self.config = config
        self.session_id = session_id or "local"
        self.medoid_service = MedoidService(distance_metric)

        if rng is None:
            rng = np.random.default_rng(config.clustering.random_seed)
        self._rng = rng

        self._datasets: List[Dataset] = []
        self._pool: List[Point] = []
        self._medoids: List[int] = []
        self._clusters: List[Cluster] = []
        self._listeners: List[SessionListener] = []
        self._iterations = 0
        self._lock = threading.RLock()

    # ------------------------------------------------------------------
    # Read-only state
    # ------------------------------------------------------------------

    @property
    def points(self) -> Tuple[Point, ...]:
        """The flattened point pool."""
        return tuple(self._pool)

    @property
    def datasets(self) -> Tuple[Dataset, ...]:
        return tuple(self._datasets)

    @property
    def medoid_indices(self) -> Tuple[int, ...]:
        """Pool indices of the current medoids, in slot order."""
        return tuple(self._medoids)

    @property
    def medoids(self) -> Tuple[Point, ...]:
        """Current medoid points, in slot order."""
        return tuple(self._pool[i] for i in self._medoids)

    @property
    def iterations(self) -> int:
        """Number of medoid-changing steps since the last seeding."""
        return self._iterations

    @property
    def is_seeded(self) -> bool:
        return bool(self._medoids)

    def current_clusters(self) -> List[ClusterSnapshot]:
        """
        Snapshot of the current cluster mapping for rendering.

        Returns:
            One ClusterSnapshot per medoid slot, in slot order. Empty clusters
            are included.
        """
        with self._lock:
            return [
                ClusterSnapshot(
                    slot=cluster.slot,
                    medoid=self._pool[cluster.medoid_index],
                    members=tuple(self._pool[i] for i in cluster.member_indices),
                )
                for cluster in self._clusters
            ]

    def cluster_labels(self) -> List[Optional[int]]:
        """
        Cluster slot per pool point (None for points added since the last
        assignment).
        """
        with self._lock:
            labels: List[Optional[int]] = [None] * len(self._pool)
            for cluster in self._clusters:
                for index in cluster.member_indices:
                    labels[index] = cluster.slot
            return labels

    def total_cost(self) -> float:
        """Sum of distances from every assigned point to its medoid."""
        with self._lock:
            return sum(
                self._cluster_cost(cluster.medoid_index, cluster.member_indices)
                for cluster in self._clusters
            )

    def _cluster_cost(self, medoid_index: int, member_indices: Sequence[int]) -> float:
        medoid = self._pool[medoid_index]
        return sum(
            self.medoid_service.distance(medoid, self._pool[i])
            for i in member_indices
        )

    # ------------------------------------------------------------------
    # Listeners
    # ------------------------------------------------------------------

    def subscribe(self, listener: SessionListener) -> Callable[[], None]:
        """
        Register a callback fired after seeding and after every step that
        changes the medoid set.

        Args:
            listener: Called with this session

        Returns:
            Function that removes the listener again
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)

    # ------------------------------------------------------------------
    # Data
    # ------------------------------------------------------------------

    def add_points(self, points: Iterable[PointLike]) -> int:
        """
        Append points to the pool. Duplicates are kept.

        Args:
            points: Point objects or (x, y) pairs

        Returns:
            Number of points added
        """
        with self._lock:
            added = [p if isinstance(p, Point) else Point(*p) for p in points]
            self._pool.extend(added)
            logger.debug(f"[{self.session_id}] Added {len(added)} points (pool: {len(self._pool)})")
            return len(added)

    def add_dataset(self, dataset: Dataset) -> int:
        """
        Contribute a named dataset to the pool.

        Args:
            dataset: Dataset whose points are appended

        Returns:
            Number of points added
        """
        with self._lock:
            self._datasets.append(dataset)
            count = self.add_points(dataset.points)
            logger.info(f"[{self.session_id}] Dataset '{dataset.name}' added with {count} points")
            return count

    def reset(self) -> None:
        """Drop medoids and clusters; the point pool is kept."""
        with self._lock:
            self._medoids = []
            self._clusters = []
            self._iterations = 0

    # ------------------------------------------------------------------
    # Algorithm
    # ------------------------------------------------------------------

    def seed_medoids(self, k: int) -> Tuple[Point, ...]:
        """
        Start a new run by drawing k distinct pool points as medoids.

        The medoid count is capped at the pool size. Seeding is followed by
        a full assignment pass and a listener notification.

        Args:
            k: Requested number of medoids (>= 1)

        Returns:
            The initial medoid set

        Raises:
            EmptyPointPoolError: If no points have been added
            InvalidClusterCountError: If k < 1
        """
        with self._lock:
            try:
                indices = self.medoid_service.choose_seed_indices(len(self._pool), k, self._rng)
            except EmptyPointPoolError:
                logger.warning(f"[{self.session_id}] Cannot seed medoids: point pool is empty")
                raise

            self.reset()
            self._medoids = indices
            logger.info(f"[{self.session_id}] SEED: {len(indices)} medoids from {len(self._pool)} points")

            self.assign_all()
            self._notify()
            return self.medoids

    def assign_all(self) -> List[ClusterSnapshot]:
        """
        Assign every pool point to its nearest medoid.

        Each medoid gets a (possibly empty) member list; the result replaces
        the previous cluster mapping. Without points or medoids this is a
        logged no-op.

        Returns:
            Snapshot of the cluster mapping after the pass
        """
        with self._lock:
            if not self._pool:
                logger.warning(f"[{self.session_id}] No points to assign - nothing to do")
                return self.current_clusters()
            if not self._medoids:
                logger.warning(f"[{self.session_id}] No medoids to assign to - seed first")
                return self.current_clusters()

            medoid_points = self.medoids
            clusters = [
                Cluster(slot=slot, medoid_index=index)
                for slot, index in enumerate(self._medoids)
            ]

            for index, point in enumerate(self._pool):
                slot = self.medoid_service.nearest_medoid(point, medoid_points)
                if slot is None:
                    continue
                clusters[slot].add_member(index)

            self._clusters = clusters
            logger.debug(
                f"[{self.session_id}] Assigned {len(self._pool)} points: "
                f"sizes={[c.size for c in clusters]}"
            )
            return self.current_clusters()

    def _candidate_medoids(self) -> List[int]:
        """New medoid per cluster: lowest total-distance member, or the old medoid if empty."""
        candidates = []
        for cluster in self._clusters:
            if cluster.is_empty:
                candidates.append(cluster.medoid_index)
                continue
            members = [self._pool[i] for i in cluster.member_indices]
            best_position, _ = self.medoid_service.rank_positions(members)[0]
            candidates.append(cluster.member_indices[best_position])
        return candidates

    def step_once(self) -> StepResult:
        """
        Run one medoid-update iteration.

        The medoid set counts as unchanged when the candidate coordinates
        equal the current coordinates as a set; slot order is ignored.

        Returns:
            StepResult with changed=False at the fixed point (nothing is
            reassigned), or changed=True after committing the new medoids,
            reassigning all points and notifying listeners.
        """
        with self._lock:
            if not self._medoids or not self._clusters:
                logger.warning(f"[{self.session_id}] No medoids - nothing to converge")
                return StepResult(changed=False, medoids=self.medoids, cost=self.total_cost())

            candidates = self._candidate_medoids()
            old_coords = {self._pool[i] for i in self._medoids}
            new_coords = {self._pool[i] for i in candidates}

            if old_coords == new_coords:
                return StepResult(changed=False, medoids=self.medoids, cost=self.total_cost())

            self._medoids = candidates
            self.assign_all()
            self._iterations += 1
            cost = self.total_cost()
            logger.debug(f"[{self.session_id}] Iteration {self._iterations}: cost={cost}")

            self._notify()
            return StepResult(changed=True, medoids=self.medoids, cost=cost)

    def run_to_convergence(self) -> ConvergenceReport:
        """
        Repeat step_once until the medoid set stops changing.

        The loop is unbounded unless ``config.clustering.max_iterations`` is
        set.

        Returns:
            ConvergenceReport for the finished run

        Raises:
            ConvergenceTimeoutError: If the medoid set still changes after
                max_iterations changing steps
        """
        max_iterations = self.config.clustering.max_iterations

        with self._lock:
            cost_history = [self.total_cost()]
            steps = 0

            while True:
                result = self.step_once()
                if not result.changed:
                    break
                steps += 1
                cost_history.append(result.cost)
                if max_iterations is not None and steps > max_iterations:
                    logger.error(
                        f"[{self.session_id}] FAILED: medoids still changing after "
                        f"{max_iterations} iterations"
                    )
                    raise ConvergenceTimeoutError(max_iterations)

            report = ConvergenceReport(
                iterations=steps,
                medoids=result.medoids,
                cost=result.cost,
                cost_history=tuple(cost_history),
            )
            logger.info(
                f"[{self.session_id}] CONVERGED after {steps} iterations "
                f"(k={len(report.medoids)}, cost={report.cost})"
            )
            return report

    def run(self, k: int) -> ConvergenceReport:
        """
        Seed k medoids and drive the session to its fixed point.

        Args:
            k: Requested number of medoids

        Returns:
            ConvergenceReport for the run
        """
        with self._lock:
            with Timer(f"Clustering run [{self.session_id}] k={k} n={len(self._pool)}"):
                self.seed_medoids(k)
                return self.run_to_convergence()

    def get_cluster_statistics(self) -> Dict[str, float]:
        """
        Compute statistics about the current clusters.

        Returns:
            Dictionary with statistics
        """
        with self._lock:
            if not self._clusters:
                return {
                    'total_clusters': 0,
                    'total_points': len(self._pool),
                    'avg_size': 0,
                    'max_size': 0,
                    'empty_clusters': 0,
                    'total_cost': 0,
                    'iterations': self._iterations,
                }

            sizes = np.array([c.size for c in self._clusters])
            return {
                'total_clusters': len(self._clusters),
                'total_points': len(self._pool),
                'avg_size': float(sizes.mean()),
                'max_size': int(sizes.max()),
                'empty_clusters': int((sizes == 0).sum()),
                'total_cost': self.total_cost(),
                'iterations': self._iterations,
            }
