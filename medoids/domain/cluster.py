# medoids/domain/cluster.py
"""
Domain models for medoid clusters.

Clusters are index based: a cluster is identified by the slot of its medoid
in the current medoid set and lists its members as indices into the point
pool. This keeps cluster keys independent of point identity.
"""
from dataclasses import dataclass, field
from typing import List, Tuple

from .point import Point


@dataclass
class Cluster:
    """
    One medoid slot and the pool points currently assigned to it.

    Attributes:
        slot: Position of the medoid in the current medoid set
        medoid_index: Pool index of the medoid point
        member_indices: Pool indices of the assigned points
    """
    slot: int
    medoid_index: int
    member_indices: List[int] = field(default_factory=list)

    def add_member(self, point_index: int) -> None:
        """Append a pool point to this cluster."""
        self.member_indices.append(point_index)

    @property
    def size(self) -> int:
        """Number of points assigned to this cluster."""
        return len(self.member_indices)

    @property
    def is_empty(self) -> bool:
        return not self.member_indices


@dataclass(frozen=True)
class ClusterSnapshot:
    """
    Read-only view of a cluster for rendering and export.

    Attributes:
        slot: Position of the medoid in the medoid set
        medoid: The medoid point
        members: Points assigned to the medoid
    """
    slot: int
    medoid: Point
    members: Tuple[Point, ...] = ()

    @property
    def size(self) -> int:
        return len(self.members)


@dataclass(frozen=True)
class StepResult:
    """
    Outcome of a single convergence iteration.

    Attributes:
        changed: True if the medoid set was replaced
        medoids: The medoid set after the step
        cost: Total distance of all points to their medoids after the step
    """
    changed: bool
    medoids: Tuple[Point, ...]
    cost: float = 0.0


@dataclass(frozen=True)
class ConvergenceReport:
    """
    Summary of a run driven to its fixed point.

    Attributes:
        iterations: Number of steps that changed the medoid set
        medoids: Final medoid set
        cost: Final total distance
        cost_history: Total distance after seeding and after each change
    """
    iterations: int
    medoids: Tuple[Point, ...]
    cost: float
    cost_history: Tuple[float, ...] = ()
