# medoids_api/models.py
"""
Pydantic models for request validation and response serialization.
"""
from typing import Dict, List, Optional

from pydantic import BaseModel, Field, field_validator

from medoids.domain.cluster import ClusterSnapshot, ConvergenceReport, StepResult
from medoids.domain.point import Point


class PointModel(BaseModel):
    """A single 2D point."""
    x: float
    y: float

    @classmethod
    def from_point(cls, point: Point) -> "PointModel":
        return cls(x=point.x, y=point.y)


class DatasetRequest(BaseModel):
    """Named list of points to add to a session."""

    name: str = Field(
        default="Dataset",
        min_length=1,
        max_length=200,
        description="Display name of the dataset"
    )

    points: List[PointModel] = Field(
        ...,
        max_length=100000,
        description="Points to append to the session pool"
    )

    @field_validator('name')
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Strip whitespace around the dataset name"""
        v = v.strip()
        if not v:
            raise ValueError('Dataset name cannot be blank')
        return v


class ClusterCountRequest(BaseModel):
    """Requested number of medoids for seeding or a full run."""

    k: int = Field(
        default=3,
        ge=1,
        description="Number of medoids; checked against the configured maximum and capped at the pool size"
    )


class ClusterModel(BaseModel):
    slot: int
    medoid: PointModel
    members: List[PointModel]

    @classmethod
    def from_snapshot(cls, snapshot: ClusterSnapshot) -> "ClusterModel":
        return cls(
            slot=snapshot.slot,
            medoid=PointModel.from_point(snapshot.medoid),
            members=[PointModel.from_point(p) for p in snapshot.members],
        )


class DatasetSummary(BaseModel):
    name: str
    point_count: int


class SessionResponse(BaseModel):
    """State of a clustering session."""
    session_id: str
    point_count: int
    datasets: List[DatasetSummary]
    medoids: List[PointModel]
    iterations: int


class ClustersResponse(BaseModel):
    session_id: str
    clusters: List[ClusterModel]
    statistics: Dict[str, float]


class StepResponse(BaseModel):
    """Response for a single convergence step."""
    session_id: str
    changed: bool
    medoids: List[PointModel]
    cost: float

    @classmethod
    def from_result(cls, session_id: str, result: StepResult) -> "StepResponse":
        return cls(
            session_id=session_id,
            changed=result.changed,
            medoids=[PointModel.from_point(p) for p in result.medoids],
            cost=result.cost,
        )


class ConvergenceResponse(BaseModel):
    """Response for a run driven to convergence."""
    session_id: str
    iterations: int
    medoids: List[PointModel]
    cost: float
    cost_history: List[float]
    clusters: List[ClusterModel]

    @classmethod
    def from_report(
        cls,
        session_id: str,
        report: ConvergenceReport,
        clusters: List[ClusterSnapshot]
    ) -> "ConvergenceResponse":
        return cls(
            session_id=session_id,
            iterations=report.iterations,
            medoids=[PointModel.from_point(p) for p in report.medoids],
            cost=report.cost,
            cost_history=list(report.cost_history),
            clusters=[ClusterModel.from_snapshot(c) for c in clusters],
        )


class ErrorResponse(BaseModel):
    """Error details for clustering failures"""
    error_type: str
    message: str
    details: Optional[dict] = None
