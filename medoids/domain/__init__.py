# Domain models for Medoid Lab
from .point import Point, Dataset
from .cluster import Cluster, ClusterSnapshot, StepResult, ConvergenceReport
from .errors import (
    ClusteringError,
    EmptyPointPoolError,
    InvalidClusterCountError,
    InvalidPointError,
    ConvergenceTimeoutError,
)

__all__ = [
    'Point',
    'Dataset',
    'Cluster',
    'ClusterSnapshot',
    'StepResult',
    'ConvergenceReport',
    'ClusteringError',
    'EmptyPointPoolError',
    'InvalidClusterCountError',
    'InvalidPointError',
    'ConvergenceTimeoutError',
]
