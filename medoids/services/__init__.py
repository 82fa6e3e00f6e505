# Services module for Medoid Lab
from .distance_service import ManhattanDistance, manhattan_distance
from .medoid_service import MedoidService
from .clustering_service import ClusteringSession
from .ingestion_service import IngestionService
from .export_service import ExportService

__all__ = [
    'ManhattanDistance',
    'manhattan_distance',
    'MedoidService',
    'ClusteringSession',
    'IngestionService',
    'ExportService',
]
