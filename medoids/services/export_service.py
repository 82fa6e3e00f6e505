# medoids/services/export_service.py
"""
Service for exporting cluster assignments to tabular formats.
"""
from typing import List, Optional

import pandas as pd

from ..config import AppConfig
from ..domain.cluster import ClusterSnapshot
from ..logging_config import get_logger
from .distance_service import ManhattanDistance
from .interfaces import DistanceMetric

logger = get_logger('export_service')


class ExportService:
    """
    Handles export of clustering results to DataFrames and CSV.
    """

    def __init__(self, config: AppConfig, distance_metric: Optional[DistanceMetric] = None):
        """
        Initialize the export service.

        Args:
            config: Application configuration
            distance_metric: Metric for the distance column (default: Manhattan)
        """
        self.config = config
        self.metric = distance_metric if distance_metric is not None else ManhattanDistance()

    def build_results_dataframe(self, clusters: List[ClusterSnapshot]) -> pd.DataFrame:
        """
        Build one row per assigned point.

        Args:
            clusters: Cluster snapshots from a session

        Returns:
            DataFrame with the configured output columns
        """
        rows = []
        for cluster in clusters:
            medoid = cluster.medoid
            for point in cluster.members:
                rows.append({
                    'cluster': cluster.slot,
                    'medoid_x': medoid.x,
                    'medoid_y': medoid.y,
                    'x': point.x,
                    'y': point.y,
                    'is_medoid': point == medoid,
                    'distance': self.metric.distance(point, medoid),
                })

        df = pd.DataFrame(rows, columns=self.config.export.output_columns)
        logger.debug(f"Built results table with {len(df)} rows")
        return df

    def build_summary_dataframe(self, clusters: List[ClusterSnapshot]) -> pd.DataFrame:
        """
        Build one row per cluster with size and cost.

        Args:
            clusters: Cluster snapshots from a session

        Returns:
            DataFrame indexed by cluster slot
        """
        results = self.build_results_dataframe(clusters)
        summary = pd.DataFrame({
            'cluster': [c.slot for c in clusters],
            'medoid_x': [c.medoid.x for c in clusters],
            'medoid_y': [c.medoid.y for c in clusters],
        }).set_index('cluster')

        grouped = results.groupby('cluster')['distance']
        summary['size'] = grouped.count().reindex(summary.index, fill_value=0)
        summary['cost'] = grouped.sum().reindex(summary.index, fill_value=0)
        return summary

    def export_to_csv(self, df: pd.DataFrame) -> bytes:
        """
        Export DataFrame to CSV bytes.

        Args:
            df: DataFrame to export

        Returns:
            UTF-8 CSV content
        """
        return df.to_csv(index=False).encode('utf-8')
