"""
Unit tests for ExportService.
"""

from unittest.mock import MagicMock

import numpy as np
import pytest
from medoids.services.clustering_service import ClusteringSession
from medoids.services.export_service import ExportService


@pytest.fixture
def seeded_session(config, two_blob_points):
    rng = MagicMock()
    rng.choice.return_value = np.array([0, 2])
    session = ClusteringSession(config, rng=rng)
    session.add_points(two_blob_points)
    session.seed_medoids(2)
    return session


@pytest.fixture
def export_service(config):
    return ExportService(config)


class TestExportService:
    """Tests for tabular exports of clusters."""

    def test_results_have_one_row_per_point(self, export_service, seeded_session, config):
        df = export_service.build_results_dataframe(seeded_session.current_clusters())

        assert len(df) == 5
        assert list(df.columns) == config.export.output_columns
        assert df['is_medoid'].sum() == 2
        assert df['distance'].sum() == seeded_session.total_cost()

    def test_summary_per_cluster(self, export_service, seeded_session):
        summary = export_service.build_summary_dataframe(seeded_session.current_clusters())

        assert list(summary.index) == [0, 1]
        assert list(summary['size']) == [2, 3]
        assert list(summary['cost']) == [1, 2]

    def test_empty_clusters_export_empty_table(self, export_service):
        df = export_service.build_results_dataframe([])
        assert df.empty

    def test_csv_export(self, export_service, seeded_session):
        df = export_service.build_results_dataframe(seeded_session.current_clusters())

        content = export_service.export_to_csv(df).decode('utf-8')

        lines = content.strip().splitlines()
        assert lines[0] == "cluster,medoid_x,medoid_y,x,y,is_medoid,distance"
        assert len(lines) == 6
