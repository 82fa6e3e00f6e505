# medoids/config.py
"""
Central configuration for Medoid Lab.
Uses dataclasses for type-safe configuration management.
"""
from dataclasses import dataclass, field
import json
from typing import List, Optional

from .domain.errors import InvalidClusterCountError


@dataclass
class ClusteringConfig:
    """Configuration for the k-medoids algorithm."""
    default_k: int = 3
    max_k: int = 10  # Upper bound for requested k; the core itself only needs k >= 1

    # Seed for the medoid RNG; None draws fresh entropy per session
    random_seed: Optional[int] = None

    # None keeps the convergence loop unbounded
    max_iterations: Optional[int] = None

    def check_cluster_count(self, k: int) -> None:
        """Raise InvalidClusterCountError unless 1 <= k <= max_k."""
        if k < 1 or k > self.max_k:
            raise InvalidClusterCountError(k, max_k=self.max_k)


@dataclass
class IngestionConfig:
    """Configuration for point file ingestion."""
    x_columns: List[str] = field(default_factory=lambda: ['x', 'X', 'lon', 'longitude'])
    y_columns: List[str] = field(default_factory=lambda: ['y', 'Y', 'lat', 'latitude'])

    csv_delimiters: List[str] = field(default_factory=lambda: [',', ';', '\t'])
    fallback_encoding: str = 'latin1'


@dataclass
class ExportConfig:
    """Configuration for export settings."""
    output_columns: List[str] = field(default_factory=lambda: [
        'cluster', 'medoid_x', 'medoid_y', 'x', 'y', 'is_medoid', 'distance'
    ])

    default_filename: str = "clusters.csv"


@dataclass
class AppConfig:
    """Main application configuration combining all sub-configs."""
    clustering: ClusteringConfig = field(default_factory=ClusteringConfig)
    ingestion: IngestionConfig = field(default_factory=IngestionConfig)
    export: ExportConfig = field(default_factory=ExportConfig)

    app_title: str = "Medoid Lab"
    app_version: str = "1.0.0"


def load_config(config_path: Optional[str] = None) -> AppConfig:
    """
    Load configuration from file or return defaults.

    The JSON file may contain "clustering", "ingestion" and "export"
    objects; keys that are absent keep their default values.

    Args:
        config_path: Optional path to JSON config file

    Returns:
        AppConfig instance with loaded or default values
    """
    config = AppConfig()
    if not config_path:
        return config

    with open(config_path, encoding='utf-8') as f:
        data = json.load(f)

    for section in ('clustering', 'ingestion', 'export'):
        overrides = data.get(section, {})
        target = getattr(config, section)
        for key, value in overrides.items():
            if not hasattr(target, key):
                raise ValueError(f"Unknown config key: {section}.{key}")
            setattr(target, key, value)

    return config
