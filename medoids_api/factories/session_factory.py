"""
Factory for creating clustering sessions and the services around them.

Centralizes how environment settings are applied on top of the dataclass
configuration, so every session created by the API is configured the same way.
"""

from __future__ import annotations

import uuid
from typing import Optional

from medoids.config import AppConfig, load_config
from medoids.logging_config import get_logger
from medoids.services.clustering_service import ClusteringSession
from medoids.services.export_service import ExportService
from medoids.services.ingestion_service import IngestionService
from medoids.settings import Settings

logger = get_logger("factory")


class SessionFactory:
    """
    Creates configured ClusteringSession instances and shared services.
    """

    def __init__(self, settings: Settings, config: Optional[AppConfig] = None) -> None:
        self.settings = settings
        self.config = config if config is not None else self.create_config()
        self.ingestion = IngestionService(self.config)
        self.export = ExportService(self.config)

    def create_config(self) -> AppConfig:
        """
        Build an AppConfig with environment overrides applied.

        Returns:
            Configured AppConfig instance
        """
        config = load_config()
        if self.settings.random_seed is not None:
            config.clustering.random_seed = self.settings.random_seed
            logger.info(f"Using fixed random seed {self.settings.random_seed}")
        if self.settings.max_iterations is not None:
            config.clustering.max_iterations = self.settings.max_iterations
        return config

    def create_session(self) -> ClusteringSession:
        """
        Create a new, empty session with a fresh identifier.

        Returns:
            ClusteringSession ready for datasets
        """
        session_id = uuid.uuid4().hex[:12]
        logger.debug(f"Creating session {session_id}")
        return ClusteringSession(self.config, session_id=session_id)
