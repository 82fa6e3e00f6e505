"""
Environment-driven configuration for Medoid Lab.

Uses pydantic-settings for type-safe environment variable management.
Deployment-specific settings are configured via environment variables
or a .env file.
"""

from enum import Enum
from functools import lru_cache
from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Environment(str, Enum):
    """Deployment environment."""
    DEVELOPMENT = "development"
    TEST = "test"
    PRODUCTION = "production"


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Environment variable names are uppercase versions of the field names.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # === Application ===
    app_name: str = "Medoid Lab"
    app_version: str = "1.0.0"
    environment: Environment = Environment.DEVELOPMENT
    debug: bool = True

    # === Server ===
    api_host: str = "0.0.0.0"
    api_port: int = 8000

    # CORS - comma-separated list of allowed origins
    allowed_origins: str = "http://localhost:5173,http://localhost:3000,http://127.0.0.1:5173,http://127.0.0.1:3000"

    # === Clustering ===
    # Overrides ClusteringConfig.random_seed when set
    random_seed: Optional[int] = None
    max_iterations: Optional[int] = None
    max_sessions: int = 100

    # === Logging ===
    log_level: str = "INFO"
    log_file: Optional[str] = None

    def get_allowed_origins_list(self) -> List[str]:
        """Parse comma-separated origins into list."""
        return [origin.strip() for origin in self.allowed_origins.split(",") if origin.strip()]

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == Environment.PRODUCTION


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Settings are loaded once and cached for the lifetime of the application.

    Returns:
        Settings instance with values from environment
    """
    return Settings()
