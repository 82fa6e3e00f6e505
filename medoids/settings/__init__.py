"""
Environment settings module for Medoid Lab.

Exports:
- Settings: Pydantic settings class for environment variables
- get_settings: Cached settings getter
- Environment: Deployment environment enum
"""

from .settings import Settings, get_settings, Environment

__all__ = ["Settings", "get_settings", "Environment"]
