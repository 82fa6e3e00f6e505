"""
Health check endpoints for monitoring and orchestration.

Provides:
- /health - Full health check with version info
- /health/live - Liveness probe
- /health/ready - Readiness probe
"""

from datetime import datetime, timezone
from typing import Dict, Any

from fastapi import APIRouter, Request, Response
from pydantic import BaseModel

from medoids.settings import get_settings

router = APIRouter(tags=["Health"])


class HealthResponse(BaseModel):
    """Health check response model."""
    status: str
    timestamp: str
    version: str
    environment: str


class ReadinessResponse(BaseModel):
    """Readiness check response model."""
    status: str
    checks: Dict[str, Any]


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """
    Full health check endpoint.

    Returns application status, version, and environment.
    """
    settings = get_settings()
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(timezone.utc).isoformat(),
        version=settings.app_version,
        environment=settings.environment.value,
    )


@router.get("/health/live")
async def liveness() -> Dict[str, str]:
    """Liveness probe: 200 while the process is serving requests."""
    return {"status": "alive"}


@router.get("/health/ready", response_model=ReadinessResponse)
async def readiness(request: Request, response: Response) -> ReadinessResponse:
    """
    Readiness probe.

    Checks that the session store is available and has capacity.
    """
    checks = {}
    all_ready = True

    repository = getattr(request.app.state, "sessions", None)
    if repository is None:
        checks["sessions"] = {"status": "not_ready", "error": "session store not initialized"}
        all_ready = False
    else:
        checks["sessions"] = {"status": "ready", "count": repository.count()}

    if not all_ready:
        response.status_code = 503

    return ReadinessResponse(
        status="ready" if all_ready else "not_ready",
        checks=checks,
    )
