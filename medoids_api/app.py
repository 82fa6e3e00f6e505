"""
FastAPI application exposing k-medoids clustering sessions.

This API is consumed by a chart front end, which renders the clusters it
returns (one color per medoid).

Main responsibilities:
- Create clustering sessions and accept datasets (JSON or CSV/Excel upload)
- Seed, assign, step and run clustering on a session
- Return cluster snapshots and a CSV export

Run locally (example):

    uvicorn medoids_api.app:app --reload --port 8000
"""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from medoids.domain.errors import (
    ClusteringError,
    ConvergenceTimeoutError,
    EmptyPointPoolError,
    InvalidClusterCountError,
    InvalidPointError,
)
from medoids.logging_config import get_logger, setup_logging
from medoids.settings import get_settings
from medoids_api.factories import SessionFactory
from medoids_api.middleware import setup_security
from medoids_api.models import ErrorResponse
from medoids_api.repositories import MemorySessionRepository
from medoids_api.routes import health_router, sessions_router

# ---------------------------------------------------------------------------
# Logging & app setup
# ---------------------------------------------------------------------------

settings = get_settings()
setup_logging(level=settings.log_level, log_file=settings.log_file)
logger = get_logger("api")

app = FastAPI(title=f"{settings.app_name} API", version=settings.app_version)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_allowed_origins_list(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
setup_security(app)

app.state.factory = SessionFactory(settings)
app.state.sessions = MemorySessionRepository(max_sessions=settings.max_sessions)

app.include_router(health_router, prefix="/api")
app.include_router(sessions_router, prefix="/api")


# ---------------------------------------------------------------------------
# Domain error mapping
# ---------------------------------------------------------------------------

ERROR_STATUS = {
    EmptyPointPoolError: 409,
    ConvergenceTimeoutError: 409,
    InvalidPointError: 422,
    InvalidClusterCountError: 422,
}


@app.exception_handler(ClusteringError)
async def clustering_error_handler(request: Request, exc: ClusteringError) -> JSONResponse:
    status_code = ERROR_STATUS.get(type(exc), 400)
    logger.warning(f"{request.method} {request.url.path}: {type(exc).__name__}: {exc}")
    body = ErrorResponse(error_type=type(exc).__name__, message=str(exc))
    return JSONResponse(status_code=status_code, content=body.model_dump())


logger.info(f"{settings.app_name} API {settings.app_version} ready ({settings.environment.value})")
