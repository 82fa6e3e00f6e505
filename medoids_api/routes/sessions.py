"""
Clustering session endpoints.

A front end creates a session, contributes one or more datasets, then either
runs the whole clustering in one call or drives it step by step to animate
the convergence.
"""

from io import BytesIO
from typing import Dict, Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, Request, UploadFile
from fastapi.responses import StreamingResponse

from medoids.logging_config import get_logger
from medoids.services.clustering_service import ClusteringSession
from medoids_api.factories import SessionFactory
from medoids_api.models import (
    ClusterCountRequest,
    ClusterModel,
    ClustersResponse,
    ConvergenceResponse,
    DatasetRequest,
    DatasetSummary,
    PointModel,
    SessionResponse,
    StepResponse,
)
from medoids_api.repositories import SessionRepository

router = APIRouter(prefix="/sessions", tags=["Sessions"])
logger = get_logger("api.sessions")


# ---------------------------------------------------------------------------
# Dependencies
# ---------------------------------------------------------------------------


def get_repository(request: Request) -> SessionRepository:
    return request.app.state.sessions


def get_factory(request: Request) -> SessionFactory:
    return request.app.state.factory


def get_session(
    session_id: str,
    repository: SessionRepository = Depends(get_repository),
) -> ClusteringSession:
    session = repository.get(session_id)
    if session is None:
        raise HTTPException(status_code=404, detail="Session not found")
    return session


# ---------------------------------------------------------------------------
# Response helpers
# ---------------------------------------------------------------------------


def _session_response(session: ClusteringSession) -> SessionResponse:
    return SessionResponse(
        session_id=session.session_id,
        point_count=len(session.points),
        datasets=[DatasetSummary(name=d.name, point_count=len(d)) for d in session.datasets],
        medoids=[PointModel.from_point(p) for p in session.medoids],
        iterations=session.iterations,
    )


def _clusters_response(session: ClusteringSession) -> ClustersResponse:
    return ClustersResponse(
        session_id=session.session_id,
        clusters=[ClusterModel.from_snapshot(c) for c in session.current_clusters()],
        statistics=session.get_cluster_statistics(),
    )


# ---------------------------------------------------------------------------
# Session lifecycle
# ---------------------------------------------------------------------------


@router.post("", response_model=SessionResponse, status_code=201)
def create_session(
    repository: SessionRepository = Depends(get_repository),
    factory: SessionFactory = Depends(get_factory),
) -> SessionResponse:
    session = factory.create_session()
    repository.save(session)
    logger.info(f"Session {session.session_id} created")
    return _session_response(session)


@router.get("/{session_id}", response_model=SessionResponse)
def read_session(session: ClusteringSession = Depends(get_session)) -> SessionResponse:
    return _session_response(session)


@router.delete("/{session_id}")
def delete_session(
    session_id: str,
    repository: SessionRepository = Depends(get_repository),
) -> Dict[str, bool]:
    if not repository.delete(session_id):
        raise HTTPException(status_code=404, detail="Session not found")
    return {"deleted": True}


# ---------------------------------------------------------------------------
# Data
# ---------------------------------------------------------------------------


@router.post("/{session_id}/datasets", response_model=SessionResponse)
def add_dataset(
    payload: DatasetRequest,
    session: ClusteringSession = Depends(get_session),
    factory: SessionFactory = Depends(get_factory),
) -> SessionResponse:
    dataset = factory.ingestion.build_dataset(
        payload.name,
        [(p.x, p.y) for p in payload.points],
    )
    session.add_dataset(dataset)
    return _session_response(session)


@router.post("/{session_id}/datasets/upload", response_model=SessionResponse)
async def upload_dataset(
    file: UploadFile = File(...),
    name: Optional[str] = Form(default=None),
    session: ClusteringSession = Depends(get_session),
    factory: SessionFactory = Depends(get_factory),
) -> SessionResponse:
    content = await file.read()
    if not content:
        raise HTTPException(status_code=400, detail="Empty file received")

    filename = file.filename or "upload.csv"
    try:
        dataset = factory.ingestion.load_dataset(content, filename, name=name)
    except ValueError as e:
        # Unsupported format, corrupt workbook or unparseable CSV
        raise HTTPException(status_code=400, detail=f"Could not read {filename}: {e}")

    session.add_dataset(dataset)
    return _session_response(session)


# ---------------------------------------------------------------------------
# Clustering
# ---------------------------------------------------------------------------


@router.post("/{session_id}/seed", response_model=ClustersResponse)
def seed_medoids(
    payload: ClusterCountRequest,
    session: ClusteringSession = Depends(get_session),
    factory: SessionFactory = Depends(get_factory),
) -> ClustersResponse:
    factory.config.clustering.check_cluster_count(payload.k)
    session.seed_medoids(payload.k)
    return _clusters_response(session)


@router.post("/{session_id}/assign", response_model=ClustersResponse)
def assign_points(session: ClusteringSession = Depends(get_session)) -> ClustersResponse:
    session.assign_all()
    return _clusters_response(session)


@router.post("/{session_id}/step", response_model=StepResponse)
def step_once(session: ClusteringSession = Depends(get_session)) -> StepResponse:
    result = session.step_once()
    return StepResponse.from_result(session.session_id, result)


@router.post("/{session_id}/converge", response_model=ConvergenceResponse)
def converge(session: ClusteringSession = Depends(get_session)) -> ConvergenceResponse:
    report = session.run_to_convergence()
    return ConvergenceResponse.from_report(session.session_id, report, session.current_clusters())


@router.post("/{session_id}/run", response_model=ConvergenceResponse)
def run_clustering(
    payload: ClusterCountRequest,
    session: ClusteringSession = Depends(get_session),
    factory: SessionFactory = Depends(get_factory),
) -> ConvergenceResponse:
    factory.config.clustering.check_cluster_count(payload.k)
    report = session.run(payload.k)
    return ConvergenceResponse.from_report(session.session_id, report, session.current_clusters())


@router.get("/{session_id}/clusters", response_model=ClustersResponse)
def read_clusters(session: ClusteringSession = Depends(get_session)) -> ClustersResponse:
    return _clusters_response(session)


@router.get("/{session_id}/export")
def export_clusters(
    session: ClusteringSession = Depends(get_session),
    factory: SessionFactory = Depends(get_factory),
) -> StreamingResponse:
    df = factory.export.build_results_dataframe(session.current_clusters())
    content = factory.export.export_to_csv(df)
    filename = factory.config.export.default_filename
    return StreamingResponse(
        BytesIO(content),
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
