# repochat/api/routes/sessions.py
"""Session endpoints: ingest a directory, list sessions and their summaries."""

from __future__ import annotations

from pathlib import Path
from typing import List

from fastapi import APIRouter, Depends, HTTPException

from repochat.api.dependencies import get_runtime
from repochat.api.models.schemas import (
    CreateSessionRequest,
    CreateSessionResponse,
    ReportInfo,
    SessionInfo,
    SummaryInfo,
)
from repochat.ingest.source import scan_directory
from repochat.logging.logger import get_logger
from repochat.logging.tags import API
from repochat.runtime import Runtime

logger = get_logger(__name__)

router = APIRouter(prefix="/sessions", tags=["sessions"])


@router.post("", response_model=CreateSessionResponse)
def create_session(
    request: CreateSessionRequest,
    runtime: Runtime = Depends(get_runtime),
) -> CreateSessionResponse:
    """
    Ingest a directory into a new session.

    Blocks until every file is summarized. 409 while another run is active.
    """
    try:
        files = scan_directory(Path(request.path))
    except FileNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    logger.info(f"{API} Ingesting {request.path} ({len(files)} files before filtering)")
    manager = runtime.manager
    report = manager.ingest(files, root=request.path)

    session = manager.session if report.session_id else None
    return CreateSessionResponse(
        session=SessionInfo.from_session(session) if session else None,
        report=ReportInfo.from_report(report),
        status=manager.status,
    )


@router.get("", response_model=List[SessionInfo])
def list_sessions(runtime: Runtime = Depends(get_runtime)) -> List[SessionInfo]:
    """Recorded sessions, oldest first."""
    return [SessionInfo.from_session(s) for s in runtime.store.list_sessions()]


@router.get("/{session_id}/summaries", response_model=List[SummaryInfo])
def list_summaries(session_id: str, runtime: Runtime = Depends(get_runtime)) -> List[SummaryInfo]:
    """Stored summaries of one session."""
    artifacts = runtime.store.get_all_summaries(session_id)
    if not artifacts and runtime.store.get_session(session_id) is None:
        raise HTTPException(status_code=404, detail=f"Session not found: {session_id}")
    return [SummaryInfo.from_artifact(a) for a in artifacts]
