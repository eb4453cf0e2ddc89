# repochat/api/routes/health.py
"""Health check endpoint."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from repochat.api.dependencies import get_repochat_version, get_runtime
from repochat.api.models.schemas import HealthResponse
from repochat.runtime import Runtime

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health(runtime: Runtime = Depends(get_runtime)) -> HealthResponse:
    """Server status, version and storage state."""
    return HealthResponse(
        status="healthy",
        version=get_repochat_version(),
        storage_available=runtime.store.is_available(),
    )
