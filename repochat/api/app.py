# repochat/api/app.py
"""FastAPI application for the repochat API."""

from __future__ import annotations

from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from repochat.api.dependencies import get_repochat_version
from repochat.api.routes import (
    health_router,
    query_router,
    sessions_router,
    transcripts_router,
)
from repochat.exceptions import SessionBusyError, SessionNotFoundError
from repochat.logging.logger import get_logger
from repochat.logging.tags import API
from repochat.runtime import Runtime, build_runtime

logger = get_logger(__name__)


async def _session_busy(request: Request, exc: SessionBusyError) -> JSONResponse:
    logger.info(f"{API} Rejected {request.method} {request.url.path}: {exc}")
    return JSONResponse(status_code=409, content={"detail": str(exc)})


async def _session_not_found(request: Request, exc: SessionNotFoundError) -> JSONResponse:
    return JSONResponse(status_code=404, content={"detail": str(exc)})


def create_app(runtime: Optional[Runtime] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        runtime: Runtime to serve; built from the default config if None.

    Returns:
        Configured FastAPI app instance.
    """
    app = FastAPI(
        title="repochat API",
        description="Summarize a repository file by file, then ask questions about it.",
        version=get_repochat_version(),
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )
    app.state.runtime = runtime or build_runtime()

    # Add CORS middleware for browser clients
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(SessionBusyError, _session_busy)
    app.add_exception_handler(SessionNotFoundError, _session_not_found)

    # Register routes
    app.include_router(health_router)
    app.include_router(sessions_router)
    app.include_router(query_router)
    app.include_router(transcripts_router)

    return app
