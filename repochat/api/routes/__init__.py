"""API route modules."""

from repochat.api.routes.health import router as health_router
from repochat.api.routes.query import router as query_router
from repochat.api.routes.sessions import router as sessions_router
from repochat.api.routes.transcripts import router as transcripts_router

__all__ = [
    "health_router",
    "query_router",
    "sessions_router",
    "transcripts_router",
]
