# repochat/api/routes/query.py
"""Query endpoint."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from repochat.api.dependencies import get_runtime
from repochat.api.models.schemas import QueryRequest, QueryResponse
from repochat.logging.logger import get_logger
from repochat.logging.tags import API
from repochat.runtime import Runtime

logger = get_logger(__name__)

router = APIRouter(tags=["query"])


@router.post("/query", response_model=QueryResponse)
def query(request: QueryRequest, runtime: Runtime = Depends(get_runtime)) -> QueryResponse:
    """
    Answer a question from the stored summaries of a session.

    Without a session_id the active session is used, or the most recent one
    after a restart. The exchange is appended to that session's chat history.
    """
    session_id = request.session_id
    if session_id is None and runtime.manager.session is None:
        latest = runtime.store.latest_session()
        session_id = latest.session_id if latest else None

    logger.debug(f"{API} Query: {request.question[:50]}...")
    answer = runtime.manager.ask(request.question, session_id=session_id)

    return QueryResponse(
        answer=answer.text,
        status=answer.status.value,
        intent=answer.intent.value if answer.intent else None,
        artifact_count=answer.artifact_count,
        session_id=answer.session_id,
        chat_id=answer.chat_id,
    )
