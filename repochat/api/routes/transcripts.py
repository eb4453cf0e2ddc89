# repochat/api/routes/transcripts.py
"""Chat transcript endpoint."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from repochat.api.dependencies import get_runtime
from repochat.api.models.schemas import MessageInfo, TranscriptResponse
from repochat.runtime import Runtime

router = APIRouter(tags=["transcripts"])


@router.get("/transcripts/{chat_id}", response_model=TranscriptResponse)
def get_transcript(chat_id: str, runtime: Runtime = Depends(get_runtime)) -> TranscriptResponse:
    messages = runtime.store.get_transcript(chat_id)
    if messages is None:
        raise HTTPException(status_code=404, detail=f"No chat history found for {chat_id}")
    return TranscriptResponse(
        chat_id=chat_id,
        messages=[MessageInfo.from_message(m) for m in messages],
    )
