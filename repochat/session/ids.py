# repochat/session/ids.py
"""Collision-resistant session and chat identifiers."""

from __future__ import annotations

import uuid
from typing import Callable, Tuple

IdFactory = Callable[[], Tuple[str, str]]


def new_session_id() -> str:
    return f"repo-{uuid.uuid4().hex}"


def new_chat_id() -> str:
    return f"chat-{uuid.uuid4().hex}"


def new_ids() -> Tuple[str, str]:
    """Return (session_id, chat_id) for a new ingestion run."""
    return new_session_id(), new_chat_id()
