# repochat/exceptions.py
"""
Error taxonomy for repochat.

Propagation contract:
- FileReadError: raised by SourceFile.read(); the pipeline records it as a
  System message and moves on to the next file.
- CompletionServiceError: raised inside completion clients only. Clients
  translate it into a CompletionResult, so it never crosses complete().
- PersistenceWriteError: raised by every ArtifactStore write. Callers report
  it and continue.
- PersistenceReadError: raised by storage engines; ArtifactStore reads swallow
  it and return None / [] (fail closed).
- SessionBusyError: an ingestion run is in flight.
- SessionNotFoundError: a query named a session that is not stored.
"""

from __future__ import annotations


class RepoChatError(Exception):
    """Base class for all repochat errors."""


class ConfigError(RepoChatError):
    """Config file missing, unreadable or invalid."""


class FileReadError(RepoChatError):
    """A source file could not be read as text."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"{path}: {reason}")


class CompletionServiceError(RepoChatError):
    """Transport or provider failure while requesting a completion."""


class PersistenceError(RepoChatError):
    """Base class for storage failures."""


class PersistenceWriteError(PersistenceError):
    """A record could not be written."""


class PersistenceReadError(PersistenceError):
    """A record could not be read."""


class SessionBusyError(RepoChatError):
    """An ingestion run is already in progress."""


class SessionNotFoundError(RepoChatError):
    """No stored session matches the requested id."""

    def __init__(self, session_id: str):
        self.session_id = session_id
        super().__init__(f"Session not found: {session_id}")


__all__ = [
    "RepoChatError",
    "ConfigError",
    "FileReadError",
    "CompletionServiceError",
    "PersistenceError",
    "PersistenceWriteError",
    "PersistenceReadError",
    "SessionBusyError",
    "SessionNotFoundError",
]
