# repochat/ingest/filter.py
"""
FileSetFilter - drops build artifacts, dependency caches, VCS metadata and
log/lock files from a raw listing. Order is preserved.
"""

from __future__ import annotations

from typing import Iterable, List, Optional, Sequence, TypeVar

from repochat.ingest.source import SourceFile
from repochat.logging.logger import get_logger
from repochat.logging.tags import INGEST

logger = get_logger(__name__)

DEFAULT_EXCLUDE_SEGMENTS = ("node_modules", ".git", ".vscode", "dist", "build")
DEFAULT_EXCLUDE_SUFFIXES = (".log", ".lock")

F = TypeVar("F", bound=SourceFile)


class FileSetFilter:
    """
    Path-based exclusion filter.

    A path is excluded when any of its directory segments equals one of
    exclude_segments (leading or inner), or when it ends with one of
    exclude_suffixes. Matching is case-insensitive and "\\" is treated as "/".

    Usage:
        kept = FileSetFilter().filter(scan_directory("./repo"))
    """

    def __init__(
        self,
        exclude_segments: Optional[Sequence[str]] = None,
        exclude_suffixes: Optional[Sequence[str]] = None,
    ) -> None:
        segments = DEFAULT_EXCLUDE_SEGMENTS if exclude_segments is None else exclude_segments
        suffixes = DEFAULT_EXCLUDE_SUFFIXES if exclude_suffixes is None else exclude_suffixes
        self._segments = frozenset(s.strip("/").lower() for s in segments)
        self._suffixes = tuple(s.lower() for s in suffixes)

    @staticmethod
    def _normalize(path: str) -> str:
        norm = path.replace("\\", "/").lower()
        while norm.startswith("./"):
            norm = norm[2:]
        return norm

    def is_excluded(self, path: str) -> bool:
        norm = self._normalize(path)
        if self._suffixes and norm.endswith(self._suffixes):
            return True
        # every part but the last is a directory segment
        dirs = [part for part in norm.split("/")[:-1] if part]
        return any(part in self._segments for part in dirs)

    def filter(self, files: Iterable[F]) -> List[F]:
        files = list(files)
        kept = [f for f in files if not self.is_excluded(f.path)]
        logger.info(f"{INGEST} Filtered {len(files)} files down to {len(kept)}")
        return kept
