# repochat/ingest/source.py
"""
File input surface.

A source file is a (path, read) pair. The path is relative to the selected
root and always uses "/" separators. read() returns the full text or raises
FileReadError; the underlying handle is closed before it returns.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import List, Protocol, Union, runtime_checkable

from repochat.exceptions import FileReadError
from repochat.logging.logger import get_logger
from repochat.logging.tags import INGEST

logger = get_logger(__name__)


@runtime_checkable
class SourceFile(Protocol):
    """Protocol for one selected file."""

    path: str

    def read(self) -> str:
        ...


@dataclass(frozen=True)
class LocalSourceFile:
    """A file on local disk, addressed relative to a scan root."""

    root: Path
    path: str
    encoding: str = "utf-8"

    @property
    def absolute_path(self) -> Path:
        return self.root / self.path

    def read(self) -> str:
        try:
            # keep line endings as stored
            with open(self.absolute_path, "r", encoding=self.encoding, newline="") as f:
                return f.read()
        except UnicodeDecodeError as e:
            raise FileReadError(self.path, f"not valid {self.encoding} text ({e.reason})") from e
        except OSError as e:
            raise FileReadError(self.path, e.strerror or str(e)) from e


@dataclass(frozen=True)
class InMemorySourceFile:
    """Content that is already in memory (uploads, tests)."""

    path: str
    content: str

    def read(self) -> str:
        return self.content


def scan_directory(root: Union[str, Path]) -> List[LocalSourceFile]:
    """
    Flatten a directory tree into source files, sorted by path.

    No filtering happens here; that is FileSetFilter's job. A single file
    is returned as a one-element list relative to its parent directory.

    Raises:
        FileNotFoundError: root does not exist
    """
    root_path = Path(root).expanduser().resolve()
    if not root_path.exists():
        raise FileNotFoundError(f"Path does not exist: {root_path}")

    if root_path.is_file():
        return [LocalSourceFile(root=root_path.parent, path=root_path.name)]

    files: List[LocalSourceFile] = []
    for dirpath, dirnames, filenames in os.walk(root_path):
        dirnames.sort()
        for name in sorted(filenames):
            full = Path(dirpath) / name
            if not full.is_file():
                continue
            rel = full.relative_to(root_path).as_posix()
            files.append(LocalSourceFile(root=root_path, path=rel))

    logger.debug(f"{INGEST} Scanned {len(files)} files under {root_path}")
    return files
