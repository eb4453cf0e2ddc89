# repochat/__init__.py
"""
repochat - summarize a source tree file by file, then chat with it.

Public API:
    >>> from repochat import build_runtime
    >>> rt = build_runtime()
    >>> rt.manager.ingest(scan_directory("./my-project"))
    >>> answer = rt.manager.ask("What is this repo about?")
"""

from repochat.ingest.source import scan_directory
from repochat.runtime import Runtime, build_runtime

__version__ = "0.3.0"

__all__ = ["Runtime", "build_runtime", "scan_directory", "__version__"]
