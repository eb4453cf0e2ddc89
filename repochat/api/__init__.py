"""
repochat REST API.

Provides HTTP endpoints over one Runtime.
"""

from repochat.api.app import create_app

__all__ = ["create_app"]
