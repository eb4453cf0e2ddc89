# repochat/logging/tags.py
"""Bracketed component tags prepended to log messages."""

CLI = "[CLI]"
API = "[API]"
CONFIG = "[CONFIG]"
INGEST = "[INGEST]"
QUERY = "[QUERY]"
LLM = "[LLM]"
STORAGE = "[STORAGE]"
SESSION = "[SESSION]"
