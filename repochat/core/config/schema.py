# repochat/core/config/schema.py
"""
Pydantic schema for repochat configuration.

Rules:
- Strict validation
- No unknown keys
- One block per component
"""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class LLMConfig(BaseModel):
    """Completion service settings."""

    provider: str = Field(default="gemini", description="Completion provider name")
    model: str = Field(default="gemini-1.5-flash-latest", description="Model identifier")
    api_key: Optional[str] = Field(
        default=None,
        description="API key; usually ${GEMINI_API_KEY}",
    )
    base_url: str = Field(
        default="https://generativelanguage.googleapis.com/v1beta",
        description="Provider API root",
    )
    timeout: float = Field(default=120.0, gt=0, description="Per-request timeout in seconds")
    temperature: Optional[float] = Field(default=None, ge=0.0, le=2.0)
    max_output_tokens: Optional[int] = Field(default=None, gt=0)

    model_config = ConfigDict(extra="forbid")

    @field_validator("api_key", mode="before")
    @classmethod
    def blank_key_is_none(cls, v):
        """An unexpanded or empty ${VAR} means no key."""
        if isinstance(v, str) and (not v.strip() or v.startswith("${")):
            return None
        return v


class IngestSettings(BaseModel):
    """Ingestion pipeline settings."""

    max_content_chars: int = Field(default=700_000, gt=0)
    truncation_marker: str = Field(default="\n... (file truncated due to size)")
    inter_file_delay: float = Field(default=0.2, ge=0.0, description="Seconds between files")
    exclude_segments: list[str] = Field(
        default_factory=lambda: ["node_modules", ".git", ".vscode", "dist", "build"]
    )
    exclude_suffixes: list[str] = Field(default_factory=lambda: [".log", ".lock"])

    model_config = ConfigDict(extra="forbid")

    @field_validator("exclude_segments", "exclude_suffixes", mode="after")
    @classmethod
    def lowercase(cls, v: list[str]) -> list[str]:
        return [item.strip().strip("/").lower() for item in v if item.strip().strip("/")]


class QuerySettings(BaseModel):
    """Query routing settings."""

    max_context_chars: int = Field(default=100_000, gt=0)
    include_failed_summaries: bool = Field(
        default=False,
        description="Feed summaries of failed completions into query context",
    )

    model_config = ConfigDict(extra="forbid")


class StorageConfig(BaseModel):
    """Artifact store engine."""

    backend: Literal["json", "memory"] = "json"
    path: str = ".repochat/store.json"

    model_config = ConfigDict(extra="forbid")


class LoggingConfig(BaseModel):
    level: str = "WARNING"

    model_config = ConfigDict(extra="forbid")


class RepoChatConfig(BaseModel):
    """Top-level configuration."""

    llm: LLMConfig = Field(default_factory=LLMConfig)
    ingest: IngestSettings = Field(default_factory=IngestSettings)
    query: QuerySettings = Field(default_factory=QuerySettings)
    storage: StorageConfig = Field(default_factory=StorageConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = ConfigDict(extra="forbid")
