# repochat/llm/registry.py
"""Completion provider registry."""

from __future__ import annotations

from typing import Any, Callable, Dict

from repochat.core.config.schema import LLMConfig
from repochat.llm.base import CompletionService
from repochat.llm.gemini import GeminiCompletionClient

ProviderFactory = Callable[..., CompletionService]

COMPLETION_REGISTRY: Dict[str, ProviderFactory] = {
    "gemini": GeminiCompletionClient.from_config,
}


def register_completion_provider(name: str, factory: ProviderFactory) -> None:
    if name in COMPLETION_REGISTRY:
        raise ValueError(f"Completion provider already registered: {name!r}")
    COMPLETION_REGISTRY[name] = factory


def get_completion_service(cfg: LLMConfig, **kwargs: Any) -> CompletionService:
    try:
        factory = COMPLETION_REGISTRY[cfg.provider]
    except KeyError:
        raise ValueError(
            f"Unknown completion provider: {cfg.provider!r}. "
            f"Available: {sorted(COMPLETION_REGISTRY)}"
        ) from None
    return factory(cfg, **kwargs)
