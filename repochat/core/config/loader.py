# repochat/core/config/loader.py
"""
Configuration loader for repochat.

Responsibilities:
- Load default config
- Load user config (optional)
- Expand ${ENV_VAR} placeholders
- Validate via schema
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import ValidationError

from repochat.core.config.schema import RepoChatConfig
from repochat.core.paths import RepoChatPaths
from repochat.exceptions import ConfigError
from repochat.logging.logger import get_logger
from repochat.logging.tags import CONFIG

logger = get_logger(__name__)


DEFAULT_CONFIG_PATH = Path(__file__).parent / "default.yaml"


def _expand_env(value: Any) -> Any:
    if isinstance(value, str):
        return os.path.expandvars(value)
    if isinstance(value, dict):
        return {k: _expand_env(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_expand_env(v) for v in value]
    return value


def _load_yaml(path: Path) -> dict:
    if not path.exists():
        raise ConfigError(f"Config file not found: {path}")

    try:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML syntax in {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Config must be a mapping, got {type(data).__name__}: {path}")

    return _expand_env(data)


def _merge(base: dict, override: dict) -> dict:
    """Merge override into base one level deep (per component block)."""
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = {**merged[key], **value}
        else:
            merged[key] = value
    return merged


def load_config_dict(user_config_path: Optional[Path] = None) -> dict:
    """
    Load the merged, env-expanded config as a plain dict.

    Precedence:
    - defaults
    - explicit user config, else .repochat/config.yaml if present
    """
    logger.debug(f"{CONFIG} Loading default config from {DEFAULT_CONFIG_PATH}")
    cfg = _load_yaml(DEFAULT_CONFIG_PATH)

    if user_config_path is None:
        candidate = RepoChatPaths.config()
        if candidate.exists():
            user_config_path = candidate

    if user_config_path is not None:
        logger.debug(f"{CONFIG} Loading user config from {user_config_path}")
        cfg = _merge(cfg, _load_yaml(Path(user_config_path)))

    return cfg


def load_config(user_config_path: Optional[Path] = None) -> RepoChatConfig:
    """Load and validate repochat configuration."""
    raw = load_config_dict(user_config_path)
    try:
        return RepoChatConfig.model_validate(raw)
    except ValidationError as e:
        lines = ["Invalid configuration:"]
        for err in e.errors():
            loc = " -> ".join(str(x) for x in err.get("loc", []))
            lines.append(f"  - {loc}: {err.get('msg', 'Unknown error')}")
        raise ConfigError("\n".join(lines)) from e
