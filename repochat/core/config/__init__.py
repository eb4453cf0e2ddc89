# repochat/core/config/__init__.py
from repochat.core.config.loader import DEFAULT_CONFIG_PATH, load_config, load_config_dict
from repochat.core.config.schema import (
    IngestSettings,
    LLMConfig,
    LoggingConfig,
    QuerySettings,
    RepoChatConfig,
    StorageConfig,
)

__all__ = [
    "DEFAULT_CONFIG_PATH",
    "load_config",
    "load_config_dict",
    "RepoChatConfig",
    "LLMConfig",
    "IngestSettings",
    "QuerySettings",
    "StorageConfig",
    "LoggingConfig",
]
