"""
Runtime Configuration Module

Provides configuration loading and management for witness-tree.
"""

from .runtime import (
    DEFAULT_CONFIG_NAME,
    ENV_PREFIX,
    LoggingConfig,
    RuntimeConfig,
    StorageConfig,
    TreeConfig,
    default_config_paths,
    get_default_config,
    set_default_config,
)

__all__ = [
    "DEFAULT_CONFIG_NAME",
    "ENV_PREFIX",
    "LoggingConfig",
    "RuntimeConfig",
    "StorageConfig",
    "TreeConfig",
    "default_config_paths",
    "get_default_config",
    "set_default_config",
]
