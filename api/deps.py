"""
Witness Tree API - Dependencies

Dependency injection for the API.
Provides the runtime configuration and the tree store.
"""

from __future__ import annotations

import logging

from core.config.runtime import RuntimeConfig, default_config_paths
from core.crypto.hashing import HashFunction
from core.crypto.hashing import get_hash_function as lookup_hash_function
from core.storage.tree_store import TreeStore

logger = logging.getLogger(__name__)


def _load_runtime_config() -> RuntimeConfig:
    """Load RuntimeConfig from config file, then overlay environment variables.

    Search order for config file:
      1. ./witness_tree.json
      2. ./.witness_tree.json
      3. ~/.config/witness-tree/config.json

    Environment variables ALWAYS override config file values.
    The .env file is loaded automatically by core.config.runtime on import.
    """
    config: RuntimeConfig | None = None

    for path in default_config_paths():
        if path.exists():
            try:
                config = RuntimeConfig.from_file(path)
                logger.info(f"Loaded config from {path}")
                break
            except (OSError, ValueError, TypeError) as e:
                logger.warning(f"Failed to parse {path}: {e}")

    if config is None:
        config = RuntimeConfig()

    return config.with_env_overrides()


def get_runtime_config() -> RuntimeConfig:
    """Per-request configuration."""
    return _load_runtime_config()


def get_tree_store() -> TreeStore:
    """Tree store rooted at the configured public directory."""
    return TreeStore(_load_runtime_config().storage.public_dir)


def get_hash_function(name: str | None = None) -> HashFunction:
    """
    Resolve a hash function, falling back to the configured default.

    Raises:
        UnknownHashFunctionException: If the name is not registered
    """
    return lookup_hash_function(name or _load_runtime_config().tree.hash_function)
