"""
CLI Configuration

Locates and loads the configuration file for the witness-tree CLI.
Environment variables (WITNESS_TREE_* prefix) always override file values.
"""

from __future__ import annotations

import logging
from pathlib import Path

from core.config.runtime import DEFAULT_CONFIG_NAME, RuntimeConfig, default_config_paths


logger = logging.getLogger(__name__)


def load_config(config_path: Path | None = None) -> RuntimeConfig:
    """
    Load configuration from file and/or environment.

    Args:
        config_path: Explicit config file (JSON or YAML). Must exist if given.

    Returns:
        Merged configuration

    Raises:
        FileNotFoundError: If config_path is given and missing
    """
    config: RuntimeConfig | None = None

    if config_path is not None:
        config = RuntimeConfig.from_file(config_path)
    else:
        for default_path in default_config_paths():
            if default_path.exists():
                config = RuntimeConfig.from_file(default_path)
                break

    if config is None:
        config = RuntimeConfig()

    return config.with_env_overrides()


def get_default_config_template() -> str:
    """Get a template configuration file."""
    return """{
  "tree": {
    "depth": 20,
    "hash_function": "sha256_field"
  },
  "storage": {
    "public_dir": "public"
  },
  "logging": {
    "level": "INFO",
    "file": null
  }
}
"""
