"""
Runtime Configuration

Central configuration for tree depth, hash selection, storage and logging.
"""

from __future__ import annotations

import copy
import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv

from core.crypto.hashing import DEFAULT_HASH_FUNCTION
from core.merkle.merkle_tree import MAX_TREE_DEPTH, TREE_LEVELS

load_dotenv()


ENV_PREFIX = "WITNESS_TREE_"

DEFAULT_CONFIG_NAME = "witness_tree.json"


def default_config_paths() -> list[Path]:
    """Config file search order when no explicit path is given."""
    return [
        Path.cwd() / DEFAULT_CONFIG_NAME,
        Path.cwd() / f".{DEFAULT_CONFIG_NAME}",
        Path.home() / ".config" / "witness-tree" / "config.json",
    ]


@dataclass
class TreeConfig:
    """Configuration for tree construction."""
    depth: int = TREE_LEVELS
    hash_function: str = DEFAULT_HASH_FUNCTION

    def __post_init__(self):
        if isinstance(self.depth, bool) or not isinstance(self.depth, int) or self.depth < 1:
            raise ValueError(f"tree.depth must be a positive integer, got {self.depth!r}")
        if self.depth > MAX_TREE_DEPTH:
            raise ValueError(f"tree.depth must be at most {MAX_TREE_DEPTH}, got {self.depth}")


@dataclass
class StorageConfig:
    """Configuration for tree snapshot storage."""
    public_dir: str = "public"


@dataclass
class LoggingConfig:
    """Configuration for logging."""
    level: str = "INFO"
    file: Optional[str] = None


@dataclass
class RuntimeConfig:
    """
    Complete runtime configuration.

    Can be loaded from:
    - Environment variables
    - YAML or JSON file
    - Programmatic construction
    """
    tree: TreeConfig = field(default_factory=TreeConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    extra: dict[str, Any] = field(default_factory=dict)

    @staticmethod
    def _get_env_overrides() -> dict[str, Any]:
        """
        Get configuration overrides from environment variables.

        This is the SINGLE source of truth for all env var reading.

        Supported variables:
        - WITNESS_TREE_DEPTH: Number of tree layers (circuit levels)
        - WITNESS_TREE_HASH_FUNCTION: Registered hash function name
        - WITNESS_TREE_PUBLIC_DIR: Directory for <root>.json tree snapshots
        - WITNESS_TREE_LOG_LEVEL: Log level
        - WITNESS_TREE_LOG_FILE: Optional log file
        """
        overrides: dict[str, Any] = {}

        if os.getenv(f"{ENV_PREFIX}DEPTH"):
            try:
                depth = int(os.getenv(f"{ENV_PREFIX}DEPTH", ""))
            except ValueError as e:
                raise ValueError(f"{ENV_PREFIX}DEPTH must be an integer") from e
            overrides.setdefault("tree", {})["depth"] = depth
        if os.getenv(f"{ENV_PREFIX}HASH_FUNCTION"):
            overrides.setdefault("tree", {})["hash_function"] = os.getenv(f"{ENV_PREFIX}HASH_FUNCTION")

        if os.getenv(f"{ENV_PREFIX}PUBLIC_DIR"):
            overrides.setdefault("storage", {})["public_dir"] = os.getenv(f"{ENV_PREFIX}PUBLIC_DIR")

        if os.getenv(f"{ENV_PREFIX}LOG_LEVEL"):
            overrides.setdefault("logging", {})["level"] = os.getenv(f"{ENV_PREFIX}LOG_LEVEL")
        if os.getenv(f"{ENV_PREFIX}LOG_FILE"):
            overrides.setdefault("logging", {})["file"] = os.getenv(f"{ENV_PREFIX}LOG_FILE")

        return overrides

    @classmethod
    def from_env(cls) -> "RuntimeConfig":
        """
        Load configuration purely from environment variables.

        Uses defaults for any values not specified in env vars.
        """
        return cls.from_dict(cls._get_env_overrides())

    @classmethod
    def from_yaml(cls, path: str | Path) -> "RuntimeConfig":
        """Load configuration from a YAML file."""
        import yaml
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            data = yaml.safe_load(f) or {}

        return cls.from_dict(data)

    @classmethod
    def from_json_file(cls, path: str | Path) -> "RuntimeConfig":
        """Load configuration from a JSON file."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            data = json.load(f)

        return cls.from_dict(data)

    @classmethod
    def from_file(cls, path: str | Path) -> "RuntimeConfig":
        """Load from YAML (.yaml/.yml) or JSON (anything else)."""
        path = Path(path)
        if path.suffix.lower() in (".yaml", ".yml"):
            return cls.from_yaml(path)
        return cls.from_json_file(path)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RuntimeConfig":
        """Load configuration from a dictionary (supports partial data)."""
        tree_data = data.get("tree", {}) or {}
        storage_data = data.get("storage", {}) or {}
        logging_data = data.get("logging", {}) or {}

        return cls(
            tree=TreeConfig(**tree_data) if tree_data else TreeConfig(),
            storage=StorageConfig(**storage_data) if storage_data else StorageConfig(),
            logging=LoggingConfig(**logging_data) if logging_data else LoggingConfig(),
            extra=data.get("extra", {}) or {},
        )

    def with_env_overrides(self) -> "RuntimeConfig":
        """
        Return a new config with environment variable overrides applied.

        This allows loading from a config file first, then overlaying env vars.
        """
        overrides = self._get_env_overrides()
        if not overrides:
            return self

        new_config = copy.deepcopy(self)

        if "tree" in overrides:
            for key, value in overrides["tree"].items():
                setattr(new_config.tree, key, value)
            # re-run validation on the merged values
            new_config.tree = TreeConfig(
                depth=new_config.tree.depth,
                hash_function=new_config.tree.hash_function,
            )

        if "storage" in overrides:
            for key, value in overrides["storage"].items():
                setattr(new_config.storage, key, value)

        if "logging" in overrides:
            for key, value in overrides["logging"].items():
                setattr(new_config.logging, key, value)

        return new_config

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a dictionary."""
        return {
            "tree": {
                "depth": self.tree.depth,
                "hash_function": self.tree.hash_function,
            },
            "storage": {
                "public_dir": self.storage.public_dir,
            },
            "logging": {
                "level": self.logging.level,
                "file": self.logging.file,
            },
            "extra": self.extra,
        }


# Global default configuration
_default_config: Optional[RuntimeConfig] = None


def get_default_config() -> RuntimeConfig:
    """Get the default runtime configuration."""
    global _default_config
    if _default_config is None:
        _default_config = RuntimeConfig.from_env()
    return _default_config


def set_default_config(config: RuntimeConfig | None) -> None:
    """Set (or with None, reset) the default runtime configuration."""
    global _default_config
    _default_config = config
