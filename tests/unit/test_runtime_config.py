"""
Runtime Configuration Tests
Tests for core/config/runtime.py and witness_cli/config.py
"""

import json

import pytest

from core.config.runtime import (
    RuntimeConfig,
    TreeConfig,
    get_default_config,
    set_default_config,
)
from core.crypto.hashing import DEFAULT_HASH_FUNCTION
from core.merkle.merkle_tree import MAX_TREE_DEPTH, TREE_LEVELS
from witness_cli.config import get_default_config_template, load_config


class TestDefaults:
    """Built-in defaults."""

    def test_defaults(self):
        config = RuntimeConfig()

        assert config.tree.depth == TREE_LEVELS
        assert config.tree.hash_function == DEFAULT_HASH_FUNCTION
        assert config.storage.public_dir == "public"
        assert config.logging.level == "INFO"
        assert config.logging.file is None

    @pytest.mark.parametrize("depth", [0, -1, True, "20", MAX_TREE_DEPTH + 1])
    def test_invalid_depth(self, depth):
        with pytest.raises(ValueError):
            TreeConfig(depth=depth)

    def test_template_parses_to_defaults(self):
        data = json.loads(get_default_config_template())

        assert RuntimeConfig.from_dict(data).to_dict() == RuntimeConfig().to_dict()


class TestFileLoading:
    """JSON and YAML config files."""

    def test_from_json_file(self, tmp_path):
        path = tmp_path / "witness_tree.json"
        path.write_text(json.dumps({"tree": {"depth": 8}, "storage": {"public_dir": "trees"}}))

        config = RuntimeConfig.from_file(path)

        assert config.tree.depth == 8
        assert config.tree.hash_function == DEFAULT_HASH_FUNCTION
        assert config.storage.public_dir == "trees"

    def test_from_yaml(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("tree:\n  depth: 10\nlogging:\n  level: DEBUG\n")

        config = RuntimeConfig.from_file(path)

        assert config.tree.depth == 10
        assert config.logging.level == "DEBUG"

    def test_empty_yaml(self, tmp_path):
        path = tmp_path / "empty.yml"
        path.write_text("")

        assert RuntimeConfig.from_file(path).to_dict() == RuntimeConfig().to_dict()

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            RuntimeConfig.from_file(tmp_path / "missing.json")


class TestEnvOverrides:
    """WITNESS_TREE_* variables override file values."""

    def test_env_overrides_file(self, tmp_path, monkeypatch):
        path = tmp_path / "witness_tree.json"
        path.write_text(json.dumps({"tree": {"depth": 8}}))
        monkeypatch.setenv("WITNESS_TREE_DEPTH", "12")
        monkeypatch.setenv("WITNESS_TREE_PUBLIC_DIR", str(tmp_path / "pub"))
        monkeypatch.setenv("WITNESS_TREE_LOG_LEVEL", "WARNING")

        config = load_config(path)

        assert config.tree.depth == 12
        assert config.storage.public_dir == str(tmp_path / "pub")
        assert config.logging.level == "WARNING"

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("WITNESS_TREE_HASH_FUNCTION", "linear")

        assert RuntimeConfig.from_env().tree.hash_function == "linear"

    def test_invalid_env_depth(self, monkeypatch):
        monkeypatch.setenv("WITNESS_TREE_DEPTH", "0")

        with pytest.raises(ValueError):
            RuntimeConfig().with_env_overrides()

    def test_no_overrides_returns_same(self):
        config = RuntimeConfig()

        assert config.with_env_overrides() is config


class TestLoadConfig:
    """CLI config discovery."""

    def test_defaults_without_files(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("HOME", str(tmp_path))

        assert load_config().to_dict() == RuntimeConfig().to_dict()

    def test_discovers_cwd_file(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        (tmp_path / "witness_tree.json").write_text(json.dumps({"tree": {"depth": 6}}))

        assert load_config().tree.depth == 6

    def test_explicit_missing_path(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "missing.json")


class TestDefaultConfig:
    """Process-wide default configuration."""

    def test_set_and_reset(self):
        custom = RuntimeConfig(tree=TreeConfig(depth=5))
        set_default_config(custom)

        assert get_default_config() is custom

        set_default_config(None)
        assert get_default_config().tree.depth == TREE_LEVELS
