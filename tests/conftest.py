"""
Pytest configuration and shared fixtures for witness-tree tests.

This conftest.py:
1. Adds project root to sys.path for imports
2. Registers the test hash functions under stable names
3. Provides commonly-used fixtures via pytest's autodiscovery
4. Configures pytest markers and settings
"""

import os
import sys
from pathlib import Path

import pytest

# =============================================================================
# Path Setup - Must happen before any local imports
# =============================================================================

# Get the project root (parent of tests/)
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_TESTS_ROOT = Path(__file__).resolve().parent

# Add both project root and tests root to sys.path
for _path in [str(_PROJECT_ROOT), str(_TESTS_ROOT)]:
    if _path not in sys.path:
        sys.path.insert(0, _path)

# =============================================================================
# Import fixtures using importlib (more robust for pytest loading)
# =============================================================================

import importlib

from core.config.runtime import ENV_PREFIX, set_default_config
from core.crypto.hashing import register_hash_function

_common = importlib.import_module("fixtures.common")

additive_hash = _common.additive_hash
linear_hash = _common.linear_hash
make_tree = _common.make_tree
make_tree_document = _common.make_tree_document
make_proof_document = _common.make_proof_document

# Stored trees name their hash function; register the test hashes so
# documents built with them can be reloaded by name.
register_hash_function("additive", additive_hash, replace=True)
register_hash_function("linear", linear_hash, replace=True)


# =============================================================================
# Pytest Fixtures (autodiscovered by pytest)
# =============================================================================

@pytest.fixture
def small_tree():
    """The [1, 2, 3] tree at depth 4 with the additive hash (root 18)."""
    return make_tree()


@pytest.fixture
def public_dir(tmp_path):
    """Empty public directory for tree snapshots."""
    path = tmp_path / "public"
    path.mkdir()
    return path


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep WITNESS_TREE_* variables from the host out of every test."""
    for key in list(os.environ):
        if key.startswith(ENV_PREFIX):
            monkeypatch.delenv(key, raising=False)
    set_default_config(None)
    yield
    set_default_config(None)


# =============================================================================
# Pytest Configuration
# =============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
