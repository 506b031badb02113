"""
Shared helpers for CLI commands: exit codes and output.
"""

from __future__ import annotations

import sys
from typing import Any

from core.storage.tree_store import dump_json


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2
EXIT_NOT_FOUND = 3


def print_json(obj: Any) -> None:
    """Print a document or dict as indented canonical JSON."""
    print(dump_json(obj, indent=2))


def print_error(message: str) -> None:
    print(f"Error: {message}", file=sys.stderr)
