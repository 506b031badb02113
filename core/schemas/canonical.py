"""
Schemas & Canonicalization
File: canonical.py

Purpose: Deterministic, lossless JSON serialization for persisted trees,
proofs and circuit inputs.

CRITICAL: All outputs from this module MUST be deterministic across runs,
and field elements MUST never pass through a float. Any integer outside the
IEEE-754 safe range is written as a base-10 string.
"""

import json
import math
from enum import Enum
from typing import Any

from pydantic import BaseModel

from .errors import CanonicalizationException

# Canonical JSON separators - no whitespace
CANONICAL_JSON_SEPARATORS: tuple[str, str] = (",", ":")

# Largest integer a JSON consumer backed by doubles reads back exactly
MAX_SAFE_INTEGER: int = 2**53 - 1


def is_safe_integer(value: int) -> bool:
    """Check whether an integer survives a round trip through a double."""
    return -MAX_SAFE_INTEGER <= value <= MAX_SAFE_INTEGER


def _validate_float(value: float, path: str = "") -> None:
    """
    Validate that a float is finite (not NaN or Infinity).

    Raises:
        CanonicalizationException: If the float is NaN or Infinity.
    """
    if not math.isfinite(value):
        raise CanonicalizationException(
            message=f"Non-finite float value encountered: {value}",
            details={"path": path, "value": str(value)},
        )


def canonicalize_value(value: Any, path: str = "") -> Any:
    """
    Recursively canonicalize a value for deterministic JSON serialization.

    Args:
        value: Any Python value to canonicalize.
        path: Current path for error reporting.

    Returns:
        A JSON-serializable canonical representation.

    Raises:
        CanonicalizationException: If the value cannot be canonicalized
            (e.g., contains NaN/Infinity floats).
    """
    if value is None:
        return None

    if isinstance(value, bool):
        # Must check bool before int since bool is subclass of int
        return value

    if isinstance(value, Enum):
        # Direction is an IntEnum; enums serialize as their values
        return canonicalize_value(value.value, path)

    if isinstance(value, int):
        if is_safe_integer(value):
            return value
        return str(value)

    if isinstance(value, float):
        _validate_float(value, path)
        return value

    if isinstance(value, str):
        return value

    if isinstance(value, BaseModel):
        dumped = value.model_dump(
            mode="json",
            by_alias=True,
            exclude_none=True,
        )
        return canonicalize_value(dumped, path)

    if isinstance(value, dict):
        return {
            str(k): canonicalize_value(v, f"{path}.{k}" if path else str(k))
            for k, v in value.items()
            if v is not None
        }

    if isinstance(value, (list, tuple)):
        return [
            canonicalize_value(item, f"{path}[{i}]")
            for i, item in enumerate(value)
        ]

    if isinstance(value, bytes):
        return "0x" + value.hex()

    raise CanonicalizationException(
        message=f"Cannot canonicalize value of type {type(value).__name__}",
        details={"path": path, "type": type(value).__name__},
    )


def dumps_canonical(obj: Any, *, indent: int | None = None) -> str:
    """
    Serialize an object to a canonical JSON string.

    Args:
        obj: A Pydantic model, dict, or other serializable object.
        indent: Optional indentation for human-facing output. The compact
            form (``indent=None``) is the canonical one.

    Returns:
        A JSON string with:
            - Sorted keys
            - No extra whitespace (unless ``indent`` is given)
            - None fields excluded
            - Enums as their values
            - Integers beyond 2**53-1 as decimal strings
            - No NaN/Infinity floats

    Raises:
        CanonicalizationException: If serialization fails.

    Example:
        >>> dumps_canonical({"b": 2, "a": 2**64})
        '{"a":"18446744073709551616","b":2}'
    """
    try:
        canonicalized = canonicalize_value(obj)
        if indent is not None:
            return json.dumps(canonicalized, sort_keys=True, indent=indent, ensure_ascii=False)
        return json.dumps(
            canonicalized,
            sort_keys=True,
            separators=CANONICAL_JSON_SEPARATORS,
            ensure_ascii=False,
        )
    except CanonicalizationException:
        raise
    except (TypeError, ValueError) as e:
        raise CanonicalizationException(
            message=f"Failed to serialize to canonical JSON: {e}",
            details={"type": type(obj).__name__, "error": str(e)},
        ) from e
