"""
Schemas & Canonicalization
File: elements.py

Purpose: Field element validation and lossless text encoding.

Elements are arbitrary-precision non-negative integers. On disk and on the
wire they are always base-10 strings; ``0x``-prefixed hex is accepted on
input.
"""

from typing import Annotated, Any

from pydantic import BeforeValidator, PlainSerializer

from .errors import InvalidElementException


def is_element(value: Any) -> bool:
    """Return True if value is a non-negative int (bools excluded)."""
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0


def ensure_element(value: Any, *, name: str = "element") -> int:
    """
    Validate that value is an Element and return it.

    Raises:
        InvalidElementException: If value is not a non-negative int.
    """
    if not is_element(value):
        raise InvalidElementException(
            f"{name} must be a non-negative integer, got {type(value).__name__}",
            value=value,
        )
    return value


def element_to_str(value: int) -> str:
    """Encode an Element as a base-10 string."""
    return str(ensure_element(value))


def parse_element(value: Any) -> int:
    """
    Decode an Element from an int, a decimal string or a 0x-hex string.

    Raises:
        InvalidElementException: For negatives, bools, floats, empty strings
            and anything that is not an integer literal.

    Example:
        >>> parse_element("0x10")
        16
        >>> parse_element(" 42 ")
        42
    """
    if isinstance(value, bool) or isinstance(value, float):
        raise InvalidElementException(
            f"Element must be an integer or integer string, got {type(value).__name__}",
            value=value,
        )

    if isinstance(value, int):
        return ensure_element(value)

    if not isinstance(value, str):
        raise InvalidElementException(
            f"Cannot parse element from {type(value).__name__}",
            value=value,
        )

    text = value.strip()
    if not text:
        raise InvalidElementException("Element string is empty", value=value)

    try:
        if text.lower().startswith("0x"):
            parsed = int(text[2:], 16)
        else:
            if not text.isdigit():
                raise ValueError(f"not a decimal integer: {text!r}")
            parsed = int(text, 10)
    except ValueError as e:
        raise InvalidElementException(f"Invalid element literal: {e}", value=value) from e

    return ensure_element(parsed)


def _validate_element(value: Any) -> int:
    # pydantic expects ValueError from validators; keep the detailed message
    try:
        return parse_element(value)
    except InvalidElementException as e:
        raise ValueError(e.message) from e


# Pydantic field type: accepts int/decimal/hex, serializes to decimal string in JSON mode
Element = Annotated[
    int,
    BeforeValidator(_validate_element),
    PlainSerializer(lambda v: str(v), return_type=str, when_used="json"),
]
