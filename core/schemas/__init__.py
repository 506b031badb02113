"""
Schemas & Canonicalization

Error taxonomy, element codecs and canonical JSON.

Persisted document models live in ``core.schemas.tree`` and are imported
from there directly (they depend on ``core.merkle``).
"""

from .canonical import (
    CANONICAL_JSON_SEPARATORS,
    MAX_SAFE_INTEGER,
    canonicalize_value,
    dumps_canonical,
    is_safe_integer,
)
from .elements import (
    Element,
    element_to_str,
    ensure_element,
    is_element,
    parse_element,
)
from .errors import (
    CanonicalizationException,
    EmptyInputException,
    ErrorCodes,
    InvalidElementException,
    LeafNotFoundException,
    MalformedProofException,
    TreeDepthExceededException,
    TreeError,
    TreeException,
    UnknownHashFunctionException,
)

__all__ = [
    # Canonical JSON
    "CANONICAL_JSON_SEPARATORS",
    "MAX_SAFE_INTEGER",
    "canonicalize_value",
    "dumps_canonical",
    "is_safe_integer",
    # Elements
    "Element",
    "element_to_str",
    "ensure_element",
    "is_element",
    "parse_element",
    # Errors
    "CanonicalizationException",
    "EmptyInputException",
    "ErrorCodes",
    "InvalidElementException",
    "LeafNotFoundException",
    "MalformedProofException",
    "TreeDepthExceededException",
    "TreeError",
    "TreeException",
    "UnknownHashFunctionException",
]
