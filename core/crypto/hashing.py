"""
Hashing Utilities
Two-to-one field hashing for Merkle tree nodes.

This module provides:
- The HashFunction contract: H(left, right) -> Element
- sha256_field_hash: the default H (SHA-256 reduced into the BN254 scalar field)
- A small registry so a circuit-native hash (e.g. Poseidon) can be plugged in

Determinism Notes:
- Inputs are encoded as fixed-width 32-byte big-endian integers
- No randomness; identical inputs always produce identical outputs
"""
from __future__ import annotations

import hashlib
from typing import Callable

from core.schemas.elements import ensure_element
from core.schemas.errors import InvalidElementException, UnknownHashFunctionException


# BN254 scalar field modulus (the field circom circuits work over)
FIELD_MODULUS: int = 21888242871839275222246405745257275088548364400416034343698204186575808495617

# Width of a serialized field element
ELEMENT_BYTES: int = 32

DEFAULT_HASH_FUNCTION: str = "sha256_field"

HashFunction = Callable[[int, int], int]


def sha256(data: bytes) -> bytes:
    """
    Compute SHA-256 hash of raw bytes.

    Example:
        >>> sha256(b"hello").hex()
        '2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824'
    """
    return hashlib.sha256(data).digest()


def element_to_bytes(value: int) -> bytes:
    """
    Encode a field element as 32 big-endian bytes.

    Raises:
        InvalidElementException: If value is not a non-negative int below
            FIELD_MODULUS
    """
    ensure_element(value)
    if value >= FIELD_MODULUS:
        raise InvalidElementException(
            "Element is not reduced modulo the field",
            value=value,
            details={"modulus": str(FIELD_MODULUS)},
        )
    return value.to_bytes(ELEMENT_BYTES, byteorder="big", signed=False)


def bytes_to_field(data: bytes) -> int:
    """Interpret bytes as a big-endian integer reduced into the field."""
    return int.from_bytes(data, byteorder="big") % FIELD_MODULUS


def sha256_field_hash(left: int, right: int) -> int:
    """
    Default two-to-one node hash.

    H(left, right) = sha256(be32(left) || be32(right)) mod FIELD_MODULUS

    Order matters: H(a, b) != H(b, a) for a != b.

    This is not the Poseidon hash circom membership circuits compute, so
    roots built with it only verify off-circuit. Register a circuit-native
    hash under its own name before generating witnesses for a real prover.

    Args:
        left: Left child element
        right: Right child element

    Returns:
        Parent element in [0, FIELD_MODULUS)
    """
    return bytes_to_field(sha256(element_to_bytes(left) + element_to_bytes(right)))


# =============================================================================
# Registry
# =============================================================================

_HASH_FUNCTIONS: dict[str, HashFunction] = {
    DEFAULT_HASH_FUNCTION: sha256_field_hash,
}


def register_hash_function(name: str, fn: HashFunction, *, replace: bool = False) -> None:
    """
    Register a named two-to-one hash function.

    Trees built with a registered name can be reloaded and re-verified by
    name alone.

    Raises:
        ValueError: If the name is taken and replace is False
    """
    if not name:
        raise ValueError("Hash function name must be non-empty")
    if name in _HASH_FUNCTIONS and not replace:
        raise ValueError(f"Hash function already registered: {name!r}")
    _HASH_FUNCTIONS[name] = fn


def get_hash_function(name: str | None = None) -> HashFunction:
    """
    Look up a hash function by name (default: sha256_field).

    Raises:
        UnknownHashFunctionException: If no function is registered under name
    """
    key = name or DEFAULT_HASH_FUNCTION
    try:
        return _HASH_FUNCTIONS[key]
    except KeyError:
        raise UnknownHashFunctionException(key, list(_HASH_FUNCTIONS)) from None


def list_hash_functions() -> list[str]:
    """Names of all registered hash functions, sorted."""
    return sorted(_HASH_FUNCTIONS)


__all__ = [
    "FIELD_MODULUS",
    "ELEMENT_BYTES",
    "DEFAULT_HASH_FUNCTION",
    "HashFunction",
    "sha256",
    "element_to_bytes",
    "bytes_to_field",
    "sha256_field_hash",
    "register_hash_function",
    "get_hash_function",
    "list_hash_functions",
]
