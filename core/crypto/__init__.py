"""
Core cryptographic utilities.

Provides the two-to-one field hash used for Merkle nodes and the
hash function registry.
"""
from .hashing import (
    FIELD_MODULUS,
    DEFAULT_HASH_FUNCTION,
    HashFunction,
    sha256,
    element_to_bytes,
    bytes_to_field,
    sha256_field_hash,
    register_hash_function,
    get_hash_function,
    list_hash_functions,
)

__all__ = [
    "FIELD_MODULUS",
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
