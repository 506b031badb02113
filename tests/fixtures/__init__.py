"""
Test fixtures package for witness-tree tests.

This package provides deterministic hash functions and factory functions
for trees, proofs and documents.

Usage:
    from fixtures import additive_hash, make_tree

    def test_something():
        tree = make_tree([1, 2, 3], depth=4)
        assert tree.root == 18
"""

from .common import (
    LINEAR_HASH_MODULUS,
    LINEAR_HASH_MULTIPLIER,
    additive_hash,
    linear_hash,
    make_leaves,
    make_proof_document,
    make_tree,
    make_tree_document,
)

__all__ = [
    "LINEAR_HASH_MODULUS",
    "LINEAR_HASH_MULTIPLIER",
    "additive_hash",
    "linear_hash",
    "make_leaves",
    "make_proof_document",
    "make_tree",
    "make_tree_document",
]
