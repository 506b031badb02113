"""
Common test fixtures shared by all modules.

Provides small deterministic hash functions and leaf factories:
- additive_hash: H(a, b) = a + b, for hand-checkable layer values
- linear_hash: order-sensitive H(a, b) = (a * P + b) mod M, for tamper tests
- make_leaves / make_tree / make_proof_document

The additive hash is commutative, so swapping a sibling's direction does
not change its output; use linear_hash wherever order must matter.
"""

from typing import Optional, Sequence

from core.merkle.merkle_tree import (
    MerkleTree,
    build_merkle_tree,
    generate_merkle_proof,
)
from core.schemas.tree import ProofDocument, TreeDocument


LINEAR_HASH_MULTIPLIER = 1_000_003
LINEAR_HASH_MODULUS = 2**61 - 1


def additive_hash(left: int, right: int) -> int:
    """H(a, b) = a + b."""
    return left + right


def linear_hash(left: int, right: int) -> int:
    """H(a, b) = (a * P + b) mod M; H(a, b) != H(b, a) for a != b."""
    return (left * LINEAR_HASH_MULTIPLIER + right) % LINEAR_HASH_MODULUS


# =============================================================================
# Leaf / Tree Factories
# =============================================================================

def make_leaves(count: int, start: int = 1) -> list[int]:
    """Distinct leaves start, start+1, ..."""
    return list(range(start, start + count))


def make_tree(
    leaves: Optional[Sequence[int]] = None,
    depth: int = 4,
    hash_fn=additive_hash,
) -> MerkleTree:
    """Build a small tree; defaults to [1, 2, 3] at depth 4 with additive_hash."""
    if leaves is None:
        leaves = [1, 2, 3]
    return build_merkle_tree(leaves, depth, hash_fn)


def make_tree_document(
    leaves: Optional[Sequence[int]] = None,
    depth: int = 4,
    hash_function: str = "additive",
    hash_fn=additive_hash,
) -> TreeDocument:
    """TreeDocument over make_tree, labelled with hash_function."""
    return TreeDocument.from_tree(make_tree(leaves, depth, hash_fn), hash_function=hash_function)


def make_proof_document(
    leaf: int = 2,
    leaves: Optional[Sequence[int]] = None,
    depth: int = 4,
    hash_function: str = "additive",
    hash_fn=additive_hash,
) -> ProofDocument:
    """ProofDocument for leaf over make_tree."""
    tree = make_tree(leaves, depth, hash_fn)
    proof = generate_merkle_proof(leaf, tree.leaves, tree)
    return ProofDocument.from_proof(proof, root=tree.root, hash_function=hash_function)
