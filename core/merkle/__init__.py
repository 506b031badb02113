"""
Merkle Tree and Circuit Commitments
Fixed-depth Merkle tree construction + proof generation/verification.

This module provides:
- MerkleTree / MerkleProof / ProofEntry / Direction: value types
- build_merkle_tree: Depth-padded tree from leaf elements
- generate_merkle_proof: Sibling path for a leaf value
- compute_root_from_proof / verify_merkle_proof: Fold a proof to its root
- encode_for_circuit: pathElements / pathIndices for the proving circuit

Commitment Rules:
1. Parent hashing: H(left, right), default sha256_field_hash
2. Padding: Duplicate last node if odd number at any level
3. Depth: Append H(root, root) layers until exactly `depth` layers exist
4. Empty tree: no layers, root None

Usage:
    from core.merkle import build_merkle_tree, generate_merkle_proof, verify_merkle_proof

    tree = build_merkle_tree(commitments, depth=20)
    proof = generate_merkle_proof(commitments[3], commitments, tree)
    assert verify_merkle_proof(proof, tree.root)
"""
from .merkle_tree import (
    MAX_TREE_DEPTH,
    TREE_LEVELS,
    Direction,
    ProofEntry,
    MerkleTree,
    MerkleProof,
    CircuitPath,
    compute_tree_depth,
    max_leaves_for_depth,
    build_merkle_tree,
    build_merkle_root,
    generate_merkle_proof,
    compute_root_from_proof,
    verify_merkle_proof,
    encode_for_circuit,
)

from .merkle_proofs import (
    MerkleProver,
    MerkleVerifier,
)


__all__ = [
    # Core types
    "MAX_TREE_DEPTH",
    "TREE_LEVELS",
    "Direction",
    "ProofEntry",
    "MerkleTree",
    "MerkleProof",
    "CircuitPath",
    # Core functions
    "compute_tree_depth",
    "max_leaves_for_depth",
    "build_merkle_tree",
    "build_merkle_root",
    "generate_merkle_proof",
    "compute_root_from_proof",
    "verify_merkle_proof",
    "encode_for_circuit",
    # Convenience classes
    "MerkleProver",
    "MerkleVerifier",
]
