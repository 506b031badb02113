"""
Merkle Proofs Convenience Wrappers
Class-based interfaces bound to one depth and one hash function.

This module provides:
- MerkleProver: build trees (cached per leaf set) and generate proofs
- MerkleVerifier: reconstruct roots, verify proofs, encode for the circuit

These are thin wrappers around the functions in merkle_tree.py.
"""
from __future__ import annotations

import logging
from collections import OrderedDict
from typing import Sequence

from core.crypto.hashing import HashFunction, get_hash_function
from core.merkle.merkle_tree import (
    TREE_LEVELS,
    CircuitPath,
    MerkleProof,
    MerkleTree,
    build_merkle_tree,
    compute_root_from_proof,
    encode_for_circuit,
    generate_merkle_proof,
    verify_merkle_proof,
)


logger = logging.getLogger(__name__)


class MerkleProver:
    """
    Builds trees and generates proofs for a fixed depth and hash function.

    Trees are cached by their exact leaf sequence, so repeated proofs over
    the same leaf set cost one build. Cached trees are immutable and may be
    shared between callers.

    Example:
        >>> prover = MerkleProver(depth=4)
        >>> proof = prover.prove(2, [1, 2, 3])
        >>> len(proof)
        4
    """

    def __init__(
        self,
        depth: int = TREE_LEVELS,
        hash_fn: HashFunction | None = None,
        *,
        hash_name: str | None = None,
        max_cached_trees: int = 16,
    ) -> None:
        self.depth = depth
        self.hash_fn = hash_fn or get_hash_function(hash_name)
        self.max_cached_trees = max_cached_trees
        self._trees: OrderedDict[tuple[int, ...], MerkleTree] = OrderedDict()

    def build(self, leaves: Sequence[int]) -> MerkleTree:
        """Return the tree for leaves, building it on first use."""
        key = tuple(leaves)
        tree = self._trees.get(key)
        if tree is not None:
            self._trees.move_to_end(key)
            return tree

        tree = build_merkle_tree(key, self.depth, self.hash_fn)
        if not tree.is_empty and self.max_cached_trees > 0:
            self._trees[key] = tree
            while len(self._trees) > self.max_cached_trees:
                self._trees.popitem(last=False)
        return tree

    def compute_root(self, leaves: Sequence[int]) -> int | None:
        """Root for leaves (None if leaves is empty)."""
        return self.build(leaves).root

    def prove(self, leaf: int, leaves: Sequence[int]) -> MerkleProof:
        """
        Generate a proof for leaf over leaves.

        Raises:
            EmptyInputException: If leaves is empty
            LeafNotFoundException: If leaf is not in leaves
        """
        tree = self.build(leaves) if leaves else None
        return generate_merkle_proof(
            leaf, leaves, tree, depth=self.depth, hash_fn=self.hash_fn
        )

    def prove_all(self, leaves: Sequence[int]) -> list[MerkleProof]:
        """Proofs for every leaf, in leaf order (first match for duplicates)."""
        tree = self.build(leaves)
        return [
            generate_merkle_proof(leaf, leaves, tree, depth=self.depth, hash_fn=self.hash_fn)
            for leaf in leaves
        ]

    def clear_cache(self) -> None:
        self._trees.clear()

    @property
    def cached_tree_count(self) -> int:
        return len(self._trees)


class MerkleVerifier:
    """
    Verifies proofs for a fixed depth and hash function.

    Example:
        >>> verifier = MerkleVerifier(depth=4)
        >>> verifier.verify(proof, expected_root)
        True
    """

    def __init__(
        self,
        depth: int | None = TREE_LEVELS,
        hash_fn: HashFunction | None = None,
        *,
        hash_name: str | None = None,
    ) -> None:
        self.depth = depth
        self.hash_fn = hash_fn or get_hash_function(hash_name)

    def root_of(self, proof: MerkleProof) -> int:
        """
        Reconstruct the root the proof folds to.

        Raises:
            MalformedProofException: If the proof length differs from depth
        """
        return compute_root_from_proof(proof, self.hash_fn, self.depth)

    def verify(self, proof: MerkleProof, expected_root: int) -> bool:
        """True if the proof folds to expected_root."""
        ok = verify_merkle_proof(proof, expected_root, self.hash_fn, self.depth)
        if not ok:
            logger.debug(f"Proof for leaf {proof[0][0]} does not fold to root {expected_root}")
        return ok

    def encode(self, proof: MerkleProof) -> CircuitPath:
        """
        Circuit inputs for a proof, after checking its length.

        Raises:
            MalformedProofException: If the proof length differs from depth
        """
        self.root_of(proof)
        return encode_for_circuit(proof)


__all__ = [
    "MerkleProver",
    "MerkleVerifier",
]
