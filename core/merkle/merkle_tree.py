"""
Merkle Tree Implementation
Fixed-depth Merkle tree construction, proof generation, and verification
for zero-knowledge membership circuits.

This module provides:
- Tree construction padded to a fixed number of layers
- Merkle proof generation for a leaf value (sibling path + directions)
- Root reconstruction by folding a proof
- Reshaping a proof into the circuit's pathElements/pathIndices arrays

Commitment Rules (Hard Contracts):
1. Parent hashing: parent = H(left, right) for a pluggable two-to-one H
2. Padding rule: duplicate last node if a layer has odd length
3. Depth rule: once a single root is reached, keep appending H(root, root)
   layers until the tree has exactly ``depth`` layers
4. Empty leaves: build returns an empty tree (no layers, no root)
5. Proof length: always equals the tree's depth (leaf entry + depth-1 siblings)

Determinism Notes:
- No randomness or non-deterministic ordering
- This module never sorts leaves; it trusts input order
- Leaf lookup uses the first positional match in layer 0; callers that
  commit duplicate values get the path of the first occurrence
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import IntEnum
from typing import Iterable, Iterator, NamedTuple, Sequence

from core.crypto.hashing import HashFunction, sha256_field_hash
from core.schemas.elements import ensure_element, is_element
from core.schemas.errors import (
    EmptyInputException,
    LeafNotFoundException,
    MalformedProofException,
    TreeDepthExceededException,
)


logger = logging.getLogger(__name__)


# Number of layers the proving circuit is compiled for. Changing this
# requires recompiling the circuit with the same levels parameter.
TREE_LEVELS: int = 20

# Deepest tree the engine will pad to. Deeper trees are rejected up front
# so a caller-supplied depth cannot force unbounded padding work.
MAX_TREE_DEPTH: int = 64


class Direction(IntEnum):
    """Side a sibling occupies when two children are folded into a parent."""

    LEFT = 0
    RIGHT = 1


class ProofEntry(NamedTuple):
    """One step of a Merkle proof: a node value and the side it sits on."""

    hash: int
    direction: Direction


@dataclass(frozen=True)
class MerkleTree:
    """
    An immutable, depth-padded Merkle tree.

    Attributes:
        leaves: The leaf values exactly as supplied (unpadded)
        layers: Layer 0 (leaves) up to the root layer. Every layer except
                the last is stored padded to even length; the last layer
                holds the single root.
        depth: The configured number of layers
    """
    leaves: tuple[int, ...]
    layers: tuple[tuple[int, ...], ...]
    depth: int

    @property
    def root(self) -> int | None:
        """The root element, or None for the empty tree."""
        if not self.layers:
            return None
        return self.layers[-1][0]

    @property
    def is_empty(self) -> bool:
        return not self.layers

    @property
    def layer_count(self) -> int:
        return len(self.layers)

    def leaf_index(self, leaf: int) -> int:
        """Index of the first occurrence of leaf in layer 0, or -1."""
        if self.is_empty:
            return -1
        for i, value in enumerate(self.layers[0]):
            if value == leaf:
                return i
        return -1


@dataclass(frozen=True)
class MerkleProof:
    """
    A Merkle membership proof of fixed length.

    Entry 0 holds the proven leaf and its informational direction (LEFT for
    an even leaf index, RIGHT for odd); it is never used when folding.
    Entries 1..n-1 hold the sibling at each level and the side it sits on.
    """
    entries: tuple[ProofEntry, ...]

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[ProofEntry]:
        return iter(self.entries)

    def __getitem__(self, index: int) -> ProofEntry:
        return self.entries[index]

    @property
    def leaf(self) -> int | None:
        return self.entries[0].hash if self.entries else None

    @property
    def siblings(self) -> tuple[ProofEntry, ...]:
        return self.entries[1:]

    @property
    def depth(self) -> int:
        return len(self.entries)

    @classmethod
    def from_pairs(cls, pairs: Iterable[tuple[int, int]]) -> "MerkleProof":
        """Build a proof from (hash, direction) pairs."""
        return cls(entries=tuple(ProofEntry(h, Direction(d)) for h, d in pairs))


@dataclass(frozen=True)
class CircuitPath:
    """Proof reshaped into the circuit's two parallel fixed-length inputs."""
    path_elements: tuple[int, ...]
    path_indices: tuple[int, ...]

    def to_dict(self) -> dict[str, list]:
        """Circuit input names; elements as decimal strings to stay lossless."""
        return {
            "pathElements": [str(e) for e in self.path_elements],
            "pathIndices": [int(i) for i in self.path_indices],
        }


def _check_depth(depth: int) -> None:
    if isinstance(depth, bool) or not isinstance(depth, int) or depth < 1:
        raise ValueError(f"Tree depth must be a positive integer, got {depth!r}")
    if depth > MAX_TREE_DEPTH:
        raise ValueError(f"Tree depth {depth} exceeds the maximum of {MAX_TREE_DEPTH}")


def compute_tree_depth(num_leaves: int) -> int:
    """
    Number of layers the natural reduction of num_leaves produces.

    Layer 0 counts, so a single leaf has depth 1, two leaves depth 2,
    three or four leaves depth 3. Padding to a configured depth comes on top.

    Returns:
        Layer count (0 for an empty tree)
    """
    if num_leaves <= 0:
        return 0

    depth = 1
    n = num_leaves
    while n > 1:
        if n % 2 == 1:
            n += 1
        n = n // 2
        depth += 1

    return depth


def max_leaves_for_depth(depth: int) -> int:
    """Largest leaf count that fits into a tree of the given depth."""
    _check_depth(depth)
    return 2 ** (depth - 1)


def _ensure_even(layer: list[int]) -> None:
    if len(layer) % 2 != 0:
        layer.append(layer[-1])


def _hash_layer(layer: Sequence[int], hash_fn: HashFunction) -> list[int]:
    return [hash_fn(layer[i], layer[i + 1]) for i in range(0, len(layer), 2)]


def build_merkle_tree(
    leaves: Sequence[int],
    depth: int = TREE_LEVELS,
    hash_fn: HashFunction | None = None,
) -> MerkleTree:
    """
    Build a Merkle tree padded to exactly ``depth`` layers.

    Algorithm:
    1. If empty: return the empty tree (no layers, root None)
    2. While the current layer has more than one node:
       - If odd, duplicate the last node
       - Record the layer, hash consecutive pairs into the next layer
    3. While fewer than ``depth`` layers exist, duplicate the root in its
       layer and append a new layer holding H(root, root)
    4. Record the final single-node layer

    Example: [a, b, c] with depth 4
        layer 0: [a, b, c, c]
        layer 1: [H(a,b), H(c,c)]
        layer 2: [r, r]            r = H(H(a,b), H(c,c))
        layer 3: [H(r, r)]

    Args:
        leaves: Leaf elements; order matters and is preserved
        depth: Total number of layers (the circuit's levels parameter)
        hash_fn: Two-to-one hash (default: sha256_field_hash)

    Returns:
        The immutable MerkleTree

    Raises:
        ValueError: If depth is not an integer in [1, MAX_TREE_DEPTH]
        InvalidElementException: If a leaf is not a non-negative integer
        TreeDepthExceededException: If the leaves need more than depth layers
    """
    _check_depth(depth)
    hash_fn = hash_fn or sha256_field_hash
    leaf_values = tuple(leaves)

    if not leaf_values:
        logger.warning("build_merkle_tree called with no leaves, returning empty tree")
        return MerkleTree(leaves=(), layers=(), depth=depth)

    for i, leaf in enumerate(leaf_values):
        ensure_element(leaf, name=f"leaves[{i}]")

    required_depth = compute_tree_depth(len(leaf_values))
    if required_depth > depth:
        raise TreeDepthExceededException(
            f"{len(leaf_values)} leaves need {required_depth} layers, "
            f"tree depth is {depth} (max {max_leaves_for_depth(depth)} leaves)",
            leaf_count=len(leaf_values),
            required_depth=required_depth,
            depth=depth,
        )

    layers: list[list[int]] = []
    current: list[int] = list(leaf_values)

    while len(current) > 1:
        _ensure_even(current)
        layers.append(current)
        current = _hash_layer(current, hash_fn)

    # Pad with self-paired roots so every tree has the circuit's depth
    while len(layers) + 1 < depth:
        root = current[0]
        current.append(root)
        layers.append(current)
        current = [hash_fn(root, root)]

    layers.append(current)

    tree = MerkleTree(
        leaves=leaf_values,
        layers=tuple(tuple(layer) for layer in layers),
        depth=depth,
    )
    logger.debug(
        f"Built merkle tree: leaves={len(leaf_values)} natural_depth={required_depth} "
        f"depth={depth} root={tree.root}"
    )
    return tree


def build_merkle_root(
    leaves: Sequence[int],
    depth: int = TREE_LEVELS,
    hash_fn: HashFunction | None = None,
) -> int | None:
    """Root of the depth-padded tree over leaves, or None if leaves is empty."""
    return build_merkle_tree(leaves, depth, hash_fn).root


def _leaf_direction(index: int) -> Direction:
    # Informational only: parity of the leaf's own position
    return Direction.LEFT if index % 2 == 0 else Direction.RIGHT


def generate_merkle_proof(
    leaf: int,
    leaves: Sequence[int],
    cached_tree: MerkleTree | None = None,
    *,
    depth: int = TREE_LEVELS,
    hash_fn: HashFunction | None = None,
) -> MerkleProof:
    """
    Generate a Merkle proof for a leaf value.

    Algorithm:
    1. Use cached_tree if given, otherwise build one from leaves
    2. Locate the first occurrence of leaf in layer 0
    3. For every layer below the root:
       - Even index: sibling is index+1 and sits RIGHT
       - Odd index: sibling is index-1 and sits LEFT
       - Move up: index = index // 2

    Args:
        leaf: Leaf value to prove
        leaves: Leaf sequence the tree is (or was) built from
        cached_tree: A tree previously built from the same leaves
        depth: Depth used when building a fresh tree
        hash_fn: Hash used when building a fresh tree

    Returns:
        MerkleProof with exactly tree.depth entries

    Raises:
        EmptyInputException: If leaves (or the cached tree) is empty
        LeafNotFoundException: If leaf is not a valid element or is absent
    """
    if not leaves:
        raise EmptyInputException()

    if not is_element(leaf):
        raise LeafNotFoundException(
            f"Leaf must be a non-negative integer, got {type(leaf).__name__}",
            leaf=leaf,
        )

    tree = cached_tree if cached_tree is not None else build_merkle_tree(leaves, depth, hash_fn)
    if tree.is_empty:
        raise EmptyInputException("Cannot generate proof from an empty tree")

    index = tree.leaf_index(leaf)
    if index < 0:
        raise LeafNotFoundException(
            "Leaf not found in tree",
            leaf=leaf,
            details={"leaf_count": len(tree.leaves)},
        )

    if tree.leaves.count(leaf) > 1:
        logger.debug(f"Leaf {leaf} occurs more than once, proving first occurrence at index {index}")

    entries: list[ProofEntry] = [ProofEntry(leaf, _leaf_direction(index))]
    for level in range(tree.layer_count - 1):
        is_left_child = index % 2 == 0
        sibling_index = index + 1 if is_left_child else index - 1
        entries.append(
            ProofEntry(
                tree.layers[level][sibling_index],
                Direction.RIGHT if is_left_child else Direction.LEFT,
            )
        )
        index = index // 2

    return MerkleProof(entries=tuple(entries))


def _validated_entries(
    proof: MerkleProof | Sequence[tuple[int, int]],
    expected_depth: int | None,
) -> list[ProofEntry]:
    entries = list(proof)
    if not entries:
        raise MalformedProofException("Merkle proof is empty")

    if expected_depth is not None and len(entries) != expected_depth:
        raise MalformedProofException(
            f"Merkle proof has {len(entries)} entries, expected {expected_depth}",
            details={"length": len(entries), "expected": expected_depth},
        )

    validated: list[ProofEntry] = []
    for i, entry in enumerate(entries):
        try:
            value, direction = entry
        except (TypeError, ValueError):
            raise MalformedProofException(
                "Proof entry must be a (hash, direction) pair", entry_index=i
            ) from None
        if not is_element(value):
            raise MalformedProofException(
                f"Proof entry hash must be a non-negative integer, got {type(value).__name__}",
                entry_index=i,
            )
        if isinstance(direction, bool) or direction not in (Direction.LEFT, Direction.RIGHT):
            raise MalformedProofException(
                f"Invalid proof direction: {direction!r}", entry_index=i
            )
        validated.append(ProofEntry(value, Direction(direction)))
    return validated


def compute_root_from_proof(
    proof: MerkleProof | Sequence[tuple[int, int]],
    hash_fn: HashFunction | None = None,
    expected_depth: int | None = None,
) -> int:
    """
    Reconstruct the root a proof commits to.

    Algorithm:
    1. Start with the leaf (entry 0)
    2. For each following entry:
       - RIGHT: acc = H(acc, sibling)
       - LEFT:  acc = H(sibling, acc)

    Args:
        proof: MerkleProof or sequence of (hash, direction) pairs
        hash_fn: Two-to-one hash the tree was built with
        expected_depth: If given, the proof must have exactly this many entries

    Returns:
        The reconstructed root

    Raises:
        MalformedProofException: Empty proof, wrong length, or bad entries
    """
    hash_fn = hash_fn or sha256_field_hash
    entries = _validated_entries(proof, expected_depth)

    accumulator = entries[0].hash
    for entry in entries[1:]:
        if entry.direction == Direction.RIGHT:
            accumulator = hash_fn(accumulator, entry.hash)
        else:
            accumulator = hash_fn(entry.hash, accumulator)

    return accumulator


def verify_merkle_proof(
    proof: MerkleProof | Sequence[tuple[int, int]],
    expected_root: int,
    hash_fn: HashFunction | None = None,
    expected_depth: int | None = None,
) -> bool:
    """
    Check that a proof folds to the expected root.

    Returns:
        True if the reconstructed root equals expected_root

    Raises:
        MalformedProofException: If the proof shape is invalid
    """
    return compute_root_from_proof(proof, hash_fn, expected_depth) == expected_root


def encode_for_circuit(proof: MerkleProof | Sequence[tuple[int, int]]) -> CircuitPath:
    """
    Reshape a proof into the circuit's pathElements / pathIndices arrays.

    pathElements[i] = proof[i].hash, pathIndices[i] = proof[i].direction
    """
    entries = list(proof)
    return CircuitPath(
        path_elements=tuple(entry[0] for entry in entries),
        path_indices=tuple(int(entry[1]) for entry in entries),
    )


__all__ = [
    "TREE_LEVELS",
    "MAX_TREE_DEPTH",
    "Direction",
    "ProofEntry",
    "MerkleTree",
    "MerkleProof",
    "CircuitPath",
    "compute_tree_depth",
    "max_leaves_for_depth",
    "build_merkle_tree",
    "build_merkle_root",
    "generate_merkle_proof",
    "compute_root_from_proof",
    "verify_merkle_proof",
    "encode_for_circuit",
]
