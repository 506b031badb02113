"""
Schemas & Canonicalization
File: tree.py

Purpose: Persisted forms of trees, proofs and circuit inputs.

Every Element field is serialized as a base-10 string in JSON mode and
accepts decimal strings, 0x-hex strings or ints on input, so documents
round-trip without loss of precision.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from core.crypto.hashing import DEFAULT_HASH_FUNCTION
from core.merkle.merkle_tree import (
    MAX_TREE_DEPTH,
    CircuitPath,
    Direction,
    MerkleProof,
    MerkleTree,
    ProofEntry,
)

from .elements import Element


# Bumped whenever the persisted layout of a document changes; older or newer
# documents are rejected at load time.
SCHEMA_VERSION = "v1"
SchemaVersion = Literal["v1"]


class TreeDocument(BaseModel):
    """
    Public snapshot of a built tree.

    Stored as ``<root>.json`` by the tree store and reloaded as a cached
    tree for proof generation.
    """

    model_config = ConfigDict(extra="forbid")

    schema_version: SchemaVersion = Field(default=SCHEMA_VERSION)
    depth: int = Field(..., ge=1, le=MAX_TREE_DEPTH, description="Number of layers the tree is padded to")
    hash_function: str = Field(default=DEFAULT_HASH_FUNCTION, min_length=1)
    root: Element | None = Field(default=None, description="Root element (None for an empty tree)")
    leaves: list[Element] = Field(default_factory=list, description="Leaves as supplied, unpadded")
    layers: list[list[Element]] = Field(default_factory=list, description="Padded layers, leaves first")
    metadata: dict[str, Any] = Field(default_factory=dict)

    @model_validator(mode="after")
    def _check_shape(self) -> "TreeDocument":
        if not self.layers:
            if self.root is not None or self.leaves:
                raise ValueError("Empty tree document must have no root and no leaves")
            return self
        if len(self.layers) != self.depth:
            raise ValueError(f"Tree has {len(self.layers)} layers, expected depth {self.depth}")
        if len(self.layers[-1]) != 1:
            raise ValueError("Final layer must contain exactly one element")
        if self.root != self.layers[-1][0]:
            raise ValueError("root does not match the final layer")
        for i, layer in enumerate(self.layers[:-1]):
            if len(layer) % 2 != 0:
                raise ValueError(f"Layer {i} has odd length {len(layer)}")
        return self

    @classmethod
    def from_tree(
        cls,
        tree: MerkleTree,
        hash_function: str = DEFAULT_HASH_FUNCTION,
        metadata: dict[str, Any] | None = None,
    ) -> "TreeDocument":
        return cls(
            depth=tree.depth,
            hash_function=hash_function,
            root=tree.root,
            leaves=list(tree.leaves),
            layers=[list(layer) for layer in tree.layers],
            metadata=metadata or {},
        )

    def to_tree(self) -> MerkleTree:
        return MerkleTree(
            leaves=tuple(self.leaves),
            layers=tuple(tuple(layer) for layer in self.layers),
            depth=self.depth,
        )


class ProofEntryModel(BaseModel):
    """One (hash, direction) step of a persisted proof."""

    model_config = ConfigDict(extra="forbid")

    hash: Element
    direction: Literal[0, 1] = Field(..., description="0 = LEFT, 1 = RIGHT")


class ProofDocument(BaseModel):
    """
    A Merkle proof as exchanged between prover, verifier and circuit tooling.
    """

    model_config = ConfigDict(extra="forbid")

    schema_version: SchemaVersion = Field(default=SCHEMA_VERSION)
    root: Element | None = Field(default=None, description="Root the proof was generated against")
    depth: int = Field(..., ge=1, le=MAX_TREE_DEPTH)
    hash_function: str = Field(default=DEFAULT_HASH_FUNCTION, min_length=1)
    entries: list[ProofEntryModel] = Field(..., min_length=1)

    @model_validator(mode="after")
    def _check_length(self) -> "ProofDocument":
        if len(self.entries) != self.depth:
            raise ValueError(f"Proof has {len(self.entries)} entries, expected depth {self.depth}")
        return self

    @property
    def leaf(self) -> int:
        return self.entries[0].hash

    @classmethod
    def from_proof(
        cls,
        proof: MerkleProof,
        root: int | None = None,
        hash_function: str = DEFAULT_HASH_FUNCTION,
    ) -> "ProofDocument":
        return cls(
            root=root,
            depth=len(proof),
            hash_function=hash_function,
            entries=[
                ProofEntryModel(hash=entry.hash, direction=int(entry.direction))
                for entry in proof
            ],
        )

    def to_proof(self) -> MerkleProof:
        return MerkleProof(
            entries=tuple(ProofEntry(e.hash, Direction(e.direction)) for e in self.entries)
        )


class CircuitInputs(BaseModel):
    """Merkle path inputs for the proving circuit (pathElements / pathIndices)."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    path_elements: list[Element] = Field(..., alias="pathElements")
    path_indices: list[Literal[0, 1]] = Field(..., alias="pathIndices")
    root: Element | None = Field(default=None)

    @model_validator(mode="after")
    def _same_length(self) -> "CircuitInputs":
        if len(self.path_elements) != len(self.path_indices):
            raise ValueError("pathElements and pathIndices must have the same length")
        return self

    @classmethod
    def from_circuit_path(cls, path: CircuitPath, root: int | None = None) -> "CircuitInputs":
        return cls(
            path_elements=list(path.path_elements),
            path_indices=list(path.path_indices),
            root=root,
        )


__all__ = [
    "SCHEMA_VERSION",
    "SchemaVersion",
    "TreeDocument",
    "ProofEntryModel",
    "ProofDocument",
    "CircuitInputs",
]
