"""
Witness Tree API - Request Models

Pydantic models for API request validation.
"""

from pydantic import BaseModel, Field

from core.merkle.merkle_tree import MAX_TREE_DEPTH
from core.schemas.elements import Element
from core.schemas.tree import ProofDocument


class BuildTreeRequest(BaseModel):
    """Request body for POST /trees endpoint."""

    leaves: list[Element] = Field(
        ...,
        description="Leaf elements as decimal strings, 0x-hex strings or integers",
    )
    depth: int | None = Field(
        default=None,
        ge=1,
        le=MAX_TREE_DEPTH,
        description="Number of tree layers (default: server configuration)",
    )
    hash_function: str | None = Field(
        default=None,
        description="Registered hash function name (default: server configuration)",
    )
    save: bool = Field(
        default=True,
        description="Store the tree snapshot in the public directory",
    )
    include_layers: bool = Field(
        default=False,
        description="Include every padded layer in the response",
    )


class ProveRequest(BaseModel):
    """Request body for POST /trees/{root}/proofs endpoint."""

    leaf: Element = Field(..., description="Leaf element to prove")


class VerifyProofRequest(BaseModel):
    """Request body for POST /proofs/verify endpoint."""

    root: Element = Field(..., description="Expected root")
    proof: ProofDocument = Field(..., description="Proof document to fold")
    depth: int | None = Field(
        default=None,
        ge=1,
        le=MAX_TREE_DEPTH,
        description="Required proof length (default: the proof document's depth)",
    )


class EncodeProofRequest(BaseModel):
    """Request body for POST /proofs/encode endpoint."""

    proof: ProofDocument = Field(..., description="Proof document to reshape")
