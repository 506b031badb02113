"""
Witness Tree API - Response Models

Pydantic models for API response serialization.
"""

from typing import Any

from pydantic import BaseModel, Field

from core.schemas.elements import Element
from core.schemas.tree import CircuitInputs, ProofDocument


class HealthResponse(BaseModel):
    """Response for GET /health endpoint."""

    ok: bool = True
    service: str = "witness-tree-api"
    version: str = "v1"
    hash_functions: list[str] = Field(default_factory=list)


class BuildTreeResponse(BaseModel):
    """Response for POST /trees and GET /trees/{root}."""

    ok: bool = Field(..., description="Whether the tree was built")
    root: Element = Field(..., description="Root element")
    depth: int = Field(..., description="Number of tree layers")
    leaf_count: int = Field(..., description="Number of supplied leaves")
    hash_function: str = Field(..., description="Hash function the tree was built with")
    stored: bool = Field(default=False, description="Whether the snapshot is in the public directory")
    layers: list[list[Element]] | None = Field(default=None)


class ProofResponse(BaseModel):
    """Response for POST /trees/{root}/proofs."""

    ok: bool = True
    proof: ProofDocument
    circuit_inputs: CircuitInputs


class VerifyProofResponse(BaseModel):
    """Response for POST /proofs/verify."""

    ok: bool = Field(..., description="Whether the proof folds to the expected root")
    expected_root: Element
    computed_root: Element
    leaf: Element
    depth: int


class EncodeProofResponse(BaseModel):
    """Response for POST /proofs/encode."""

    ok: bool = True
    circuit_inputs: CircuitInputs


class TreeListResponse(BaseModel):
    """Response for GET /trees."""

    ok: bool = True
    roots: list[Element] = Field(default_factory=list)


class ErrorDetail(BaseModel):
    """Error detail information."""

    code: str = Field(..., description="Error code")
    message: str = Field(..., description="Human-readable error message")
    details: dict[str, Any] = Field(default_factory=dict)


class ErrorResponse(BaseModel):
    """Standard error response."""

    ok: bool = False
    error: ErrorDetail
