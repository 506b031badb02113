"""
Witness Tree API - Proof Routes

Stateless proof verification and circuit encoding.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter

from api.deps import get_hash_function
from api.errors import from_tree_exception
from api.models.requests import EncodeProofRequest, VerifyProofRequest
from api.models.responses import EncodeProofResponse, VerifyProofResponse
from core.merkle.merkle_tree import compute_root_from_proof, encode_for_circuit
from core.schemas.errors import TreeException
from core.schemas.tree import CircuitInputs


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/proofs", tags=["proofs"])


@router.post("/verify", response_model=VerifyProofResponse)
async def verify_proof(request: VerifyProofRequest) -> VerifyProofResponse:
    """
    Verify a proof against an expected root.

    Returns ok=false (HTTP 200) when the proof folds to a different root;
    malformed proofs are rejected with 400.
    """
    proof = request.proof
    try:
        hash_fn = get_hash_function(proof.hash_function)
        computed_root = compute_root_from_proof(
            proof.to_proof(), hash_fn, request.depth or proof.depth
        )
    except TreeException as e:
        raise from_tree_exception(e)

    ok = computed_root == request.root
    if not ok:
        logger.info(f"Proof for leaf {proof.leaf} folds to {computed_root}, expected {request.root}")

    return VerifyProofResponse(
        ok=ok,
        expected_root=request.root,
        computed_root=computed_root,
        leaf=proof.leaf,
        depth=proof.depth,
    )


@router.post("/encode", response_model=EncodeProofResponse)
async def encode_proof(request: EncodeProofRequest) -> EncodeProofResponse:
    """Reshape a proof into pathElements / pathIndices."""
    proof = request.proof
    return EncodeProofResponse(
        ok=True,
        circuit_inputs=CircuitInputs.from_circuit_path(
            encode_for_circuit(proof.to_proof()), root=proof.root
        ),
    )
