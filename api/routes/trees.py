"""
Witness Tree API - Tree Routes

Build trees, read stored snapshots and generate proofs against them.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter

from api.deps import get_hash_function, get_runtime_config, get_tree_store
from api.errors import InvalidRequestError, NotFoundError, from_tree_exception
from api.models.requests import BuildTreeRequest, ProveRequest
from api.models.responses import BuildTreeResponse, ProofResponse, TreeListResponse
from core.merkle.merkle_tree import build_merkle_tree, encode_for_circuit, generate_merkle_proof
from core.schemas.elements import parse_element
from core.schemas.errors import TreeException
from core.schemas.tree import CircuitInputs, ProofDocument, TreeDocument
from core.storage.tree_store import TreeNotFoundError, TreeStoreError


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/trees", tags=["trees"])


def _tree_response(document: TreeDocument, *, stored: bool, include_layers: bool) -> BuildTreeResponse:
    return BuildTreeResponse(
        ok=True,
        root=document.root,
        depth=document.depth,
        leaf_count=len(document.leaves),
        hash_function=document.hash_function,
        stored=stored,
        layers=document.layers if include_layers else None,
    )


def _load_document(root: str) -> TreeDocument:
    store = get_tree_store()
    try:
        return store.load(parse_element(root))
    except TreeNotFoundError as e:
        raise NotFoundError(
            "TREE_NOT_FOUND",
            "Merkle tree not found in public folder",
            details={"root": str(e.root)},
        )
    except TreeStoreError as e:
        raise InvalidRequestError(str(e))
    except TreeException as e:
        raise from_tree_exception(e)


@router.get("", response_model=TreeListResponse)
async def list_trees() -> TreeListResponse:
    """List the roots of all stored trees."""
    return TreeListResponse(ok=True, roots=get_tree_store().list_roots())


@router.post("", response_model=BuildTreeResponse)
async def build_tree(request: BuildTreeRequest) -> BuildTreeResponse:
    """
    Build a depth-padded merkle tree.

    The snapshot is stored as <root>.json unless ``save`` is false.
    """
    if not request.leaves:
        raise InvalidRequestError("leaves must not be empty")

    config = get_runtime_config()
    depth = request.depth or config.tree.depth
    hash_name = request.hash_function or config.tree.hash_function

    try:
        hash_fn = get_hash_function(hash_name)
        tree = build_merkle_tree(request.leaves, depth, hash_fn)
    except TreeException as e:
        raise from_tree_exception(e)

    document = TreeDocument.from_tree(tree, hash_function=hash_name)
    logger.info(f"Built merkle tree {tree.root} from {len(tree.leaves)} leaves")

    if request.save:
        get_tree_store().save(document)

    return _tree_response(document, stored=request.save, include_layers=request.include_layers)


@router.get("/{root}", response_model=BuildTreeResponse)
async def get_tree(root: str, include_layers: bool = False) -> BuildTreeResponse:
    """Read a stored tree snapshot."""
    document = _load_document(root)
    return _tree_response(document, stored=True, include_layers=include_layers)


@router.post("/{root}/proofs", response_model=ProofResponse)
async def prove_leaf(root: str, request: ProveRequest) -> ProofResponse:
    """
    Generate a merkle proof for a leaf of a stored tree.

    The stored snapshot is used as the cached tree, so nothing is rehashed.
    """
    document = _load_document(root)
    tree = document.to_tree()

    try:
        hash_fn = get_hash_function(document.hash_function)
        proof = generate_merkle_proof(
            request.leaf, tree.leaves, tree, depth=tree.depth, hash_fn=hash_fn
        )
    except TreeException as e:
        raise from_tree_exception(e)

    return ProofResponse(
        ok=True,
        proof=ProofDocument.from_proof(proof, root=tree.root, hash_function=document.hash_function),
        circuit_inputs=CircuitInputs.from_circuit_path(encode_for_circuit(proof), root=tree.root),
    )
