"""
CLI Verify Command

Fold a proof to its root and compare against an expected root.

Usage:
    witness-tree verify <root> <proof.json> [--depth N] [--json]
"""

from __future__ import annotations

import logging
from argparse import Namespace
from dataclasses import asdict, dataclass
from typing import Any

from core.crypto.hashing import get_hash_function
from core.merkle.merkle_tree import compute_root_from_proof
from core.schemas.elements import parse_element
from core.schemas.errors import ErrorCodes, TreeError, TreeException
from core.storage.tree_store import TreeStoreError, load_proof_document

from witness_cli.commands.common import (
    EXIT_RUNTIME_ERROR,
    EXIT_SUCCESS,
    EXIT_VERIFICATION_FAILED,
    print_error,
    print_json,
)


logger = logging.getLogger(__name__)


@dataclass
class VerifySummary:
    """Summary of proof verification for CLI output."""
    ok: bool
    expected_root: str
    computed_root: str
    leaf: str
    depth: int
    error: dict[str, Any] | None = None


def verify_cmd(args: Namespace) -> int:
    """
    Execute the verify command.

    Returns:
        Exit code (0 valid, 2 invalid, 1 error)
    """
    try:
        expected_root = parse_element(args.root)
        document = load_proof_document(args.proof_file)
        hash_fn = get_hash_function(document.hash_function)
        expected_depth = args.depth or document.depth
        logger.info("Verifying proof")
        computed_root = compute_root_from_proof(document.to_proof(), hash_fn, expected_depth)
    except TreeException as e:
        if args.json:
            print_json({"ok": False, "error": e.to_error_model()})
        else:
            print_error(str(e))
        return EXIT_RUNTIME_ERROR
    except TreeStoreError as e:
        print_error(str(e))
        return EXIT_RUNTIME_ERROR

    summary = VerifySummary(
        ok=computed_root == expected_root,
        expected_root=str(expected_root),
        computed_root=str(computed_root),
        leaf=str(document.leaf),
        depth=document.depth,
    )
    if not summary.ok:
        summary.error = TreeError(
            code=ErrorCodes.ROOT_MISMATCH,
            message="Proof folds to a different root",
            details={"expected": summary.expected_root, "computed": summary.computed_root},
        ).model_dump()

    if args.json:
        print_json(asdict(summary))
    elif summary.ok:
        print("MERKLE PROOF VALID!")
    else:
        print("INVALID PROOF!")
        print(f"computed root: {summary.computed_root}")

    if summary.ok:
        logger.info("Verification passed")
        return EXIT_SUCCESS
    logger.warning("Verification failed")
    return EXIT_VERIFICATION_FAILED
