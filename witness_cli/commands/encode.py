"""
CLI Encode Command

Convert a proof document into the circuit's pathElements / pathIndices input.

Usage:
    witness-tree encode <proof.json> [--out circuit_input.json]
"""

from __future__ import annotations

import logging
from argparse import Namespace

from core.merkle.merkle_tree import encode_for_circuit
from core.schemas.errors import TreeException
from core.schemas.tree import CircuitInputs
from core.storage.tree_store import TreeStoreError, load_proof_document, save_document

from witness_cli.commands.common import (
    EXIT_RUNTIME_ERROR,
    EXIT_SUCCESS,
    print_error,
    print_json,
)


logger = logging.getLogger(__name__)


def encode_cmd(args: Namespace) -> int:
    """Execute the encode command."""
    try:
        document = load_proof_document(args.proof_file)
    except (TreeException, TreeStoreError) as e:
        print_error(str(e))
        return EXIT_RUNTIME_ERROR

    inputs = CircuitInputs.from_circuit_path(
        encode_for_circuit(document.to_proof()), root=document.root
    )

    if args.out:
        path = save_document(args.out, inputs)
        logger.info(f"Wrote circuit inputs to {path}")
        print(f"Wrote circuit inputs to {path}")
    else:
        print_json(inputs)

    return EXIT_SUCCESS
