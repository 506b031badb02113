"""
CLI Prove Command

Generate a Merkle proof for a committed leaf using a stored tree.

Usage:
    witness-tree prove <root> <leaf> [--out proof.json] [--json]
"""

from __future__ import annotations

import logging
from argparse import Namespace

from core.crypto.hashing import get_hash_function
from core.merkle.merkle_tree import Direction, generate_merkle_proof
from core.schemas.elements import parse_element
from core.schemas.errors import LeafNotFoundException, TreeException
from core.schemas.tree import ProofDocument
from core.storage.tree_store import (
    TreeNotFoundError,
    TreeStore,
    TreeStoreError,
    save_document,
)

from witness_cli.commands.common import (
    EXIT_NOT_FOUND,
    EXIT_RUNTIME_ERROR,
    EXIT_SUCCESS,
    print_error,
    print_json,
)


logger = logging.getLogger(__name__)


def print_proof_human(document: ProofDocument) -> None:
    print(f"root: {document.root}")
    print(f"leaf: {document.leaf}")
    print(f"depth: {document.depth}")
    print("entries:")
    for i, entry in enumerate(document.entries):
        label = "leaf" if i == 0 else "sibling"
        print(f"  [{i}] {label:<7} {Direction(entry.direction).name:<5} {entry.hash}")


def prove_cmd(args: Namespace) -> int:
    """
    Execute the prove command.

    Returns:
        Exit code (3 if the tree or the leaf is not found)
    """
    config = args.cli_config
    store = TreeStore(args.public_dir or config.storage.public_dir)

    try:
        leaf = parse_element(args.leaf)
        tree_document = store.load(args.root)
    except TreeNotFoundError as e:
        print_error(f"Merkle tree not found in public folder: {e.path}")
        return EXIT_NOT_FOUND
    except (TreeException, TreeStoreError) as e:
        print_error(str(e))
        return EXIT_RUNTIME_ERROR

    tree = tree_document.to_tree()

    try:
        hash_fn = get_hash_function(tree_document.hash_function)
        logger.info(f"Computing merkle proof for leaf {leaf}")
        proof = generate_merkle_proof(
            leaf, tree.leaves, tree, depth=tree.depth, hash_fn=hash_fn
        )
    except LeafNotFoundException:
        print_error("Commitment not found in tree")
        return EXIT_NOT_FOUND
    except TreeException as e:
        print_error(str(e))
        return EXIT_RUNTIME_ERROR

    document = ProofDocument.from_proof(
        proof, root=tree.root, hash_function=tree_document.hash_function
    )

    if args.out:
        path = save_document(args.out, document)
        logger.info(f"Wrote proof to {path}")

    if args.json:
        print_json(document)
    else:
        print_proof_human(document)

    return EXIT_SUCCESS
