"""
CLI Build Command

Build a depth-padded Merkle tree from leaf elements and store its public
snapshot as <root>.json.

Usage:
    witness-tree build --leaves commitments.txt [--depth 20] [--out-dir public] [--json]
    witness-tree build --leaf 1 --leaf 2 --leaf 3 --depth 4 --no-save
"""

from __future__ import annotations

import logging
from argparse import Namespace
from dataclasses import asdict, dataclass

from core.crypto.hashing import get_hash_function
from core.merkle.merkle_tree import build_merkle_tree
from core.schemas.elements import parse_element
from core.schemas.errors import TreeException
from core.schemas.tree import TreeDocument
from core.storage.tree_store import TreeStore, TreeStoreError, load_leaves_file

from witness_cli.commands.common import (
    EXIT_RUNTIME_ERROR,
    EXIT_SUCCESS,
    print_error,
    print_json,
)


logger = logging.getLogger(__name__)


@dataclass
class BuildSummary:
    """Summary of a tree build for CLI output."""
    root: str
    depth: int
    leaf_count: int
    hash_function: str
    path: str | None = None


def print_summary_human(summary: BuildSummary) -> None:
    print(f"root: {summary.root}")
    print(f"depth: {summary.depth}")
    print(f"leaves: {summary.leaf_count}")
    print(f"hash_function: {summary.hash_function}")
    if summary.path:
        print(f"saved: {summary.path}")


def collect_leaves(args: Namespace) -> list[int]:
    """Leaves from --leaves FILE followed by any --leaf values."""
    leaves: list[int] = []
    if args.leaves:
        leaves.extend(load_leaves_file(args.leaves))
    for value in args.leaf or []:
        leaves.append(parse_element(value))
    return leaves


def build_cmd(args: Namespace) -> int:
    """
    Execute the build command.

    Returns:
        Exit code
    """
    config = args.cli_config
    depth = args.depth or config.tree.depth
    hash_name = args.hash or config.tree.hash_function

    try:
        leaves = collect_leaves(args)
        if not leaves:
            print_error("No leaves supplied (use --leaves FILE or --leaf VALUE)")
            return EXIT_RUNTIME_ERROR

        hash_fn = get_hash_function(hash_name)
        logger.info(f"Building merkle tree from {len(leaves)} leaves (depth={depth}, hash={hash_name})")
        tree = build_merkle_tree(leaves, depth, hash_fn)
        document = TreeDocument.from_tree(tree, hash_function=hash_name)

        path = None
        if not args.no_save:
            store = TreeStore(args.out_dir or config.storage.public_dir)
            path = store.save(document)
    except (TreeException, TreeStoreError) as e:
        print_error(str(e))
        return EXIT_RUNTIME_ERROR
    except ValueError as e:
        print_error(str(e))
        return EXIT_RUNTIME_ERROR

    summary = BuildSummary(
        root=str(tree.root),
        depth=tree.depth,
        leaf_count=len(tree.leaves),
        hash_function=hash_name,
        path=str(path) if path else None,
    )

    if args.json:
        print_json(asdict(summary))
    else:
        print_summary_human(summary)

    return EXIT_SUCCESS
