"""
Witness Tree CLI - Main Entry Point

Parses command-line arguments and dispatches to subcommands.

Usage:
    python -m witness_cli build --leaves commitments.txt [--depth 20] [--out-dir public]
    python -m witness_cli prove <root> <leaf> [--out proof.json] [--json]
    python -m witness_cli verify <root> <proof.json> [--json]
    python -m witness_cli encode <proof.json> [--out circuit_input.json]
    python -m witness_cli trees [--json]
    python -m witness_cli config --init

Environment Variables:
    WITNESS_TREE_DEPTH          Tree depth / circuit levels (default: 20)
    WITNESS_TREE_HASH_FUNCTION  Registered hash function (default: sha256_field)
    WITNESS_TREE_PUBLIC_DIR     Directory of <root>.json snapshots (default: public)
    WITNESS_TREE_LOG_LEVEL      Log level (default: INFO)
    WITNESS_TREE_LOG_FILE       Optional log file
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import traceback
from pathlib import Path
from typing import Sequence

from core.crypto.hashing import list_hash_functions
from core.storage.tree_store import TreeStore

from witness_cli import __version__
from witness_cli.commands import build, encode, prove, verify
from witness_cli.commands.common import EXIT_RUNTIME_ERROR, EXIT_SUCCESS
from witness_cli.config import DEFAULT_CONFIG_NAME, get_default_config_template, load_config


def setup_logging(level: str = "INFO", log_file: str | None = None) -> None:
    """Configure logging for the CLI."""
    log_level = getattr(logging, level.upper(), logging.INFO)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=handlers,
        force=True,
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="witness-tree",
        description="Witness Tree CLI - Build fixed-depth Merkle trees, generate and verify membership proofs.",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=None,
        help=f"Path to configuration file (default: ./{DEFAULT_CONFIG_NAME} or ~/.config/witness-tree/config.json)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (overrides config)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        default=False,
        help="Print tracebacks for unexpected errors",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # --- build command ---
    build_parser = subparsers.add_parser(
        "build",
        help="Build a merkle tree and store it as <root>.json",
        description="Build a depth-padded merkle tree from leaf elements.",
    )
    build_parser.add_argument(
        "--leaves",
        type=str,
        default=None,
        help="File with leaves (JSON array or one element per line)",
    )
    build_parser.add_argument(
        "--leaf",
        type=str,
        action="append",
        default=None,
        help="Leaf element (decimal or 0x-hex); may be repeated",
    )
    build_parser.add_argument(
        "--depth",
        type=int,
        default=None,
        help="Number of tree layers (default: from config)",
    )
    build_parser.add_argument(
        "--hash",
        type=str,
        default=None,
        help=f"Hash function, one of {', '.join(list_hash_functions())} (default: from config)",
    )
    build_parser.add_argument(
        "--out-dir",
        type=str,
        default=None,
        help="Public directory for the tree snapshot (default: from config)",
    )
    build_parser.add_argument(
        "--no-save",
        action="store_true",
        default=False,
        help="Only print the root, do not store the tree",
    )
    build_parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Output machine-readable JSON summary",
    )
    build_parser.set_defaults(func=build.build_cmd)

    # --- prove command ---
    prove_parser = subparsers.add_parser(
        "prove",
        help="Generate a merkle proof from a stored tree",
        description="Load <root>.json from the public directory and prove membership of a leaf.",
    )
    prove_parser.add_argument("root", type=str, help="Root of the stored tree")
    prove_parser.add_argument("leaf", type=str, help="Leaf element to prove")
    prove_parser.add_argument(
        "--public-dir",
        type=str,
        default=None,
        help="Public directory holding tree snapshots (default: from config)",
    )
    prove_parser.add_argument(
        "--out", "-o",
        type=str,
        default=None,
        help="Write the proof document to this path",
    )
    prove_parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Output the proof document as JSON",
    )
    prove_parser.set_defaults(func=prove.prove_cmd)

    # --- verify command ---
    verify_parser = subparsers.add_parser(
        "verify",
        help="Verify a merkle proof against a root",
        description="Fold the proof to a root and compare with the expected root.",
    )
    verify_parser.add_argument("root", type=str, help="Expected root")
    verify_parser.add_argument("proof_file", type=str, help="Path to proof document")
    verify_parser.add_argument(
        "--depth",
        type=int,
        default=None,
        help="Required proof length (default: the proof document's depth)",
    )
    verify_parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Output machine-readable JSON report",
    )
    verify_parser.set_defaults(func=verify.verify_cmd)

    # --- encode command ---
    encode_parser = subparsers.add_parser(
        "encode",
        help="Convert a proof into circuit inputs",
        description="Reshape a proof document into pathElements / pathIndices.",
    )
    encode_parser.add_argument("proof_file", type=str, help="Path to proof document")
    encode_parser.add_argument(
        "--out", "-o",
        type=str,
        default=None,
        help="Write circuit inputs to this path (default: stdout)",
    )
    encode_parser.set_defaults(func=encode.encode_cmd)

    # --- trees command ---
    trees_parser = subparsers.add_parser(
        "trees",
        help="List stored tree roots",
        description="Show the roots of all tree snapshots in the public directory.",
    )
    trees_parser.add_argument(
        "--public-dir",
        type=str,
        default=None,
        help="Public directory holding tree snapshots (default: from config)",
    )
    trees_parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="JSON output",
    )
    trees_parser.set_defaults(func=trees_cmd)

    # --- config command ---
    config_parser = subparsers.add_parser(
        "config",
        help="Manage CLI configuration",
        description="Initialize or display configuration.",
    )
    config_parser.add_argument(
        "--init",
        action="store_true",
        default=False,
        help="Create a template configuration file",
    )
    config_parser.add_argument(
        "--show",
        action="store_true",
        default=False,
        help="Show current configuration",
    )
    config_parser.add_argument(
        "--path",
        type=str,
        default=DEFAULT_CONFIG_NAME,
        help=f"Path for config file (default: {DEFAULT_CONFIG_NAME})",
    )
    config_parser.set_defaults(func=config_cmd)

    return parser


def config_cmd(args: argparse.Namespace) -> int:
    """Handle config command."""
    if args.init:
        config_path = Path(args.path)
        if config_path.exists():
            print(f"Error: Config file already exists: {config_path}", file=sys.stderr)
            return EXIT_RUNTIME_ERROR

        config_path.write_text(get_default_config_template())
        print(f"Created configuration file: {config_path}")
        print("\nEdit this file to configure your settings.")
        print("You can also use environment variables (WITNESS_TREE_* prefix).")
        return EXIT_SUCCESS

    if args.show:
        print(json.dumps(args.cli_config.to_dict(), indent=2))
        return EXIT_SUCCESS

    print("Usage: witness-tree config [--init|--show]")
    print("  --init  Create a template configuration file")
    print("  --show  Show current configuration")
    return EXIT_SUCCESS


def trees_cmd(args: argparse.Namespace) -> int:
    """Handle trees command."""
    store = TreeStore(args.public_dir or args.cli_config.storage.public_dir)
    roots = store.list_roots()

    if args.json:
        print(json.dumps([str(root) for root in roots], indent=2))
        return EXIT_SUCCESS

    if not roots:
        print(f"No trees stored in {store.public_dir}")
        return EXIT_SUCCESS

    for root in roots:
        print(root)
    return EXIT_SUCCESS


def main(argv: Sequence[str] | None = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0=success, 1=error, 2=verification failed, 3=not found)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return EXIT_RUNTIME_ERROR

    # Load configuration
    try:
        config = load_config(args.config)
    except Exception as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    # Setup logging
    log_level = args.log_level or config.logging.level
    setup_logging(level=log_level, log_file=config.logging.file)

    # Attach config to args for commands to use
    args.cli_config = config

    try:
        return args.func(args)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except Exception as e:
        if args.debug:
            traceback.print_exc()
        else:
            print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR


if __name__ == "__main__":
    sys.exit(main())
