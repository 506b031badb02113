"""
Tree Storage & Document IO
File: tree_store.py

Purpose: Save and load tree snapshots, proofs and circuit inputs to/from
disk. Trees are stored in a public directory as ``<root>.json`` with the
root written in base 10, so a tree can be located from its root alone.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ValidationError

from core.schemas.canonical import dumps_canonical
from core.schemas.elements import element_to_str, parse_element
from core.schemas.errors import InvalidElementException
from core.schemas.tree import ProofDocument, TreeDocument


logger = logging.getLogger(__name__)


TREE_FILE_SUFFIX = ".json"


class TreeStoreError(Exception):
    """Error during tree/proof document IO."""
    pass


class TreeNotFoundError(TreeStoreError):
    """No stored tree exists for the requested root."""
    def __init__(self, root: int | str, path: Path):
        self.root = root
        self.path = path
        super().__init__(f"Merkle tree not found for root {root} ({path})")


def dump_json(obj: Any, *, indent: int | None = None) -> str:
    """Serialize a document or plain object to canonical JSON."""
    if isinstance(obj, BaseModel):
        data = obj.model_dump(mode="json", by_alias=True)
        return dumps_canonical(data, indent=indent)
    return dumps_canonical(obj, indent=indent)


def save_document(path: str | Path, obj: Any, *, indent: int | None = 2) -> Path:
    """Write a document as JSON, creating parent directories."""
    out_path = Path(path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(dump_json(obj, indent=indent) + "\n", encoding="utf-8")
    return out_path


def _read_json_file(path: Path) -> Any:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise TreeStoreError(f"Cannot read {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise TreeStoreError(f"Invalid JSON in {path}: {e}") from e


def load_proof_document(path: str | Path) -> ProofDocument:
    """
    Load a proof document from a JSON file.

    Accepts either a bare ProofDocument or ``{"proof": {...}}`` as printed
    by the CLI's prove command.

    Raises:
        TreeStoreError: If the file is missing, not JSON, or not a valid proof
    """
    proof_path = Path(path)
    if not proof_path.exists():
        raise TreeStoreError(f"Proof file not found: {proof_path}")
    data = _read_json_file(proof_path)
    if isinstance(data, dict) and "proof" in data and "entries" not in data:
        data = data["proof"]
    try:
        return ProofDocument.model_validate(data)
    except ValidationError as e:
        raise TreeStoreError(f"Invalid proof document in {proof_path}: {e}") from e


def load_leaves_file(path: str | Path) -> list[int]:
    """
    Read leaf elements from a file.

    Supported formats:
    - JSON array of decimal strings / hex strings / ints
    - Plain text, one element per line; blank lines and ``#`` comments skipped

    Raises:
        TreeStoreError: If the file cannot be read or holds an invalid element
    """
    leaves_path = Path(path)
    try:
        text = leaves_path.read_text(encoding="utf-8")
    except OSError as e:
        raise TreeStoreError(f"Cannot read leaves file {leaves_path}: {e}") from e

    stripped = text.lstrip()
    try:
        if stripped.startswith("["):
            raw = json.loads(stripped)
            return [parse_element(v) for v in raw]
        leaves = []
        for line in text.splitlines():
            line = line.split("#", 1)[0].strip()
            if line:
                leaves.append(parse_element(line))
        return leaves
    except json.JSONDecodeError as e:
        raise TreeStoreError(f"Invalid JSON in leaves file {leaves_path}: {e}") from e
    except InvalidElementException as e:
        raise TreeStoreError(f"Invalid leaf in {leaves_path}: {e.message}") from e


class TreeStore:
    """
    Directory of public tree snapshots keyed by root.

    Example:
        >>> store = TreeStore("public")
        >>> path = store.save(TreeDocument.from_tree(tree))
        >>> store.load(tree.root).root == tree.root
        True
    """

    def __init__(self, public_dir: str | Path) -> None:
        self.public_dir = Path(public_dir)

    def path_for(self, root: int | str) -> Path:
        root_value = parse_element(root)
        return self.public_dir / f"{element_to_str(root_value)}{TREE_FILE_SUFFIX}"

    def exists(self, root: int | str) -> bool:
        return self.path_for(root).exists()

    def save(self, document: TreeDocument) -> Path:
        """
        Write a tree snapshot as ``<root>.json``.

        Raises:
            TreeStoreError: If the document has no root (empty tree)
        """
        if document.root is None:
            raise TreeStoreError("Cannot store an empty tree (no root)")
        path = self.path_for(document.root)
        save_document(path, document, indent=None)
        logger.info(f"Stored merkle tree {document.root} at {path}")
        return path

    def load(self, root: int | str) -> TreeDocument:
        """
        Load the tree snapshot for a root.

        Raises:
            TreeNotFoundError: If no file exists for the root
            TreeStoreError: If the file is unreadable or invalid
        """
        path = self.path_for(root)
        if not path.exists():
            raise TreeNotFoundError(root, path)
        data = _read_json_file(path)
        try:
            document = TreeDocument.model_validate(data)
        except ValidationError as e:
            raise TreeStoreError(f"Invalid tree document in {path}: {e}") from e
        if document.root != parse_element(root):
            raise TreeStoreError(f"Tree file {path} holds root {document.root}, expected {root}")
        return document

    def list_roots(self) -> list[int]:
        """Roots of all stored trees, sorted."""
        if not self.public_dir.is_dir():
            return []
        roots = []
        for path in self.public_dir.glob(f"*{TREE_FILE_SUFFIX}"):
            # Only files path_for() would produce: plain decimal stems
            if path.stem.isascii() and path.stem.isdigit():
                roots.append(int(path.stem))
            else:
                logger.debug(f"Skipping non-tree file {path}")
        return sorted(roots)
