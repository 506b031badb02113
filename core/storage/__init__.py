"""
Tree storage: public tree snapshots keyed by root, plus proof and leaf file IO.
"""

from .tree_store import (
    TreeNotFoundError,
    TreeStore,
    TreeStoreError,
    dump_json,
    load_leaves_file,
    load_proof_document,
    save_document,
)

__all__ = [
    "TreeNotFoundError",
    "TreeStore",
    "TreeStoreError",
    "dump_json",
    "load_leaves_file",
    "load_proof_document",
    "save_document",
]
