"""
Witness Tree CLI

Command-line interface for building fixed-depth Merkle trees and producing
membership proofs for ZK circuits.

Usage:
    python -m witness_cli build --leaves commitments.txt
    python -m witness_cli prove <root> <leaf> --out proof.json
    python -m witness_cli verify <root> proof.json
    python -m witness_cli encode proof.json
"""

__version__ = "0.1.0"
