"""
CLI command modules.
"""

from witness_cli.commands import build, prove, verify, encode

__all__ = ["build", "prove", "verify", "encode"]
