"""API route handlers."""

from api.routes import health, trees, proofs

__all__ = ["health", "trees", "proofs"]
