"""
Witness Tree API (FastAPI)

HTTP API for the fixed-depth merkle tree engine:
- POST /trees - Build (and store) a tree
- GET /trees/{root} - Read a stored tree
- POST /trees/{root}/proofs - Generate a proof from a stored tree
- POST /proofs/verify - Verify a proof against a root
- POST /proofs/encode - Convert a proof into circuit inputs
- GET /health - Health check

Usage:
    uvicorn api.app:app --reload
"""

__version__ = "0.1.0"
