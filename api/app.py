"""
Witness Tree API - FastAPI Application

Main application setup and configuration.

Usage:
    uvicorn api.app:app --reload

    # Or run directly
    python -m api.app
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.deps import get_runtime_config
from api.errors import (
    APIError,
    api_error_handler,
    generic_error_handler,
    tree_error_handler,
)
from api.routes import health, trees, proofs
from core.schemas.errors import TreeException


# Respects WITNESS_TREE_LOG_LEVEL and the config file's logging.level
logging.basicConfig(
    level=getattr(logging, get_runtime_config().logging.level.upper(), logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""

    app = FastAPI(
        title="Witness Tree API",
        description="""
HTTP API for building fixed-depth merkle trees and membership proofs for
zero-knowledge circuits.

## Endpoints

- **POST /trees** - Build a tree and store its snapshot as <root>.json
- **GET /trees** - List stored roots
- **GET /trees/{root}** - Read a stored tree
- **POST /trees/{root}/proofs** - Generate a proof for a leaf
- **POST /proofs/verify** - Verify a proof against an expected root
- **POST /proofs/encode** - Convert a proof into pathElements / pathIndices
- **GET /health** - Health check

## Elements

Field elements are returned as base-10 strings. Requests accept base-10
strings, 0x-hex strings or JSON integers.
        """,
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Register exception handlers
    app.add_exception_handler(APIError, api_error_handler)
    app.add_exception_handler(TreeException, tree_error_handler)
    app.add_exception_handler(Exception, generic_error_handler)

    # Include routers
    app.include_router(health.router)
    app.include_router(trees.router)
    app.include_router(proofs.router)

    return app


# Create the application instance
app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
