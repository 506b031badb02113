"""
Witness Tree API - Health Check Route

Simple health check endpoint for liveness probes.
"""

from fastapi import APIRouter

from api.models.responses import HealthResponse
from core.crypto.hashing import list_hash_functions


router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """
    Health check endpoint.

    Returns service status and the registered hash functions.
    """
    return HealthResponse(
        ok=True,
        service="witness-tree-api",
        version="v1",
        hash_functions=list_hash_functions(),
    )


@router.get("/", response_model=HealthResponse)
async def root() -> HealthResponse:
    """
    Root endpoint - same as health check.
    """
    return await health_check()
