"""API request and response models."""

from api.models.requests import (
    BuildTreeRequest,
    EncodeProofRequest,
    ProveRequest,
    VerifyProofRequest,
)
from api.models.responses import (
    HealthResponse,
    BuildTreeResponse,
    ProofResponse,
    VerifyProofResponse,
    EncodeProofResponse,
    TreeListResponse,
    ErrorDetail,
    ErrorResponse,
)

__all__ = [
    "BuildTreeRequest",
    "EncodeProofRequest",
    "ProveRequest",
    "VerifyProofRequest",
    "HealthResponse",
    "BuildTreeResponse",
    "ProofResponse",
    "VerifyProofResponse",
    "EncodeProofResponse",
    "TreeListResponse",
    "ErrorDetail",
    "ErrorResponse",
]
