"""
Schemas & Canonicalization
File: errors.py

Purpose: Standard error taxonomy for tree building, proof generation and
proof verification. Defines both Pydantic models for structured error
communication and Python exceptions for control flow.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Error Codes (Machine-Readable Constants)
# =============================================================================

class ErrorCodes:
    """Stable machine-readable error codes used across the tree engine."""

    # Validation Errors
    CANONICALIZATION_ERROR = "CANONICALIZATION_ERROR"
    INVALID_ELEMENT = "INVALID_ELEMENT"

    # Tree Construction Errors
    EMPTY_INPUT = "EMPTY_INPUT"
    TREE_DEPTH_EXCEEDED = "TREE_DEPTH_EXCEEDED"
    UNKNOWN_HASH_FUNCTION = "UNKNOWN_HASH_FUNCTION"

    # Proof Errors
    LEAF_NOT_FOUND = "LEAF_NOT_FOUND"
    MALFORMED_PROOF = "MALFORMED_PROOF"
    ROOT_MISMATCH = "ROOT_MISMATCH"


# =============================================================================
# Pydantic Error Models (Structured Communication)
# =============================================================================

class TreeError(BaseModel):
    """
    Base error model for structured error communication.

    Used when errors cross a process boundary (API responses, CLI JSON
    output) instead of being raised.
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=False,
        validate_assignment=True,
    )

    code: str = Field(
        ...,
        description="Stable machine-readable error code",
        examples=[ErrorCodes.LEAF_NOT_FOUND],
    )
    message: str = Field(
        ...,
        description="Human-readable error message",
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional structured details about the error",
    )
    retryable: bool = Field(
        default=False,
        description="Whether the operation can be retried",
    )


# =============================================================================
# Python Exceptions (Control Flow)
# =============================================================================

class TreeException(Exception):
    """
    Base exception for all witness-tree errors.

    Carries structured error information and can be converted to a
    TreeError model.
    """

    def __init__(
        self,
        message: str,
        code: str = "TREE_ERROR",
        details: dict[str, Any] | None = None,
        retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}
        self.retryable = retryable

    def to_error_model(self) -> TreeError:
        """Convert this exception to a TreeError model."""
        return TreeError(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class CanonicalizationException(TreeException):
    """Exception raised when canonical serialization fails."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.CANONICALIZATION_ERROR,
            details=details,
        )


class InvalidElementException(TreeException):
    """Exception raised when a value is not a valid field element."""

    def __init__(
        self,
        message: str,
        value: Any = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if value is not None:
            full_details["value"] = repr(value)
        super().__init__(
            message=message,
            code=ErrorCodes.INVALID_ELEMENT,
            details=full_details,
        )


class UnknownHashFunctionException(TreeException):
    """Exception raised when a hash function name is not registered."""

    def __init__(self, name: str, available: list[str] | None = None) -> None:
        super().__init__(
            message=f"Unknown hash function: {name!r}",
            code=ErrorCodes.UNKNOWN_HASH_FUNCTION,
            details={"name": name, "available": sorted(available or [])},
        )


class TreeDepthExceededException(TreeException):
    """Exception raised when a leaf set needs more layers than the configured depth."""

    def __init__(
        self,
        message: str,
        leaf_count: int,
        required_depth: int,
        depth: int,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.TREE_DEPTH_EXCEEDED,
            details={
                "leaf_count": leaf_count,
                "required_depth": required_depth,
                "depth": depth,
            },
        )


class LeafNotFoundException(TreeException):
    """Exception raised when the requested leaf is absent from layer 0."""

    def __init__(
        self,
        message: str,
        leaf: Any = None,
        details: dict[str, Any] | None = None,
        code: str = ErrorCodes.LEAF_NOT_FOUND,
    ) -> None:
        full_details = details or {}
        if leaf is not None:
            full_details["leaf"] = str(leaf)
        super().__init__(
            message=message,
            code=code,
            details=full_details,
        )


class EmptyInputException(LeafNotFoundException):
    """Exception raised when a proof is requested against an empty leaf set."""

    def __init__(
        self,
        message: str = "Cannot generate proof for empty leaf list",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            details=details,
            code=ErrorCodes.EMPTY_INPUT,
        )


class MalformedProofException(TreeException):
    """Exception raised when a Merkle proof has the wrong shape."""

    def __init__(
        self,
        message: str,
        entry_index: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if entry_index is not None:
            full_details["entry_index"] = entry_index
        super().__init__(
            message=message,
            code=ErrorCodes.MALFORMED_PROOF,
            details=full_details,
        )
