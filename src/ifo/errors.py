"""Error types and standardized error responses for factory operations.

Every failure raised by the factory is a ``FactoryError`` subclass carrying a
machine-readable code and a category, so callers can switch on them. The
invoke/query surface converts them to plain dicts with ``to_dict()``.

Usage:
    from src.ifo.errors import Unauthorized, FactoryError

    try:
        factory.create_ifo(...)
    except FactoryError as e:
        response = e.to_dict()
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ErrorCategory(str, Enum):
    """Categories for error classification.

    - PERMISSION: Caller lacks the administrator capability
    - VALIDATION: Caller-supplied parameters violate policy
    - CONFLICT: A deterministic identifier is already occupied
    - RESOURCE: Missing assets or balances
    - SYSTEM: Internal errors
    """

    PERMISSION = "permission"
    VALIDATION = "validation"
    CONFLICT = "conflict"
    RESOURCE = "resource"
    SYSTEM = "system"


class ErrorCode(str, Enum):
    """Specific error codes for programmatic handling."""

    # Permission errors
    UNAUTHORIZED = "unauthorized"

    # Validation errors
    DUPLICATE_ASSET = "duplicate_asset"
    WINDOW_TOO_FAR = "window_too_far"
    INVERTED_WINDOW = "inverted_window"
    WINDOW_NOT_FUTURE = "window_not_future"
    NO_TRANCHE_SELECTED = "no_tranche_selected"
    INVALID_ARGUMENT = "invalid_argument"
    MISSING_ARGUMENT = "missing_argument"

    # Conflict errors
    IDENTIFIER_COLLISION = "identifier_collision"
    ALREADY_INITIALIZED = "already_initialized"

    # Resource errors
    NOTHING_TO_RECOVER = "nothing_to_recover"
    UNKNOWN_ASSET = "unknown_asset"
    INSUFFICIENT_BALANCE = "insufficient_balance"

    # System errors
    INTERNAL_ERROR = "internal_error"


@dataclass
class ErrorResponse:
    """Standardized error response.

    All error responses include:
    - success: Always False
    - error: Human-readable message
    - code: Machine-readable error code
    - category: Error category (permission, validation, etc.)
    - retriable: Whether the operation should be retried
    - details: Optional additional context
    """

    success: bool = False  # Always False for errors
    error: str = ""
    code: str = ""
    category: str = ""
    retriable: bool = False
    details: dict[str, object] | None = None

    def to_dict(self) -> dict[str, object]:
        """Convert to dictionary for serialization."""
        result: dict[str, object] = {
            "success": self.success,
            "error": self.error,
            "code": self.code,
            "category": self.category,
            "retriable": self.retriable,
        }
        if self.details:
            result["details"] = self.details
        return result


class FactoryError(Exception):
    """Base class for every failure of a factory operation.

    A FactoryError aborts only the operation that raised it. The factory
    and its registry stay usable afterwards.
    """

    code: ErrorCode = ErrorCode.INTERNAL_ERROR
    category: ErrorCategory = ErrorCategory.SYSTEM
    retriable: bool = False

    def __init__(self, message: str, **details: object) -> None:
        self.message = message
        self.details = dict(details)
        super().__init__(message)

    def to_dict(self) -> dict[str, object]:
        """Convert to a standardized error response dict."""
        return ErrorResponse(
            error=self.message,
            code=self.code.value,
            category=self.category.value,
            retriable=self.retriable,
            details=self.details or None,
        ).to_dict()


# Permission errors


class Unauthorized(FactoryError):
    """Caller is not the registered administrator."""

    code = ErrorCode.UNAUTHORIZED
    category = ErrorCategory.PERMISSION


# Validation errors


class ConfigError(FactoryError):
    """Caller-supplied parameters violate policy. Always caller-fixable."""

    code = ErrorCode.INVALID_ARGUMENT
    category = ErrorCategory.VALIDATION


class DuplicateAsset(ConfigError):
    code = ErrorCode.DUPLICATE_ASSET


class WindowTooFar(ConfigError):
    code = ErrorCode.WINDOW_TOO_FAR


class InvertedWindow(ConfigError):
    code = ErrorCode.INVERTED_WINDOW


class WindowNotFuture(ConfigError):
    code = ErrorCode.WINDOW_NOT_FUTURE


class NoTrancheSelected(ConfigError):
    code = ErrorCode.NO_TRANCHE_SELECTED


class InvalidArgument(ConfigError):
    code = ErrorCode.INVALID_ARGUMENT


# Conflict errors


class IdentifierCollision(FactoryError):
    """An instance already exists at the derived identifier."""

    code = ErrorCode.IDENTIFIER_COLLISION
    category = ErrorCategory.CONFLICT


class AlreadyInitialized(FactoryError):
    """An offering instance's one-time initialize was called again."""

    code = ErrorCode.ALREADY_INITIALIZED
    category = ErrorCategory.CONFLICT


# Resource errors


class NothingToRecover(FactoryError):
    code = ErrorCode.NOTHING_TO_RECOVER
    category = ErrorCategory.RESOURCE


class UnknownAsset(FactoryError):
    """Asset identifier does not resolve to an asset on the chain."""

    code = ErrorCode.UNKNOWN_ASSET
    category = ErrorCategory.RESOURCE


class InsufficientBalance(FactoryError):
    code = ErrorCode.INSUFFICIENT_BALANCE
    category = ErrorCategory.RESOURCE


# Factory functions for dict-level errors raised outside an operation


def validation_error(
    message: str,
    code: ErrorCode = ErrorCode.INVALID_ARGUMENT,
    **details: object,
) -> dict[str, object]:
    """Create a validation error response.

    Use when the request itself is malformed (unknown method, missing or
    mistyped arguments) before any operation runs.

    Args:
        message: Human-readable error message
        code: Specific error code (default: INVALID_ARGUMENT)
        **details: Additional context (e.g., required=["count", "offset"])

    Returns:
        Error response dict with success=False
    """
    return ErrorResponse(
        error=message,
        code=code.value,
        category=ErrorCategory.VALIDATION.value,
        retriable=False,
        details=dict(details) if details else None,
    ).to_dict()
