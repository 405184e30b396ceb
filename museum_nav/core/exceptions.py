"""
Custom exceptions for the museum navigation backend.

Every exception carries the HTTP status it maps to; the error handlers
translate them 1:1 into the response envelope.
"""

from typing import Optional, Dict, Any
from enum import Enum


class ErrorCode(str, Enum):
    """Standardized error codes for the application."""

    # Input errors
    VALIDATION_ERROR = "VALIDATION_ERROR"

    # Authentication errors
    MISSING_TOKEN = "MISSING_TOKEN"
    TOKEN_REVOKED = "TOKEN_REVOKED"
    INVALID_TOKEN = "INVALID_TOKEN"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    FORBIDDEN = "FORBIDDEN"

    # Resource errors
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"

    # Generic errors
    INTERNAL_SERVER_ERROR = "INTERNAL_SERVER_ERROR"


class MuseumNavException(Exception):
    """Base exception for the museum navigation backend."""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode,
        details: Optional[Dict[str, Any]] = None,
        status_code: int = 500
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.status_code = status_code


class ValidationError(MuseumNavException):
    """Raised when request input is missing or malformed."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=message,
            error_code=ErrorCode.VALIDATION_ERROR,
            details=details,
            status_code=400
        )


class AuthenticationError(MuseumNavException):
    """Raised when a request carries no usable identity (missing/revoked token, bad credentials)."""

    def __init__(self, message: str, error_code: ErrorCode = ErrorCode.MISSING_TOKEN):
        super().__init__(
            message=message,
            error_code=error_code,
            status_code=401
        )


class TokenInvalidError(MuseumNavException):
    """Raised when a token fails signature or expiry verification."""

    def __init__(self, message: str = "Token is not valid"):
        super().__init__(
            message=message,
            error_code=ErrorCode.INVALID_TOKEN,
            status_code=403
        )


class ForbiddenError(MuseumNavException):
    """Raised when an authenticated principal acts on a resource it does not own."""

    def __init__(self, message: str = "Forbidden"):
        super().__init__(
            message=message,
            error_code=ErrorCode.FORBIDDEN,
            status_code=403
        )


class NotFoundError(MuseumNavException):
    """Raised when a referenced entity does not exist."""

    def __init__(self, message: str = "Resource not found", details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=message,
            error_code=ErrorCode.NOT_FOUND,
            details=details,
            status_code=404
        )


class ConflictError(MuseumNavException):
    """Raised on uniqueness violations."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=message,
            error_code=ErrorCode.CONFLICT,
            details=details,
            status_code=409
        )


class InternalError(MuseumNavException):
    """Raised on unexpected persistence or hashing failures."""

    def __init__(self, message: str = "An internal server error occurred", details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=message,
            error_code=ErrorCode.INTERNAL_SERVER_ERROR,
            details=details,
            status_code=500
        )


class DuplicateKeyError(Exception):
    """Raised by repositories when an insert collides with an existing key."""

    def __init__(self, field: Optional[str] = None, value: Any = None):
        super().__init__(f"Duplicate value for {field or 'key'}: {value!r}")
        self.field = field
        self.value = value
