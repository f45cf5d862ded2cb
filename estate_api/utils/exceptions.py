"""
Custom exception classes for the Real Estate API.
Provides structured error handling with appropriate HTTP status codes.
"""

from typing import Any, Dict, Optional, List
from fastapi import HTTPException, status


class APIException(HTTPException):
    """Base API exception class."""

    def __init__(
        self,
        status_code: int,
        detail: str,
        error_code: Optional[str] = None,
        headers: Optional[Dict[str, Any]] = None,
        errors: Optional[List[str]] = None
    ):
        super().__init__(status_code=status_code, detail=detail, headers=headers)
        self.error_code = error_code
        self.errors = errors or []


# Authentication exceptions
class UnauthenticatedError(APIException):
    """No bearer credential was presented."""

    def __init__(self, detail: str = "Access denied, no token provided"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            error_code="UNAUTHENTICATED",
            headers={"WWW-Authenticate": "Bearer"}
        )


class InvalidTokenError(APIException):
    """Bearer credential failed signature, expiry or claim checks."""

    def __init__(self, detail: str = "Invalid token"):
        super().__init__(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=detail,
            error_code="INVALID_TOKEN"
        )


class InvalidCredentialsError(APIException):
    """Invalid login credentials exception."""

    def __init__(self, detail: str = "Invalid email or password"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            error_code="INVALID_CREDENTIALS"
        )


# Authorization exceptions
class ForbiddenError(APIException):
    """Access forbidden exception."""

    def __init__(self, detail: str = "Access denied"):
        super().__init__(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=detail,
            error_code="FORBIDDEN"
        )


class NotFoundError(APIException):
    """Resource not found exception."""

    def __init__(self, resource: str):
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"{resource} not found",
            error_code="NOT_FOUND"
        )


# Validation exceptions
class ValidationFailedError(APIException):
    """
    Request validation error.
    Carries either a single message or an ordered list of field messages.
    """

    def __init__(
        self,
        detail: Optional[str] = None,
        errors: Optional[List[str]] = None
    ):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail or "Validation failed",
            error_code="VALIDATION_FAILED",
            errors=errors
        )


class DuplicateEmailError(APIException):
    """Signup with an email that is already registered."""

    def __init__(self, detail: str = "Email already in use"):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail,
            error_code="DUPLICATE_EMAIL"
        )


class DuplicateFavoriteError(APIException):
    """Property already saved by this user."""

    def __init__(self, detail: str = "Property is already in favorites"):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail,
            error_code="DUPLICATE_FAVORITE"
        )


class InvalidFieldValueError(APIException):
    """A stored field value was rejected by a check constraint."""

    def __init__(self, field: str):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid {field} value",
            error_code="INVALID_FIELD_VALUE"
        )
        self.field = field


class InvalidOperationError(APIException):
    """Request is well-formed but the operation is not allowed."""

    def __init__(self, detail: str):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail,
            error_code="INVALID_OPERATION"
        )


class PayloadTooLargeError(APIException):
    """Request body exceeds the configured size limit."""

    def __init__(self, max_size: int):
        super().__init__(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail=f"Request body exceeds maximum allowed size of {max_size} bytes",
            error_code="PAYLOAD_TOO_LARGE"
        )


# Server-side exceptions
class InternalServerError(APIException):
    """Internal server error exception."""

    def __init__(self, detail: str = "Internal server error"):
        super().__init__(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=detail,
            error_code="INTERNAL_SERVER_ERROR"
        )


class ServiceUnavailableError(APIException):
    """Service unavailable exception."""

    def __init__(self, detail: str = "Service temporarily unavailable"):
        super().__init__(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=detail,
            error_code="SERVICE_UNAVAILABLE"
        )
