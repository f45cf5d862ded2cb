"""
Utility modules for the Real Estate API.
"""

from .auth import (
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
    TokenPayload
)

from .exceptions import (
    APIException,
    UnauthenticatedError,
    InvalidTokenError,
    InvalidCredentialsError,
    ForbiddenError,
    NotFoundError,
    ValidationFailedError,
    DuplicateEmailError,
    DuplicateFavoriteError,
    InvalidFieldValueError,
    InvalidOperationError,
    PayloadTooLargeError,
    InternalServerError,
    ServiceUnavailableError
)

# Dependencies are imported directly where needed to avoid circular imports

__all__ = [
    # Auth utilities
    "create_access_token",
    "decode_access_token",
    "hash_password",
    "verify_password",
    "TokenPayload",

    # Exceptions
    "APIException",
    "UnauthenticatedError",
    "InvalidTokenError",
    "InvalidCredentialsError",
    "ForbiddenError",
    "NotFoundError",
    "ValidationFailedError",
    "DuplicateEmailError",
    "DuplicateFavoriteError",
    "InvalidFieldValueError",
    "InvalidOperationError",
    "PayloadTooLargeError",
    "InternalServerError",
    "ServiceUnavailableError",
]
