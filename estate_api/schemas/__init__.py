"""
Pydantic schemas for request/response validation.
"""

# Authentication schemas
from .auth import (
    SigninRequest,
    SignupRequest,
    AuthResponse
)

# User schemas
from .user import (
    UserPublic,
    UserResponse,
    UserDeletedResponse
)

# Property schemas
from .property import (
    PropertyPayload,
    PropertyResponse,
    PropertyListItem,
    PropertyDetailResponse,
    PropertyDeletedResponse
)

# Favorite and review schemas
from .favorite import FavoriteResponse, FavoriteRemovedResponse
from .review import ReviewRequest, ReviewResponse, ReviewWithAuthor

# Error schemas
from .error import ErrorResponse, get_error_responses, get_auth_error_responses

__all__ = [
    # Authentication
    "SigninRequest",
    "SignupRequest",
    "AuthResponse",

    # User
    "UserPublic",
    "UserResponse",
    "UserDeletedResponse",

    # Property
    "PropertyPayload",
    "PropertyResponse",
    "PropertyListItem",
    "PropertyDetailResponse",
    "PropertyDeletedResponse",

    # Favorite / review
    "FavoriteResponse",
    "FavoriteRemovedResponse",
    "ReviewRequest",
    "ReviewResponse",
    "ReviewWithAuthor",

    # Error
    "ErrorResponse",
    "get_error_responses",
    "get_auth_error_responses",
]
