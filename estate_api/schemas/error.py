"""
Error response schemas for API documentation and consistent error formatting.
"""

from pydantic import BaseModel, Field
from typing import List, Optional, Any, Dict


class ErrorResponse(BaseModel):
    """Schema for standardized error responses."""

    error: str = Field(
        ...,
        description="Human-readable error message",
        examples=["Property not found"]
    )

    code: str = Field(
        ...,
        description="Error code identifier",
        examples=["NOT_FOUND"]
    )

    request_id: Optional[str] = Field(
        None,
        description="Unique request identifier for tracking",
        examples=["abc12345"]
    )

    errors: Optional[List[str]] = Field(
        None,
        description="Ordered field messages for batch validation failures"
    )


def _example(message: str, code: str, errors: Optional[List[str]] = None) -> Dict[str, Any]:
    value = {"error": message, "code": code, "request_id": "abc12345"}
    if errors:
        value["errors"] = errors
    return {"application/json": {"example": value}}


# Common error responses for documentation
COMMON_ERROR_RESPONSES = {
    400: {
        "description": "Bad Request - Validation failed or operation not allowed",
        "model": ErrorResponse,
        "content": _example(
            "Validation failed", "VALIDATION_FAILED",
            ["Title is required", "Price is required"]
        ),
    },
    401: {
        "description": "Unauthorized - Missing token or bad credentials",
        "model": ErrorResponse,
        "content": _example("Access denied, no token provided", "UNAUTHENTICATED"),
    },
    403: {
        "description": "Forbidden - Invalid token or insufficient role",
        "model": ErrorResponse,
        "content": _example("Admin access required", "FORBIDDEN"),
    },
    404: {
        "description": "Not Found - Resource does not exist",
        "model": ErrorResponse,
        "content": _example("Property not found", "NOT_FOUND"),
    },
    413: {
        "description": "Payload Too Large - Request body exceeds the size limit",
        "model": ErrorResponse,
        "content": _example(
            "Request body exceeds maximum allowed size of 10485760 bytes",
            "PAYLOAD_TOO_LARGE"
        ),
    },
    500: {
        "description": "Internal Server Error",
        "model": ErrorResponse,
        "content": _example("Internal server error", "INTERNAL_SERVER_ERROR"),
    },
    503: {
        "description": "Service Unavailable - Database unreachable",
        "model": ErrorResponse,
        "content": _example("Database connection failed", "SERVICE_UNAVAILABLE"),
    },
}


def get_error_responses(*status_codes: int) -> Dict[int, Dict[str, Any]]:
    """
    Get error response schemas for specific status codes.

    Args:
        status_codes: HTTP status codes to include

    Returns:
        Dictionary of error response schemas
    """
    return {
        code: COMMON_ERROR_RESPONSES[code]
        for code in status_codes
        if code in COMMON_ERROR_RESPONSES
    }


def get_auth_error_responses() -> Dict[int, Dict[str, Any]]:
    """Get authentication and authorization error response schemas."""
    return get_error_responses(401, 403)
