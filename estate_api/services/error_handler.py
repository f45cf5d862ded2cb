"""
Error handling service for consistent error response formatting and logging.
Every error leaves the API as {"error": message, "code": CODE, "request_id": id}.
"""

from typing import Dict, Any, Optional, List
from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from estate_api.repositories.errors import StorageError, UniqueViolation, CheckViolation
from estate_api.utils.exceptions import (
    APIException,
    DuplicateEmailError,
    DuplicateFavoriteError,
    InvalidFieldValueError,
    InternalServerError,
    ValidationFailedError,
)
import logging
import re
import traceback
import uuid

logger = logging.getLogger(__name__)

# Unique constraints with a dedicated client error
UNIQUE_CONSTRAINT_ERRORS = {
    "users_email_key": DuplicateEmailError,
    "favorites_user_id_property_id_key": DuplicateFavoriteError,
}

_PROPERTY_CHECK = re.compile(r"properties_(.+)_check")

_HTTP_ERROR_CODES = {
    400: "BAD_REQUEST",
    401: "UNAUTHENTICATED",
    403: "FORBIDDEN",
    404: "NOT_FOUND",
    405: "METHOD_NOT_ALLOWED",
    413: "PAYLOAD_TOO_LARGE",
}


class ErrorHandlerService:
    """
    Service for handling and formatting errors consistently across the application.
    Also owns the mapping from storage failures to client-facing errors.
    """

    @staticmethod
    def format_error_response(
        message: str,
        error_code: str,
        errors: Optional[List[str]] = None,
        request_id: Optional[str] = None
    ) -> Dict[str, Any]:
        """
        Format error response in a consistent structure.

        Args:
            message: Human-readable error message
            error_code: Error code identifier
            errors: Optional ordered list of field messages
            request_id: Optional request identifier for tracking

        Returns:
            Formatted error response dictionary
        """
        response = {
            "error": message,
            "code": error_code,
        }

        if errors:
            response["errors"] = errors

        if request_id:
            response["request_id"] = request_id

        return response

    @staticmethod
    def translate_storage_error(
        error: StorageError,
        unique_error: Optional[APIException] = None
    ) -> APIException:
        """
        Map a storage failure to the API error taxonomy.

        Args:
            error: Classified storage failure
            unique_error: Error to use for a uniqueness violation whose
                constraint name the driver did not report

        Returns:
            APIException to raise
        """
        if isinstance(error, UniqueViolation):
            known = UNIQUE_CONSTRAINT_ERRORS.get(error.constraint or "")
            if known:
                return known()
            if unique_error is not None:
                return unique_error

        elif isinstance(error, CheckViolation):
            match = _PROPERTY_CHECK.search(error.constraint or "")
            return InvalidFieldValueError(match.group(1) if match else "data")

        return InternalServerError(error.message)

    @staticmethod
    def handle_api_exception(
        exception: APIException,
        request: Optional[Request] = None
    ) -> JSONResponse:
        """
        Handle custom API exceptions with structured response.

        Args:
            exception: API exception instance
            request: Optional FastAPI request object

        Returns:
            JSON response with formatted error
        """
        request_id = ErrorHandlerService._get_request_id(request)

        log = logger.error if exception.status_code >= 500 else logger.warning
        log(
            f"API Exception [{request_id}]: {exception.error_code} - {exception.detail}",
            extra={
                "error_code": exception.error_code,
                "status_code": exception.status_code,
                "request_id": request_id,
                "path": request.url.path if request else None
            }
        )

        error_response = ErrorHandlerService.format_error_response(
            message=exception.detail,
            error_code=exception.error_code or "API_ERROR",
            errors=exception.errors,
            request_id=request_id
        )

        return JSONResponse(
            status_code=exception.status_code,
            content=error_response,
            headers=exception.headers
        )

    @staticmethod
    def handle_validation_error(
        exception: RequestValidationError,
        request: Optional[Request] = None
    ) -> JSONResponse:
        """
        Handle request parsing and type errors raised by FastAPI.
        Malformed JSON gets its own message; other errors become one message per field.

        Args:
            exception: Request validation error
            request: Optional FastAPI request object

        Returns:
            JSON response with status 400
        """
        errors = exception.errors()

        if any(error.get("type") == "json_invalid" for error in errors):
            api_error = ValidationFailedError("Invalid JSON syntax")
        else:
            api_error = ValidationFailedError(
                errors=[ErrorHandlerService._format_field_error(error) for error in errors]
            )

        return ErrorHandlerService.handle_api_exception(api_error, request)

    @staticmethod
    def handle_storage_error(
        exception: StorageError,
        request: Optional[Request] = None
    ) -> JSONResponse:
        """Handle a storage failure that no service translated."""
        return ErrorHandlerService.handle_api_exception(
            ErrorHandlerService.translate_storage_error(exception),
            request
        )

    @staticmethod
    def handle_http_exception(
        exception: StarletteHTTPException,
        request: Optional[Request] = None
    ) -> JSONResponse:
        """
        Handle framework HTTP exceptions such as unknown routes.

        Args:
            exception: HTTP exception
            request: Optional FastAPI request object

        Returns:
            JSON response with HTTP error information
        """
        request_id = ErrorHandlerService._get_request_id(request)

        logger.warning(
            f"HTTP Exception [{request_id}]: {exception.status_code} - {exception.detail}",
            extra={
                "status_code": exception.status_code,
                "request_id": request_id,
                "path": request.url.path if request else None
            }
        )

        error_response = ErrorHandlerService.format_error_response(
            message=str(exception.detail),
            error_code=_HTTP_ERROR_CODES.get(exception.status_code, f"HTTP_{exception.status_code}"),
            request_id=request_id
        )

        return JSONResponse(
            status_code=exception.status_code,
            content=error_response,
            headers=getattr(exception, "headers", None)
        )

    @staticmethod
    def handle_unexpected_error(
        exception: Exception,
        request: Optional[Request] = None
    ) -> JSONResponse:
        """
        Handle unexpected errors.
        The raw exception message is returned to the client.

        Args:
            exception: Unexpected exception
            request: Optional FastAPI request object

        Returns:
            JSON response with status 500
        """
        request_id = ErrorHandlerService._get_request_id(request)

        logger.error(
            f"Unexpected Error [{request_id}]: {type(exception).__name__} - {str(exception)}",
            extra={
                "request_id": request_id,
                "path": request.url.path if request else None,
                "exception_type": type(exception).__name__,
                "traceback": traceback.format_exc()
            },
            exc_info=True
        )

        error_response = ErrorHandlerService.format_error_response(
            message=str(exception) or "Internal server error",
            error_code="INTERNAL_SERVER_ERROR",
            request_id=request_id
        )

        return JSONResponse(
            status_code=500,
            content=error_response
        )

    @staticmethod
    def _format_field_error(error: Dict[str, Any]) -> str:
        # ("body", "beds") -> "beds: Input should be a valid integer"
        loc = [str(part) for part in error.get("loc", ())]
        if len(loc) > 1 and loc[0] in ("body", "path", "query"):
            loc = loc[1:]
        field = ".".join(loc)
        return f"{field}: {error.get('msg')}" if field else str(error.get("msg"))

    @staticmethod
    def _get_request_id(request: Optional[Request]) -> str:
        """Return the id assigned by the request middleware, or a new one."""
        if request is not None:
            request_id = getattr(request.state, "request_id", None)
            if request_id:
                return request_id
        return ErrorHandlerService._generate_request_id()

    @staticmethod
    def _generate_request_id() -> str:
        """Generate a unique request ID for error tracking."""
        return str(uuid.uuid4())[:8]
