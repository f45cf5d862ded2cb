"""
Request middleware for request ids, access logging and body size limits.
"""

from typing import Callable
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp, Message, Receive, Scope, Send
import logging
import time
import uuid

from estate_api.services.error_handler import ErrorHandlerService
from estate_api.utils.exceptions import PayloadTooLargeError, ValidationFailedError

logger = logging.getLogger(__name__)


class ValidationMiddleware(BaseHTTPMiddleware):
    """
    Tags each request with a short id, rejects oversized bodies and logs
    method, path, status and duration.
    """

    def __init__(
        self,
        app: ASGIApp,
        max_request_size: int = 10 * 1024 * 1024,  # 10MB
        enable_request_logging: bool = True
    ):
        super().__init__(app)
        self.max_request_size = max_request_size
        self.enable_request_logging = enable_request_logging

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """
        Count body bytes as they are received.
        Covers chunked bodies that carry no content-length header; the error
        surfaces when the endpoint reads the body.
        """
        if scope["type"] != "http":
            await super().__call__(scope, receive, send)
            return

        received = 0

        async def limited_receive() -> Message:
            nonlocal received
            message = await receive()
            if message["type"] == "http.request":
                received += len(message.get("body", b""))
                if received > self.max_request_size:
                    raise PayloadTooLargeError(self.max_request_size)
            return message

        await super().__call__(scope, limited_receive, send)

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """
        Process request through the middleware.

        Args:
            request: FastAPI request object
            call_next: Next middleware/handler in chain

        Returns:
            Response object
        """
        request_id = str(uuid.uuid4())[:8]
        request.state.request_id = request_id

        start_time = time.time()

        try:
            self._validate_request_size(request)
        except (PayloadTooLargeError, ValidationFailedError) as exc:
            response = ErrorHandlerService.handle_api_exception(exc, request)
            response.headers["X-Request-ID"] = request_id
            return response

        try:
            response = await call_next(request)
        except Exception as exc:
            processing_time = time.time() - start_time
            logger.error(
                f"Middleware error [{request_id}]: {type(exc).__name__} - {str(exc)}",
                extra={
                    "request_id": request_id,
                    "path": request.url.path,
                    "method": request.method,
                    "processing_time": processing_time
                },
                exc_info=True
            )
            response = ErrorHandlerService.handle_unexpected_error(exc, request)

        if self.enable_request_logging:
            processing_time = time.time() - start_time
            logger.info(
                f"[{request_id}] {request.method} {request.url.path} -> "
                f"{response.status_code} ({processing_time * 1000:.1f}ms)"
            )

        response.headers["X-Request-ID"] = request_id
        return response

    def _validate_request_size(self, request: Request) -> None:
        """
        Validate request content length.

        Raises:
            PayloadTooLargeError: If the declared size exceeds the limit
            ValidationFailedError: If the header is not a number
        """
        content_length = request.headers.get("content-length")
        if not content_length:
            return

        try:
            size = int(content_length)
        except ValueError:
            raise ValidationFailedError("Invalid content-length header")

        if size > self.max_request_size:
            raise PayloadTooLargeError(self.max_request_size)
