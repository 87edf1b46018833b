"""
Security middleware for response hardening and request monitoring.
"""

import logging
import time
from collections.abc import Callable

from fastapi import Request, Response, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)


class SecurityMiddleware(BaseHTTPMiddleware):
    """
    Security middleware for the JSON API.

    Features:
    - Request size limit
    - Security headers injection
    - Slow request logging
    """

    security_headers = {
        "X-Content-Type-Options": "nosniff",
        "X-Frame-Options": "DENY",
        "Strict-Transport-Security": "max-age=31536000; includeSubDomains",
        "Content-Security-Policy": "default-src 'none'; frame-ancestors 'none'",
        "Referrer-Policy": "strict-origin-when-cross-origin",
    }

    def __init__(
        self,
        app,
        enable_security_headers: bool = True,
        max_request_size: int = 1024 * 1024,  # 1MB
        slow_request_threshold: float = 5.0,
    ):
        super().__init__(app)
        self.enable_security_headers = enable_security_headers
        self.max_request_size = max_request_size
        self.slow_request_threshold = slow_request_threshold

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """Process request through security middleware."""
        start_time = time.time()

        content_length = request.headers.get("content-length")
        if content_length and content_length.isdigit():
            if int(content_length) > self.max_request_size:
                logger.warning(
                    f"Request too large: {content_length} bytes from "
                    f"{request.client.host if request.client else 'unknown'}"
                )
                return JSONResponse(
                    status_code=status.HTTP_413_CONTENT_TOO_LARGE,
                    content={"success": False, "message": "Request too large"},
                )

        response = await call_next(request)

        if self.enable_security_headers:
            for header, value in self.security_headers.items():
                response.headers[header] = value

        processing_time = time.time() - start_time
        if processing_time > self.slow_request_threshold:
            logger.info(
                f"Slow request: {request.method} {request.url.path} took {processing_time:.2f}s"
            )

        return response
