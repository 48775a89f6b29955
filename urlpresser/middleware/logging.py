"""
Logging Middleware for Request/Response Logging

This middleware logs every HTTP request and response.
It emits two records per request:
- request: method, URI, latency, client IP
- response: status code, response size

Design Decisions:
- Uses Starlette's BaseHTTPMiddleware for compatibility
- Logs to standard Python logging under the "urlpresser" logger
"""

import time
import logging
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger("urlpresser")


class LoggingMiddleware(BaseHTTPMiddleware):
    """
    Middleware for logging HTTP requests and responses.

    It wraps the request/response cycle to add logging without
    modifying endpoint code.
    """

    async def dispatch(self, request: Request, call_next):
        """
        Process request and log details.

        Args:
            request: The incoming HTTP request
            call_next: The next middleware/endpoint in the chain

        Returns:
            Response object
        """
        client_ip = self._get_client_ip(request)
        start_time = time.perf_counter()

        response = await call_next(request)

        process_time = time.perf_counter() - start_time
        uri = request.url.path
        if request.url.query:
            uri = f"{uri}?{request.url.query}"

        # Format: request METHOD URI LATENCY_MS CLIENT_IP
        logger.info(
            f"request {request.method} {uri} "
            f"latency={process_time*1000:.2f}ms IP:{client_ip}"
        )
        # Format: response STATUS BYTES_OUT
        logger.info(
            f"response status={response.status_code} "
            f"bytes_out={response.headers.get('content-length', '0')}"
        )

        response.headers["X-Process-Time"] = str(process_time)

        return response

    def _get_client_ip(self, request: Request) -> str:
        """
        Extract client IP address from request.

        Handles proxies and load balancers by checking X-Forwarded-For header.
        """
        forwarded_for = request.headers.get("X-Forwarded-For")
        if forwarded_for:
            # X-Forwarded-For can contain multiple IPs, take the first one
            return forwarded_for.split(",")[0].strip()

        return request.client.host if request.client else "unknown"


def add_logging_middleware(app):
    """
    Add logging middleware to FastAPI app.

    Args:
        app: FastAPI application instance
    """
    app.add_middleware(LoggingMiddleware)
