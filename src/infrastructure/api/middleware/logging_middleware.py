"""Logging middleware for structured request/response logging.

Logs every HTTP request with its correlation ID, duration and status code.
Never logs request bodies or the Authorization header.
"""

import time
from typing import Callable

import structlog
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from src.infrastructure.observability.logging import get_logger

logger = get_logger(__name__)


class LoggingMiddleware(BaseHTTPMiddleware):
    """Middleware to log HTTP requests and responses.

    The correlation ID assigned by the error handler is bound to the
    structlog context so that every log line emitted while handling the
    request carries it.
    """

    async def dispatch(
        self, request: Request, call_next: Callable
    ) -> Response:
        start_time = time.perf_counter()
        method = request.method
        path = request.url.path
        client_ip = self._get_client_ip(request)

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            correlation_id=getattr(request.state, "correlation_id", None),
        )

        logger.info(
            "HTTP request received",
            method=method,
            path=path,
            client_ip=client_ip,
        )

        try:
            response = await call_next(request)
        except Exception as e:
            logger.error(
                "HTTP request failed",
                method=method,
                path=path,
                duration_ms=round((time.perf_counter() - start_time) * 1000, 2),
                client_ip=client_ip,
                error=str(e),
                exc_info=True,
            )
            structlog.contextvars.clear_contextvars()
            raise

        logger.info(
            "HTTP request completed",
            method=method,
            path=path,
            status_code=response.status_code,
            duration_ms=round((time.perf_counter() - start_time) * 1000, 2),
            client_ip=client_ip,
            client_id=getattr(request.state, "client_id", None),
        )
        structlog.contextvars.clear_contextvars()
        return response

    def _get_client_ip(self, request: Request) -> str:
        """Client IP address, preferring the first X-Forwarded-For hop."""
        forwarded_for = request.headers.get("X-Forwarded-For")
        if forwarded_for:
            return forwarded_for.split(",")[0].strip()
        if request.client:
            return request.client.host
        return "unknown"
