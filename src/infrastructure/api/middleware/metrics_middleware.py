"""Metrics middleware for recording HTTP request metrics.

Records Prometheus metrics for all HTTP requests including duration,
status codes, and endpoints.
"""

import time
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from src.infrastructure.observability.metrics import record_http_request

UNMATCHED_ENDPOINT = "unmatched"


class MetricsMiddleware(BaseHTTPMiddleware):
    """Middleware to record HTTP request metrics.

    Labels: method, endpoint, status_code. The endpoint label is the route
    template, so unknown paths collapse into a single "unmatched" series.
    """

    async def dispatch(
        self, request: Request, call_next: Callable
    ) -> Response:
        start_time = time.perf_counter()
        response = await call_next(request)
        duration = time.perf_counter() - start_time

        record_http_request(
            method=request.method,
            endpoint=self._route_template(request),
            status_code=response.status_code,
            duration=duration,
        )
        return response

    def _route_template(self, request: Request) -> str:
        """Full route template of the matched route, including router prefixes.

        Newer routers record the included prefix in root_path and keep only
        the sub-path on the route, so the two are joined.
        """
        route = request.scope.get("route")
        template = getattr(route, "path", None)
        if not template:
            return UNMATCHED_ENDPOINT
        prefix = request.scope.get("root_path", "")
        if prefix and not template.startswith(prefix):
            template = prefix.rstrip("/") + template
        return template
