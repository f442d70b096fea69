"""Rate limiting middleware using token bucket algorithm.

Implements per-client rate limiting with a tighter budget for impact analysis
than for the rest of the API. Uses in-memory storage, so limits apply per
worker process.
"""

import time
from collections import defaultdict
from dataclasses import dataclass, field

from fastapi import Request, status
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse

from src.infrastructure.config import get_settings
from src.infrastructure.observability.metrics import record_rate_limit_exceeded


@dataclass
class TokenBucket:
    """Token bucket for rate limiting.

    Starts full and refills continuously at refill_rate tokens per second.
    """

    capacity: int
    refill_rate: float  # tokens per second
    tokens: float = field(init=False)
    last_refill: float = field(init=False)

    def __post_init__(self) -> None:
        """Initialize bucket with full capacity."""
        self.tokens = float(self.capacity)
        self.last_refill = time.monotonic()

    def consume(self, tokens: int = 1) -> bool:
        """Attempt to consume tokens from bucket.

        Returns:
            True if tokens were consumed, False if insufficient tokens
        """
        self._refill()

        if self.tokens >= tokens:
            self.tokens -= tokens
            return True
        return False

    def _refill(self) -> None:
        now = time.monotonic()
        elapsed = now - self.last_refill
        self.tokens = min(self.capacity, self.tokens + elapsed * self.refill_rate)
        self.last_refill = now

    def time_until_available(self, tokens: int = 1) -> float:
        """Seconds until the requested tokens are available (0 if already available)."""
        self._refill()
        if self.tokens >= tokens:
            return 0.0
        return (tokens - self.tokens) / self.refill_rate


IMPACT_ANALYSIS_PATH = "/api/v1/alerts/impact-analysis"

# Exclude probes, metrics and docs from rate limiting
EXCLUDED_PATHS = {
    "/api/v1/health",
    "/api/v1/health/ready",
    "/api/v1/metrics",
    "/docs",
    "/redoc",
    "/openapi.json",
}


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Middleware for rate limiting API requests.

    Uses token bucket algorithm with per-client tracking. Clients are
    identified by IP address since authentication runs after this middleware.
    """

    def __init__(self, app):
        """Initialize rate limiter with in-memory storage."""
        super().__init__(app)
        settings = get_settings().rate_limit
        # scope -> (requests per window, window in seconds)
        self.limits: dict[str, tuple[int, int]] = {
            "impact_analysis": (
                settings.impact_analysis_requests,
                settings.impact_analysis_window_seconds,
            ),
            "api": (settings.api_requests, settings.api_window_seconds),
        }
        # client_id -> scope -> TokenBucket
        self.buckets: dict[str, dict[str, TokenBucket]] = defaultdict(dict)

    async def dispatch(self, request: Request, call_next):
        """Apply rate limiting to request.

        Every scope that covers the request is charged in order, and the first
        exhausted one rejects it. Impact analysis also counts against the
        general API budget.

        Returns:
            Response or 429 if rate limit exceeded
        """
        scopes = self._get_scopes(request)
        if not scopes:
            return await call_next(request)

        client_id = self._get_client_id(request)

        for scope in scopes:
            requests_per_window, window_seconds = self.limits[scope]
            bucket = self._get_bucket(client_id, scope)
            if not bucket.consume():
                retry_after = int(bucket.time_until_available()) + 1
                record_rate_limit_exceeded(client_id=client_id, endpoint=scope)
                return JSONResponse(
                    status_code=status.HTTP_429_TOO_MANY_REQUESTS,
                    content={
                        "type": "https://httpstatuses.com/429",
                        "title": "Too Many Requests",
                        "status": 429,
                        "detail": f"Rate limit exceeded. Try again in {retry_after} seconds.",
                        "instance": request.url.path,
                        "retry_after_seconds": retry_after,
                    },
                    headers={
                        "Content-Type": "application/problem+json",
                        "X-RateLimit-Limit": str(requests_per_window),
                        "X-RateLimit-Remaining": "0",
                        "X-RateLimit-Reset": str(int(time.time()) + retry_after),
                        "Retry-After": str(retry_after),
                    },
                )

        response = await call_next(request)

        # Headers describe the narrowest scope, which is checked last
        response.headers["X-RateLimit-Limit"] = str(requests_per_window)
        response.headers["X-RateLimit-Remaining"] = str(int(bucket.tokens))
        response.headers["X-RateLimit-Reset"] = str(int(time.time() + window_seconds))

        return response

    def _get_bucket(self, client_id: str, scope: str) -> TokenBucket:
        bucket = self.buckets[client_id].get(scope)
        if bucket is None:
            requests_per_window, window_seconds = self.limits[scope]
            bucket = TokenBucket(
                capacity=requests_per_window,
                refill_rate=requests_per_window / window_seconds,
            )
            self.buckets[client_id][scope] = bucket
        return bucket

    def _get_scopes(self, request: Request) -> list[str]:
        """Rate limit scopes for a request, broadest first (empty if not limited)."""
        path = request.url.path
        if path in EXCLUDED_PATHS or not path.startswith("/api/"):
            return []
        if request.method == "POST" and path == IMPACT_ANALYSIS_PATH:
            return ["api", "impact_analysis"]
        return ["api"]

    def _get_client_id(self, request: Request) -> str:
        forwarded_for = request.headers.get("X-Forwarded-For")
        if forwarded_for:
            return forwarded_for.split(",")[0].strip()
        if request.client:
            return request.client.host
        return "anonymous"
