"""API middleware components.

This module contains middleware for authentication, rate limiting,
auditing, error handling, and other cross-cutting concerns.
"""

from .audit import AuditMiddleware
from .auth import AuthenticatedClient, authorize_account, verify_api_key
from .error_handler import ErrorHandlerMiddleware
from .rate_limit import RateLimitMiddleware

__all__ = [
    "verify_api_key",
    "authorize_account",
    "AuthenticatedClient",
    "AuditMiddleware",
    "ErrorHandlerMiddleware",
    "RateLimitMiddleware",
]
