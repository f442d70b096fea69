"""Audit logging middleware.

Records an append-only audit entry for every audited API action, including
the acting user, the affected resource, the response status and duration.
"""

import time
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from src.infrastructure.observability.logging import get_logger
from src.infrastructure.stores.in_memory_alert_store import (
    AuditEntry,
    append_audit_entry,
)

logger = get_logger(__name__)

# (method, path) -> (action, resource_type)
AUDITED_ROUTES: dict[tuple[str, str], tuple[str, str]] = {
    ("POST", "/api/v1/alerts/impact-analysis"): ("IMPACT_ANALYSIS_REQUEST", "alert"),
}


class AuditMiddleware(BaseHTTPMiddleware):
    """Middleware writing audit entries for audited routes.

    Route handlers name the affected resource by setting
    ``request.state.audit_resource_id``; the acting user comes from
    ``request.state.user_id`` set during authentication.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        audited = AUDITED_ROUTES.get((request.method, request.url.path))
        if audited is None:
            return await call_next(request)

        action, resource_type = audited
        start_time = time.perf_counter()

        response = await call_next(request)

        entry = AuditEntry(
            action=action,
            resource_type=resource_type,
            resource_id=getattr(request.state, "audit_resource_id", None),
            user_id=getattr(request.state, "user_id", None) or "anonymous",
            status_code=response.status_code,
            duration_ms=round((time.perf_counter() - start_time) * 1000, 2),
            details={
                "method": request.method,
                "path": request.url.path,
                "client_id": getattr(request.state, "client_id", None),
                "user_agent": request.headers.get("User-Agent"),
            },
        )
        append_audit_entry(entry)

        logger.info(
            "Audit entry recorded",
            audit_id=str(entry.id),
            action=entry.action,
            resource_id=entry.resource_id,
            user_id=entry.user_id,
            status_code=entry.status_code,
            duration_ms=entry.duration_ms,
        )

        return response
