"""Global error handling middleware.

Converts all exceptions to RFC 7807 Problem Details format for consistent error responses.
Includes correlation IDs for request tracing.
"""

import logging
import uuid

from fastapi import Request, status
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException
from starlette.middleware.base import BaseHTTPMiddleware

from src.application.use_cases.run_impact_analysis import AnalysisTimeoutError
from src.domain.repositories.historical_data_provider import (
    HistoricalDataUnavailableError,
)
from src.infrastructure.api.schemas.error_schema import ProblemDetails, status_title

logger = logging.getLogger(__name__)

HISTORICAL_DATA_RETRY_AFTER_SECONDS = 30


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """Middleware to handle all exceptions and return RFC 7807 Problem Details."""

    async def dispatch(self, request: Request, call_next):
        """Catch all exceptions and convert to Problem Details format.

        Args:
            request: Incoming HTTP request
            call_next: Next middleware/handler in chain

        Returns:
            Response with Problem Details format on error
        """
        correlation_id = str(uuid.uuid4())
        request.state.correlation_id = correlation_id

        try:
            response = await call_next(request)
            response.headers["X-Correlation-ID"] = correlation_id
            return response

        except Exception as exc:
            logger.error(
                f"Request failed with correlation_id={correlation_id}",
                exc_info=exc,
                extra={
                    "correlation_id": correlation_id,
                    "path": request.url.path,
                    "method": request.method,
                },
            )

            problem = exception_to_problem(exc, request.url.path, correlation_id)
            return problem_response(problem)


def exception_to_problem(
    exc: Exception, instance: str, correlation_id: str | None
) -> ProblemDetails:
    """Convert an exception to RFC 7807 Problem Details.

    Args:
        exc: Exception that was raised
        instance: Request path that caused the exception
        correlation_id: Correlation ID for tracing

    Returns:
        ProblemDetails object
    """
    if isinstance(exc, HTTPException):
        return ProblemDetails(
            type="about:blank",
            title=status_title(exc.status_code),
            status=exc.status_code,
            detail=exc.detail if isinstance(exc.detail, str) else str(exc.detail),
            instance=instance,
            correlation_id=correlation_id,
        )

    if isinstance(exc, AnalysisTimeoutError):
        return ProblemDetails(
            type="https://httpstatuses.com/408",
            title=status_title(status.HTTP_408_REQUEST_TIMEOUT),
            status=status.HTTP_408_REQUEST_TIMEOUT,
            detail=str(exc),
            instance=instance,
            correlation_id=correlation_id,
        )

    if isinstance(exc, HistoricalDataUnavailableError):
        return ProblemDetails(
            type="https://httpstatuses.com/503",
            title=status_title(status.HTTP_503_SERVICE_UNAVAILABLE),
            status=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Historical data is temporarily unavailable",
            instance=instance,
            correlation_id=correlation_id,
            retry_after_seconds=HISTORICAL_DATA_RETRY_AFTER_SECONDS,
        )

    if isinstance(exc, ValueError):
        return ProblemDetails(
            type="https://httpstatuses.com/400",
            title=status_title(status.HTTP_400_BAD_REQUEST),
            status=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
            instance=instance,
            correlation_id=correlation_id,
        )

    return ProblemDetails(
        type="https://httpstatuses.com/500",
        title=status_title(status.HTTP_500_INTERNAL_SERVER_ERROR),
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="Unable to analyze customer impact at this time",
        instance=instance,
        correlation_id=correlation_id,
    )


def problem_response(
    problem: ProblemDetails, headers: dict[str, str] | None = None
) -> JSONResponse:
    """Create a JSONResponse from ProblemDetails."""
    response_headers = {
        "Content-Type": "application/problem+json",
        "X-Correlation-ID": problem.correlation_id or "",
    }
    if problem.retry_after_seconds is not None:
        response_headers["Retry-After"] = str(problem.retry_after_seconds)
    if headers:
        response_headers.update(headers)

    return JSONResponse(
        status_code=problem.status,
        content=problem.model_dump(exclude_none=True),
        headers=response_headers,
    )
