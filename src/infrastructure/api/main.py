"""
FastAPI application entry point.

Implements the API layer of the Infrastructure following Clean Architecture.
This module sets up the FastAPI app, registers routes, middleware, and exception handlers.
"""

import logging
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException

from src.application.use_cases.run_impact_analysis import AnalysisTimeoutError
from src.domain.repositories.historical_data_provider import (
    HistoricalDataUnavailableError,
)
from src.infrastructure.api.middleware.error_handler import (
    exception_to_problem,
    problem_response,
)
from src.infrastructure.api.schemas.error_schema import ProblemDetails
from src.infrastructure.config import get_settings
from src.infrastructure.observability import (
    configure_logging,
    instrument_fastapi_app,
    setup_tracing,
)
from src.infrastructure.stores import api_key_store

logger = logging.getLogger(__name__)


def _register_bootstrap_api_key() -> None:
    """Register the API key configured through AUTH_BOOTSTRAP_API_KEY, if any."""
    auth = get_settings().auth
    if not auth.bootstrap_api_key:
        return
    api_key_store.register_api_key(
        raw_key=auth.bootstrap_api_key,
        name=auth.bootstrap_key_name,
        user_id=auth.bootstrap_user_id,
        account_id=auth.bootstrap_account_id,
    )
    logger.info(
        "Bootstrap API key registered",
        extra={"client_id": auth.bootstrap_key_name, "account_id": auth.bootstrap_account_id},
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for startup and shutdown events.

    Startup:
    - Configure observability (logging, tracing)
    - Instrument FastAPI with OpenTelemetry
    - Register the bootstrap API key
    """
    configure_logging()
    setup_tracing()
    instrument_fastapi_app(app)
    _register_bootstrap_api_key()

    yield


def _correlation_id(request: Request) -> str:
    return getattr(request.state, "correlation_id", None) or str(uuid.uuid4())


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        FastAPI: Configured FastAPI application instance
    """
    app = FastAPI(
        title="Alert Impact Analysis API",
        description=(
            "Estimates the customer-facing blast radius of changing an alerting "
            "rule before it is deployed: risk tier, affected customers, critical "
            "services, dependent alerts and recommendations."
        ),
        version="1.0.0",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    # Custom middleware (last added = outermost)
    from .middleware.audit import AuditMiddleware
    from .middleware.error_handler import ErrorHandlerMiddleware
    from .middleware.logging_middleware import LoggingMiddleware
    from .middleware.metrics_middleware import MetricsMiddleware
    from .middleware.rate_limit import RateLimitMiddleware

    app.add_middleware(AuditMiddleware)  # Innermost: sees final route status
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(LoggingMiddleware)
    app.add_middleware(ErrorHandlerMiddleware)  # Assigns correlation IDs, catches all errors
    app.add_middleware(RateLimitMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,  # Cannot use credentials with wildcard origins
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Register routes
    from .routes import health, impact_analysis

    app.include_router(health.router, prefix="/api/v1")
    app.include_router(
        impact_analysis.router,
        prefix="/api/v1/alerts",
        tags=["Impact Analysis"],
    )

    # Exception handlers rendering RFC 7807 Problem Details
    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        problem = exception_to_problem(exc, request.url.path, _correlation_id(request))
        return problem_response(problem, headers=getattr(exc, "headers", None))

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        details = "; ".join(
            f"{'.'.join(str(p) for p in error['loc'] if p != 'body')}: {error['msg']}"
            for error in exc.errors()
        )
        problem = ProblemDetails(
            type="about:blank",
            title="Unprocessable Entity",
            status=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=f"Validation failed: {details}",
            instance=request.url.path,
            correlation_id=_correlation_id(request),
        )
        return problem_response(problem)

    @app.exception_handler(AnalysisTimeoutError)
    async def timeout_exception_handler(request: Request, exc: AnalysisTimeoutError):
        problem = exception_to_problem(exc, request.url.path, _correlation_id(request))
        return problem_response(problem)

    @app.exception_handler(HistoricalDataUnavailableError)
    async def historical_data_exception_handler(
        request: Request, exc: HistoricalDataUnavailableError
    ):
        problem = exception_to_problem(exc, request.url.path, _correlation_id(request))
        return problem_response(problem)

    @app.get("/", status_code=status.HTTP_200_OK)
    async def root():
        """Root endpoint - API information."""
        return {
            "name": "Alert Impact Analysis API",
            "version": "1.0.0",
            "status": "operational",
            "docs": "/docs",
        }

    return app


# Create app instance
app = create_app()
