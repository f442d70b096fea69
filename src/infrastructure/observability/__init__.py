"""Observability infrastructure module.

Provides OpenTelemetry tracing, structured logging, and Prometheus metrics.
"""

from src.infrastructure.observability.logging import configure_logging, get_logger
from src.infrastructure.observability.metrics import (
    get_metrics_content,
    record_historical_data_failure,
    record_http_request,
    record_impact_analysis,
    record_rate_limit_exceeded,
)
from src.infrastructure.observability.tracing import (
    get_tracer,
    instrument_fastapi_app,
    setup_tracing,
)

__all__ = [
    # Logging
    "configure_logging",
    "get_logger",
    # Tracing
    "setup_tracing",
    "instrument_fastapi_app",
    "get_tracer",
    # Metrics
    "get_metrics_content",
    "record_http_request",
    "record_impact_analysis",
    "record_historical_data_failure",
    "record_rate_limit_exceeded",
]
