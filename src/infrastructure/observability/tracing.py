"""OpenTelemetry distributed tracing setup.

Configures the OpenTelemetry SDK with an OTLP exporter and instruments the
FastAPI application. Spans around impact analyses are created manually via
get_tracer().
"""

import logging

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from opentelemetry.sdk.trace.sampling import TraceIdRatioBased

from src.infrastructure.config import get_settings

logger = logging.getLogger(__name__)

SERVICE_VERSION = "1.0.0"


def setup_tracing() -> TracerProvider:
    """Setup OpenTelemetry tracing with OTLP exporter.

    Returns:
        The TracerProvider installed as the global provider

    Note:
        FastAPI must be instrumented separately after app creation
        using instrument_fastapi_app()
    """
    settings = get_settings()
    otel_config = settings.observability

    resource = Resource.create(
        {
            "service.name": otel_config.service_name,
            "service.version": SERVICE_VERSION,
            "deployment.environment": settings.environment,
        }
    )
    provider = TracerProvider(
        resource=resource,
        sampler=TraceIdRatioBased(otel_config.trace_sample_rate),
    )

    try:
        exporter = OTLPSpanExporter(
            endpoint=otel_config.exporter_otlp_endpoint,
            insecure=settings.environment != "production",
        )
        provider.add_span_processor(BatchSpanProcessor(exporter))
        logger.info(
            "OpenTelemetry tracing configured",
            extra={
                "service_name": otel_config.service_name,
                "otlp_endpoint": otel_config.exporter_otlp_endpoint,
                "sample_rate": otel_config.trace_sample_rate,
            },
        )
    except Exception as e:
        logger.warning(
            "Failed to configure OTLP exporter, spans will not be exported",
            extra={"error": str(e)},
        )

    trace.set_tracer_provider(provider)
    return provider


def instrument_fastapi_app(app) -> None:
    """Instrument FastAPI application with OpenTelemetry.

    Args:
        app: FastAPI application instance
    """
    try:
        FastAPIInstrumentor.instrument_app(app)
        logger.info("FastAPI auto-instrumentation enabled")
    except Exception as e:
        logger.warning(
            "Failed to instrument FastAPI app",
            extra={"error": str(e)},
        )


def get_tracer(name: str) -> trace.Tracer:
    """Get OpenTelemetry tracer for manual instrumentation.

    Without setup_tracing() the global no-op provider is used, so spans are
    cheap and never exported.
    """
    return trace.get_tracer(name)
