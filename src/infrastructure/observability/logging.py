"""Structured logging configuration with OpenTelemetry integration.

Configures structlog on top of the standard library so that both structlog
loggers and plain ``logging.getLogger`` loggers share one output format.
Trace and span ids from the active OpenTelemetry span are attached to every
event, and credentials never reach the log stream.
"""

import logging
import sys
from typing import Any

import structlog
from opentelemetry import trace

from src.infrastructure.config import get_settings

SENSITIVE_KEYS = frozenset(
    {
        "api_key",
        "apikey",
        "token",
        "access_token",
        "password",
        "secret",
        "authorization",
        "auth",
        "x-api-key",
        "key_hash",
    }
)
REDACTED = "***REDACTED***"


def configure_logging(
    log_level: str | None = None,
    json_format: bool | None = None,
) -> None:
    """Configure structured logging with structlog.

    Args:
        log_level: Override for the configured log level
        json_format: Override for the configured JSON/console choice
    """
    settings = get_settings()
    otel_config = settings.observability
    level_name = (log_level or otel_config.log_level).upper()
    use_json = otel_config.log_json_format if json_format is None else json_format

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, level_name, logging.INFO),
    )

    processors: list = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        _add_service_context,
        _add_trace_context,
        _filter_sensitive_data,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
    ]

    if use_json:
        processors.append(structlog.processors.format_exc_info)
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def _add_service_context(
    logger: logging.Logger,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Tag events with the service name and deployment environment."""
    settings = get_settings()
    event_dict.setdefault("service", settings.observability.service_name)
    event_dict.setdefault("environment", settings.environment)
    return event_dict


def _add_trace_context(
    logger: logging.Logger,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Attach trace_id and span_id of the current span, if one is recording."""
    span = trace.get_current_span()
    if span:
        span_context = span.get_span_context()
        if span_context.is_valid:
            event_dict["trace_id"] = format(span_context.trace_id, "032x")
            event_dict["span_id"] = format(span_context.span_id, "016x")

    return event_dict


def _mask_value(key: Any, value: Any) -> Any:
    if isinstance(value, dict):
        return {k: _mask_value(k, v) for k, v in value.items()}
    if isinstance(key, str) and key.lower() in SENSITIVE_KEYS:
        if isinstance(value, str) and len(value) > 4:
            # Keep a 4 character prefix so keys stay distinguishable
            return f"{value[:4]}{'*' * (len(value) - 4)}"
        return REDACTED
    return value


def _filter_sensitive_data(
    logger: logging.Logger,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Mask credentials anywhere in the event, including nested dicts.

    Args:
        logger: Logger instance
        method_name: Log method name (info, error, etc.)
        event_dict: Log event dictionary

    Returns:
        Event dictionary with sensitive values masked
    """
    return {k: _mask_value(k, v) for k, v in event_dict.items()}


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get structured logger instance.

    Example:
        >>> logger = get_logger(__name__)
        >>> logger.info("Impact analysis completed", risk_level="HIGH")
    """
    return structlog.get_logger(name)
