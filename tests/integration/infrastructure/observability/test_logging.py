"""Integration tests for structured logging.

Tests that logs are formatted correctly and sensitive data is filtered.
"""

import json
import logging

from opentelemetry.sdk.trace import TracerProvider

from src.infrastructure.observability.logging import (
    REDACTED,
    _add_trace_context,
    _filter_sensitive_data,
    configure_logging,
    get_logger,
)


class TestStructuredLogging:
    """Tests for structured logging configuration."""

    def test_logger_outputs_json(self, caplog):
        configure_logging(log_level="INFO", json_format=True)
        logger = get_logger("test.json")

        with caplog.at_level(logging.INFO):
            logger.info("Impact analysis completed", risk_level="HIGH")

        event = json.loads(caplog.records[-1].getMessage())
        assert event["event"] == "Impact analysis completed"
        assert event["risk_level"] == "HIGH"
        assert event["service"] == "alert-impact-engine"
        assert event["level"] == "info"

    def test_sensitive_data_filtering(self):
        event_dict = {
            "event": "Key registered",
            "user_id": "123",
            "api_key": "secret_key_12345",
            "password": "pw",
        }

        filtered = _filter_sensitive_data(None, "info", event_dict)

        assert filtered["api_key"] == "secr" + "*" * 12
        assert filtered["password"] == REDACTED
        assert filtered["user_id"] == "123"
        assert filtered["event"] == "Key registered"

    def test_nested_sensitive_data_filtering(self):
        event_dict = {
            "event": "Request",
            "headers": {"Authorization": "Bearer abcdef", "Accept": "json"},
        }

        filtered = _filter_sensitive_data(None, "info", event_dict)

        assert filtered["headers"]["Authorization"].startswith("Bear")
        assert "abcdef" not in filtered["headers"]["Authorization"]
        assert filtered["headers"]["Accept"] == "json"

    def test_trace_context_added_inside_span(self):
        tracer = TracerProvider().get_tracer(__name__)

        with tracer.start_as_current_span("impact_analysis.run") as span:
            event_dict = _add_trace_context(None, "info", {"event": "x"})
            expected_trace_id = format(span.get_span_context().trace_id, "032x")

        assert event_dict["trace_id"] == expected_trace_id
        assert len(event_dict["span_id"]) == 16

    def test_no_trace_context_outside_span(self):
        event_dict = _add_trace_context(None, "info", {"event": "x"})
        assert "trace_id" not in event_dict

    def test_stdlib_loggers_still_work(self, caplog):
        configure_logging(log_level="DEBUG", json_format=False)

        with caplog.at_level(logging.WARNING):
            logging.getLogger("src.test").warning("Historical data slow")

        assert "Historical data slow" in caplog.text
