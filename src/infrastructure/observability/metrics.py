"""Prometheus metrics instrumentation.

Defines and exports Prometheus metrics for monitoring the application.
Alert names never appear in labels to keep cardinality bounded.
"""

from prometheus_client import CONTENT_TYPE_LATEST, Counter, Histogram, generate_latest

# HTTP Request Metrics
http_requests_total = Counter(
    name="alert_impact_http_requests_total",
    documentation="Total number of HTTP requests",
    labelnames=["method", "endpoint", "status_code"],
)

http_request_duration_seconds = Histogram(
    name="alert_impact_http_request_duration_seconds",
    documentation="HTTP request duration in seconds",
    labelnames=["method", "endpoint", "status_code"],
    buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0),
)

# Impact Analysis Metrics
impact_analyses_total = Counter(
    name="alert_impact_analyses_total",
    documentation="Total number of completed impact analyses",
    labelnames=["risk_level"],
)

impact_analysis_duration_seconds = Histogram(
    name="alert_impact_analysis_duration_seconds",
    documentation="Impact analysis duration in seconds, including historical data lookup",
    buckets=(
        0.001,  # 1ms
        0.005,  # 5ms
        0.01,  # 10ms
        0.05,  # 50ms
        0.1,  # 100ms
        0.5,  # 500ms
        1.0,  # 1s
        5.0,  # 5s
        10.0,  # 10s
    ),
)

historical_data_failures_total = Counter(
    name="alert_impact_historical_data_failures_total",
    documentation="Historical data lookups that failed after all retries",
    labelnames=["alert_type"],
)

# Rate Limiting Metrics
rate_limit_exceeded_total = Counter(
    name="alert_impact_rate_limit_exceeded_total",
    documentation="Total number of requests rejected due to rate limiting",
    labelnames=["client_id", "endpoint"],
)


def get_metrics_content() -> tuple[bytes, str]:
    """Generate Prometheus metrics in exposition format.

    Returns:
        Tuple of (metrics_bytes, content_type)
    """
    return generate_latest(), CONTENT_TYPE_LATEST


def record_http_request(
    method: str,
    endpoint: str,
    status_code: int,
    duration: float,
) -> None:
    """Record HTTP request metrics.

    Args:
        method: HTTP method (GET, POST, etc.)
        endpoint: Route template of the endpoint
        status_code: HTTP status code
        duration: Request duration in seconds
    """
    labels = {"method": method, "endpoint": endpoint, "status_code": str(status_code)}
    http_requests_total.labels(**labels).inc()
    http_request_duration_seconds.labels(**labels).observe(duration)


def record_impact_analysis(risk_level: str, duration: float) -> None:
    """Record a completed impact analysis.

    Args:
        risk_level: Risk tier of the analysis (LOW, MEDIUM, HIGH, CRITICAL)
        duration: Analysis duration in seconds
    """
    impact_analyses_total.labels(risk_level=risk_level).inc()
    impact_analysis_duration_seconds.observe(duration)


def record_historical_data_failure(alert_type: str) -> None:
    """Record a historical data lookup that exhausted its retries."""
    historical_data_failures_total.labels(alert_type=alert_type).inc()


def record_rate_limit_exceeded(client_id: str, endpoint: str) -> None:
    """Record rate limit exceeded event.

    Args:
        client_id: Client identifier (API key name or IP)
        endpoint: Rate limit scope that was exceeded
    """
    rate_limit_exceeded_total.labels(client_id=client_id, endpoint=endpoint).inc()
