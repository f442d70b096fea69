"""
RFC 7807 Problem Details error response schemas.

Implements standard error response format for the API.
"""

from pydantic import BaseModel, ConfigDict, Field


class ProblemDetails(BaseModel):
    """
    RFC 7807 Problem Details for HTTP APIs.

    Standard error response format that provides machine-readable details
    about errors in a consistent structure.
    """

    type: str = Field(
        ...,
        description="URI reference that identifies the problem type",
    )
    title: str = Field(..., description="Short, human-readable summary of the problem")
    status: int = Field(..., description="HTTP status code", ge=100, le=599)
    detail: str = Field(
        ..., description="Human-readable explanation specific to this occurrence"
    )
    instance: str = Field(
        ..., description="URI reference that identifies the specific occurrence"
    )
    correlation_id: str | None = Field(
        None, description="Correlation ID for request tracing"
    )
    retry_after_seconds: int | None = Field(
        None,
        description="Seconds to wait before retrying (for 429 and 503 responses)",
        ge=0,
    )

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "type": "about:blank",
                    "title": "Unprocessable Entity",
                    "status": 422,
                    "detail": "alert_name: String should have at least 3 characters",
                    "instance": "/api/v1/alerts/impact-analysis",
                },
                {
                    "type": "https://httpstatuses.com/408",
                    "title": "Request Timeout",
                    "status": 408,
                    "detail": "Impact analysis took longer than 10 seconds",
                    "instance": "/api/v1/alerts/impact-analysis",
                },
                {
                    "type": "https://httpstatuses.com/429",
                    "title": "Too Many Requests",
                    "status": 429,
                    "detail": "Rate limit exceeded. Try again in 45 seconds.",
                    "instance": "/api/v1/alerts/impact-analysis",
                    "retry_after_seconds": 45,
                },
            ]
        }
    )


STATUS_TITLES: dict[int, str] = {
    400: "Bad Request",
    401: "Unauthorized",
    403: "Forbidden",
    404: "Not Found",
    408: "Request Timeout",
    409: "Conflict",
    422: "Unprocessable Entity",
    429: "Too Many Requests",
    500: "Internal Server Error",
    503: "Service Unavailable",
}


def status_title(status_code: int) -> str:
    """Human-readable title for an HTTP status code."""
    return STATUS_TITLES.get(status_code, "Error")
