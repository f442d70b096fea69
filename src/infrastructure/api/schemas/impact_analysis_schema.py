"""Pydantic schemas for alert impact analysis API endpoints."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

RESERVED_ALERT_NAMES = frozenset(
    {"default", "system", "admin", "root", "null", "undefined"}
)
ALERT_NAME_PATTERN = r"^[a-zA-Z0-9][a-zA-Z0-9\-_\s]*$"


def _is_number(value: str) -> bool:
    try:
        float(value)
    except ValueError:
        return False
    return True


class ImpactAnalysisApiRequest(BaseModel):
    """Request to analyze the impact of changing an alert."""

    alert_name: str = Field(
        ...,
        min_length=3,
        max_length=255,
        pattern=ALERT_NAME_PATTERN,
        description=(
            "Alert name: letters, numbers, hyphens, underscores and spaces, "
            "starting with a letter or number"
        ),
    )
    user_id: str = Field(..., min_length=1, description="Requesting user")
    account_id: str = Field(..., min_length=1, description="Account owning the alert")
    timestamp: datetime = Field(..., description="Client timestamp (ISO 8601)")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "alert_name": "Production Database CPU Alert",
                "user_id": "user-123",
                "account_id": "account-456",
                "timestamp": "2025-08-12T10:00:00Z",
            }
        }
    )

    @field_validator("alert_name")
    @classmethod
    def alert_name_not_reserved(cls, value: str) -> str:
        if value.lower() in RESERVED_ALERT_NAMES:
            raise ValueError("This name is reserved. Please choose a different name")
        return value

    @field_validator("timestamp", mode="before")
    @classmethod
    def timestamp_is_iso_string(cls, value):
        if isinstance(value, datetime):
            return value
        if not isinstance(value, str) or _is_number(value):
            raise ValueError("timestamp must be an ISO 8601 date string")
        return value


class ImpactAnalysisApiModel(BaseModel):
    """Engine output for one alert."""

    customers_affected: int = Field(..., ge=0, description="Expected affected customers")
    risk_level: str = Field(..., description="LOW, MEDIUM, HIGH or CRITICAL")
    critical_services: list[str] = Field(
        default_factory=list, description="Affected critical services"
    )
    dependent_alerts: list[str] = Field(
        default_factory=list, description="Alerts likely triggered by the same root cause"
    )
    estimated_downtime: str = Field(default="", description="Human-readable downtime")
    confidence_score: float = Field(
        default=0.0, ge=0.0, le=1.0, description="Reliability of the estimate"
    )
    recommendations: list[str] = Field(
        default_factory=list, description="Action items, most urgent first"
    )


class ImpactAnalysisApiResponse(BaseModel):
    """Response from impact analysis."""

    analysis_id: str = Field(..., description="UUID of this analysis")
    alert_name: str = Field(..., description="Analyzed alert")
    alert_type: str = Field(..., description="Inferred alert type")
    affected_services: list[str] = Field(
        default_factory=list, description="Inferred affected services"
    )
    alert_exists: bool = Field(
        ..., description="Whether the alert already exists in the account"
    )
    impact_analysis: ImpactAnalysisApiModel = Field(..., description="Engine output")
    analyzed_at: datetime = Field(..., description="When the analysis ran")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "analysis_id": "550e8400-e29b-41d4-a716-446655440000",
                "alert_name": "Production Database CPU Alert",
                "alert_type": "database",
                "affected_services": [
                    "payment-processing",
                    "user-authentication",
                    "order-management",
                ],
                "alert_exists": True,
                "impact_analysis": {
                    "customers_affected": 31500,
                    "risk_level": "CRITICAL",
                    "critical_services": [
                        "payment-processing",
                        "user-authentication",
                        "order-management",
                    ],
                    "dependent_alerts": ["Billing Service Alert", "Cascade Failure Alert"],
                    "estimated_downtime": "14-16 minutes",
                    "confidence_score": 0.9,
                    "recommendations": ["DO NOT PROCEED - Schedule maintenance window"],
                },
                "analyzed_at": "2025-08-12T10:00:01Z",
            }
        }
    )


class RecentAnalysesApiResponse(BaseModel):
    """Recent impact analyses of the caller's account."""

    account_id: str = Field(..., description="Account the analyses belong to")
    analyses: list[ImpactAnalysisApiResponse] = Field(
        default_factory=list, description="Analyses, newest first"
    )
