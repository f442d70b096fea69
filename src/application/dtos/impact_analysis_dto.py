"""DTOs for alert impact analysis."""

from dataclasses import dataclass, field
from datetime import datetime


@dataclass
class ImpactAnalysisRequest:
    """Request to analyze the impact of changing an alert."""

    alert_name: str
    user_id: str
    account_id: str
    requested_at: datetime | None = None


@dataclass
class ImpactAnalysisDTO:
    """Engine output for one alert."""

    customers_affected: int
    risk_level: str  # "LOW" | "MEDIUM" | "HIGH" | "CRITICAL"
    critical_services: list[str] = field(default_factory=list)
    dependent_alerts: list[str] = field(default_factory=list)
    estimated_downtime: str = ""
    confidence_score: float = 0.0
    recommendations: list[str] = field(default_factory=list)


@dataclass
class ImpactAnalysisResponse:
    """Response from impact analysis."""

    analysis_id: str
    alert_name: str
    alert_type: str
    affected_services: list[str]
    alert_exists: bool
    impact_analysis: ImpactAnalysisDTO
    analyzed_at: datetime


@dataclass
class RecentAnalysesResponse:
    """Recent impact analyses of an account, newest first."""

    account_id: str
    analyses: list[ImpactAnalysisResponse] = field(default_factory=list)
