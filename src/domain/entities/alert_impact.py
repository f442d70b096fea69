"""Domain entities for alert impact analysis.

Defines the input context and output result of the impact-scoring engine,
along with the historical baseline that seeds the estimates.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class AlertType(str, Enum):
    """Category of an alerting rule."""

    DATABASE = "database"
    PAYMENT = "payment"
    AUTHENTICATION = "authentication"
    LOGGING = "logging"
    CRITICAL = "critical"
    NETWORK = "network"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, value: Any) -> "AlertType":
        """Parse a loosely typed value, falling back to UNKNOWN."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                return cls.UNKNOWN
        return cls.UNKNOWN


class RiskLevel(str, Enum):
    """Risk tier of an alert change."""

    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    CRITICAL = "CRITICAL"


def _non_negative(value: Any, as_int: bool = False) -> float | int:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0
    if value != value or value < 0:  # NaN or negative
        return 0
    return int(value) if as_int else value


@dataclass(frozen=True)
class HistoricalData:
    """Historical baseline for an alert type and service set.

    Attributes:
        avg_customers_affected: Average number of customers affected by past changes
        avg_downtime: Average downtime in seconds
        successful_deployments: Count of past deployments without incident
        failed_deployments: Count of past deployments that caused an incident
    """

    avg_customers_affected: float = 0
    avg_downtime: float = 0
    successful_deployments: int = 0
    failed_deployments: int = 0

    @property
    def total_deployments(self) -> int:
        return self.successful_deployments + self.failed_deployments

    @property
    def failure_rate(self) -> float:
        """Failed share of recorded deployments (0.1 when nothing is recorded)."""
        total = self.total_deployments
        if total == 0:
            return 0.1
        return self.failed_deployments / total

    @classmethod
    def from_mapping(cls, data: Any) -> "HistoricalData":
        """Build from a loosely typed mapping.

        Accepts camelCase or snake_case keys. Missing, negative or non-numeric
        values fall back to 0, and non-mapping input yields the empty baseline.
        """
        if isinstance(data, HistoricalData):
            return data
        if not isinstance(data, Mapping):
            return cls()

        def pick(snake: str, camel: str) -> Any:
            return data.get(snake, data.get(camel))

        return cls(
            avg_customers_affected=_non_negative(
                pick("avg_customers_affected", "avgCustomersAffected")
            ),
            avg_downtime=_non_negative(pick("avg_downtime", "avgDowntime")),
            successful_deployments=_non_negative(
                pick("successful_deployments", "successfulDeployments"), as_int=True
            ),
            failed_deployments=_non_negative(
                pick("failed_deployments", "failedDeployments"), as_int=True
            ),
        )


@dataclass(frozen=True)
class AlertContext:
    """Input to the impact-scoring engine.

    Attributes:
        alert_name: Name of the alert being changed
        alert_type: Category of the alert
        affected_services: Service identifiers the alert covers (order irrelevant)
        historical_data: Historical baseline for this alert type and services
    """

    alert_name: str
    alert_type: AlertType = AlertType.UNKNOWN
    affected_services: tuple[str, ...] = ()
    historical_data: HistoricalData = field(default_factory=HistoricalData)

    @classmethod
    def from_mapping(cls, data: Any) -> "AlertContext":
        """Build a context from caller-supplied fields.

        Non-mapping input is read as an empty mapping. Non-list services become
        empty, unknown alert types become UNKNOWN and a non-mapping history
        becomes the empty baseline.
        """
        if isinstance(data, AlertContext):
            return data
        if not isinstance(data, Mapping):
            data = {}
        services = data.get("affected_services", data.get("affectedServices"))
        if not isinstance(services, (list, tuple)):
            services = ()
        alert_name = data.get("alert_name", data.get("alertName")) or ""

        return cls(
            alert_name=str(alert_name),
            alert_type=AlertType.parse(data.get("alert_type", data.get("alertType"))),
            affected_services=tuple(s for s in services if isinstance(s, str)),
            historical_data=HistoricalData.from_mapping(
                data.get("historical_data", data.get("historicalData"))
            ),
        )


@dataclass(frozen=True)
class ImpactResult:
    """Output of the impact-scoring engine.

    Attributes:
        customers_affected: Expected number of affected customers
        risk_level: Risk tier of the change
        critical_services: Affected services flagged as critical, in input order
        dependent_alerts: Other alerts likely triggered by the same root cause
        estimated_downtime: Human-readable downtime range or threshold
        confidence_score: Reliability of the estimate in [0, 1]
        recommendations: Action items, most urgent first
    """

    customers_affected: int
    risk_level: RiskLevel
    critical_services: list[str] = field(default_factory=list)
    dependent_alerts: list[str] = field(default_factory=list)
    estimated_downtime: str = ""
    confidence_score: float = 0.0
    recommendations: list[str] = field(default_factory=list)
