"""Downtime estimation."""

import re
from collections.abc import Sequence

from src.domain.entities.alert_impact import AlertType, HistoricalData
from src.domain.services.critical_service_classifier import CriticalServiceClassifier
from src.domain.services.rounding import round_half_up

DEFAULT_AVG_DOWNTIME_SECONDS = 60
DEFAULT_DOWNTIME_MINUTES = 60

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def leading_minutes(label: str | int | float | None) -> int | float:
    """Extract the leading integer of a downtime label.

    "15-17 minutes" -> 15, "5 minutes" -> 5. Labels without a leading number
    (such as "< 1 minute") and zero fall back to 60. Numbers pass through.
    """
    if isinstance(label, (int, float)) and not isinstance(label, bool):
        return label or DEFAULT_DOWNTIME_MINUTES
    if not isinstance(label, str):
        return DEFAULT_DOWNTIME_MINUTES
    match = _LEADING_INT.match(label)
    if not match:
        return DEFAULT_DOWNTIME_MINUTES
    return int(match.group(1)) or DEFAULT_DOWNTIME_MINUTES


class DowntimeEstimator:
    """Estimates the downtime of an alert change as a human-readable range."""

    TYPE_MULTIPLIERS: dict[AlertType, float] = {
        AlertType.DATABASE: 2.0,
        AlertType.NETWORK: 1.5,
        AlertType.PAYMENT: 3.0,
    }
    CRITICAL_SERVICE_MULTIPLIER: float = 0.5

    def __init__(self, critical_classifier: CriticalServiceClassifier):
        self._critical_classifier = critical_classifier

    def estimate_downtime(
        self,
        alert_type: AlertType | str | None,
        historical_data: HistoricalData | None = None,
        affected_services: Sequence[str] | None = None,
    ) -> str:
        """Estimate downtime.

        Args:
            alert_type: Category of the alert
            historical_data: Historical baseline (60 s average when missing)
            affected_services: Service identifiers covered by the alert

        Returns:
            "< 1 minute", "N minutes", "N-N+2 minutes" or "N-N+10 minutes"
        """
        historical_data = HistoricalData.from_mapping(historical_data)
        avg_downtime = historical_data.avg_downtime or DEFAULT_AVG_DOWNTIME_SECONDS

        multiplier = self.TYPE_MULTIPLIERS.get(AlertType.parse(alert_type), 1.0)
        critical_count = len(self._critical_classifier.classify_critical(affected_services))
        multiplier += critical_count * self.CRITICAL_SERVICE_MULTIPLIER

        estimated_seconds = round_half_up(avg_downtime * multiplier)
        return self.format_downtime(estimated_seconds)

    @staticmethod
    def format_downtime(seconds: int) -> str:
        """Format a downtime in seconds as a human-readable label."""
        if seconds < 60:
            return "< 1 minute"

        minutes = round_half_up(seconds / 60)
        if seconds < 300:
            return f"{minutes} minutes"
        if seconds < 1800:
            return f"{minutes}-{minutes + 2} minutes"
        return f"{minutes}-{minutes + 10} minutes"
