"""Recommendation generation.

Maps the risk tier, critical service exposure and expected downtime to an
ordered list of action items, most urgent first.
"""

from collections.abc import Sequence

from src.domain.entities.alert_impact import RiskLevel
from src.domain.services.downtime_estimator import leading_minutes

PAYMENT_SERVICE = "payment-processing"
AUTH_SERVICE = "user-authentication"

LOW_TRAFFIC_DOWNTIME_THRESHOLD = 60
EXTENDED_DOWNTIME_THRESHOLD = 300
SUPPORT_NOTIFICATION_CUSTOMER_THRESHOLD = 200


class RecommendationGenerator:
    """Builds deployment recommendations for an analyzed alert change."""

    BASE_RECOMMENDATIONS: dict[RiskLevel, tuple[str, ...]] = {
        RiskLevel.LOW: (
            "Safe to proceed with deployment",
            "Monitor logs for any anomalies",
        ),
        RiskLevel.MEDIUM: (
            "Proceed with caution",
            "Monitor critical metrics during deployment",
            "Have rollback plan ready",
        ),
        RiskLevel.HIGH: (
            "Consider maintenance window scheduling",
            "Notify affected customers in advance",
            "Prepare rollback plan",
            "Monitor critical services during deployment",
        ),
        RiskLevel.CRITICAL: (
            "DO NOT PROCEED - Schedule maintenance window",
            "Coordinate with all stakeholders",
            "Prepare comprehensive rollback plan",
            "Consider phased deployment approach",
            "Ensure 24/7 support coverage",
        ),
    }

    def generate_recommendations(
        self,
        risk_level: RiskLevel | str | None,
        customers_affected: int = 0,
        critical_services: Sequence[str] | None = None,
        estimated_downtime: int | float | str | None = None,
    ) -> list[str]:
        """Generate recommendations.

        Args:
            risk_level: Risk tier (unknown tiers only get the trailing items)
            customers_affected: Estimated number of affected customers
            critical_services: Affected critical services, in input order
            estimated_downtime: Downtime figure, or a downtime label whose
                leading number is used

        Returns:
            Action items, most urgent first
        """
        critical_services = list(critical_services or [])
        downtime = (
            leading_minutes(estimated_downtime)
            if isinstance(estimated_downtime, str)
            else (estimated_downtime or 0)
        )
        customers_affected = customers_affected or 0

        try:
            tier = RiskLevel(risk_level)
        except ValueError:
            tier = None

        recommendations = list(self.BASE_RECOMMENDATIONS.get(tier, ()))

        if tier is RiskLevel.LOW:
            if downtime > LOW_TRAFFIC_DOWNTIME_THRESHOLD:
                recommendations.append("Consider deploying during low-traffic hours")
        elif tier is RiskLevel.MEDIUM:
            if customers_affected > SUPPORT_NOTIFICATION_CUSTOMER_THRESHOLD:
                recommendations.append("Consider notifying customer support team")
        elif tier is RiskLevel.HIGH:
            if PAYMENT_SERVICE in critical_services:
                recommendations.append("Coordinate with payment operations team")
        elif tier is RiskLevel.CRITICAL:
            if PAYMENT_SERVICE in critical_services:
                recommendations.append("Alert payment operations and fraud teams")
            if AUTH_SERVICE in critical_services:
                recommendations.append("Prepare for potential login issues")

        if critical_services:
            recommendations.append(
                f"Critical services affected: {', '.join(critical_services)}"
            )

        if downtime > EXTENDED_DOWNTIME_THRESHOLD:
            recommendations.append(
                "Extended downtime expected - communicate with stakeholders"
            )

        return recommendations
