"""Risk scoring for alert changes.

Combines customer impact, critical service exposure and deployment history into
a 0-100 point score, then buckets the score into a risk tier.
"""

from src.domain.entities.alert_impact import RiskLevel


class RiskScorer:
    """Scores the risk of changing an alert.

    Point bands (lower bounds inclusive):
    - Customers (max 40): >=5000 -> 40, >=2000 -> 30, >=1000 -> 20,
      >=500 -> 15, >=100 -> 10, else 5
    - Critical services (max 35): 12 per service, capped at 35
    - Failure rate (max 25): >=0.5 -> 25, >=0.3 -> 20, >=0.2 -> 15,
      >=0.1 -> 10, else 5

    Tiers: >=80 CRITICAL, >=60 HIGH, >=35 MEDIUM, else LOW.
    """

    CUSTOMER_BANDS: tuple[tuple[int, int], ...] = (
        (5000, 40),
        (2000, 30),
        (1000, 20),
        (500, 15),
        (100, 10),
    )
    CUSTOMER_FLOOR_POINTS: int = 5

    POINTS_PER_CRITICAL_SERVICE: int = 12
    CRITICAL_SERVICES_CAP: int = 35

    FAILURE_RATE_BANDS: tuple[tuple[float, int], ...] = (
        (0.5, 25),
        (0.3, 20),
        (0.2, 15),
        (0.1, 10),
    )
    FAILURE_RATE_FLOOR_POINTS: int = 5

    TIER_THRESHOLDS: tuple[tuple[int, RiskLevel], ...] = (
        (80, RiskLevel.CRITICAL),
        (60, RiskLevel.HIGH),
        (35, RiskLevel.MEDIUM),
    )

    def score_risk(
        self,
        customers_affected: int,
        critical_services_count: int,
        historical_failure_rate: float | None,
    ) -> RiskLevel:
        """Determine the risk tier for an alert change.

        Args:
            customers_affected: Estimated number of affected customers
            critical_services_count: Number of affected critical services
            historical_failure_rate: Failed share of past deployments (None counts as 0)

        Returns:
            RiskLevel tier
        """
        score = self.compute_risk_score(
            customers_affected, critical_services_count, historical_failure_rate
        )
        for threshold, level in self.TIER_THRESHOLDS:
            if score >= threshold:
                return level
        return RiskLevel.LOW

    def compute_risk_score(
        self,
        customers_affected: int,
        critical_services_count: int,
        historical_failure_rate: float | None,
    ) -> int:
        """Compute the 0-100 point risk score."""
        return (
            self._customer_points(customers_affected or 0)
            + self._critical_service_points(critical_services_count or 0)
            + self._failure_rate_points(historical_failure_rate or 0.0)
        )

    def _customer_points(self, customers_affected: int) -> int:
        for threshold, points in self.CUSTOMER_BANDS:
            if customers_affected >= threshold:
                return points
        return self.CUSTOMER_FLOOR_POINTS

    def _critical_service_points(self, critical_services_count: int) -> int:
        return min(
            critical_services_count * self.POINTS_PER_CRITICAL_SERVICE,
            self.CRITICAL_SERVICES_CAP,
        )

    def _failure_rate_points(self, failure_rate: float) -> int:
        for threshold, points in self.FAILURE_RATE_BANDS:
            if failure_rate >= threshold:
                return points
        return self.FAILURE_RATE_FLOOR_POINTS
