"""Customer impact estimation.

Converts the affected service list and the historical baseline into an
expected number of affected customers.
"""

from collections.abc import Sequence

from src.domain.entities.alert_impact import HistoricalData
from src.domain.entities.service_registry import ServiceRegistry
from src.domain.services.rounding import round_half_up

DEFAULT_BASE_CUSTOMERS = 100
SERVICE_COUNT_FACTOR_CAP = 2.0


class CustomerImpactEstimator:
    """Estimates how many customers a change to an alert would affect.

    Algorithm:
    1. Start from the historical average of affected customers (100 if unknown)
    2. Sum the impact multipliers of all affected services
    3. Scale by a service-count factor: 0.2 per service on top of 0.8, capped at 2.0
    """

    def __init__(self, registry: ServiceRegistry):
        self._registry = registry

    def estimate_customer_impact(
        self,
        affected_services: Sequence[str],
        historical_data: HistoricalData | None = None,
    ) -> int:
        """Estimate the number of affected customers.

        Args:
            affected_services: Service identifiers covered by the alert
            historical_data: Historical baseline (defaults apply when missing)

        Returns:
            Non-negative customer count (0 when no service is affected)
        """
        if not isinstance(affected_services, (list, tuple)) or not affected_services:
            return 0

        historical_data = HistoricalData.from_mapping(historical_data)
        base_customers = historical_data.avg_customers_affected or DEFAULT_BASE_CUSTOMERS

        impact_multiplier = sum(
            self._registry.impact_multiplier(service) for service in affected_services
        )
        service_count_factor = min(
            len(affected_services) * 0.2 + 0.8, SERVICE_COUNT_FACTOR_CAP
        )

        total_impact = round_half_up(
            base_customers * impact_multiplier * service_count_factor
        )
        return max(0, total_impact)
