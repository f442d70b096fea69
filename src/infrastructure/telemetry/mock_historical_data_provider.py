"""Mock historical data provider for development and testing.

This module provides a mock implementation of HistoricalDataProviderInterface
that serves hand-authored baselines from seed data instead of querying a real
deployment history store.
"""

from collections.abc import Sequence

from src.domain.entities.alert_impact import AlertType, HistoricalData
from src.domain.repositories.historical_data_provider import (
    HistoricalDataProviderInterface,
)
from src.infrastructure.telemetry.historical_seed_data import (
    BASELINES_BY_ALERT_TYPE,
    CORE_CUSTOMER_FACTOR,
    CORE_DOWNTIME_FACTOR,
    CORE_EXTRA_FAILED_DEPLOYMENTS,
    CORE_SERVICES,
    DEFAULT_BASELINE,
)


class MockHistoricalDataProvider(HistoricalDataProviderInterface):
    """Mock provider returning seeded baselines per alert type.

    Designed for:
    - Local development without a deployment history store
    - Tests with predictable data
    - Demos and documentation
    """

    def __init__(
        self,
        baselines: dict[AlertType, dict[str, float]] | None = None,
        default_baseline: dict[str, float] | None = None,
    ):
        """Initialize with optional custom seed data.

        Args:
            baselines: Alert type -> baseline fields (defaults to BASELINES_BY_ALERT_TYPE)
            default_baseline: Baseline for alert types without an entry
        """
        self._baselines = baselines if baselines is not None else BASELINES_BY_ALERT_TYPE
        self._default = default_baseline if default_baseline is not None else DEFAULT_BASELINE

    async def get_historical_data(
        self, alert_type: AlertType, affected_services: Sequence[str]
    ) -> HistoricalData:
        """Get the seeded baseline for an alert type.

        When any core service is affected the baseline is inflated: customers
        x1.5, downtime x1.3 and two extra failed deployments.
        """
        baseline = dict(self._baselines.get(AlertType.parse(alert_type), self._default))

        if any(service in CORE_SERVICES for service in affected_services or ()):
            baseline["avg_customers_affected"] *= CORE_CUSTOMER_FACTOR
            baseline["avg_downtime"] *= CORE_DOWNTIME_FACTOR
            baseline["failed_deployments"] += CORE_EXTRA_FAILED_DEPLOYMENTS

        return HistoricalData.from_mapping(baseline)
