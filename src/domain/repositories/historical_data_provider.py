"""Interface for retrieving historical alert baselines.

Abstracts the source of historical deployment and impact figures so the
impact analysis workflow does not depend on a specific data store.
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence

from src.domain.entities.alert_impact import AlertType, HistoricalData


class HistoricalDataUnavailableError(Exception):
    """The historical data source could not be reached or returned no usable data."""

    pass


class HistoricalDataProviderInterface(ABC):
    """Interface for looking up historical baselines by alert type and services."""

    @abstractmethod
    async def get_historical_data(
        self, alert_type: AlertType, affected_services: Sequence[str]
    ) -> HistoricalData:
        """Return the historical baseline for an alert type and service set.

        Args:
            alert_type: Category of the alert
            affected_services: Service identifiers covered by the alert

        Returns:
            HistoricalData baseline (fields the source does not know default to 0)

        Raises:
            HistoricalDataUnavailableError: If the source cannot be queried
        """
        pass
