"""Interface for alert lookups."""

from abc import ABC, abstractmethod


class AlertRepositoryInterface(ABC):
    """Interface for querying existing alerts."""

    @abstractmethod
    async def alert_exists(self, alert_name: str, account_id: str) -> bool:
        """Check whether an active alert with this name exists in the account.

        Names are compared case-insensitively after trimming whitespace.

        Args:
            alert_name: Alert name to look up
            account_id: Account the alert belongs to

        Returns:
            True if an active alert with this name exists
        """
        pass
