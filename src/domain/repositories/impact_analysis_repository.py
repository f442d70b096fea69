"""Interface for impact analysis persistence."""

from abc import ABC, abstractmethod

from src.domain.entities.impact_analysis_record import ImpactAnalysisRecord


class ImpactAnalysisRepositoryInterface(ABC):
    """Interface for storing and querying impact analysis records."""

    @abstractmethod
    async def save(self, record: ImpactAnalysisRecord) -> ImpactAnalysisRecord:
        """Store an impact analysis record.

        Args:
            record: The analysis record to store

        Returns:
            The stored record
        """
        pass

    @abstractmethod
    async def list_recent(
        self, account_id: str, limit: int = 10
    ) -> list[ImpactAnalysisRecord]:
        """List the most recent analyses of an account, newest first.

        Args:
            account_id: Account to list analyses for
            limit: Maximum number of records to return

        Returns:
            Records ordered by analyzed_at descending
        """
        pass
