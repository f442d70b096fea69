"""Use case for listing recent impact analyses of an account."""

from src.application.dtos.impact_analysis_dto import RecentAnalysesResponse
from src.application.use_cases.run_impact_analysis import RunImpactAnalysisUseCase
from src.domain.repositories.impact_analysis_repository import (
    ImpactAnalysisRepositoryInterface,
)


class GetRecentAnalysesUseCase:
    """List the most recent impact analyses of an account."""

    def __init__(self, analysis_repository: ImpactAnalysisRepositoryInterface):
        self._analysis_repo = analysis_repository

    async def execute(self, account_id: str, limit: int = 10) -> RecentAnalysesResponse:
        """Execute the query.

        Args:
            account_id: Account to list analyses for
            limit: Maximum number of analyses to return

        Returns:
            RecentAnalysesResponse, newest first

        Raises:
            ValueError: If limit is not positive
        """
        if limit < 1:
            raise ValueError(f"limit must be positive, got {limit}")

        records = await self._analysis_repo.list_recent(account_id, limit)
        return RecentAnalysesResponse(
            account_id=account_id,
            analyses=[RunImpactAnalysisUseCase.to_response(r) for r in records],
        )
