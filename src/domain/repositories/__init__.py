"""Repository interfaces - Abstract data access contracts."""

from src.domain.repositories.alert_repository import AlertRepositoryInterface
from src.domain.repositories.historical_data_provider import (
    HistoricalDataProviderInterface,
    HistoricalDataUnavailableError,
)
from src.domain.repositories.impact_analysis_repository import (
    ImpactAnalysisRepositoryInterface,
)

__all__ = [
    "AlertRepositoryInterface",
    "HistoricalDataProviderInterface",
    "HistoricalDataUnavailableError",
    "ImpactAnalysisRepositoryInterface",
]
