"""
Dependency injection for FastAPI routes.

Provides factory functions for creating use cases with their required dependencies.
Uses FastAPI's Depends() for dependency injection.
"""

from functools import lru_cache

from fastapi import Depends

from src.application.use_cases.get_recent_analyses import GetRecentAnalysesUseCase
from src.application.use_cases.run_impact_analysis import RunImpactAnalysisUseCase
from src.domain.entities.service_registry import DEFAULT_SERVICE_REGISTRY
from src.domain.repositories.alert_repository import AlertRepositoryInterface
from src.domain.repositories.historical_data_provider import (
    HistoricalDataProviderInterface,
)
from src.domain.repositories.impact_analysis_repository import (
    ImpactAnalysisRepositoryInterface,
)
from src.domain.services.alert_classifier import AlertClassifier
from src.domain.services.impact_analysis_service import ImpactAnalysisService
from src.infrastructure.config import get_settings
from src.infrastructure.stores.in_memory_alert_store import (
    InMemoryAlertRepository,
    InMemoryImpactAnalysisRepository,
)
from src.infrastructure.telemetry.mock_historical_data_provider import (
    MockHistoricalDataProvider,
)


@lru_cache
def get_impact_analysis_service() -> ImpactAnalysisService:
    """Shared engine instance (stateless, safe to reuse across requests)."""
    return ImpactAnalysisService(DEFAULT_SERVICE_REGISTRY)


def get_alert_repository() -> AlertRepositoryInterface:
    return InMemoryAlertRepository()


def get_analysis_repository() -> ImpactAnalysisRepositoryInterface:
    return InMemoryImpactAnalysisRepository()


def get_historical_data_provider() -> HistoricalDataProviderInterface:
    return MockHistoricalDataProvider()


def get_run_impact_analysis_use_case(
    alert_repository: AlertRepositoryInterface = Depends(get_alert_repository),
    analysis_repository: ImpactAnalysisRepositoryInterface = Depends(
        get_analysis_repository
    ),
    historical_data_provider: HistoricalDataProviderInterface = Depends(
        get_historical_data_provider
    ),
    impact_service: ImpactAnalysisService = Depends(get_impact_analysis_service),
) -> RunImpactAnalysisUseCase:
    """Build RunImpactAnalysisUseCase with all dependencies."""
    analysis_settings = get_settings().analysis
    return RunImpactAnalysisUseCase(
        alert_repository=alert_repository,
        analysis_repository=analysis_repository,
        historical_data_provider=historical_data_provider,
        impact_analysis_service=impact_service,
        alert_classifier=AlertClassifier(),
        timeout_seconds=analysis_settings.timeout_seconds,
        max_attempts=analysis_settings.historical_data_max_attempts,
        retry_wait_seconds=analysis_settings.historical_data_retry_wait_seconds,
    )


def get_recent_analyses_use_case(
    analysis_repository: ImpactAnalysisRepositoryInterface = Depends(
        get_analysis_repository
    ),
) -> GetRecentAnalysesUseCase:
    """Build GetRecentAnalysesUseCase with all dependencies."""
    return GetRecentAnalysesUseCase(analysis_repository=analysis_repository)
