"""Domain entities - Core business objects."""

from src.domain.entities.alert_impact import (
    AlertContext,
    AlertType,
    HistoricalData,
    ImpactResult,
    RiskLevel,
)
from src.domain.entities.impact_analysis_record import ImpactAnalysisRecord
from src.domain.entities.service_registry import (
    DEFAULT_SERVICE_REGISTRY,
    ServiceRegistry,
    build_default_service_registry,
)

__all__ = [
    # Engine input/output
    "AlertContext",
    "AlertType",
    "HistoricalData",
    "ImpactResult",
    "RiskLevel",
    # Stored analyses
    "ImpactAnalysisRecord",
    # Service registry
    "ServiceRegistry",
    "DEFAULT_SERVICE_REGISTRY",
    "build_default_service_registry",
]
