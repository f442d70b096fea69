"""Use cases - Application-specific business rules.

This package contains use cases that orchestrate domain logic
and implement application-specific workflows.
"""

from src.application.use_cases.get_recent_analyses import GetRecentAnalysesUseCase
from src.application.use_cases.run_impact_analysis import (
    AnalysisTimeoutError,
    RunImpactAnalysisUseCase,
)

__all__ = [
    "RunImpactAnalysisUseCase",
    "GetRecentAnalysesUseCase",
    "AnalysisTimeoutError",
]
