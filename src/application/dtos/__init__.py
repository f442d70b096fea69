"""Application layer DTOs.

This package contains data transfer objects (DTOs) for the application layer.
Uses dataclasses (not Pydantic) per Clean Architecture principles.
"""

from src.application.dtos.impact_analysis_dto import (
    ImpactAnalysisDTO,
    ImpactAnalysisRequest,
    ImpactAnalysisResponse,
    RecentAnalysesResponse,
)

__all__ = [
    "ImpactAnalysisRequest",
    "ImpactAnalysisDTO",
    "ImpactAnalysisResponse",
    "RecentAnalysesResponse",
]
