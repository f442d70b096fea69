"""Domain services - Business logic that doesn't fit in entities."""

from src.domain.services.alert_classifier import AlertClassifier
from src.domain.services.confidence_scorer import ConfidenceScorer
from src.domain.services.critical_service_classifier import CriticalServiceClassifier
from src.domain.services.customer_impact_estimator import CustomerImpactEstimator
from src.domain.services.dependency_expander import DependencyExpander
from src.domain.services.downtime_estimator import DowntimeEstimator
from src.domain.services.impact_analysis_service import ImpactAnalysisService
from src.domain.services.recommendation_generator import RecommendationGenerator
from src.domain.services.risk_scorer import RiskScorer

__all__ = [
    "ImpactAnalysisService",
    "CustomerImpactEstimator",
    "CriticalServiceClassifier",
    "RiskScorer",
    "DependencyExpander",
    "ConfidenceScorer",
    "DowntimeEstimator",
    "RecommendationGenerator",
    "AlertClassifier",
]
