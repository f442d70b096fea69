"""Domain service for alert impact analysis.

Composes the impact-scoring stages into a single pure computation that turns
an AlertContext into an ImpactResult.
"""

import logging

from src.domain.entities.alert_impact import AlertContext, ImpactResult
from src.domain.entities.service_registry import (
    DEFAULT_SERVICE_REGISTRY,
    ServiceRegistry,
)
from src.domain.services.confidence_scorer import ConfidenceScorer
from src.domain.services.critical_service_classifier import CriticalServiceClassifier
from src.domain.services.customer_impact_estimator import CustomerImpactEstimator
from src.domain.services.dependency_expander import DependencyExpander
from src.domain.services.downtime_estimator import DowntimeEstimator, leading_minutes
from src.domain.services.recommendation_generator import RecommendationGenerator
from src.domain.services.risk_scorer import RiskScorer

logger = logging.getLogger(__name__)

HIGH_QUALITY_MIN_DEPLOYMENTS = 20
MEDIUM_QUALITY_MIN_DEPLOYMENTS = 5


class ImpactAnalysisService:
    """Computes the customer impact of changing an alert.

    Algorithm:
    1. Estimate affected customers from services and the historical baseline
    2. Pick out the critical services among the affected ones
    3. Score risk from customers, critical services and deployment failure rate
    4. Expand the affected services into dependent alert names
    5. Estimate downtime
    6. Score confidence from deployment volume and data quality
    7. Generate recommendations from the risk tier and downtime

    The service holds no per-request state and is safe to share across
    concurrent requests.
    """

    def __init__(self, registry: ServiceRegistry = DEFAULT_SERVICE_REGISTRY):
        self._registry = registry
        self._critical_classifier = CriticalServiceClassifier(registry)
        self._customer_estimator = CustomerImpactEstimator(registry)
        self._risk_scorer = RiskScorer()
        self._dependency_expander = DependencyExpander(registry, self._critical_classifier)
        self._downtime_estimator = DowntimeEstimator(self._critical_classifier)
        self._confidence_scorer = ConfidenceScorer()
        self._recommendation_generator = RecommendationGenerator()

    @property
    def registry(self) -> ServiceRegistry:
        return self._registry

    def analyze_impact(self, context: AlertContext) -> ImpactResult:
        """Run the full impact analysis for an alert change.

        Args:
            context: Alert name, type, affected services and historical baseline

        Returns:
            ImpactResult with customers, risk tier, dependent alerts, downtime,
            confidence and recommendations
        """
        services = list(context.affected_services)
        history = context.historical_data

        customers_affected = self._customer_estimator.estimate_customer_impact(
            services, history
        )
        critical_services = self._critical_classifier.classify_critical(services)

        risk_level = self._risk_scorer.score_risk(
            customers_affected=customers_affected,
            critical_services_count=len(critical_services),
            historical_failure_rate=history.failure_rate,
        )

        dependent_alerts = self._dependency_expander.expand_dependent_alerts(
            context.alert_name, services
        )
        estimated_downtime = self._downtime_estimator.estimate_downtime(
            context.alert_type, history, services
        )

        total_deployments = history.total_deployments
        confidence_score = self._confidence_scorer.score_confidence(
            historical_data_points=total_deployments,
            successful_deployments=history.successful_deployments,
            failed_deployments=history.failed_deployments,
            data_quality=self._data_quality(total_deployments),
        )

        recommendations = self._recommendation_generator.generate_recommendations(
            risk_level=risk_level,
            customers_affected=customers_affected,
            critical_services=critical_services,
            estimated_downtime=leading_minutes(estimated_downtime),
        )

        logger.debug(
            "Impact analysis computed",
            extra={
                "alert_name": context.alert_name,
                "risk_level": risk_level.value,
                "customers_affected": customers_affected,
                "critical_services": len(critical_services),
            },
        )

        return ImpactResult(
            customers_affected=customers_affected,
            risk_level=risk_level,
            critical_services=critical_services,
            dependent_alerts=dependent_alerts,
            estimated_downtime=estimated_downtime,
            confidence_score=confidence_score,
            recommendations=recommendations,
        )

    @staticmethod
    def _data_quality(total_deployments: int) -> str:
        """Derive data quality from how many deployments are on record."""
        if total_deployments > HIGH_QUALITY_MIN_DEPLOYMENTS:
            return "high"
        if total_deployments > MEDIUM_QUALITY_MIN_DEPLOYMENTS:
            return "medium"
        return "low"
