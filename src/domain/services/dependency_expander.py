"""Dependent alert expansion.

Given the services an alert covers, synthesizes the names of other alerts that
the same root cause would plausibly trigger.
"""

from collections.abc import Sequence

from src.domain.entities.service_registry import ServiceRegistry
from src.domain.services.critical_service_classifier import CriticalServiceClassifier

CASCADE_ALERTS = ("Downstream Service Alert", "Cascade Failure Alert")
SERVICE_SPECIFIC_ALERTS: dict[str, tuple[str, ...]] = {
    "payment-processing": ("Payment Failure Alert", "Transaction Processing Alert"),
    "user-authentication": ("Auth Service Down Alert", "Login Failure Alert"),
}


def titlecase_service(service_id: str) -> str:
    """Turn a service identifier into a display label.

    Hyphens become spaces and the first letter of each word is capitalized,
    e.g. "payment-processing" -> "Payment Processing".
    """
    words = service_id.replace("-", " ").split(" ")
    return " ".join(word[:1].upper() + word[1:] for word in words)


class DependencyExpander:
    """Expands affected services into co-affected alert names."""

    def __init__(
        self,
        registry: ServiceRegistry,
        critical_classifier: CriticalServiceClassifier,
    ):
        self._registry = registry
        self._critical_classifier = critical_classifier

    def expand_dependent_alerts(
        self,
        alert_name: str | None,
        affected_services: Sequence[str] | None,
    ) -> list[str]:
        """Synthesize dependent alert names.

        Args:
            alert_name: Name of the alert being changed (excluded from the result)
            affected_services: Service identifiers covered by the alert

        Returns:
            Deduplicated alert names. Order is stable within a call but
            otherwise carries no meaning.
        """
        if not isinstance(affected_services, (list, tuple)):
            return []

        # dict keys keep insertion order and deduplicate
        dependent_alerts: dict[str, None] = {}

        for service in affected_services:
            for dependency in self._registry.dependencies_of(service):
                if self._registry.is_critical(dependency):
                    label = titlecase_service(dependency)
                    dependent_alerts[f"{label} Alert"] = None
                    dependent_alerts[f"{label} Failure Alert"] = None

        critical_services = self._critical_classifier.classify_critical(affected_services)
        if critical_services:
            for name in CASCADE_ALERTS:
                dependent_alerts[name] = None
            for service_id, names in SERVICE_SPECIFIC_ALERTS.items():
                if service_id in critical_services:
                    for name in names:
                        dependent_alerts[name] = None

        excluded = (alert_name or "").lower()
        return [name for name in dependent_alerts if name.lower() != excluded]
