"""Critical service classification."""

from collections.abc import Sequence

from src.domain.entities.service_registry import ServiceRegistry


class CriticalServiceClassifier:
    """Filters affected services down to the ones flagged as critical."""

    def __init__(self, registry: ServiceRegistry):
        self._registry = registry

    def classify_critical(self, affected_services: Sequence[str] | None) -> list[str]:
        """Return the critical services among the affected ones, in input order.

        Non-list or missing input yields an empty list.
        """
        if not isinstance(affected_services, (list, tuple)):
            return []
        return [s for s in affected_services if self._registry.is_critical(s)]
