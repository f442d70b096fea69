"""Service registry entity.

Static, read-only description of the service landscape used by every stage of
the impact-scoring engine: which services are critical, how strongly each one
amplifies customer impact, and what each one depends on.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

DEFAULT_IMPACT_MULTIPLIER = 1.0


@dataclass(frozen=True)
class ServiceRegistry:
    """Immutable registry of service metadata.

    Domain invariants:
    - the registry is never mutated after construction
    - unlisted services have an impact multiplier of 1.0 and no dependencies

    Attributes:
        critical_services: Identifiers of high customer-impact services
        impact_multipliers: Service identifier -> customer impact multiplier
        dependencies: Service identifier -> services it depends on
    """

    critical_services: frozenset[str] = frozenset()
    impact_multipliers: Mapping[str, float] = field(
        default_factory=lambda: MappingProxyType({})
    )
    dependencies: Mapping[str, tuple[str, ...]] = field(
        default_factory=lambda: MappingProxyType({})
    )

    @classmethod
    def build(
        cls,
        critical_services: Iterable[str],
        impact_multipliers: Mapping[str, float],
        dependencies: Mapping[str, Iterable[str]],
    ) -> "ServiceRegistry":
        """Build a registry, freezing every collection it receives."""
        for service_id, multiplier in impact_multipliers.items():
            if multiplier < 0:
                raise ValueError(
                    f"impact multiplier for {service_id} must be non-negative, got {multiplier}"
                )

        return cls(
            critical_services=frozenset(critical_services),
            impact_multipliers=MappingProxyType(dict(impact_multipliers)),
            dependencies=MappingProxyType(
                {service_id: tuple(deps) for service_id, deps in dependencies.items()}
            ),
        )

    def is_critical(self, service_id: str) -> bool:
        return service_id in self.critical_services

    def impact_multiplier(self, service_id: str) -> float:
        return self.impact_multipliers.get(service_id, DEFAULT_IMPACT_MULTIPLIER)

    def dependencies_of(self, service_id: str) -> tuple[str, ...]:
        return self.dependencies.get(service_id, ())


def build_default_service_registry() -> ServiceRegistry:
    """Build the registry describing the production service landscape."""
    return ServiceRegistry.build(
        critical_services=[
            "payment-processing",
            "user-authentication",
            "order-management",
            "billing-service",
            "fraud-detection",
            "inventory-system",
            "checkout-service",
            "account-service",
        ],
        impact_multipliers={
            "payment-processing": 5.0,
            "user-authentication": 4.0,
            "order-management": 3.5,
            "billing-service": 3.0,
            "fraud-detection": 2.5,
            "inventory-system": 2.0,
            "checkout-service": 4.5,
            "account-service": 3.5,
            "logging-service": 0.1,
            "monitoring-service": 0.2,
            "analytics-service": 0.3,
        },
        dependencies={
            "payment-processing": ["billing-service", "fraud-detection", "order-management"],
            "user-authentication": ["account-service", "order-management", "checkout-service"],
            "order-management": ["inventory-system", "payment-processing", "checkout-service"],
            "billing-service": ["payment-processing", "account-service"],
            "fraud-detection": ["payment-processing", "order-management"],
            "inventory-system": ["order-management", "checkout-service"],
            "checkout-service": ["payment-processing", "inventory-system", "user-authentication"],
            "account-service": ["user-authentication", "billing-service"],
        },
    )


# Shared process-wide registry, read-only after import
DEFAULT_SERVICE_REGISTRY = build_default_service_registry()
