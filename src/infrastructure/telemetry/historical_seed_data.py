"""Seed data for the mock historical data provider.

Baselines per alert type, plus the adjustment applied when a change touches
one of the core customer-facing services.
"""

from src.domain.entities.alert_impact import AlertType

DEFAULT_BASELINE: dict[str, float] = {
    "avg_customers_affected": 100,
    "avg_downtime": 60,
    "successful_deployments": 10,
    "failed_deployments": 2,
}

BASELINES_BY_ALERT_TYPE: dict[AlertType, dict[str, float]] = {
    AlertType.DATABASE: {
        "avg_customers_affected": 1200,
        "avg_downtime": 180,
        "successful_deployments": 15,
        "failed_deployments": 3,
    },
    AlertType.PAYMENT: {
        "avg_customers_affected": 5000,
        "avg_downtime": 900,
        "successful_deployments": 5,
        "failed_deployments": 8,
    },
    AlertType.LOGGING: {
        "avg_customers_affected": 50,
        "avg_downtime": 30,
        "successful_deployments": 25,
        "failed_deployments": 1,
    },
}

# Services whose involvement inflates the baseline
CORE_SERVICES = frozenset(
    {"payment-processing", "user-authentication", "order-management"}
)
CORE_CUSTOMER_FACTOR = 1.5
CORE_DOWNTIME_FACTOR = 1.3
CORE_EXTRA_FAILED_DEPLOYMENTS = 2
