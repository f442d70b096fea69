"""Heuristic alert classification.

Infers an alert's type and affected services from its name using an ordered
rule table of keyword matches. The first matching rule wins.
"""

from dataclasses import dataclass

from src.domain.entities.alert_impact import AlertType


@dataclass(frozen=True)
class ClassificationRule:
    """A keyword rule mapping alert names to a type and service set.

    Attributes:
        keywords: Lowercase substrings, any of which triggers the rule
        alert_type: Type assigned when the rule matches
        affected_services: Services assigned when the rule matches
    """

    keywords: tuple[str, ...]
    alert_type: AlertType
    affected_services: tuple[str, ...]

    def matches(self, lowered_name: str) -> bool:
        return any(keyword in lowered_name for keyword in self.keywords)


@dataclass(frozen=True)
class AlertClassification:
    """Type and affected services inferred for an alert name."""

    alert_type: AlertType
    affected_services: tuple[str, ...]


DEFAULT_RULES: tuple[ClassificationRule, ...] = (
    ClassificationRule(
        keywords=("database", "db"),
        alert_type=AlertType.DATABASE,
        affected_services=("payment-processing", "user-authentication", "order-management"),
    ),
    ClassificationRule(
        keywords=("payment", "billing"),
        alert_type=AlertType.PAYMENT,
        affected_services=("payment-processing", "billing-service", "fraud-detection"),
    ),
    ClassificationRule(
        keywords=("auth", "login"),
        alert_type=AlertType.AUTHENTICATION,
        affected_services=("user-authentication", "account-service"),
    ),
    ClassificationRule(
        keywords=("log", "monitor"),
        alert_type=AlertType.LOGGING,
        affected_services=("logging-service",),
    ),
    ClassificationRule(
        keywords=("critical", "production"),
        alert_type=AlertType.CRITICAL,
        affected_services=("payment-processing", "user-authentication", "order-management"),
    ),
)

FALLBACK_CLASSIFICATION = AlertClassification(
    alert_type=AlertType.UNKNOWN,
    affected_services=("logging-service",),
)


class AlertClassifier:
    """Classifies alerts by keyword rules, first match wins."""

    def __init__(
        self,
        rules: tuple[ClassificationRule, ...] = DEFAULT_RULES,
        fallback: AlertClassification = FALLBACK_CLASSIFICATION,
    ):
        self._rules = rules
        self._fallback = fallback

    def classify(self, alert_name: str) -> AlertClassification:
        """Infer the alert type and affected services from an alert name."""
        lowered = (alert_name or "").lower()
        for rule in self._rules:
            if rule.matches(lowered):
                return AlertClassification(
                    alert_type=rule.alert_type,
                    affected_services=rule.affected_services,
                )
        return self._fallback
