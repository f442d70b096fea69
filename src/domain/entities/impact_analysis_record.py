"""Stored impact analysis record.

Pairs an ImpactResult with the request metadata needed to audit it and to
list recent analyses per account.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from uuid import UUID, uuid4

from src.domain.entities.alert_impact import AlertType, ImpactResult


@dataclass
class ImpactAnalysisRecord:
    """A completed impact analysis.

    Attributes:
        alert_name: Name of the analyzed alert
        user_id: User who requested the analysis
        account_id: Account the analysis belongs to
        alert_type: Inferred alert type
        affected_services: Inferred affected services
        alert_exists: Whether the alert already existed in the account
        result: Output of the impact-scoring engine
        analysis_id: Unique identifier for this analysis
        analyzed_at: When the analysis was performed
    """

    alert_name: str
    user_id: str
    account_id: str
    alert_type: AlertType
    affected_services: list[str]
    alert_exists: bool
    result: ImpactResult
    analysis_id: UUID = field(default_factory=uuid4)
    analyzed_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self):
        """Validate domain invariants after initialization."""
        if not self.alert_name:
            raise ValueError("alert_name cannot be empty")
        if not self.account_id:
            raise ValueError("account_id cannot be empty")
