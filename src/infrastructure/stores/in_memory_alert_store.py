"""In-memory stores for alerts, impact analyses and the audit log (demo-only).

Data is cleared on application restart. For production, replace with
repositories backed by a real database.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any
from uuid import UUID, uuid4

from src.domain.entities.impact_analysis_record import ImpactAnalysisRecord
from src.domain.repositories.alert_repository import AlertRepositoryInterface
from src.domain.repositories.impact_analysis_repository import (
    ImpactAnalysisRepositoryInterface,
)


@dataclass
class StoredAlert:
    """An alert rule registered in an account."""

    name: str
    user_id: str
    account_id: str
    status: str = "active"
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


@dataclass
class AuditEntry:
    """One audited API action (immutable once appended)."""

    action: str
    resource_type: str
    resource_id: str | None
    user_id: str
    status_code: int
    duration_ms: float
    details: dict[str, Any] = field(default_factory=dict)
    id: UUID = field(default_factory=uuid4)
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


def _seed_alerts() -> list[StoredAlert]:
    return [
        StoredAlert(
            name="Production Database CPU Alert",
            user_id="user-123",
            account_id="account-456",
        ),
        StoredAlert(
            name="web-server-memory-warning",
            user_id="user-123",
            account_id="account-456",
        ),
    ]


# Global in-memory stores (cleared on restart)
_alerts: list[StoredAlert] = _seed_alerts()
_analyses: list[ImpactAnalysisRecord] = []  # append-only
_audit_log: list[AuditEntry] = []  # append-only


def add_alert(alert: StoredAlert) -> None:
    """Register an alert."""
    _alerts.append(alert)


def append_audit_entry(entry: AuditEntry) -> None:
    """Append an audit log entry."""
    _audit_log.append(entry)


def get_audit_log(user_id: str | None = None) -> list[AuditEntry]:
    """Get audit log entries, newest first, optionally filtered by user."""
    entries = [e for e in _audit_log if user_id is None or e.user_id == user_id]
    return sorted(entries, key=lambda e: e.timestamp, reverse=True)


def clear_all() -> None:
    """Reset all stores to their seeded state (for testing)."""
    _alerts[:] = _seed_alerts()
    _analyses.clear()
    _audit_log.clear()


class InMemoryAlertRepository(AlertRepositoryInterface):
    """Alert lookups against the in-memory alert store."""

    async def alert_exists(self, alert_name: str, account_id: str) -> bool:
        normalized = alert_name.strip().lower()
        return any(
            alert.name.lower() == normalized
            and alert.account_id == account_id
            and alert.status == "active"
            for alert in _alerts
        )


class InMemoryImpactAnalysisRepository(ImpactAnalysisRepositoryInterface):
    """Impact analysis records kept in the in-memory analysis store."""

    async def save(self, record: ImpactAnalysisRecord) -> ImpactAnalysisRecord:
        _analyses.append(record)
        return record

    async def list_recent(
        self, account_id: str, limit: int = 10
    ) -> list[ImpactAnalysisRecord]:
        records = [r for r in _analyses if r.account_id == account_id]
        records.sort(key=lambda r: r.analyzed_at, reverse=True)
        return records[:limit]
