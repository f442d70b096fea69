"""Unit tests for the in-memory alert, analysis and audit stores."""

from datetime import datetime, timedelta, timezone

import pytest

from src.domain.entities.alert_impact import AlertType, ImpactResult, RiskLevel
from src.domain.entities.impact_analysis_record import ImpactAnalysisRecord
from src.infrastructure.stores import in_memory_alert_store as store


@pytest.fixture(autouse=True)
def reset_stores():
    store.clear_all()
    yield
    store.clear_all()


def create_record(account_id: str, analyzed_at: datetime, name: str = "Log Alert"):
    return ImpactAnalysisRecord(
        alert_name=name,
        user_id="user-123",
        account_id=account_id,
        alert_type=AlertType.LOGGING,
        affected_services=["logging-service"],
        alert_exists=False,
        result=ImpactResult(customers_affected=5, risk_level=RiskLevel.LOW),
        analyzed_at=analyzed_at,
    )


class TestInMemoryAlertRepository:
    @pytest.mark.asyncio
    async def test_seeded_alert_exists(self):
        repo = store.InMemoryAlertRepository()
        assert await repo.alert_exists("Production Database CPU Alert", "account-456")

    @pytest.mark.asyncio
    async def test_lookup_is_case_insensitive_and_trimmed(self):
        repo = store.InMemoryAlertRepository()
        assert await repo.alert_exists("  production database cpu alert ", "account-456")

    @pytest.mark.asyncio
    async def test_lookup_scoped_to_account(self):
        repo = store.InMemoryAlertRepository()
        assert not await repo.alert_exists("Production Database CPU Alert", "account-999")

    @pytest.mark.asyncio
    async def test_inactive_alert_not_found(self):
        store.add_alert(
            store.StoredAlert(
                name="Retired Alert",
                user_id="user-1",
                account_id="account-1",
                status="inactive",
            )
        )
        repo = store.InMemoryAlertRepository()
        assert not await repo.alert_exists("Retired Alert", "account-1")

    @pytest.mark.asyncio
    async def test_added_alert_found(self):
        store.add_alert(
            store.StoredAlert(name="New Alert", user_id="user-1", account_id="account-1")
        )
        repo = store.InMemoryAlertRepository()
        assert await repo.alert_exists("New Alert", "account-1")


class TestInMemoryImpactAnalysisRepository:
    @pytest.mark.asyncio
    async def test_list_recent_newest_first(self):
        repo = store.InMemoryImpactAnalysisRepository()
        now = datetime.now(timezone.utc)
        await repo.save(create_record("account-1", now - timedelta(minutes=2), "Old"))
        await repo.save(create_record("account-1", now, "New"))
        await repo.save(create_record("account-2", now, "Other"))

        records = await repo.list_recent("account-1")

        assert [r.alert_name for r in records] == ["New", "Old"]

    @pytest.mark.asyncio
    async def test_list_recent_respects_limit(self):
        repo = store.InMemoryImpactAnalysisRepository()
        now = datetime.now(timezone.utc)
        for i in range(5):
            await repo.save(create_record("account-1", now + timedelta(seconds=i)))

        assert len(await repo.list_recent("account-1", limit=3)) == 3

    @pytest.mark.asyncio
    async def test_clear_all_resets_analyses(self):
        repo = store.InMemoryImpactAnalysisRepository()
        await repo.save(create_record("account-1", datetime.now(timezone.utc)))

        store.clear_all()

        assert await repo.list_recent("account-1") == []


class TestAuditLog:
    def test_append_and_filter(self):
        store.append_audit_entry(
            store.AuditEntry(
                action="IMPACT_ANALYSIS_REQUEST",
                resource_type="alert",
                resource_id="Disk Alert",
                user_id="user-1",
                status_code=200,
                duration_ms=3.2,
            )
        )
        store.append_audit_entry(
            store.AuditEntry(
                action="IMPACT_ANALYSIS_REQUEST",
                resource_type="alert",
                resource_id="Log Alert",
                user_id="user-2",
                status_code=403,
                duration_ms=1.0,
            )
        )

        assert len(store.get_audit_log()) == 2
        entries = store.get_audit_log(user_id="user-2")
        assert [e.resource_id for e in entries] == ["Log Alert"]
        assert entries[0].status_code == 403
