"""E2E tests for the impact analysis API endpoints.

These tests drive the full stack: validation, authentication, the heuristic
classifier, the seeded historical data provider, the scoring engine and the
in-memory stores.
"""

import asyncio

import pytest
from httpx import AsyncClient

from src.domain.repositories.historical_data_provider import (
    HistoricalDataProviderInterface,
    HistoricalDataUnavailableError,
)
from src.infrastructure.api.dependencies import get_historical_data_provider
from src.infrastructure.stores import api_key_store, in_memory_alert_store

ENDPOINT = "/api/v1/alerts/impact-analysis"


def payload(alert_name: str, **overrides) -> dict:
    body = {
        "alert_name": alert_name,
        "user_id": "user-123",
        "account_id": "account-456",
        "timestamp": "2025-08-12T10:00:00Z",
    }
    body.update(overrides)
    return body


class UnavailableHistoricalDataProvider(HistoricalDataProviderInterface):
    def __init__(self):
        self.calls = 0

    async def get_historical_data(self, alert_type, affected_services):
        self.calls += 1
        raise HistoricalDataUnavailableError("deployment history store unreachable")


class SlowHistoricalDataProvider(HistoricalDataProviderInterface):
    async def get_historical_data(self, alert_type, affected_services):
        await asyncio.sleep(1)
        raise AssertionError("analysis should have timed out")


class TestImpactAnalysisScenarios:
    """Full analyses for alerts of each type."""

    @pytest.mark.asyncio
    async def test_database_alert(self, async_client: AsyncClient):
        response = await async_client.post(
            ENDPOINT, json=payload("Production Database CPU Alert")
        )

        assert response.status_code == 200
        assert response.headers["X-Correlation-ID"]
        assert response.headers["X-RateLimit-Limit"] == "20"

        data = response.json()
        assert data["alert_type"] == "database"
        assert data["alert_exists"] is True
        assert data["affected_services"] == [
            "payment-processing",
            "user-authentication",
            "order-management",
        ]

        impact = data["impact_analysis"]
        assert impact["customers_affected"] == 31500
        assert impact["risk_level"] == "CRITICAL"
        assert impact["critical_services"] == data["affected_services"]
        assert impact["estimated_downtime"] == "14-16 minutes"
        assert impact["confidence_score"] == pytest.approx(0.9)
        assert impact["recommendations"][0] == "DO NOT PROCEED - Schedule maintenance window"
        assert "Alert payment operations and fraud teams" in impact["recommendations"]
        assert "Prepare for potential login issues" in impact["recommendations"]
        assert {"Billing Service Alert", "Cascade Failure Alert", "Login Failure Alert"} <= set(
            impact["dependent_alerts"]
        )

    @pytest.mark.asyncio
    async def test_payment_alert(self, async_client: AsyncClient):
        response = await async_client.post(
            ENDPOINT, json=payload("Payment System Critical Alert")
        )

        assert response.status_code == 200
        data = response.json()
        assert data["alert_type"] == "payment"
        assert data["alert_exists"] is False

        impact = data["impact_analysis"]
        assert impact["customers_affected"] == 110250
        assert impact["risk_level"] == "CRITICAL"
        assert impact["estimated_downtime"] == "88-98 minutes"
        assert impact["confidence_score"] == pytest.approx(0.75)
        assert impact["recommendations"][-1] == (
            "Critical services affected: payment-processing, billing-service, fraud-detection"
        )
        assert "Payment System Critical Alert" not in impact["dependent_alerts"]

    @pytest.mark.asyncio
    async def test_authentication_alert(self, async_client: AsyncClient):
        response = await async_client.post(ENDPOINT, json=payload("User Login Failure"))

        assert response.status_code == 200
        data = response.json()
        assert data["alert_type"] == "authentication"

        impact = data["impact_analysis"]
        assert impact["customers_affected"] == 1350
        assert impact["risk_level"] == "MEDIUM"
        assert impact["estimated_downtime"] == "3 minutes"
        assert impact["confidence_score"] == pytest.approx(0.85)
        assert impact["recommendations"] == [
            "Proceed with caution",
            "Monitor critical metrics during deployment",
            "Have rollback plan ready",
            "Consider notifying customer support team",
            "Critical services affected: user-authentication, account-service",
        ]
        assert len(impact["dependent_alerts"]) == 14

    @pytest.mark.asyncio
    async def test_logging_alert(self, async_client: AsyncClient):
        response = await async_client.post(
            ENDPOINT, json=payload("Application Log Volume Alert")
        )

        assert response.status_code == 200
        impact = response.json()["impact_analysis"]
        assert impact["customers_affected"] == 5
        assert impact["risk_level"] == "LOW"
        assert impact["critical_services"] == []
        assert impact["dependent_alerts"] == []
        assert impact["estimated_downtime"] == "< 1 minute"
        assert impact["confidence_score"] == 1.0
        assert impact["recommendations"] == [
            "Safe to proceed with deployment",
            "Monitor logs for any anomalies",
        ]

    @pytest.mark.asyncio
    async def test_unclassified_existing_alert(self, async_client: AsyncClient):
        response = await async_client.post(
            ENDPOINT, json=payload("web-server-memory-warning")
        )

        assert response.status_code == 200
        data = response.json()
        assert data["alert_type"] == "unknown"
        assert data["affected_services"] == ["logging-service"]
        assert data["alert_exists"] is True
        assert data["impact_analysis"]["risk_level"] == "LOW"


class TestRequestValidation:
    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "body",
        [
            payload("ab"),
            payload("admin"),
            payload("cpu > 90%"),
            payload("Disk Alert", account_id=""),
            payload("Disk Alert", timestamp="not-a-date"),
            {"alert_name": "Disk Alert"},
        ],
    )
    async def test_invalid_body_returns_422(self, async_client: AsyncClient, body):
        response = await async_client.post(ENDPOINT, json=body)

        assert response.status_code == 422
        assert response.headers["content-type"] == "application/problem+json"
        problem = response.json()
        assert problem["status"] == 422
        assert problem["detail"].startswith("Validation failed")
        assert problem["instance"] == ENDPOINT

    @pytest.mark.asyncio
    async def test_unknown_route_returns_problem(self, async_client: AsyncClient):
        response = await async_client.get("/api/v1/alerts/unknown")

        assert response.status_code == 404
        assert response.json()["title"] == "Not Found"


class TestAuthentication:
    @pytest.mark.asyncio
    async def test_missing_header(self, async_client_no_auth: AsyncClient):
        response = await async_client_no_auth.post(ENDPOINT, json=payload("Disk Alert"))

        assert response.status_code == 401
        assert response.headers["WWW-Authenticate"] == "Bearer"
        assert response.json()["detail"] == "Missing Authorization header"

    @pytest.mark.asyncio
    async def test_wrong_scheme(self, async_client_no_auth: AsyncClient, test_api_key):
        response = await async_client_no_auth.post(
            ENDPOINT,
            json=payload("Disk Alert"),
            headers={"Authorization": f"Token {test_api_key}"},
        )

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_invalid_key(self, async_client_no_auth: AsyncClient, test_api_key):
        response = await async_client_no_auth.post(
            ENDPOINT,
            json=payload("Disk Alert"),
            headers={"Authorization": "Bearer not-the-key"},
        )

        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid or revoked API key"

    @pytest.mark.asyncio
    async def test_revoked_key(self, async_client: AsyncClient):
        api_key_store.revoke_api_key("test-key")

        response = await async_client.post(ENDPOINT, json=payload("Disk Alert"))

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_other_account_forbidden(self, async_client: AsyncClient):
        response = await async_client.post(
            ENDPOINT, json=payload("Disk Alert", account_id="account-999")
        )

        assert response.status_code == 403
        assert response.json()["title"] == "Forbidden"


class TestAuditLog:
    @pytest.mark.asyncio
    async def test_successful_analysis_audited(self, async_client: AsyncClient):
        await async_client.post(ENDPOINT, json=payload("Production Database CPU Alert"))

        entries = in_memory_alert_store.get_audit_log(user_id="user-123")
        assert len(entries) == 1
        assert entries[0].action == "IMPACT_ANALYSIS_REQUEST"
        assert entries[0].resource_id == "Production Database CPU Alert"
        assert entries[0].status_code == 200
        assert entries[0].details["client_id"] == "test-key"

    @pytest.mark.asyncio
    async def test_forbidden_analysis_audited(self, async_client: AsyncClient):
        await async_client.post(
            ENDPOINT, json=payload("Disk Alert", account_id="account-999")
        )

        entries = in_memory_alert_store.get_audit_log()
        assert [e.status_code for e in entries] == [403]

    @pytest.mark.asyncio
    async def test_recent_listing_not_audited(self, async_client: AsyncClient):
        await async_client.get(f"{ENDPOINT}/recent")

        assert in_memory_alert_store.get_audit_log() == []


class TestRecentAnalyses:
    @pytest.mark.asyncio
    async def test_lists_newest_first(self, async_client: AsyncClient):
        await async_client.post(ENDPOINT, json=payload("Application Log Volume Alert"))
        await async_client.post(ENDPOINT, json=payload("User Login Failure"))

        response = await async_client.get(f"{ENDPOINT}/recent")

        assert response.status_code == 200
        data = response.json()
        assert data["account_id"] == "account-456"
        assert [a["alert_name"] for a in data["analyses"]] == [
            "User Login Failure",
            "Application Log Volume Alert",
        ]

    @pytest.mark.asyncio
    async def test_limit(self, async_client: AsyncClient):
        await async_client.post(ENDPOINT, json=payload("Application Log Volume Alert"))
        await async_client.post(ENDPOINT, json=payload("User Login Failure"))

        response = await async_client.get(f"{ENDPOINT}/recent", params={"limit": 1})

        assert len(response.json()["analyses"]) == 1

    @pytest.mark.asyncio
    async def test_invalid_limit(self, async_client: AsyncClient):
        response = await async_client.get(f"{ENDPOINT}/recent", params={"limit": 0})

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_scoped_to_caller_account(self, async_client: AsyncClient):
        await async_client.post(ENDPOINT, json=payload("User Login Failure"))
        other_key = "other-account-key-123456"
        api_key_store.register_api_key(other_key, "other", "user-9", "account-999")

        response = await async_client.get(
            f"{ENDPOINT}/recent", headers={"Authorization": f"Bearer {other_key}"}
        )

        assert response.status_code == 200
        assert response.json() == {"account_id": "account-999", "analyses": []}


class TestFailureModes:
    @pytest.mark.asyncio
    async def test_historical_data_unavailable(
        self, app, async_client: AsyncClient, monkeypatch
    ):
        monkeypatch.setenv("ANALYSIS_HISTORICAL_DATA_RETRY_WAIT_SECONDS", "0")
        provider = UnavailableHistoricalDataProvider()
        app.dependency_overrides[get_historical_data_provider] = lambda: provider

        response = await async_client.post(ENDPOINT, json=payload("Disk Alert"))

        assert response.status_code == 503
        assert response.headers["Retry-After"] == "30"
        assert response.json()["retry_after_seconds"] == 30
        assert provider.calls == 3

    @pytest.mark.asyncio
    async def test_analysis_timeout(self, app, async_client: AsyncClient, monkeypatch):
        monkeypatch.setenv("ANALYSIS_TIMEOUT_SECONDS", "0.05")
        app.dependency_overrides[get_historical_data_provider] = (
            lambda: SlowHistoricalDataProvider()
        )

        response = await async_client.post(ENDPOINT, json=payload("Disk Alert"))

        assert response.status_code == 408
        assert response.json()["title"] == "Request Timeout"

    @pytest.mark.asyncio
    async def test_rate_limited(self, async_client: AsyncClient, monkeypatch):
        monkeypatch.setenv("RATE_LIMIT_IMPACT_ANALYSIS_REQUESTS", "2")

        statuses = []
        for _ in range(3):
            response = await async_client.post(
                ENDPOINT, json=payload("Application Log Volume Alert")
            )
            statuses.append(response.status_code)

        assert statuses == [200, 200, 429]
        assert int(response.headers["Retry-After"]) > 0
        assert response.json()["status"] == 429

    @pytest.mark.asyncio
    async def test_analysis_counts_against_api_budget(
        self, async_client: AsyncClient, monkeypatch
    ):
        monkeypatch.setenv("RATE_LIMIT_API_REQUESTS", "2")

        for _ in range(2):
            response = await async_client.post(
                ENDPOINT, json=payload("Application Log Volume Alert")
            )
            assert response.status_code == 200

        response = await async_client.get(f"{ENDPOINT}/recent")

        assert response.status_code == 429
        assert response.headers["X-RateLimit-Limit"] == "2"

    @pytest.mark.asyncio
    async def test_exhausted_api_budget_blocks_analysis(
        self, async_client: AsyncClient, monkeypatch
    ):
        monkeypatch.setenv("RATE_LIMIT_API_REQUESTS", "1")

        assert (await async_client.get(f"{ENDPOINT}/recent")).status_code == 200

        response = await async_client.post(
            ENDPOINT, json=payload("Application Log Volume Alert")
        )

        assert response.status_code == 429

    @pytest.mark.asyncio
    async def test_health_not_rate_limited(
        self, async_client_no_auth: AsyncClient, monkeypatch
    ):
        monkeypatch.setenv("RATE_LIMIT_API_REQUESTS", "1")

        for _ in range(3):
            response = await async_client_no_auth.get("/api/v1/health")
            assert response.status_code == 200
