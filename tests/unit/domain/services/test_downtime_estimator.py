"""Unit tests for DowntimeEstimator."""

import pytest

from src.domain.entities.alert_impact import AlertType, HistoricalData
from src.domain.entities.service_registry import DEFAULT_SERVICE_REGISTRY
from src.domain.services.critical_service_classifier import CriticalServiceClassifier
from src.domain.services.downtime_estimator import DowntimeEstimator, leading_minutes


@pytest.fixture
def estimator() -> DowntimeEstimator:
    return DowntimeEstimator(CriticalServiceClassifier(DEFAULT_SERVICE_REGISTRY))


class TestFormatDowntime:
    @pytest.mark.parametrize(
        "seconds,expected",
        [
            (0, "< 1 minute"),
            (59, "< 1 minute"),
            (60, "1 minutes"),
            (299, "5 minutes"),
            (300, "5-7 minutes"),
            (1799, "30-32 minutes"),
            (1800, "30-40 minutes"),
            (5265, "88-98 minutes"),
        ],
    )
    def test_format_boundaries(self, seconds, expected):
        assert DowntimeEstimator.format_downtime(seconds) == expected


class TestEstimateDowntime:
    """Test downtime estimation."""

    def test_missing_history_uses_one_minute_average(self, estimator):
        assert estimator.estimate_downtime(AlertType.UNKNOWN, None, []) == "1 minutes"

    def test_database_with_critical_services(self, estimator):
        # 234 * (2.0 + 3 * 0.5) = 819 seconds
        label = estimator.estimate_downtime(
            AlertType.DATABASE,
            HistoricalData(avg_downtime=234),
            ["payment-processing", "user-authentication", "order-management"],
        )
        assert label == "14-16 minutes"

    def test_payment_without_critical_services(self, estimator):
        # 900 * 3.0 = 2700 seconds
        label = estimator.estimate_downtime(
            AlertType.PAYMENT, HistoricalData(avg_downtime=900), ["logging-service"]
        )
        assert label == "45-55 minutes"

    def test_network_rounds_minutes_half_up(self, estimator):
        # 100 * 1.5 = 150 seconds = 2.5 minutes
        label = estimator.estimate_downtime(
            AlertType.NETWORK, HistoricalData(avg_downtime=100), []
        )
        assert label == "3 minutes"

    def test_accepts_string_alert_type_and_mapping(self, estimator):
        label = estimator.estimate_downtime("PAYMENT", {"avgDowntime": 900}, None)
        assert label == "45-55 minutes"

    def test_unknown_type_uses_neutral_multiplier(self, estimator):
        label = estimator.estimate_downtime(
            "authentication", HistoricalData(avg_downtime=30), []
        )
        assert label == "< 1 minute"


class TestLeadingMinutes:
    @pytest.mark.parametrize(
        "label,expected",
        [
            ("15-17 minutes", 15),
            ("5 minutes", 5),
            ("88-98 minutes", 88),
            ("< 1 minute", 60),
            ("0 minutes", 60),
            ("", 60),
            (None, 60),
            (0, 60),
            (42, 42),
            (7.5, 7.5),
        ],
    )
    def test_leading_minutes(self, label, expected):
        assert leading_minutes(label) == expected
