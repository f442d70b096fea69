"""Unit tests for ConfidenceScorer."""

import pytest

from src.domain.services.confidence_scorer import ConfidenceScorer


@pytest.fixture
def scorer() -> ConfidenceScorer:
    return ConfidenceScorer()


class TestConfidenceScorer:
    """Test confidence scoring."""

    def test_defaults(self, scorer):
        # 0.5 base + 0.05 volume + 0.1 medium quality
        assert scorer.score_confidence() == pytest.approx(0.65)

    @pytest.mark.parametrize(
        "successful,failed,expected",
        [
            (25, 25, 0.8),
            (10, 10, 0.7),
            (5, 5, 0.65),
            (2, 3, 0.6),
            (2, 2, 0.55),
            (0, 0, 0.55),
        ],
    )
    def test_volume_bonus(self, scorer, successful, failed, expected):
        """Success rate held at or below 50% so only volume contributes."""
        confidence = scorer.score_confidence(
            successful_deployments=successful,
            failed_deployments=failed,
            data_quality="unrated",
        )
        assert confidence == pytest.approx(expected)

    @pytest.mark.parametrize(
        "successful,failed,expected",
        [
            (10, 0, 0.85),
            (9, 1, 0.85),
            (8, 2, 0.8),
            (7, 3, 0.75),
            (6, 4, 0.7),
            (5, 5, 0.65),
            (0, 10, 0.65),
        ],
    )
    def test_success_rate_bonus(self, scorer, successful, failed, expected):
        """Total held at 10 deployments (+0.15 volume)."""
        confidence = scorer.score_confidence(
            successful_deployments=successful,
            failed_deployments=failed,
            data_quality="unrated",
        )
        assert confidence == pytest.approx(expected)

    @pytest.mark.parametrize(
        "quality,expected",
        [
            ("high", 0.75),
            ("HIGH", 0.75),
            ("Medium", 0.65),
            ("low", 0.45),
            ("excellent", 0.55),
            (None, 0.55),
        ],
    )
    def test_data_quality_adjustment(self, scorer, quality, expected):
        assert scorer.score_confidence(data_quality=quality) == pytest.approx(expected)

    def test_data_points_argument_is_ignored(self, scorer):
        assert scorer.score_confidence(historical_data_points=1000) == scorer.score_confidence(
            historical_data_points=0
        )

    def test_clamped_to_one(self, scorer):
        assert (
            scorer.score_confidence(
                successful_deployments=100, failed_deployments=0, data_quality="high"
            )
            == 1.0
        )

    @pytest.mark.parametrize("successful", [0, 1, 4, 9, 19, 49, 200])
    @pytest.mark.parametrize("failed", [0, 1, 5, 30])
    @pytest.mark.parametrize("quality", ["high", "medium", "low", "other"])
    def test_always_within_unit_interval(self, scorer, successful, failed, quality):
        confidence = scorer.score_confidence(
            successful_deployments=successful,
            failed_deployments=failed,
            data_quality=quality,
        )
        assert 0.0 <= confidence <= 1.0
