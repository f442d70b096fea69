"""Confidence scoring for impact estimates."""


class ConfidenceScorer:
    """Rates how reliable an impact estimate is.

    The score starts at 0.5 and is adjusted by the volume of recorded
    deployments, their success rate and the declared data quality, then
    clamped to [0, 1].
    """

    BASE_CONFIDENCE: float = 0.5

    VOLUME_BANDS: tuple[tuple[int, float], ...] = (
        (50, 0.30),
        (20, 0.20),
        (10, 0.15),
        (5, 0.10),
    )
    VOLUME_FLOOR_BONUS: float = 0.05

    SUCCESS_RATE_BANDS: tuple[tuple[float, float], ...] = (
        (0.9, 0.20),
        (0.8, 0.15),
        (0.7, 0.10),
        (0.6, 0.05),
    )

    DATA_QUALITY_ADJUSTMENTS: dict[str, float] = {
        "high": 0.20,
        "medium": 0.10,
        "low": -0.10,
    }

    def score_confidence(
        self,
        historical_data_points: int = 0,
        successful_deployments: int = 0,
        failed_deployments: int = 0,
        data_quality: str | None = "medium",
    ) -> float:
        """Compute the confidence score.

        Args:
            historical_data_points: Number of historical samples (accepted, not scored)
            successful_deployments: Past deployments without incident
            failed_deployments: Past deployments that caused an incident
            data_quality: "high", "medium" or "low" (case-insensitive)

        Returns:
            Confidence in [0, 1]
        """
        successful_deployments = successful_deployments or 0
        failed_deployments = failed_deployments or 0
        total_deployments = successful_deployments + failed_deployments

        confidence = self.BASE_CONFIDENCE
        confidence += self._volume_bonus(total_deployments)

        if total_deployments > 0:
            confidence += self._success_rate_bonus(
                successful_deployments / total_deployments
            )

        if isinstance(data_quality, str):
            confidence += self.DATA_QUALITY_ADJUSTMENTS.get(data_quality.lower(), 0.0)

        return max(0.0, min(1.0, confidence))

    def _volume_bonus(self, total_deployments: int) -> float:
        for threshold, bonus in self.VOLUME_BANDS:
            if total_deployments >= threshold:
                return bonus
        return self.VOLUME_FLOOR_BONUS

    def _success_rate_bonus(self, success_rate: float) -> float:
        for threshold, bonus in self.SUCCESS_RATE_BANDS:
            if success_rate >= threshold:
                return bonus
        # No bonus or penalty below 60%
        return 0.0
