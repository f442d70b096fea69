"""Use case for alert impact analysis.

Orchestrates the impact analysis workflow:
1. Infer alert type and affected services from the alert name
2. Check whether the alert already exists in the account
3. Fetch the historical baseline (retried on transient failures)
4. Delegate to ImpactAnalysisService for scoring
5. Store the analysis record and return a structured response
"""

import asyncio
import logging
import time

from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from src.application.dtos.impact_analysis_dto import (
    ImpactAnalysisDTO,
    ImpactAnalysisRequest,
    ImpactAnalysisResponse,
)
from src.domain.entities.alert_impact import AlertContext, AlertType, HistoricalData
from src.domain.entities.impact_analysis_record import ImpactAnalysisRecord
from src.domain.repositories.alert_repository import AlertRepositoryInterface
from src.domain.repositories.historical_data_provider import (
    HistoricalDataProviderInterface,
    HistoricalDataUnavailableError,
)
from src.domain.repositories.impact_analysis_repository import (
    ImpactAnalysisRepositoryInterface,
)
from src.domain.services.alert_classifier import AlertClassifier
from src.domain.services.impact_analysis_service import ImpactAnalysisService
from src.infrastructure.observability.metrics import (
    record_historical_data_failure,
    record_impact_analysis,
)
from src.infrastructure.observability.tracing import get_tracer

logger = logging.getLogger(__name__)
tracer = get_tracer(__name__)


class AnalysisTimeoutError(Exception):
    """Impact analysis did not complete within the configured time budget."""

    def __init__(self, timeout_seconds: float):
        self.timeout_seconds = timeout_seconds
        super().__init__(
            f"Impact analysis took longer than {timeout_seconds:g} seconds"
        )


class RunImpactAnalysisUseCase:
    """Run impact analysis for a proposed alert change."""

    def __init__(
        self,
        alert_repository: AlertRepositoryInterface,
        analysis_repository: ImpactAnalysisRepositoryInterface,
        historical_data_provider: HistoricalDataProviderInterface,
        impact_analysis_service: ImpactAnalysisService,
        alert_classifier: AlertClassifier | None = None,
        timeout_seconds: float = 10.0,
        max_attempts: int = 3,
        retry_wait_seconds: float = 0.5,
    ):
        self._alert_repo = alert_repository
        self._analysis_repo = analysis_repository
        self._history = historical_data_provider
        self._impact_service = impact_analysis_service
        self._classifier = alert_classifier or AlertClassifier()
        self._timeout_seconds = timeout_seconds
        self._max_attempts = max_attempts
        self._retry_wait_seconds = retry_wait_seconds

    async def execute(self, request: ImpactAnalysisRequest) -> ImpactAnalysisResponse:
        """Execute impact analysis.

        Args:
            request: The impact analysis request

        Returns:
            ImpactAnalysisResponse with the engine output

        Raises:
            AnalysisTimeoutError: If the analysis exceeds the time budget
            HistoricalDataUnavailableError: If the baseline cannot be fetched
                after all retry attempts
        """
        try:
            return await asyncio.wait_for(
                self._run(request), timeout=self._timeout_seconds
            )
        except asyncio.TimeoutError as e:
            logger.warning(
                "Impact analysis timed out",
                extra={
                    "alert_name": request.alert_name,
                    "timeout_seconds": self._timeout_seconds,
                },
            )
            raise AnalysisTimeoutError(self._timeout_seconds) from e

    async def _run(self, request: ImpactAnalysisRequest) -> ImpactAnalysisResponse:
        start_time = time.perf_counter()

        with tracer.start_as_current_span("impact_analysis.run") as span:
            span.set_attribute("alert.name", request.alert_name)

            # Step 1: Infer alert type and services from the name
            classification = self._classifier.classify(request.alert_name)
            span.set_attribute("alert.type", classification.alert_type.value)

            # Step 2: Check whether the alert already exists
            alert_exists = await self._alert_repo.alert_exists(
                request.alert_name, request.account_id
            )

            # Step 3: Fetch historical baseline
            historical_data = await self._fetch_historical_data(
                classification.alert_type, list(classification.affected_services)
            )

            # Step 4: Score
            context = AlertContext(
                alert_name=request.alert_name,
                alert_type=classification.alert_type,
                affected_services=classification.affected_services,
                historical_data=historical_data,
            )
            result = self._impact_service.analyze_impact(context)
            span.set_attribute("impact.risk_level", result.risk_level.value)

            # Step 5: Store
            record = await self._analysis_repo.save(
                ImpactAnalysisRecord(
                    alert_name=request.alert_name,
                    user_id=request.user_id,
                    account_id=request.account_id,
                    alert_type=classification.alert_type,
                    affected_services=list(classification.affected_services),
                    alert_exists=alert_exists,
                    result=result,
                )
            )

        duration = time.perf_counter() - start_time
        record_impact_analysis(result.risk_level.value, duration)

        logger.info(
            "Impact analysis completed",
            extra={
                "analysis_id": str(record.analysis_id),
                "alert_type": classification.alert_type.value,
                "risk_level": result.risk_level.value,
                "customers_affected": result.customers_affected,
                "duration_ms": round(duration * 1000, 2),
            },
        )

        return self.to_response(record)

    async def _fetch_historical_data(
        self, alert_type: AlertType, affected_services: list[str]
    ) -> HistoricalData:
        """Fetch the historical baseline, retrying transient failures."""
        try:
            async for attempt in AsyncRetrying(
                retry=retry_if_exception_type(HistoricalDataUnavailableError),
                stop=stop_after_attempt(self._max_attempts),
                wait=wait_exponential(
                    multiplier=self._retry_wait_seconds,
                    max=self._retry_wait_seconds * 4,
                ),
                reraise=True,
            ):
                with attempt:
                    return await self._history.get_historical_data(
                        alert_type, affected_services
                    )
        except HistoricalDataUnavailableError:
            record_historical_data_failure(alert_type.value)
            logger.error(
                "Historical data unavailable after retries",
                extra={"alert_type": alert_type.value, "attempts": self._max_attempts},
            )
            raise

    @staticmethod
    def to_response(record: ImpactAnalysisRecord) -> ImpactAnalysisResponse:
        """Convert a stored record to a response DTO."""
        result = record.result
        return ImpactAnalysisResponse(
            analysis_id=str(record.analysis_id),
            alert_name=record.alert_name,
            alert_type=record.alert_type.value,
            affected_services=list(record.affected_services),
            alert_exists=record.alert_exists,
            impact_analysis=ImpactAnalysisDTO(
                customers_affected=result.customers_affected,
                risk_level=result.risk_level.value,
                critical_services=list(result.critical_services),
                dependent_alerts=list(result.dependent_alerts),
                estimated_downtime=result.estimated_downtime,
                confidence_score=result.confidence_score,
                recommendations=list(result.recommendations),
            ),
            analyzed_at=record.analyzed_at,
        )
