"""Alert impact analysis API routes.

Implements POST /api/v1/alerts/impact-analysis for estimating the customer
impact of changing an alert, and GET /api/v1/alerts/impact-analysis/recent
for listing the caller's recent analyses.
"""

import logging

from fastapi import APIRouter, Depends, Query, Request, status

from src.application.dtos.impact_analysis_dto import (
    ImpactAnalysisRequest,
    ImpactAnalysisResponse,
)
from src.application.use_cases.get_recent_analyses import GetRecentAnalysesUseCase
from src.application.use_cases.run_impact_analysis import RunImpactAnalysisUseCase
from src.infrastructure.api.dependencies import (
    get_recent_analyses_use_case,
    get_run_impact_analysis_use_case,
)
from src.infrastructure.api.middleware.auth import (
    AuthenticatedClient,
    authorize_account,
    verify_api_key,
)
from src.infrastructure.api.schemas.error_schema import ProblemDetails
from src.infrastructure.api.schemas.impact_analysis_schema import (
    ImpactAnalysisApiModel,
    ImpactAnalysisApiRequest,
    ImpactAnalysisApiResponse,
    RecentAnalysesApiResponse,
)
from src.infrastructure.config import get_settings

logger = logging.getLogger(__name__)

router = APIRouter()


def to_api_response(result: ImpactAnalysisResponse) -> ImpactAnalysisApiResponse:
    """Convert a use case response DTO to the API model."""
    analysis = result.impact_analysis
    return ImpactAnalysisApiResponse(
        analysis_id=result.analysis_id,
        alert_name=result.alert_name,
        alert_type=result.alert_type,
        affected_services=result.affected_services,
        alert_exists=result.alert_exists,
        impact_analysis=ImpactAnalysisApiModel(
            customers_affected=analysis.customers_affected,
            risk_level=analysis.risk_level,
            critical_services=analysis.critical_services,
            dependent_alerts=analysis.dependent_alerts,
            estimated_downtime=analysis.estimated_downtime,
            confidence_score=analysis.confidence_score,
            recommendations=analysis.recommendations,
        ),
        analyzed_at=result.analyzed_at,
    )


@router.post(
    "/impact-analysis",
    response_model=ImpactAnalysisApiResponse,
    status_code=status.HTTP_200_OK,
    summary="Analyze the customer impact of changing an alert",
    description=(
        "Infers the alert's type and affected services from its name, then "
        "estimates affected customers, risk tier, dependent alerts, downtime "
        "and confidence, and returns prioritized recommendations."
    ),
    responses={
        200: {"description": "Impact analysis completed"},
        401: {"model": ProblemDetails, "description": "Missing or invalid API key"},
        403: {"model": ProblemDetails, "description": "Account not accessible"},
        408: {"model": ProblemDetails, "description": "Analysis timed out"},
        422: {"model": ProblemDetails, "description": "Invalid request"},
        429: {"model": ProblemDetails, "description": "Rate limit exceeded"},
        503: {"model": ProblemDetails, "description": "Historical data unavailable"},
    },
)
async def run_impact_analysis(
    body: ImpactAnalysisApiRequest,
    request: Request,
    client: AuthenticatedClient = Depends(verify_api_key),
    use_case: RunImpactAnalysisUseCase = Depends(get_run_impact_analysis_use_case),
) -> ImpactAnalysisApiResponse:
    """Run impact analysis for an alert change."""
    request.state.audit_resource_id = body.alert_name
    authorize_account(client, body.account_id)

    result = await use_case.execute(
        ImpactAnalysisRequest(
            alert_name=body.alert_name,
            user_id=body.user_id,
            account_id=body.account_id,
            requested_at=body.timestamp,
        )
    )
    return to_api_response(result)


@router.get(
    "/impact-analysis/recent",
    response_model=RecentAnalysesApiResponse,
    status_code=status.HTTP_200_OK,
    summary="List recent impact analyses",
    description="Lists the most recent impact analyses of the caller's account, newest first.",
    responses={
        401: {"model": ProblemDetails, "description": "Missing or invalid API key"},
    },
)
async def list_recent_analyses(
    limit: int | None = Query(
        default=None, ge=1, le=100, description="Maximum number of analyses"
    ),
    client: AuthenticatedClient = Depends(verify_api_key),
    use_case: GetRecentAnalysesUseCase = Depends(get_recent_analyses_use_case),
) -> RecentAnalysesApiResponse:
    """List recent analyses of the caller's account."""
    result = await use_case.execute(
        account_id=client.account_id,
        limit=limit or get_settings().analysis.recent_analyses_limit,
    )
    return RecentAnalysesApiResponse(
        account_id=result.account_id,
        analyses=[to_api_response(a) for a in result.analyses],
    )
