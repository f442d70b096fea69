"""
Health check endpoints.

Provides liveness and readiness probes for Kubernetes.
Also provides Prometheus metrics endpoint.
"""

from fastapi import APIRouter, Response, status
from fastapi.responses import JSONResponse

from src.infrastructure.api.dependencies import get_impact_analysis_service
from src.infrastructure.observability.metrics import get_metrics_content

router = APIRouter()


@router.get(
    "/health",
    status_code=status.HTTP_200_OK,
    summary="Liveness probe",
    description="Check if the service is alive",
    tags=["Health"],
)
async def liveness() -> dict:
    """
    Liveness probe - check if the process is running.

    This endpoint always returns 200 if the process is alive.
    """
    return {
        "status": "healthy",
        "service": "alert-impact-engine",
    }


@router.get(
    "/health/ready",
    status_code=status.HTTP_200_OK,
    summary="Readiness probe",
    description="Check if the service is ready to accept traffic",
    tags=["Health"],
    responses={
        200: {"description": "Service is ready"},
        503: {"description": "Service registry not loaded"},
    },
)
async def readiness() -> JSONResponse:
    """
    Readiness probe - check if the scoring engine can serve requests.

    The engine is ready once its service registry lists at least one
    critical service.
    """
    registry = get_impact_analysis_service().registry
    checks = {
        "service_registry": "healthy" if registry.critical_services else "unhealthy",
    }

    if all(v == "healthy" for v in checks.values()):
        return JSONResponse(
            status_code=status.HTTP_200_OK,
            content={"status": "ready", "checks": checks},
        )
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"status": "not_ready", "checks": checks},
    )


@router.get(
    "/metrics",
    status_code=status.HTTP_200_OK,
    summary="Prometheus metrics",
    description="Export Prometheus metrics in exposition format",
    tags=["Observability"],
    response_class=Response,
)
async def metrics() -> Response:
    """Prometheus metrics endpoint."""
    metrics_bytes, content_type = get_metrics_content()
    return Response(content=metrics_bytes, media_type=content_type)
