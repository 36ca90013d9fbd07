"""Health check endpoints for monitoring and deployment verification."""

import time

from fastapi import APIRouter, Response, status

from enhanced_commerce.core.supabase import check_database_connection
from enhanced_commerce.schemas.common import HealthResponse, ReadinessResponse, StoreCheck

router = APIRouter(tags=["health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Liveness check",
    description="Basic health check to verify the service is running. Used for liveness probes.",
)
async def health_check() -> HealthResponse:
    """Return basic health status.

    Always returns 200 while the service is running; the store is not checked.
    """
    return HealthResponse()


@router.get(
    "/health/ready",
    response_model=ReadinessResponse,
    responses={
        200: {"description": "Store reachable"},
        503: {"description": "Store unreachable"},
    },
    summary="Readiness check",
    description="Check if the document store is reachable. Used for readiness probes.",
)
async def readiness_check(response: Response) -> ReadinessResponse:
    """Check readiness of the document store, returning 503 if it is unreachable."""
    start_time = time.perf_counter()
    db_result = await check_database_connection()
    latency_ms = (time.perf_counter() - start_time) * 1000

    store = StoreCheck(
        healthy=db_result["healthy"],
        latency_ms=round(latency_ms, 2),
        error=db_result.get("error"),
    )
    if not store.healthy:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    return ReadinessResponse(status="healthy" if store.healthy else "unhealthy", store=store)
