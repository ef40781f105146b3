# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2025-12-07
# Updated: 2026-02-03
# Description: health.py
# -----------------------------------------------------------------------------
import logging

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from api.dependencies import get_health_service
from api.schemas.health import DeepHealthResponse, HealthResponse
from services.IQHealthService import IQHealthService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/health", tags=["health"])


@router.get("/", response_model=HealthResponse)
async def liveness() -> HealthResponse:
    # process is up; says nothing about the store or the providers
    return HealthResponse(message="IQMATCH API running")


@router.get("/deep", response_model=DeepHealthResponse)
def deep_health_check(
    response: Response,
    run_chat: bool = Query(True, description="Include the (billable) chat completion check"),
    svc: IQHealthService = Depends(get_health_service),
) -> DeepHealthResponse:
    logger.info("GET /health/deep (start) run_chat=%s", run_chat)
    try:
        result = svc.deep_health(run_chat=run_chat)
    except Exception as e:
        logger.exception("GET /health/deep -> 500: %s", e)
        raise HTTPException(status_code=500, detail=f"deep health failed: {e}")

    if result.status != "ok":
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    logger.info("GET /health/deep (done) status=%s failed=%d", result.status, result.summary.failed)
    return result
