# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2025-12-07
# Description: stats.py
# -----------------------------------------------------------------------------
import logging

from fastapi import APIRouter, Depends, HTTPException

from api.dependencies import get_stats_service
from api.schemas.stats import CorpusStatsResponse
from services.IQStatsService import IQStatsService
from utility.errors import StoreUnavailable

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/stats",
    tags=["stats"]
)

@router.get("", response_model=CorpusStatsResponse)
def get_corpus_stats(
    svc: IQStatsService = Depends(get_stats_service),
) -> CorpusStatsResponse:
    logger.info("Getting corpus stats")
    try:
        return CorpusStatsResponse(**svc.get_stats())
    except StoreUnavailable as e:
        logger.error("GET /stats -> 503: %s", e)
        raise HTTPException(status_code=503, detail=f"corpus unavailable: {e}")
