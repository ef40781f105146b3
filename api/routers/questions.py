# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-03
# Description: questions router
# -----------------------------------------------------------------------------
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from api.dependencies import get_query_engine
from api.schemas.questions import QuestionHit, QuestionSearchResponse
from services.IQQueryEngine import IQQueryEngine
from utility.errors import ProviderError, StoreUnavailable

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/questions", tags=["questions"])


@router.get("", response_model=QuestionSearchResponse)
def get_questions(
    company: Optional[str] = Query(None, max_length=200),
    role: Optional[str] = Query(None, max_length=200),
    query: Optional[str] = Query(None, max_length=2000),
    engine: IQQueryEngine = Depends(get_query_engine),
) -> QuestionSearchResponse:
    logger.info("GET /questions (start) company='%s' role='%s' query_len=%d",
                company or "", role or "", len(query or ""))

    try:
        results = engine.search(company=company, role=role, query=query)
    except ProviderError as e:
        logger.error("GET /questions -> 502 query embedding failed: %s", e)
        raise HTTPException(status_code=502, detail=f"query embedding failed: {e}")
    except StoreUnavailable as e:
        logger.error("GET /questions -> 503 corpus unavailable: %s", e)
        raise HTTPException(status_code=503, detail=f"corpus unavailable: {e}")
    except Exception as e:
        logger.exception("GET /questions -> 500: %s", e)
        raise HTTPException(status_code=500, detail=f"search failed: {e}")

    hits = [QuestionHit(**r.to_dict()) for r in results]
    logger.info("GET /questions (done) count=%d", len(hits))
    return QuestionSearchResponse(
        company=company,
        role=role,
        query=query,
        count=len(hits),
        results=hits,
    )
