# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2025-12-07
# Updated: 2026-10-19
# Description: health.py
# -----------------------------------------------------------------------------
from typing import Dict, List, Literal

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    status: Literal["ok"] = "ok"
    message: str


class SmokeTestSummary(BaseModel):
    total: int = Field(..., ge=0)
    passed: int = Field(..., ge=0)
    failed: int = Field(..., ge=0)


class DeepHealthResponse(BaseModel):
    # "error" as soon as one of corpus_store / embedding / chat fails
    status: Literal["ok", "error"]
    results: Dict[str, bool] = Field(
        ..., description="check name -> passed, e.g. {'corpus_store': true, 'embedding': true}"
    )
    failing: List[str] = Field(
        default_factory=list, description="names of the failing checks, sorted"
    )
    chat_checked: bool = Field(
        False, description="whether the canonicalisation chat model was checked"
    )
    summary: SmokeTestSummary
