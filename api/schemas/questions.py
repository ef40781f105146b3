# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-03
# Description: questions.py
# -----------------------------------------------------------------------------
from typing import List, Literal, Optional

from pydantic import BaseModel, Field


class QuestionHit(BaseModel):
    id: str
    question: str
    original_question: Optional[str] = None
    question_url: Optional[str] = None
    answer: Optional[str] = None
    company: str
    role: str
    match_type: Literal["exact", "company", "role"]
    similarity: Optional[float] = Field(None, ge=0.0, le=1.0)


class QuestionSearchResponse(BaseModel):
    company: Optional[str] = None
    role: Optional[str] = None
    query: Optional[str] = None
    count: int
    results: List[QuestionHit]
