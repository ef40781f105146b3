# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2025-12-07
# Description: stats.py
# -----------------------------------------------------------------------------
from typing import Optional

from pydantic import BaseModel


class CorpusStatsResponse(BaseModel):
    total_questions: int
    canonicalised: int
    embedded: int
    url_questions: int
    pending: int
    malformed: int = 0
    embedding_dimension: Optional[int] = None
    companies: int = 0
    roles: int = 0
