# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-01-30
# Description: SearchResult
# -----------------------------------------------------------------------------
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Set

from corpus.QuestionRecord import QuestionRecord
from matching.KeywordExtractor import extract_keywords
from matching.MatchClassifier import MatchType


@dataclass
class SearchResult:
    """One ranked hit of a query. Holds a reference to the record, never a copy."""
    record: QuestionRecord
    match_type: MatchType
    similarity: Optional[float] = None
    _keywords: Optional[Set[str]] = field(default=None, repr=False, compare=False)

    @property
    def question(self) -> str:
        return self.record.display_text

    @property
    def keywords(self) -> Set[str]:
        if self._keywords is None:
            self._keywords = extract_keywords(self.question)
        return self._keywords

    def to_dict(self) -> Dict[str, Any]:
        r = self.record
        return {
            "id": r.id,
            "question": self.question,
            "original_question": r.raw_text if r.canonical_text else None,
            "question_url": r.question_url,
            "answer": r.answer,
            "company": r.company,
            "role": r.role,
            "match_type": self.match_type.value,
            "similarity": self.similarity,
        }
