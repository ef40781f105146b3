# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-01-30
# Description: MatchClassifier
# -----------------------------------------------------------------------------
import re
from enum import Enum
from typing import Optional

from corpus.QuestionRecord import QuestionRecord

_ROLE_WORD_SPLIT = re.compile(r"[\s_-]+")
MIN_ROLE_WORD_LENGTH = 3


class MatchType(str, Enum):
    EXACT = "exact"
    COMPANY = "company"
    ROLE = "role"

    @property
    def priority(self) -> int:
        return _PRIORITY[self]


_PRIORITY = {MatchType.EXACT: 0, MatchType.COMPANY: 1, MatchType.ROLE: 2}


def _clean(value: Optional[str]) -> str:
    return (value or "").strip().lower()


def role_words_overlap(role_filter: str, role: str) -> bool:
    """
    True when any filter word longer than 2 characters appears inside a word of
    the record's role (words split on whitespace, hyphen and underscore).
    """
    filter_words = [w for w in _ROLE_WORD_SPLIT.split(_clean(role_filter)) if len(w) >= MIN_ROLE_WORD_LENGTH]
    role_words = [w for w in _ROLE_WORD_SPLIT.split(_clean(role)) if w]
    return any(fw in rw for fw in filter_words for rw in role_words)


class MatchClassifier:
    """
    Labels a record exact / company / role relative to company and role filters
    (case-insensitive substring match). Returns None for records that match
    neither filter.
    """

    def __init__(self, company_filter: Optional[str] = None, role_filter: Optional[str] = None) -> None:
        self.company_filter = _clean(company_filter)
        self.role_filter = _clean(role_filter)

    @property
    def has_filters(self) -> bool:
        return bool(self.company_filter or self.role_filter)

    def classify(self, record: QuestionRecord) -> Optional[MatchType]:
        if not self.has_filters:
            # free-text-only query: nothing to classify against
            return MatchType.EXACT

        company_match = bool(self.company_filter) and self.company_filter in _clean(record.company)
        role_match = bool(self.role_filter) and self.role_filter in _clean(record.role)

        if company_match and role_match:
            return MatchType.EXACT
        if company_match:
            return MatchType.COMPANY
        if self.role_filter and (role_match or role_words_overlap(self.role_filter, record.role)):
            return MatchType.ROLE
        return None
