# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-01-29
# Updated: 2026-10-19
# Description: KeywordExtractor
# -----------------------------------------------------------------------------
import re
from typing import FrozenSet, Set

_PUNCTUATION = re.compile(r"[^\w\s]")
_WHITESPACE = re.compile(r"\s+")

STOP_WORDS: FrozenSet[str] = frozenset({
    "a", "an", "the", "and", "or", "but",
    "is", "are", "was", "were",
    "in", "on", "at", "to", "for", "with", "by", "about", "as", "of",
    "how", "what", "when", "where", "why", "who", "which",
    "would", "could", "should",
    "do", "does", "did", "have", "has", "had", "can", "will",
    "you", "your", "this", "that", "from",
})

MIN_KEYWORD_LENGTH = 3


def extract_keywords(text: str) -> Set[str]:
    """
    Lowercase, strip punctuation, split on whitespace, drop stop words and
    tokens of 2 characters or fewer.
    """
    if not text:
        return set()
    words = _PUNCTUATION.sub("", text.lower()).split()
    return {w for w in words if len(w) >= MIN_KEYWORD_LENGTH and w not in STOP_WORDS}


def normalize_text(text: str) -> str:
    """
    Comparison key for exact-duplicate detection: lowercased, punctuation
    stripped, runs of whitespace collapsed to one space, ends trimmed.
    Word boundaries survive: "a bc d" and "ab cd" stay distinct.
    """
    if not text:
        return ""
    return _WHITESPACE.sub(" ", _PUNCTUATION.sub("", text.lower())).strip()


def jaccard_similarity(a: Set[str], b: Set[str]) -> float:
    union = a | b
    if not union:
        return 0.0
    return len(a & b) / len(union)
