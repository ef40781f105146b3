# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-01-30
# Description: DedupFilter
# -----------------------------------------------------------------------------
import logging
from typing import List, Sequence, Set

from corpus.SearchResult import SearchResult
from matching.KeywordExtractor import jaccard_similarity, normalize_text
from utility.logging_utils import get_class_logger


class DedupFilter:
    """
    Greedy near-duplicate suppression over one query's results.

    Candidates are walked tier first (exact, company, role), keeping incoming
    order inside a tier. A candidate is dropped when its normalised text equals
    an emitted one, or when its keyword Jaccard overlap with any emitted result
    exceeds the threshold.
    """

    def __init__(self, threshold: float = 0.5, *, logger: logging.Logger | None = None) -> None:
        if not 0.0 <= threshold <= 1.0:
            raise ValueError(f"threshold must be within [0, 1], got {threshold}")
        self.threshold = threshold
        self.logger = logger or get_class_logger(self.__class__)

    def dedup(self, results: Sequence[SearchResult]) -> List[SearchResult]:
        if len(results) <= 1:
            return list(results)

        ordered = sorted(results, key=lambda r: r.match_type.priority)

        seen_texts: Set[str] = set()
        emitted: List[SearchResult] = []
        for candidate in ordered:
            key = normalize_text(candidate.question)
            if key in seen_texts:
                continue
            if self._is_near_duplicate(candidate, emitted):
                continue
            seen_texts.add(key)
            emitted.append(candidate)

        if len(emitted) != len(results):
            self.logger.debug("dedup: %d -> %d results", len(results), len(emitted))
        return emitted

    def _is_near_duplicate(self, candidate: SearchResult, emitted: Sequence[SearchResult]) -> bool:
        keywords = candidate.keywords
        if not keywords:
            return False
        return any(
            jaccard_similarity(keywords, kept.keywords) > self.threshold
            for kept in emitted
        )
