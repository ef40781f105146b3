# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2025-12-21
# Updated: 2026-10-19
# Description: IQStatsService.py
# -----------------------------------------------------------------------------

import logging
from collections import Counter
from typing import Any, Dict

from corpus.IQCorpusStore import IQCorpusStore
from utility.logging_utils import get_class_logger


class IQStatsService:
    """
    Stats service for the /stats endpoint.

    Responsibilities:
      - read a corpus snapshot from the store
      - count canonicalised / embedded / URL / pending questions
      - count malformed rows (kept in the corpus, never processed)
      - report the embedding dimension(s) found
    """

    def __init__(
        self,
        *,
        store: IQCorpusStore,
        logger: logging.Logger | None = None,
    ) -> None:
        self.store = store
        self.logger = logger or get_class_logger(self.__class__)

    def get_stats(self) -> Dict[str, Any]:
        records = self.store.read_all()

        dims = Counter(len(r.embedding) for r in records if r.has_embedding)
        canonicalised = sum(1 for r in records if r.canonical_text)
        embedded = sum(1 for r in records if r.has_embedding)
        urls = sum(1 for r in records if r.is_url_question)
        malformed = sum(1 for r in records if r.is_malformed)
        pending = sum(1 for r in records if not r.is_processed and not r.is_malformed)
        valid = [r for r in records if not r.is_malformed]

        if len(dims) > 1:
            self.logger.warning("Corpus holds mixed embedding dimensions: %s", dict(dims))

        stats = {
            "total_questions": len(records),
            "canonicalised": canonicalised,
            "embedded": embedded,
            "url_questions": urls,
            "pending": pending,
            "malformed": malformed,
            "embedding_dimension": dims.most_common(1)[0][0] if dims else None,
            "companies": len({r.company.lower() for r in valid}),
            "roles": len({r.role.lower() for r in valid}),
        }
        self.logger.info("Corpus stats: %s", stats)
        return stats
