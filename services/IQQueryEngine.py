# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-02
# Updated: 2026-10-19
# Description: IQQueryEngine
# -----------------------------------------------------------------------------
import logging
from typing import Dict, List, Optional, Sequence

from corpus.IQCorpusStore import IQCorpusStore
from corpus.QuestionRecord import QuestionRecord
from corpus.SearchResult import SearchResult
from embedding.IQEmbedder import EmbeddingProvider
from matching.DedupFilter import DedupFilter
from matching.MatchClassifier import MatchClassifier
from matching.SimilaritySearcher import top_k
from utility.errors import ProviderError
from utility.logging_utils import get_class_logger


def _clean(value: Optional[str]) -> str:
    return (value or "").strip()


class IQQueryEngine:
    """
    Query-time matcher:
        - free text: embed query -> cosine top-K -> classify -> dedup
        - filters only: classify every record -> dedup
    Results are ordered by tier (exact, company, role), then by similarity.
    min_similarity=None keeps every top-K hit; reported similarity is clamped to [0, 1].
    """

    def __init__(
        self,
        *,
        store: IQCorpusStore,
        embedder: EmbeddingProvider,
        top_k: int = 50,
        min_similarity: Optional[float] = None,
        dedup_threshold: float = 0.5,
        logger: logging.Logger | None = None,
    ) -> None:
        if top_k < 1:
            raise ValueError(f"top_k must be >= 1, got {top_k}")
        self.store = store
        self.embedder = embedder
        self.top_k = top_k
        self.min_similarity = min_similarity
        self.dedup = DedupFilter(threshold=dedup_threshold)
        self.logger = logger or get_class_logger(self.__class__)

    def search(
        self,
        company: Optional[str] = None,
        role: Optional[str] = None,
        query: Optional[str] = None,
        *,
        corpus: Optional[Sequence[QuestionRecord]] = None,
    ) -> List[SearchResult]:
        company, role, query = _clean(company), _clean(role), _clean(query)
        self.logger.info(
            "search: company='%s' role='%s' query='%s' (start)", company, role, query[:120]
        )

        if not (company or role or query):
            self.logger.info("search: no filters and no query -> 0 results")
            return []

        records = list(corpus) if corpus is not None else self.store.read_all()
        classifier = MatchClassifier(company, role)

        if query:
            candidates = self._semantic_candidates(query, records, classifier)
        else:
            candidates = self._filter_candidates(records, classifier)

        # tier first, then best similarity; sorted() is stable for equal keys
        candidates.sort(key=lambda r: (r.match_type.priority, -(r.similarity or 0.0)))
        results = self.dedup.dedup(candidates)

        self.logger.info(
            "search: %d candidates -> %d results (done)", len(candidates), len(results)
        )
        return results

    def _filter_candidates(
        self,
        records: Sequence[QuestionRecord],
        classifier: MatchClassifier,
    ) -> List[SearchResult]:
        out: List[SearchResult] = []
        for record in records:
            if record.is_malformed:
                continue
            match_type = classifier.classify(record)
            if match_type is not None:
                out.append(SearchResult(record=record, match_type=match_type))
        return out

    def _semantic_candidates(
        self,
        query: str,
        records: Sequence[QuestionRecord],
        classifier: MatchClassifier,
    ) -> List[SearchResult]:
        try:
            query_vector = self.embedder.embed(query)
        except ProviderError:
            self.logger.error("search: query embedding failed for query='%s'", query[:120])
            raise
        except Exception as e:
            self.logger.exception("search: query embedding failed: %s", e)
            raise ProviderError("embedder", str(e)) from e

        by_id: Dict[str, QuestionRecord] = {}
        vectors = []
        for record in records:
            if record.has_embedding and not record.is_malformed and record.id not in by_id:
                by_id[record.id] = record
                vectors.append((record.id, record.embedding))

        hits = top_k(query_vector, vectors, self.top_k)
        self.logger.debug("search: top-%d over %d vectors -> %d hits", self.top_k, len(vectors), len(hits))

        out: List[SearchResult] = []
        for record_id, score in hits:
            if self.min_similarity is not None and score <= self.min_similarity:
                continue
            record = by_id[record_id]
            match_type = classifier.classify(record)
            if match_type is None:
                continue
            similarity = min(max(score, 0.0), 1.0)
            out.append(SearchResult(record=record, match_type=match_type, similarity=similarity))
        return out
