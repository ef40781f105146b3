# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-01-29
# Description: SimilaritySearcher
# -----------------------------------------------------------------------------
from typing import List, Sequence, Tuple

import numpy as np


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """Cosine of two vectors; 0.0 when either has zero norm or dimensions differ."""
    va = np.asarray(a, dtype=np.float64)
    vb = np.asarray(b, dtype=np.float64)
    if va.shape != vb.shape or va.size == 0:
        return 0.0
    denom = float(np.linalg.norm(va) * np.linalg.norm(vb))
    if denom == 0.0:
        return 0.0
    return float(np.dot(va, vb) / denom)


def top_k(
    query_vector: Sequence[float],
    corpus_vectors: Sequence[Tuple[str, Sequence[float]]],
    k: int,
) -> List[Tuple[str, float]]:
    """
    Exact linear-scan K-NN by cosine similarity.

    Returns at most k (id, score) pairs, highest score first; equal scores keep
    corpus order. Vectors whose dimension differs from the query score 0.0.
    """
    if k <= 0 or not corpus_vectors:
        return []

    q = np.asarray(query_vector, dtype=np.float64)
    q_norm = float(np.linalg.norm(q))
    dim = q.shape[0] if q.ndim == 1 else -1

    scores = np.zeros(len(corpus_vectors), dtype=np.float64)
    same_dim = [i for i, (_, v) in enumerate(corpus_vectors) if len(v) == dim]

    if q_norm > 0.0 and same_dim:
        matrix = np.asarray([corpus_vectors[i][1] for i in same_dim], dtype=np.float64)
        norms = np.linalg.norm(matrix, axis=1)
        dots = matrix @ q
        with np.errstate(divide="ignore", invalid="ignore"):
            sims = np.where(norms > 0.0, dots / (norms * q_norm), 0.0)
        scores[same_dim] = np.clip(sims, -1.0, 1.0)

    # stable sort on the negated score keeps corpus order for ties
    order = np.argsort(-scores, kind="stable")[:k]
    return [(corpus_vectors[i][0], float(scores[i])) for i in order]
