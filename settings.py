# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-01-09
# Updated: 2026-10-19
# Description: settings.py
# -----------------------------------------------------------------------------
import os
from typing import Optional


def _env(name: str, default: str = "") -> str:
    """Read env var safely and strip whitespace."""
    return (os.getenv(name) or default).strip()


def _env_int(name: str, default: int) -> int:
    v = _env(name, "")
    if v == "":
        return default
    try:
        return int(v)
    except ValueError as e:
        raise RuntimeError(f"Env var {name} must be an int, got {v!r}") from e


def _env_float(name: str, default: Optional[float]) -> Optional[float]:
    v = _env(name, "")
    if v == "":
        return default
    try:
        return float(v)
    except ValueError as e:
        raise RuntimeError(f"Env var {name} must be a float, got {v!r}") from e


# -----------------------------------------------------------------------------
# Corpus storage
# -----------------------------------------------------------------------------
CORPUS_CONTAINER = _env("IQ_CORPUS_CONTAINER", "questions")
CORPUS_BLOB = _env("IQ_CORPUS_BLOB", "dsml.csv")

# When set, the corpus is a local CSV file and blob storage is not used
CORPUS_LOCAL_PATH = _env("IQ_CORPUS_LOCAL_PATH", "")


# -----------------------------------------------------------------------------
# Batch processing
# -----------------------------------------------------------------------------
BATCH_SIZE = _env_int("IQ_BATCH_SIZE", 5)
BATCH_PAUSE_SECONDS = _env_float("IQ_BATCH_PAUSE_SECONDS", 1.0)

# 0 means "one worker per record in the batch"
BATCH_MAX_WORKERS = _env_int("IQ_BATCH_MAX_WORKERS", 0)

PROGRESS_QUEUE_SIZE = _env_int("IQ_PROGRESS_QUEUE_SIZE", 100)

EMBED_MAX_RETRIES = _env_int("IQ_EMBED_MAX_RETRIES", 3)


# -----------------------------------------------------------------------------
# Search
# -----------------------------------------------------------------------------
SEARCH_TOP_K = _env_int("IQ_SEARCH_TOP_K", 50)
# unset: every top-K hit in a matching tier is kept; set: hits scoring <= it are dropped
SEARCH_MIN_SIMILARITY = _env_float("IQ_SEARCH_MIN_SIMILARITY", None)
DEDUP_JACCARD_THRESHOLD = _env_float("IQ_DEDUP_JACCARD_THRESHOLD", 0.5)


# -----------------------------------------------------------------------------
# Sanity checks (tunable)
# -----------------------------------------------------------------------------
if BATCH_SIZE < 1:
    raise RuntimeError(f"IQ_BATCH_SIZE must be >= 1, got {BATCH_SIZE}")

if BATCH_PAUSE_SECONDS < 0:
    raise RuntimeError(f"IQ_BATCH_PAUSE_SECONDS must be >= 0, got {BATCH_PAUSE_SECONDS}")

if PROGRESS_QUEUE_SIZE < 1:
    raise RuntimeError(f"IQ_PROGRESS_QUEUE_SIZE must be >= 1, got {PROGRESS_QUEUE_SIZE}")

if SEARCH_TOP_K < 1:
    raise RuntimeError(f"IQ_SEARCH_TOP_K must be >= 1, got {SEARCH_TOP_K}")

if SEARCH_MIN_SIMILARITY is not None and not -1.0 <= SEARCH_MIN_SIMILARITY <= 1.0:
    raise RuntimeError(
        f"IQ_SEARCH_MIN_SIMILARITY must be within [-1, 1], got {SEARCH_MIN_SIMILARITY}"
    )

if not 0.0 <= DEDUP_JACCARD_THRESHOLD <= 1.0:
    raise RuntimeError(
        f"IQ_DEDUP_JACCARD_THRESHOLD must be within [0, 1], got {DEDUP_JACCARD_THRESHOLD}"
    )

if not CORPUS_LOCAL_PATH and not CORPUS_CONTAINER:
    raise RuntimeError("CORPUS_CONTAINER resolved to empty value")
