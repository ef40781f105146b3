# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2025-12-20
# Description: AppContainer.py
# -----------------------------------------------------------------------------
import threading

import settings
from canonicalize.IQCanonicalizer import OpenAICanonicalizer
from chat.OpenAIChat import OpenAIChat
from config.Config import Config
from corpus.BlobIQCorpusStore import BlobIQCorpusStore
from corpus.LocalIQCorpusStore import LocalIQCorpusStore
from embedding.IQEmbedder import IQEmbedder
from health.TestRunner import TestRunner
from services.IQBatchProcessor import IQBatchProcessor
from services.IQHealthService import IQHealthService
from services.IQQueryEngine import IQQueryEngine
from services.IQStatsService import IQStatsService
from utility.logging_utils import get_logger

logger = get_logger(__name__)


class AppContainer:
    """
    Owns heavy object instantiation and application wiring.
    Singleton instances are provided via FastAPI dependencies.
    """

    def __init__(self) -> None:
        # Configuration
        local_corpus = settings.CORPUS_LOCAL_PATH
        self.cfg = Config.from_env(require_storage=not local_corpus)
        logger.info("AppContainer config: %s", self.cfg.summary())

        # Corpus storage: local CSV for development, blob CSV otherwise
        if local_corpus:
            self.store = LocalIQCorpusStore(local_corpus)
        else:
            self.store = BlobIQCorpusStore(
                self.cfg,
                container=settings.CORPUS_CONTAINER,
                blob_name=settings.CORPUS_BLOB,
            )

        # External providers
        self.openai_chat = OpenAIChat(cfg=self.cfg)
        self.canonicalizer = OpenAICanonicalizer(self.openai_chat)
        self.embedder = IQEmbedder(cfg=self.cfg, max_retries=settings.EMBED_MAX_RETRIES)

        # Return a singleton IQBatchProcessor instance
        self.batch_processor = IQBatchProcessor(
            store=self.store,
            canonicalizer=self.canonicalizer,
            embedder=self.embedder,
            batch_size=settings.BATCH_SIZE,
            pause_seconds=settings.BATCH_PAUSE_SECONDS,
            max_workers=settings.BATCH_MAX_WORKERS,
            progress_queue_size=settings.PROGRESS_QUEUE_SIZE,
        )

        # Return a singleton IQQueryEngine instance
        self.query_engine = IQQueryEngine(
            store=self.store,
            embedder=self.embedder,
            top_k=settings.SEARCH_TOP_K,
            min_similarity=settings.SEARCH_MIN_SIMILARITY,
            dedup_threshold=settings.DEDUP_JACCARD_THRESHOLD,
        )

        # Return a singleton IQStatsService instance
        self.stats_service = IQStatsService(store=self.store)

        # Smoke tests / health
        self.test_runner = TestRunner(
            store=self.store,
            embedder=self.embedder,
            chat_client=self.openai_chat,
        )
        self.health_service = IQHealthService(test_runner=self.test_runner)


_container: AppContainer | None = None
_container_lock = threading.Lock()


def get_app_container() -> AppContainer:
    """Build the container on first use so importing the API needs no credentials."""
    global _container
    if _container is None:
        with _container_lock:
            if _container is None:
                _container = AppContainer()
    return _container
