# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-01
# Updated: 2026-10-19
# Description: IQBatchProcessor.py
# -----------------------------------------------------------------------------
from __future__ import annotations

import dataclasses
import logging
import math
import threading
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, List, Optional, Sequence, Tuple

from canonicalize.IQCanonicalizer import TextCanonicalizer
from corpus.IQCorpusStore import IQCorpusStore
from corpus.QuestionRecord import QuestionRecord
from embedding.IQEmbedder import EmbeddingProvider
from utility.errors import ProcessingInProgress, ProviderError
from utility.logging_utils import get_class_logger
from utility.progress import ProgressChannel, ProgressSink


class Outcome(str, Enum):
    SKIPPED = "skipped"
    URL = "url"
    PROCESSED = "processed"
    FAILED = "failed"


@dataclass
class BatchReport:
    records: List[QuestionRecord] = field(default_factory=list)
    total: int = 0
    batches: int = 0
    processed: int = 0
    skipped: int = 0
    urls: int = 0
    failed: int = 0

    def count(self, outcome: Outcome) -> None:
        if outcome is Outcome.PROCESSED:
            self.processed += 1
        elif outcome is Outcome.SKIPPED:
            self.skipped += 1
        elif outcome is Outcome.URL:
            self.urls += 1
        else:
            self.failed += 1

    def summary(self) -> dict:
        return {
            "total": self.total,
            "batches": self.batches,
            "processed": self.processed,
            "skipped": self.skipped,
            "urls": self.urls,
            "failed": self.failed,
        }


RecordResult = Tuple[QuestionRecord, Outcome, Optional[str]]


class IQBatchProcessor:
    """
    Owns the enrichment pipeline:
      - walk the corpus in fixed-size batches, in original order
      - canonicalise + embed every record of a batch concurrently
      - checkpoint the whole snapshot to the corpus store after each batch
      - pause between batches to bound the request rate

    Already-processed and malformed rows are passed through untouched, in
    place, so an interrupted run can simply be started again.
    """

    def __init__(
        self,
        *,
        store: IQCorpusStore,
        canonicalizer: TextCanonicalizer,
        embedder: EmbeddingProvider,
        batch_size: int = 5,
        pause_seconds: float = 1.0,
        max_workers: int = 0,
        progress_queue_size: int = 100,
        sleep: Callable[[float], None] = time.sleep,
        logger: logging.Logger | None = None,
    ) -> None:
        if batch_size < 1:
            raise ValueError(f"batch_size must be >= 1, got {batch_size}")
        self.store = store
        self.canonicalizer = canonicalizer
        self.embedder = embedder
        self.batch_size = batch_size
        self.pause_seconds = pause_seconds
        self.max_workers = max_workers
        self.progress_queue_size = progress_queue_size
        self.sleep = sleep
        self.logger = logger or get_class_logger(self.__class__)
        self._run_lock = threading.Lock()

    @property
    def is_running(self) -> bool:
        return self._run_lock.locked()

    def acquire_run(self) -> None:
        """Claim the single run slot, or raise ProcessingInProgress."""
        if not self._run_lock.acquire(blocking=False):
            raise ProcessingInProgress("a processing run is already active")

    def release_run(self) -> None:
        self._run_lock.release()

    def process_store(
        self,
        *,
        batch_size: Optional[int] = None,
        progress: Optional[ProgressSink] = None,
        force: bool = False,
        reserved: bool = False,
    ) -> BatchReport:
        """
        Load a fresh snapshot from the store and enrich it.
        reserved=True means the caller already holds the run slot (acquire_run);
        it is released when this call returns either way.
        """
        if not reserved:
            self.acquire_run()
        try:
            records = self.store.read_all()
        except BaseException:
            self.release_run()
            raise
        return self.run_with_report(
            records, batch_size=batch_size, progress=progress, force=force, reserved=True
        )

    def run(
        self,
        records: Sequence[QuestionRecord],
        batch_size: Optional[int] = None,
        progress: Optional[ProgressSink] = None,
        *,
        force: bool = False,
    ) -> List[QuestionRecord]:
        return self.run_with_report(records, batch_size=batch_size, progress=progress, force=force).records

    def run_with_report(
        self,
        records: Sequence[QuestionRecord],
        *,
        batch_size: Optional[int] = None,
        progress: Optional[ProgressSink] = None,
        force: bool = False,
        reserved: bool = False,
    ) -> BatchReport:
        if not reserved:
            self.acquire_run()
        try:
            with ProgressChannel(progress, maxsize=self.progress_queue_size) as channel:
                return self._run(list(records), batch_size or self.batch_size, channel, force)
        finally:
            self.release_run()

    # -------------------------------------------------------------------------
    def _run(
        self,
        records: List[QuestionRecord],
        batch_size: int,
        channel: ProgressChannel,
        force: bool,
    ) -> BatchReport:
        if batch_size < 1:
            raise ValueError(f"batch_size must be >= 1, got {batch_size}")

        total = len(records)
        total_batches = math.ceil(total / batch_size) if total else 0
        report = BatchReport(total=total)
        # a forced run re-embeds everything, so stored vectors do not bind the dimension
        expected_dim = None if force else self._corpus_dimension(records)

        self.logger.info(
            "Batch run (start) total=%d batch_size=%d batches=%d force=%s expected_dim=%s",
            total, batch_size, total_batches, force, expected_dim,
        )
        channel.notify(f"Found {total} questions to process")

        done: List[QuestionRecord] = []
        for batch_index, start in enumerate(range(0, total, batch_size), start=1):
            end = min(start + batch_size, total)
            batch = records[start:end]
            channel.notify(
                f"Processing batch {batch_index}/{total_batches} "
                f"({start + 1}-{end} of {total} questions)"
            )

            results = self._process_batch(batch, force, expected_dim)

            for record, outcome, message in results:
                report.count(outcome)
                if message:
                    channel.notify(message)
                if expected_dim is None and outcome is Outcome.PROCESSED:
                    expected_dim = len(record.embedding or [])
                done.append(record)

            # Checkpoint: processed-so-far plus the untouched tail
            self.store.write_all(done + records[end:])
            report.batches += 1

            remaining = total - len(done)
            channel.notify(f"Progress: {len(done)}/{total} questions processed ({remaining} remaining)")

            if end < total and self.pause_seconds > 0:
                self.sleep(self.pause_seconds)

        report.records = done
        if report.failed:
            channel.notify(f"Processing finished with {report.failed} failed question(s)")
        else:
            channel.notify("All questions processed successfully!")

        self.logger.info("Batch run (done) %s", report.summary())
        return report

    def _process_batch(
        self,
        batch: List[QuestionRecord],
        force: bool,
        expected_dim: Optional[int],
    ) -> List[RecordResult]:
        workers = self.max_workers or len(batch)
        workers = max(1, min(workers, len(batch)))
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="iq-batch") as pool:
            # map() yields results in submission order
            return list(pool.map(lambda r: self._process_record(r, force, expected_dim), batch))

    def _process_record(
        self,
        record: QuestionRecord,
        force: bool,
        expected_dim: Optional[int],
    ) -> RecordResult:
        if record.is_malformed:
            return record, Outcome.SKIPPED, (
                f"Skipping malformed row ({record.malformed}); it is kept unchanged"
            )

        if record.is_processed and not (force and not record.is_url_question):
            return record, Outcome.SKIPPED, (
                f"Skipping already processed question with ID {record.id} "
                "(has formatted question and embedding)"
            )

        if record.is_url_question:
            # URLs carry no natural-language content to embed
            return dataclasses.replace(record, canonical_text=record.raw_text, embedding=[]), Outcome.URL, None

        try:
            canonical = record.canonical_text
            if canonical:
                message = f"Generating new embedding using existing formatted question for ID {record.id}"
            else:
                message = f"Formatting and generating embedding for ID {record.id}"
                try:
                    canonical = self.canonicalizer.canonicalize(record.raw_text)
                except ProviderError as e:
                    self.logger.warning("Canonicalisation failed for id='%s'; using raw text: %s", record.id, e)
                    canonical = record.raw_text
                    message = f"Formatting failed for ID {record.id}; embedding original question"

            embedding = list(self.embedder.embed(canonical))
            if not embedding:
                raise ProviderError("embedder", "empty embedding returned")
            if expected_dim is not None and len(embedding) != expected_dim:
                raise ProviderError(
                    "embedder", f"dimension mismatch: expected {expected_dim}, got {len(embedding)}"
                )
        except Exception as e:
            self.logger.error("Failed processing question id='%s': %s", record.id, e, exc_info=True)
            return record, Outcome.FAILED, f"Error processing question {record.id}: {e}"

        return (
            dataclasses.replace(record, canonical_text=canonical, embedding=embedding),
            Outcome.PROCESSED,
            message,
        )

    @staticmethod
    def _corpus_dimension(records: Sequence[QuestionRecord]) -> Optional[int]:
        for r in records:
            if r.has_embedding:
                return len(r.embedding or [])
        return None


if __name__ == "__main__":
    import argparse

    from api.AppContainer import get_app_container

    parser = argparse.ArgumentParser(description="Canonicalise and embed the question corpus")
    parser.add_argument("--force", action="store_true", help="re-embed every non-URL question")
    parser.add_argument("--batch-size", type=int, default=None)
    args = parser.parse_args()

    processor = get_app_container().batch_processor
    result = processor.process_store(batch_size=args.batch_size, progress=print, force=args.force)
    print(result.summary())
