# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-01-27
# Updated: 2026-10-19
# Description: LocalIQCorpusStore
# -----------------------------------------------------------------------------
import logging
import os
import tempfile
import time
from pathlib import Path
from typing import List, Sequence

from corpus.IQCorpusStore import IQCorpusStore
from corpus.QuestionRecord import QuestionRecord
from corpus.corpus_csv import UNREADABLE_CORPUS_ERRORS, records_from_csv, records_to_csv
from utility.errors import StoreUnavailable
from utility.logging_utils import get_class_logger


class LocalIQCorpusStore(IQCorpusStore):
    """
    Corpus kept as a CSV file on local disk.
    Writes go to a temp file in the same directory and are swapped in with os.replace.
    """

    def __init__(self, path: str | Path, *, logger: logging.Logger | None = None) -> None:
        self.path = Path(path)
        self.logger = logger or get_class_logger(self.__class__)
        self.logger.info("LocalIQCorpusStore initialised (path=%s)", self.path)

    def test_connection(self) -> bool:
        parent = self.path.parent if str(self.path.parent) else Path(".")
        ok = parent.is_dir() and os.access(parent, os.W_OK)
        if not ok:
            self.logger.error("Corpus directory not writable: %s", parent)
        return ok

    def read_all(self) -> List[QuestionRecord]:
        start_time = time.time()
        if not self.path.exists():
            self.logger.warning("Corpus file '%s' does not exist; returning empty corpus", self.path)
            return []
        try:
            text = self.path.read_text(encoding="utf-8-sig")
        except OSError as e:
            self.logger.exception("Failed to read corpus file '%s': %s", self.path, e)
            raise StoreUnavailable(f"cannot read corpus file {self.path}: {e}") from e
        except UnicodeDecodeError as e:
            self.logger.error("Corpus file '%s' is not valid UTF-8: %s", self.path, e)
            raise StoreUnavailable(f"corpus file {self.path} is not valid UTF-8: {e}") from e

        try:
            records = records_from_csv(text)
        except UNREADABLE_CORPUS_ERRORS as e:
            self.logger.error("Corpus file '%s' is not a readable CSV: %s", self.path, e)
            raise StoreUnavailable(f"corpus file {self.path} is not a readable CSV: {e}") from e

        elapsed = (time.time() - start_time) * 1000.0
        self.logger.info("Loaded %d records from '%s' (%.1f ms)", len(records), self.path, elapsed)
        return records

    def write_all(self, records: Sequence[QuestionRecord]) -> None:
        start_time = time.time()
        data = records_to_csv(records)
        tmp_name = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=str(self.path.parent), prefix=f".{self.path.name}.", suffix=".tmp"
            )
            with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
                f.write(data)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, self.path)
            tmp_name = None
        except OSError as e:
            self.logger.exception("Failed to write corpus file '%s': %s", self.path, e)
            raise StoreUnavailable(f"cannot write corpus file {self.path}: {e}") from e
        finally:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.remove(tmp_name)

        elapsed = (time.time() - start_time) * 1000.0
        self.logger.info("Wrote %d records to '%s' (%.1f ms)", len(records), self.path, elapsed)
