# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-01-27
# Updated: 2026-10-19
# Description: BlobIQCorpusStore
# -----------------------------------------------------------------------------
import logging
import time
from typing import List, Sequence

from azure.core.credentials import AzureNamedKeyCredential
from azure.core.exceptions import AzureError, ResourceExistsError, ResourceNotFoundError
from azure.storage.blob import BlobServiceClient, ContentSettings

from config.Config import Config
from corpus.IQCorpusStore import IQCorpusStore
from corpus.QuestionRecord import QuestionRecord
from corpus.corpus_csv import UNREADABLE_CORPUS_ERRORS, records_from_csv, records_to_csv
from utility.errors import StoreUnavailable
from utility.logging_utils import get_class_logger


class BlobIQCorpusStore(IQCorpusStore):
    """
    Corpus kept as a single CSV blob in Azure Blob Storage.

    Provides:
      - read_all(): downloads and parses the CSV
      - write_all(): replaces the CSV blob with a full snapshot

    A single upload_blob(overwrite=True) is all-or-nothing for readers.
    """

    def __init__(
        self,
        cfg: Config,
        *,
        container: str,
        blob_name: str,
        blob_service: BlobServiceClient | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self.cfg = cfg
        self.container = container
        self.blob_name = blob_name
        self.logger = logger or get_class_logger(self.__class__)

        start_time = time.time()
        if blob_service is not None:
            self.blob_service = blob_service
            return

        try:
            self.blob_service = BlobServiceClient(
                account_url=f"https://{cfg.storage_account}.blob.core.windows.net",
                credential=AzureNamedKeyCredential(cfg.storage_account, cfg.storage_key),
            )
            elapsed = (time.time() - start_time) * 1000.0
            self.logger.info(
                "Initialised BlobServiceClient for account '%s' (%.1f ms)",
                cfg.storage_account,
                elapsed,
            )
        except Exception as e:
            elapsed = (time.time() - start_time) * 1000.0
            self.logger.exception(
                "Failed to initialise BlobServiceClient after %.1f ms: %s", elapsed, e
            )
            raise StoreUnavailable(f"cannot initialise blob client: {e}") from e

    def test_connection(self) -> bool:
        try:
            self.blob_service.get_container_client(self.container).get_container_properties()
            return True
        except AzureError as e:
            self.logger.error("Blob corpus connection failed: %s", e)
            return False

    def read_all(self) -> List[QuestionRecord]:
        start_time = time.time()
        self.logger.info(
            "Loading corpus '%s' from container '%s'...", self.blob_name, self.container
        )
        try:
            blob_client = self.blob_service.get_blob_client(self.container, self.blob_name)
            data = blob_client.download_blob().readall()
        except ResourceNotFoundError:
            self.logger.warning(
                "Corpus '%s' not found in container '%s'; returning empty corpus",
                self.blob_name,
                self.container,
            )
            return []
        except AzureError as e:
            elapsed = (time.time() - start_time) * 1000.0
            self.logger.exception(
                "Azure error while downloading '%s' after %.1f ms: %s",
                self.blob_name,
                elapsed,
                e,
            )
            raise StoreUnavailable(f"cannot read corpus blob {self.blob_name}: {e}") from e

        try:
            records = records_from_csv(data.decode("utf-8-sig"))
        except UNREADABLE_CORPUS_ERRORS as e:
            self.logger.error("Corpus blob '%s' is not a readable UTF-8 CSV: %s", self.blob_name, e)
            raise StoreUnavailable(f"corpus blob {self.blob_name} is not a readable UTF-8 CSV: {e}") from e

        elapsed = (time.time() - start_time) * 1000.0
        self.logger.info(
            "Loaded corpus '%s' (%d bytes, %d records) (%.1f ms)",
            self.blob_name,
            len(data),
            len(records),
            elapsed,
        )
        return records

    def write_all(self, records: Sequence[QuestionRecord]) -> None:
        start_time = time.time()
        data = records_to_csv(records).encode("utf-8")
        self.logger.info(
            "Writing corpus '%s' to container '%s' (%d records, %d bytes)...",
            self.blob_name,
            self.container,
            len(records),
            len(data),
        )
        try:
            container_client = self.blob_service.get_container_client(self.container)
            try:
                container_client.create_container()
                self.logger.info("Created container '%s' for corpus.", self.container)
            except ResourceExistsError:
                self.logger.debug("Container '%s' already exists.", self.container)

            container_client.get_blob_client(self.blob_name).upload_blob(
                data,
                overwrite=True,
                content_settings=ContentSettings(
                    content_type="text/csv",
                    cache_control="max-age=3600",
                ),
            )
        except AzureError as e:
            elapsed = (time.time() - start_time) * 1000.0
            self.logger.exception(
                "Azure error while uploading '%s/%s' after %.1f ms: %s",
                self.container,
                self.blob_name,
                elapsed,
                e,
            )
            raise StoreUnavailable(f"cannot write corpus blob {self.blob_name}: {e}") from e

        elapsed = (time.time() - start_time) * 1000.0
        self.logger.info(
            "Uploaded corpus '%s/%s' in %.1f ms", self.container, self.blob_name, elapsed
        )
