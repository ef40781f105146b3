# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-02
# Description: errors.py
# -----------------------------------------------------------------------------
from typing import Optional


class IQMatchError(Exception):
    """Base class for all question-matching errors."""


class ProviderError(IQMatchError):
    """
    An external text or embedding service failed.

    Recovered per record during batch processing, surfaced during a live query.
    """

    def __init__(self, provider: str, message: str) -> None:
        super().__init__(f"{provider}: {message}")
        self.provider = provider


class StoreUnavailable(IQMatchError):
    """Corpus storage could not be read or written. Fatal to the current operation."""


class MalformedRecord(IQMatchError):
    """One corpus row could not be parsed. The row is kept unchanged and never processed."""

    def __init__(self, message: str, row_index: Optional[int] = None) -> None:
        super().__init__(message if row_index is None else f"row {row_index}: {message}")
        self.row_index = row_index


class MalformedEmbedding(MalformedRecord):
    """A stored embedding could not be parsed. Treated as absent."""


class ProcessingInProgress(IQMatchError):
    """A batch run is already active on this processor."""
