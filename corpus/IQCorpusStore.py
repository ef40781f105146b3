# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-01-26
# Description: IQCorpusStore
# -----------------------------------------------------------------------------

from typing import List, Protocol, Sequence, runtime_checkable

from corpus.QuestionRecord import QuestionRecord


@runtime_checkable
class IQCorpusStore(Protocol):
    """
    Durable, key-ordered collection of QuestionRecords.

    read_all() raises StoreUnavailable when the medium cannot be reached.
    write_all() replaces the whole snapshot: either the new snapshot is visible
    or the previous one remains.
    """

    def test_connection(self) -> bool:
        ...

    def read_all(self) -> List[QuestionRecord]:
        ...

    def write_all(self, records: Sequence[QuestionRecord]) -> None:
        ...
